# src/targeter/config/config_layer.py
"""Layered configuration objects.

A layer merges, in increasing precedence:

1. the resolved output of an optional parent layer,
2. the layer's own code-defined base (`create_config`),
3. an optional overwrite file found under the project's config folder.
"""

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

from targeter.constants import DEFAULT_CONFIG_DIR
from targeter.logs import getAppLogger
from targeter.utils import deep_merge

from .config_loader import find_config_file, load_config


class ConfigurationLayer:
    """Base class for configurations that can be overwritten from a file.

    Args:
        root: project root; overwrite files live under ``<root>/config``.
        overwrite_path: file name (or ordered candidates) of the overwrite file.
        as_factory: rebuild the configuration on every `get_config` call
            instead of caching the first result.
        parent: layer whose configuration is merged underneath this one.

    Subclasses must implement `create_config`.
    """

    def __init__(
        self,
        root: Path,
        overwrite_path: str | Sequence[str],
        *,
        as_factory: bool = False,
        parent: "ConfigurationLayer | None" = None,
        config_dir: str = DEFAULT_CONFIG_DIR,
    ) -> None:
        if type(self) is ConfigurationLayer:
            xmsg = "ConfigurationLayer is abstract, it can't be instantiated directly"
            raise TypeError(xmsg)

        self.root = root
        self.overwrite_path = overwrite_path
        self.as_factory = as_factory
        self.parent = parent
        self.config_dir = config_dir
        self.overwrite_file: Path | None = None

        self._config: dict[str, Any] | None = None
        self._file_config_loaded = False
        self._file_config: Callable[..., Any] = lambda *_args: {}

    def create_config(self, *args: Any) -> dict[str, Any]:
        xmsg = f"{type(self).__name__}.create_config() must be overridden"
        raise NotImplementedError(xmsg)

    def get_config(self, *args: Any) -> dict[str, Any]:
        """Return the merged configuration, building it when needed."""
        if self._config is None or self.as_factory:
            self._config = self._load_config(*args)
        return self._config

    def _load_config(self, *args: Any) -> dict[str, Any]:
        logger = getAppLogger()
        if not self._file_config_loaded:
            self._file_config_loaded = True
            self._load_config_from_file()

        parent_config: dict[str, Any] = {}
        if self.parent is not None:
            parent_config = self.parent.get_config(*args)

        logger.trace(
            f"[{type(self).__name__}] Merging parent={self.parent is not None}"
            f" overwrite={self.overwrite_file}"
        )
        return deep_merge(
            parent_config,
            self.create_config(*args),
            self._file_config(*args),
        )

    def _load_config_from_file(self) -> None:
        logger = getAppLogger()
        filepath = find_config_file(
            self.root, self.overwrite_path, config_dir=self.config_dir
        )
        if filepath is None:
            return

        contents = load_config(filepath)
        self.overwrite_file = filepath
        logger.debug("Loaded configuration overwrite: %s", filepath)
        if contents is None:
            return

        if callable(contents):
            self._file_config = contents
        else:
            self._file_config = lambda *_args: contents
