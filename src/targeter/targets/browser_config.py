# src/targeter/targets/browser_config.py

import os
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from targeter.logs import getAppLogger
from targeter.utils import deep_merge, replace_placeholders


ConfigLoader = Callable[[Path], dict[str, Any]]


class BrowserConfiguration:
    """Environment-aware configuration for a browser target.

    Starts from a default configuration and, on request, merges a named
    configuration file over it. The file name comes from ``filename_format``
    with ``[name]`` replaced by the configuration name, for example
    ``app.[name].config.json`` → ``app.staging.config.json``.
    """

    def __init__(  # noqa: PLR0913
        self,
        name: str,
        default_config: Mapping[str, Any],
        *,
        config_path: Path,
        filename_format: str,
        environment_variable: str,
        loader: ConfigLoader,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self.name = name
        self.default_config = dict(default_config)
        self.config_path = config_path
        self.filename_format = filename_format
        self.environment_variable = environment_variable
        self.loader = loader
        self.environ = os.environ if environ is None else environ
        self.active: str | None = None
        self._config: dict[str, Any] = deep_merge(self.default_config)

    def get_config(self) -> dict[str, Any]:
        return self._config

    def load(self, configuration_name: str) -> dict[str, Any]:
        """Merge the named configuration file over the default one."""
        logger = getAppLogger()
        filename = replace_placeholders(
            self.filename_format, {"name": configuration_name}
        )
        filepath = self.config_path / filename
        logger.debug(
            "Loading '%s' configuration for %s from %s",
            configuration_name,
            self.name,
            filepath,
        )
        self._config = deep_merge(self.default_config, self.loader(filepath))
        self.active = configuration_name
        return self._config

    def load_from_environment(self) -> bool:
        """Load the configuration named by the environment variable, if set."""
        configuration_name = self.environ.get(self.environment_variable)
        if not configuration_name:
            return False
        self.load(configuration_name)
        return True
