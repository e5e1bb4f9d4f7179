# src/targeter/config/config_loader.py


import json
import sys
import traceback
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any, cast

from targeter.constants import DEFAULT_CONFIG_DIR
from targeter.logs import getAppLogger
from targeter.utils import load_jsonc, remove_path_in_error_message

from .config_types import PackageInfo


ConfigValue = dict[str, Any] | Callable[..., Any] | None

SUPPORTED_SUFFIXES = (".py", ".jsonc", ".json")


def find_config_file(
    root: Path,
    candidates: str | Sequence[str],
    *,
    config_dir: str = DEFAULT_CONFIG_DIR,
) -> Path | None:
    """Locate an overwrite file for a configuration layer.

    Each candidate is looked up under ``<root>/<config_dir>/``, unless it
    already starts with ``<config_dir>/``, in which case it is relative to the
    root. Candidates are tried in order and the first existing file wins.

    Returns None when no candidate exists; absence is expected.
    """
    logger = getAppLogger()
    names = [candidates] if isinstance(candidates, str) else list(candidates)

    for name in names:
        relative = Path(name)
        if relative.parts and relative.parts[0] == config_dir:
            candidate = root / relative
        else:
            candidate = root / config_dir / relative
        logger.trace(f"[find_config_file] Checking {candidate}")
        if candidate.is_file():
            return candidate

    logger.trace(f"[find_config_file] No file found for {names}")
    return None


def load_config(config_path: Path) -> ConfigValue:
    """Load a configuration value from a file.

    Supports:
      - Python configs: .py files defining `config`, either a dict or a
        callable that builds one
      - JSON/JSONC configs: .json, .jsonc files holding an object

    Returns:
        The raw value defined in the file (dict, callable, or None for
        intentionally empty configs).

    Raises:
        RuntimeError: the Python config raised while executing.
        ValueError: the file doesn't define a usable value.
        TypeError: the value has an unsupported type.

    """
    logger = getAppLogger()
    logger.trace(f"[load_config] Loading from {config_path} ({config_path.suffix})")

    if config_path.suffix == ".py":
        return _load_python_config(config_path)

    if config_path.suffix not in SUPPORTED_SUFFIXES:
        xmsg = (
            f"Unsupported configuration file type: {config_path.name}"
            f" (expected one of {', '.join(SUPPORTED_SUFFIXES)})"
        )
        raise ValueError(xmsg)

    try:
        data = load_jsonc(config_path)
    except ValueError as e:
        clean_msg = remove_path_in_error_message(str(e), config_path)
        xmsg = (
            f"Error while loading configuration file '{config_path.name}': {clean_msg}"
        )
        raise ValueError(xmsg) from e

    if data is not None and not isinstance(data, dict):
        xmsg = f"{config_path.name} must contain an object, not {type(data).__name__}"
        raise TypeError(xmsg)
    return data


def _load_python_config(config_path: Path) -> ConfigValue:
    logger = getAppLogger()
    config_globals: dict[str, Any] = {}

    # Allow local imports in Python configs (e.g. from ./helpers import foo)
    parent_dir = str(config_path.parent)
    added_to_sys_path = parent_dir not in sys.path
    if added_to_sys_path:
        sys.path.insert(0, parent_dir)

    try:
        source = config_path.read_text(encoding="utf-8")
        exec(compile(source, str(config_path), "exec"), config_globals)  # noqa: S102
        logger.trace(f"[EXEC] globals after exec: {list(config_globals.keys())}")
    except Exception as e:
        tb = traceback.format_exc()
        xmsg = (
            f"Error while executing Python config: {config_path.name}\n"
            f"{type(e).__name__}: {e}\n{tb}"
        )
        raise RuntimeError(xmsg) from e
    finally:
        if added_to_sys_path and sys.path[0] == parent_dir:
            sys.path.pop(0)

    if "config" not in config_globals:
        xmsg = f"{config_path.name} did not define `config`"
        raise ValueError(xmsg)

    result = config_globals["config"]
    if not (result is None or isinstance(result, dict) or callable(result)):
        xmsg = (
            f"config in {config_path.name} must be a dict, a callable, or None"
            f", not {type(result).__name__}"
        )
        raise TypeError(xmsg)
    return cast("ConfigValue", result)


def load_package_info(root: Path) -> PackageInfo:
    """Read the host project's package metadata (``package.json``).

    A missing file yields an empty mapping; the project simply has no name.
    """
    logger = getAppLogger()
    package_path = root / "package.json"
    if not package_path.is_file():
        logger.debug("No package.json found in %s", root)
        return {}

    try:
        data = json.loads(package_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        xmsg = f"Invalid package.json in {root}: {e.msg} (line {e.lineno})"
        raise ValueError(xmsg) from e

    if not isinstance(data, dict):
        xmsg = f"package.json must contain an object, not {type(data).__name__}"
        raise TypeError(xmsg)

    info: PackageInfo = {}
    for key in ("name", "version"):
        value = data.get(key)
        if isinstance(value, str):
            info[key] = value  # type: ignore[literal-required]
    return info
