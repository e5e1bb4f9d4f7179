# src/targeter/config/project_config.py
"""Project settings with all their defaults.

The defaults are always overwritten and extended by the project's own
configuration file, which is where targets get declared.
"""

from collections.abc import Sequence
from pathlib import Path
from typing import Any

from targeter.constants import (
    DEFAULT_BUILD_DIR,
    DEFAULT_CONFIG_DIR,
    DEFAULT_SOURCE_DIR,
    KNOWN_BUILD_ENGINES,
)
from targeter.logs import getAppLogger
from targeter.meta import PROGRAM_CONFIG
from targeter.targets.discovery import TargetDiscovery
from targeter.utils import cast_hint, deep_merge

from .config_layer import ConfigurationLayer
from .config_loader import load_package_info
from .config_types import RawProjectSettings
from .config_validate import log_validation_summary, validate_settings


def _overwrite_candidates() -> list[str]:
    names: list[str] = []
    for suffix in (".py", ".jsonc", ".json"):
        names += [
            f"{PROGRAM_CONFIG}.config{suffix}",
            f"{DEFAULT_CONFIG_DIR}/{PROGRAM_CONFIG}.config{suffix}",
            f"{DEFAULT_CONFIG_DIR}/project.config{suffix}",
        ]
    return names


PROJECT_CONFIG_CANDIDATES: list[str] = _overwrite_candidates()


def pick_build_engine(installed: Sequence[str]) -> str | None:
    """Return the first known build engine that is installed."""
    return next((e for e in KNOWN_BUILD_ENGINES if e in installed), None)


class ProjectConfiguration(ConfigurationLayer):
    """Project settings: defaults, the project's overwrite file and discovery.

    Args:
        root: project root.
        engine: build engine used by the default templates.
        discovery: finder used when ``others.find_targets`` is enabled;
            defaults to one named after the host package.
    """

    def __init__(
        self,
        root: Path,
        *,
        engine: str | None = None,
        discovery: TargetDiscovery | None = None,
    ) -> None:
        super().__init__(root, PROJECT_CONFIG_CANDIDATES)
        self.engine = engine
        if discovery is None:
            project_name = load_package_info(root).get("name") or root.name
            discovery = TargetDiscovery(project_name, root)
        self.discovery = discovery

    def create_config(self, *args: Any) -> dict[str, Any]:  # noqa: ARG002
        engine = self.engine
        dot_env = {
            "enabled": True,
            "files": [
                ".env.[target-name].[build-type]",
                ".env.[target-name]",
                ".env.[build-type]",
                ".env",
            ],
            "extend": True,
            "overwrite": False,
        }
        return {
            "paths": {
                "source": DEFAULT_SOURCE_DIR,
                "build": DEFAULT_BUILD_DIR,
                "config": DEFAULT_CONFIG_DIR,
                "private_modules": "private",
            },
            "targets_templates": {
                "node": {
                    "type": "node",
                    "bundle": False,
                    "transpile": False,
                    "engine": engine,
                    "has_folder": True,
                    "create_folder": False,
                    "folder": "",
                    "entry": {
                        "default": "index.js",
                        "development": None,
                        "production": None,
                    },
                    "output": {
                        "default": {
                            "js": "[target-name].js",
                            "fonts": "statics/fonts/[name]/[name].[hash].[ext]",
                            "css": "statics/styles/[target-name].[hash].css",
                            "images": "statics/images/[name].[hash].[ext]",
                        },
                        "development": {
                            "fonts": "statics/fonts/[name]/[name].[ext]",
                            "css": "statics/styles/[target-name].css",
                            "images": "statics/images/[name].[ext]",
                        },
                        "production": None,
                    },
                    "source_map": {"development": False, "production": True},
                    "watch": {"development": False, "production": False},
                    "dot_env": dict(dot_env),
                    "run_on_development": False,
                    "flow": False,
                    "type_script": False,
                    "library": False,
                    "clean_before_build": True,
                    "copy": [],
                },
                "browser": {
                    "type": "browser",
                    "engine": engine,
                    "has_folder": True,
                    "create_folder": True,
                    "folder": "",
                    "entry": {
                        "default": "index.js",
                        "development": None,
                        "production": None,
                    },
                    "output": {
                        "default": {
                            "js": "statics/js/[target-name].[hash].js",
                            "fonts": "statics/fonts/[name]/[name].[hash].[ext]",
                            "css": "statics/styles/[target-name].[hash].css",
                            "images": "statics/images/[name].[hash].[ext]",
                        },
                        "development": {
                            "js": "statics/js/[target-name].js",
                            "fonts": "statics/fonts/[name]/[name].[ext]",
                            "css": "statics/styles/[target-name].css",
                            "images": "statics/images/[name].[ext]",
                        },
                        "production": None,
                    },
                    "source_map": {"development": False, "production": True},
                    "html": {
                        "default": "index.html",
                        "template": None,
                        "filename": None,
                    },
                    "watch": {"development": False, "production": False},
                    "dot_env": dict(dot_env),
                    "run_on_development": False,
                    "flow": False,
                    "type_script": False,
                    "library": False,
                    "clean_before_build": True,
                    "copy": [],
                    "configuration": {
                        "enabled": False,
                        "default": None,
                        "path": DEFAULT_CONFIG_DIR,
                        "has_folder": True,
                        "define_on": "process.env.CONFIG",
                        "environment_variable": "CONFIG",
                        "load_from_environment": True,
                        "filename_format": (
                            "[target-name].[configuration-name].config.json"
                        ),
                        "default_file": "[target-name].config.json",
                    },
                },
            },
            "targets": {},
            "copy": {
                "enabled": False,
                "items": [],
                "copy_on_build": {
                    "enabled": True,
                    "only_on_production": True,
                    "targets": [],
                },
            },
            "version": {
                "define_on": "process.env.VERSION",
                "environment_variable": "VERSION",
                "revision": {
                    "enabled": False,
                    "copy": True,
                    "filename": "revision",
                },
            },
            "others": {
                "find_targets": {"enabled": True},
                "watch": {"poll": True},
            },
        }

    def _load_config(self, *args: Any) -> dict[str, Any]:
        config = super()._load_config(*args)
        if config["others"]["find_targets"]["enabled"]:
            config["targets"] = self._fold_in_discovered(
                config["paths"]["source"], config.get("targets") or {}
            )
        return config

    def _fold_in_discovered(
        self,
        source: str,
        declared: dict[str, Any],
    ) -> dict[str, Any]:
        logger = getAppLogger()
        found = {target["name"]: dict(target) for target in self.discovery.find(source)}
        logger.trace(
            f"[ProjectConfiguration] declared={list(declared)} found={list(found)}"
        )

        # a single declared target renames the single discovered one
        if len(declared) == 1 and len(found) == 1:
            (declared_name,) = declared
            (found_name,) = found
            if declared_name != found_name:
                logger.debug(
                    "Renaming discovered target '%s' to '%s'", found_name, declared_name
                )
                target = found.pop(found_name)
                target["name"] = declared_name
                found[declared_name] = target

        return deep_merge(found, declared)

    def get_settings(self, *, strict: bool | None = None) -> RawProjectSettings:
        """Return the validated project settings.

        Raises:
            ValueError: the settings don't pass validation.
        """
        config = self.get_config()
        source = (
            self.overwrite_file.name
            if self.overwrite_file is not None
            else "default project settings"
        )
        summary = validate_settings(config, strict=strict)
        log_validation_summary(summary, source)
        if not summary.valid:
            xmsg = f"Project settings from {source} contain validation errors."
            exception = ValueError(xmsg)
            exception.data = summary  # type: ignore[attr-defined]
            raise exception
        return cast_hint(RawProjectSettings, config)


class TargetConfiguration(ConfigurationLayer):
    """Extend another configuration with a file, rebuilt on every call.

    Example:
        TargetConfiguration(root, "webpack.browser.config.py", parent=base)
    """

    def __init__(
        self,
        root: Path,
        overwrite_path: str | Sequence[str],
        parent: ConfigurationLayer,
    ) -> None:
        super().__init__(root, overwrite_path, as_factory=True, parent=parent)

    def create_config(self, *args: Any) -> dict[str, Any]:  # noqa: ARG002
        return {}
