# src/targeter/__init__.py

"""Targeter: resolve the build targets of a multi-target project.

Full developer API
==================
This package re-exports all non-private symbols from its submodules,
making it suitable for programmatic use, custom integrations, or plugins.
Anything prefixed with "_" is considered internal and may change.

Highlights:
    - ProjectConfiguration → Project settings with defaults and discovery
    - TargetDiscovery      → Infer targets from a source directory
    - TargetResolver       → Resolve, look up and prepare targets
"""

from .config import (
    ConfigurationLayer,
    ProjectConfiguration,
    ResolvedTarget,
    TargetConfiguration,
    load_config,
    load_package_info,
    validate_settings,
)
from .constants import (
    DEFAULT_BUILD_TYPE,
    DEFAULT_ENV_LOG_LEVEL,
    DEFAULT_LOG_LEVEL,
    EVENT_PROJECT_FILES_TO_COPY,
    EVENT_TARGET_COPY_FILES,
    EVENT_TARGET_ENVIRONMENT_VARIABLES,
    EVENT_TARGET_LOAD,
)
from .dotenv_loader import DotEnvLoader, DotEnvResult
from .hooks import ReducerRegistry
from .logs import getAppLogger
from .meta import PROGRAM_DISPLAY, PROGRAM_ENV, PROGRAM_PACKAGE
from .targets import BrowserConfiguration, TargetDiscovery, TargetResolver


__all__ = [  # noqa: RUF022
    # config
    "ConfigurationLayer",
    "ProjectConfiguration",
    "ResolvedTarget",
    "TargetConfiguration",
    "load_config",
    "load_package_info",
    "validate_settings",
    # constants
    "DEFAULT_BUILD_TYPE",
    "DEFAULT_ENV_LOG_LEVEL",
    "DEFAULT_LOG_LEVEL",
    "EVENT_PROJECT_FILES_TO_COPY",
    "EVENT_TARGET_COPY_FILES",
    "EVENT_TARGET_ENVIRONMENT_VARIABLES",
    "EVENT_TARGET_LOAD",
    # dotenv_loader
    "DotEnvLoader",
    "DotEnvResult",
    # hooks
    "ReducerRegistry",
    # logs
    "getAppLogger",
    # meta
    "PROGRAM_DISPLAY",
    "PROGRAM_ENV",
    "PROGRAM_PACKAGE",
    # targets
    "BrowserConfiguration",
    "TargetDiscovery",
    "TargetResolver",
]
