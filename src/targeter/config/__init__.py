# src/targeter/config/__init__.py

"""Configuration handling for targeter.

This module provides layered configuration, override-file loading and
validation of the project settings.
"""

from .config_layer import ConfigurationLayer
from .config_loader import find_config_file, load_config, load_package_info
from .config_types import (
    BrowserConfigurationSettings,
    BrowserTargetConfiguration,
    CopyItem,
    DiscoveredTargetFragment,
    DotEnvSettings,
    PackageInfo,
    RawProjectSettings,
    RawTargetOverride,
    ResolvedTarget,
    TargetTemplate,
    TargetType,
)
from .config_validate import log_validation_summary, validate_settings
from .project_config import (
    PROJECT_CONFIG_CANDIDATES,
    ProjectConfiguration,
    TargetConfiguration,
    pick_build_engine,
)


__all__ = [  # noqa: RUF022
    # config_layer
    "ConfigurationLayer",
    # config_loader
    "find_config_file",
    "load_config",
    "load_package_info",
    # config_types
    "BrowserConfigurationSettings",
    "BrowserTargetConfiguration",
    "CopyItem",
    "DiscoveredTargetFragment",
    "DotEnvSettings",
    "PackageInfo",
    "RawProjectSettings",
    "RawTargetOverride",
    "ResolvedTarget",
    "TargetTemplate",
    "TargetType",
    # config_validate
    "log_validation_summary",
    "validate_settings",
    # project_config
    "PROJECT_CONFIG_CANDIDATES",
    "ProjectConfiguration",
    "TargetConfiguration",
    "pick_build_engine",
]
