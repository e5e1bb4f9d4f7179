# src/targeter/constants.py
"""Central constants used across the project."""

# --- env keys ---
DEFAULT_ENV_LOG_LEVEL: str = "LOG_LEVEL"

# --- program defaults ---
DEFAULT_LOG_LEVEL: str = "info"

# --- config defaults ---
DEFAULT_STRICT_CONFIG: bool = False
DEFAULT_CONFIG_DIR: str = "config"
DEFAULT_SOURCE_DIR: str = "src"
DEFAULT_BUILD_DIR: str = "dist"

# --- targets ---
TARGET_TYPES: tuple[str, ...] = ("node", "browser")
DEFAULT_TARGET_TYPE: str = "node"
DEFAULT_BUILD_TYPE: str = "development"
BUILD_TYPES: tuple[str, ...] = ("development", "production")

# Build engines the default templates will pick from, in priority order
KNOWN_BUILD_ENGINES: tuple[str, ...] = ("webpack", "rollup")

# --- hook events ---
EVENT_TARGET_LOAD: str = "target-load"
EVENT_TARGET_ENVIRONMENT_VARIABLES: str = "target-environment-variables"
EVENT_TARGET_COPY_FILES: str = "target-copy-files"
EVENT_PROJECT_FILES_TO_COPY: str = "project-files-to-copy"
