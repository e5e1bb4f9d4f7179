# tests/utils/__init__.py

from .config_validate import make_summary
from .constants import DEFAULT_TEST_LOG_LEVEL, FIXED_HASH, FIXED_NOW, PROJ_ROOT
from .project import make_resolver, make_settings, write_files


__all__ = [  # noqa: RUF022
    # config_validate
    "make_summary",
    # constants
    "DEFAULT_TEST_LOG_LEVEL",
    "FIXED_HASH",
    "FIXED_NOW",
    "PROJ_ROOT",
    # project
    "make_resolver",
    "make_settings",
    "write_files",
]
