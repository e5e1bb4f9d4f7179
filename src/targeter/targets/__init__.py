# src/targeter/targets/__init__.py

"""Target discovery and resolution."""

from .browser_config import BrowserConfiguration
from .discovery import ExtractedStatements, TargetDiscovery, extract_statements
from .resolver import TargetResolver


__all__ = [  # noqa: RUF022
    # browser_config
    "BrowserConfiguration",
    # discovery
    "ExtractedStatements",
    "TargetDiscovery",
    "extract_statements",
    # resolver
    "TargetResolver",
]
