# src/targeter/utils/__init__.py

from .utils_files import load_jsonc, plural, remove_path_in_error_message
from .utils_merge import (
    deep_merge,
    fill_from_default,
    fill_from_default_deep,
    get_property_with_path,
    replace_placeholders,
)
from .utils_schema import ValidationSummary, collect_msg, validate_typed_dict
from .utils_types import (
    cast_hint,
    is_typeddict,
    literal_to_set,
    safe_isinstance,
    schema_from_typeddict,
)


__all__ = [  # noqa: RUF022
    # utils_files
    "load_jsonc",
    "plural",
    "remove_path_in_error_message",
    # utils_merge
    "deep_merge",
    "fill_from_default",
    "fill_from_default_deep",
    "get_property_with_path",
    "replace_placeholders",
    # utils_schema
    "ValidationSummary",
    "collect_msg",
    "validate_typed_dict",
    # utils_types
    "cast_hint",
    "is_typeddict",
    "literal_to_set",
    "safe_isinstance",
    "schema_from_typeddict",
]
