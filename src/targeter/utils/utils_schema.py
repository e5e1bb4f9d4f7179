# src/targeter/utils/utils_schema.py


from dataclasses import dataclass, field
from difflib import get_close_matches
from fnmatch import fnmatchcase
from typing import Any, get_args, get_origin

from typing_extensions import NotRequired

from .utils_files import plural
from .utils_types import cast_hint, is_typeddict, safe_isinstance, schema_from_typeddict


# --- constants ----------------------------------------------------------

DEFAULT_HINT_CUTOFF: float = 0.75


# --- dataclasses ------------------------------------------------------


@dataclass
class ValidationSummary:
    valid: bool = True
    errors: list[str] = field(default_factory=list)
    strict_warnings: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    strict: bool = False  # strictness somewhere in our config?


# --- helpers --------------------------------------------------------


def collect_msg(
    msg: str,
    *,
    strict: bool,
    summary: ValidationSummary,  # modified in function, not returned
    is_error: bool = False,
) -> None:
    """Route a message to the appropriate bucket.
    Errors are always fatal.
    Warnings may escalate to strict_warnings in strict mode.
    """
    if is_error:
        summary.errors.append(msg)
    elif strict:
        summary.strict_warnings.append(msg)
    else:
        summary.warnings.append(msg)


def _get_example_for_field(
    field_path: str,
    field_examples: dict[str, str] | None = None,
) -> str | None:
    if field_examples is None:
        return None

    if field_path in field_examples:
        return field_examples[field_path]

    for pattern, example in field_examples.items():
        if "*" in pattern and fnmatchcase(field_path, pattern):
            return example

    return None


def _infer_type_label(expected_type: Any) -> str:
    """Return a readable label for logging (e.g. 'list[str]', 'TargetTemplate')."""
    origin = get_origin(expected_type)
    args = get_args(expected_type)

    if origin is NotRequired and args:
        return _infer_type_label(args[0])
    if origin is list and args:
        return f"list[{getattr(args[0], '__name__', repr(args[0]))}]"
    if isinstance(expected_type, type):
        return expected_type.__name__
    return str(expected_type)


def _validate_scalar_value(
    context: str,
    key: str,
    val: Any,
    expected_type: Any,
    *,
    summary: ValidationSummary,  # modified in function, not returned
    field_path: str,
    field_examples: dict[str, str] | None = None,
) -> bool:
    if safe_isinstance(val, expected_type):
        return True

    exp_label = _infer_type_label(expected_type)
    example = _get_example_for_field(field_path, field_examples)
    exmsg = f" (e.g. {example})" if example else ""
    msg = f"{context}: key `{key}` expected {exp_label}{exmsg}, got {type(val).__name__}"
    collect_msg(msg, strict=True, summary=summary, is_error=True)
    return False


def _dict_unknown_keys(
    context: str,
    val: dict[str, Any],
    schema: dict[str, Any],
    *,
    strict: bool,
    summary: ValidationSummary,  # modified in function, not returned
) -> bool:
    unknown: list[str] = [k for k in val if k not in schema]
    if not unknown:
        return True

    joined = ", ".join(f"`{u}`" for u in unknown)
    msg = f"Unknown key{plural(unknown)} {joined} {context}."

    hints: list[str] = []
    for k in unknown:
        close = get_close_matches(k, schema.keys(), n=1, cutoff=DEFAULT_HINT_CUTOFF)
        if close:
            hints.append(f"'{k}' → '{close[0]}'")
    if hints:
        msg += "\nHint: did you mean " + ", ".join(hints) + "?"

    collect_msg(msg.strip(), strict=strict, summary=summary)
    return not strict


def validate_typed_dict(
    context: str,
    val: Any,
    typedict_cls: type[Any],
    *,
    strict: bool,
    summary: ValidationSummary,  # modified in function, not returned
    ignore_keys: set[str] | None = None,
    field_path: str = "root",
    field_examples: dict[str, str] | None = None,
) -> bool:
    """Validate a dict against a TypedDict schema recursively.

    - Return False if val is not a dict
    - Nested TypedDict fields are validated recursively
    - Unknown keys are warnings, escalated to strict warnings under strict=True
    """
    if ignore_keys is None:
        ignore_keys = set()

    if not isinstance(val, dict):
        collect_msg(
            f"{context}: expected an object with named keys for"
            f" {typedict_cls.__name__}, got {type(val).__name__}",
            strict=strict,
            summary=summary,
            is_error=True,
        )
        return False

    val_dict = cast_hint(dict[str, Any], val)
    schema = schema_from_typeddict(typedict_cls)
    valid = True

    for key, expected_type in schema.items():
        if key not in val_dict or key in ignore_keys:
            continue

        inner_val = val_dict[key]
        current_path = f"{field_path}.{key}"
        origin = get_origin(expected_type)
        args = get_args(expected_type)
        if origin is NotRequired and args:
            expected_type = args[0]

        if is_typeddict(expected_type):
            valid &= validate_typed_dict(
                f"{context}.{key}",
                inner_val,
                expected_type,
                strict=strict,
                summary=summary,
                field_path=current_path,
                field_examples=field_examples,
            )
        else:
            valid &= _validate_scalar_value(
                context,
                key,
                inner_val,
                expected_type,
                summary=summary,
                field_path=current_path,
                field_examples=field_examples,
            )

    unknown_ok = _dict_unknown_keys(
        context,
        {k: v for k, v in val_dict.items() if k not in ignore_keys},
        schema,
        strict=strict,
        summary=summary,
    )
    return valid and unknown_ok
