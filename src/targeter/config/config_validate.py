# src/targeter/config/config_validate.py


from typing import Any

from targeter.constants import DEFAULT_STRICT_CONFIG, TARGET_TYPES
from targeter.logs import getAppLogger
from targeter.utils import (
    ValidationSummary,
    cast_hint,
    collect_msg,
    plural,
    validate_typed_dict,
)

from .config_types import RawProjectSettings, RawTargetOverride


# --- constants ------------------------------------------------------

# Keys discovery adds to a target that aren't user settings
DISCOVERED_KEYS = {"name"}

# Field-specific type examples for better error messages
# Wildcard patterns (with *) are supported for matching multiple fields
FIELD_EXAMPLES: dict[str, str] = {
    "root.paths.source": '"src"',
    "root.paths.build": '"dist"',
    "root.targets.*.type": '"browser"',
    "root.targets.*.engine": '"webpack"',
    "root.targets.*.copy": '["favicon.ico", {"from": "a.txt", "to": "b.txt"}]',
    "root.targets.*.dot_env.files": '[".env.[build-type]", ".env"]',
    "root.copy.items": '["package.json", "node_modules/some-module"]',
    "root.strict_config": "true",
}


# ---------------------------------------------------------------------------
# main validator
# ---------------------------------------------------------------------------


def _set_valid_and_return(summary: ValidationSummary) -> ValidationSummary:
    summary.valid = not summary.errors and not summary.strict_warnings
    return summary


def _validate_targets(
    targets_raw: Any,
    *,
    strict: bool,
    summary: ValidationSummary,  # modified
) -> None:
    logger = getAppLogger()
    if not isinstance(targets_raw, dict):
        collect_msg(
            "`targets` must be an object with the targets names as keys.",
            strict=True,
            summary=summary,
            is_error=True,
        )
        return

    targets = cast_hint(dict[str, Any], targets_raw)
    logger.trace(f"[validate_targets] Checking {len(targets)} target(s)")
    for name, target in targets.items():
        ok = validate_typed_dict(
            f"in target '{name}'",
            target,
            RawTargetOverride,
            strict=strict,
            summary=summary,
            ignore_keys=DISCOVERED_KEYS,
            field_path="root.targets.*",
            field_examples=FIELD_EXAMPLES,
        )

        target_type = target.get("type") if isinstance(target, dict) else None
        if isinstance(target_type, str) and target_type.lower() not in TARGET_TYPES:
            collect_msg(
                f"Target '{name}' has an invalid type: {target_type}"
                f" (expected one of {', '.join(TARGET_TYPES)})",
                strict=True,
                summary=summary,
                is_error=True,
            )
        elif not ok and not (summary.errors or summary.strict_warnings):
            collect_msg(
                f"Target '{name}' schema invalid",
                strict=True,
                summary=summary,
                is_error=True,
            )


def validate_settings(
    settings: dict[str, Any],
    *,
    strict: bool | None = None,
) -> ValidationSummary:
    """Validate the project settings against their TypedDict shapes.

    strict=True  →  unknown keys become fatal, but are still listed separately
    strict=False →  unknown keys remain non-fatal warnings

    When ``strict`` is None the ``strict_config`` setting decides.
    """
    logger = getAppLogger()
    logger.trace(f"[validate_settings] Starting validation (strict={strict})")

    summary = ValidationSummary(strict=DEFAULT_STRICT_CONFIG)

    strict_from_settings: Any = settings.get("strict_config")
    if strict is not None:
        summary.strict = strict
    elif isinstance(strict_from_settings, bool):
        summary.strict = strict_from_settings

    ok = validate_typed_dict(
        "in project settings",
        settings,
        RawProjectSettings,
        strict=summary.strict,
        summary=summary,
        ignore_keys={"targets"},
        field_path="root",
        field_examples=FIELD_EXAMPLES,
    )
    if not ok and not (summary.errors or summary.strict_warnings):
        collect_msg(
            "Project settings invalid.",
            strict=True,
            summary=summary,
            is_error=True,
        )

    if "targets" in settings:
        _validate_targets(settings["targets"], strict=summary.strict, summary=summary)

    return _set_valid_and_return(summary)


def log_validation_summary(summary: ValidationSummary, source: str) -> None:
    """Pretty-print a validation summary through the app logger."""
    logger = getAppLogger()
    mode = "strict mode" if summary.strict else "lenient mode"

    counts: list[str] = []
    if summary.errors:
        counts.append(f"{len(summary.errors)} error{plural(summary.errors)}")
    if summary.strict_warnings:
        counts.append(
            f"{len(summary.strict_warnings)} strict warning"
            f"{plural(summary.strict_warnings)}",
        )
    if summary.warnings:
        counts.append(
            f"{len(summary.warnings)} normal warning{plural(summary.warnings)}",
        )
    counts_msg = f"\nFound {', '.join(counts)}." if counts else ""

    if not summary.valid:
        logger.error("Failed to validate %s (%s).%s", source, mode, counts_msg)
    elif counts:
        logger.warning("Validated %s (%s) with warnings.%s", source, mode, counts_msg)
    else:
        logger.debug("Validated %s (%s) successfully.", source, mode)

    if summary.errors:
        msg_summary = "\n  • ".join(summary.errors)
        logger.error("\nErrors:\n  • %s", msg_summary)
    if summary.strict_warnings:
        msg_summary = "\n  • ".join(summary.strict_warnings)
        logger.error("\nStrict warnings (treated as errors):\n  • %s", msg_summary)
    if summary.warnings:
        msg_summary = "\n  • ".join(summary.warnings)
        logger.warning("\nWarnings (non-fatal):\n  • %s", msg_summary)
