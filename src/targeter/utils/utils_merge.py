# src/targeter/utils/utils_merge.py
"""Pure helpers for layered settings: deep merging, default filling and
placeholder substitution.

None of these functions mutate their inputs.
"""

import copy
import re
from collections.abc import Mapping
from typing import Any


def _merge_value(base: Any, overlay: Any) -> Any:
    if isinstance(overlay, Mapping):
        start = base if isinstance(base, Mapping) else {}
        return _merge_mapping(start, overlay)
    if isinstance(overlay, list):
        start_list = base if isinstance(base, list) else []
        return _merge_list(start_list, overlay)
    return copy.deepcopy(overlay)


def _merge_mapping(base: Mapping[str, Any], overlay: Mapping[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = {k: copy.deepcopy(v) for k, v in base.items()}
    for key, value in overlay.items():
        result[key] = _merge_value(result.get(key), value)
    return result


def _merge_list(base: list[Any], overlay: list[Any]) -> list[Any]:
    # by index, not concatenation
    result = [copy.deepcopy(v) for v in base]
    for i, value in enumerate(overlay):
        if i < len(result):
            result[i] = _merge_value(result[i], value)
        else:
            result.append(_merge_value(None, value))
    return result


def deep_merge(*layers: Mapping[str, Any] | None) -> dict[str, Any]:
    """Deep-merge mappings left to right; later layers win.

    - nested mappings merge recursively
    - lists merge by index (``[1, 2, 3]`` + ``[9]`` → ``[9, 2, 3]``)
    - any other value (``None`` included) replaces what was there
    - ``None`` layers are skipped
    """
    result: dict[str, Any] = {}
    for layer in layers:
        if layer is None:
            continue
        result = _merge_mapping(result, layer)
    return result


def fill_from_default(settings: Mapping[str, Any]) -> dict[str, Any]:
    """Replace every ``None`` value with the sibling ``default`` value,
    then drop ``default``.

    Example:
        {"default": "index.js", "development": None, "production": "prod.js"}
        → {"development": "index.js", "production": "prod.js"}
    """
    result = dict(settings)
    default = result.pop("default", None)
    if default is not None:
        for name, value in result.items():
            if value is None:
                result[name] = default
    return result


def fill_from_default_deep(settings: Mapping[str, Any]) -> dict[str, Any]:
    """Like `fill_from_default`, for values that are themselves mappings.

    Each ``None`` value becomes a copy of ``default``. Each mapping value is
    deep-merged over ``default``, and any key still falsy after the merge
    takes ``default``'s value when that one is truthy.
    """
    result = dict(settings)
    default = result.pop("default", None)
    if not default:
        return result

    for name, value in result.items():
        if value is None:
            result[name] = copy.deepcopy(dict(default))
            continue
        merged = deep_merge(default, value)
        for prop, prop_value in merged.items():
            if not prop_value and default.get(prop):
                merged[prop] = copy.deepcopy(default[prop])
        result[name] = merged
    return result


def replace_placeholders(
    text: str,
    placeholders: Mapping[str, Any],
    *,
    before: str = r"\[",
    after: str = r"\]",
) -> str:
    """Replace ``[name]`` tokens (case-insensitive) with their values."""
    result = text
    for name, value in placeholders.items():
        pattern = re.compile(f"{before}{re.escape(name)}{after}", re.IGNORECASE)
        result = pattern.sub(lambda _m, v=value: str(v), result)
    return result


def get_property_with_path(
    obj: Mapping[str, Any],
    obj_path: str,
    delimiter: str = "/",
) -> Any:
    """Walk ``obj`` following a ``delimiter``-separated path.

    Raises:
        KeyError: if any segment of the path is missing.
    """
    current: Any = obj
    walked: list[str] = []
    for part in obj_path.split(delimiter):
        walked.append(part)
        if not isinstance(current, Mapping) or part not in current:
            xmsg = f"There's nothing on '{delimiter.join(walked)}'"
            raise KeyError(xmsg)
        current = current[part]
    return current
