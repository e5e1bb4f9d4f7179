# src/targeter/utils/utils_files.py


import json
import re
from pathlib import Path
from typing import Any, cast

from targeter.logs import getAppLogger


def _strip_jsonc_comments(text: str) -> str:
    """Strip // and /* */ comments from JSONC while preserving string contents."""
    result: list[str] = []
    in_string = False
    i = 0
    length = len(text)
    while i < length:
        ch = text[i]

        if in_string:
            result.append(ch)
            if ch == "\\" and i + 1 < length:
                result.append(text[i + 1])
                i += 2
                continue
            if ch == '"':
                in_string = False
            i += 1
            continue

        if ch == '"':
            in_string = True
            result.append(ch)
            i += 1
            continue

        if text.startswith("//", i):
            end = text.find("\n", i)
            i = length if end == -1 else end
            continue

        if text.startswith("/*", i):
            end = text.find("*/", i + 2)
            i = length if end == -1 else end + 2
            continue

        result.append(ch)
        i += 1

    return "".join(result)


def load_jsonc(path: Path) -> dict[str, Any] | list[Any] | None:
    """Load JSONC (JSON with comments and trailing commas)."""
    logger = getAppLogger()
    logger.trace(f"[load_jsonc] Loading from {path}")

    if not path.exists():
        xmsg = f"JSONC file not found: {path}"
        raise FileNotFoundError(xmsg)

    if not path.is_file():
        xmsg = f"Expected a file: {path}"
        raise ValueError(xmsg)

    text = _strip_jsonc_comments(path.read_text(encoding="utf-8"))

    # Remove trailing commas before } or ]
    text = re.sub(r",(?=\s*[}\]])", "", text).strip()

    if not text:
        # Empty or only comments → interpret as "no config"
        return None

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        xmsg = (
            f"Invalid JSONC syntax in {path}:"
            f" {e.msg} (line {e.lineno}, column {e.colno})"
        )
        raise ValueError(xmsg) from e

    if not isinstance(data, (dict, list)):
        xmsg = f"Invalid JSONC root type: {type(data).__name__}"
        raise ValueError(xmsg)  # noqa: TRY004

    return cast("dict[str, Any] | list[Any]", data)


def remove_path_in_error_message(inner_msg: str, path: Path) -> str:
    """Remove redundant file path mentions (and nearby filler)
    from error messages.

    Example:
        "Invalid JSONC syntax in /abs/path/config.jsonc: Expecting value"
        → "Invalid JSONC syntax: Expecting value"
    """
    full_path = str(path)
    filename = path.name

    candidates = [
        f"in {full_path}",
        f"in '{full_path}'",
        f'in "{full_path}"',
        f"in {filename}",
        f"in '{filename}'",
        f'in "{filename}"',
        full_path,
        filename,
    ]

    clean_msg = inner_msg
    for pattern in candidates:
        clean_msg = clean_msg.replace(pattern, "").strip(": ").strip()

    clean_msg = re.sub(r"\s{2,}", " ", clean_msg)
    return re.sub(r"\s*:\s*", ": ", clean_msg)


def plural(obj: Any) -> str:
    """Return 's' if obj represents a plural count.

    Accepts ints, floats, and any object implementing __len__().
    """
    count: int | float
    try:
        count = len(obj)
    except TypeError:
        count = obj if isinstance(obj, (int, float)) else 0
    return "s" if count != 1 else ""
