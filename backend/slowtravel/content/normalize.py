"""Parsing helpers applied to raw spreadsheet cells.

Cells arrive as strings (or occasionally numbers); these turn them into the
booleans, integers, lists and URLs the rest of the code works with.
"""

import re
from typing import Any, List

PUBLISHED_VALUES = {"true", "yes", "1"}
DEFAULT_ORDER = 999
THUMBNAIL_URL = "https://drive.google.com/thumbnail?id={file_id}&sz=w1600"
LEADING_FLOAT = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
LEADING_INT = re.compile(r"\s*([+-]?\d+)")

DRIVE_PATTERNS = [
    re.compile(r"/file/d/([a-zA-Z0-9_-]+)"),
    re.compile(r"[?&]id=([a-zA-Z0-9_-]+)"),
    re.compile(r"uc\?.*id=([a-zA-Z0-9_-]+)"),
]


def is_published(value: Any) -> bool:
    """True for "true", "yes" or "1" in any case, ignoring surrounding whitespace."""
    if isinstance(value, bool):
        return value
    return str(value if value is not None else "").strip().lower() in PUBLISHED_VALUES


def parse_order(value: Any, default: int = DEFAULT_ORDER) -> int:
    """Parse a sort order cell, falling back to ``default``."""
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        pass
    try:
        number = float(str(value).strip())
    except (TypeError, ValueError):
        return default
    if number != number or number in (float("inf"), float("-inf")):
        return default
    return int(number)


def parse_number(value: Any, default: float = 0.0) -> float:
    """Read the leading number of a cell, so "120 EUR" gives 120."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return default if value != value else float(value)
    match = LEADING_FLOAT.match(str(value if value is not None else ""))
    return float(match.group(1)) if match else default


def parse_int(value: Any, default: int = 0) -> int:
    """Read the leading integer of a cell, so "8h" gives 8."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, float):
        return default if value != value or value in (float("inf"), float("-inf")) else int(value)
    match = LEADING_INT.match(str(value if value is not None else ""))
    return int(match.group(1)) if match else default


def normalize_text(value: Any) -> str:
    """Turn literal ``<br>`` sequences into line breaks."""
    if value is None:
        return ""
    return str(value).replace("<br>", "\n")


def split_list(value: Any, separator: str) -> List[str]:
    """Split a delimited cell, dropping blank entries."""
    if not value:
        return []
    return [item.strip() for item in str(value).split(separator) if item.strip()]


def convert_drive_url(url: Any) -> str:
    """Rewrite Google Drive share links to a fixed-width thumbnail URL.

    Recognises ``/file/d/<id>/...``, ``?id=<id>`` and ``uc?...id=<id>``.
    Anything else is returned unchanged.
    """
    if not url:
        return ""
    url = str(url)
    for pattern in DRIVE_PATTERNS:
        match = pattern.search(url)
        if match:
            return THUMBNAIL_URL.format(file_id=match.group(1))
    return url


def sort_by_order(items: list) -> list:
    """Stable ascending sort on each item's ``order`` attribute."""
    return sorted(items, key=lambda item: item.order)
