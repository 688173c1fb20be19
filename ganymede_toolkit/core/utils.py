from __future__ import annotations

"""Simple reusable helper functions.

These helpers are side-effect-free and contain no I/O; they can be used
across all layers of the toolkit.
"""

import re
from typing import Iterable, List, Optional
from urllib.parse import urlparse

__all__ = [
    "parse_int",
    "clamp",
    "split_classes",
    "is_http_url",
    "url_origin",
    "any_in",
]

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_int(value: Optional[str]) -> Optional[int]:
    """Return the leading base-10 integer of *value*, or ``None``.

    Mirrors the lenient parsing authors rely on in guide markup: leading
    whitespace is skipped and trailing garbage is ignored, so ``"12abc"``
    yields ``12`` while ``"abc"``, ``""`` and ``None`` yield ``None``.

    Examples:
        >>> parse_int("  42")
        42
        >>> parse_int("-3px")
        -3
        >>> parse_int("x1") is None
        True
    """
    if value is None:
        return None
    match = _LEADING_INT.match(str(value))
    if match is None:
        return None
    return int(match.group(1))


def clamp(value: int, lower: int, upper: int) -> int:
    """Clamp *value* into ``[lower, upper]``."""
    return min(max(value, lower), upper)


def split_classes(class_attr: Optional[str]) -> List[str]:
    """Split an HTML ``class`` attribute into its tokens."""
    if not class_attr:
        return []
    return class_attr.split()


def is_http_url(value: Optional[str]) -> bool:
    """Return True when *value* parses as an absolute http(s) URL with a host."""
    if not value or not value.startswith("http"):
        return False
    try:
        parsed = urlparse(value)
        return parsed.scheme in ("http", "https") and bool(parsed.hostname)
    except ValueError:
        # urlparse rejects malformed netlocs (e.g. unbalanced IPv6 brackets)
        return False


def url_origin(value: str) -> Optional[str]:
    """Return ``scheme://host`` for an http(s) URL (port and path excluded)."""
    if not is_http_url(value):
        return None
    parsed = urlparse(value)
    return f"{parsed.scheme}://{parsed.hostname}"


def any_in(needles: Iterable[str], haystack: Iterable[str]) -> bool:
    """Return True if any of *needles* appears in *haystack*."""
    pool = set(haystack)
    return any(n in pool for n in needles)
