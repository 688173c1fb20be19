from __future__ import annotations

"""Inline map-coordinate scanner.

Guide authors write positions as ``[x,y]`` inside running text. The scanner
finds every occurrence and splits the text into plain fragments and
coordinate tokens. Text is never dropped: anything the prefix/suffix capture
does not cover (text after the last match) is returned as plain fragments.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Union

__all__ = ["PositionMatch", "POSITION_PATTERN", "scan_positions", "split_positions", "format_copy_text"]

# prefix (lazy), [x, y], then a restricted suffix running up to the next prefix
POSITION_PATTERN = re.compile(
    r"(.*?)\[\s*(-?\d+)\s*,\s*(-?\d+)\s*\]([\w.,:;'\"()?|\s]*)",
    re.DOTALL,
)


@dataclass(frozen=True)
class PositionMatch:
    prefix: str
    x: int
    y: int
    suffix: str


def _to_match(m: re.Match) -> Optional[PositionMatch]:
    try:
        return PositionMatch(m.group(1), int(m.group(2)), int(m.group(3)), m.group(4))
    except ValueError:
        # Digit runs beyond the interpreter's int conversion limit stay plain text
        return None


def scan_positions(text: str) -> List[PositionMatch]:
    """Return every coordinate match in *text* (empty list when none)."""
    matches = (_to_match(m) for m in POSITION_PATTERN.finditer(text))
    return [match for match in matches if match is not None]


def split_positions(text: str) -> Optional[List[Union[str, PositionMatch]]]:
    """Split *text* into ordered plain strings and matches.

    Returns ``None`` when *text* holds no coordinate, so callers can keep the
    text node as ordinary passthrough. Otherwise the concatenation of the
    pieces (with each match rendered as ``prefix[x,y]suffix``) covers the
    whole input. A match whose numbers cannot be converted is left inside the
    surrounding plain text.
    """
    pieces: List[Union[str, PositionMatch]] = []
    cursor = 0
    for m in POSITION_PATTERN.finditer(text):
        match = _to_match(m)
        if match is None:
            continue
        if m.start() > cursor:
            pieces.append(text[cursor:m.start()])
        pieces.append(match)
        cursor = m.end()
    if not pieces:
        return None
    if cursor < len(text):
        pieces.append(text[cursor:])
    return pieces


def format_copy_text(x: int, y: int, auto_travel: bool) -> str:
    """Text copied when a coordinate is activated."""
    if auto_travel:
        return f"/travel {x},{y}"
    return f"[{x},{y}]"
