from __future__ import annotations

"""Adapter turning raw guide markup into the generic markup tree.

The transformation engine consumes :class:`~ganymede_toolkit.core.models.Element`
and :class:`~ganymede_toolkit.core.models.Text` nodes only. lxml stores text
as ``.text`` / ``.tail`` strings on elements; this adapter turns them into
explicit text nodes in document order so that sibling chains see them.
"""

import logging
from typing import Iterable, Union

from lxml import etree as ET  # type: ignore
from lxml import html as LH  # type: ignore

from ganymede_toolkit.core.exceptions import MarkupParseError
from ganymede_toolkit.core.models import Element, Text

logger = logging.getLogger(__name__)

__all__ = ["ROOT_TAG", "parse_markup", "from_lxml"]

ROOT_TAG = "#root"


def parse_markup(markup: str) -> Element:
    """Parse *markup* into a synthetic ``#root`` element.

    Raises
    ------
    MarkupParseError
        If lxml rejects the input.
    """
    root = Element(ROOT_TAG)
    if not markup or not markup.strip():
        return root

    try:
        fragments = LH.fragments_fromstring(markup)
    except (ET.ParserError, ValueError) as exc:
        raise MarkupParseError(f"Could not parse guide markup: {exc}", cause=exc) from exc

    _append_fragments(root, fragments)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Parser: %d top-level node(s) from %d chars", len(root.children), len(markup))
    return root


def from_lxml(element: ET._Element) -> Element:
    """Convert a single lxml element (and its subtree) to a markup element."""
    node = Element(str(element.tag).lower(), {str(k).lower(): v for k, v in element.attrib.items()})
    if element.text:
        node.append(Text(element.text))
    for child in element:
        if _is_markup_element(child):
            node.append(from_lxml(child))
        if child.tail:
            node.append(Text(child.tail))
    return node


def _append_fragments(root: Element, fragments: Iterable[Union[str, ET._Element]]) -> None:
    for fragment in fragments:
        if isinstance(fragment, str):
            if fragment:
                root.append(Text(fragment))
            continue
        if _is_markup_element(fragment):
            root.append(from_lxml(fragment))
        if fragment.tail:
            root.append(Text(fragment.tail))


def _is_markup_element(element: ET._Element) -> bool:
    # Comments and processing instructions carry a callable tag
    return isinstance(element.tag, str)
