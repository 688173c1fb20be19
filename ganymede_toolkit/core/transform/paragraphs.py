from __future__ import annotations

"""Empty-paragraph run collapsing.

Editors emit one ``<p></p>`` per blank line. A run of N consecutive empty
paragraphs renders a single line break: every paragraph of the run is
dropped except the last one, whose forward count is 1.
"""

from typing import Optional

from ganymede_toolkit.core.models import Element, MarkupNode

__all__ = ["is_empty_paragraph", "count_empty_run"]


def is_empty_paragraph(node: Optional[MarkupNode]) -> bool:
    return isinstance(node, Element) and node.tag == "p" and not node.children


def count_empty_run(node: Optional[MarkupNode]) -> int:
    """Count consecutive empty paragraphs starting at *node* (inclusive).

    Any sibling that is not an empty ``<p>``, text nodes included, ends the run.
    """
    count = 0
    while is_empty_paragraph(node):
        count += 1
        node = node.next_sibling  # type: ignore[union-attr]
    return count
