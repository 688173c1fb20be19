from __future__ import annotations

"""Traversal engine: generic markup tree -> interactive document tree.

The walk is depth-first and pre-order. Elements go through the rule table of
:mod:`ganymede_toolkit.core.transform.dispatcher`; text goes through the link
trust check and the position scanner. Anything no rule claims is passed
through with its children transformed.

The pass is synchronous and pure: it reads :class:`TransformContext` and
emits nodes, it never performs I/O nor mutates the context. Every input
node maps to exactly one output node. A rule that fails on a malformed
subtree degrades that subtree to passthrough; the rest of the pass goes on.
"""

import logging
from typing import List, Optional, Sequence

from ganymede_toolkit.core.models import Element, MarkupNode, Text, TransformContext
from ganymede_toolkit.core.nodes import (
    HiddenLinkPlaceholder,
    InteractiveNode,
    PlainPassthrough,
    PositionToken,
)
from ganymede_toolkit.core.transform.checkboxes import CheckboxCounter
from ganymede_toolkit.core.transform.dispatcher import RULES, Rule, dispatch
from ganymede_toolkit.core.transform.links import is_untrusted_http, looks_like_url
from ganymede_toolkit.core.transform.positions import PositionMatch, format_copy_text, split_positions

logger = logging.getLogger(__name__)

__all__ = ["MarkupTransformer", "transform"]


class MarkupTransformer:
    """Visitor holding the state of one transformation pass.

    A new instance (and therefore a new checkbox counter) must be used for
    every document; instances are cheap.
    """

    def __init__(self, ctx: TransformContext, counter: Optional[CheckboxCounter] = None,
                 rules: Sequence[Rule] = RULES) -> None:
        self.ctx = ctx
        self.counter = counter if counter is not None else CheckboxCounter()
        self.rules = rules
        self.fallbacks = 0

    # ------------------------------------------------------------------
    # Visitor API
    # ------------------------------------------------------------------
    def transform(self, node: MarkupNode) -> InteractiveNode:
        if isinstance(node, Text):
            return self._transform_text(node)
        return self._transform_element(node)

    def transform_all(self, nodes: Sequence[MarkupNode]) -> List[InteractiveNode]:
        return [self.transform(child) for child in nodes]

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _transform_element(self, element: Element) -> InteractiveNode:
        checkpoint = self.counter.value
        try:
            result = dispatch(element, self, self.rules)
        except Exception as exc:  # noqa: BLE001 - failures stay local to the subtree
            self.fallbacks += 1
            self.counter.rewind(checkpoint)
            logger.warning("Transform: rule failed on <%s %s>, rendering as passthrough: %s",
                           element.tag, element.attributes, exc)
            result = None

        if result is not None:
            return result
        return PlainPassthrough(
            tag=element.tag,
            attributes=dict(element.attributes),
            children=self.transform_all(element.children),
        )

    def _transform_text(self, node: Text) -> InteractiveNode:
        try:
            return self._scan_text(node.value)
        except Exception as exc:  # noqa: BLE001 - failures stay local to the text node
            self.fallbacks += 1
            logger.warning("Transform: text scan failed on %r, rendering as passthrough: %s",
                           node.value[:80], exc)
            return PlainPassthrough(text=node.value)

    def _scan_text(self, value: str) -> InteractiveNode:
        ctx = self.ctx

        if looks_like_url(value) and is_untrusted_http(value.strip(), ctx.whitelist):
            return HiddenLinkPlaceholder(message=ctx.hidden_link_text)

        pieces = split_positions(value)
        if pieces is None:
            return PlainPassthrough(text=value)

        children: List[InteractiveNode] = []
        for piece in pieces:
            if isinstance(piece, PositionMatch):
                if piece.prefix:
                    children.append(PlainPassthrough(text=piece.prefix))
                children.append(PositionToken(
                    x=piece.x,
                    y=piece.y,
                    copy_text=format_copy_text(piece.x, piece.y, ctx.auto_travel_copy),
                    disabled=ctx.disabled,
                ))
                if piece.suffix:
                    children.append(PlainPassthrough(text=piece.suffix))
            elif piece:
                children.append(PlainPassthrough(text=piece))
        return PlainPassthrough(children=children)


def transform(root: MarkupNode, ctx: TransformContext) -> InteractiveNode:
    """Transform *root* into an interactive tree with a fresh checkbox counter."""
    transformer = MarkupTransformer(ctx)
    result = transformer.transform(root)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Transform: guide=%s step=%s checkboxes=%d fallbacks=%d",
            ctx.current_guide_id, ctx.current_step_index, transformer.counter.value, transformer.fallbacks,
        )
    return result
