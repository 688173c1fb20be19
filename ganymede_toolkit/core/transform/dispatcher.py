from __future__ import annotations

"""Custom tag dispatch rules.

Each rule inspects one element and either returns the node it builds or
``None`` to let the next rule try. Rules are evaluated in :data:`RULES`
order and the first non-``None`` result wins; when every rule declines the
engine falls back to passthrough. A rule decides itself which children it
renders (all of them, only the first one, or none) through the
:class:`Visitor` it receives.
"""

import logging
from typing import Callable, List, Optional, Protocol, Sequence, Tuple

from ganymede_toolkit.core.models import Element, MarkupNode, TransformContext
from ganymede_toolkit.core.nodes import (
    CrossGuideStepLink,
    Dropped,
    ExternalAnchor,
    FlattenedParagraph,
    InteractiveNode,
    LineBreak,
    PlainPassthrough,
    ResourceKind,
    SameGuideStepLink,
)
from ganymede_toolkit.core.transform.checkboxes import CheckboxCounter, allocate_checkbox, is_checkbox
from ganymede_toolkit.core.transform.links import is_untrusted_http
from ganymede_toolkit.core.transform.navigation import resolve_step_target
from ganymede_toolkit.core.transform.paragraphs import count_empty_run, is_empty_paragraph
from ganymede_toolkit.core.transform.resources import build_image, build_quest_block, build_resource_tag
from ganymede_toolkit.core.utils import is_http_url, parse_int

logger = logging.getLogger(__name__)

__all__ = ["Visitor", "Rule", "RULES", "dispatch"]


class Visitor(Protocol):
    """What a rule may use from the traversal engine."""

    ctx: TransformContext
    counter: CheckboxCounter

    def transform(self, node: MarkupNode) -> InteractiveNode: ...

    def transform_all(self, nodes: Sequence[MarkupNode]) -> List[InteractiveNode]: ...


Rule = Callable[[Element, Visitor], Optional[InteractiveNode]]


# ---------------------------------------------------------------------------
# Rules (priority order)
# ---------------------------------------------------------------------------

def empty_paragraph_rule(element: Element, visitor: Visitor) -> Optional[InteractiveNode]:
    if not is_empty_paragraph(element):
        return None
    if count_empty_run(element) > 1:
        return Dropped()
    return LineBreak()


def guide_step_rule(element: Element, visitor: Visitor) -> Optional[InteractiveNode]:
    if element.get("data-type") != "guide-step":
        return None

    dom_guide_id = parse_int(element.get("guideid"))
    step_number = parse_int(element.get("stepnumber"))
    if dom_guide_id is None or step_number is None:
        logger.debug("Dispatch: guide-step without numeric guideid/stepnumber, passthrough")
        return None

    ctx = visitor.ctx
    target = resolve_step_target(dom_guide_id, step_number, parse_int(element.get("stepid")), ctx)
    if target is None:
        return None

    marker = ctx.links.guide_icon_marker
    has_icon = any(
        isinstance(child, Element) and child.tag == "img" and marker in (child.get("src") or "")
        for child in element.children
    )
    children = visitor.transform_all(element.children)

    if target.same_guide:
        return SameGuideStepLink(
            target_guide_id=target.guide_id,
            target_step=target.step,
            show_default_icon=not has_icon,
            disabled=ctx.disabled,
            children=children,
        )
    return CrossGuideStepLink(
        target_guide_id=target.guide_id,
        target_step=target.step,
        needs_download=target.needs_download,
        show_default_icon=not has_icon,
        disabled=ctx.disabled,
        children=children,
    )


def custom_tag_rule(element: Element, visitor: Visitor) -> Optional[InteractiveNode]:
    if element.get("data-type") != "custom-tag":
        return None
    kind = ResourceKind.from_markup(element.get("type"))
    if kind is None:
        return None

    # Only the first child is the icon region; the name is a separate label
    icon = visitor.transform_all(element.children[:1])
    return build_resource_tag(element, kind, icon, visitor.ctx)


def quest_block_rule(element: Element, visitor: Visitor) -> Optional[InteractiveNode]:
    if element.get("data-type") != "quest-block":
        return None
    return build_quest_block(element, visitor.transform_all(element.children))


def image_rule(element: Element, visitor: Visitor) -> Optional[InteractiveNode]:
    if element.tag != "img":
        return None
    return build_image(element, visitor.ctx)


def anchor_rule(element: Element, visitor: Visitor) -> Optional[InteractiveNode]:
    if element.tag != "a":
        return None
    href = element.get("href") or ""
    children = visitor.transform_all(element.children)
    if is_untrusted_http(href, visitor.ctx.whitelist):
        # Defused: keep the content, drop the link
        return PlainPassthrough(children=children)
    return ExternalAnchor(
        href=href,
        external=is_http_url(href),
        disabled=visitor.ctx.disabled,
        children=children,
    )


def task_item_paragraph_rule(element: Element, visitor: Visitor) -> Optional[InteractiveNode]:
    if element.tag != "p":
        return None
    div = element.parent
    if div is None or div.tag != "div":
        return None
    li = div.parent
    if li is None or li.tag != "li" or li.get("data-type") != "taskItem":
        return None
    return FlattenedParagraph(children=visitor.transform_all(element.children))


def checkbox_rule(element: Element, visitor: Visitor) -> Optional[InteractiveNode]:
    if not is_checkbox(element):
        return None
    return allocate_checkbox(visitor.counter, visitor.ctx)


RULES: Tuple[Rule, ...] = (
    empty_paragraph_rule,
    guide_step_rule,
    custom_tag_rule,
    quest_block_rule,
    image_rule,
    anchor_rule,
    task_item_paragraph_rule,
    checkbox_rule,
)


def dispatch(element: Element, visitor: Visitor,
             rules: Sequence[Rule] = RULES) -> Optional[InteractiveNode]:
    """Return the first rule result for *element*, or ``None`` if none applies."""
    for rule in rules:
        result = rule(element, visitor)
        if result is not None:
            return result
    return None
