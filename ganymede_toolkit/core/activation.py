from __future__ import annotations

"""Interaction handlers: which intents a gesture on a node emits.

Pure functions only; executing the intents is the activation service's job.
Handlers are looked up by exact node type in :data:`_HANDLERS`.
"""

from typing import Callable, Dict, List, Type

from ganymede_toolkit.core.intents import (
    CopyToClipboard,
    Intent,
    NavigateToGuideStep,
    OpenExternalUrl,
    OpenImageViewer,
    RequestGuideDownload,
    ToggleCheckbox,
)
from ganymede_toolkit.core.models import Modifiers, Platform
from ganymede_toolkit.core.nodes import (
    Checkbox,
    CrossGuideStepLink,
    ExternalAnchor,
    ImageRef,
    InteractiveNode,
    PositionToken,
    ResourceKind,
    ResourceTag,
    SameGuideStepLink,
)
from ganymede_toolkit.core.transform.resources import ALT_MAPPED_KINDS

__all__ = ["intents_for", "is_activatable"]

Handler = Callable[[InteractiveNode, Modifiers, Platform], List[Intent]]


def _position(node: PositionToken, modifiers: Modifiers, platform: Platform) -> List[Intent]:
    return [CopyToClipboard(node.copy_text)]


def _same_guide(node: SameGuideStepLink, modifiers: Modifiers, platform: Platform) -> List[Intent]:
    return [NavigateToGuideStep(node.target_guide_id, node.target_step)]


def _cross_guide(node: CrossGuideStepLink, modifiers: Modifiers, platform: Platform) -> List[Intent]:
    if node.pending:
        return []
    intents: List[Intent] = []
    if node.needs_download:
        intents.append(RequestGuideDownload(node.target_guide_id))
    intents.append(NavigateToGuideStep(node.target_guide_id, node.target_step))
    return intents


def _resource(node: ResourceTag, modifiers: Modifiers, platform: Platform) -> List[Intent]:
    open_database = platform.open_database_pressed(modifiers)

    if node.resource_kind is ResourceKind.FOREIGN_ITEM:
        if open_database and node.database_url:
            return [OpenExternalUrl(node.database_url)]
        return [CopyToClipboard(node.name)]

    if modifiers.alt and node.resource_kind in ALT_MAPPED_KINDS:
        return [OpenExternalUrl(node.mapped_url)] if node.mapped_url else []
    if open_database and node.database_url:
        return [OpenExternalUrl(node.database_url)]
    return [CopyToClipboard(node.name)]


def _image(node: ImageRef, modifiers: Modifiers, platform: Platform) -> List[Intent]:
    if not node.clickable:
        return []
    return [OpenImageViewer(node.src, node.caption)]


def _anchor(node: ExternalAnchor, modifiers: Modifiers, platform: Platform) -> List[Intent]:
    if not node.external:
        return []
    return [OpenExternalUrl(node.href)]


def _checkbox(node: Checkbox, modifiers: Modifiers, platform: Platform) -> List[Intent]:
    if not node.interactive or node.guide_id is None or node.step_index is None:
        return []
    return [ToggleCheckbox(node.guide_id, node.step_index, node.index)]


_HANDLERS: Dict[Type[InteractiveNode], Handler] = {
    PositionToken: _position,  # type: ignore[dict-item]
    SameGuideStepLink: _same_guide,  # type: ignore[dict-item]
    CrossGuideStepLink: _cross_guide,  # type: ignore[dict-item]
    ResourceTag: _resource,  # type: ignore[dict-item]
    ImageRef: _image,  # type: ignore[dict-item]
    ExternalAnchor: _anchor,  # type: ignore[dict-item]
    Checkbox: _checkbox,  # type: ignore[dict-item]
}


def is_activatable(node: InteractiveNode) -> bool:
    """Return True if *node* reacts to activation at all."""
    return type(node) in _HANDLERS and not getattr(node, "disabled", False)


def intents_for(node: InteractiveNode, modifiers: Modifiers = Modifiers(),
                platform: Platform = Platform()) -> List[Intent]:
    """Return the ordered intents emitted when *node* is activated."""
    if not is_activatable(node):
        return []
    return _HANDLERS[type(node)](node, modifiers, platform)
