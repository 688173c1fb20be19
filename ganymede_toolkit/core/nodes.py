from __future__ import annotations

"""Interactive document tree produced by the transformation engine.

Every variant is a small dataclass carrying its resolved ``children``. The
set of variants is closed; consumers dispatch on the concrete type (see
:mod:`ganymede_toolkit.core.activation`). Nodes are rebuilt on every
transformation, only the activation state of
:class:`CrossGuideStepLink` (``pending`` / ``error``) is mutated afterwards.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional

__all__ = [
    "ResourceKind",
    "QuestStatus",
    "InteractiveNode",
    "PlainPassthrough",
    "HiddenLinkPlaceholder",
    "LineBreak",
    "Dropped",
    "PositionToken",
    "SameGuideStepLink",
    "CrossGuideStepLink",
    "ResourceTag",
    "QuestStatusBlock",
    "ImageRef",
    "ExternalAnchor",
    "FlattenedParagraph",
    "Checkbox",
]


class ResourceKind(str, Enum):
    MONSTER = "monster"
    QUEST = "quest"
    ITEM = "item"
    DUNGEON = "dungeon"
    FOREIGN_ITEM = "foreignItem"

    @classmethod
    def from_markup(cls, value: Optional[str]) -> Optional["ResourceKind"]:
        """Map a ``custom-tag`` ``type`` attribute to a kind (``None`` if unknown)."""
        return _RESOURCE_TYPES.get(value or "")


_RESOURCE_TYPES: Dict[str, ResourceKind] = {
    "monster": ResourceKind.MONSTER,
    "quest": ResourceKind.QUEST,
    "item": ResourceKind.ITEM,
    "dungeon": ResourceKind.DUNGEON,
    "foreign-game-item": ResourceKind.FOREIGN_ITEM,
    # Name used by the guide editor for the second game's items
    "wakfu-item": ResourceKind.FOREIGN_ITEM,
}


class QuestStatus(str, Enum):
    SETUP = "setup"
    START = "start"
    IN_PROGRESS = "inProgress"
    END = "end"

    @classmethod
    def from_markup(cls, value: Optional[str]) -> Optional["QuestStatus"]:
        """Map a ``quest-block`` ``status`` attribute (``None`` if unknown)."""
        return _QUEST_STATUSES.get(value or "")

    @property
    def indicator(self) -> Optional[str]:
        """Colour of the status indicator (in-progress blocks have none)."""
        return _STATUS_INDICATORS.get(self)


_QUEST_STATUSES: Dict[str, QuestStatus] = {
    "setup": QuestStatus.SETUP,
    "start": QuestStatus.START,
    "inProgress": QuestStatus.IN_PROGRESS,
    "in_progress": QuestStatus.IN_PROGRESS,
    "end": QuestStatus.END,
}

_STATUS_INDICATORS: Dict[QuestStatus, str] = {
    QuestStatus.SETUP: "orange",
    QuestStatus.START: "red",
    QuestStatus.END: "green",
}


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------

@dataclass
class InteractiveNode:
    """Base of every output node."""

    children: List["InteractiveNode"] = field(default_factory=list, kw_only=True)

    @property
    def kind(self) -> str:
        return type(self).__name__

    def walk(self) -> Iterator["InteractiveNode"]:
        """Yield this node and its descendants, depth-first pre-order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def to_dict(self) -> Dict[str, Any]:
        """Serialise the subtree into plain JSON-compatible data."""
        data: Dict[str, Any] = {"kind": self.kind}
        for f in fields(self):
            if f.name == "children":
                continue
            value = getattr(self, f.name)
            if isinstance(value, Enum):
                value = value.value
            data[f.name] = value
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        return data


@dataclass
class PlainPassthrough(InteractiveNode):
    """Unchanged content.

    A text leaf sets ``text``; an element keeps ``tag`` and ``attributes``;
    a tag-less, text-less node is a fragment grouping scanned text pieces.
    """

    tag: Optional[str] = None
    attributes: Dict[str, str] = field(default_factory=dict)
    text: Optional[str] = None


@dataclass
class HiddenLinkPlaceholder(InteractiveNode):
    message: str = ""


@dataclass
class LineBreak(InteractiveNode):
    pass


@dataclass
class Dropped(InteractiveNode):
    """Renders nothing."""


@dataclass
class PositionToken(InteractiveNode):
    x: int = 0
    y: int = 0
    copy_text: str = ""
    disabled: bool = False


@dataclass
class SameGuideStepLink(InteractiveNode):
    target_guide_id: int = 0
    target_step: int = 0
    show_default_icon: bool = True
    disabled: bool = False


@dataclass
class CrossGuideStepLink(InteractiveNode):
    target_guide_id: int = 0
    target_step: int = 0
    needs_download: bool = False
    show_default_icon: bool = True
    disabled: bool = False
    pending: bool = False
    error: Optional[str] = None


@dataclass
class ResourceTag(InteractiveNode):
    """Game resource annotation.

    ``children`` holds only the rendered icon region (the source's first
    child); ``name`` is the trailing label.
    """

    resource_kind: ResourceKind = ResourceKind.ITEM
    name: str = ""
    external_id: Optional[str] = None
    database_url: Optional[str] = None
    mapped_url: Optional[str] = None
    title: str = ""
    disabled: bool = False


@dataclass
class QuestStatusBlock(InteractiveNode):
    quest_name: str = ""
    status: Optional[QuestStatus] = None

    @property
    def indicator(self) -> Optional[str]:
        return self.status.indicator if self.status else None

    @property
    def summary(self) -> str:
        """Hover/focus summary text."""
        return self.quest_name


@dataclass
class ImageRef(InteractiveNode):
    src: str = ""
    clickable: bool = False
    alt: Optional[str] = None
    title: Optional[str] = None
    is_icon: bool = True
    proxied: bool = False
    disabled: bool = False

    @property
    def caption(self) -> Optional[str]:
        return self.alt or self.title


@dataclass
class ExternalAnchor(InteractiveNode):
    href: str = ""
    external: bool = True
    disabled: bool = False


@dataclass
class FlattenedParagraph(InteractiveNode):
    """Paragraph content rendered inline (checklist items)."""


@dataclass
class Checkbox(InteractiveNode):
    index: int = 0
    checked: bool = False
    interactive: bool = False
    guide_id: Optional[int] = None
    step_index: Optional[int] = None
