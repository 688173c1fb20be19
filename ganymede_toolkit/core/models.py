from __future__ import annotations

"""Shared data structures used across the Ganymede Toolkit core.

This module holds the *input* side of the transformation engine: the generic
markup tree produced by the parser adapter and the caller-owned context the
engine reads while walking it. It is intentionally free of UI / I/O code so
that the contained objects can be reused in any context (unit-tests, CLI,
host applications, etc.).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Union

__all__ = [
    "Text",
    "Element",
    "MarkupNode",
    "GuideInfo",
    "Platform",
    "Modifiers",
    "ResourceLinks",
    "TransformContext",
]


# ---------------------------------------------------------------------------
# Generic markup tree
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class Text:
    """Text leaf of the generic markup tree."""

    value: str
    parent: Optional["Element"] = field(default=None, repr=False)
    next_sibling: Optional["MarkupNode"] = field(default=None, repr=False)


@dataclass(eq=False)
class Element:
    """Element of the generic markup tree.

    ``parent`` and ``next_sibling`` are back-references maintained by
    :meth:`append`; they are excluded from ``repr`` to keep dumps readable.
    """

    tag: str
    attributes: Dict[str, str] = field(default_factory=dict)
    children: List["MarkupNode"] = field(default_factory=list)
    parent: Optional["Element"] = field(default=None, repr=False)
    next_sibling: Optional["MarkupNode"] = field(default=None, repr=False)

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Return attribute *name* (lxml-style accessor)."""
        return self.attributes.get(name, default)

    def append(self, child: "MarkupNode") -> "MarkupNode":
        """Append *child*, wiring its parent and the previous sibling's link."""
        if self.children:
            self.children[-1].next_sibling = child
        child.parent = self
        child.next_sibling = None
        self.children.append(child)
        return child


MarkupNode = Union[Text, Element]


# ---------------------------------------------------------------------------
# Context collaborators
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class GuideInfo:
    """Registry entry for a locally available guide."""

    step_count: int
    lang: str = "fr"


@dataclass(frozen=True)
class Modifiers:
    """Keyboard modifiers held during an activation gesture."""

    ctrl: bool = False
    meta: bool = False
    alt: bool = False
    shift: bool = False


@dataclass(frozen=True)
class Platform:
    """Host platform facts injected into the engine (never detected at runtime)."""

    is_mac: bool = False

    def open_database_pressed(self, modifiers: Modifiers) -> bool:
        """Return True if the platform "open database" modifier is held."""
        return modifiers.meta if self.is_mac else modifiers.ctrl


@dataclass(frozen=True)
class ResourceLinks:
    """URL templates and image rules used while building interactive nodes.

    Defaults match the packaged ``resource_links.yml``; use
    :meth:`from_config` to honour user overrides.
    """

    database_url_template: str = "https://dofusdb.fr/{lang}/database/{segment}/{id}"
    foreign_item_url_template: str = "https://db.methodwakfu.com/items/{id}"
    path_segments: Mapping[str, str] = field(
        default_factory=lambda: {
            "monster": "monster",
            "quest": "quest",
            "item": "object",
            "dungeon": "dungeon",
        }
    )
    image_size_classes: FrozenSet[str] = frozenset({"img-large", "img-medium", "img-small"})
    image_proxy_hosts: FrozenSet[str] = frozenset({"dofusdb.fr", "ganymede-app.com"})
    guide_icon_marker: str = "images/texteditor/guides.png"

    @classmethod
    def from_config(cls, data: Mapping[str, Any]) -> "ResourceLinks":
        """Build links from a ``resource_links`` config section."""
        defaults = cls()
        segments = dict(defaults.path_segments)
        segments.update(data.get("path_segments") or {})
        return cls(
            database_url_template=data.get("database_url_template") or defaults.database_url_template,
            foreign_item_url_template=data.get("foreign_item_url_template") or defaults.foreign_item_url_template,
            path_segments=segments,
            image_size_classes=frozenset(data.get("image_size_classes") or defaults.image_size_classes),
            image_proxy_hosts=frozenset(data.get("image_proxy_hosts") or defaults.image_proxy_hosts),
            guide_icon_marker=data.get("guide_icon_marker") or defaults.guide_icon_marker,
        )


@dataclass
class TransformContext:
    """Caller-owned, read-only data consulted during one transformation pass.

    Attributes
    ----------
    whitelist
        Trusted ``scheme://host`` origins.
    current_guide_id, current_step_index
        Guide and 0-based step whose content is being transformed; either may
        be ``None`` when rendering outside a guide (e.g. a preview).
    disabled
        Renders every interactive node inert.
    platform
        Injected platform facts (modifier semantics).
    guide_registry
        Locally available guides keyed by id.
    checked_indices
        Persisted checked checkbox indices for the active guide and step.
    mapping_table
        ``kind -> external id -> url`` table for the alternate site.
    saved_steps
        Reader's saved current step (0-based) per guide id.
    auto_travel_copy
        Position tokens copy an autopilot command instead of raw coordinates.
    links
        URL templates and image rules.
    hidden_link_text
        Placeholder shown instead of an untrusted bare URL.
    """

    whitelist: FrozenSet[str] = frozenset()
    current_guide_id: Optional[int] = None
    current_step_index: Optional[int] = None
    disabled: bool = False
    platform: Platform = field(default_factory=Platform)
    guide_registry: Mapping[int, GuideInfo] = field(default_factory=dict)
    checked_indices: FrozenSet[int] = frozenset()
    mapping_table: Mapping[str, Mapping[str, str]] = field(default_factory=dict)
    saved_steps: Mapping[int, int] = field(default_factory=dict)
    auto_travel_copy: bool = False
    links: ResourceLinks = field(default_factory=ResourceLinks)
    hidden_link_text: str = "hidden link"

    def lookup_guide(self, guide_id: Optional[int]) -> Optional[GuideInfo]:
        """Return the registry entry for *guide_id* or ``None``."""
        if guide_id is None:
            return None
        return self.guide_registry.get(guide_id)

    def lookup_mapping(self, kind: str, external_id: Optional[str]) -> Optional[str]:
        """Return the alternate-site URL for ``(kind, external_id)`` or ``None``."""
        if not external_id:
            return None
        return (self.mapping_table.get(kind) or {}).get(str(external_id))

    def has_step(self) -> bool:
        """Return True when both guide and step are known."""
        return self.current_guide_id is not None and self.current_step_index is not None
