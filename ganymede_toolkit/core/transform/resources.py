from __future__ import annotations

"""Builders for semantic annotation nodes (resources, quest blocks, images).

These functions only compute node data; recursion into children is owned by
the dispatcher rules that call them.
"""

from typing import List, Optional
from urllib.parse import urlparse

from ganymede_toolkit.core.models import Element, TransformContext
from ganymede_toolkit.core.nodes import (
    ImageRef,
    InteractiveNode,
    QuestStatus,
    QuestStatusBlock,
    ResourceKind,
    ResourceTag,
)
from ganymede_toolkit.core.utils import any_in, is_http_url, split_classes

__all__ = [
    "ALT_MAPPED_KINDS",
    "resource_title",
    "build_resource_tag",
    "build_quest_block",
    "build_image",
]

# Kinds for which Alt+click opens the alternate-site mapping
ALT_MAPPED_KINDS = frozenset({ResourceKind.ITEM, ResourceKind.QUEST, ResourceKind.DUNGEON})

_KIND_NOUNS = {
    ResourceKind.MONSTER: "monster",
    ResourceKind.QUEST: "quest",
    ResourceKind.ITEM: "item",
    ResourceKind.DUNGEON: "dungeon",
    ResourceKind.FOREIGN_ITEM: "item",
}


def resource_title(kind: ResourceKind, is_mac: bool) -> str:
    """Tooltip describing the gestures available on a resource tag."""
    modifier = "⌘" if is_mac else "Ctrl"
    site = "MethodWakfu" if kind is ResourceKind.FOREIGN_ITEM else "dofusdb"
    title = f"Click to copy the {_KIND_NOUNS[kind]} name. {modifier}+click to open on {site}"
    if kind is ResourceKind.QUEST:
        title += f". {'⌥' if is_mac else 'Alt'}+click to open on DPLN"
    return title


def _database_url(kind: ResourceKind, external_id: Optional[str], ctx: TransformContext) -> Optional[str]:
    if not external_id:
        return None
    links = ctx.links
    if kind is ResourceKind.FOREIGN_ITEM:
        return links.foreign_item_url_template.format(id=external_id)

    # The game database is localized after the guide being read
    guide = ctx.lookup_guide(ctx.current_guide_id)
    if guide is None:
        return None
    segment = links.path_segments.get(kind.value, kind.value)
    return links.database_url_template.format(lang=guide.lang, segment=segment, id=external_id)


def build_resource_tag(
    element: Element,
    kind: ResourceKind,
    icon: List[InteractiveNode],
    ctx: TransformContext,
) -> ResourceTag:
    """Build a resource tag whose icon region is the already-rendered *icon*."""
    if kind is ResourceKind.FOREIGN_ITEM:
        external_id = element.get("wakfuid")
    else:
        external_id = element.get("dofusdbid")

    mapped_url = ctx.lookup_mapping(kind.value, external_id) if kind in ALT_MAPPED_KINDS else None
    return ResourceTag(
        resource_kind=kind,
        name=element.get("name") or "",
        external_id=external_id or None,
        database_url=_database_url(kind, external_id, ctx),
        mapped_url=mapped_url,
        title=resource_title(kind, ctx.platform.is_mac),
        disabled=ctx.disabled,
        children=icon,
    )


def build_quest_block(element: Element, children: List[InteractiveNode]) -> QuestStatusBlock:
    return QuestStatusBlock(
        quest_name=element.get("questname") or "",
        status=QuestStatus.from_markup(element.get("status")),
        children=children,
    )


def build_image(element: Element, ctx: TransformContext) -> ImageRef:
    """Classify an ``<img>`` as inline icon or viewable picture."""
    src = element.get("src") or ""
    classes = split_classes(element.get("class"))
    is_icon = not any_in(ctx.links.image_size_classes, classes)
    is_http = is_http_url(src)
    proxied = False
    if is_http:
        host = urlparse(src).hostname or ""
        proxied = any(host == h or host.endswith("." + h) for h in ctx.links.image_proxy_hosts)

    return ImageRef(
        src=src,
        clickable=not is_icon and is_http,
        alt=element.get("alt"),
        title=element.get("title"),
        is_icon=is_icon,
        proxied=proxied,
        disabled=ctx.disabled,
    )
