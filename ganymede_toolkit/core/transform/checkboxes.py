from __future__ import annotations

"""Checkbox index allocation.

Checked state is persisted per (guide, step) as a set of checkbox *indices*,
so an index must depend only on the checkbox's position in document order.
A :class:`CheckboxCounter` is created for each transformation pass and
threaded through it; it is never shared between documents.
"""

from typing import Optional

from ganymede_toolkit.core.models import Element, TransformContext
from ganymede_toolkit.core.nodes import Checkbox

__all__ = ["CheckboxCounter", "is_checkbox", "allocate_checkbox"]


class CheckboxCounter:
    """Mutable cursor counting the checkboxes visited so far."""

    __slots__ = ("value",)

    def __init__(self, start: int = 0) -> None:
        self.value = start

    def next_index(self) -> int:
        """Return the current index and advance."""
        index = self.value
        self.value += 1
        return index

    def rewind(self, value: int) -> None:
        self.value = value

    def __repr__(self) -> str:
        return f"CheckboxCounter({self.value})"


def is_checkbox(element: Element) -> bool:
    return element.tag == "input" and (element.get("type") or "").lower() == "checkbox"


def allocate_checkbox(counter: CheckboxCounter, ctx: TransformContext) -> Checkbox:
    """Read-and-increment *counter* and resolve the checked state."""
    index = counter.next_index()
    guide_id: Optional[int] = ctx.current_guide_id
    step_index: Optional[int] = ctx.current_step_index

    if not ctx.has_step():
        return Checkbox(index=index, checked=False, interactive=False)

    return Checkbox(
        index=index,
        checked=index in ctx.checked_indices,
        interactive=not ctx.disabled,
        guide_id=guide_id,
        step_index=step_index,
    )
