from __future__ import annotations

"""Cross-document (guide-to-guide) navigation resolution.

Step numbers in markup are 1-based and declared by the author at writing
time; the target guide may since have gained or lost steps, may not be
available locally, or the author may ask for "wherever the reader is"
(``stepid == 0``). This module turns those declarations into a concrete
0-based target and a download decision.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from ganymede_toolkit.core.models import TransformContext
from ganymede_toolkit.core.utils import clamp

logger = logging.getLogger(__name__)

__all__ = ["SAME_GUIDE", "StepTarget", "resolve_step_target"]

# guideid="0" in markup means "the guide being read"
SAME_GUIDE = 0


@dataclass(frozen=True)
class StepTarget:
    """Resolved navigation target."""

    guide_id: int
    step: int  # 0-based
    same_guide: bool
    needs_download: bool


def resolve_step_target(
    dom_guide_id: int,
    step_number: int,
    step_id: Optional[int],
    ctx: TransformContext,
) -> Optional[StepTarget]:
    """Resolve a guide-step reference against *ctx*.

    Returns ``None`` when no concrete target exists (``guideid="0"`` outside
    of any guide); callers then leave the element as passthrough.
    """
    current_guide_id = ctx.current_guide_id
    same_guide = dom_guide_id == current_guide_id or dom_guide_id == SAME_GUIDE

    if dom_guide_id == SAME_GUIDE and current_guide_id is None:
        logger.debug("Navigation: same-guide link rendered outside of a guide, ignoring")
        return None

    target_guide_id = current_guide_id if dom_guide_id == SAME_GUIDE else dom_guide_id
    guide = ctx.lookup_guide(target_guide_id)
    total_steps = guide.step_count if guide is not None and guide.step_count > 0 else None

    if total_steps is not None:
        step_number = clamp(step_number, 1, total_steps)
    else:
        # Unknown upper bound: keep the declared step, never below the first one
        step_number = max(step_number, 1)

    if guide is not None and step_id == 0:
        saved = ctx.saved_steps.get(target_guide_id)  # type: ignore[arg-type]
        if saved is not None:
            step_number = clamp(saved + 1, 1, total_steps if total_steps is not None else saved + 1)

    return StepTarget(
        guide_id=target_guide_id,  # type: ignore[arg-type]
        step=step_number - 1,
        same_guide=same_guide,
        needs_download=not same_guide and guide is None,
    )
