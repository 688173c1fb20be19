from __future__ import annotations

"""In-memory reader progress store.

Holds, per guide, the reader's current step and the checked checkbox indices
of each step. Hosts persist it however they like; the engine only ever
receives read-only views (:meth:`ProgressService.checked_indices`,
:meth:`ProgressService.saved_steps`).
"""

import logging
from dataclasses import dataclass, field
from threading import RLock
from typing import Dict, FrozenSet, List, Optional

logger = logging.getLogger(__name__)

__all__ = ["StepProgress", "GuideProgress", "ProgressService"]


@dataclass
class StepProgress:
    """Checked checkbox indices of one step, in toggle order."""

    checkboxes: List[int] = field(default_factory=list)

    def toggle(self, checkbox_index: int) -> None:
        if checkbox_index in self.checkboxes:
            self.checkboxes.remove(checkbox_index)
        else:
            self.checkboxes.append(checkbox_index)


@dataclass
class GuideProgress:
    guide_id: int
    current_step: int = 0
    steps: Dict[int, StepProgress] = field(default_factory=dict)


class ProgressService:
    """Thread-safe progress store; also the checkbox-toggle collaborator."""

    def __init__(self) -> None:
        self._progresses: Dict[int, GuideProgress] = {}
        self._lock = RLock()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def get_progress(self, guide_id: int) -> Optional[GuideProgress]:
        with self._lock:
            return self._progresses.get(guide_id)

    def current_step(self, guide_id: int) -> Optional[int]:
        with self._lock:
            progress = self._progresses.get(guide_id)
            return progress.current_step if progress is not None else None

    def checked_indices(self, guide_id: int, step_index: int) -> FrozenSet[int]:
        with self._lock:
            progress = self._progresses.get(guide_id)
            if progress is None:
                return frozenset()
            step = progress.steps.get(step_index)
            return frozenset(step.checkboxes) if step is not None else frozenset()

    def saved_steps(self) -> Dict[int, int]:
        """Snapshot of ``guide id -> current step`` for transformation contexts."""
        with self._lock:
            return {gid: p.current_step for gid, p in self._progresses.items()}

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def set_current_step(self, guide_id: int, step: int) -> None:
        with self._lock:
            self._get_or_create(guide_id).current_step = max(step, 0)

    def toggle_checkbox(self, guide_id: int, step_index: int, checkbox_index: int) -> int:
        """Flip the checked state of one checkbox and return its index."""
        logger.debug("Progress: toggle_checkbox guide=%s step=%s checkbox=%s",
                     guide_id, step_index, checkbox_index)
        with self._lock:
            progress = self._get_or_create(guide_id)
            step = progress.steps.setdefault(step_index, StepProgress())
            step.toggle(checkbox_index)
        return checkbox_index

    def _get_or_create(self, guide_id: int) -> GuideProgress:
        progress = self._progresses.get(guide_id)
        if progress is None:
            progress = GuideProgress(guide_id=guide_id)
            self._progresses[guide_id] = progress
        return progress
