from __future__ import annotations

"""High-level orchestration services (rendering, activation, progress).

Services are instantiated directly with their collaborators injected.
"""

from .progress_service import ProgressService  # noqa: F401
from .render_service import RenderService, RenderResult  # noqa: F401
from .activation_service import ActivationService, ActivationResult, IntentHandler  # noqa: F401

__all__: list[str] = [
    "ProgressService",
    "RenderService",
    "RenderResult",
    "ActivationService",
    "ActivationResult",
    "IntentHandler",
]
