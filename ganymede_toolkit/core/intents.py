from __future__ import annotations

"""Commands emitted by interactive nodes towards external collaborators.

Intents are plain value objects; executing them is the job of
:class:`ganymede_toolkit.core.services.activation_service.ActivationService`.
"""

from dataclasses import dataclass
from typing import Optional, Union

__all__ = [
    "CopyToClipboard",
    "OpenExternalUrl",
    "OpenImageViewer",
    "NavigateToGuideStep",
    "RequestGuideDownload",
    "ToggleCheckbox",
    "Intent",
]


@dataclass(frozen=True)
class CopyToClipboard:
    text: str


@dataclass(frozen=True)
class OpenExternalUrl:
    url: str


@dataclass(frozen=True)
class OpenImageViewer:
    url: str
    title: Optional[str] = None


@dataclass(frozen=True)
class NavigateToGuideStep:
    guide_id: int
    step: int


@dataclass(frozen=True)
class RequestGuideDownload:
    guide_id: int


@dataclass(frozen=True)
class ToggleCheckbox:
    guide_id: int
    step_index: int
    checkbox_index: int


Intent = Union[
    CopyToClipboard,
    OpenExternalUrl,
    OpenImageViewer,
    NavigateToGuideStep,
    RequestGuideDownload,
    ToggleCheckbox,
]
