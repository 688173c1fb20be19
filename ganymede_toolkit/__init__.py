"""Top-level package for the guide markup portion of Ganymede Toolkit.

This package hosts the GUI-agnostic transformation engine that turns guide
step markup into interactive document trees. Front-ends should only depend
on the public API exposed here rather than importing internal modules
directly.
"""

from .core.models import GuideInfo, Modifiers, Platform, TransformContext  # re-export for convenience
from .core.transform import transform

__all__: list[str] = [
    "GuideInfo",
    "Modifiers",
    "Platform",
    "TransformContext",
    "transform",
]
