from __future__ import annotations

"""Guide markup transformation engine.

Public entry point is :func:`transform`; the submodules hold the individual
components (position scanner, link trust, paragraph collapsing, checkbox
allocation, navigation resolution and the dispatch rule table).
"""

from .checkboxes import CheckboxCounter
from .engine import MarkupTransformer, transform

__all__: list[str] = [
    "CheckboxCounter",
    "MarkupTransformer",
    "transform",
]
