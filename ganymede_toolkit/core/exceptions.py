from __future__ import annotations

"""Exception classes for the Ganymede Toolkit core.

The transformation engine itself never raises these for content problems
(local anomalies degrade to passthrough). They describe failures of the
surrounding layers: markup parsing and external collaborators invoked at
activation time. Services catch them and report structured results.
"""

from typing import Optional


class GanymedeError(Exception):
    """Base exception for all toolkit errors."""

    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.cause = cause


class MarkupParseError(GanymedeError):
    """Raised when raw markup cannot be turned into a markup tree."""


class GuideDownloadError(GanymedeError):
    """Raised by download collaborators when a guide cannot be fetched."""

    def __init__(self, message: str, guide_id: Optional[int] = None,
                 cause: Optional[Exception] = None) -> None:
        super().__init__(message, cause)
        self.guide_id = guide_id

    def __str__(self) -> str:
        if self.guide_id is not None:
            return f"[Guide: {self.guide_id}] {super().__str__()}"
        return super().__str__()


class IntentExecutionError(GanymedeError):
    """Raised when a collaborator fails to carry out an intent."""

    def __init__(self, message: str, intent: Optional[object] = None,
                 cause: Optional[Exception] = None) -> None:
        super().__init__(message, cause)
        self.intent = intent
