from __future__ import annotations

"""Execution of interaction intents against external collaborators.

The transformation engine never performs side effects; interactive nodes
only describe the intents a gesture emits (see
:mod:`ganymede_toolkit.core.activation`). This service runs those intents,
in order, against an :class:`IntentHandler`.

Failures follow a non-raising pattern: the caller receives an
:class:`ActivationResult` with ``success=False`` and a user-facing message,
and cross-guide links additionally record the message on the node so the
rendering layer can show an inline error state.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from ganymede_toolkit.config import ConfigManager
from ganymede_toolkit.core.activation import intents_for
from ganymede_toolkit.core.exceptions import GuideDownloadError, IntentExecutionError
from ganymede_toolkit.core.intents import (
    CopyToClipboard,
    Intent,
    NavigateToGuideStep,
    OpenExternalUrl,
    OpenImageViewer,
    RequestGuideDownload,
    ToggleCheckbox,
)
from ganymede_toolkit.core.models import Modifiers, Platform
from ganymede_toolkit.core.nodes import CrossGuideStepLink, InteractiveNode

logger = logging.getLogger(__name__)

__all__ = ["IntentHandler", "ActivationResult", "ActivationService"]

# Used when the messages config section lacks a key
_DEFAULT_MESSAGES = {
    "download_failed": "Could not download the guide. Try again later.",
    "action_failed": "The action could not be completed.",
}


@runtime_checkable
class IntentHandler(Protocol):
    """External collaborators reached from interactive nodes."""

    def copy_to_clipboard(self, text: str) -> None:
        ...

    def open_external_url(self, url: str) -> None:
        ...

    def open_image_viewer(self, url: str, title: Optional[str]) -> None:
        ...

    def navigate_to_guide_step(self, guide_id: int, step: int) -> None:
        ...

    def request_guide_download(self, guide_id: int) -> bool:
        """Fetch *guide_id*; return False or raise on failure.

        Duplicate requests for the same guide are expected to be
        deduplicated by the implementation.
        """
        ...

    def toggle_checkbox(self, guide_id: int, step_index: int, checkbox_index: int) -> Any:
        ...


@dataclass
class ActivationResult:
    """Structured outcome of one activation.

    Attributes
    ----------
    success : bool
        True when every intent was carried out.
    executed : list
        Intents that completed, in order.
    message : str
        Human-readable failure message; empty on success.
    details : Optional[Dict[str, Any]]
        Structured ancillary data (failure reason, failed intent, error class).
    """
    success: bool
    executed: List[Intent] = field(default_factory=list)
    message: str = ""
    details: Optional[Dict[str, Any]] = None


class ActivationService:
    """Runs the intents of an activated node against an :class:`IntentHandler`."""

    def __init__(self, handler: IntentHandler, platform: Optional[Platform] = None,
                 messages: Optional[Dict[str, str]] = None,
                 config: Optional[ConfigManager] = None) -> None:
        self.handler = handler
        self.platform = platform or Platform()
        config = config if config is not None else ConfigManager()
        self.messages = {
            key: config.get_message(key, default) for key, default in _DEFAULT_MESSAGES.items()
        }
        self.messages.update(messages or {})

    # ---------------------------------------------------------------------
    # PUBLIC API
    # ---------------------------------------------------------------------
    def activate(self, node: InteractiveNode, modifiers: Modifiers = Modifiers()) -> ActivationResult:
        """Activate *node* with the given modifier keys held."""
        intents = intents_for(node, modifiers, self.platform)
        if not intents:
            logger.debug("Activate: %s emits no intent", node.kind)
            return ActivationResult(success=True)

        is_cross_link = isinstance(node, CrossGuideStepLink)
        if is_cross_link:
            node.error = None
            node.pending = True

        executed: List[Intent] = []
        try:
            for intent in intents:
                self._execute(intent)
                executed.append(intent)
        except GuideDownloadError as exc:
            logger.error("Activate FAIL: guide download guide=%s: %s", exc.guide_id, exc)
            message = self.messages["download_failed"]
            if is_cross_link:
                node.error = message
            return ActivationResult(
                success=False,
                executed=executed,
                message=message,
                details={"reason": "download_failed", "guide_id": exc.guide_id},
            )
        except IntentExecutionError as exc:
            logger.error("Activate FAIL: %s: %s", type(exc.intent).__name__, exc)
            message = self.messages["action_failed"]
            if is_cross_link:
                node.error = message
            return ActivationResult(
                success=False,
                executed=executed,
                message=message,
                details={
                    "reason": "intent_failed",
                    "intent": exc.intent,
                    "error_class": type(exc.cause).__name__ if exc.cause else None,
                },
            )
        finally:
            if is_cross_link:
                node.pending = False

        logger.info("Activate OK: %s -> %s", node.kind, ", ".join(type(i).__name__ for i in executed))
        return ActivationResult(success=True, executed=executed)

    # ---------------------------------------------------------------------
    # Internals
    # ---------------------------------------------------------------------
    def _execute(self, intent: Intent) -> None:
        if isinstance(intent, RequestGuideDownload):
            self._download(intent.guide_id)
            return

        try:
            if isinstance(intent, CopyToClipboard):
                self.handler.copy_to_clipboard(intent.text)
            elif isinstance(intent, OpenExternalUrl):
                self.handler.open_external_url(intent.url)
            elif isinstance(intent, OpenImageViewer):
                self.handler.open_image_viewer(intent.url, intent.title)
            elif isinstance(intent, NavigateToGuideStep):
                self.handler.navigate_to_guide_step(intent.guide_id, intent.step)
            elif isinstance(intent, ToggleCheckbox):
                self.handler.toggle_checkbox(intent.guide_id, intent.step_index, intent.checkbox_index)
            else:
                raise IntentExecutionError(f"Unsupported intent: {intent!r}", intent=intent)
        except IntentExecutionError:
            raise
        except Exception as exc:  # noqa: BLE001 - collaborator boundary
            raise IntentExecutionError(f"{type(intent).__name__} failed: {exc}", intent=intent, cause=exc) from exc

    def _download(self, guide_id: int) -> None:
        logger.info("Activate: requesting download of guide %s", guide_id)
        try:
            available = self.handler.request_guide_download(guide_id)
        except GuideDownloadError:
            raise
        except Exception as exc:  # noqa: BLE001 - collaborator boundary
            raise GuideDownloadError(str(exc), guide_id=guide_id, cause=exc) from exc
        if available is False:
            raise GuideDownloadError("Guide is not available after download", guide_id=guide_id)
