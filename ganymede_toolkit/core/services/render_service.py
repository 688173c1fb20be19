from __future__ import annotations

"""Service wrapping parse + transform of one guide step.

Hosts call :meth:`RenderService.render_step` once every dependency (guide
registry, progress) is loaded; the service builds the
:class:`TransformContext` from configuration plus the supplied data and
returns a structured, non-raising :class:`RenderResult`.
"""

from dataclasses import dataclass
import logging
from typing import Any, Dict, Mapping, Optional

from ganymede_toolkit.config import ConfigManager
from ganymede_toolkit.core.exceptions import MarkupParseError
from ganymede_toolkit.core.models import GuideInfo, Platform, ResourceLinks, TransformContext
from ganymede_toolkit.core.nodes import InteractiveNode
from ganymede_toolkit.core.parser import parse_markup
from ganymede_toolkit.core.services.progress_service import ProgressService
from ganymede_toolkit.core.transform import transform

logger = logging.getLogger(__name__)

__all__ = ["RenderResult", "RenderService"]


@dataclass
class RenderResult:
    """Structured result for render operations.

    Attributes
    ----------
    success : bool
        Indicates whether the operation completed successfully.
    tree : Optional[InteractiveNode]
        Interactive document tree when successful; None on failure.
    message : str
        Human-readable outcome message. Clear on failure, empty on success.
    details : Optional[Dict[str, Any]]
        Structured ancillary data (e.g., error kinds).
    """
    success: bool
    tree: Optional[InteractiveNode]
    message: str = ""
    details: Optional[Dict[str, Any]] = None


class RenderService:
    """Turns raw step markup into an interactive document tree.

    Examples
    --------
    >>> service = RenderService(guide_registry={42: GuideInfo(step_count=10, lang="fr")})
    >>> result = service.render_step("<p>Go to [1,2]</p>", guide_id=42, step_index=0)
    >>> if result.success:
    ...     tree = result.tree
    """

    def __init__(
        self,
        guide_registry: Optional[Mapping[int, GuideInfo]] = None,
        progress: Optional[ProgressService] = None,
        platform: Optional[Platform] = None,
        config: Optional[ConfigManager] = None,
        auto_travel_copy: bool = False,
    ) -> None:
        self.guide_registry: Mapping[int, GuideInfo] = guide_registry if guide_registry is not None else {}
        self.progress = progress if progress is not None else ProgressService()
        self.platform = platform or Platform()
        self.config = config if config is not None else ConfigManager()
        self.auto_travel_copy = auto_travel_copy

    # -----------------------------
    # Public API
    # -----------------------------
    def build_context(self, guide_id: Optional[int] = None, step_index: Optional[int] = None,
                      *, disabled: bool = False) -> TransformContext:
        """Assemble the transformation context for one guide step."""
        checked = frozenset()
        if guide_id is not None and step_index is not None:
            checked = self.progress.checked_indices(guide_id, step_index)

        return TransformContext(
            whitelist=self.config.get_whitelist(),
            current_guide_id=guide_id,
            current_step_index=step_index,
            disabled=disabled,
            platform=self.platform,
            guide_registry=self.guide_registry,
            checked_indices=checked,
            mapping_table=self.config.get_resource_mapping(),
            saved_steps=self.progress.saved_steps(),
            auto_travel_copy=self.auto_travel_copy,
            links=ResourceLinks.from_config(self.config.get_resource_links()),
            hidden_link_text=self.config.get_message("hidden_link", "hidden link"),
        )

    def render_step(self, markup: str, guide_id: Optional[int] = None, step_index: Optional[int] = None,
                    *, disabled: bool = False) -> RenderResult:
        """Parse and transform *markup*.

        Does not raise for routine errors; returns a structured failure.
        """
        logger.debug("Render: guide=%s step=%s chars=%d", guide_id, step_index, len(markup or ""))
        try:
            root = parse_markup(markup)
        except MarkupParseError as exc:
            logger.info("Render FAIL: parse error guide=%s step=%s: %s", guide_id, step_index, exc)
            return RenderResult(
                success=False,
                tree=None,
                message=self.config.get_message("parse_failed", "The step content could not be read."),
                details={"reason": "parse_error", "error_class": type(exc.cause).__name__ if exc.cause else None},
            )

        ctx = self.build_context(guide_id, step_index, disabled=disabled)
        tree = transform(root, ctx)
        return RenderResult(success=True, tree=tree)
