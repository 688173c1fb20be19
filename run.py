# -*- coding: utf-8 -*-

"""
Command-line entry point: render a guide step file to an interactive tree.

Prints the tree as indented JSON, which is what a rendering layer receives.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from ganymede_toolkit.core.models import GuideInfo, Platform
from ganymede_toolkit.core.services import ProgressService, RenderService
from ganymede_toolkit.logging_config import setup_logging
from ganymede_toolkit.version import get_app_version


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="ganymede-render",
        description="Transform guide step markup into an interactive document tree (JSON).",
    )
    ap.add_argument("markup_file", type=Path, help="HTML file holding one step's content")
    ap.add_argument("--guide-id", type=int, default=None, help="Guide being read")
    ap.add_argument("--step", type=int, default=None, help="0-based step index being read")
    ap.add_argument(
        "--steps",
        type=int,
        default=None,
        help="Number of steps of the guide being read (registers it as available)",
    )
    ap.add_argument("--lang", default="fr", help="Language of the guide being read")
    ap.add_argument("--mac", action="store_true", help="Use macOS modifier semantics")
    ap.add_argument("--disabled", action="store_true", help="Render every control inert")
    ap.add_argument("--auto-travel", action="store_true", help="Coordinates copy an autopilot command")
    ap.add_argument("--version", action="version", version=f"%(prog)s {get_app_version()}")
    return ap


def main(argv=None) -> int:
    """
    Configure logging, render the requested file and print the tree.
    """
    args = build_parser().parse_args(argv)
    setup_logging()

    registry = {}
    if args.guide_id is not None and args.steps is not None:
        registry[args.guide_id] = GuideInfo(step_count=args.steps, lang=args.lang)

    service = RenderService(
        guide_registry=registry,
        progress=ProgressService(),
        platform=Platform(is_mac=args.mac),
        auto_travel_copy=args.auto_travel,
    )

    try:
        markup = args.markup_file.read_text(encoding="utf-8")
    except OSError as exc:
        print(f"Cannot read {args.markup_file}: {exc}", file=sys.stderr)
        return 2

    result = service.render_step(markup, args.guide_id, args.step, disabled=args.disabled)
    if not result.success:
        print(result.message, file=sys.stderr)
        return 1

    print(json.dumps(result.tree.to_dict(), indent=2, ensure_ascii=False))
    return 0


if __name__ == '__main__':
    code = main()
    logging.info("===== Render terminated =====")
    sys.exit(code)
