from __future__ import annotations

"""Markup parsing adapters (raw string -> generic markup tree)."""

from .html_parser import ROOT_TAG, parse_markup, from_lxml

__all__ = ["ROOT_TAG", "parse_markup", "from_lxml"]
