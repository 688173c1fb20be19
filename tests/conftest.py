"""Test configuration and fixtures for the Ganymede Toolkit test-suite.

This module provides shared fixtures for building transformation contexts,
rendering markup snippets and isolating the configuration singleton from
the developer's real user config directory.
"""

import logging
import sys
from pathlib import Path
from typing import List, Type

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from ganymede_toolkit.config import ConfigManager
from ganymede_toolkit.core.models import GuideInfo, TransformContext
from ganymede_toolkit.core.nodes import InteractiveNode
from ganymede_toolkit.core.parser import parse_markup
from ganymede_toolkit.core.transform import transform

# Configure test logging
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

TRUSTED = "https://trusted.example"


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the config manager at an empty per-test user directory."""
    user_dir = tmp_path / "user_config"
    monkeypatch.setenv("GANYMEDE_CONFIG_DIR", str(user_dir))
    ConfigManager._instance = None
    yield user_dir
    ConfigManager._instance = None


@pytest.fixture
def registry():
    """Guides 7 (current in most tests) and 8 are available locally."""
    return {
        7: GuideInfo(step_count=10, lang="en"),
        8: GuideInfo(step_count=5, lang="fr"),
    }


@pytest.fixture
def make_ctx(registry):
    """Factory for contexts reading guide 7, step 0 unless overridden."""
    def _make(**overrides) -> TransformContext:
        values = dict(
            whitelist=frozenset({TRUSTED}),
            current_guide_id=7,
            current_step_index=0,
            guide_registry=registry,
        )
        values.update(overrides)
        return TransformContext(**values)
    return _make


@pytest.fixture
def render(make_ctx):
    """Parse *html* and transform it, returning the root's children."""
    def _render(html: str, ctx: TransformContext = None) -> List[InteractiveNode]:
        tree = transform(parse_markup(html), ctx if ctx is not None else make_ctx())
        return tree.children
    return _render


@pytest.fixture
def collect():
    """Return every node of a given type below the supplied roots."""
    def _collect(roots, node_type: Type[InteractiveNode]) -> list:
        if isinstance(roots, InteractiveNode):
            roots = [roots]
        return [n for root in roots for n in root.walk() if isinstance(n, node_type)]
    return _collect
