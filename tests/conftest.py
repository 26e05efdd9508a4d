"""
Pytest configuration and shared fixtures.
"""

import sys
from pathlib import Path
import pytest

# Add the project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from archieml_transformer.nodes import InMemoryActions
from archieml_transformer.options import PluginOptions
from fixtures.sample_documents import (
    SAMPLE_STORY_AML,
    SAMPLE_PLAIN_AML,
    create_source_node,
    create_story_tree,
)


# ============================================================================
# Pytest Hooks
# ============================================================================


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "integration: mark as integration test")


# ============================================================================
# Base Fixtures
# ============================================================================


@pytest.fixture
def fake_render():
    """A render function that wraps its input, so renders are easy to spot."""
    return lambda text: f"<md>{text}</md>"


@pytest.fixture
def default_options():
    """Plugin options with all defaults."""
    return PluginOptions()


@pytest.fixture
def actions():
    """Actions that record created nodes."""
    return InMemoryActions()


@pytest.fixture
def story_tree():
    """A parsed document with scalar, nested and freeform Markdown fields."""
    return create_story_tree()


@pytest.fixture
def source_node():
    """An ArchieML source node."""
    return create_source_node()


# ============================================================================
# Temporary File Fixtures
# ============================================================================


@pytest.fixture
def temp_story_file(tmp_path):
    """Create a temporary ArchieML story file."""
    file_path = tmp_path / "stories" / "story.aml"
    file_path.parent.mkdir()
    file_path.write_text(SAMPLE_STORY_AML, encoding="utf-8")
    return file_path


@pytest.fixture
def temp_content_dir(tmp_path):
    """Create a directory with ArchieML files and one non-ArchieML file."""
    content_dir = tmp_path / "content"
    content_dir.mkdir()
    (content_dir / "story.aml").write_text(SAMPLE_STORY_AML, encoding="utf-8")
    (content_dir / "plain.aml").write_text(SAMPLE_PLAIN_AML, encoding="utf-8")
    (content_dir / "notes.txt").write_text("markdown: **not ArchieML**", encoding="utf-8")
    return content_dir
