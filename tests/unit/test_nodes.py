"""
Unit tests for the host node model.
"""

import uuid
import pytest

from archieml_transformer.nodes import (
    InMemoryActions,
    NodeActions,
    SourceNode,
    create_content_digest,
    create_node_id,
)


class TestCreateNodeId:
    """Tests for node id generation."""

    def test_deterministic(self):
        """Test that the same seed gives the same id."""
        assert create_node_id("file-1 >>> ArchieML") == create_node_id("file-1 >>> ArchieML")

    def test_different_seeds(self):
        """Test that different seeds give different ids."""
        assert create_node_id("a") != create_node_id("b")

    def test_namespace_matters(self):
        """Test that the namespace is part of the id."""
        assert create_node_id("a", namespace="one") != create_node_id("a", namespace="two")

    def test_is_uuid(self):
        """Test that ids are valid UUID v5 strings."""
        parsed = uuid.UUID(create_node_id("seed"))
        assert parsed.version == 5


class TestCreateContentDigest:
    """Tests for content digests."""

    def test_string_digest_format(self):
        """Test that the digest is an MD5 hex string."""
        digest = create_content_digest("content")
        assert len(digest) == 32
        assert all(c in "0123456789abcdef" for c in digest)

    def test_string_digest_deterministic(self):
        """Test that equal content gives equal digests."""
        assert create_content_digest("abc") == create_content_digest("abc")
        assert create_content_digest("abc") != create_content_digest("abd")

    def test_object_digest_ignores_key_order(self):
        """Test that mappings are digested canonically."""
        assert create_content_digest({"a": 1, "b": [1, 2]}) == create_content_digest({"b": [1, 2], "a": 1})

    def test_object_and_string_differ(self):
        """Test that an object and its non-canonical JSON text can differ."""
        assert create_content_digest({"a": 1}) != create_content_digest('{"a": 1}')


class TestSourceNode:
    """Tests for SourceNode dataclass."""

    def test_empty_id(self):
        """Test that an empty id raises ValueError."""
        with pytest.raises(ValueError, match="Node id cannot be empty"):
            SourceNode(id="", base="a.aml", dir="/tmp")

    def test_from_path(self, temp_story_file):
        """Test building a node for a local file."""
        node = SourceNode.from_path(temp_story_file)
        assert node.base == "story.aml"
        assert node.dir == str(temp_story_file.parent.resolve())
        assert node.absolute_path == str(temp_story_file.resolve())
        assert node.internal["type"] == "File"

    def test_from_path_stable_id(self, temp_story_file):
        """Test that the same file always gets the same id."""
        assert SourceNode.from_path(temp_story_file).id == SourceNode.from_path(str(temp_story_file)).id

    def test_read_content(self, temp_story_file):
        """Test reading file content."""
        node = SourceNode.from_path(temp_story_file)
        assert "title: A Night at the Museum" in node.read_content()

    def test_read_missing_content(self, tmp_path):
        """Test that reading a missing file raises FileNotFoundError."""
        node = SourceNode.from_path(tmp_path / "gone.aml")
        with pytest.raises(FileNotFoundError, match="Source file not found"):
            node.read_content()


class TestInMemoryActions:
    """Tests for the recording actions."""

    def test_node_actions_is_abstract(self):
        """Test that the base actions class cannot be used directly."""
        with pytest.raises(TypeError):
            NodeActions()

    def test_partial_actions_rejected(self):
        """Test that actions must implement both methods."""
        class OnlyCreates(NodeActions):
            def create_node(self, node):
                pass

        with pytest.raises(TypeError):
            OnlyCreates()

    def test_create_node(self, actions):
        """Test that created nodes are recorded."""
        actions.create_node({"id": "x"})
        assert actions.nodes == [{"id": "x"}]

    def test_create_node_without_id(self, actions):
        """Test that nodes need an id."""
        with pytest.raises(ValueError, match="without an id"):
            actions.create_node({"internal": {}})

    def test_parent_child_links(self, actions, source_node):
        """Test linking and looking up children."""
        child = {"id": "child-1"}
        other = {"id": "other"}
        actions.create_node(child)
        actions.create_node(other)
        actions.create_parent_child_link(parent=source_node, child=child)
        assert actions.links == [("file-1", "child-1")]
        assert actions.children_of(source_node) == [child]
