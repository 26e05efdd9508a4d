"""
Host node model.

Minimal stand-ins for the pieces of a site build host the plugin talks
to: source file nodes, the actions used to register new nodes, and the
id and digest helpers.
"""

import hashlib
import json
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union

PLUGIN_NAME = "archieml-transformer"


def create_node_id(seed: str, namespace: str = PLUGIN_NAME) -> str:
    """
    Create a stable node id from a seed string.

    The same seed and namespace always produce the same UUID v5.
    """
    namespace_uuid = uuid.uuid5(uuid.NAMESPACE_URL, namespace)
    return str(uuid.uuid5(namespace_uuid, seed))


def create_content_digest(content: Any) -> str:
    """
    Compute the content digest of a node payload.

    Strings are hashed as-is; any other value is hashed through its
    canonical JSON encoding.
    """
    if not isinstance(content, str):
        content = json.dumps(content, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return hashlib.md5(content.encode("utf-8")).hexdigest()


@dataclass
class SourceNode:
    """A file node as handed to the plugin by the host."""
    id: str
    base: str  # File name including extension
    dir: str  # Parent directory
    absolute_path: str = ""
    internal: dict = field(default_factory=dict)

    def __post_init__(self):
        if not self.id:
            raise ValueError("Node id cannot be empty")

    @classmethod
    def from_path(cls, file_path: Union[Path, str]) -> "SourceNode":
        """Build a node for a local file, with an id derived from its absolute path."""
        path = Path(file_path).resolve()
        return cls(
            id=create_node_id(str(path), namespace="file"),
            base=path.name,
            dir=str(path.parent),
            absolute_path=str(path),
            internal={"type": "File", "mediaType": "text/archieml"},
        )

    def read_content(self) -> str:
        """Read the node's file content."""
        path = Path(self.absolute_path)
        if not path.is_file():
            raise FileNotFoundError(f"Source file not found: {path}")
        return path.read_text(encoding="utf-8")


class NodeActions(ABC):
    """Actions a plugin uses to register nodes with the host."""

    @abstractmethod
    def create_node(self, node: dict) -> None:
        ...

    @abstractmethod
    def create_parent_child_link(self, parent: SourceNode, child: dict) -> None:
        ...


class InMemoryActions(NodeActions):
    """Records created nodes and parent/child links."""

    def __init__(self):
        self.nodes: list[dict] = []
        self.links: list[tuple[str, str]] = []

    def create_node(self, node: dict) -> None:
        if "id" not in node:
            raise ValueError("Cannot create a node without an id")
        self.nodes.append(node)

    def create_parent_child_link(self, parent: SourceNode, child: dict) -> None:
        self.links.append((parent.id, child["id"]))

    def children_of(self, parent: SourceNode) -> list[dict]:
        """Return the nodes linked as children of ``parent``."""
        child_ids = {child_id for parent_id, child_id in self.links if parent_id == parent.id}
        return [node for node in self.nodes if node["id"] in child_ids]
