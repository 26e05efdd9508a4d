"""
ArchieML node-creation hook.

Reads ArchieML files as a content source for a site build, renders
their Markdown fields to HTML, and registers the result as a child node
of the source file.

Because the host assumes every node of a type shares one schema, the
document is stored as a JSON string by default (``serialized``), which
keeps ArchieML's free-form structure usable.
"""

import json
from typing import Any, Callable, Mapping, Optional, Union

import archieml

from .markdown import handle_markdown
from .nodes import NodeActions, SourceNode
from .nodes import create_content_digest as default_content_digest
from .nodes import create_node_id as default_node_id
from .options import PluginOptions

OptionsLike = Union[PluginOptions, Mapping[str, Any], None]


def should_on_create_node(node: SourceNode, options: OptionsLike = None) -> bool:
    """Return True if ``node`` is a file that should become an ArchieML node."""
    options = PluginOptions.from_dict(options)
    return bool(options.filename_regex.search(node.base))


def parse_document(content: str, options: OptionsLike = None) -> dict:
    """Parse ArchieML content and render its Markdown fields."""
    options = PluginOptions.from_dict(options)
    return handle_markdown(
        archieml.loads(content),
        options.markdown_key_regex,
        options.markdown_options,
    )


def serialize_document(obj: Any) -> str:
    """Compact JSON encoding of a parsed document."""
    return json.dumps(obj, separators=(",", ":"), ensure_ascii=False)


def on_create_node(
    node: SourceNode,
    actions: NodeActions,
    load_node_content: Callable[[SourceNode], str],
    options: OptionsLike = None,
    create_node_id: Callable[[str], str] = default_node_id,
    create_content_digest: Callable[[Any], str] = default_content_digest,
) -> Optional[dict]:
    """
    Create the ArchieML node for a source file node.

    Nodes rejected by ``should_on_create_node`` are ignored. Otherwise the
    content is loaded and parsed, its Markdown fields are rendered, and the
    output node is created and linked to ``node`` as its child. Loader,
    parser and renderer errors propagate.

    Args:
        node: The source file node
        actions: Host actions used to register the new node
        load_node_content: Returns the raw text of ``node``
        options: PluginOptions or an options mapping
        create_node_id: Host id generator
        create_content_digest: Host digest function

    Returns:
        The created node, or None if the file was not an ArchieML file
    """
    options = PluginOptions.from_dict(options)
    if not should_on_create_node(node, options):
        return None

    obj = parse_document(load_node_content(node), options)
    node_type = options.resolve_type(node, obj)
    payload = serialize_document(obj) if options.serialized else obj

    output = {
        options.node_key: payload,
        "id": create_node_id(f"{node.id} >>> ArchieML"),
        "internal": {
            "contentDigest": create_content_digest(payload),
            "type": node_type,
        },
    }

    actions.create_node(output)
    actions.create_parent_child_link(parent=node, child=output)
    return output
