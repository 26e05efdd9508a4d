"""
ArchieML & Markdown Transformer

Uses ArchieML files as a content source for a static site build. Markdown
fields inside the documents are rendered to HTML, and each file becomes a
node the build can query.
"""

__version__ = "1.0.0"

from .markdown import MarkdownRenderer, handle_markdown, render_markdown, transform_fields
from .nodes import InMemoryActions, NodeActions, SourceNode, create_content_digest, create_node_id
from .options import OptionsError, PluginOptions, load_options
from .plugin import on_create_node, parse_document, should_on_create_node

__all__ = [
    "MarkdownRenderer",
    "handle_markdown",
    "render_markdown",
    "transform_fields",
    "InMemoryActions",
    "NodeActions",
    "SourceNode",
    "create_content_digest",
    "create_node_id",
    "OptionsError",
    "PluginOptions",
    "load_options",
    "on_create_node",
    "parse_document",
    "should_on_create_node",
]
