"""
Markdown Field Transformer

Walks a parsed ArchieML document and renders Markdown fields to HTML.
Which fields get rendered is decided by a key-name pattern: matching
string values are rendered directly, and matching freeform arrays have
their ``text`` entries (or entries whose type matches the pattern)
rendered in place.

Rendering is not idempotent. Running the transformer twice over the same
document renders the already-produced HTML as Markdown again.
"""

import re
from collections.abc import Mapping, MutableMapping
from typing import Any, Callable, Optional, Union

from markdown_it import MarkdownIt

DEFAULT_MARKDOWN_KEY_REGEX = re.compile(r"markdown")
TEXT_ENTRY_TYPE = "text"

# Rule names switched on when GFM mode is active (the default).
# Bare URLs are not autolinked; pass linkify=True with linkify-it-py installed for that.
GFM_RULES = ["table", "strikethrough"]


class MarkdownRenderer:
    """
    Renders Markdown source to HTML using markdown-it.

    Options:
        preset: markdown-it preset name (default: "commonmark")
        gfm: enable GitHub-flavoured tables and strikethrough (default: True)
        enable / disable: extra rule names to switch on or off
        anything else: passed to markdown-it as option updates
            (html, breaks, linkify, typographer, xhtmlOut, ...)
    """

    DEFAULT_PRESET = "commonmark"

    def __init__(self, options: Optional[Mapping] = None):
        options = dict(options or {})
        preset = options.pop("preset", self.DEFAULT_PRESET)
        gfm = options.pop("gfm", True)
        enable = _rule_names(options.pop("enable", None))
        disable = _rule_names(options.pop("disable", None))

        self.options = options
        self._md = MarkdownIt(preset, options)

        if gfm:
            enable = GFM_RULES + enable
        if enable:
            self._md.enable(enable)
        if disable:
            self._md.disable(disable)

    def render(self, text: str) -> str:
        return self._md.render(text)

    __call__ = render


def _rule_names(value: Union[str, list, None]) -> list:
    """Accept a single rule name or a list of them, as markdown-it does."""
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


def render_markdown(text: str, options: Optional[Mapping] = None) -> str:
    """Render a single Markdown string to HTML."""
    return MarkdownRenderer(options).render(text)


def compile_key_regex(pattern: Union[str, re.Pattern, None]) -> re.Pattern:
    """Normalize a key pattern (string, compiled pattern or None) to a compiled pattern."""
    if pattern is None:
        return DEFAULT_MARKDOWN_KEY_REGEX
    if isinstance(pattern, str):
        return re.compile(pattern)
    return pattern


def transform_fields(
    obj: Any,
    name_pattern: Union[str, re.Pattern, None],
    render: Callable[[str], str],
) -> Any:
    """
    Recursively render the Markdown fields of a document, in place.

    For every key of a mapping that matches ``name_pattern``:
      - a string value is replaced by ``render(value)``
      - a list value has each ``{type, value}`` entry whose type is
        ``"text"`` or matches ``name_pattern`` rendered in its ``value``

    Nested mappings are always walked, whether or not their key matched,
    and so are the mapping elements of lists. Any other value is left
    untouched. Exceptions raised by ``render`` propagate to the caller.

    Args:
        obj: The parsed document (mapping, list or scalar)
        name_pattern: Pattern deciding which keys hold Markdown
        render: Markdown-to-HTML function

    Returns:
        The same object, with matching fields rendered
    """
    pattern = compile_key_regex(name_pattern)
    _walk(obj, pattern, render)
    return obj


def handle_markdown(
    obj: Any,
    markdown_key_regex: Union[str, re.Pattern, None] = None,
    markdown_options: Optional[Mapping] = None,
) -> Any:
    """Render the Markdown fields of ``obj`` with a markdown-it renderer built from the options."""
    renderer = MarkdownRenderer(markdown_options)
    return transform_fields(obj, markdown_key_regex, renderer.render)


def _walk(obj: Any, pattern: re.Pattern, render: Callable[[str], str]) -> None:
    if isinstance(obj, MutableMapping):
        for key in list(obj.keys()):
            if isinstance(key, str) and pattern.search(key):
                value = obj[key]
                if isinstance(value, str):
                    obj[key] = render(value)
                elif isinstance(value, list):
                    _render_tagged_entries(value, pattern, render)

            value = obj[key]
            if isinstance(value, (Mapping, list)):
                _walk(value, pattern, render)

    elif isinstance(obj, list):
        for item in obj:
            if isinstance(item, (Mapping, list)):
                _walk(item, pattern, render)


def _render_tagged_entries(entries: list, pattern: re.Pattern, render: Callable[[str], str]) -> None:
    """Render the ``value`` of freeform-array entries tagged as text."""
    for entry in entries:
        if not isinstance(entry, MutableMapping):
            continue
        entry_type = entry.get("type")
        if not entry_type:
            continue
        if entry_type == TEXT_ENTRY_TYPE or (isinstance(entry_type, str) and pattern.search(entry_type)):
            value = entry.get("value")
            # Nested freeform objects ({type, value: {...}}) are walked instead
            if isinstance(value, str):
                entry["value"] = render(value)
