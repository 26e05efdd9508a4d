"""
Plugin options for the ArchieML transformer.

Options can be given as a PluginOptions instance, as a plain mapping
(using either the host's camelCase keys or snake_case keys), or loaded
from a JSON file.
"""

import json
import re
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Callable, Optional, Union

from .markdown import DEFAULT_MARKDOWN_KEY_REGEX as _MARKDOWN_KEY_PATTERN

DEFAULT_FILENAME_REGEX = r"\.aml$"
DEFAULT_MARKDOWN_KEY_REGEX = _MARKDOWN_KEY_PATTERN.pattern
DEFAULT_NODE_KEY = "object"


class OptionsError(Exception):
    """Raised when plugin options are invalid."""
    pass


# Host-style option names mapped to field names
OPTION_ALIASES = {
    "typeName": "type_name",
    "filenameRegex": "filename_regex",
    "gatsbyKey": "node_key",
    "nodeKey": "node_key",
    "serialized": "serialized",
    "markdownKeyRegex": "markdown_key_regex",
    "markdownOptions": "markdown_options",
}


@dataclass
class PluginOptions:
    """
    Options controlling which files become ArchieML nodes and how they are built.

    type_name: None for "<dir>ArchieML", a fixed string, or a callable
        taking (node, obj) and returning the type name
    filename_regex: files (matched on base name) that get read as ArchieML
    node_key: key under which the document is stored on the output node
    serialized: store the document as a JSON string rather than a mapping
    markdown_key_regex: keys whose values are rendered from Markdown
    markdown_options: markdown-it renderer options
    """
    type_name: Union[str, Callable, None] = None
    filename_regex: Union[str, re.Pattern] = DEFAULT_FILENAME_REGEX
    node_key: str = DEFAULT_NODE_KEY
    serialized: bool = True
    markdown_key_regex: Union[str, re.Pattern] = DEFAULT_MARKDOWN_KEY_REGEX
    markdown_options: dict = field(default_factory=dict)

    def __post_init__(self):
        self.filename_regex = _compile("filename_regex", self.filename_regex, DEFAULT_FILENAME_REGEX)
        self.markdown_key_regex = _compile("markdown_key_regex", self.markdown_key_regex, DEFAULT_MARKDOWN_KEY_REGEX)

        if self.type_name is not None and not isinstance(self.type_name, str) and not callable(self.type_name):
            raise OptionsError(f"type_name must be a string or a callable, got {type(self.type_name).__name__}")
        if not isinstance(self.node_key, str) or not self.node_key:
            raise OptionsError(f"node_key must be a non-empty string, got {self.node_key!r}")
        if self.markdown_options is None:
            self.markdown_options = {}
        if not isinstance(self.markdown_options, Mapping):
            raise OptionsError(
                f"markdown_options must be a mapping, got {type(self.markdown_options).__name__}"
            )
        self.markdown_options = dict(self.markdown_options)
        self.serialized = bool(self.serialized)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "PluginOptions":
        """
        Build options from a mapping.

        Accepts the host's camelCase names (typeName, filenameRegex,
        gatsbyKey, serialized, markdownKeyRegex, markdownOptions) as well
        as the field names. None values fall back to the defaults.

        Raises:
            OptionsError: On unknown option names or invalid values.
        """
        if data is None:
            return cls()
        if isinstance(data, PluginOptions):
            return data
        if not isinstance(data, Mapping):
            raise OptionsError(f"Options must be a mapping, got {type(data).__name__}")

        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            name = OPTION_ALIASES.get(key, key)
            if name not in known:
                raise OptionsError(f"Unknown option: {key}")
            if value is not None:
                kwargs[name] = value
        return cls(**kwargs)

    def resolve_type(self, node: Any, obj: Any) -> str:
        """Return the node type for a parsed document."""
        if callable(self.type_name):
            return self.type_name(node, obj)
        if isinstance(self.type_name, str):
            return self.type_name
        return f"{Path(node.dir).name}ArchieML"


def load_options(path: Union[Path, str]) -> PluginOptions:
    """
    Load plugin options from a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist.
        OptionsError: If the file is not a JSON object or holds invalid options.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Options file not found: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise OptionsError(f"Invalid JSON in options file {path}: {e}")

    if not isinstance(data, dict):
        raise OptionsError(f"Options file must contain a JSON object: {path}")
    return PluginOptions.from_dict(data)


def _compile(name: str, value: Union[str, re.Pattern, None], default: str) -> re.Pattern:
    if value is None:
        value = default
    if isinstance(value, str):
        try:
            return re.compile(value)
        except re.error as e:
            raise OptionsError(f"{name} is not a valid regular expression: {value!r} ({e})")
    if isinstance(value, re.Pattern):
        return value
    raise OptionsError(f"{name} must be a string or compiled pattern, got {type(value).__name__}")
