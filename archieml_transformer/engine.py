"""
ArchieML Transformer Engine

Runs the node-creation hook outside of a site build: reads ArchieML
files (or whole directories of them) from disk, creates their nodes,
and optionally saves each node as JSON.
"""

import json
import os
from pathlib import Path
from typing import Optional

from .nodes import InMemoryActions, SourceNode
from .options import PluginOptions
from .plugin import OptionsLike, on_create_node, should_on_create_node


class ArchieMLEngine:
    """
    Local host for the ArchieML transformer.

    Accepts a file or directory path and produces the node records the
    plugin would hand to a site build.
    """

    def __init__(self, options: OptionsLike = None, output_dir: str = None):
        self.options = PluginOptions.from_dict(options)
        self.output_dir = output_dir or os.path.join(os.getcwd(), "archieml_output")
        self.actions = InMemoryActions()

    def convert(self, source: str, save: bool = True) -> list[dict]:
        """
        Convert a file or directory to ArchieML nodes.

        Args:
            source: File or directory path
            save: If True, write each node to a .json file

        Returns:
            The created nodes
        """
        source = source.strip()

        if os.path.isdir(source):
            print(f"[DIR] Converting all ArchieML files in: {source}")
            return self.convert_directory(source, save=save)

        if not os.path.isfile(source):
            raise ValueError(
                f"Cannot handle source: {source}\n"
                f"Provide a valid file or directory path."
            )

        node = SourceNode.from_path(source)
        if not should_on_create_node(node, self.options):
            raise ValueError(
                f"Not an ArchieML file: {source} "
                f"(expected a name matching {self.options.filename_regex.pattern})"
            )

        output = self._convert_node(node)
        if save:
            self._save(node, output)
        return [output]

    def convert_directory(self, dir_path: str, save: bool = True) -> list[dict]:
        """Convert all matching files in a directory."""
        results = []

        for filename in sorted(os.listdir(dir_path)):
            file_path = os.path.join(dir_path, filename)
            if not os.path.isfile(file_path):
                continue

            node = SourceNode.from_path(file_path)
            if not should_on_create_node(node, self.options):
                continue

            try:
                output = self._convert_node(node)
                if save:
                    self._save(node, output)
                results.append(output)
            except Exception as e:
                print(f"[ERROR] Failed to convert {filename}: {e}")

        print(f"[DIR] {len(results)} file(s) converted in {dir_path}")
        return results

    def _convert_node(self, node: SourceNode) -> dict:
        print(f"[AML] Converting: {node.absolute_path}")
        return on_create_node(
            node,
            self.actions,
            SourceNode.read_content,
            self.options,
        )

    def _save(self, node: SourceNode, output: dict) -> str:
        os.makedirs(self.output_dir, exist_ok=True)
        out_path = os.path.join(self.output_dir, _node_to_json_name(node))
        with open(out_path, "w", encoding="utf-8") as f:
            json.dump(output, f, indent=2, ensure_ascii=False)
            f.write("\n")
        print(f"[SAVED] {out_path}")
        return out_path


def node_to_json(output: dict, indent: Optional[int] = 2) -> str:
    """Render a created node as JSON text."""
    return json.dumps(output, indent=indent, ensure_ascii=False)


def _node_to_json_name(node: SourceNode) -> str:
    """Generate a .json filename from the source file name."""
    name = Path(node.base).stem
    # Sanitize filename
    safe_name = "".join(c if c.isalnum() or c in "-_ " else "_" for c in name)
    return f"{safe_name}.json"
