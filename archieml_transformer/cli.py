#!/usr/bin/env python3
"""
ArchieML Transformer CLI

Command-line interface for turning ArchieML files into site build nodes.

Usage:
    archieml-transform <source> [options]
    archieml-transform story.aml
    archieml-transform ./content/                 # convert all .aml files in directory
    archieml-transform intro.aml outro.aml        # convert multiple files

Options:
    -o, --output DIR            Output directory (default: ./archieml_output)
    --stdout                    Print nodes to stdout instead of saving files
    --config FILE               JSON file with plugin options
    --type-name NAME            Fixed node type (default: <dir>ArchieML)
    --node-key KEY              Key holding the document (default: object)
    --no-serialize              Store the document as an object, not a JSON string
    --filename-regex REGEX      Files read as ArchieML (default: \\.aml$)
    --markdown-key-regex REGEX  Keys rendered from Markdown (default: markdown)
"""

import argparse
import sys

from .engine import ArchieMLEngine, node_to_json
from .options import OptionsError, PluginOptions, load_options


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="archieml-transform",
        description=(
            "ArchieML & Markdown Transformer\n\n"
            "Reads ArchieML files, renders their Markdown fields to HTML\n"
            "and emits the resulting site build nodes as JSON."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  archieml-transform story.aml\n"
            "  archieml-transform ./content/                        # whole directory\n"
            "  archieml-transform story.aml --stdout                # print to terminal\n"
            "  archieml-transform story.aml --no-serialize --stdout\n"
            "  archieml-transform ./content/ --config options.json -o ./nodes\n"
        ),
    )

    parser.add_argument(
        "sources",
        nargs="*",
        help="ArchieML files or directories to convert",
    )
    parser.add_argument(
        "-o", "--output",
        default=None,
        help="Output directory (default: ./archieml_output)",
    )
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print nodes to stdout instead of saving to files",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="JSON file with plugin options (typeName, filenameRegex, ...)",
    )
    parser.add_argument("--type-name", default=None, help="Fixed node type name")
    parser.add_argument("--node-key", default=None, help="Key holding the document on the node")
    parser.add_argument(
        "--no-serialize",
        dest="serialized",
        action="store_false",
        default=None,
        help="Store the document as an object instead of a JSON string",
    )
    parser.add_argument("--filename-regex", default=None, help="Regex for files read as ArchieML")
    parser.add_argument("--markdown-key-regex", default=None, help="Regex for keys rendered from Markdown")

    return parser


def resolve_options(args: argparse.Namespace) -> PluginOptions:
    """Combine the options file (if any) with command-line overrides."""
    base = load_options(args.config) if args.config else PluginOptions()

    overrides = {
        "type_name": args.type_name,
        "node_key": args.node_key,
        "serialized": args.serialized,
        "filename_regex": args.filename_regex,
        "markdown_key_regex": args.markdown_key_regex,
    }
    merged = {
        "type_name": base.type_name,
        "filename_regex": base.filename_regex,
        "node_key": base.node_key,
        "serialized": base.serialized,
        "markdown_key_regex": base.markdown_key_regex,
        "markdown_options": base.markdown_options,
    }
    merged.update({k: v for k, v in overrides.items() if v is not None})
    return PluginOptions(**merged)


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.sources:
        parser.print_help()
        print("\nError: No sources provided. Specify ArchieML files or directories to convert.")
        return 1

    try:
        options = resolve_options(args)
    except (OptionsError, FileNotFoundError) as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1

    engine = ArchieMLEngine(options=options, output_dir=args.output)
    save = not args.stdout

    success_count = 0
    error_count = 0

    for source in args.sources:
        try:
            nodes = engine.convert(source, save=save)
            if args.stdout:
                for node in nodes:
                    print(node_to_json(node))
            success_count += len(nodes)
        except Exception as e:
            print(f"[ERROR] {source}: {e}", file=sys.stderr)
            error_count += 1

    print()
    print("-" * 60)
    print(f"  Done: {success_count} converted, {error_count} errors")
    if save:
        print(f"  Output: {engine.output_dir}")
    print("-" * 60)

    return 1 if error_count else 0


if __name__ == "__main__":
    sys.exit(main())
