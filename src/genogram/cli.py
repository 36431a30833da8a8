"""
Command-line entry point.

    genogram layout family.json -o layout.json --png family.png
    genogram validate family.json
    genogram generate "My mother lives alone..." --file sheet.pdf -o family.json
    genogram import-gedcom tree.ged --self I1 -o family.json
    genogram store save|list|load|delete ...
"""

import argparse
import json
import logging
from pathlib import Path
import sys

from genogram.config import AppConfig
from genogram.database import DocumentStore
from genogram.errors import GenogramError
from genogram.gedcom import load_gedcom_document
from genogram.generation import GeminiGenerator
from genogram.layout import layout_document
from genogram.parsing import load_document, parse_document
from genogram.plotting import plot_layout, to_dot
from genogram.validation import validate_document


def write_json(data, output: Path | None):
    text = json.dumps(data, ensure_ascii=False, indent=2)
    if output:
        output.write_text(text + "\n", encoding="utf-8")
        print(f"Written to {output}")
    else:
        print(text)


def print_warnings(warnings: list[str]):
    if warnings:
        print(f"  Found {len(warnings)} warnings:")
        for w in warnings[:10]:  # Show first 10 warnings
            print(f"    - {w}")
        if len(warnings) > 10:
            print(f"    ... and {len(warnings) - 10} more")
    else:
        print("  No issues found")


def cmd_layout(args, config: AppConfig) -> int:
    print(f"Laying out: {args.input}", file=sys.stderr)
    result = layout_document(load_document(args.input))
    print(
        f"  {len(result.nodes)} nodes, {len(result.edges)} edges, "
        f"{len(result.diagnostics)} diagnostics",
        file=sys.stderr,
    )
    for d in result.diagnostics:
        print(f"    - {type(d).__name__}: {d.message}", file=sys.stderr)

    write_json(result.to_dict(), args.output)
    if args.png:
        plot_layout(result, args.png)
        print(f"Plot saved to {args.png}", file=sys.stderr)
    if args.dot:
        args.dot.write_text(to_dot(result).to_string(), encoding="utf-8")
        print(f"DOT saved to {args.dot}", file=sys.stderr)
    return 0


def cmd_validate(args, config: AppConfig) -> int:
    print(f"Validating: {args.input}")
    members, unions = parse_document(load_document(args.input))
    warnings = validate_document(members, unions)
    print_warnings(warnings)
    return 1 if warnings else 0


def cmd_generate(args, config: AppConfig) -> int:
    doc = GeminiGenerator(config).generate(args.text or "", args.file or [])
    write_json(doc, args.output)
    return 0


def cmd_import_gedcom(args, config: AppConfig) -> int:
    doc = load_gedcom_document(args.gedcom, self_ref=args.self_ref)
    print(
        f"Imported {len(doc['members'])} members and {len(doc['marriages'])} marriages",
        file=sys.stderr,
    )
    write_json(doc, args.output)
    return 0


def cmd_store(args, config: AppConfig) -> int:
    store = DocumentStore(config.db_path, namespace=args.namespace)
    store.initialize()

    if args.action == "save":
        store.save(args.name, load_document(args.input))
        print(f"Saved {args.name}")
    elif args.action == "list":
        for name in store.list():
            print(name)
    elif args.action == "load":
        write_json(store.load(args.name), args.output)
    elif args.action == "delete":
        store.delete(args.name)
        print(f"Deleted {args.name}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="genogram", description="Genogram layout tools.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    parser.add_argument("--env-file", type=Path, default=None, help="Path to a .env file.")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("layout", help="Compute node positions and edges for a document.")
    p.add_argument("input", type=Path)
    p.add_argument("-o", "--output", type=Path, default=None)
    p.add_argument("--png", type=Path, default=None, help="Also draw the layout to an image.")
    p.add_argument("--dot", type=Path, default=None, help="Also write a Graphviz DOT file.")
    p.set_defaults(func=cmd_layout)

    p = sub.add_parser("validate", help="Report consistency problems in a document.")
    p.add_argument("input", type=Path)
    p.set_defaults(func=cmd_validate)

    p = sub.add_parser("generate", help="Create a document from free text with Gemini.")
    p.add_argument("text", nargs="?", default="")
    p.add_argument("--file", type=Path, action="append", help="Attachment (image, PDF, audio).")
    p.add_argument("-o", "--output", type=Path, default=None)
    p.set_defaults(func=cmd_generate)

    p = sub.add_parser("import-gedcom", help="Convert a GEDCOM file into a document.")
    p.add_argument("gedcom", type=Path)
    p.add_argument("--self", dest="self_ref", default=None, help="xref of the care recipient.")
    p.add_argument("-o", "--output", type=Path, default=None)
    p.set_defaults(func=cmd_import_gedcom)

    p = sub.add_parser("store", help="Manage saved documents.")
    p.add_argument("--namespace", default="genogram")
    store_sub = p.add_subparsers(dest="action", required=True)
    s = store_sub.add_parser("save")
    s.add_argument("name")
    s.add_argument("input", type=Path)
    store_sub.add_parser("list")
    s = store_sub.add_parser("load")
    s.add_argument("name")
    s.add_argument("-o", "--output", type=Path, default=None)
    s = store_sub.add_parser("delete")
    s.add_argument("name")
    p.set_defaults(func=cmd_store)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    config = AppConfig.from_env(args.env_file)

    try:
        return args.func(args, config)
    except GenogramError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
