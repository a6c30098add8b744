"""
Command-line interface for dify-dsl.

Usage:
    dify-dsl validate ./workflow.yml
    dify-dsl format ./workflow.yml -o ./build/workflow.yml --pretty
    dify-dsl inspect ./workflow.yml
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .core.app import App
from .errors import ParseError
from .generator.dify_generator import DifyGenerator
from .parser.dify_parser import DifyParser

logger = logging.getLogger(__name__)


def _load(path: Path) -> Optional[App]:
    try:
        return DifyParser().parse_file(path)
    except ParseError as e:
        print(f"Error: {e}", file=sys.stderr)
        return None


def cmd_validate(args: argparse.Namespace) -> int:
    app = _load(args.input)
    if app is None:
        return 1

    errors = app.workflow.graph.validate()
    for message in errors:
        print(f"Error: {message}", file=sys.stderr)
    if errors:
        return 1

    print(f"{args.input}: OK")
    return 0


def cmd_format(args: argparse.Namespace) -> int:
    app = _load(args.input)
    if app is None:
        return 1

    generator = DifyGenerator(indent=args.indent)
    if args.output:
        try:
            output_file = generator.generate_to_file(app, args.output, pretty=args.pretty)
        except OSError as e:
            print(f"Error writing {args.output}: {e}", file=sys.stderr)
            return 1
        logger.info("Formatted %s -> %s", args.input, output_file)
        return 0

    text = generator.generate_pretty(app) if args.pretty else generator.generate(app)
    sys.stdout.write(text)
    return 0


def cmd_inspect(args: argparse.Namespace) -> int:
    app = _load(args.input)
    if app is None:
        return 1

    graph = app.workflow.graph
    print(f"Name:    {app.name}")
    print(f"Mode:    {app.mode}")
    print(f"Version: {app.version}")
    print(f"Nodes:   {len(graph.nodes)}")
    print(f"Edges:   {len(graph.edges)}")
    try:
        order = graph.topological_order()
    except ValueError as e:
        print(f"Order:   {e}")
        return 1

    print("Order:")
    for node_id in order:
        node = graph.get_node(node_id)
        print(f"  {node_id} ({node.node_type}) {node.title}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entrypoint."""
    parser = argparse.ArgumentParser(
        prog="dify-dsl",
        description="Validate, reformat and inspect Dify workflow DSL files.",
        epilog="Example: dify-dsl format ./workflow.yml --pretty",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    validate = subparsers.add_parser("validate", help="Parse a file and check graph integrity")
    validate.add_argument("input", type=Path, help="DSL file (.yml)")
    validate.set_defaults(func=cmd_validate)

    fmt = subparsers.add_parser("format", help="Parse a file and emit it again")
    fmt.add_argument("input", type=Path, help="DSL file (.yml)")
    fmt.add_argument("-o", "--output", type=Path, help="Output file (default: stdout)")
    fmt.add_argument("--pretty", action="store_true", help="Use literal blocks and ~ for nulls")
    fmt.add_argument("--indent", type=int, default=2, help="Indent size (default: 2)")
    fmt.set_defaults(func=cmd_format)

    inspect = subparsers.add_parser("inspect", help="Summarize a file and print its node order")
    inspect.add_argument("input", type=Path, help="DSL file (.yml)")
    inspect.set_defaults(func=cmd_inspect)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
