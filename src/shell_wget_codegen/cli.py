"""Command-line front end for generating wget snippets."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from shell_wget_codegen.codegen import generate_snippet, get_options
from shell_wget_codegen.exceptions import ShellWgetError
from shell_wget_codegen.options import ConversionOptions


def _load_request(source: str) -> Any:
    if source == "-":
        return json.loads(sys.stdin.read())
    return json.loads(Path(source).read_text())


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shell-wget-codegen",
        description="Render a JSON request description as a wget command.",
    )
    parser.add_argument("request", nargs="?", help="Path to a request JSON file, or '-' for stdin")
    parser.add_argument("--list-options", action="store_true", help="Print supported options as JSON")
    parser.add_argument("--indent-type", choices=("space", "tab"), default="space")
    parser.add_argument("--indent-count", type=int, default=None)
    parser.add_argument("--request-timeout", type=int, default=0, help="Timeout in milliseconds")
    parser.add_argument("--no-follow-redirect", dest="follow_redirect", action="store_false")
    parser.add_argument("--trim-body", action="store_true")
    parser.add_argument("--verbose", action="store_true")
    return parser


def _main() -> int:
    parser = _build_parser()
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.list_options:
        print(json.dumps([descriptor.to_dict() for descriptor in get_options()], indent=2))
        return 0

    if args.request is None:
        parser.print_usage(sys.stderr)
        print("A request file is required", file=sys.stderr)
        return 2

    try:
        payload = _load_request(args.request)
    except (OSError, ValueError) as exc:
        print(f"Could not read request description: {exc}", file=sys.stderr)
        return 1

    options = ConversionOptions(
        indent_type=args.indent_type,
        indent_count=args.indent_count,
        request_timeout=args.request_timeout,
        follow_redirect=args.follow_redirect,
        request_body_trim=args.trim_body,
    )
    try:
        snippet = generate_snippet(payload, options)
    except ShellWgetError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    print(snippet)
    return 0


def main() -> None:
    raise SystemExit(_main())
