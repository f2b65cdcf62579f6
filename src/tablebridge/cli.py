"""Command-line interface for tablebridge."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .version import __version__


def _get_usage() -> str:
    return (
        f"tablebridge {__version__}\n"
        "Usage:\n"
        "  tablebridge [--help] [--version|--ver]\n"
        "  tablebridge --to-html|--to-markdown [--input PATH] [--output PATH] [options]\n\n"
        "Options:\n"
        "  --to-html                    Convert a Markdown pipe table to an HTML table\n"
        "  --to-markdown                Convert the first HTML table to a Markdown pipe table\n"
        "  --input PATH                 Read input from PATH (default: stdin)\n"
        "  --output PATH                Write output to PATH (default: stdout)\n"
        "  --verbose                    Verbose progress logs\n"
        "  --debug                      Debug logs"
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument("--help", action="store_true")
    parser.add_argument("--version", action="store_true")
    parser.add_argument("--ver", action="store_true")
    parser.add_argument("--to-html", action="store_true", help="Markdown in, HTML out")
    parser.add_argument("--to-markdown", action="store_true", help="HTML in, Markdown out")
    parser.add_argument("--input", help="Input file (default: stdin)")
    parser.add_argument("--output", help="Output file (default: stdout)")
    parser.add_argument("--verbose", action="store_true", help="Verbose progress logs")
    parser.add_argument("--debug", action="store_true", help="Debug logs")
    return parser


def _read_input(value: str | None) -> str:
    if not value or value == "-":
        return sys.stdin.read()
    return Path(value).expanduser().resolve().read_text(encoding="utf-8")


def _write_output(value: str | None, text: str) -> None:
    if not value or value == "-":
        sys.stdout.write(text + "\n")
        return
    Path(value).expanduser().resolve().write_text(text + "\n", encoding="utf-8", newline="\n")


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    parser = _build_parser()
    args, unknown = parser.parse_known_args(argv)
    if unknown:
        print(_get_usage())
        return 2

    if not argv or args.help:
        print(_get_usage())
        return 0

    if args.version or args.ver:
        print(__version__)
        return 0

    from tablebridge import core

    if args.to_html and args.to_markdown:
        print("Options --to-html and --to-markdown are mutually exclusive", file=sys.stderr)
        return core.EXIT_INVALID_ARGS

    if not args.to_html and not args.to_markdown:
        print(_get_usage())
        print("One of --to-html or --to-markdown is required", file=sys.stderr)
        return core.EXIT_INVALID_ARGS

    core.setup_logging(args.verbose, args.debug)

    if args.input and args.input != "-":
        input_path = Path(args.input).expanduser().resolve()
        if not input_path.exists() or not input_path.is_file():
            print(f"Input file not found: {input_path}", file=sys.stderr)
            return core.EXIT_INVALID_ARGS

    if args.output and args.output != "-":
        output_path = Path(args.output).expanduser().resolve()
        if output_path.is_dir():
            print(f"Output path is a directory: {output_path}", file=sys.stderr)
            return core.EXIT_OUTPUT

    try:
        source = _read_input(args.input)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Unable to read input: {exc}", file=sys.stderr)
        return core.EXIT_INVALID_ARGS

    if args.to_html:
        core.LOG.info("Converting Markdown table to HTML")
        output = core.markdown_to_html(source)
        if output is None:
            print("Could not parse a valid Markdown table from input.", file=sys.stderr)
            return core.EXIT_NO_TABLE
    else:
        core.LOG.info("Converting HTML table to Markdown")
        result = core.html_to_markdown(source)
        if result is None:
            print("No table found in HTML input.", file=sys.stderr)
            return core.EXIT_NO_TABLE
        for warning in result.warnings:
            core.LOG.warning(warning)
        output = result.markdown

    try:
        _write_output(args.output, output)
    except OSError as exc:
        print(f"Unable to write output: {exc}", file=sys.stderr)
        return core.EXIT_OUTPUT

    if args.output and args.output != "-":
        core.LOG.info("Output written to %s", args.output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
