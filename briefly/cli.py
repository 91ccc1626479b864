"""CLI entrypoints for briefly commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from . import __version__
from .config import ConfigError
from .logging import configure_logging
from .orchestrator import EXPORT_OUTPUT, SUMMARY_DEPTH, Orchestrator
from .scanner import ScanError


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS if suppress_default else False,
        help="Increase log verbosity for troubleshooting.",
    )


def _add_no_ai_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--no-ai",
        dest="use_ai",
        action="store_false",
        help="Skip AI summarization and show structure only.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="briefly",
        description="Generate project and file summaries from structural analysis.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log records to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    summary_parser = subparsers.add_parser(
        "summary",
        help="Generate a high-level summary of a project or directory.",
    )
    _add_verbose_option(summary_parser, suppress_default=True)
    _add_no_ai_option(summary_parser)
    summary_parser.add_argument("path", help="Path to the project root.")
    summary_parser.add_argument(
        "-d",
        "--depth",
        type=int,
        default=None,
        help=f"Max directory depth to scan (defaults to {SUMMARY_DEPTH}).",
    )
    summary_parser.add_argument("-o", "--output", help="Output file for the summary.")

    module_parser = subparsers.add_parser(
        "module",
        help="Generate a detailed summary of a single file.",
    )
    _add_verbose_option(module_parser, suppress_default=True)
    _add_no_ai_option(module_parser)
    module_parser.add_argument("file", help="Path to the source file.")
    module_parser.add_argument("-o", "--output", help="Output file for the summary.")
    module_parser.add_argument(
        "--show-ast",
        dest="show_ast",
        action="store_true",
        help="Include the syntax tree in the output.",
    )

    export_parser = subparsers.add_parser(
        "export",
        help="Export project documentation to Markdown.",
    )
    _add_verbose_option(export_parser, suppress_default=True)
    _add_no_ai_option(export_parser)
    export_parser.add_argument(
        "-p",
        "--path",
        default=".",
        help="Project path to document (defaults to current directory).",
    )
    export_parser.add_argument(
        "-o",
        "--output",
        default=EXPORT_OUTPUT,
        help=f"Output file (defaults to {EXPORT_OUTPUT}).",
    )
    export_parser.add_argument(
        "--include-code",
        dest="include_code",
        action="store_true",
        help="Include source code in the export.",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for briefly commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    orchestrator = Orchestrator()

    try:
        if args.command == "summary":
            outcome = orchestrator.run_summary(
                args.path, depth=args.depth, output=args.output, use_ai=args.use_ai
            )
            print(outcome.text)
            if outcome.output_path is not None:
                print(f"\nSummary saved to {_relativize(outcome.output_path)}")
        elif args.command == "module":
            outcome = orchestrator.run_module(
                args.file, output=args.output, show_tree=args.show_ast, use_ai=args.use_ai
            )
            print(outcome.text)
            if outcome.output_path is not None:
                print(f"\nSummary saved to {_relativize(outcome.output_path)}")
        elif args.command == "export":
            result = orchestrator.run_export(
                args.path,
                output=args.output,
                include_code=args.include_code,
                use_ai=args.use_ai,
            )
            print(f"Documentation exported to {_relativize(result.output_path)}")
            print(f"Documented {result.documented} files with {result.summarized} AI summaries")
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except (ScanError, ConfigError, OSError) as exc:
        parser.exit(1, f"Error: {exc}\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
