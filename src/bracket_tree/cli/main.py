"""Main CLI entry point for the bracket-tree command-line tool.

Subcommands:
    parse   Parse one input and print its layout
    format  Parse one input and print the round-trip reconstruction
    check   Parse many files and report which ones fail
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from bracket_tree import __version__
from bracket_tree.api import BracketTreeParser, OutputFormat, TreeFormatter
from bracket_tree.samples import DEFAULT_SOURCE
from bracket_tree.shared import (
    ConfigError,
    FormatConfig,
    ParserConfig,
    configure_logging,
    get_logger,
)

EXIT_OK = 0
EXIT_PARSE_FAILED = 1
EXIT_USAGE = 2


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="bracket-tree",
        description="Parse labeled bracket notation and lay out the tree",
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    parser.add_argument("--quiet", "-q", action="store_true", help="Quiet output")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parse_parser = subparsers.add_parser("parse", help="Parse and print the layout")
    _add_input_arguments(parse_parser)
    parse_parser.add_argument(
        "--format", "-f",
        choices=[fmt.value for fmt in OutputFormat],
        default=OutputFormat.OUTLINE.value,
        help="Output format (default: outline)",
    )
    parse_parser.add_argument(
        "--detailed",
        action="store_true",
        help="Include whitespace and source positions in JSON output",
    )

    format_parser = subparsers.add_parser(
        "format", help="Print the source reconstructed from the parsed tree"
    )
    _add_input_arguments(format_parser)

    check_parser = subparsers.add_parser("check", help="Check that files parse")
    check_parser.add_argument("paths", nargs="+", type=Path, help="Files to check")
    _add_config_arguments(check_parser)
    check_parser.add_argument(
        "--json", action="store_true", help="Report results as JSON"
    )

    return parser


def _add_input_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "input",
        nargs="?",
        help="Input file, or '-' for stdin (default: built-in example)",
    )
    _add_config_arguments(parser)


def _add_config_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject categories outside the recognized vocabulary",
    )
    parser.add_argument(
        "--config", "-c", type=Path, help="JSON parser configuration file"
    )


def load_config(args: argparse.Namespace) -> ParserConfig:
    """Build the parser configuration from a config file and flags."""
    config = ParserConfig()
    if args.config is not None:
        config = ParserConfig.from_json(args.config.read_text(encoding="utf-8"))
    if args.strict:
        config = config.override(strict=True)
    return config


def read_input(source: Optional[str]) -> str:
    """Read input text from a file path, stdin or the built-in example."""
    if source is None:
        return DEFAULT_SOURCE
    if source == "-":
        return sys.stdin.read()
    with Path(source).open(encoding="utf-8", newline="") as file:
        return file.read()


def check_files(parser: BracketTreeParser, paths: List[Path]) -> List[Dict[str, Any]]:
    """Parse every file and collect a per-file report."""
    reports = []
    for path in paths:
        report: Dict[str, Any] = {"file": str(path)}
        try:
            text = read_input(str(path))
        except (OSError, UnicodeDecodeError) as e:
            report.update({"success": False, "error": {"message": str(e)}})
            reports.append(report)
            continue
        report.update(parser.try_parse(text).to_dict())
        reports.append(report)
    return reports


def format_check_reports(reports: List[Dict[str, Any]]) -> str:
    """Format check reports as one line per file."""
    lines = []
    for report in reports:
        if report["success"]:
            lines.append(f"{report['file']}: ok ({report['node_count']} nodes)")
            continue
        error = report["error"]
        if "line" in error:
            lines.append(
                f"{report['file']}:{error['line']}:{error['column']}: "
                f"{error['kind']}: {error['message']}"
            )
        else:
            lines.append(f"{report['file']}: {error['message']}")
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    """Run the command-line tool and return the exit status."""
    arg_parser = create_argument_parser()
    args = arg_parser.parse_args(argv)

    if args.command is None:
        arg_parser.print_help()
        return EXIT_USAGE

    try:
        config = load_config(args)
    except (OSError, UnicodeDecodeError, ConfigError) as e:
        print(f"Error: could not load configuration: {e}", file=sys.stderr)
        return EXIT_USAGE

    if args.verbose:
        configure_logging("DEBUG")
    elif args.quiet:
        configure_logging("ERROR")
    else:
        configure_logging(config.logging_level)
    logger = get_logger(__name__, config.correlation_id, "cli")

    parser = BracketTreeParser(config)

    if args.command == "check":
        reports = check_files(parser, args.paths)
        if args.json:
            print(json.dumps(reports, indent=2))
        elif not args.quiet:
            print(format_check_reports(reports))
        failed = sum(1 for report in reports if not report["success"])
        logger.info("Check finished", extra={"files": len(reports), "failed": failed})
        return EXIT_PARSE_FAILED if failed else EXIT_OK

    try:
        text = read_input(args.input)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE

    result = parser.try_parse(text)
    if result.tree is None:
        print(f"Error: {result.error}", file=sys.stderr)
        return EXIT_PARSE_FAILED

    if args.command == "format":
        sys.stdout.write(TreeFormatter().format(result.tree, OutputFormat.TEXT))
        return EXIT_OK

    format_config = FormatConfig.detailed() if args.detailed else FormatConfig()
    formatter = TreeFormatter(format_config, config.correlation_id)
    print(formatter.format(result.tree, OutputFormat(args.format)))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
