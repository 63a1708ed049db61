"""
Command-line interface for react-lint.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from . import __version__
from .config import Config
from .detector import ReactLintDetector
from .rules import RULES

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_FINDINGS = 2


def main(argv: Optional[list] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 when clean, 1 on error, 2 when findings exist)
    """
    parser = argparse.ArgumentParser(
        prog="react-lint",
        description="Find missing keys, unsafe target=\"_blank\" links and other JSX defects",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s analyze src/App.jsx
  %(prog)s analyze src/ -o results.json
  %(prog)s analyze src/ --fix -c .reactlintrc.json
  %(prog)s rules
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Lint local JSX/HTML files",
    )
    analyze_parser.add_argument(
        "path",
        type=str,
        help="Path to a file or directory to lint",
    )
    analyze_parser.add_argument(
        "-o", "--output",
        type=str,
        help="Output file for results (default: stdout)",
        default=None,
    )
    analyze_parser.add_argument(
        "-c", "--config",
        type=str,
        help="JSON config file (default: $REACT_LINT_CONFIG or .reactlintrc.json)",
        default=None,
    )
    analyze_parser.add_argument(
        "--fix",
        action="store_true",
        help="Write automatic fixes back to JavaScript files",
    )
    analyze_parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    subparsers.add_parser(
        "rules",
        help="List available rules and their messages",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    args = parser.parse_args(argv)

    if args.command == "analyze":
        return handle_analyze(args)
    elif args.command == "rules":
        return handle_rules(args)
    else:
        parser.print_help()
        return EXIT_ERROR


def handle_analyze(args) -> int:
    """Handle the analyze command."""
    input_path = Path(args.path)
    if not input_path.exists():
        print(f"Error: Path '{args.path}' does not exist", file=sys.stderr)
        return EXIT_ERROR

    try:
        config = Config(Path(args.config) if args.config else None)
        detector = ReactLintDetector(config=config, verbose=args.verbose)
        results = detector.analyze(input_path, fix=args.fix)

        if args.output:
            detector.save_results(results, Path(args.output))
            print(f"Results saved to {args.output}")
        else:
            detector.print_results(results)

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc()
        return EXIT_ERROR

    file_results = results.get("files", [results])
    if any("error" in r for r in file_results):
        return EXIT_ERROR
    total = results.get("total_findings", results.get("finding_count", 0))
    return EXIT_FINDINGS if total else EXIT_OK


def handle_rules(args) -> int:
    """Handle the rules command."""
    for rule_id, rule in RULES.items():
        fixable = " (fixable)" if rule.fixable else ""
        print(f"{rule_id}{fixable}: {rule.description}")
        for message_id in rule.messages:
            print(f"    {message_id}")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
