"""
Command-line interface for equalsguard

Analyses Java expressions for hand-written null-safe equality checks and
shows their ``Objects.equals`` replacement.
"""

import argparse
import json
import logging
import sys
import traceback
from typing import Any, List, Optional, TextIO

from equalsguard import __version__
from equalsguard.cli.commands import cmd_check, cmd_config
from equalsguard.cli.rich_output import set_rich_enabled
from equalsguard.config import OUTPUT_FORMATS, load_config


def _is_machine_readable(args: Any) -> bool:
    return bool(getattr(args, "machine_readable", False))


def _json_stdout(args: Any) -> TextIO:
    """
    When --machine-readable is enabled, main() redirects sys.stdout -> sys.stderr
    to prevent accidental non-JSON output. This function returns the original stdout.
    """
    return getattr(args, "_json_stdout", sys.__stdout__)


def _print_json_to_stdout(args: Any, payload: Any) -> None:
    """
    Always print JSON to the original stdout in machine-readable mode.
    """
    s = json.dumps(payload, indent=2, ensure_ascii=False, default=str)
    print(s, file=_json_stdout(args))


def _maybe_print_output(args: Any, output_text_or_json: str) -> None:
    """
    Print final command output:
    - in normal mode: print to sys.stdout
    - in machine-readable mode: print to original stdout (args._json_stdout)
    """
    if _is_machine_readable(args):
        print(output_text_or_json, file=_json_stdout(args))
    else:
        print(output_text_or_json)


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="equalsguard",
        description="equalsguard - find equality checks replaceable by Objects.equals",
        epilog='Use "equalsguard <command> --help" for detailed command help.',
    )

    # Global options
    parser.add_argument("--config", "-c", type=str, help="Path to configuration file")

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output and debug logging",
    )

    parser.add_argument(
        "--no-rich",
        action="store_true",
        help="Disable rich terminal output (use plain text)",
    )

    parser.add_argument(
        "--machine-readable",
        action="store_true",
        help="Output in machine-readable format (JSON)",
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Check command
    check_parser = subparsers.add_parser(
        "check", help="Check Java expressions for replaceable equality checks"
    )
    check_parser.add_argument("expressions", nargs="*", help="Java expressions to check")
    check_parser.add_argument(
        "--file", "-f", help="Read expressions from a file, one per line"
    )
    check_parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default=None,
        help="Output format (default: from configuration)",
    )
    check_parser.add_argument(
        "--fix", action="store_true", help="Show the rewritten expression for each finding"
    )
    check_parser.add_argument(
        "--require-null-guard",
        action="store_true",
        help="Only report equals() calls that are guarded by a null check",
    )
    check_parser.add_argument(
        "--language-level", type=int, default=None, help="Java language level of the code"
    )
    check_parser.add_argument(
        "--variable",
        action="append",
        metavar="NAME",
        help="Declare a variable name (switches to scope resolution)",
    )
    check_parser.add_argument(
        "--class",
        dest="class_names",
        action="append",
        metavar="NAME",
        help="Declare a class name (switches to scope resolution)",
    )

    # Config command
    config_parser = subparsers.add_parser("config", help="Configuration management")
    config_subparsers = config_parser.add_subparsers(dest="config_action", help="Config actions")

    config_subparsers.add_parser("show", help="Show current configuration")

    init_parser = config_subparsers.add_parser("init", help="Create default configuration file")
    init_parser.add_argument(
        "--path", default="equalsguard.json", help="Path for the configuration file"
    )
    init_parser.add_argument(
        "--format", choices=["json", "yaml"], default="json", help="Configuration file format"
    )

    validate_parser = config_subparsers.add_parser("validate", help="Validate configuration file")
    validate_parser.add_argument("config_file", help="Configuration file to validate")

    return parser


def run(argv: Optional[List[str]] = None) -> int:
    """Parse ``argv``, run the selected command and return its exit status."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    # In machine-readable mode stdout carries JSON only.
    original_stdout = sys.stdout
    if _is_machine_readable(args):
        args._json_stdout = sys.stdout
        sys.stdout = sys.stderr

    try:
        setup_logging(getattr(args, "verbose", False))

        use_rich = not getattr(args, "no_rich", False) and not _is_machine_readable(args)
        set_rich_enabled(use_rich)

        if args.command == "config":
            return cmd_config(args)

        config = load_config(getattr(args, "config", None))
        if not use_rich:
            config.output_settings.use_rich = False
        elif not config.output_settings.use_rich:
            set_rich_enabled(False)

        if args.command == "check":
            return cmd_check(args, config)

        parser.print_help()
        return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        return 1
    except Exception as e:
        if _is_machine_readable(args):
            _print_json_to_stdout(args, {"success": False, "error": str(e), "error_type": type(e).__name__})
        else:
            print(f"Error: {e}", file=sys.stderr)
        if getattr(args, "verbose", False):
            traceback.print_exc()
        return 1
    finally:
        sys.stdout = original_stdout


def main() -> None:
    """Main CLI entry point."""
    sys.exit(run())


if __name__ == "__main__":
    main()
