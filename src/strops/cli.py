"""
strops Command-Line Interface.

Runs the string transforms from the shell.

Usage:
    strops split "A|B|C" "|"            # One quoted fragment per line
    strops join "|" A B C               # A|B|C
    strops replace 123 3 34             # 1234
    strops trim "<TEST>" "<>"           # TEST
    strops escape - < data.bin          # Read the input from stdin
    strops quote 'a"b' --width 2       # "a""b"
    strops selftest                     # Run the built-in cases
    strops info                         # Show version and configuration
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from strops import __version__
from strops.config import EmptySeparatorPolicy, StrOpsConfig, load_config
from strops.escape import escape, quote
from strops.replace import replacen
from strops.selftest import run_self_test
from strops.split import join, split
from strops.trim import trim, trim_left, trim_right
from strops.units import CharWidth
from strops.utils.errors import StrOpsError

logger = logging.getLogger(__name__)


# =============================================================================
# ANSI Color Codes for Terminal Output
# =============================================================================


class Colors:
    """ANSI escape codes for colored terminal output."""

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    CYAN = "\033[96m"
    BOLD = "\033[1m"
    RESET = "\033[0m"

    @classmethod
    def disable(cls) -> None:
        """Disable all colors (for non-TTY output)."""
        cls.RED = ""
        cls.GREEN = ""
        cls.YELLOW = ""
        cls.CYAN = ""
        cls.BOLD = ""
        cls.RESET = ""


def _init_colors() -> None:
    """Initialize colors based on terminal capabilities."""
    if not sys.stdout.isatty() or os.environ.get("NO_COLOR"):
        Colors.disable()


_init_colors()


def _width(value: str) -> CharWidth:
    try:
        return CharWidth.parse(value)
    except StrOpsError as e:
        raise argparse.ArgumentTypeError(e.message) from None


def _add_escape_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-w",
        "--width",
        type=_width,
        default=None,
        help="Code-unit width to escape in: 1, 2, 4 or narrow/utf16/utf32 "
        "(default: from configuration)",
    )
    parser.add_argument(
        "--non-ascii",
        action="store_true",
        default=None,
        help="Also escape characters >= 0x7F",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="strops",
        description="strops - split, join, replace, trim, escape and quote strings",
    )

    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Configuration file (default: ./strops.toml when present)",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        default="warning",
        help="Logging level (default: warning)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Split command
    split_parser = subparsers.add_parser(
        "split",
        aliases=["s"],
        help="Split TEXT at every SEP",
    )
    split_parser.add_argument("text", help="Input text ('-' reads stdin)")
    split_parser.add_argument("sep", help="Separator")
    policy_group = split_parser.add_mutually_exclusive_group()
    policy_group.add_argument(
        "--literal-empty",
        dest="policy",
        action="store_const",
        const=EmptySeparatorPolicy.LITERAL,
        help="Treat an empty separator as never matching",
    )
    policy_group.add_argument(
        "--per-character",
        dest="policy",
        action="store_const",
        const=EmptySeparatorPolicy.PER_CHARACTER,
        help="Split into single characters on an empty separator",
    )
    split_parser.add_argument(
        "--json",
        action="store_true",
        help="Output fragments as JSON",
    )

    # Join command
    join_parser = subparsers.add_parser(
        "join",
        aliases=["j"],
        help="Join FRAGMENTS with SEP",
    )
    join_parser.add_argument("sep", help="Separator")
    join_parser.add_argument("fragments", nargs="*", help="Fragments to join")

    # Replace command
    replace_parser = subparsers.add_parser(
        "replace",
        aliases=["r"],
        help="Replace every OLD in TEXT with NEW",
    )
    replace_parser.add_argument("text", help="Input text ('-' reads stdin)")
    replace_parser.add_argument("old", help="Text to look for")
    replace_parser.add_argument("new", help="Replacement text")
    replace_parser.add_argument(
        "--count",
        action="store_true",
        help="Print the number of replacements instead of the result",
    )

    # Trim command
    trim_parser = subparsers.add_parser(
        "trim",
        aliases=["t"],
        help="Trim characters in CUTSET from the ends of TEXT",
    )
    trim_parser.add_argument("text", help="Input text ('-' reads stdin)")
    trim_parser.add_argument("cutset", help="Characters to trim")
    side_group = trim_parser.add_mutually_exclusive_group()
    side_group.add_argument("--left", action="store_true", help="Trim the start only")
    side_group.add_argument("--right", action="store_true", help="Trim the end only")

    # Escape command
    escape_parser = subparsers.add_parser(
        "escape",
        aliases=["e"],
        help="Print TEXT with control characters escaped",
    )
    escape_parser.add_argument("text", help="Input text ('-' reads stdin)")
    _add_escape_options(escape_parser)

    # Quote command
    quote_parser = subparsers.add_parser(
        "quote",
        aliases=["q"],
        help="Print TEXT escaped and wrapped in double quotes",
    )
    quote_parser.add_argument("text", help="Input text ('-' reads stdin)")
    _add_escape_options(quote_parser)

    # Selftest command
    selftest_parser = subparsers.add_parser(
        "selftest",
        help="Run the built-in test cases",
    )
    selftest_parser.add_argument(
        "--json",
        action="store_true",
        help="Output the report as JSON",
    )

    # Info command
    subparsers.add_parser(
        "info",
        help="Show version and resolved configuration",
    )

    return parser


def _read_text(value: str) -> str:
    """Resolve a TEXT argument; '-' reads stdin as UTF-8, keeping bad bytes."""
    if value == "-":
        return sys.stdin.buffer.read().decode("utf-8", "surrogateescape")
    return value


def _write_bytes(data: bytes) -> None:
    sys.stdout.flush()
    sys.stdout.buffer.write(data + b"\n")
    sys.stdout.buffer.flush()


def _print_result(text: str, from_stdin: bool) -> None:
    # Bytes read from stdin go back out unchanged.
    if from_stdin:
        _write_bytes(text.encode("utf-8", "surrogateescape"))
    else:
        print(text)


# =============================================================================
# Command Handlers
# =============================================================================


def cmd_split(args: argparse.Namespace, config: StrOpsConfig) -> int:
    """Handle the split command."""
    fragments = split(_read_text(args.text), args.sep, policy=args.policy, config=config)

    if args.json:
        print(json.dumps({"count": len(fragments), "fragments": fragments}, indent=2))
        return 0

    for fragment in fragments:
        print(quote(fragment, config=config))
    return 0


def cmd_join(args: argparse.Namespace, config: StrOpsConfig) -> int:
    """Handle the join command."""
    print(join(args.fragments, args.sep))
    return 0


def cmd_replace(args: argparse.Namespace, config: StrOpsConfig) -> int:
    """Handle the replace command."""
    result, count = replacen(_read_text(args.text), args.old, args.new)
    if args.count:
        print(count)
    else:
        _print_result(result, args.text == "-")
    return 0


def cmd_trim(args: argparse.Namespace, config: StrOpsConfig) -> int:
    """Handle the trim command."""
    if args.left:
        func = trim_left
    elif args.right:
        func = trim_right
    else:
        func = trim
    _print_result(func(_read_text(args.text), args.cutset), args.text == "-")
    return 0


def cmd_escape(args: argparse.Namespace, config: StrOpsConfig) -> int:
    """
    Handle the escape and quote commands.

    In narrow width, stdin is escaped as raw bytes, so input that is not
    UTF-8 still gets one escape per byte.
    """
    func = quote if args.command in ("quote", "q") else escape
    width = config.text_width if args.width is None else args.width

    if args.text == "-" and width is CharWidth.NARROW:
        result = func(
            sys.stdin.buffer.read(),
            width=width,
            escape_non_ascii=args.non_ascii,
            config=config,
        )
        _write_bytes(result)
        return 0

    result = func(
        _read_text(args.text),
        width=width,
        escape_non_ascii=args.non_ascii,
        config=config,
    )
    _print_result(result, args.text == "-")
    return 0


def cmd_selftest(args: argparse.Namespace, config: StrOpsConfig) -> int:
    """Handle the selftest command."""
    report = run_self_test(config)

    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
        return 0 if report.ok else 1

    for failure in report.failures:
        print(f"{Colors.RED}FAIL:{Colors.RESET} {failure}")

    if report.ok:
        print(f"{Colors.GREEN}OK:{Colors.RESET} {report.passed}/{report.total} cases passed")
        return 0
    print(
        f"{Colors.RED}FAILED:{Colors.RESET} {len(report.failures)} of "
        f"{report.total} cases failed"
    )
    return 1


def cmd_info(args: argparse.Namespace, config: StrOpsConfig) -> int:
    """Handle the info command."""
    settings = config.to_dict()
    print(f"{Colors.BOLD}strops{Colors.RESET} {__version__}")
    print()
    print(f"{Colors.CYAN}Configuration:{Colors.RESET}")
    for key, value in settings.items():
        print(f"  {key}: {value}")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    command_handlers = {
        "split": cmd_split,
        "s": cmd_split,
        "join": cmd_join,
        "j": cmd_join,
        "replace": cmd_replace,
        "r": cmd_replace,
        "trim": cmd_trim,
        "t": cmd_trim,
        "escape": cmd_escape,
        "e": cmd_escape,
        "quote": cmd_escape,
        "q": cmd_escape,
        "selftest": cmd_selftest,
        "info": cmd_info,
    }

    handler = command_handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        config = load_config(args.config)
        logger.debug("running %s with %s", args.command, config)
        return handler(args, config)
    except StrOpsError as e:
        print(f"{Colors.RED}Error:{Colors.RESET} {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
