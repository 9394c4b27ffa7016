"""Command-line interface for homebrewme."""

import argparse
import logging
import sys

from .utils.ui import Colors
from .providers.homebrew import check_tool_installed
from .commands.migrate import MigrationOptions, handle_migrate_command

REQUIRED_TOOLS = ("brew", "osascript")
EXIT_OK = 0
EXIT_USAGE = 1
EXIT_INTERRUPTED = 130


class ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits with status 1 on usage errors"""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE, f"{self.prog}: error: {message}\n")


def build_parser():
    parser = ArgumentParser(
        prog="homebrewme",
        description="Replace manually installed macOS applications with their Homebrew casks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  homebrewme                       # Review every app in /Applications interactively
  homebrewme --dry-run             # Walk through the prompts without changing anything
  homebrewme --order               # Choose which apps to process first
  homebrewme --verbose             # Show full brew info before each prompt

At each prompt answer y (yes), n (no), A (yes to all remaining) or F (no to all remaining).
        """
    )
    parser.add_argument('--dry-run', action='store_true',
                        help='Show what would be replaced without quitting, removing or installing anything')
    parser.add_argument('--order', action='store_true',
                        help='Interactively choose the processing order before starting')
    parser.add_argument('--verbose', action='store_true',
                        help='Show extended Homebrew cask information for each app')
    return parser


def parse_arguments(argv=None):
    """Parse command line arguments"""
    return build_parser().parse_args(argv)


def configure_logging(verbose=False):
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def missing_tools(tools=REQUIRED_TOOLS):
    """Return the required command line tools that are not on PATH"""
    return [tool for tool in tools if not check_tool_installed(tool)]


def main(argv=None):
    args = parse_arguments(argv)
    configure_logging(args.verbose)

    missing = missing_tools()
    if missing:
        for tool in missing:
            print(f"{Colors.RED}Error: {tool} is required. Please install {tool} and retry.{Colors.RESET}",
                  file=sys.stderr)
        return EXIT_USAGE

    options = MigrationOptions(dry_run=args.dry_run, order=args.order, verbose=args.verbose)
    try:
        handle_migrate_command(options)
    except KeyboardInterrupt:
        print(f"\n{Colors.YELLOW}Interrupted.{Colors.RESET}")
        return EXIT_INTERRUPTED
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
