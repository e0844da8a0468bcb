"""CLI entry point for checkvault."""

import argparse
import sys
from pathlib import Path
from typing import NoReturn

from ..core.config import Config
from ..core.exceptions import CheckvaultError
from ..core.logging import configure_logging
from . import commands


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="checkvault",
        description="Checklist views over a markdown vault",
    )
    parser.add_argument("--version", action="version", version="%(prog)s 0.1.0")
    parser.add_argument("-c", "--config", help="Configuration file (YAML or JSON)")
    parser.add_argument("--vault", help="Vault directory (default: $CHECKVAULT_VAULT or cwd)")
    parser.add_argument("--settings", help="Filter settings file (YAML or JSON)")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log pipeline progress to stderr"
    )

    subparsers = parser.add_subparsers(dest="command", required=False)

    show_parser = subparsers.add_parser("show", help="Print the grouped checklist")
    commands.add_show_arguments(show_parser)

    watch_parser = subparsers.add_parser("watch", help="Reprint the checklist as the vault changes")
    commands.add_show_arguments(watch_parser)

    subparsers.add_parser("filters", help="List checklist filters")

    return parser


def main() -> NoReturn:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args()

    try:
        config = Config.from_env_or_file(args.config)
        if args.vault:
            config.vault.path = Path(args.vault)
        if args.settings:
            config.settings_path = Path(args.settings)
        configure_logging("DEBUG" if args.verbose else config.log_level)

        if args.command == "show":
            commands.handle_show(args, config)
        elif args.command == "watch":
            commands.handle_watch(args, config)
        elif args.command == "filters":
            commands.handle_filters(args, config)
        else:
            parser.print_help()

        sys.exit(0)
    except CheckvaultError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
