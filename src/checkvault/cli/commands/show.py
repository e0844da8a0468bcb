"""Show command for checkvault CLI."""

import asyncio

from ...app import create_view
from ...core.config import Config
from ..render import print_groups


def add_show_arguments(parser) -> None:
    """Add arguments shared by show and watch."""
    parser.add_argument(
        "-f",
        "--filter",
        dest="filter_name",
        help="Checklist filter to use (default: the selected filter)",
    )
    parser.add_argument("-s", "--search", default="", help="Only show items containing text")


def handle_show(args, config: Config) -> None:
    """Handle show command.

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    asyncio.run(_handle_show_async(args, config))


async def _handle_show_async(args, config: Config) -> None:
    view = create_view(
        config,
        renderer=print_groups,
        filter_name=args.filter_name,
        search_term=args.search,
    )
    await view.refresh_and_render()
