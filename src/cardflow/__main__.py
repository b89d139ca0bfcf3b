"""CLI entry point for cardflow."""

import argparse
from pathlib import Path

from . import __version__
from .config import Settings
from .logging import setup_logging


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="cardflow",
        description="Terminal Kanban board that stays responsive with tens of thousands of cards",
    )
    parser.add_argument(
        "--project-root",
        type=Path,
        default=None,
        help="Directory containing cardflow.yml (default: current directory)",
    )
    parser.add_argument(
        "--cards",
        type=int,
        default=None,
        metavar="N",
        help="Number of cards to generate (default: from cardflow.yml, 5000)",
    )
    parser.add_argument(
        "--search",
        default=None,
        metavar="QUERY",
        help="Run a search without the TUI and print per-column results",
    )
    parser.add_argument(
        "--generate-config",
        action="store_true",
        help="Write a default cardflow.yml and exit",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log more (-v: info, -vv: debug)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write logs to this file",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser.parse_args()


def main() -> None:
    """Main entry point."""
    args = parse_args()

    # CLI flags override CARDFLOW_* environment variables
    settings_kwargs: dict = {}
    if args.project_root:
        settings_kwargs["project_root"] = args.project_root
    if args.cards is not None:
        settings_kwargs["card_count"] = args.cards
    if args.verbose:
        settings_kwargs["verbose"] = args.verbose
    if args.log_file:
        settings_kwargs["log_file"] = args.log_file

    settings = Settings(**settings_kwargs)
    headless = args.generate_config or args.search is not None
    setup_logging(settings.verbose, settings.log_file, tui=not headless)

    if args.generate_config:
        from .cli.generate import run_generate

        raise SystemExit(run_generate(settings.project_root))

    if args.search is not None:
        from .cli.query import run_query
        from .services import ConfigService

        config = ConfigService(settings.project_root).get_board_config()
        raise SystemExit(run_query(config, args.search, settings.card_count))

    # Import here so headless commands never load Textual widgets
    from .app import run

    run(settings)


if __name__ == "__main__":
    main()
