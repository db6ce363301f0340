"""Command line entry point."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from alteredstate.app_config import ConfigError
from alteredstate.commands import list_scenarios, update_scenario
from alteredstate.context import AppContext, InvariantError
from alteredstate.scenarios import ScenarioConfigError

_LEVELS = [
    logging.CRITICAL + 10,
    logging.ERROR,
    logging.WARNING,
    logging.INFO,
    logging.DEBUG,
]


def _log_level(verbose: int, quiet: int) -> int:
    index = max(0, min(len(_LEVELS) - 1, 1 + verbose - quiet))
    return _LEVELS[index]


def build_parser() -> argparse.ArgumentParser:
    """Parser for the global options and the scenario subcommands."""
    parser = argparse.ArgumentParser(prog="altered-state", description="Clean up your mess")
    parser.add_argument("--config", default=None, help="path of the configuration file")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="more output")
    parser.add_argument("-q", "--quiet", action="count", default=0, help="less output")

    shared = argparse.ArgumentParser(add_help=False)
    shared.add_argument("--config", default=argparse.SUPPRESS, help=argparse.SUPPRESS)

    subcommands = parser.add_subparsers(dest="command", required=True)

    list_parser = subcommands.add_parser("list", parents=[shared], help="list scenarios")
    list_parser.add_argument("--detailed", action="store_true")

    update_parser = subcommands.add_parser(
        "update", parents=[shared], help="update a scenario"
    )
    update_parser.add_argument("--name", required=True, help="Name of the scenario to update")
    update_parser.add_argument(
        "-d", "--description", default=None, help="New description for the scenario"
    )
    update_parser.add_argument(
        "--set-playable",
        dest="set_playable",
        default=None,
        help="Set the active snapshot for the scenario",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=_log_level(args.verbose, args.quiet))
    try:
        context = AppContext.create(args.config)
        if args.command == "list":
            list_scenarios(context, args.detailed)
        else:
            update_scenario(context, args.name, args.description, args.set_playable)
    except (ConfigError, ScenarioConfigError, InvariantError, OSError) as error:
        print(f"error: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())