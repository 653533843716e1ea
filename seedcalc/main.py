"""Command line interface for the seed matchup calculator."""

import argparse
import logging
import sys
from typing import List, Optional

from .config import CalculatorConfig
from .errors import AcquisitionError, SeedCalcError, ValidationError
from .predictors.seed_history import format_report, validate_seed
from .service import SeedDataService

HELP_TOKENS = {"?", "/?", "help", "/help", "-h", "--help"}
FORCE_TOKEN = "force"

HELP_TEXT = """\
###################################################################################
This is a March Madness win percentage fetcher. It takes in two team seed values
and returns the percent chance each one will win.

\tUsage: seedcalc {team 1 seed} {team 2 seed}
\tExample: seedcalc 2 4

Other available commands:
\t? : Shows the help text (you're currently viewing it).
\tforce : Forces the program to dump the old data and reacquire fresh data. Can
\t\tbe used in conjunction with normal team seed parameters.

Options:
\t-v, --verbose : Log progress (repeat for debug output).
\t--data-file PATH : Location of the match data snapshot.

###################################################################################"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="seedcalc",
        description="March Madness seed matchup calculator",
        add_help=False,
    )
    parser.add_argument("params", nargs="*", help="Seeds, 'force' or 'help'")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity")
    parser.add_argument("--data-file", default=None, help="Path to the match data snapshot")
    return parser


def parse_params(params: List[str]):
    """
    Split raw parameters into seeds and the force flag.

    Returns:
        Tuple of (seed list, force flag)

    Raises:
        ValidationError: on a wrong argument count or an invalid seed
    """
    params = list(params)
    force = FORCE_TOKEN in params
    params = [p for p in params if p != FORCE_TOKEN]
    if force and not params:
        return [], True
    if len(params) < 2:
        raise ValidationError("Not enough or improper arguments entered.")
    if len(params) > 2:
        raise ValidationError("Too many arguments entered.")
    return [validate_seed(p) for p in params], force


def configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def run(params: List[str], service: SeedDataService) -> int:
    """Execute one CLI invocation against ``service``."""
    if HELP_TOKENS.intersection(params):
        print(HELP_TEXT)
        return 0

    try:
        seeds, force = parse_params(params)
        if not seeds:
            result = service.refresh()
            if result.warning_count:
                print(
                    f"Retrieved {len(result.completed_seasons)} of {len(result.expected_seasons)} seasons "
                    f"({result.warning_count} could not be retrieved).",
                    file=sys.stderr,
                )
            if not result.persisted:
                print("Fresh game data was incomplete; kept the existing data file.", file=sys.stderr)
                return 1
            print("Successfully retrieved and stored fresh game data.")
            return 0
        report = service.compare(seeds[0], seeds[1], force=force)
    except AcquisitionError as exc:
        print(f"Error: could not acquire game data ({exc}).", file=sys.stderr)
        return 1
    except SeedCalcError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    for line in format_report(report):
        print(line)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args, extra = build_parser().parse_known_args(argv)
    configure_logging(args.verbose)
    config = CalculatorConfig.from_env(data_file=args.data_file)
    return run(list(args.params) + extra, SeedDataService(config))


if __name__ == "__main__":
    sys.exit(main())
