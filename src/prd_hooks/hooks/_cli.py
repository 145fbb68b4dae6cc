"""Helpers shared by the hook entry points."""

import argparse
import logging
import sys

from prd_hooks.core.outcome import HookResult


def base_parser(prog: str, description: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=prog, description=description)
    parser.add_argument(
        "--config",
        metavar="PATH",
        help="hook configuration file (default: $PRD_HOOKS_CONFIG or config/hooks.yml)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="log diagnostics to stderr",
    )
    return parser


def configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )


def emit(result: HookResult) -> int:
    """Print a hook result and return its exit code."""
    for line in result.stdout:
        print(line)
    for line in result.stderr:
        print(line, file=sys.stderr)
    return result.exit_code
