"""Command-line front door for lazyinspect.

Parses CLI options, sets up file logging, resolves the evaluator command,
and dispatches into the interactive browser runtime.
"""

from __future__ import annotations

import argparse
import logging
import shlex
import sys

from . import config
from .log import initialize_logging
from .model import TreePath
from .runtime import run_browser

logger = logging.getLogger(__name__)


def _tree_path(value: str) -> TreePath:
    """argparse type for dotted tree paths."""
    return TreePath.parse(value.strip())


def _has_terminal() -> bool:
    return sys.stdin.isatty() and sys.stdout.isatty()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazyinspect",
        description="Browse a lazily evaluated expression tree in the terminal.",
    )
    parser.add_argument("expr", help="Root expression handed to the evaluator.")
    parser.add_argument(
        "--worker",
        default=None,
        help=f"Evaluator command (default: ${config.WORKER_ENV}, config, or "
        f"{' '.join(config.DEFAULT_WORKER_COMMAND)}).",
    )
    parser.add_argument(
        "--path",
        type=_tree_path,
        default=None,
        help="Dotted path to open on startup, e.g. 'packages.hello'.",
    )
    parser.add_argument("--style", default=None, help="Pygments style name for value previews.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--log-level", default=None, help="Log level (default: $LAZYINSPECT_LOGLEVEL or INFO).")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch the browser on ``expr``."""
    args = build_parser().parse_args(argv)
    if "\n" in args.expr:
        raise SystemExit("The root expression must be a single line.")

    if not _has_terminal():
        raise SystemExit("lazyinspect needs an interactive terminal.")

    log_path = initialize_logging(args.log_level)
    if log_path is not None:
        logger.debug("Logging to %s", log_path)

    worker_command = shlex.split(args.worker) if args.worker else config.load_worker_command()
    if not worker_command:
        raise SystemExit("Evaluator command is empty.")
    style = args.style if args.style else config.load_style_name()

    run_browser(
        args.expr,
        worker_command,
        initial_path=args.path,
        style=style,
        no_color=args.no_color,
    )


if __name__ == "__main__":
    main()
