from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .commands import CommandInterpreter, load_script
from .config import load_config
from .exceptions import InvalidCommand
from .logging_config import configure_logging
from .session import StorySession

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fantasy-story",
        description="Play a fantasy story command script and write its transcript.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("script", type=Path, help="Command script (first line: number of commands)")
    parser.add_argument("-o", "--output", type=Path, default=None, help="Transcript file (default: stdout)")
    parser.add_argument("--config", type=str, default=None, help="YAML file overriding the default rules")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = load_config(args.config)
    except (OSError, ValueError) as exc:
        logger.error("Could not load config: %s", exc)
        return 2

    try:
        text = args.script.read_text(encoding="utf-8")
    except OSError as exc:
        logger.error("Could not read script %s: %s", args.script, exc)
        return 2

    try:
        commands = load_script(text)
    except InvalidCommand as exc:
        logger.error("%s", exc)
        return 2

    session = StorySession(config)
    CommandInterpreter(session).run(commands)
    transcript = "".join(f"{line}\n" for line in session.lines())

    if args.output is None:
        sys.stdout.write(transcript)
    else:
        args.output.write_text(transcript, encoding="utf-8")
        logger.info("Wrote %d transcript lines to %s", len(session.lines()), args.output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
