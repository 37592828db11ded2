"""Entry point for running as `python -m fantasy_story`."""

from fantasy_story.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
