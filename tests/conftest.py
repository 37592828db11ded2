import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from fantasy_story.characters import Character  # noqa: E402
from fantasy_story.roster import Roster  # noqa: E402
from fantasy_story.session import StorySession  # noqa: E402


@pytest.fixture()
def roster():
    r = Roster()
    r.create("fighter", "Aria", 100, capacities={"weapons": 1})
    r.add(Character("Dummy", 20))
    return r


@pytest.fixture()
def session():
    return StorySession()
