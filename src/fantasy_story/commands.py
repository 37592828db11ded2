"""Command-script interpreter for story sessions.

Translates the line-based script grammar into ``StorySession`` calls::

    Create character <fighter|archer|wizard> <name> <hp>
    Create item weapon <owner> <name> <damage>
    Create item potion <owner> <name> <heal>
    Create item spell <owner> <name> <m> <target_1> ... <target_m>
    Attack <attacker> <target> <weapon>
    Cast <caster> <target> <spell>
    Drink <supplier> <drinker> <potion>
    Dialogue <speaker> <n> <word_1> ... <word_n>
    Show characters | Show weapons <owner> | Show potions <owner> | Show spells <owner>

Every command either succeeds or leaves exactly one error line in the
transcript; a failing command never stops the ones after it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Sequence

from .exceptions import InvalidCommand, StoryError
from .session import StorySession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    ok: bool
    line: str
    command: str = ""


def _int(line: str, value: str, what: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise InvalidCommand(line, f"{what} must be an integer, got '{value}'") from None


def _expect(line: str, args: Sequence[str], count: int) -> None:
    if len(args) != count:
        raise InvalidCommand(line, f"expected {count} arguments, got {len(args)}")


class CommandInterpreter:
    def __init__(self, session: StorySession) -> None:
        self.session = session
        self._verbs: Dict[str, Callable[[str, List[str]], str]] = {
            "Create": self._create,
            "Attack": self._attack,
            "Cast": self._cast,
            "Drink": self._drink,
            "Dialogue": self._dialogue,
            "Show": self._show,
        }

    def execute(self, line: str) -> CommandResult:
        """Run a single command line and report how it went."""
        command = line.strip()
        try:
            words = command.split()
            if not words:
                raise InvalidCommand(line, "empty command")
            handler = self._verbs.get(words[0])
            if handler is None:
                raise InvalidCommand(line, f"unknown verb '{words[0]}'")
            output = handler(command, words[1:])
        except StoryError as exc:
            return CommandResult(ok=False, line=self.session.fail(exc), command=command)
        return CommandResult(ok=True, line=output, command=command)

    def run(self, lines: Iterable[str]) -> List[CommandResult]:
        results = [self.execute(line) for line in lines]
        failed = sum(1 for r in results if not r.ok)
        logger.info("Ran %d commands (%d failed)", len(results), failed)
        return results

    def _create(self, line: str, args: List[str]) -> str:
        if not args:
            raise InvalidCommand(line, "nothing to create")
        what, rest = args[0], args[1:]
        if what == "character":
            _expect(line, rest, 3)
            archetype, name, hp = rest
            return self.session.create_character(archetype, name, _int(line, hp, "health"))
        if what != "item" or not rest:
            raise InvalidCommand(line, f"cannot create '{what}'")

        kind, rest = rest[0], rest[1:]
        if kind == "weapon":
            _expect(line, rest, 3)
            owner, name, damage = rest
            return self.session.create_weapon(owner, name, _int(line, damage, "damage"))
        if kind == "potion":
            _expect(line, rest, 3)
            owner, name, heal = rest
            return self.session.create_potion(owner, name, _int(line, heal, "heal value"))
        if kind == "spell":
            if len(rest) < 3:
                raise InvalidCommand(line, "spell needs an owner, a name and a target count")
            owner, name, count = rest[:3]
            targets = rest[3:]
            if _int(line, count, "target count") != len(targets):
                raise InvalidCommand(line, f"expected {count} targets, got {len(targets)}")
            return self.session.create_spell(owner, name, targets)
        raise InvalidCommand(line, f"unknown item kind '{kind}'")

    def _attack(self, line: str, args: List[str]) -> str:
        _expect(line, args, 3)
        return self.session.attack(*args)

    def _cast(self, line: str, args: List[str]) -> str:
        _expect(line, args, 3)
        return self.session.cast(*args)

    def _drink(self, line: str, args: List[str]) -> str:
        _expect(line, args, 3)
        return self.session.drink(*args)

    def _dialogue(self, line: str, args: List[str]) -> str:
        if len(args) < 2:
            raise InvalidCommand(line, "dialogue needs a speaker and a word count")
        speaker, count, words = args[0], args[1], args[2:]
        if _int(line, count, "word count") != len(words):
            raise InvalidCommand(line, f"expected {count} words, got {len(words)}")
        return self.session.dialogue(speaker, words)

    def _show(self, line: str, args: List[str]) -> str:
        if args == ["characters"]:
            return self.session.show_characters()
        _expect(line, args, 2)
        what, owner = args
        if what == "weapons":
            return self.session.show_weapons(owner)
        if what == "potions":
            return self.session.show_potions(owner)
        if what == "spells":
            return self.session.show_spells(owner)
        raise InvalidCommand(line, f"cannot show '{what}'")


def load_script(text: str) -> List[str]:
    """Split a script into command lines.

    The first non-empty line holds the number of commands that follow; only
    that many lines are returned.
    """
    lines = text.splitlines()
    while lines and not lines[0].strip():
        lines.pop(0)
    if not lines:
        return []
    header = lines[0].strip()
    try:
        count = int(header)
    except ValueError:
        raise InvalidCommand(header, "script must start with the number of commands") from None
    if count < 0:
        raise InvalidCommand(header, "command count must be non-negative")
    commands = lines[1 : 1 + count]
    if len(commands) < count:
        logger.warning("Script announced %d commands but only has %d", count, len(commands))
    return commands
