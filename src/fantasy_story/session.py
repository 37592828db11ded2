from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from .characters import Character
from .config import StoryConfig
from .exceptions import StoryError, UnknownCharacter
from .items import ItemUse, SpellKind
from .roster import Roster
from .transcript import Transcript

logger = logging.getLogger(__name__)

NARRATOR = "Narrator"
ERROR_LINE = "Error caught"


class StorySession:
    """The verbs a story driver calls, one command at a time.

    Each verb performs its action against the roster, writes the resulting
    line to the transcript and returns it. Failures are raised as
    ``StoryError`` subclasses; the driver reports them with ``fail`` and moves
    on. Commands are expected to run to completion one after another; nothing
    here is safe to call concurrently.
    """

    def __init__(self, config: Optional[StoryConfig] = None, transcript: Optional[Transcript] = None) -> None:
        self.config = config or StoryConfig()
        self.roster = Roster(self.config.capacities)
        self.transcript = transcript if transcript is not None else Transcript(self.config.transcript_capacity)

    # Creation

    def create_character(self, archetype: str, name: str, hp: int) -> str:
        character = self.roster.create(archetype, name, hp)
        return self._say(
            f"A new {character.archetype} came to town, {name}.",
            verb="create",
            actor=name,
        )

    def create_weapon(self, owner: str, name: str, damage: int) -> str:
        self.roster.create_weapon(owner, name, damage)
        return self._obtained(owner, "weapon", name)

    def create_potion(self, owner: str, name: str, heal_value: int) -> str:
        self.roster.create_potion(owner, name, heal_value)
        return self._obtained(owner, "potion", name)

    def create_spell(
        self,
        owner: str,
        name: str,
        target_names: Iterable[str],
        kind: SpellKind = SpellKind.DAMAGE,
        power: Optional[int] = None,
    ) -> str:
        self.roster.create_spell(
            owner,
            name,
            target_names,
            kind=kind,
            power=self.config.spell_power if power is None else power,
        )
        return self._obtained(owner, "spell", name)

    # Actions

    def attack(self, attacker: str, target: str, weapon: str) -> str:
        user, victim = self.roster.get(attacker), self.roster.get(target)
        outcome = user.attack(victim, weapon)
        line = self._say(
            f"{attacker} attacks {target} with their {weapon} and they lose {-outcome.amount} health points.",
            verb="attack",
            actor=attacker,
            target=target,
        )
        self._check_defeated(outcome, user, victim)
        return line

    def drink(self, supplier: str, drinker: str, potion: str) -> str:
        giver, receiver = self.roster.get(supplier), self.roster.get(drinker)
        outcome = giver.drink(receiver, potion)
        line = self._say(
            f"{drinker} drinks {potion} from {supplier}.",
            verb="drink",
            actor=supplier,
            target=drinker,
        )
        self._check_defeated(outcome, giver, receiver)
        return line

    def cast(self, caster: str, target: str, spell: str) -> str:
        user, victim = self.roster.get(caster), self.roster.get(target)
        outcome = user.cast(victim, spell)
        line = self._say(f"{caster} casts {spell} on {target}!", verb="cast", actor=caster, target=target)
        self._check_defeated(outcome, user, victim)
        return line

    def dialogue(self, speaker: str, words: Sequence[str]) -> str:
        if speaker != NARRATOR and speaker not in self.roster:
            raise UnknownCharacter(speaker)
        return self._say(f"{speaker}: {' '.join(words)}", verb="dialogue", actor=speaker)

    # Listings

    def show_characters(self) -> str:
        line = " ".join(f"{c.name}:{c.archetype}:{c.hp}" for c in self.roster)
        return self._say(line, verb="show")

    def show_weapons(self, owner: str) -> str:
        return self._say(self.roster.get(owner).show_weapons().line(), verb="show", actor=owner)

    def show_potions(self, owner: str) -> str:
        return self._say(self.roster.get(owner).show_potions().line(), verb="show", actor=owner)

    def show_spells(self, owner: str) -> str:
        return self._say(self.roster.get(owner).show_spells().line(), verb="show", actor=owner)

    # Reporting

    def fail(self, error: StoryError) -> str:
        logger.info("Command failed: %s", error)
        return self._say(ERROR_LINE, verb="error", failed=True)

    def lines(self) -> List[str]:
        return self.transcript.lines()

    def _obtained(self, owner: str, kind: str, name: str) -> str:
        return self._say(f"{owner} just obtained a new {kind} called '{name}'.", verb="create", actor=owner)

    def _check_defeated(self, outcome: ItemUse, *characters: Character) -> None:
        seen = set()
        for character in characters:
            if character.name in seen or not character.is_defeated:
                continue
            seen.add(character.name)
            self._say(f"{character.name} has died...", verb="death", actor=character.name)
            if self.config.remove_defeated and character.name in self.roster:
                self.roster.remove(character.name)
        logger.debug("Resolved %s", outcome)

    def _say(self, message: str, **details) -> str:
        self.transcript.write(message, **details)
        return message
