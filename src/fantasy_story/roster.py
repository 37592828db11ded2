from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, Mapping, Optional

from .characters import ARCHETYPES, Character
from .exceptions import DuplicateCharacter, UnknownArchetype, UnknownCharacter
from .items import DEFAULT_SPELL_POWER, Item, Potion, Spell, SpellKind, Weapon

logger = logging.getLogger(__name__)


class Roster:
    """Registry of the characters in a session, keyed by name.

    Also the entry point for item creation: every factory builds the item,
    runs its one-time ``setup()`` and hands it to the owner's matching
    inventory, so an item only ever exists inside exactly one container.
    """

    def __init__(self, capacities: Optional[Mapping[str, Mapping[str, int]]] = None) -> None:
        self._characters: Dict[str, Character] = {}
        self._capacities = {k: dict(v) for k, v in (capacities or {}).items()}

    def create(
        self,
        archetype: str,
        name: str,
        hp: int,
        capacities: Optional[Mapping[str, int]] = None,
    ) -> Character:
        try:
            cls = ARCHETYPES[archetype.lower()]
        except KeyError:
            raise UnknownArchetype(archetype) from None
        if name in self._characters:
            raise DuplicateCharacter(name)
        sizes = dict(self._capacities.get(archetype.lower(), {}))
        sizes.update(capacities or {})
        character = cls(name, hp, capacities=sizes)
        self.add(character)
        return character

    def add(self, character: Character) -> None:
        if character.name in self._characters:
            raise DuplicateCharacter(character.name)
        self._characters[character.name] = character
        logger.info("%s joined the roster as a %s", character.name, character.archetype)

    def get(self, name: str) -> Character:
        try:
            return self._characters[name]
        except KeyError:
            raise UnknownCharacter(name) from None

    def remove(self, name: str) -> Character:
        character = self.get(name)
        del self._characters[name]
        logger.info("%s left the roster", name)
        return character

    def __contains__(self, name: object) -> bool:
        return name in self._characters

    def __len__(self) -> int:
        return len(self._characters)

    def __iter__(self) -> Iterator[Character]:
        for name in sorted(self._characters):
            yield self._characters[name]

    # Item creation

    def create_weapon(self, owner: str, name: str, damage: int) -> Weapon:
        return self._give(owner, Weapon(name, damage))

    def create_potion(self, owner: str, name: str, heal_value: int) -> Potion:
        return self._give(owner, Potion(name, heal_value))

    def create_spell(
        self,
        owner: str,
        name: str,
        target_names: Iterable[str],
        kind: SpellKind = SpellKind.DAMAGE,
        power: int = DEFAULT_SPELL_POWER,
    ) -> Spell:
        targets = list(target_names)
        for target in targets:
            self.get(target)
        return self._give(owner, Spell(name, targets, kind=kind, power=power))

    def _give(self, owner: str, item: Item):
        character = self.get(owner)
        item.setup()
        character.store(item)
        logger.info("%s obtained %s", owner, item)
        return item
