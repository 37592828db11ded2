from __future__ import annotations

import logging
from typing import ClassVar, Dict, Mapping, Optional, Tuple, Type, TypeVar

from .containers import Listing
from .exceptions import MissingRole
from .items import Item, ItemUse
from .roles import InventoryRole, PotionUser, SpellUser, WeaponUser

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=InventoryRole)


class Character:
    """A named participant in the story with a health value.

    Health can only move through ``take_damage`` and ``heal``; neither clamps,
    so health may drop below zero. A character counts as defeated once
    ``hp <= 0`` and it is up to callers to act on that.

    Inventories are composed, not inherited: each class lists the roles it
    carries in ``ROLES`` and ``__init__`` builds one of each, all pointing back
    at this single character.
    """

    ROLES: ClassVar[Tuple[Type[InventoryRole], ...]] = ()
    DEFAULT_CAPACITIES: ClassVar[Mapping[str, int]] = {}

    def __init__(self, name: str, hp: int, capacities: Optional[Mapping[str, int]] = None) -> None:
        if not name:
            raise ValueError("Character name must be a non-empty string")
        self._name = name
        self._health_points = int(hp)
        merged: Dict[str, int] = dict(self.DEFAULT_CAPACITIES)
        merged.update(capacities or {})
        self._roles: Dict[Type[InventoryRole], InventoryRole] = {}
        for role_cls in self.ROLES:
            self._roles[role_cls] = role_cls(self, merged.get(role_cls.key, 0))
        logger.debug("Created %s %s with %d HP", self.archetype, name, self._health_points)

    @property
    def name(self) -> str:
        return self._name

    @property
    def hp(self) -> int:
        return self._health_points

    @property
    def is_defeated(self) -> bool:
        return self._health_points <= 0

    @property
    def archetype(self) -> str:
        return type(self).__name__.lower()

    def take_damage(self, amount: int) -> None:
        self._health_points -= amount
        logger.debug("%s takes %d damage (hp=%d)", self._name, amount, self._health_points)

    def heal(self, amount: int) -> None:
        self._health_points += amount
        logger.debug("%s heals %d (hp=%d)", self._name, amount, self._health_points)

    # Roles

    @property
    def roles(self) -> Tuple[InventoryRole, ...]:
        return tuple(self._roles.values())

    def has_role(self, role_cls: Type[InventoryRole]) -> bool:
        return role_cls in self._roles

    def role(self, role_cls: Type[R]) -> R:
        try:
            return self._roles[role_cls]  # type: ignore[return-value]
        except KeyError:
            raise MissingRole(self._name, role_cls.key or role_cls.__name__) from None

    def store(self, item: Item) -> None:
        """Put ``item`` in whichever composed inventory holds its kind."""
        for role_cls, role in self._roles.items():
            if isinstance(item, role_cls.item_type):
                role.store(item)
                return
        raise MissingRole(self._name, type(item).__name__.lower() + "s")

    def attack(self, target: "Character", weapon_name: str) -> ItemUse:
        return self.role(WeaponUser).attack(target, weapon_name)

    def drink(self, target: "Character", potion_name: str) -> ItemUse:
        return self.role(PotionUser).drink(target, potion_name)

    def cast(self, target: "Character", spell_name: str) -> ItemUse:
        return self.role(SpellUser).cast(target, spell_name)

    def show_weapons(self) -> Listing:
        return self.role(WeaponUser).show_weapons()

    def show_potions(self) -> Listing:
        return self.role(PotionUser).show_potions()

    def show_spells(self) -> Listing:
        return self.role(SpellUser).show_spells()

    def __str__(self) -> str:
        return f"{self._name}:{self._health_points}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r}, hp={self._health_points})"


class Fighter(Character):
    ROLES = (WeaponUser, PotionUser)
    DEFAULT_CAPACITIES = {"weapons": 3, "potions": 5}


class Archer(Character):
    ROLES = (WeaponUser, PotionUser, SpellUser)
    DEFAULT_CAPACITIES = {"weapons": 2, "potions": 3, "spells": 2}


class Wizard(Character):
    ROLES = (PotionUser, SpellUser)
    DEFAULT_CAPACITIES = {"potions": 10, "spells": 10}


ARCHETYPES: Dict[str, Type[Character]] = {
    "fighter": Fighter,
    "archer": Archer,
    "wizard": Wizard,
}
