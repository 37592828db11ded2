from __future__ import annotations

import logging
from typing import TYPE_CHECKING, ClassVar, Generic, Type, TypeVar

from .containers import BoundedContainer, Listing
from .items import Item, ItemUse, Potion, Spell, Weapon

if TYPE_CHECKING:  # pragma: no cover
    from .characters import Character

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Item)


class InventoryRole(Generic[T]):
    """One inventory capability of a character.

    A role owns exactly one bounded container of its item kind and refers
    back to the character that carries it; health and name are never copied
    onto the role.
    """

    item_type: ClassVar[Type[Item]] = Item
    key: ClassVar[str] = ""
    inventory_label: ClassVar[str] = "inventory"

    def __init__(self, owner: "Character", capacity: int) -> None:
        self.owner = owner
        self.inventory: BoundedContainer[T] = BoundedContainer(capacity, label=self.inventory_label)

    @property
    def capacity(self) -> int:
        return self.inventory.capacity

    def store(self, item: T) -> None:
        if not isinstance(item, self.item_type):
            raise TypeError(
                f"{type(self).__name__} holds {self.item_type.__name__} items, got {type(item).__name__}"
            )
        self.inventory.add(item)
        item.assign_owner(self.owner.name)
        logger.debug("%s stored %s in their %s", self.owner.name, item.name, self.inventory_label)

    def _apply(self, target: "Character", name: str) -> ItemUse:
        item = self.inventory.find(name)
        return item.use(self.owner, target)

    def show(self) -> Listing:
        return self.inventory.show()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(owner={self.owner.name!r}, size={len(self.inventory)}/{self.capacity})"


class WeaponUser(InventoryRole[Weapon]):
    item_type = Weapon
    key = "weapons"
    inventory_label = "arsenal"

    def attack(self, target: "Character", weapon_name: str) -> ItemUse:
        return self._apply(target, weapon_name)

    def show_weapons(self) -> Listing:
        return self.show()


class PotionUser(InventoryRole[Potion]):
    item_type = Potion
    key = "potions"
    inventory_label = "medical bag"

    def drink(self, target: "Character", potion_name: str) -> ItemUse:
        return self._apply(target, potion_name)

    def show_potions(self) -> Listing:
        return self.show()


class SpellUser(InventoryRole[Spell]):
    item_type = Spell
    key = "spells"
    inventory_label = "spell book"

    def cast(self, target: "Character", spell_name: str) -> ItemUse:
        return self._apply(target, spell_name)

    def show_spells(self) -> Listing:
        return self.show()


ROLE_TYPES = (WeaponUser, PotionUser, SpellUser)
ROLES_BY_KEY = {role.key: role for role in ROLE_TYPES}
