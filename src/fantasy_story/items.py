from __future__ import annotations

import logging
import weakref
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, FrozenSet, Iterable, Optional

from .exceptions import AlreadySetUp, ItemSpent, PreconditionNotMet

if TYPE_CHECKING:  # pragma: no cover
    from .characters import Character

logger = logging.getLogger(__name__)

DEFAULT_SPELL_POWER = 50


class ItemState(str, Enum):
    READY = "ready"
    SPENT = "spent"


class SpellKind(str, Enum):
    """Which way a spell moves its target's health."""

    DAMAGE = "damage"
    HEAL = "heal"


@dataclass(frozen=True)
class ItemUse:
    """Outcome of a successful ``Item.use`` call.

    Attributes:
        item: Name of the item that was used.
        user: Name of the character using it.
        target: Name of the character it was applied to.
        amount: Signed health change on the target (negative for damage).
        spent: True if the use consumed the item.
    """

    item: str
    user: str
    target: str
    amount: int
    spent: bool = False


class Item(ABC):
    """Base class for everything a character can carry and use.

    ``use`` is the single entry point for collaborators. It checks the
    kind-specific use-condition, applies the kind-specific effect, then runs
    the after-use hook that retires use-once items. The effect is always
    applied before the item leaves its container.

    An item never holds a strong reference to its owner: ``owner`` is only
    the owner's name, and the container it sits in is tracked weakly so the
    container stays the item's sole owner.
    """

    def __init__(self, name: str, usable_once: bool = False) -> None:
        if not name:
            raise ValueError("Item name must be a non-empty string")
        self._name = name
        self._usable_once = usable_once
        self._state = ItemState.READY
        self._is_set_up = False
        self._owner: Optional[str] = None
        self._release: Optional[weakref.ReferenceType] = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def usable_once(self) -> bool:
        return self._usable_once

    @property
    def state(self) -> ItemState:
        return self._state

    @property
    def is_set_up(self) -> bool:
        return self._is_set_up

    @property
    def owner(self) -> Optional[str]:
        return self._owner

    def assign_owner(self, owner_name: Optional[str]) -> None:
        self._owner = owner_name

    def bind(self, release: Optional[Callable[["Item"], None]]) -> None:
        """Attach (or with ``None`` detach) the container callback used to drop a spent item.

        Bound methods are stored through ``weakref.WeakMethod``.
        """
        if release is None:
            self._release = None
        elif hasattr(release, "__self__"):
            self._release = weakref.WeakMethod(release)  # type: ignore[arg-type]
        else:
            self._release = weakref.ref(release)

    def holder(self) -> Optional[object]:
        """The live container currently holding this item, if any."""
        release = self._release() if self._release is not None else None
        return getattr(release, "__self__", None)

    def setup(self) -> None:
        """Run the one-time initialisation. A second call raises ``AlreadySetUp``."""
        if self._is_set_up:
            raise AlreadySetUp(f"'{self._name}' is already set up")
        self._setup()
        self._is_set_up = True
        logger.debug("Item %s set up", self._name)

    def _setup(self) -> None:
        """Kind-specific initialisation hook. Default is a no-op."""

    def use(self, user: "Character", target: "Character") -> ItemUse:
        if self._state is ItemState.SPENT:
            raise ItemSpent(self._name)
        if not self._is_set_up:
            raise PreconditionNotMet(self._name, "item is not set up")
        reason = self._use_condition(user, target)
        if reason is not None:
            raise PreconditionNotMet(self._name, reason)

        amount = self._use_logic(user, target)
        spent = self._after_use()
        logger.debug(
            "%s used %s on %s (delta=%d, spent=%s)",
            user.name,
            self._name,
            target.name,
            amount,
            spent,
        )
        return ItemUse(item=self._name, user=user.name, target=target.name, amount=amount, spent=spent)

    def _use_condition(self, user: "Character", target: "Character") -> Optional[str]:
        """Return None if the item may be used, otherwise the reason it may not."""
        return None

    @abstractmethod
    def _use_logic(self, user: "Character", target: "Character") -> int:
        raise NotImplementedError

    def _after_use(self) -> bool:
        if not self._usable_once:
            return False
        self._state = ItemState.SPENT
        release = self._release() if self._release is not None else None
        if release is not None:
            release(self)
        self._release = None
        return True

    @staticmethod
    def _give_damage_to(target: "Character", amount: int) -> int:
        target.take_damage(amount)
        return -amount

    @staticmethod
    def _give_heal_to(target: "Character", amount: int) -> int:
        target.heal(amount)
        return amount

    @abstractmethod
    def payload(self) -> int:
        """The number shown after the name in listings."""

    def __str__(self) -> str:
        return f"{self._name}:{self.payload()}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r}, state={self._state.value})"


class Weapon(Item):
    def __init__(self, name: str, damage: int, usable_once: bool = False) -> None:
        super().__init__(name, usable_once=usable_once)
        self._damage = int(damage)

    @property
    def damage(self) -> int:
        return self._damage

    def payload(self) -> int:
        return self._damage

    def _use_logic(self, user: "Character", target: "Character") -> int:
        return self._give_damage_to(target, self._damage)


class Potion(Item):
    def __init__(self, name: str, heal_value: int, usable_once: bool = True) -> None:
        super().__init__(name, usable_once=usable_once)
        self._heal_value = int(heal_value)

    @property
    def heal_value(self) -> int:
        return self._heal_value

    def payload(self) -> int:
        return self._heal_value

    def _use_logic(self, user: "Character", target: "Character") -> int:
        return self._give_heal_to(target, self._heal_value)


class Spell(Item):
    """A spell that may only be cast on characters named at creation.

    The allowed targets are held by name and seeded into a frozen set by
    ``setup()``; until then the spell has no valid target.
    """

    def __init__(
        self,
        name: str,
        allowed_targets: Iterable[str],
        kind: SpellKind = SpellKind.DAMAGE,
        power: int = DEFAULT_SPELL_POWER,
        usable_once: bool = True,
    ) -> None:
        super().__init__(name, usable_once=usable_once)
        self._pending_targets = tuple(allowed_targets)
        self._allowed_targets: FrozenSet[str] = frozenset()
        self._kind = SpellKind(kind)
        self._power = int(power)

    @property
    def kind(self) -> SpellKind:
        return self._kind

    @property
    def power(self) -> int:
        return self._power

    @property
    def allowed_targets(self) -> FrozenSet[str]:
        return self._allowed_targets

    def payload(self) -> int:
        return len(self._allowed_targets)

    def _setup(self) -> None:
        self._allowed_targets = frozenset(self._pending_targets)
        self._pending_targets = ()

    def _use_condition(self, user: "Character", target: "Character") -> Optional[str]:
        if target.name not in self._allowed_targets:
            return f"{target.name} is not an allowed target"
        return None

    def _use_logic(self, user: "Character", target: "Character") -> int:
        if self._kind is SpellKind.HEAL:
            return self._give_heal_to(target, self._power)
        return self._give_damage_to(target, self._power)
