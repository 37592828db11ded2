from __future__ import annotations

import logging
from typing import Callable, Dict, Generic, Iterator, List, Optional, Set, TypeVar, Union

from .exceptions import CapacityExceeded, ItemAlreadyHeld, ItemSpent, NotFound
from .items import Item

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Item)


class Container(Generic[T]):
    """Name-keyed collection of items.

    - Keys always equal the stored item's ``name``.
    - Adding under an existing name overwrites the old entry; callers that
      want to reject collisions must check ``contains`` first.
    - Iteration is in name order.
    - A use-once item that gets spent removes itself through the callback
      bound in ``add``; its name is remembered so a later lookup reports
      ``ItemSpent`` rather than a plain miss.
    - An item lives in at most one container; adding one that another
      container still holds raises ``ItemAlreadyHeld``.
    """

    label = "container"

    def __init__(self) -> None:
        self._elements: Dict[str, T] = {}
        self._spent: Set[str] = set()

    def add(self, item: T) -> None:
        holder = item.holder()
        if holder is not None and holder is not self:
            raise ItemAlreadyHeld(item.name, getattr(holder, "label", "container"))
        name = item.name
        previous = self._elements.get(name)
        if previous is not None and previous is not item:
            previous.bind(None)
            logger.debug("Overwriting %s in %s", name, self.label)
        self._elements[name] = item
        self._spent.discard(name)
        item.bind(self._retire)
        logger.debug("Added %s to %s (size=%d)", name, self.label, len(self._elements))

    def remove(self, item: Union[T, str]) -> T:
        """Remove an entry by item or by name and return it.

        Raises:
            NotFound: If the container is empty or holds no such name.
        """
        name = self._key(item)
        if not self._elements or name not in self._elements:
            raise NotFound(name, self.label)
        removed = self._elements.pop(name)
        removed.bind(None)
        logger.debug("Removed %s from %s (size=%d)", name, self.label, len(self._elements))
        return removed

    def contains(self, item: Union[T, str]) -> bool:
        return self._key(item) in self._elements

    def find(self, name: str) -> T:
        """Return the item stored under ``name``.

        Raises:
            ItemSpent: If the name belonged to a use-once item spent from here.
            NotFound: If no entry exists.
        """
        try:
            return self._elements[name]
        except KeyError:
            if name in self._spent:
                raise ItemSpent(name) from None
            raise NotFound(name, self.label) from None

    def get(self, name: str) -> Optional[T]:
        return self._elements.get(name)

    def names(self) -> List[str]:
        return sorted(self._elements)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, (str, Item)):
            return self.contains(item)  # type: ignore[arg-type]
        return False

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[T]:
        for name in sorted(self._elements):
            yield self._elements[name]

    def _retire(self, item: Item) -> None:
        if self._elements.get(item.name) is item:
            del self._elements[item.name]
            self._spent.add(item.name)
            logger.debug("%s spent; dropped from %s", item.name, self.label)

    @staticmethod
    def _key(item: Union[Item, str]) -> str:
        return item if isinstance(item, str) else item.name


class Listing:
    """Restartable view over a container's formatted entries.

    Each iteration walks the container afresh, so the listing always reflects
    the current contents and never mutates them.
    """

    def __init__(self, source: Callable[[], Iterator[Item]]) -> None:
        self._source = source

    def __iter__(self) -> Iterator[str]:
        return (str(item) for item in self._source())

    def line(self) -> str:
        return " ".join(self)

    def __repr__(self) -> str:
        return f"Listing({list(self)!r})"


class BoundedContainer(Container[T]):
    """Container with a fixed maximum number of entries.

    An add that would exceed ``capacity`` is rejected with
    ``CapacityExceeded`` and leaves the contents untouched. The check is on
    the current size, so a full container also rejects an overwriting add.
    """

    def __init__(self, capacity: int, label: str = "container") -> None:
        super().__init__()
        if capacity < 0:
            raise ValueError("capacity must be non-negative")
        self._capacity = int(capacity)
        self.label = label

    @property
    def capacity(self) -> int:
        return self._capacity

    def space_left(self) -> int:
        return self._capacity - len(self)

    def is_full(self) -> bool:
        return len(self) >= self._capacity

    def add(self, item: T) -> None:
        if len(self) == self._capacity:
            logger.debug("Rejected %s: %s is full (%d)", item.name, self.label, self._capacity)
            raise CapacityExceeded(item.name, self._capacity)
        super().add(item)

    def show(self) -> Listing:
        return Listing(self.__iter__)
