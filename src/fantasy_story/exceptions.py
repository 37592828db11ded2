from __future__ import annotations


class StoryError(Exception):
    """Base exception for the fantasy_story project.

    Every failure a single command can run into derives from this class, so a
    command loop only needs to catch ``StoryError`` to keep the session going.
    """


class NotFound(StoryError):
    """Raised when a container has no entry under the requested name."""

    def __init__(self, name: str, container: str = "container") -> None:
        self.name = name
        self.container = container
        super().__init__(f"'{name}' not found in {container}")


class CapacityExceeded(StoryError):
    """Raised when adding to a bounded container that is already full."""

    def __init__(self, name: str, capacity: int) -> None:
        self.name = name
        self.capacity = capacity
        super().__init__(f"Cannot add '{name}': capacity of {capacity} reached")


class PreconditionNotMet(StoryError):
    """Raised when an item's use-condition rejects the user/target pair."""

    def __init__(self, item: str, reason: str) -> None:
        self.item = item
        self.reason = reason
        super().__init__(f"Cannot use '{item}': {reason}")


class ItemSpent(StoryError):
    """Raised when a use-once item is used again."""

    def __init__(self, item: str) -> None:
        self.item = item
        super().__init__(f"'{item}' has already been used up")


class UnknownCharacter(StoryError):
    """Raised when the roster has no character with the given name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown character '{name}'")


class DuplicateCharacter(StoryError):
    """Raised when registering a name the roster already holds."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Character '{name}' already exists")


class UnknownArchetype(StoryError):
    """Raised when asked to create a character class that does not exist."""

    def __init__(self, archetype: str) -> None:
        self.archetype = archetype
        super().__init__(f"Unknown archetype '{archetype}'")


class MissingRole(StoryError):
    """Raised when a character lacks the inventory role an action needs."""

    def __init__(self, character: str, role: str) -> None:
        self.character = character
        self.role = role
        super().__init__(f"{character} cannot carry {role}")


class AlreadySetUp(StoryError):
    """Raised when ``Item.setup`` is called a second time."""


class ItemAlreadyHeld(StoryError):
    """Raised when adding an item that another container still holds."""

    def __init__(self, item: str, holder: str) -> None:
        self.item = item
        self.holder = holder
        super().__init__(f"'{item}' is already held in a {holder}")


class InvalidCommand(StoryError):
    """Raised by the command interpreter for malformed script lines."""

    def __init__(self, line: str, detail: str) -> None:
        self.line = line
        self.detail = detail
        super().__init__(f"Invalid command '{line}': {detail}")
