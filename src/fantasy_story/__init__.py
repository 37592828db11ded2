"""
Fantasy Story package root.

A turn-based narrative simulator core: characters with health, bounded
name-keyed inventories of weapons, potions and spells, and the "use an item
on a target" protocol. Script parsing and transcript writing live in
``commands`` and ``cli``; everything else performs no I/O.
"""

from .characters import ARCHETYPES, Archer, Character, Fighter, Wizard
from .containers import BoundedContainer, Container, Listing
from .exceptions import (
    AlreadySetUp,
    CapacityExceeded,
    DuplicateCharacter,
    InvalidCommand,
    ItemAlreadyHeld,
    ItemSpent,
    MissingRole,
    NotFound,
    PreconditionNotMet,
    StoryError,
    UnknownArchetype,
    UnknownCharacter,
)
from .items import Item, ItemState, ItemUse, Potion, Spell, SpellKind, Weapon
from .roles import PotionUser, SpellUser, WeaponUser
from .roster import Roster
from .session import StorySession
from .transcript import Transcript, TranscriptEntry

__version__ = "0.1.0"

__all__ = [
    "ARCHETYPES",
    "AlreadySetUp",
    "Archer",
    "BoundedContainer",
    "CapacityExceeded",
    "Character",
    "Container",
    "DuplicateCharacter",
    "Fighter",
    "InvalidCommand",
    "ItemAlreadyHeld",
    "Item",
    "ItemSpent",
    "ItemState",
    "ItemUse",
    "Listing",
    "MissingRole",
    "NotFound",
    "Potion",
    "PotionUser",
    "PreconditionNotMet",
    "Roster",
    "Spell",
    "SpellKind",
    "SpellUser",
    "StoryError",
    "StorySession",
    "Transcript",
    "TranscriptEntry",
    "UnknownArchetype",
    "UnknownCharacter",
    "Weapon",
    "WeaponUser",
    "Wizard",
]
