from __future__ import annotations

import logging
from dataclasses import dataclass, field
from importlib.resources import files as resource_files
from typing import Any, Dict, Mapping, Optional

import yaml

from .characters import ARCHETYPES
from .roles import ROLES_BY_KEY

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoryConfig:
    """Rules for a story session.

    Attributes:
        capacities: archetype label -> inventory key -> maximum item count.
        spell_power: magnitude used by spells created without an explicit power.
        remove_defeated: whether characters at or below 0 HP leave the roster.
        transcript_capacity: keep at most this many transcript lines (None = unbounded).
    """

    capacities: Mapping[str, Mapping[str, int]] = field(default_factory=dict)
    spell_power: int = 50
    remove_defeated: bool = True
    transcript_capacity: Optional[int] = None

    def capacities_for(self, archetype: str) -> Dict[str, int]:
        return dict(self.capacities.get(archetype, {}))


def _read_default_text() -> str:
    return resource_files("fantasy_story").joinpath("data").joinpath("defaults.yaml").read_text(encoding="utf-8")


def _as_int(value: Any, what: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{what} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{what} must be an integer, got {value!r}") from None


def _as_bool(value: Any, what: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"{what} must be true or false, got {value!r}")
    return value


def _safe_load(text: Any, source: str) -> Any:
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {source}: {exc}") from exc


def _validate_capacities(raw: Any) -> Dict[str, Dict[str, int]]:
    if not isinstance(raw, Mapping):
        raise ValueError("capacities must be a mapping of archetype -> inventory sizes")
    result: Dict[str, Dict[str, int]] = {}
    for archetype, sizes in raw.items():
        if archetype not in ARCHETYPES:
            raise ValueError(f"Unknown archetype in capacities: {archetype}")
        if not isinstance(sizes, Mapping):
            raise ValueError(f"capacities.{archetype} must be a mapping")
        result[archetype] = {}
        for key, value in sizes.items():
            if key not in ROLES_BY_KEY:
                raise ValueError(f"Unknown inventory '{key}' for {archetype}")
            size = _as_int(value, f"capacities.{archetype}.{key}")
            if size < 0:
                raise ValueError(f"capacities.{archetype}.{key} must be non-negative")
            result[archetype][key] = size
    return result


def _merge(base: Dict[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = _merge(dict(merged[key]), value)
        else:
            merged[key] = value
    return merged


def load_config(path: Optional[str] = None) -> StoryConfig:
    """Load session rules from YAML.

    The embedded ``fantasy_story/data/defaults.yaml`` is always read first;
    when ``path`` is given its values are merged over the defaults.

    Raises:
        ValueError: If the YAML is malformed or a value has the wrong shape or range.
    """
    raw: Dict[str, Any] = _safe_load(_read_default_text(), "embedded defaults") or {}
    logger.debug("Loaded embedded story defaults")
    if path is not None:
        with open(path, "r", encoding="utf-8") as f:
            user = _safe_load(f, path) or {}
        if not isinstance(user, Mapping):
            raise ValueError(f"Config file {path} must contain a mapping")
        raw = _merge(raw, user)
        logger.debug("Merged story config from path: %s", path)

    transcript_capacity = raw.get("transcript_capacity")
    if transcript_capacity is not None:
        transcript_capacity = _as_int(transcript_capacity, "transcript_capacity")
        if transcript_capacity <= 0:
            raise ValueError("transcript_capacity must be positive")

    config = StoryConfig(
        capacities=_validate_capacities(raw.get("capacities", {})),
        spell_power=_as_int(raw.get("spell_power", 50), "spell_power"),
        remove_defeated=_as_bool(raw.get("remove_defeated", True), "remove_defeated"),
        transcript_capacity=transcript_capacity,
    )
    logger.info(
        "Story config: spell_power=%d remove_defeated=%s transcript_capacity=%s",
        config.spell_power,
        config.remove_defeated,
        config.transcript_capacity,
    )
    return config
