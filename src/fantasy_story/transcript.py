from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TranscriptEntry:
    """A single line written to the transcript.

    Attributes:
        index: Position of the entry in the session, starting at 1.
        message: The formatted line as the reader sees it.
        verb: Action that produced the line (e.g. "attack", "show", "error").
        actor: Name of the acting character, if any.
        target: Name of the affected character, if any.
        failed: True if the line reports a failed command.
    """

    index: int
    message: str
    verb: str = ""
    actor: Optional[str] = None
    target: Optional[str] = None
    failed: bool = False


class Transcript:
    """In-memory, line-oriented output channel for a story session.

    The core writes here and never touches files or streams; the driver
    decides where ``lines()`` end up. With a ``capacity`` the oldest entries
    are dropped once it is exceeded.
    """

    def __init__(self, capacity: Optional[int] = None) -> None:
        if capacity is not None and capacity <= 0:
            raise ValueError("capacity must be positive")
        self._capacity = capacity
        self._entries: List[TranscriptEntry] = []
        self._written = 0

    @property
    def capacity(self) -> Optional[int]:
        return self._capacity

    def write(
        self,
        message: str,
        *,
        verb: str = "",
        actor: Optional[str] = None,
        target: Optional[str] = None,
        failed: bool = False,
    ) -> TranscriptEntry:
        self._written += 1
        entry = TranscriptEntry(
            index=self._written,
            message=message,
            verb=verb,
            actor=actor,
            target=target,
            failed=failed,
        )
        self._entries.append(entry)
        if self._capacity is not None and len(self._entries) > self._capacity:
            dropped = len(self._entries) - self._capacity
            del self._entries[0:dropped]
            logger.debug("Transcript capacity exceeded, dropped=%d old entries", dropped)
        logger.debug("Transcript #%d: %s", entry.index, message)
        return entry

    def entries(self) -> List[TranscriptEntry]:
        return list(self._entries)

    def lines(self) -> List[str]:
        return [e.message for e in self._entries]

    def get_recent(self, n: int) -> List[TranscriptEntry]:
        if n <= 0:
            return []
        return self._entries[-n:]

    def last_by(self, actor: str) -> Optional[TranscriptEntry]:
        for entry in reversed(self._entries):
            if entry.actor == actor:
                return entry
        return None

    def clear(self) -> None:
        logger.debug("Clearing transcript (count=%d)", len(self._entries))
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.lines())
