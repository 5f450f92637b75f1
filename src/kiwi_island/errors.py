from __future__ import annotations

from typing import List, Optional


class KiwiIslandError(Exception):
    """Base error for Kiwi Island domain exceptions."""


class LevelLoadError(KiwiIslandError):
    """Raised when a level description cannot be read or is malformed.

    Gameplay never raises this; it aborts game creation only.
    """

    def __init__(self, message: str, details: Optional[List[str]] = None) -> None:
        super().__init__(message)
        self.details = list(details or [])

    def to_human(self) -> str:
        parts = [str(self)]
        for detail in self.details:
            parts.append(f" - {detail}")
        return "\n".join(parts)


class ReentrantActionError(KiwiIslandError):
    """Raised when a listener calls a mutating game operation while being notified."""
