import logging
from typing import FrozenSet, Iterable, List, Set

logger = logging.getLogger(__name__)

SFX_BREAK_TRAP = "break_trap"
SFX_TRAP = "trap"
SFX_EAT = "eat"
SFX_COUNT_KIWI = "count_kiwi"
SFX_HAZARD = "hazard"
SFX_WIN = "win"
SFX_LOSE = "lose"

SOUND_EFFECTS: FrozenSet[str] = frozenset(
    {SFX_BREAK_TRAP, SFX_TRAP, SFX_EAT, SFX_COUNT_KIWI, SFX_HAZARD, SFX_WIN, SFX_LOSE}
)


def check_sound_effect(key: str) -> str:
    if key not in SOUND_EFFECTS:
        raise ValueError(f"Unknown sound effect: {key!r}")
    return key


class AudioManager:
    """Sound cues raised by the game, for a front end to voice.

    The game names the cue; only cues enabled here are queued in ``played``.
    Cue names outside SOUND_EFFECTS are programming errors and raise
    ValueError.
    """

    def __init__(self, enabled: Iterable[str] = ()) -> None:
        self._enabled: Set[str] = {check_sound_effect(key) for key in enabled}
        self._played: List[str] = []

    def enable(self, key: str) -> None:
        self._enabled.add(check_sound_effect(key))

    def disable(self, key: str) -> None:
        self._enabled.discard(check_sound_effect(key))

    def is_enabled(self, key: str) -> bool:
        return key in self._enabled

    def play_sfx(self, key: str) -> None:
        check_sound_effect(key)
        if key in self._enabled:
            self._played.append(key)
            logger.debug("Cue %s", key)

    @property
    def played(self) -> List[str]:
        return list(self._played)

    def drain(self) -> List[str]:
        """Hand the queued cues to the caller and forget them."""
        cues, self._played = self._played, []
        return cues
