import logging
from dataclasses import dataclass
from typing import Optional

from .audio import SFX_BREAK_TRAP, SFX_HAZARD, AudioManager
from .occupants import Occupant, OccupantKind
from .player import Player

logger = logging.getLogger(__name__)

BROKEN_TRAP_MESSAGE = (
    "Sorry your predator trap is broken. You will need to find tools to fix it "
    "before you can use it again."
)
OUT_OF_STAMINA_MESSAGE = "You have run out of stamina"


@dataclass(frozen=True)
class HazardOutcome:
    """What applying one hazard did to the player.

    Attributes:
      killed: the hazard killed the player.
      lose_cause: cause of death, set only when ``killed``.
      player_message: advisory message for a survivable hazard, if any.
      stamina_before / stamina_after: the player's stamina around the hazard.
    """
    killed: bool
    lose_cause: Optional[str]
    player_message: Optional[str]
    stamina_before: float
    stamina_after: float


class HazardService:
    """Applies hazard effects to the player and plays sound hooks."""

    def __init__(self, audio: AudioManager) -> None:
        self.audio = audio

    def apply(self, player: Player, hazard: Occupant) -> HazardOutcome:
        if hazard.kind is not OccupantKind.HAZARD:
            raise ValueError(f"{hazard!r} is not a hazard")
        before = player.stamina
        killed = False
        lose_cause = None
        message = None

        if hazard.is_fatal:
            player.kill()
            killed = True
            lose_cause = f"{hazard.description} has killed you."
        elif hazard.is_break_trap:
            trap = player.get_trap()
            if trap is not None:
                trap.set_broken()
                self.audio.play_sfx(SFX_BREAK_TRAP)
                message = BROKEN_TRAP_MESSAGE
        else:
            # Impact is a reduction in stamina by this fraction of maximum stamina
            player.reduce_stamina(player.maximum_stamina * hazard.impact)
            self.audio.play_sfx(SFX_HAZARD)
            if player.stamina <= 0.0:
                player.kill()
                killed = True
                lose_cause = OUT_OF_STAMINA_MESSAGE
            else:
                message = f"{hazard.description} has reduced your stamina."

        logger.debug(
            "Hazard %r applied: killed=%s stamina %.2f -> %.2f",
            hazard,
            killed,
            before,
            player.stamina,
        )
        return HazardOutcome(
            killed=killed,
            lose_cause=lose_cause,
            player_message=message,
            stamina_before=before,
            stamina_after=player.stamina,
        )
