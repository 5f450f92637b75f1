from __future__ import annotations

import logging
import os
import secrets
import string
from enum import Enum
from typing import List, Optional

from .audio import SFX_COUNT_KIWI, SFX_EAT, SFX_LOSE, SFX_TRAP, SFX_WIN, AudioManager
from .config import GameConfig
from .errors import ReentrantActionError
from .events import GameEvents, Listener
from .hazards import HazardService
from .island import Island
from .levels.builder import build_world
from .levels.loader import load_level
from .levels.models import LevelDescription
from .occupants import Occupant, OccupantKind
from .player import Player, PlayerSnapshot
from .position import Direction, Position
from .terrain import Terrain

logger = logging.getLogger(__name__)

REWARD_ALPHABET = string.ascii_uppercase + string.digits
REWARD_CODE_LENGTH = 8

LOSE_PREFIX = "Sorry, you have lost the game. "
NO_STAMINA_TO_MOVE = "You do not have sufficient stamina to move."
WIN_ALL_PREDATORS = "You win! You have done an excellent job and trapped all the predators."
WIN_KIWIS_AND_PREDATORS = "You win! You have counted all the kiwi and trapped at least {percent}% of the predators."
REWARD_LINE = "\n Your $2 tuck shop discount code: {code}"


class GameState(str, Enum):
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"

    @property
    def is_terminal(self) -> bool:
        return self is not GameState.PLAYING


def generate_reward_code(length: int = REWARD_CODE_LENGTH) -> str:
    """Random reward code of ``length`` characters from A-Z and 0-9 (cryptographic source)."""
    return "".join(secrets.choice(REWARD_ALPHABET) for _ in range(length))


class Game:
    """Knows the Kiwi Island rules and state and enforces them.

    - Owns one Island and one Player built from a level description.
    - Mutating operations return False (or 0) when illegal and leave the
      state untouched; a finished game rejects every mutation.
    - After every action that changed something the win/lose rules are
      re-evaluated and listeners are notified synchronously.
    - Listeners must not call mutating operations while being notified; doing
      so raises ReentrantActionError.
    """

    def __init__(
        self,
        level: LevelDescription,
        *,
        config: Optional[GameConfig] = None,
        audio: Optional[AudioManager] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.audio = audio or AudioManager(self.config.sound_effects)
        self.events = GameEvents()
        self.hazards = HazardService(self.audio)
        self._start(level)

    @classmethod
    def from_file(cls, path: os.PathLike | str, **kwargs) -> "Game":
        return cls(load_level(path), **kwargs)

    def _start(self, level: LevelDescription) -> None:
        world = build_world(level, self.config)
        self.level = level
        self.island: Island = world.island
        self.player: Player = world.player
        self.total_kiwis = world.total_kiwis
        self.total_predators = world.total_predators
        self.kiwi_count = 0
        self.predators_trapped = 0
        self.state = GameState.PLAYING
        self.reward_code: Optional[str] = None
        self.win_message = ""
        self.lose_message = ""
        self._player_message = ""
        logger.info(
            "New game on '%s': %d kiwis, %d predators",
            level.name or "unnamed level",
            self.total_kiwis,
            self.total_predators,
        )

    def new_game(self, level: Optional[LevelDescription] = None) -> None:
        """Start over on ``level`` (or the current level). Listeners are kept."""
        self._guard_reentry()
        self._start(level or self.level)
        self.events.notify()

    def restart(self) -> None:
        self.new_game()

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------
    def add_listener(self, listener: Listener) -> None:
        self.events.subscribe(listener)

    def remove_listener(self, listener: Listener) -> None:
        self.events.unsubscribe(listener)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def num_rows(self) -> int:
        return self.island.num_rows

    @property
    def num_columns(self) -> int:
        return self.island.num_columns

    @property
    def player_name(self) -> str:
        return self.player.name

    @property
    def predators_remaining(self) -> int:
        return self.total_predators - self.predators_trapped

    def player_values(self) -> PlayerSnapshot:
        return self.player.snapshot()

    def inventory(self) -> List[Occupant]:
        return self.player.inventory

    def occupant(self, oid: int) -> Occupant:
        return self.island.registry.get(oid)

    def _pos(self, row: int, column: int) -> Position:
        return self.island.position(row, column)

    def terrain(self, row: int, column: int) -> Terrain:
        return self.island.terrain_at(self._pos(row, column))

    def is_visible(self, row: int, column: int) -> bool:
        return self.island.is_visible(self._pos(row, column))

    def is_explored(self, row: int, column: int) -> bool:
        return self.island.is_explored(self._pos(row, column))

    def has_player(self, row: int, column: int) -> bool:
        return self.island.has_player(self._pos(row, column))

    def occupants_at(self, row: int, column: int) -> List[Occupant]:
        return self.island.occupants_at(self._pos(row, column))

    def occupants_at_player(self) -> List[Occupant]:
        return self.island.occupants_at(self.player.position)

    def occupant_symbols(self, row: int, column: int) -> str:
        return self.island.occupant_symbols(self._pos(row, column))

    @staticmethod
    def occupant_description(what: object) -> str:
        return what.description if isinstance(what, Occupant) else ""

    def render(self, show_hidden: bool = False) -> str:
        return self.island.render(show_hidden=show_hidden)

    def has_player_message(self) -> bool:
        return self._player_message != ""

    def get_player_message(self) -> str:
        """Return the advisory message for the player and clear it."""
        message = self._player_message
        self._player_message = ""  # Already told player.
        return message

    def is_player_move_possible(self, direction: Direction) -> bool:
        new_position = self.player.position.neighbor(direction)
        if not new_position.is_on_island():
            return False
        terrain = self.island.terrain_at(new_position)
        return self.player.has_stamina_to_move(terrain) and self.player.is_alive()

    def player_can_move(self) -> bool:
        return any(self.is_player_move_possible(d) for d in Direction)

    def can_collect(self, what: object) -> bool:
        """Is ``what`` a carryable item lying on the player's tile?"""
        return (
            isinstance(what, Occupant)
            and what.is_ok_to_carry()
            and self.island.has_occupant(self.player.position, what)
        )

    def can_count(self, what: object) -> bool:
        return isinstance(what, Occupant) and what.kind is OccupantKind.KIWI and not what.counted

    def can_use(self, what: object) -> bool:
        if not isinstance(what, Occupant) or not what.is_item or not self.player.has_item(what):
            return False
        if what.kind is OccupantKind.FOOD:
            # Food can always be used (though may be wasted)
            return True
        if what.is_trap:
            return not what.is_broken and self.island.has_predator(self.player.position)
        if what.is_screwdriver:
            return self._broken_trap() is not None
        return False

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------
    def _guard_reentry(self) -> None:
        if self.events.notifying:
            raise ReentrantActionError("game actions cannot be performed from a listener")

    def _accepting_actions(self) -> bool:
        self._guard_reentry()
        if self.state.is_terminal:
            logger.debug("Ignoring action: game is %s", self.state.value)
            return False
        return True

    def move(self, direction: Direction) -> bool:
        """Move the player one tile. Returns False for an illegal move."""
        if not self._accepting_actions() or not self.is_player_move_possible(direction):
            return False
        new_position = self.player.position.neighbor(direction)
        terrain = self.island.terrain_at(new_position)
        self.player.move_to_position(new_position, terrain)
        self.island.update_player_position(self.player)
        logger.debug("Player moved %s to %s (%s)", direction.name, new_position, terrain.name)

        self._check_for_hazards()
        self._update_game_state()
        return True

    def collect_item(self, item: object) -> bool:
        """Pick up an item on the player's tile into the backpack."""
        if not self._accepting_actions() or not self.can_collect(item):
            return False
        assert isinstance(item, Occupant)
        if not self.player.can_carry(item):
            logger.debug("Backpack cannot take %r", item)
            return False
        self.island.remove_occupant(self.player.position, item)
        self.player.collect(item)
        self._update_game_state()
        return True

    def drop_item(self, item: object) -> bool:
        """Put a held item down on the player's tile; a full tile keeps it in the backpack."""
        if not self._accepting_actions() or not isinstance(item, Occupant):
            return False
        if not self.player.drop(item):
            return False
        if not self.island.add_occupant(self.player.position, item):
            # grid square is full: player has to take the item back
            self.player.collect(item)
            return False
        self._update_game_state()
        return True

    def use_item(self, item: object) -> bool:
        """Eat held food, trap a predator with a held trap or fix a trap with a screwdriver.

        The win/lose rules are re-evaluated whether or not the use succeeded.
        """
        if not self._accepting_actions():
            return False
        success = False
        if isinstance(item, Occupant) and self.player.has_item(item):
            if item.kind is OccupantKind.FOOD:
                self.player.increase_stamina(item.energy)
                # food is consumed
                self.player.drop(item)
                self.audio.play_sfx(SFX_EAT)
                success = True
            elif item.is_trap and not item.is_broken:
                success = self._trap_predator()
            elif item.is_screwdriver:
                trap = self._broken_trap()
                success = trap is not None and trap.fix()
        logger.debug("Use of %r: success=%s", item, success)
        self._update_game_state()
        return success

    def count_kiwi(self) -> int:
        """Count every uncounted kiwi on the player's tile. Returns how many were counted."""
        if not self._accepting_actions():
            return 0
        position = self.player.position
        counted = 0
        for occupant in self.island.occupants_at(position):
            if occupant.kind is OccupantKind.KIWI and occupant.count():
                self.kiwi_count += 1
                self.island.remove_occupant(position, occupant)
                counted += 1
        if counted:
            self.audio.play_sfx(SFX_COUNT_KIWI)
        self._update_game_state()
        return counted

    # ------------------------------------------------------------------
    # Rules
    # ------------------------------------------------------------------
    def _broken_trap(self) -> Optional[Occupant]:
        for item in self.player.inventory:
            if item.is_trap and item.is_broken:
                return item
        return None

    def _trap_predator(self) -> bool:
        current = self.player.position
        predator = self.island.predator_at(current)
        if predator is None:
            return False
        self.island.remove_occupant(current, predator)
        self.predators_trapped += 1
        self.audio.play_sfx(SFX_TRAP)
        logger.debug("Trapped %r (%d/%d)", predator, self.predators_trapped, self.total_predators)
        return True

    def _check_for_hazards(self) -> None:
        # every hazard on the tile applies, even after one has been fatal
        for occupant in self.island.occupants_at(self.player.position):
            if occupant.kind is not OccupantKind.HAZARD:
                continue
            outcome = self.hazards.apply(self.player, occupant)
            if outcome.lose_cause is not None:
                self.lose_message = outcome.lose_cause
            if outcome.player_message is not None:
                self._player_message = outcome.player_message

    def _update_game_state(self) -> None:
        """Apply the win/lose rules, first match wins, then notify listeners."""
        if not self.player.is_alive():
            self._finish(GameState.LOST, LOSE_PREFIX + self.lose_message)
        elif not self.player_can_move():
            self._finish(GameState.LOST, LOSE_PREFIX + NO_STAMINA_TO_MOVE)
        elif self.total_predators > 0 and self.predators_trapped == self.total_predators:
            self._finish(GameState.WON, WIN_ALL_PREDATORS)
        elif (
            self.kiwi_count == self.total_kiwis
            and self.predators_trapped >= self.total_predators * self.config.min_required_catch
        ):
            percent = round(self.config.min_required_catch * 100)
            self._finish(GameState.WON, WIN_KIWIS_AND_PREDATORS.format(percent=percent))
        self.events.notify()

    def _finish(self, state: GameState, message: str) -> None:
        self.state = state
        if state is GameState.WON:
            self.reward_code = generate_reward_code()
            self.win_message = message + REWARD_LINE.format(code=self.reward_code)
            self.audio.play_sfx(SFX_WIN)
        else:
            self.lose_message = message
            self.audio.play_sfx(SFX_LOSE)
        logger.info("Game over: %s", state.value)


__all__ = ["Game", "GameState", "generate_reward_code", "REWARD_ALPHABET", "REWARD_CODE_LENGTH"]
