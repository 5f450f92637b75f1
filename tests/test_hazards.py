import pytest

from kiwi_island.audio import AudioManager
from kiwi_island.hazards import BROKEN_TRAP_MESSAGE, OUT_OF_STAMINA_MESSAGE, HazardService
from kiwi_island.occupants import HazardData, KiwiData, Occupant, OccupantKind, ToolData
from kiwi_island.player import Player
from kiwi_island.position import Position


def hazard(name, impact, description="A deep hole"):
    return Occupant(99, OccupantKind.HAZARD, name, description, HazardData(impact))


def make_player(stamina=10.0):
    return Player(Position(0, 0, 2, 2), "Kiri", stamina, 5.0, 5.0)


def test_fatal_hazard_kills():
    service = HazardService(AudioManager())
    player = make_player()
    outcome = service.apply(player, hazard("Cliff", 1.0, "A steep cliff"))
    assert outcome.killed
    assert not player.is_alive()
    assert outcome.lose_cause == "A steep cliff has killed you."
    assert outcome.player_message is None


def test_generic_hazard_reduces_stamina_by_fraction_of_maximum():
    audio = AudioManager(["hazard"])
    player = make_player(stamina=10.0)
    outcome = HazardService(audio).apply(player, hazard("Hole", 0.3))
    assert not outcome.killed
    assert player.stamina == pytest.approx(7.0)
    assert outcome.stamina_before == pytest.approx(10.0)
    assert outcome.player_message == "A deep hole has reduced your stamina."
    assert audio.played == ["hazard"]


def test_generic_hazard_can_exhaust_stamina():
    player = make_player(stamina=10.0)
    player.reduce_stamina(6.0)
    outcome = HazardService(AudioManager()).apply(player, hazard("Hole", 0.5))
    assert outcome.killed
    assert outcome.lose_cause == OUT_OF_STAMINA_MESSAGE
    assert player.stamina == pytest.approx(-1.0)


def test_break_trap_hazard_breaks_held_trap():
    audio = AudioManager(["break_trap"])
    player = make_player()
    trap = Occupant(1, OccupantKind.TOOL, "Trap", "A trap", ToolData(1.0, 1.0))
    player.collect(trap)

    outcome = HazardService(audio).apply(player, hazard("Broken trap", 0.0, "A fallen tree"))
    assert trap.is_broken
    assert outcome.player_message == BROKEN_TRAP_MESSAGE
    assert player.stamina == pytest.approx(10.0)
    assert audio.played == ["break_trap"]


def test_break_trap_hazard_without_trap_is_harmless():
    audio = AudioManager(["break_trap"])
    player = make_player()
    outcome = HazardService(audio).apply(player, hazard("Broken trap", 0.0))
    assert outcome.player_message is None
    assert player.is_alive()
    assert audio.played == []


def test_non_hazard_rejected():
    kiwi = Occupant(1, OccupantKind.KIWI, "Kiwi", "", KiwiData())
    with pytest.raises(ValueError):
        HazardService(AudioManager()).apply(make_player(), kiwi)
