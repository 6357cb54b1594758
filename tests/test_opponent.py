"""Tests for the opponent controller."""

from unittest.mock import MagicMock

import pytest

from nebula_clash.agent.opponent import OpponentController, TurnSummary
from nebula_clash.agent.targeting import TargetingHeuristic
from nebula_clash.engine.game_engine import GameEngine
from nebula_clash.engine.placement import new_game
from nebula_clash.engine.ship_identifier import identify_ships
from nebula_clash.interface.renderer import COMPONENT_SYMBOLS
from nebula_clash.models.cell import Grid
from nebula_clash.models.command import EndTurn, PlaceAllRandomly, StartGame
from nebula_clash.models.component import COMPONENT_SPECS, Component
from nebula_clash.models.game import GameSettings, GameState
from nebula_clash.models.player import PlayerState

KINDS_BY_SYMBOL = {symbol: kind for kind, symbol in COMPONENT_SYMBOLS.items()}


def build_player(rows, budget=20):
    """Build a player from one string per row ('.' is empty water)."""
    grid = Grid(size=len(rows))
    spent = 0
    for r, line in enumerate(rows):
        for c, symbol in enumerate(line):
            if symbol in KINDS_BY_SYMBOL:
                kind = KINDS_BY_SYMBOL[symbol]
                grid.cells[r][c].component = Component(id=f"{r}-{c}-{kind.value}", kind=kind)
                spent += COMPONENT_SPECS[kind].points
    player = PlayerState(grid=grid, budget=budget, points=budget - spent, total_points=spent)
    player.ships = identify_ships(grid)
    return player


def create_ai_turn_state(ai_rows, player_rows=None):
    """5x5 game in play with the AI to move."""
    player_rows = player_rows or ["##...", ".....", ".....", ".....", "....."]
    return GameState(
        seed=9,
        player=build_player(player_rows),
        ai=build_player(ai_rows),
        settings=GameSettings(board_size=5),
        phase="playing",
        turn="ai",
        turn_number=1,
    )


def test_full_turn_energizes_charges_fires_and_ends():
    state = create_ai_turn_state(["seae.", ".....", ".....", ".....", "....."])

    state, summary = OpponentController().play_turn(state)

    assert summary.side == "ai"
    assert summary.energy_links == 2
    assert summary.charges == 1
    assert len(summary.attacks) == 1
    assert summary.ended_turn
    assert state.turn == "human"
    assert state.turn_number == 2
    assert len(state.player.grid.untried()) == 24
    assert state.ai.grid.cell((0, 0)).component.ammo_charge == 0


def test_ammo_producers_energized_before_weapons():
    state = create_ai_turn_state(["mea..", ".....", ".....", ".....", "....."])

    state, summary = OpponentController().play_turn(state)

    assert summary.energy_links == 1
    assert summary.charges == 1
    assert summary.attacks == []
    assert state.ai.grid.cell((0, 0)).component.ammo_charge == 1


def test_medical_bays_energized_first():
    state = create_ai_turn_state(["+es..", ".....", ".....", ".....", "....."])
    engine = GameEngine()
    controller = OpponentController(engine=engine)

    energized = controller._energize(state, TurnSummary(side="ai"))

    assert energized.ai.grid.cell((0, 1)).component.powered_component_id == "0-0-medical-bay"


def test_charge_persists_across_turns_until_weapon_fires():
    state = create_ai_turn_state(["mea..", ".e...", ".....", ".....", "....."])
    controller = OpponentController()
    engine = controller.engine

    attacks = 0
    for _ in range(4):
        state, summary = controller.play_turn(state)
        attacks += len(summary.attacks)
        # Human passes
        state = engine.apply(state, EndTurn()).state
        if attacks:
            break

    assert attacks == 1
    assert state.ai.grid.cell((0, 0)).component.ammo_charge == 0


def test_firing_updates_targeting_memory():
    heuristic = TargetingHeuristic()
    heuristic.choose_target = MagicMock(return_value=(0, 0))
    state = create_ai_turn_state(["seae.", ".....", ".....", ".....", "....."])

    state, summary = OpponentController(heuristic=heuristic).play_turn(state)

    assert summary.attacks[0]["result"] == "hit"
    memory = state.ai_memory["ai"]
    assert memory.last_hit == (0, 0)
    assert memory.search_and_destroy


def test_winning_shot_skips_end_turn():
    state = create_ai_turn_state(
        ["seae.", ".....", ".....", ".....", "....."],
        player_rows=["#....", ".....", ".....", ".....", "....."],
    )
    heuristic = TargetingHeuristic()
    heuristic.choose_target = MagicMock(return_value=(0, 0))

    state, summary = OpponentController(heuristic=heuristic).play_turn(state)

    assert state.winner == "ai"
    assert state.phase == "over"
    assert not summary.ended_turn


def test_rejects_turn_outside_play():
    state = create_ai_turn_state(["seae.", ".....", ".....", ".....", "....."])
    state.phase = "over"
    with pytest.raises(ValueError):
        OpponentController().play_turn(state)


def test_self_play_reaches_a_result():
    """Both sides driven by controllers on a small random board."""
    engine = GameEngine()
    state = new_game(seed=3)
    for command in (StartGame(GameSettings(board_size=5, difficulty="hard")), PlaceAllRandomly()):
        state = engine.apply(state, command).state
    controller = OpponentController(engine=engine)

    for _ in range(400):
        if state.phase != "playing":
            break
        state, _ = controller.play_turn(state)

    assert state.phase in ("playing", "over")
    assert state.turn_number >= 1
    if state.phase == "over":
        assert state.winner in ("human", "ai", "draw")
