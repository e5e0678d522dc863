from __future__ import annotations

import random

import pytest

from concor import actions, simulation, state

WINNING_HAND = ["AS", "2S", "3S", "4S", "KH", "KD", "KC", "QH", "QD", "QS", "4C", "5C", "7D"]
PLAIN_HAND = ["AS", "2H", "3D", "4C", "5S", "6H", "7D", "8C", "9S", "10H", "JD", "QC", "KS"]


def _make_state(hand: list[str], draw_pile: list[str]) -> state.TableState:
    players = state.seat_players(2)
    players[0].hand = list(hand)
    players[1].hand = list(PLAIN_HAND)
    return state.TableState(
        config=state.ConcorConfig(num_players=2),
        players=players,
        deck=list(draw_pile),
        phase=state.GamePhase.IN_PROGRESS,
    )


def test_choose_action_declares_winning_hand() -> None:
    game_state = _make_state(WINNING_HAND, ["9H"])
    assert simulation.choose_action(game_state, random.Random(0)) == actions.DeclareAction()


def test_choose_action_prefers_winning_discard() -> None:
    hand = WINNING_HAND[:3] + ["9H"] + WINNING_HAND[3:]
    game_state = _make_state(hand, ["8D"])
    assert simulation.choose_action(game_state, random.Random(0)) == actions.DiscardAction(3)


def test_choose_action_draws_then_skips_on_empty_deck() -> None:
    rng = random.Random(0)
    assert simulation.choose_action(_make_state(PLAIN_HAND, ["9H"]), rng) == actions.DrawAction()
    assert simulation.choose_action(_make_state(PLAIN_HAND, []), rng) == actions.SkipAction()


def test_play_game_is_reproducible() -> None:
    config = simulation.SimulationConfig(games=1, players=2, turn_limit=80)
    first = simulation.play_game(config, random.Random(13))
    second = simulation.play_game(config, random.Random(13))

    assert first == second
    assert first.turns <= 80


def test_run_simulation_returns_report() -> None:
    config = simulation.SimulationConfig(games=3, players=2, seed=7, turn_limit=60)

    report = simulation.run_simulation(config)

    assert report.games == 3
    assert len(report.wins_per_seat) == 2
    assert report.wins + report.stalemates == 3
    assert 0.0 <= report.win_rate <= 1.0
    if report.wins:
        assert 1 <= report.max_turns_to_win <= 60
    else:
        assert report.mean_turns_to_win == 0.0


@pytest.mark.parametrize(("games", "turn_limit"), [(0, 10), (5, 0)])
def test_simulation_config_validation(games: int, turn_limit: int) -> None:
    with pytest.raises(ValueError):
        simulation.SimulationConfig(games=games, turn_limit=turn_limit)
