from __future__ import annotations

import pytest

from concor import actions, rules, state
from concor.rules import RejectionReason

WINNING_HAND = ["AS", "2S", "3S", "4S", "KH", "KD", "KC", "QH", "QD", "QS", "4C", "5C", "7D"]
PLAIN_HAND = ["AS", "2H", "3D", "4C", "5S", "6H", "7D", "8C", "9S", "10H", "JD", "QC", "KS"]


def _make_state(hands: list[list[str]], draw_pile: list[str] | None = None) -> state.TableState:
    players = state.seat_players(len(hands))
    for player, hand in zip(players, hands):
        player.hand = list(hand)
    return state.TableState(
        config=state.ConcorConfig(num_players=len(hands)),
        players=players,
        deck=list(draw_pile if draw_pile is not None else ["9H"]),
        phase=state.GamePhase.IN_PROGRESS,
    )


def test_legal_actions_for_plain_thirteen_card_hand() -> None:
    game_state = _make_state([PLAIN_HAND, PLAIN_HAND])
    assert actions.legal_actions(game_state) == [actions.DrawAction(), actions.SkipAction()]


def test_legal_actions_for_winning_hand_offer_declare_not_skip() -> None:
    game_state = _make_state([WINNING_HAND, PLAIN_HAND])
    assert actions.legal_actions(game_state) == [actions.DrawAction(), actions.DeclareAction()]


def test_legal_actions_at_cap_are_discards_only() -> None:
    game_state = _make_state([PLAIN_HAND + ["9H"], PLAIN_HAND])
    legal = actions.legal_actions(game_state)
    assert legal == [actions.DiscardAction(idx) for idx in range(14)]


def test_legal_actions_empty_when_finished() -> None:
    game_state = _make_state([WINNING_HAND, PLAIN_HAND])
    game_state.phase = state.GamePhase.FINISHED
    assert actions.legal_actions(game_state) == []


def test_apply_action_returns_rejection_without_mutating() -> None:
    game_state = _make_state([PLAIN_HAND, PLAIN_HAND], [])

    result = actions.apply_action(game_state, actions.DrawAction())

    assert not result
    assert result.rejection is RejectionReason.DECK_EMPTY
    assert result.message == "deck is empty"
    assert game_state.players[0].hand == PLAIN_HAND


def test_repeating_a_rejected_command_has_no_effect() -> None:
    game_state = _make_state([PLAIN_HAND, PLAIN_HAND])
    first = actions.apply_action(game_state, actions.DiscardAction(0))
    second = actions.apply_action(game_state, actions.DiscardAction(0))

    assert first == second
    assert first.rejection is RejectionReason.INVALID_DISCARD_STATE
    assert game_state.discards == []


def test_apply_action_refreshes_can_declare_after_winning_discard() -> None:
    game_state = _make_state([WINNING_HAND + ["9H"], PLAIN_HAND])
    assert not game_state.can_declare

    result = actions.apply_action(game_state, actions.DiscardAction(13))

    assert result.accepted
    assert result.card == "9H"
    assert not result.turn_advanced
    assert game_state.can_declare


def test_apply_action_declare_reports_winning_hand() -> None:
    game_state = _make_state([WINNING_HAND, PLAIN_HAND])

    result = actions.apply_action(game_state, actions.DeclareAction())

    assert result.accepted
    assert result.winning_hand is not None
    assert game_state.phase is state.GamePhase.FINISHED
    assert not game_state.can_declare


def test_apply_action_dispatches_to_rules(monkeypatch: pytest.MonkeyPatch) -> None:
    game_state = _make_state([PLAIN_HAND, PLAIN_HAND])
    called: dict[str, tuple[int, int]] = {}

    def mock_reorder(table_state: state.TableState, from_index: int, to_index: int) -> None:
        called["reorder"] = (from_index, to_index)

    monkeypatch.setattr(rules, "reorder_hand", mock_reorder)
    result = actions.apply_action(game_state, actions.ReorderAction(2, 5))

    assert result.accepted
    assert called["reorder"] == (2, 5)


def test_apply_action_rejects_unknown_action_type() -> None:
    game_state = _make_state([PLAIN_HAND])
    with pytest.raises(TypeError):
        actions.apply_action(game_state, object())  # type: ignore[arg-type]
