from __future__ import annotations

import random

import pytest

from concor import rules
from concor.rules import RejectionReason
from concor.state import GamePhase
from concor.table import ConcorTable

WINNING_HAND = ["AS", "2S", "3S", "4S", "KH", "KD", "KC", "QH", "QD", "QS", "4C", "5C", "7D"]
PLAIN_HAND = ["AS", "2H", "3D", "4C", "5S", "6H", "7D", "8C", "9S", "10H", "JD", "QC", "KS"]


@pytest.mark.parametrize(("players", "deck_remaining"), [(1, 39), (2, 26), (3, 65), (4, 52)])
def test_start_game_deals_thirteen_each(players: int, deck_remaining: int) -> None:
    table = ConcorTable(random.Random(11))

    view = table.start_game(players)

    assert view.phase is GamePhase.IN_PROGRESS
    assert len(view.players) == players
    assert all(len(player.hand) == 13 for player in view.players)
    assert view.deck_remaining == deck_remaining
    assert view.current_player_index == 0
    assert view.winner_id is None
    assert view.last_discard is None
    assert view.can_declare == rules.check_winning_condition(view.players[0].hand)


def test_start_game_rejects_unsupported_player_count() -> None:
    with pytest.raises(ValueError):
        ConcorTable().start_game(5)


def test_commands_rejected_before_start() -> None:
    table = ConcorTable()
    result = table.draw()
    assert result.rejection is RejectionReason.GAME_NOT_IN_PROGRESS
    assert table.snapshot().phase is GamePhase.NOT_STARTED


def test_draw_then_discard_passes_the_turn() -> None:
    table = ConcorTable(random.Random(3))
    table.start_game(2)
    table.state.players[0].hand = list(PLAIN_HAND)
    top = table.state.deck[0]

    drawn = table.draw()
    assert drawn.accepted and drawn.card == top
    assert table.draw().rejection is RejectionReason.HAND_SIZE_CAP

    discarded = table.discard(13)
    view = table.snapshot()

    assert discarded.accepted and discarded.turn_advanced
    assert view.current_player_index == 1
    assert view.last_discard is not None
    assert (view.last_discard.player_id, view.last_discard.card) == (1, top)


def test_full_round_to_declare_and_terminal_state() -> None:
    table = ConcorTable(random.Random(8))
    table.start_game(2)
    table.state.players[0].hand = list(PLAIN_HAND)
    table.state.players[1].hand = [card for card in WINNING_HAND if card != "QS"] + ["9H"]
    table.state.deck[0] = "QS"

    assert table.skip().accepted
    view = table.snapshot()
    assert view.current_player_index == 1
    assert not view.can_declare

    # The drawn QS completes the queens; the 9H goes.
    assert table.draw().card == "QS"
    assert table.reorder(13, 9).accepted
    assert table.state.players[1].hand[9] == "QS"
    result = table.discard(13)
    assert result.accepted and result.card == "9H" and not result.turn_advanced

    view = table.snapshot()
    assert view.can_declare
    assert table.skip().rejection is RejectionReason.INVALID_SKIP_STATE

    declared = table.declare()
    assert declared.accepted
    view = table.snapshot()
    assert view.phase is GamePhase.FINISHED
    assert view.winner_id == 2
    assert not view.can_declare

    for command in (table.draw, table.skip, table.declare, lambda: table.discard(0), lambda: table.reorder(0, 1)):
        rejected = command()
        assert not rejected.accepted
        assert rejected.rejection is RejectionReason.GAME_NOT_IN_PROGRESS


def test_reorder_is_a_pure_permutation() -> None:
    table = ConcorTable(random.Random(21))
    before = table.start_game(3)

    assert table.reorder(0, 12).accepted
    after = table.snapshot()

    hand_before = list(before.players[0].hand)
    assert list(after.players[0].hand) == hand_before[1:] + hand_before[:1]
    assert after.deck_remaining == before.deck_remaining
    assert after.current_player_index == before.current_player_index
    assert table.reorder(0, 13).rejection is RejectionReason.INDEX_OUT_OF_RANGE


def test_start_game_resets_previous_game() -> None:
    table = ConcorTable(random.Random(4))
    table.start_game(2)
    table.skip()

    view = table.start_game(4)

    assert len(view.players) == 4
    assert view.current_player_index == 0
    assert view.last_discard is None
