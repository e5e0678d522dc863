"""Win evaluation and turn rules for Concor."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from .cards import parse_card
from .combinations import combinations
from .melds import Meld, enumerate_melds
from .state import HAND_SIZE, DiscardRecord, GamePhase, TableState

__all__ = [
    "RejectionReason",
    "IllegalMove",
    "IllegalDraw",
    "IllegalDiscard",
    "IllegalSkip",
    "IllegalDeclare",
    "IllegalReorder",
    "WinningHand",
    "find_winning_melds",
    "check_winning_condition",
    "compute_can_declare",
    "refresh_can_declare",
    "can_draw",
    "can_discard",
    "can_skip",
    "draw_card",
    "discard_card",
    "skip_turn",
    "declare_win",
    "reorder_hand",
]

logger = logging.getLogger(__name__)


class RejectionReason(str, Enum):
    """Why a command was refused."""

    DECK_EMPTY = "deck_empty"
    HAND_SIZE_CAP = "hand_size_cap"
    INVALID_DISCARD_STATE = "invalid_discard_state"
    INVALID_SKIP_STATE = "invalid_skip_state"
    INVALID_DECLARE_STATE = "invalid_declare_state"
    INDEX_OUT_OF_RANGE = "index_out_of_range"
    GAME_NOT_IN_PROGRESS = "game_not_in_progress"


class IllegalMove(RuntimeError):
    """Raised when the active player issues a command the rules forbid."""

    def __init__(self, reason: RejectionReason, message: str | None = None) -> None:
        super().__init__(message or reason.value)
        self.reason = reason


class IllegalDraw(IllegalMove):
    """Raised when a player attempts to draw illegally."""


class IllegalDiscard(IllegalMove):
    """Raised when a player attempts to discard illegally."""


class IllegalSkip(IllegalMove):
    """Raised when a player attempts to skip illegally."""


class IllegalDeclare(IllegalMove):
    """Raised when a player declares without a winning hand."""


class IllegalReorder(IllegalMove):
    """Raised when a reorder references positions outside the hand."""


@dataclass(frozen=True, slots=True)
class WinningHand:
    """A decomposition accepted by the win evaluator."""

    four: Meld
    first_three: Meld
    second_three: Meld
    leftover_positions: tuple[int, ...]

    @property
    def melds(self) -> tuple[Meld, Meld, Meld]:
        return (self.four, self.first_three, self.second_three)


def find_winning_melds(hand: Sequence[str]) -> WinningHand | None:
    """Search ``hand`` for a 4-card meld plus two disjoint 3-card melds.

    Cards are identified by token: removing the 4-card meld drops every copy
    of its tokens, and a candidate that does not leave exactly 9 cards is
    skipped. Only 10 of the 13 cards take part in the decomposition; the
    other three are reported in ``leftover_positions`` and never validated.
    """

    if len(hand) != HAND_SIZE:
        return None
    cards = [parse_card(token) for token in hand]

    for four in enumerate_melds(cards, 4):
        used_tokens = set(four.tokens)
        remaining_positions = [pos for pos, card in enumerate(cards) if card.token not in used_tokens]
        if len(remaining_positions) != HAND_SIZE - 4:
            continue
        remaining_cards = [cards[pos] for pos in remaining_positions]
        used = set(four.positions)

        threes = enumerate_melds(remaining_cards, 3, positions=remaining_positions)
        if len(threes) < 2:
            continue

        for first, second in combinations(threes, 2):
            if first.is_disjoint(second):
                covered = used | set(first.positions) | set(second.positions)
                leftover = tuple(pos for pos in range(len(cards)) if pos not in covered)
                return WinningHand(
                    four=four,
                    first_three=first,
                    second_three=second,
                    leftover_positions=leftover,
                )
    return None


def check_winning_condition(hand: Sequence[str]) -> bool:
    """Return ``True`` when ``hand`` is a declarable 13-card hand."""

    return find_winning_melds(hand) is not None


def compute_can_declare(state: TableState) -> bool:
    """Return whether the active player currently holds a declarable hand."""

    if state.phase is not GamePhase.IN_PROGRESS or not state.players:
        return False
    hand = state.active_player.hand
    return len(hand) == HAND_SIZE and check_winning_condition(hand)


def refresh_can_declare(state: TableState) -> bool:
    """Recompute and store the "can declare" flag on ``state``."""

    state.can_declare = compute_can_declare(state)
    return state.can_declare


def _require_in_progress(state: TableState, error: type[IllegalMove]) -> None:
    if state.phase is not GamePhase.IN_PROGRESS or not state.players:
        raise error(RejectionReason.GAME_NOT_IN_PROGRESS, "game is not in progress")


def can_draw(state: TableState) -> bool:
    if state.phase is not GamePhase.IN_PROGRESS or not state.players:
        return False
    return bool(state.deck) and len(state.active_player.hand) < state.config.max_hand_size


def can_discard(state: TableState) -> bool:
    if state.phase is not GamePhase.IN_PROGRESS or not state.players:
        return False
    return len(state.active_player.hand) > state.config.hand_size


def can_skip(state: TableState) -> bool:
    if state.phase is not GamePhase.IN_PROGRESS or not state.players:
        return False
    hand = state.active_player.hand
    return len(hand) == state.config.hand_size and not check_winning_condition(hand)


def draw_card(state: TableState) -> str:
    """Move the deck head into the active player's hand and return it."""

    _require_in_progress(state, IllegalDraw)
    player = state.active_player
    if not state.deck:
        raise IllegalDraw(RejectionReason.DECK_EMPTY, "deck is empty")
    if len(player.hand) >= state.config.max_hand_size:
        raise IllegalDraw(
            RejectionReason.HAND_SIZE_CAP,
            f"cannot hold more than {state.config.max_hand_size} cards",
        )

    card = state.deck.pop(0)
    player.hand.append(card)
    return card


def discard_card(state: TableState, card_index: int) -> tuple[str, bool]:
    """Discard the card at ``card_index`` from the active hand.

    Returns the discarded token and whether the turn passed to the next
    player. The turn stays put while the hand is above 13 cards, and also
    when the remaining 13 cards are a winning hand.
    """

    _require_in_progress(state, IllegalDiscard)
    player = state.active_player
    if not 0 <= card_index < len(player.hand):
        raise IllegalDiscard(
            RejectionReason.INDEX_OUT_OF_RANGE,
            f"no card at position {card_index}",
        )
    if len(player.hand) <= state.config.hand_size:
        raise IllegalDiscard(
            RejectionReason.INVALID_DISCARD_STATE,
            f"must hold more than {state.config.hand_size} cards to discard",
        )

    card = player.hand.pop(card_index)
    state.discards.append(DiscardRecord(player_id=player.id, card=card))

    advanced = False
    if len(player.hand) == state.config.hand_size and not check_winning_condition(player.hand):
        state.advance_turn()
        advanced = True
    return card, advanced


def skip_turn(state: TableState) -> None:
    """Pass the turn without drawing; only allowed on a non-winning 13-card hand."""

    _require_in_progress(state, IllegalSkip)
    hand = state.active_player.hand
    if len(hand) != state.config.hand_size:
        raise IllegalSkip(
            RejectionReason.INVALID_SKIP_STATE,
            f"must hold exactly {state.config.hand_size} cards to skip",
        )
    if check_winning_condition(hand):
        raise IllegalSkip(RejectionReason.INVALID_SKIP_STATE, "winning hand must be declared")
    state.advance_turn()


def declare_win(state: TableState) -> WinningHand:
    """End the game with the active player as winner."""

    _require_in_progress(state, IllegalDeclare)
    hand = state.active_player.hand
    if len(hand) != state.config.hand_size:
        raise IllegalDeclare(
            RejectionReason.INVALID_DECLARE_STATE,
            f"must hold exactly {state.config.hand_size} cards to declare",
        )
    winning = find_winning_melds(hand)
    if winning is None:
        raise IllegalDeclare(RejectionReason.INVALID_DECLARE_STATE, "hand is not a winning hand")

    state.winner_index = state.current_player_index
    state.phase = GamePhase.FINISHED
    logger.info("%s declared a winning hand", state.active_player.name)
    return winning


def reorder_hand(state: TableState, from_index: int, to_index: int) -> None:
    """Move one card inside the active hand."""

    _require_in_progress(state, IllegalReorder)
    hand = state.active_player.hand
    if not (0 <= from_index < len(hand) and 0 <= to_index < len(hand)):
        raise IllegalReorder(
            RejectionReason.INDEX_OUT_OF_RANGE,
            f"positions {from_index} -> {to_index} outside a {len(hand)}-card hand",
        )
    card = hand.pop(from_index)
    hand.insert(to_index, card)
