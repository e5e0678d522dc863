"""Player commands as values, plus legal action generation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Union

from . import rules
from .rules import IllegalMove, RejectionReason
from .state import TableState

__all__ = [
    "DrawAction",
    "DiscardAction",
    "SkipAction",
    "DeclareAction",
    "ReorderAction",
    "Action",
    "CommandResult",
    "apply_action",
    "legal_actions",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DrawAction:
    """Take the top card of the deck."""


@dataclass(frozen=True)
class DiscardAction:
    """Discard the card at ``card_index`` of the active hand."""

    card_index: int


@dataclass(frozen=True)
class SkipAction:
    """Pass the turn while holding 13 cards."""


@dataclass(frozen=True)
class DeclareAction:
    """Claim the win with the current 13-card hand."""


@dataclass(frozen=True)
class ReorderAction:
    """Move a card inside the active hand."""

    from_index: int
    to_index: int


Action = Union[DrawAction, DiscardAction, SkipAction, DeclareAction, ReorderAction]


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Outcome of a command issued against the table."""

    accepted: bool
    rejection: RejectionReason | None = None
    message: str = ""
    card: str | None = None
    turn_advanced: bool = False
    winning_hand: rules.WinningHand | None = None

    @classmethod
    def rejected(cls, error: IllegalMove) -> "CommandResult":
        return cls(accepted=False, rejection=error.reason, message=str(error))

    def __bool__(self) -> bool:
        return self.accepted


def _dispatch(state: TableState, action: Action) -> CommandResult:
    if isinstance(action, DrawAction):
        card = rules.draw_card(state)
        return CommandResult(accepted=True, card=card)
    if isinstance(action, DiscardAction):
        card, advanced = rules.discard_card(state, action.card_index)
        return CommandResult(accepted=True, card=card, turn_advanced=advanced)
    if isinstance(action, SkipAction):
        rules.skip_turn(state)
        return CommandResult(accepted=True, turn_advanced=True)
    if isinstance(action, DeclareAction):
        winning = rules.declare_win(state)
        return CommandResult(accepted=True, winning_hand=winning)
    if isinstance(action, ReorderAction):
        rules.reorder_hand(state, action.from_index, action.to_index)
        return CommandResult(accepted=True)
    raise TypeError(f"unknown action {action!r}")


def apply_action(state: TableState, action: Action) -> CommandResult:
    """Apply ``action`` for the active player and refresh declare eligibility.

    Rule violations leave ``state`` untouched and come back as a rejected
    result instead of an exception.
    """

    actor = state.active_player.name if state.players else "-"
    try:
        result = _dispatch(state, action)
    except IllegalMove as exc:
        logger.info("rejected %s from %s: %s", type(action).__name__, actor, exc.reason.value)
        result = CommandResult.rejected(exc)
    else:
        logger.debug("applied %s for %s", action, actor)
    rules.refresh_can_declare(state)
    return result


def legal_actions(state: TableState) -> list[Action]:
    """Return the draw/discard/skip/declare actions open to the active player.

    Reordering is always allowed during play and is not listed.
    """

    actions: list[Action] = []
    if rules.can_draw(state):
        actions.append(DrawAction())
    if rules.can_discard(state):
        actions.extend(DiscardAction(idx) for idx in range(len(state.active_player.hand)))
    if rules.can_skip(state):
        actions.append(SkipAction())
    if rules.compute_can_declare(state):
        actions.append(DeclareAction())
    return actions
