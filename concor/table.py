"""Command/query surface for a locally simulated Concor table."""

from __future__ import annotations

import logging
import random

from . import rules
from .actions import (
    CommandResult,
    DeclareAction,
    DiscardAction,
    DrawAction,
    ReorderAction,
    SkipAction,
    apply_action,
)
from .state import ConcorConfig, TableSnapshot, TableState, deal_new_game, snapshot

__all__ = ["ConcorTable"]

logger = logging.getLogger(__name__)


class ConcorTable:
    """Owns one ``TableState`` and exposes the game commands.

    Callers issue commands and read snapshots. The injected ``rng`` is the
    only source of shuffling randomness.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()
        self._state = TableState()

    @property
    def state(self) -> TableState:
        """Live mutable state, for tests and debugging only.

        Mutating it bypasses the turn rules; game code goes through the
        commands and ``snapshot``.
        """

        return self._state

    def start_game(self, player_count: int) -> TableSnapshot:
        """Deal a new game for ``player_count`` players, discarding any previous one."""

        config = ConcorConfig(num_players=player_count)
        self._state = deal_new_game(config, self._rng)
        rules.refresh_can_declare(self._state)
        logger.info("started a %d-player game", player_count)
        return self.snapshot()

    def draw(self) -> CommandResult:
        return apply_action(self._state, DrawAction())

    def discard(self, card_index: int) -> CommandResult:
        return apply_action(self._state, DiscardAction(card_index))

    def skip(self) -> CommandResult:
        return apply_action(self._state, SkipAction())

    def declare(self) -> CommandResult:
        return apply_action(self._state, DeclareAction())

    def reorder(self, from_index: int, to_index: int) -> CommandResult:
        return apply_action(self._state, ReorderAction(from_index, to_index))

    def snapshot(self) -> TableSnapshot:
        return snapshot(self._state)
