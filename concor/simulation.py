"""Self-play harness estimating how often Concor games end in a win."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

import numpy as np

from . import actions, rules, state

__all__ = ["SimulationConfig", "GameOutcome", "SimulationReport", "choose_action", "play_game", "run_simulation"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SimulationConfig:
    """Parameters for a batch of self-play games."""

    games: int = 100
    players: int = 4
    seed: int | None = None
    turn_limit: int = 500

    def __post_init__(self) -> None:
        if self.games <= 0:
            raise ValueError("games must be positive")
        if self.turn_limit <= 0:
            raise ValueError("turn_limit must be positive")


@dataclass(frozen=True, slots=True)
class GameOutcome:
    """Result of one simulated game."""

    winner_index: int | None
    turns: int
    deck_remaining: int


@dataclass(frozen=True, slots=True)
class SimulationReport:
    """Aggregate statistics across a simulation batch."""

    games: int
    players: int
    wins_per_seat: tuple[int, ...]
    stalemates: int
    mean_turns_to_win: float
    max_turns_to_win: int

    @property
    def wins(self) -> int:
        return sum(self.wins_per_seat)

    @property
    def win_rate(self) -> float:
        return self.wins / self.games


def _winning_discard(hand: list[str]) -> int | None:
    for idx in range(len(hand)):
        remaining = hand[:idx] + hand[idx + 1 :]
        if rules.check_winning_condition(remaining):
            return idx
    return None


def choose_action(game_state: state.TableState, rng: random.Random) -> actions.Action:
    """Pick the next command for the active player.

    Declare when possible, keep the hand at 13 cards by drawing then
    discarding, prefer a discard that leaves a winning hand, and skip once
    the deck is exhausted.
    """

    if rules.compute_can_declare(game_state):
        return actions.DeclareAction()
    hand = game_state.active_player.hand
    if rules.can_discard(game_state):
        if len(hand) == game_state.config.hand_size + 1:
            winning_idx = _winning_discard(hand)
            if winning_idx is not None:
                return actions.DiscardAction(winning_idx)
        return actions.DiscardAction(rng.randrange(len(hand)))
    if rules.can_draw(game_state):
        return actions.DrawAction()
    return actions.SkipAction()


def play_game(config: SimulationConfig, rng: random.Random) -> GameOutcome:
    """Play one game to a declare or to the turn limit."""

    game_state = state.deal_new_game(state.ConcorConfig(num_players=config.players), rng)
    rules.refresh_can_declare(game_state)

    turns = 0
    consecutive_skips = 0
    while game_state.phase is state.GamePhase.IN_PROGRESS and turns < config.turn_limit:
        action = choose_action(game_state, rng)
        result = actions.apply_action(game_state, action)
        if not result.accepted:
            raise RuntimeError(f"simulated player issued an illegal command: {result.message}")
        if result.turn_advanced or game_state.phase is state.GamePhase.FINISHED:
            turns += 1
        consecutive_skips = consecutive_skips + 1 if isinstance(action, actions.SkipAction) else 0
        # Empty deck and a full round of skips: no hand can change any more.
        if not game_state.deck and consecutive_skips >= len(game_state.players):
            break

    return GameOutcome(
        winner_index=game_state.winner_index,
        turns=turns,
        deck_remaining=len(game_state.deck),
    )


def run_simulation(config: SimulationConfig) -> SimulationReport:
    """Play ``config.games`` games and aggregate the outcomes."""

    rng = random.Random(config.seed)
    winners = np.full(config.games, -1, dtype=np.int64)
    turns = np.zeros(config.games, dtype=np.int64)

    for game_idx in range(config.games):
        outcome = play_game(config, rng)
        if outcome.winner_index is not None:
            winners[game_idx] = outcome.winner_index
        turns[game_idx] = outcome.turns
        logger.debug(
            "game %d: winner=%s turns=%d deck=%d",
            game_idx + 1,
            outcome.winner_index,
            outcome.turns,
            outcome.deck_remaining,
        )

    won = winners >= 0
    wins_per_seat = np.bincount(winners[won], minlength=config.players)
    won_turns = turns[won]
    report = SimulationReport(
        games=config.games,
        players=config.players,
        wins_per_seat=tuple(int(count) for count in wins_per_seat),
        stalemates=int(np.count_nonzero(~won)),
        mean_turns_to_win=float(won_turns.mean()) if won_turns.size else 0.0,
        max_turns_to_win=int(won_turns.max()) if won_turns.size else 0,
    )
    logger.info(
        "simulated %d game(s): %d win(s), %d stalemate(s)",
        report.games,
        report.wins,
        report.stalemates,
    )
    return report
