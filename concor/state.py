"""Core table state data structures for Concor."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Final, List

from . import deck as deck_module

logger = logging.getLogger(__name__)

HAND_SIZE: Final[int] = 13
MAX_HAND_SIZE: Final[int] = 14
MIN_PLAYERS: Final[int] = 1
MAX_PLAYERS: Final[int] = 4
SEAT_SLOTS: Final[tuple[str, ...]] = ("bottom", "right", "top", "left")


class GamePhase(str, Enum):
    """Lifecycle of a table."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


@dataclass(slots=True)
class ConcorConfig:
    """Runtime configuration for a single Concor game."""

    num_players: int = MAX_PLAYERS
    hand_size: int = HAND_SIZE
    max_hand_size: int = MAX_HAND_SIZE

    def __post_init__(self) -> None:
        if not MIN_PLAYERS <= self.num_players <= MAX_PLAYERS:
            raise ValueError(
                f"num_players must be between {MIN_PLAYERS} and {MAX_PLAYERS}, got {self.num_players}"
            )
        if self.max_hand_size <= self.hand_size:
            raise ValueError("max_hand_size must exceed hand_size")


@dataclass(slots=True)
class PlayerState:
    """State tracked for each seated player."""

    id: int
    name: str
    slot: str
    hand: List[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class DiscardRecord:
    """One entry of the append-only discard log."""

    player_id: int
    card: str


@dataclass(slots=True)
class TableState:
    """Mutable table state, exclusively owned by the turn state machine."""

    config: ConcorConfig = field(default_factory=ConcorConfig)
    players: List[PlayerState] = field(default_factory=list)
    deck: List[str] = field(default_factory=list)
    discards: List[DiscardRecord] = field(default_factory=list)
    current_player_index: int = 0
    winner_index: int | None = None
    phase: GamePhase = GamePhase.NOT_STARTED
    can_declare: bool = False

    @property
    def active_player(self) -> PlayerState:
        return self.players[self.current_player_index]

    @property
    def winner(self) -> PlayerState | None:
        if self.winner_index is None:
            return None
        return self.players[self.winner_index]

    @property
    def last_discard(self) -> DiscardRecord | None:
        return self.discards[-1] if self.discards else None

    def advance_turn(self) -> None:
        """Pass the turn to the next seat."""

        self.current_player_index = (self.current_player_index + 1) % len(self.players)


@dataclass(frozen=True, slots=True)
class PlayerView:
    """Read-only view of a player handed to callers."""

    id: int
    name: str
    slot: str
    hand: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class TableSnapshot:
    """Read-only view of the whole table."""

    phase: GamePhase
    players: tuple[PlayerView, ...]
    deck_remaining: int
    last_discard: DiscardRecord | None
    current_player_index: int
    winner_id: int | None
    can_declare: bool

    @property
    def active_player(self) -> PlayerView | None:
        if not self.players:
            return None
        return self.players[self.current_player_index]


def seat_players(num_players: int) -> list[PlayerState]:
    """Return empty-handed players for the first ``num_players`` seats."""

    return [
        PlayerState(id=idx + 1, name=f"Player {idx + 1}", slot=SEAT_SLOTS[idx])
        for idx in range(num_players)
    ]


def deal_new_game(config: ConcorConfig, rng: random.Random | None = None) -> TableState:
    """Build, shuffle and deal a fresh table for ``config``."""

    if rng is None:
        rng = random.Random()
    players = seat_players(config.num_players)
    draw_pile = deck_module.build_deck(config.num_players, rng)
    deck_module.deal(draw_pile, [player.hand for player in players], config.hand_size)
    logger.info(
        "dealt %d player(s) %d card(s) each, %d card(s) left in the deck",
        len(players),
        config.hand_size,
        len(draw_pile),
    )
    return TableState(
        config=config,
        players=players,
        deck=draw_pile,
        discards=[],
        current_player_index=0,
        winner_index=None,
        phase=GamePhase.IN_PROGRESS,
    )


def snapshot(state: TableState) -> TableSnapshot:
    """Return an immutable view of ``state``."""

    winner = state.winner
    return TableSnapshot(
        phase=state.phase,
        players=tuple(
            PlayerView(id=player.id, name=player.name, slot=player.slot, hand=tuple(player.hand))
            for player in state.players
        ),
        deck_remaining=len(state.deck),
        last_discard=state.last_discard,
        current_player_index=state.current_player_index,
        winner_id=winner.id if winner is not None else None,
        can_declare=state.can_declare,
    )
