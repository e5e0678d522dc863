"""Set and run classification for groups of parsed cards."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from .cards import RANKS, ParsedCard
from .combinations import combinations

__all__ = [
    "MeldKind",
    "Meld",
    "is_set",
    "is_run",
    "classify",
    "enumerate_melds",
]


class MeldKind(str, Enum):
    """The two kinds of meld recognised by the rules."""

    SET = "set"
    RUN = "run"


@dataclass(frozen=True, slots=True)
class Meld:
    """A valid meld together with the hand positions it occupies."""

    kind: MeldKind
    positions: tuple[int, ...]
    cards: tuple[ParsedCard, ...]

    @property
    def tokens(self) -> tuple[str, ...]:
        return tuple(card.token for card in self.cards)

    def is_disjoint(self, other: "Meld") -> bool:
        """Return ``True`` when the two melds share no card token."""

        return not set(self.tokens) & set(other.tokens)


def is_set(cards: Sequence[ParsedCard]) -> bool:
    """Return ``True`` for 3 or 4 same-rank cards with a balanced color split.

    Three cards need two of one color and one of the other; four cards need
    exactly two red and two black. Suits may repeat.
    """

    if len(cards) not in (3, 4):
        return False
    first_rank = cards[0].rank
    if any(card.rank != first_rank for card in cards):
        return False

    red = sum(1 for card in cards if card.is_red)
    black = len(cards) - red
    if len(cards) == 3:
        return (red, black) in ((2, 1), (1, 2))
    return red == 2 and black == 2


def is_run(cards: Sequence[ParsedCard]) -> bool:
    """Return ``True`` for 3+ same-suit cards of consecutive rank.

    Aces are low by default. When the ascending check fails, a single Ace may
    instead sit above King, provided the other cards are exactly the top ranks
    (Q-K-A, J-Q-K-A, ...).
    """

    if len(cards) < 3:
        return False
    first_suit = cards[0].suit
    if any(card.suit != first_suit for card in cards):
        return False

    ordered = sorted(cards, key=lambda card: card.value)
    if all(ordered[idx].value == ordered[idx - 1].value + 1 for idx in range(1, len(ordered))):
        return True

    non_aces = [card.rank for card in ordered if not card.is_ace]
    if len(non_aces) != len(ordered) - 1:
        return False
    return non_aces == RANKS[-len(non_aces):]


def classify(cards: Sequence[ParsedCard]) -> MeldKind | None:
    """Return the meld kind of ``cards`` or ``None`` when they form no meld."""

    if is_set(cards):
        return MeldKind.SET
    if is_run(cards):
        return MeldKind.RUN
    return None


def enumerate_melds(
    cards: Sequence[ParsedCard],
    size: int,
    positions: Sequence[int] | None = None,
) -> list[Meld]:
    """Return every ``size``-card subset of ``cards`` that forms a meld.

    ``positions`` gives the hand position of each card; it defaults to the
    index in ``cards``.
    """

    if len(cards) < size:
        return []
    if positions is None:
        positions = range(len(cards))
    indexed = list(zip(positions, cards))

    melds: list[Meld] = []
    for combo in combinations(indexed, size):
        group = tuple(card for _, card in combo)
        kind = classify(group)
        if kind is not None:
            melds.append(Meld(kind=kind, positions=tuple(pos for pos, _ in combo), cards=group))
    return melds
