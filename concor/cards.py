"""Card tokens and their parsed representation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final


class Suit(str, Enum):
    """Enumeration of the four suits, valued by their token letter."""

    SPADES = "S"
    HEARTS = "H"
    DIAMONDS = "D"
    CLUBS = "C"


class Color(str, Enum):
    RED = "red"
    BLACK = "black"


class Rank(str, Enum):
    """Enumeration of ranks ordered from Ace (low) to King."""

    ACE = "A"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"

    @classmethod
    def ordered(cls) -> tuple["Rank", ...]:
        """Return ranks in value order, Ace first."""

        return tuple(cls)


RANKS: Final[list[str]] = [rank.value for rank in Rank.ordered()]
SUITS: Final[list[str]] = [suit.value for suit in Suit]
RANK_VALUES: Final[dict[str, int]] = {rank: idx + 1 for idx, rank in enumerate(RANKS)}
RED_SUITS: Final[frozenset[str]] = frozenset({Suit.HEARTS.value, Suit.DIAMONDS.value})
CARDS_PER_DECK: Final[int] = len(RANKS) * len(SUITS)


@dataclass(frozen=True, slots=True)
class ParsedCard:
    """Value object describing a single card token."""

    token: str
    rank: str
    suit: str
    value: int
    color: Color

    @property
    def is_ace(self) -> bool:
        return self.rank == Rank.ACE.value

    @property
    def is_red(self) -> bool:
        return self.color is Color.RED


def suit_color(suit: str) -> Color:
    """Return the color of ``suit``: hearts and diamonds are red."""

    return Color.RED if suit in RED_SUITS else Color.BLACK


def card_token(rank: str, suit: str) -> str:
    """Build the token for ``rank`` and ``suit``."""

    if rank not in RANK_VALUES:
        raise ValueError(f"invalid rank '{rank}'")
    if suit not in SUITS:
        raise ValueError(f"invalid suit '{suit}'")
    return f"{rank}{suit}"


def is_valid_token(token: str) -> bool:
    """Return ``True`` when ``token`` names one of the 52 standard cards."""

    if len(token) < 2:
        return False
    return token[:-1] in RANK_VALUES and token[-1] in SUITS


def parse_card(token: str) -> ParsedCard:
    """Parse ``token`` into rank, suit, value and color.

    The suit is always the last character, so the rank is whatever precedes
    it; ``"10"`` is the only two-character rank.
    """

    if not is_valid_token(token):
        raise ValueError(f"invalid card token '{token}'")
    rank = token[:-1]
    suit = token[-1]
    return ParsedCard(
        token=token,
        rank=rank,
        suit=suit,
        value=RANK_VALUES[rank],
        color=suit_color(suit),
    )


def standard_tokens() -> list[str]:
    """Return the 52 canonical tokens, suit-major (S, H, D, C) and Ace to King."""

    return [card_token(rank, suit) for suit in SUITS for rank in RANKS]
