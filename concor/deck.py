"""Deck assembly, shuffling and dealing."""

from __future__ import annotations

import logging
import math
import random
from typing import MutableSequence, Sequence

from .cards import standard_tokens

__all__ = ["deck_count", "build_deck", "deal"]

logger = logging.getLogger(__name__)


def deck_count(player_count: int) -> int:
    """Return how many 52-card decks a table of ``player_count`` uses."""

    return max(1, math.ceil(player_count / 2))


def build_deck(player_count: int, rng: random.Random | None = None) -> list[str]:
    """Return a shuffled draw pile sized for ``player_count`` players.

    Tokens repeat once per combined deck.
    """

    decks = deck_count(player_count)
    deck: list[str] = []
    for _ in range(decks):
        deck.extend(standard_tokens())
    (rng or random.Random()).shuffle(deck)
    logger.debug("built %d-card draw pile from %d deck(s)", len(deck), decks)
    return deck


def deal(
    deck: MutableSequence[str],
    hands: Sequence[MutableSequence[str]],
    cards_per_player: int,
) -> None:
    """Move ``cards_per_player`` tokens from the deck head into each hand in order.

    A hand receives fewer cards when the deck runs short.
    """

    for hand in hands:
        count = min(cards_per_player, len(deck))
        hand.extend(deck[:count])
        del deck[:count]
