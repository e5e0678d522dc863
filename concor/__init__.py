"""Top-level package for the Concor rule engine."""

from . import actions, cards, combinations, deck, melds, rules, state, table

__all__ = [
    "actions",
    "cards",
    "combinations",
    "deck",
    "melds",
    "rules",
    "state",
    "table",
]
