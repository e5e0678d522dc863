"""Rendering helpers dedicated to the CLI experience."""

from __future__ import annotations

from typing import Iterable, Sequence

from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table

from ..cards import parse_card
from ..rules import WinningHand
from ..state import TableSnapshot

_SUIT_SYMBOLS = {
    "S": ("♠", "cyan"),
    "H": ("♥", "red"),
    "D": ("♦", "magenta"),
    "C": ("♣", "green"),
}


def format_card(token: str, *, highlight: bool = False) -> str:
    """Return a Rich-rendered label for ``token``."""

    card = parse_card(token)
    symbol, color = _SUIT_SYMBOLS[card.suit]
    style = f"bold {color}" if highlight else color
    return f"[{style}]{card.rank}{symbol}[/{style}]"


def format_hand(hand: Sequence[str], highlight: Iterable[int] = ()) -> str:
    marked = set(highlight)
    if not hand:
        return "—"
    return " ".join(format_card(token, highlight=idx in marked) for idx, token in enumerate(hand))


def render_winning_hand(hand: Sequence[str], winning: WinningHand) -> RenderableType:
    """Return a table listing the melds of a winning decomposition."""

    table = Table(box=box.SIMPLE, expand=True)
    table.add_column("Meld", justify="left", style="bold")
    table.add_column("Kind", justify="left")
    table.add_column("Cards", justify="left")
    for label, meld in zip(("4-card", "3-card", "3-card"), winning.melds):
        table.add_row(label, meld.kind.value.title(), " ".join(format_card(token) for token in meld.tokens))
    leftover = " ".join(format_card(hand[pos]) for pos in winning.leftover_positions)
    table.add_row("[dim]Unchecked[/dim]", "", leftover)
    return table


def render_snapshot(snapshot: TableSnapshot, *, title: str = "Concor") -> RenderableType:
    """Return a Rich panel describing ``snapshot``."""

    players = Table(box=box.ROUNDED, expand=True)
    players.add_column("Player", justify="left", style="bold")
    players.add_column("Seat", justify="left")
    players.add_column("Cards", justify="right")
    players.add_column("Hand", justify="left")

    for idx, player in enumerate(snapshot.players):
        name = player.name
        if snapshot.winner_id == player.id:
            name = f"[bold green]{name} (winner)[/bold green]"
        elif idx == snapshot.current_player_index:
            name = f"[bold yellow]{name}[/bold yellow]"
        players.add_row(name, player.slot, str(len(player.hand)), format_hand(player.hand))

    meta = Table.grid(expand=True)
    meta.add_column(justify="left")
    meta.add_row(f"[cyan]Phase[/cyan]: {snapshot.phase.value.replace('_', ' ')}")
    meta.add_row(f"[cyan]Deck[/cyan]: {snapshot.deck_remaining} card(s)")
    if snapshot.last_discard is not None:
        top = format_card(snapshot.last_discard.card)
        meta.add_row(f"[cyan]Discard[/cyan]: {top} (Player {snapshot.last_discard.player_id})")
    else:
        meta.add_row("[cyan]Discard[/cyan]: —")
    meta.add_row(f"[cyan]Can declare[/cyan]: {'yes' if snapshot.can_declare else 'no'}")

    body = Group(players, Panel(meta, title="Table State", box=box.SQUARE, border_style="blue"))
    return Panel(body, title=title, padding=(0, 1), border_style="cyan")
