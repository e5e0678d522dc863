"""Typer entry-point wiring for the Concor CLI."""

from __future__ import annotations

import random
from typing import List

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from .. import cards, rules, simulation
from ..log import setup_logging
from ..state import HAND_SIZE, MAX_PLAYERS, MIN_PLAYERS
from ..table import ConcorTable
from .render import format_hand, render_snapshot, render_winning_hand

app = typer.Typer(add_completion=False, rich_markup_mode="rich")
console = Console()

LOG_LEVEL_HELP = "Logging level (DEBUG, INFO, WARNING, ERROR)."


def _validate_hand(tokens: List[str]) -> List[str]:
    normalized = [token.upper() for token in tokens]
    invalid = [token for token in normalized if not cards.is_valid_token(token)]
    if invalid:
        raise typer.BadParameter(f"Unknown card token(s): {', '.join(invalid)}")
    if len(normalized) != HAND_SIZE:
        raise typer.BadParameter(f"Expected {HAND_SIZE} cards, got {len(normalized)}.")
    return normalized


def _render_report(report: simulation.SimulationReport) -> Table:
    """Return a Rich table summarising a simulation batch."""

    table = Table(title=f"Self-play: {report.games} game(s)", box=box.SIMPLE_HEAVY)
    table.add_column("Seat", justify="center")
    table.add_column("Wins", justify="right")
    table.add_column("Share", justify="right")

    for idx, wins in enumerate(report.wins_per_seat):
        table.add_row(f"Player {idx + 1}", str(wins), f"{wins / report.games:.1%}")
    table.add_row("[dim]Stalemate[/dim]", str(report.stalemates), f"{report.stalemates / report.games:.1%}")
    return table


@app.command()
def check(
    hand: List[str] = typer.Argument(..., help="Thirteen card tokens, e.g. AS 2S 3S 4S KH ..."),
    log_level: str = typer.Option("WARNING", help=LOG_LEVEL_HELP),
) -> None:
    """Evaluate a 13-card hand against the winning condition."""

    setup_logging(log_level)
    tokens = _validate_hand(hand)
    winning = rules.find_winning_melds(tokens)
    console.print(format_hand(tokens))
    if winning is None:
        console.print("[red]Not a winning hand.[/red]")
        raise typer.Exit(code=1)
    console.print("[bold green]Winning hand.[/bold green]")
    console.print(render_winning_hand(tokens, winning))


@app.command()
def deal(
    players: int = typer.Option(4, min=MIN_PLAYERS, max=MAX_PLAYERS, help="Number of seated players."),
    seed: int | None = typer.Option(None, help="Random seed for a reproducible deal (omit for randomness)."),
    log_level: str = typer.Option("WARNING", help=LOG_LEVEL_HELP),
) -> None:
    """Deal a fresh game and show the table."""

    setup_logging(log_level)
    table = ConcorTable(random.Random(seed))
    console.print(render_snapshot(table.start_game(players)))


@app.command()
def simulate(
    games: int = typer.Option(100, min=1, help="Number of games to play."),
    players: int = typer.Option(4, min=MIN_PLAYERS, max=MAX_PLAYERS, help="Number of seated players."),
    seed: int | None = typer.Option(None, help="Random seed for reproducible runs."),
    turn_limit: int = typer.Option(500, min=1, help="Turns after which a game counts as a stalemate."),
    log_level: str = typer.Option("WARNING", help=LOG_LEVEL_HELP),
) -> None:
    """Play games between simulated players and report how often they end in a win."""

    setup_logging(log_level)
    config = simulation.SimulationConfig(games=games, players=players, seed=seed, turn_limit=turn_limit)
    report = simulation.run_simulation(config)
    console.print(_render_report(report))
    console.print(
        f"[cyan]Win rate {report.win_rate:.1%}; "
        f"mean turns to win {report.mean_turns_to_win:.1f} (max {report.max_turns_to_win}).[/cyan]"
    )


def main() -> None:
    """Entry-point for the ``concor`` console script."""

    app()


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    main()
