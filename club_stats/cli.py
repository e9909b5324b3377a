"""CLI entrypoint using Typer.

This module defines the command-line interface for the club statistics
application. Commands are organized into subcommand groups for database
management and for the rankings and summaries.

Example:
    $ club-stats --help
    $ club-stats data init
    $ club-stats stats players <club-id> --year 2024 --month 3
"""

from __future__ import annotations

from typing import Annotated, Any

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from club_stats import __version__
from club_stats.config import get_settings
from club_stats.logging import setup_logging
from club_stats.reports import OUTPUT_FORMATS

# Initialize console for rich output
console = Console()

# Create main app
app = typer.Typer(
    name="club-stats",
    help="Sports club scoring and ranking CLI",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Create subcommand groups
data_app = typer.Typer(
    name="data",
    help="Database management commands",
    no_args_is_help=True,
)
stats_app = typer.Typer(
    name="stats",
    help="Rankings and summaries",
    no_args_is_help=True,
)

# Register subcommand groups
app.add_typer(data_app, name="data")
app.add_typer(stats_app, name="stats")

# Shared option types
YearOption = Annotated[
    str,
    typer.Option("--year", "-y", help="Year to filter by, or 'all'"),
]
MonthOption = Annotated[
    str,
    typer.Option("--month", "-m", help="Month (1-12) to filter by, or 'all'"),
]
LimitOption = Annotated[
    int | None,
    typer.Option("--limit", "-n", help="Show only the first N entries", min=1),
]
FormatOption = Annotated[
    str,
    typer.Option("--format", "-f", help="Output format: table, json or csv"),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]club-stats[/bold blue] version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-V",
            help="Enable verbose output",
        ),
    ] = False,
) -> None:
    """Sports club scoring and ranking CLI.

    Builds team standings, player performance rankings and participation
    rankings from a club's recorded games.
    """
    # Setup logging based on verbosity
    settings = get_settings()
    log_level = "DEBUG" if verbose else settings.log_level
    setup_logging(level=log_level, log_dir=settings.log_dir_obj)


# =============================================================================
# Data Commands
# =============================================================================


@data_app.command("init")
def data_init() -> None:
    """Create the database tables."""
    from club_stats.data import init_db

    settings = get_settings()
    settings.ensure_directories()
    init_db()
    console.print(f"[green]Database initialized at {settings.db_path}[/green]")


@data_app.command("status")
def data_status() -> None:
    """Show row counts per table."""
    from club_stats.data import database_exists, session_scope

    settings = get_settings()

    if not database_exists():
        console.print(
            Panel(
                f"[bold]Database:[/bold] {settings.db_path}\n"
                "[yellow]Database not found. Run 'data init' first.[/yellow]",
                title="Data Status",
            )
        )
        return

    with session_scope(read_only=True) as session:
        stats = _get_database_stats(session)

    table = Table(title="Database Status")
    table.add_column("Entity", style="cyan")
    table.add_column("Count", justify="right")
    table.add_column("Date Range", style="green")

    for entity, count, date_range in stats:
        table.add_row(entity, str(count), date_range or "N/A")

    console.print(table)


def _get_database_stats(session: Any) -> list[tuple[str, int, str | None]]:
    """Get row counts and the game date range."""
    from sqlalchemy import func, select

    from club_stats.data import (
        Club,
        Game,
        GameEvent,
        GameParticipant,
        Member,
        TeamAssignment,
        TeamConfiguration,
    )

    stats: list[tuple[str, int, str | None]] = []

    game_count = session.scalar(select(func.count(Game.id))) or 0
    if game_count > 0:
        min_date = session.scalar(select(func.min(Game.date)))
        max_date = session.scalar(select(func.max(Game.date)))
        date_range = f"{min_date} to {max_date}"
    else:
        date_range = None

    stats.append(("Clubs", session.scalar(select(func.count(Club.id))) or 0, None))
    stats.append(("Members", session.scalar(select(func.count(Member.id))) or 0, None))
    stats.append(("Games", game_count, date_range))
    for label, model in (
        ("Game events", GameEvent),
        ("Participants", GameParticipant),
        ("Team assignments", TeamAssignment),
        ("Team configurations", TeamConfiguration),
    ):
        stats.append((label, session.scalar(select(func.count(model.id))) or 0, None))

    return stats


# =============================================================================
# Stats Commands
# =============================================================================


def _check_format(output_format: str) -> str:
    normalized = output_format.lower()
    if normalized not in OUTPUT_FORMATS:
        console.print(
            f"[red]Error: Unknown format '{output_format}'. "
            f"Use one of: {', '.join(OUTPUT_FORMATS)}[/red]"
        )
        raise typer.Exit(1)
    return normalized


def _run(fetch: Any) -> Any:
    """Call ``fetch(service)`` inside a session, turning errors into exit 1."""
    from club_stats.data import session_scope
    from club_stats.service import ClubStatsService
    from club_stats.types import ClubStatsError

    try:
        with session_scope(read_only=True) as session:
            return fetch(ClubStatsService(session))
    except ClubStatsError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from e


def _emit(
    records: list[Any],
    output_format: str,
    title: str,
    columns: list[tuple[str, str]],
) -> None:
    from club_stats.reports import render_csv, render_json

    # Machine-readable output bypasses rich so lines are never wrapped
    if output_format == "json":
        typer.echo(render_json(records))
        return
    if output_format == "csv":
        typer.echo(render_csv(records), nl=False)
        return

    if not records:
        console.print("[yellow]No data for the selected period.[/yellow]")
        return

    table = Table(title=title)
    table.add_column("#", justify="right", style="bold")
    for header, _ in columns:
        justify = "left" if header == "Name" else "right"
        table.add_column(header, justify=justify)
    for record in records:
        table.add_row(
            str(record.position),
            *(str(getattr(record, attr)) for _, attr in columns),
        )
    console.print(table)


@stats_app.command("teams")
def stats_teams(
    club_id: Annotated[str, typer.Argument(help="Club ID")],
    year: YearOption = "all",
    month: MonthOption = "all",
    limit: LimitOption = None,
    output_format: FormatOption = "table",
) -> None:
    """Show team standings."""
    output_format = _check_format(output_format)
    standings = _run(lambda s: s.fetch_team_stats(club_id, year, month))
    if limit is not None:
        standings = standings[:limit]

    _emit(
        standings,
        output_format,
        title="Team Standings",
        columns=[
            ("Name", "name"),
            ("Pts", "points"),
            ("GP", "total_games"),
            ("W", "wins"),
            ("D", "draws"),
            ("L", "losses"),
            ("GF", "goals_scored"),
            ("GA", "goals_conceded"),
            ("Win %", "win_rate"),
        ],
    )


@stats_app.command("players")
def stats_players(
    club_id: Annotated[str, typer.Argument(help="Club ID")],
    year: YearOption = "all",
    month: MonthOption = "all",
    limit: LimitOption = None,
    output_format: FormatOption = "table",
) -> None:
    """Show the player performance ranking."""
    output_format = _check_format(output_format)
    if limit is None:
        ranking = _run(lambda s: s.fetch_player_stats(club_id, year, month))
    else:
        ranking = _run(
            lambda s: s.fetch_top_performers(club_id, year, month, limit=limit)
        )

    _emit(
        ranking,
        output_format,
        title="Player Ranking",
        columns=[
            ("Name", "name"),
            ("Pts", "points"),
            ("GP", "games"),
            ("Goals", "goals"),
            ("OG", "own_goals"),
            ("Saves", "saves"),
            ("W", "wins"),
            ("D", "draws"),
            ("L", "losses"),
            ("Avg", "goal_average"),
            ("Win %", "win_rate"),
        ],
    )


@stats_app.command("participation")
def stats_participation(
    club_id: Annotated[str, typer.Argument(help="Club ID")],
    year: YearOption = "all",
    month: MonthOption = "all",
    limit: LimitOption = None,
    output_format: FormatOption = "table",
) -> None:
    """Show the participation ranking of active members."""
    output_format = _check_format(output_format)
    if limit is None:
        ranking = _run(lambda s: s.fetch_participation_ranking(club_id, year, month))
    else:
        ranking = _run(lambda s: s.fetch_top_players(club_id, year, month, limit=limit))

    _emit(
        ranking,
        output_format,
        title="Participation Ranking",
        columns=[
            ("Name", "name"),
            ("Pts", "points"),
            ("Games", "games"),
            ("Rate %", "participation_rate"),
            ("Months", "membership_months"),
            ("Age", "age"),
        ],
    )


@stats_app.command("summary")
def stats_summary(
    club_id: Annotated[str, typer.Argument(help="Club ID")],
    year: YearOption = "all",
    month: MonthOption = "all",
) -> None:
    """Show completion rate and per-game averages."""
    summary = _run(lambda s: s.fetch_game_summary(club_id, year, month))

    console.print(
        Panel(
            f"[bold]Completed games:[/bold] {summary.completed_games}\n"
            f"[bold]Canceled games:[/bold] {summary.canceled_games}\n"
            f"[bold]Completion rate:[/bold] {summary.completion_rate}%\n"
            f"[bold]Goals per game:[/bold] {summary.average_goals_per_game}\n"
            f"[bold]Players per game:[/bold] {summary.average_players_per_game}",
            title="Game Summary",
        )
    )


@stats_app.command("member")
def stats_member(
    club_id: Annotated[str, typer.Argument(help="Club ID")],
    member_id: Annotated[str, typer.Argument(help="Member ID")],
    year: YearOption = "all",
    month: MonthOption = "all",
    output_format: FormatOption = "table",
) -> None:
    """Show one member's score breakdown."""
    from club_stats.reports import render_csv, render_record_json

    output_format = _check_format(output_format)
    details = _run(
        lambda s: s.fetch_member_score_details(club_id, member_id, year, month)
    )

    if output_format == "json":
        typer.echo(render_record_json(details))
        return
    if output_format == "csv":
        typer.echo(render_csv([details]), nl=False)
        return

    table = Table(title=f"Score Details: {details.name}", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Score", str(details.score))
    table.add_row("Participation rate", f"{details.participation_rate}%")
    table.add_row(
        "Confirmed games", f"{details.confirmed_games} / {details.total_games}"
    )
    table.add_row("Membership (months)", str(details.membership_months))
    table.add_row("Age", str(details.age))
    table.add_row("Goals", str(details.goals))
    table.add_row("Own goals", str(details.own_goals))
    table.add_row("Saves", str(details.saves))
    table.add_row("W / D / L", f"{details.wins} / {details.draws} / {details.losses}")
    console.print(table)


@stats_app.command("years")
def stats_years(
    club_id: Annotated[str, typer.Argument(help="Club ID")],
) -> None:
    """List the year filter options for a club."""
    years = _run(lambda s: s.fetch_available_years(club_id))
    for year in years:
        console.print(year)


if __name__ == "__main__":
    app()
