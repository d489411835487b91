"""
History commands for partyhunt CLI.

Lists, shows and deletes sessions saved with ``analyze --save``.
"""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from ..persistence import SessionNotFoundError, StoredSession, get_storage
from ..services.display import format_number, format_timestamp
from ..services.settlement import calculate_transfers, summarize_settlement
from .utils import OUTPUT_FORMATS, render_analysis


def _build_history_table(stored: list[StoredSession]) -> Table:
    table = Table(title="Saved Sessions")
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Start", style="magenta", no_wrap=True)
    table.add_column("Duration")
    table.add_column("Loot Type")
    table.add_column("Players", justify="right")
    table.add_column("Leader", style="yellow")
    table.add_column("Balance", justify="right")

    for item in stored:
        session = item.session
        leader = session.leader
        table.add_row(
            str(item.id),
            format_timestamp(session.start_time),
            session.duration_label,
            session.loot_type.value,
            str(session.player_count),
            leader.name if leader else "--",
            format_number(session.total_balance),
        )
    return table


@click.group()
def history():
    """Browse saved sessions."""
    pass


@history.command("list")
def list_sessions():
    """List saved sessions, newest first."""
    console = Console()
    stored = get_storage().list_sessions()
    if not stored:
        console.print("[yellow]No saved sessions.[/yellow]")
        return
    console.print(_build_history_table(stored))


@history.command("show")
@click.argument("session_id", type=int)
@click.option(
    "--format",
    "output_format",
    type=OUTPUT_FORMATS,
    default="table",
    show_default=True,
    help="Output format",
)
def show_session(session_id, output_format):
    """Show a saved session with its transfers."""
    console = Console()
    try:
        stored = get_storage().get_session(session_id)
    except SessionNotFoundError as exc:
        raise click.ClickException(str(exc)) from exc
    transfers = calculate_transfers(stored.session)
    render_analysis(
        console,
        stored.session,
        transfers,
        summarize_settlement(stored.session, transfers),
        output_format=output_format,
        source=f"history:{stored.id}",
    )


@history.command("delete")
@click.argument("session_id", type=int)
def delete_session(session_id):
    """Delete a saved session."""
    try:
        get_storage().delete_session(session_id)
    except SessionNotFoundError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Deleted session #{session_id}")
