"""
Shared CLI utilities and helper functions.

This module contains the report loading and rendering helpers used across
CLI commands.
"""

from __future__ import annotations

import sys
from typing import List, Optional, Sequence

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..core.models import SessionRecord, Transfer
from ..core.parser import ReportParseError, load_session_report, parse_session_report
from ..services.display import (
    describe_leader,
    format_date_range,
    format_decimal,
    format_number,
    prepare_players_for_display,
)
from ..services.json_serializer import build_analysis_payload
from ..services.settlement import SettlementSummary

OUTPUT_FORMATS = click.Choice(["table", "summary", "json"])


def load_report(report_file: str) -> SessionRecord:
    """Parse a report file, or stdin when given ``-``, converting failures into Click errors."""
    try:
        if report_file == "-":
            return parse_session_report(sys.stdin.read())
        return load_session_report(report_file)
    except UnicodeDecodeError as exc:
        raise click.ClickException(f"Report is not valid UTF-8 text: {exc.reason}") from exc
    except ReportParseError as exc:
        raise click.ClickException(str(exc)) from exc


def create_players_table(session: SessionRecord) -> Table:
    """Create a Rich table with per-player statistics."""
    table = Table(title="Player Statistics")
    table.add_column("Player", style="cyan", no_wrap=True)
    table.add_column("Loot", justify="right", style="green")
    table.add_column("Supplies", justify="right", style="red")
    table.add_column("Balance", justify="right")
    table.add_column("Should Receive", justify="right", style="blue")
    table.add_column("Damage", justify="right")
    table.add_column("Healing", justify="right")

    for player, row in zip(session.players, prepare_players_for_display(session)):
        balance_style = "green" if player.balance >= 0 else "red"
        table.add_row(
            row["name"],
            row["loot"],
            row["supplies"],
            f"[{balance_style}]{row['balance']}[/{balance_style}]",
            row["should_receive"],
            row["damage"],
            row["healing"],
        )

    return table


def create_transfers_table(transfers: Sequence[Transfer]) -> Table:
    """Create a Rich table listing the leader's transfers."""
    table = Table(title="Transfers")
    table.add_column("From", style="yellow", no_wrap=True)
    table.add_column("To", style="blue", no_wrap=True)
    table.add_column("Amount", justify="right")
    table.add_column("Command", style="dim")

    for transfer in transfers:
        table.add_row(
            transfer.sender,
            transfer.recipient,
            format_number(transfer.amount),
            transfer.command,
        )

    return table


def summary_lines(session: SessionRecord, summary: Optional[SettlementSummary]) -> List[str]:
    """Text lines describing the session and settlement aggregates."""
    lines = [
        f"Period: {format_date_range(session)}",
        f"Duration: {session.duration_label}",
        f"Loot Type: {session.loot_type.value}",
        f"Players: {session.player_count}",
        f"Leader: {describe_leader(session) or 'none'}",
        f"Loot: {format_number(session.total_loot)}",
        f"Supplies: {format_number(session.total_supplies)}",
        f"Balance: {format_number(session.total_balance)}",
    ]
    if summary is not None:
        lines.extend(
            [
                f"Balance per player: {format_number(session.total_balance)} / "
                f"{summary.player_count} = {format_number(summary.rounded_share)}",
                f"Total session profit: {format_number(summary.total_profit)} "
                f"({format_decimal(summary.profit_per_player)} per player)",
                f"Transferred: {format_number(summary.transferred_total)} "
                f"(rounding drift {format_decimal(summary.rounding_drift)})",
            ]
        )
    return lines


def render_analysis(
    console: Console,
    session: SessionRecord,
    transfers: Sequence[Transfer],
    summary: Optional[SettlementSummary],
    *,
    output_format: str,
    source: Optional[str] = None,
) -> None:
    """Print a session analysis in the requested format."""
    if output_format == "json":
        console.print_json(
            data=build_analysis_payload(
                source=source, session=session, transfers=transfers, summary=summary
            )
        )
        return

    console.print(
        Panel("\n".join(summary_lines(session, summary)), title="Summary", border_style="blue")
    )

    if output_format == "table":
        console.print(create_players_table(session))

    if transfers:
        console.print(create_transfers_table(transfers))
    elif session.leader is None:
        console.print("[yellow]No leader in this session; no transfers to make.[/yellow]")
    else:
        console.print("[yellow]No transfers to make.[/yellow]")

    if any(transfer.amount < 0 for transfer in transfers):
        console.print(
            "[yellow]Negative amounts: the session ran at a loss and these players "
            "owe the leader.[/yellow]"
        )
