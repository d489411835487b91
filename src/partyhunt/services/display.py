"""
Display formatting services for the partyhunt CLI.

This module provides formatting functions for displaying sessions, players
and transfers in the CLI interface.
"""

from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, Optional

from ..core.models import PlayerRecord, SessionRecord, Transfer
from .settlement import amount_owed

DISPLAY_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"


def format_number(value: int | Decimal | None) -> str:
    """Format a whole amount with thousands separators."""
    if value is None:
        return "--"
    if isinstance(value, Decimal):
        value = int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    return f"{value:,}"


def format_decimal(value: Decimal | None, places: int = 2) -> str:
    """Format a decimal amount with separators and fixed places."""
    if value is None:
        return "--"
    quantum = Decimal(1).scaleb(-places)
    quantized = value.quantize(quantum, rounding=ROUND_HALF_UP)
    return f"{quantized:,.{places}f}"


def format_timestamp(value: datetime) -> str:
    return value.strftime(DISPLAY_TIMESTAMP_FORMAT)


def format_date_range(session: SessionRecord) -> str:
    """Format the session start and end for display."""
    return f"{format_timestamp(session.start_time)} - {format_timestamp(session.end_time)}"


def format_player_name(player: PlayerRecord) -> str:
    """Player name with a leader tag."""
    return f"{player.name} (Leader)" if player.is_leader else player.name


def format_transfer_commands(
    transfers: Iterable[Transfer], *, skip_zero: bool = False
) -> List[str]:
    """Commands for every transfer, optionally dropping zero amounts."""
    return [transfer.command for transfer in filter_transfers(transfers, skip_zero=skip_zero)]


def filter_transfers(
    transfers: Iterable[Transfer], *, skip_zero: bool = False
) -> List[Transfer]:
    if not skip_zero:
        return list(transfers)
    return [transfer for transfer in transfers if transfer.amount != 0]


def prepare_players_for_display(session: SessionRecord) -> List[Dict[str, str]]:
    """Prepare player rows, including the amount each player should receive."""
    rows: List[Dict[str, str]] = []
    for player in session.players:
        rows.append(
            {
                "name": format_player_name(player),
                "loot": format_number(player.loot),
                "supplies": format_number(player.supplies),
                "balance": format_number(player.balance),
                "should_receive": format_number(amount_owed(session, player)),
                "damage": format_number(player.damage),
                "healing": format_number(player.healing),
            }
        )
    return rows


def describe_leader(session: SessionRecord) -> Optional[str]:
    """Name of the paying leader, noting ignored extra leaders."""
    leaders = session.leaders
    if not leaders:
        return None
    if len(leaders) == 1:
        return leaders[0].name
    others = ", ".join(player.name for player in leaders[1:])
    return f"{leaders[0].name} (also flagged: {others})"
