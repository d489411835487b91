"""Render session records back into the party hunt report format."""

from __future__ import annotations

from typing import List

from ..core.models import PlayerRecord, SessionRecord
from ..core.parser import (
    BALANCE_LABEL,
    DAMAGE_LABEL,
    DURATION_LABEL,
    HEADER_LABEL,
    HEALING_LABEL,
    LEADER_MARKER,
    LOOT_LABEL,
    LOOT_TYPE_LABEL,
    SUPPLIES_LABEL,
    TIMESTAMP_FORMAT,
    is_player_line,
)

PLAYER_INDENT = "\t"


def render_session_report(session: SessionRecord) -> str:
    """
    Render ``session`` in the text format the game client produces.

    Parsing the result yields an equal record. Raises ``ValueError`` for a
    player whose name would not read back as a player line, such as one
    starting with ``Loot`` or containing ``:``.
    """

    start = session.start_time.strftime(TIMESTAMP_FORMAT)
    end = session.end_time.strftime(TIMESTAMP_FORMAT)
    lines: List[str] = [
        f"{HEADER_LABEL} From {start} to {end}",
        f"{DURATION_LABEL} {session.duration_label}",
        f"{LOOT_TYPE_LABEL} {session.loot_type.value}",
        f"{LOOT_LABEL} {session.total_loot:,}",
        f"{SUPPLIES_LABEL} {session.total_supplies:,}",
        f"{BALANCE_LABEL} {session.total_balance:,}",
    ]
    for player in session.players:
        lines.extend(_render_player(player))
    return "\n".join(lines) + "\n"


def _render_player(player: PlayerRecord) -> List[str]:
    name = f"{player.name} {LEADER_MARKER}" if player.is_leader else player.name
    if not is_player_line(name):
        raise ValueError(f"Player name cannot be written as a report line: {player.name!r}")
    return [
        name,
        f"{PLAYER_INDENT}{LOOT_LABEL} {player.loot:,}",
        f"{PLAYER_INDENT}{SUPPLIES_LABEL} {player.supplies:,}",
        f"{PLAYER_INDENT}{BALANCE_LABEL} {player.balance:,}",
        f"{PLAYER_INDENT}{DAMAGE_LABEL} {player.damage:,}",
        f"{PLAYER_INDENT}{HEALING_LABEL} {player.healing:,}",
    ]
