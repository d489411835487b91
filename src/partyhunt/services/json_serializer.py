"""JSON serialization utilities for session and settlement data."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional, Sequence

from ..core.models import LootType, PlayerRecord, SessionRecord, Transfer
from ..core.parser import TIMESTAMP_FORMAT
from .settlement import SettlementSummary


def serialize_decimal(value: Any) -> Any:
    """Serialize Decimal values to JSON-compatible format."""
    if isinstance(value, Decimal):
        normalized = value.normalize()
        return format(normalized, "f")
    return value


def serialize_timestamp(value: datetime) -> str:
    """Serialize a timestamp in the report's own format."""
    return value.strftime(TIMESTAMP_FORMAT)


def serialize_player(player: PlayerRecord) -> Dict[str, Any]:
    """Serialize a player record for JSON output."""
    return {
        "name": player.name,
        "loot": player.loot,
        "supplies": player.supplies,
        "balance": player.balance,
        "damage": player.damage,
        "healing": player.healing,
        "is_leader": player.is_leader,
    }


def serialize_session(session: SessionRecord) -> Dict[str, Any]:
    """Serialize a session record for JSON output."""
    return {
        "start_date": serialize_timestamp(session.start_time),
        "end_date": serialize_timestamp(session.end_time),
        "duration": session.duration_label,
        "loot_type": session.loot_type.value,
        "total_loot": session.total_loot,
        "total_supplies": session.total_supplies,
        "total_balance": session.total_balance,
        "players": [serialize_player(player) for player in session.players],
    }


def serialize_transfer(transfer: Transfer) -> Dict[str, Any]:
    """Serialize a transfer, keeping the in-game command alongside."""
    return {
        "from": transfer.sender,
        "to": transfer.recipient,
        "amount": transfer.amount,
        "command": transfer.command,
    }


def serialize_summary(summary: Optional[SettlementSummary]) -> Optional[Dict[str, Any]]:
    """Serialize settlement aggregates; Decimals become plain strings."""
    if summary is None:
        return None
    return {
        "player_count": summary.player_count,
        "share_per_player": serialize_decimal(summary.share_per_player),
        "rounded_share": summary.rounded_share,
        "total_profit": summary.total_profit,
        "profit_per_player": serialize_decimal(summary.profit_per_player),
        "expected_total": serialize_decimal(summary.expected_total),
        "transferred_total": summary.transferred_total,
        "rounding_drift": serialize_decimal(summary.rounding_drift),
    }


def build_analysis_payload(
    *,
    source: Optional[str],
    session: SessionRecord,
    transfers: Sequence[Transfer],
    summary: Optional[SettlementSummary],
) -> Dict[str, Any]:
    """Build the complete payload for JSON output of an analysis."""
    leader = session.leader
    return {
        "source": source,
        "session": serialize_session(session),
        "leader": leader.name if leader else None,
        "transfers": [serialize_transfer(transfer) for transfer in transfers],
        "summary": serialize_summary(summary),
    }


def deserialize_session(data: Dict[str, Any]) -> SessionRecord:
    """Rebuild a session record from :func:`serialize_session` output."""
    return SessionRecord(
        start_time=datetime.strptime(data["start_date"], TIMESTAMP_FORMAT),
        end_time=datetime.strptime(data["end_date"], TIMESTAMP_FORMAT),
        duration_label=data.get("duration", ""),
        loot_type=LootType(data.get("loot_type", LootType.LEADER.value)),
        total_loot=int(data.get("total_loot", 0)),
        total_supplies=int(data.get("total_supplies", 0)),
        total_balance=int(data.get("total_balance", 0)),
        players=tuple(
            PlayerRecord(
                name=player["name"],
                loot=int(player.get("loot", 0)),
                supplies=int(player.get("supplies", 0)),
                balance=int(player.get("balance", 0)),
                damage=int(player.get("damage", 0)),
                healing=int(player.get("healing", 0)),
                is_leader=bool(player.get("is_leader", False)),
            )
            for player in data.get("players", [])
        ),
    )
