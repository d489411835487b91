"""Services for session settlement and output."""

from .display import (
    describe_leader,
    filter_transfers,
    format_date_range,
    format_decimal,
    format_number,
    format_player_name,
    format_timestamp,
    format_transfer_commands,
    prepare_players_for_display,
)
from .json_serializer import (
    build_analysis_payload,
    deserialize_session,
    serialize_decimal,
    serialize_player,
    serialize_session,
    serialize_summary,
    serialize_transfer,
)
from .report_writer import render_session_report
from .settlement import (
    SettlementSummary,
    amount_owed,
    calculate_transfers,
    round_currency,
    share_per_player,
    summarize_settlement,
)

__all__ = [
    "calculate_transfers",
    "summarize_settlement",
    "amount_owed",
    "round_currency",
    "share_per_player",
    "SettlementSummary",
    "format_number",
    "format_decimal",
    "format_timestamp",
    "format_date_range",
    "format_player_name",
    "format_transfer_commands",
    "filter_transfers",
    "prepare_players_for_display",
    "describe_leader",
    "serialize_decimal",
    "serialize_player",
    "serialize_session",
    "serialize_transfer",
    "serialize_summary",
    "build_analysis_payload",
    "deserialize_session",
    "render_session_report",
]
