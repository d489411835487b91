"""
partyhunt - Party hunt session settlement tool.

A Python package for parsing party hunt reports and computing the transfers
the party leader owes every other player.
"""

__version__ = "0.1.0"

# Import main components for easy access
from .core.models import LootType, PlayerRecord, SessionRecord, Transfer
from .core.parser import (
    DuplicatePlayerError,
    MalformedDateRangeError,
    MissingSessionHeaderError,
    ReportParseError,
    load_session_report,
    parse_session_report,
)
from .services.report_writer import render_session_report
from .services.settlement import (
    SettlementSummary,
    calculate_transfers,
    summarize_settlement,
)

__all__ = [
    "LootType",
    "PlayerRecord",
    "SessionRecord",
    "Transfer",
    "ReportParseError",
    "MissingSessionHeaderError",
    "MalformedDateRangeError",
    "DuplicatePlayerError",
    "parse_session_report",
    "load_session_report",
    "calculate_transfers",
    "summarize_settlement",
    "SettlementSummary",
    "render_session_report",
]
