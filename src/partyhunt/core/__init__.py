"""Core data models and parsing functionality."""

from .models import LootType, PlayerRecord, SessionRecord, Transfer
from .parser import (
    DuplicatePlayerError,
    MalformedDateRangeError,
    MissingSessionHeaderError,
    ReportParseError,
    load_session_report,
    parse_session_report,
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
]
