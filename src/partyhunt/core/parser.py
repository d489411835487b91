"""
Report parsing functionality for party hunt settlement.

This module turns the text copied from the game client's party hunt
analyser into a :class:`~partyhunt.core.models.SessionRecord`.
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Union

from .models import LootType, PlayerRecord, SessionRecord

logger = logging.getLogger(__name__)

HEADER_LABEL = "Session data:"
DURATION_LABEL = "Session:"
LOOT_TYPE_LABEL = "Loot Type:"
LOOT_LABEL = "Loot:"
SUPPLIES_LABEL = "Supplies:"
BALANCE_LABEL = "Balance:"
DAMAGE_LABEL = "Damage:"
HEALING_LABEL = "Healing:"
LEADER_MARKER = "(Leader)"
FIELD_SEPARATOR = ":"
BYTE_ORDER_MARK = "\ufeff"
RESERVED_PREFIXES = ("Session", "Loot", "Supplies", "Balance")

DEFAULT_DURATION = "00:00h"
DEFAULT_LOOT_TYPE = LootType.LEADER
TIMESTAMP_FORMAT = "%Y-%m-%d, %H:%M:%S"
DATE_RANGE_PATTERN = re.compile(
    r"From (\d{4}-\d{2}-\d{2}, \d{2}:\d{2}:\d{2}) to (\d{4}-\d{2}-\d{2}, \d{2}:\d{2}:\d{2})"
)

# Per-player labels mapped to the PlayerRecord field they set.
PLAYER_FIELD_LABELS: Dict[str, str] = {
    LOOT_LABEL: "loot",
    SUPPLIES_LABEL: "supplies",
    BALANCE_LABEL: "balance",
    DAMAGE_LABEL: "damage",
    HEALING_LABEL: "healing",
}


class ReportParseError(ValueError):
    """Raised when a session report cannot be parsed."""


class MissingSessionHeaderError(ReportParseError):
    """Raised when the ``Session data:`` line is absent."""

    def __init__(self) -> None:
        super().__init__(f'Report is missing the "{HEADER_LABEL}" line.')


class MalformedDateRangeError(ReportParseError):
    """Raised when the header line does not carry a readable date range."""

    def __init__(self, line: str) -> None:
        super().__init__(f"Date range not recognized: {line}")
        self.line = line


class DuplicatePlayerError(ReportParseError):
    """Raised when two player sections share a name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Player listed more than once: {name}")
        self.name = name


@dataclass
class _PlayerDraft:
    """Player section being accumulated by the scanner."""

    name: str
    is_leader: bool
    values: Dict[str, int] = field(default_factory=dict)

    def build(self) -> PlayerRecord:
        return PlayerRecord(name=self.name, is_leader=self.is_leader, **self.values)


@dataclass
class _ScanState:
    """Accumulator threaded through the player scan.

    ``active`` is None while no player section is open.
    """

    players: List[PlayerRecord] = field(default_factory=list)
    active: Optional[_PlayerDraft] = None

    def close_active(self) -> None:
        if self.active is not None:
            self.players.append(self.active.build())
            self.active = None


def parse_session_report(raw_text: str) -> SessionRecord:
    """
    Parse a party hunt report into a session record.

    Parameters
    ----------
    raw_text:
        The report text as copied from the game client.

    Returns
    -------
    SessionRecord
        Session metadata, reported totals and players in report order.

    Raises
    ------
    MissingSessionHeaderError
        When no line starts with ``Session data:``.
    MalformedDateRangeError
        When the header line has no ``From <date>, <time> to <date>, <time>``
        range or the timestamps are not valid dates.
    DuplicatePlayerError
        When a player name appears in more than one section.
    """

    text = raw_text.lstrip(BYTE_ORDER_MARK)
    lines = [line.strip() for line in text.strip().splitlines()]

    header = _find_labeled_line(lines, HEADER_LABEL)
    if header is None:
        raise MissingSessionHeaderError()
    start_time, end_time = _parse_date_range(header)

    duration = _labeled_value(lines, DURATION_LABEL) or DEFAULT_DURATION
    loot_type = _parse_loot_type(_labeled_value(lines, LOOT_TYPE_LABEL))
    total_loot = _parse_total(lines, LOOT_LABEL)
    total_supplies = _parse_total(lines, SUPPLIES_LABEL)
    total_balance = _parse_total(lines, BALANCE_LABEL)

    players = _parse_players(lines)
    _check_unique_names(players)
    leader_count = sum(1 for player in players if player.is_leader)
    if leader_count > 1:
        logger.warning(
            "Report flags %d players as leader; the first one will pay out", leader_count
        )

    logger.debug("Parsed session %s with %d players", start_time.isoformat(), len(players))
    return SessionRecord(
        start_time=start_time,
        end_time=end_time,
        duration_label=duration,
        loot_type=loot_type,
        total_loot=total_loot,
        total_supplies=total_supplies,
        total_balance=total_balance,
        players=tuple(players),
    )


def load_session_report(path: Union[str, Path]) -> SessionRecord:
    """Read a UTF-8 report file, with or without a byte order mark, and parse it."""
    text = Path(path).read_text(encoding="utf-8-sig")
    return parse_session_report(text)


def parse_grouped_int(value: Optional[str], label: str = "value") -> int:
    """
    Convert ``12,345``-style text to an integer.

    Missing, blank or unparsable values fall back to ``0`` and a warning is
    logged, because a silent zero can produce a misleading total.
    """

    cleaned = (value or "").replace(",", "").strip()
    if not cleaned:
        logger.warning('No value for "%s"; defaulting to 0', label)
        return 0
    try:
        return int(cleaned)
    except ValueError:
        logger.warning('Invalid integer for "%s": %r; defaulting to 0', label, value)
        return 0


def is_player_line(line: str) -> bool:
    """Whether ``line`` opens a new player section."""
    return (
        bool(line)
        and FIELD_SEPARATOR not in line
        and not line.startswith(RESERVED_PREFIXES)
    )


def split_leader_marker(line: str) -> tuple[str, bool]:
    """Return the player name without the leader marker and the leader flag."""
    is_leader = LEADER_MARKER in line
    name = line.replace(LEADER_MARKER, "").strip()
    return name, is_leader


def _find_labeled_line(lines: Sequence[str], label: str) -> Optional[str]:
    for line in lines:
        if line.startswith(label):
            return line
    return None


def _labeled_value(lines: Sequence[str], label: str) -> Optional[str]:
    line = _find_labeled_line(lines, label)
    if line is None:
        return None
    return _value_after_separator(line)


def _value_after_separator(line: str) -> str:
    _, _, value = line.partition(FIELD_SEPARATOR)
    return value.strip()


def _parse_date_range(header: str) -> tuple[datetime, datetime]:
    match = DATE_RANGE_PATTERN.search(header)
    if not match:
        raise MalformedDateRangeError(header)
    try:
        start = datetime.strptime(match.group(1), TIMESTAMP_FORMAT)
        end = datetime.strptime(match.group(2), TIMESTAMP_FORMAT)
    except ValueError as exc:
        raise MalformedDateRangeError(header) from exc
    return start, end


def _parse_loot_type(value: Optional[str]) -> LootType:
    if not value:
        return DEFAULT_LOOT_TYPE
    try:
        return LootType(value)
    except ValueError:
        logger.warning("Unknown loot type %r; defaulting to %s", value, DEFAULT_LOOT_TYPE.value)
        return DEFAULT_LOOT_TYPE


def _parse_total(lines: Sequence[str], label: str) -> int:
    line = _find_labeled_line(lines, label)
    if line is None:
        logger.warning('Report has no "%s" line; defaulting to 0', label)
        return 0
    return parse_grouped_int(_value_after_separator(line), label)


def _open_player(state: _ScanState, line: str) -> None:
    state.close_active()
    name, is_leader = split_leader_marker(line)
    if not name:
        logger.warning("Ignoring player line without a name: %r", line)
        return
    state.active = _PlayerDraft(name=name, is_leader=is_leader)


def _apply_player_field(state: _ScanState, line: str) -> None:
    if state.active is None:
        return
    for label, field_name in PLAYER_FIELD_LABELS.items():
        if line.startswith(label):
            state.active.values[field_name] = parse_grouped_int(
                _value_after_separator(line), f"{state.active.name} {label}"
            )
            return


LineHandler = Callable[[_ScanState, str], None]


def _parse_players(lines: Sequence[str]) -> List[PlayerRecord]:
    state = _ScanState()
    for line in lines:
        handler: LineHandler = _open_player if is_player_line(line) else _apply_player_field
        handler(state, line)
    state.close_active()
    return state.players


def _check_unique_names(players: Sequence[PlayerRecord]) -> None:
    seen = set()
    for player in players:
        if player.name in seen:
            raise DuplicatePlayerError(player.name)
        seen.add(player.name)
