"""
Settlement calculations for party hunt sessions.

The leader holds the loot after a hunt and reimburses every other player for
their supplies plus an equal share of the session balance.
"""

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Sequence

from ..core.models import PlayerRecord, SessionRecord, Transfer

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


@dataclass(frozen=True)
class SettlementSummary:
    """Aggregates derived from a session and its transfers."""

    player_count: int
    share_per_player: Decimal  # total_balance / player_count, unrounded
    rounded_share: int
    total_profit: int  # total_loot - total_supplies
    profit_per_player: Decimal
    expected_total: Decimal  # unrounded sum of what the leader owes
    transferred_total: int
    rounding_drift: Decimal  # transferred_total - expected_total


def round_currency(value: Decimal) -> int:
    """Round to the nearest whole unit, ties away from zero."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def share_per_player(session: SessionRecord) -> Optional[Decimal]:
    """Real-valued share of the session balance, or None without players."""
    if not session.players:
        return None
    return Decimal(session.total_balance) / Decimal(len(session.players))


def amount_owed(session: SessionRecord, player: PlayerRecord) -> int:
    """Supplies plus balance share for ``player``, rounded to whole units."""
    share = share_per_player(session)
    if share is None:
        return 0
    return round_currency(Decimal(player.supplies) + share)


def calculate_transfers(session: SessionRecord) -> List[Transfer]:
    """
    Compute what the leader must send to every other player.

    Returns an empty list when the session has no players or no leader.
    With several leader-flagged players the first one pays.
    """

    share = share_per_player(session)
    if share is None:
        logger.debug("Session has no players; nothing to settle")
        return []

    leader_index = _leader_index(session.players)
    if leader_index is None:
        logger.info("Session has no leader; nothing to settle")
        return []
    leader = session.players[leader_index]

    transfers: List[Transfer] = []
    for index, player in enumerate(session.players):
        if index == leader_index:
            continue
        transfers.append(
            Transfer(
                sender=leader.name,
                recipient=player.name,
                amount=round_currency(Decimal(player.supplies) + share),
            )
        )
    return transfers


def summarize_settlement(
    session: SessionRecord, transfers: Optional[Sequence[Transfer]] = None
) -> Optional[SettlementSummary]:
    """Build the settlement summary; None when the session has no players."""
    share = share_per_player(session)
    if share is None:
        return None
    if transfers is None:
        transfers = calculate_transfers(session)

    player_count = len(session.players)
    total_profit = session.total_loot - session.total_supplies

    leader_index = _leader_index(session.players)
    if leader_index is None:
        expected_total = ZERO
    else:
        expected_total = sum(
            (
                Decimal(player.supplies) + share
                for index, player in enumerate(session.players)
                if index != leader_index
            ),
            ZERO,
        )
    transferred_total = sum(transfer.amount for transfer in transfers)

    return SettlementSummary(
        player_count=player_count,
        share_per_player=share,
        rounded_share=round_currency(share),
        total_profit=total_profit,
        profit_per_player=Decimal(total_profit) / Decimal(player_count),
        expected_total=expected_total,
        transferred_total=transferred_total,
        rounding_drift=Decimal(transferred_total) - expected_total,
    )


def _leader_index(players: Sequence[PlayerRecord]) -> Optional[int]:
    for index, player in enumerate(players):
        if player.is_leader:
            return index
    return None
