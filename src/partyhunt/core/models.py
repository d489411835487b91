"""
Core data models for party hunt settlement.

This module defines the Pydantic models for players, sessions and transfers.
"""

from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LootType(str, Enum):
    """Loot distribution mode reported by the game client."""

    LEADER = "Leader"
    MARKET = "Market"
    SPLIT = "Split"


class PlayerRecord(BaseModel):
    """Statistics for a single participant of a hunt session."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Character name as shown in the report")
    loot: int = Field(0, description="Loot value collected by the player")
    supplies: int = Field(0, description="Supplies consumed by the player")
    balance: int = Field(0, description="Reported balance (may be negative)")
    damage: int = Field(0, description="Damage dealt")
    healing: int = Field(0, description="Healing done")
    is_leader: bool = Field(False, description="Whether the player leads the party")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError("player name cannot be blank")
        return v


class SessionRecord(BaseModel):
    """A parsed hunt session: metadata, reported totals and players."""

    model_config = ConfigDict(frozen=True)

    start_time: datetime = Field(..., description="Session start")
    end_time: datetime = Field(..., description="Session end")
    duration_label: str = Field("00:00h", description="Duration exactly as reported")
    loot_type: LootType = Field(LootType.LEADER, description="Loot distribution mode")
    total_loot: int = Field(0, description="Reported total loot")
    total_supplies: int = Field(0, description="Reported total supplies")
    total_balance: int = Field(0, description="Reported total balance")
    players: Tuple[PlayerRecord, ...] = Field((), description="Players in report order")

    @field_validator("players")
    @classmethod
    def validate_players(cls, v):
        seen = set()
        for player in v:
            if player.name in seen:
                raise ValueError(f"duplicate player name: {player.name}")
            seen.add(player.name)
        return v

    @property
    def player_count(self) -> int:
        """Number of players in the session."""
        return len(self.players)

    @property
    def leaders(self) -> Tuple[PlayerRecord, ...]:
        """All leader-flagged players, in report order."""
        return tuple(player for player in self.players if player.is_leader)

    @property
    def leader(self) -> Optional[PlayerRecord]:
        """The effective leader: the first leader-flagged player, if any."""
        for player in self.players:
            if player.is_leader:
                return player
        return None

    def get_player(self, name: str) -> Optional[PlayerRecord]:
        """Return the player with ``name`` or None."""
        for player in self.players:
            if player.name == name:
                return player
        return None


class Transfer(BaseModel):
    """A single payment instruction from the leader to another player."""

    model_config = ConfigDict(frozen=True)

    sender: str = Field(..., description="Paying player (the leader)")
    recipient: str = Field(..., description="Receiving player")
    amount: int = Field(..., description="Whole currency units, negative on waste sessions")

    @property
    def command(self) -> str:
        """In-game command that performs this transfer."""
        return f"transfer {self.amount} to {self.recipient}"
