"""
RoundScope Core - Foundation modules for match analytics.

This module contains the fundamental components:
- constants: Enums, rule constants and the invalid-input error
- config: Application configuration management
- schemas: Immutable records supplied by the match/stats service
"""

from roundscope.core.constants import (
    HALF_LENGTH,
    MIN_STREAK_LENGTH,
    OVERTIME_ROUND_THRESHOLD,
    BuyType,
    InvalidMatchDataError,
    Severity,
    Side,
    SortKey,
    TeamSlot,
    WinMethod,
)
from roundscope.core.schemas import (
    ClutchInfo,
    DefuseEvent,
    EconomyRound,
    FirstKill,
    KillEvent,
    Match,
    MatchData,
    PlantEvent,
    Player,
    PlayerStats,
    Position,
    RoundOutcome,
)

__all__ = [
    # Enums
    "BuyType",
    "Severity",
    "Side",
    "SortKey",
    "TeamSlot",
    "WinMethod",
    # Constants
    "HALF_LENGTH",
    "MIN_STREAK_LENGTH",
    "OVERTIME_ROUND_THRESHOLD",
    # Errors
    "InvalidMatchDataError",
    # Schemas (data contracts)
    "ClutchInfo",
    "DefuseEvent",
    "EconomyRound",
    "FirstKill",
    "KillEvent",
    "Match",
    "MatchData",
    "PlantEvent",
    "Player",
    "PlayerStats",
    "Position",
    "RoundOutcome",
]
