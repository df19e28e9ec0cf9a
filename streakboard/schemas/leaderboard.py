"""Leaderboard schemas"""

import logging
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from streakboard.schemas.organizations import TrackSummary
from streakboard.utils.validators import (
    coerce_count,
    coerce_identifier,
    coerce_multiplier,
    coerce_score,
    coerce_text,
)

logger = logging.getLogger(__name__)


class LeaderboardEntry(BaseModel):
    """One row of a track leaderboard as served by the tracks API"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    user_id: str
    user_name: str = ""
    base_score: float = 0.0
    total_score: float = 0.0
    current_streak: int = 0
    longest_streak: int = 0
    streak_multiplier: float = 1.0
    rank: int = 0

    @field_validator("user_id", mode="before")
    @classmethod
    def require_user_id(cls, v: Any) -> str:
        return coerce_identifier(v)

    @field_validator("user_name", mode="before")
    @classmethod
    def name_or_blank(cls, v: Any) -> str:
        return coerce_text(v)

    @field_validator("base_score", "total_score", mode="before")
    @classmethod
    def score_or_zero(cls, v: Any) -> float:
        return coerce_score(v)

    @field_validator("current_streak", "longest_streak", "rank", mode="before")
    @classmethod
    def count_or_zero(cls, v: Any) -> int:
        return coerce_count(v)

    @field_validator("streak_multiplier", mode="before")
    @classmethod
    def multiplier_or_one(cls, v: Any) -> float:
        return coerce_multiplier(v)


class AggregatedEntry(BaseModel):
    """A user's combined standing across every track of an organization"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    rank: int
    user_id: str
    user_name: str
    base_score: float
    total_score: float
    current_streak: int
    streak_multiplier: float
    track_count: int


class RankedEntryView(BaseModel):
    """Presentation-ready leaderboard row"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    rank: int
    user_id: str
    user_name: str
    base_score: float
    total_score: float
    display_score: int
    current_streak: int
    longest_streak: Optional[int] = None
    streak_multiplier: float
    multiplier_label: Optional[str] = None
    track_count: Optional[int] = None
    podium: Optional[str] = None
    is_viewer: bool = False


class TrackLeaderboardResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    track_id: str
    track_name: str
    entries: List[RankedEntryView]
    is_empty: bool


class OrganizationLeaderboardResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    organization_id: str
    organization_name: str
    selected_track_id: str
    combined: bool
    tracks: List[TrackSummary]
    entries: List[RankedEntryView]
    is_empty: bool


def decode_leaderboard(rows: Any) -> List[LeaderboardEntry]:
    """
    Decode upstream leaderboard rows into strict entries

    Missing or malformed numeric fields fall back to their defaults.
    Rows without a user id cannot be attributed to anyone and are dropped.
    """
    entries = []
    for row in rows if isinstance(rows, list) else []:
        try:
            entries.append(LeaderboardEntry.model_validate(row))
        except ValidationError as e:
            logger.warning("Dropping malformed leaderboard row", extra={"error": str(e)})
    return entries
