"""
Cross-track leaderboard aggregation

Merges the per-track leaderboards of one organization into a single ranking.
Scores add up across tracks; streaks do not. A user is credited with the
longest current streak seen on any one track, together with the multiplier
that came with it.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from streakboard.schemas.leaderboard import AggregatedEntry, LeaderboardEntry

TrackResults = Sequence[Tuple[str, Optional[Sequence[LeaderboardEntry]]]]


@dataclass
class _Accumulator:
    user_id: str
    user_name: str
    base_score: float
    total_score: float
    current_streak: int
    streak_multiplier: float
    track_count: int = 1

    @classmethod
    def start(cls, entry: LeaderboardEntry) -> "_Accumulator":
        return cls(
            user_id=entry.user_id,
            user_name=entry.user_name,
            base_score=entry.base_score,
            total_score=entry.total_score,
            current_streak=entry.current_streak,
            streak_multiplier=entry.streak_multiplier,
        )

    def add(self, entry: LeaderboardEntry) -> None:
        self.total_score += entry.total_score
        self.base_score += entry.base_score
        self.track_count += 1
        # Strictly greater: on equal streaks the first track seen keeps its multiplier
        if entry.current_streak > self.current_streak:
            self.current_streak = entry.current_streak
            self.streak_multiplier = entry.streak_multiplier


def aggregate(per_track_results: TrackResults) -> List[AggregatedEntry]:
    """
    Combine per-track leaderboards into one ranked list.

    Args:
        per_track_results: ``(track_id, entries)`` pairs in a fixed track
            order. ``None`` entries (a failed fetch) count as an empty track.

    Returns:
        One entry per user, sorted by total score descending with ties kept
        in first-appearance order, ranked 1..N.
    """
    by_user: Dict[str, _Accumulator] = {}

    for _track_id, entries in per_track_results:
        for entry in entries or ():
            existing = by_user.get(entry.user_id)
            if existing is None:
                by_user[entry.user_id] = _Accumulator.start(entry)
            else:
                existing.add(entry)

    # sorted() is stable; dicts keep insertion order
    ordered = sorted(by_user.values(), key=lambda acc: acc.total_score, reverse=True)

    return [
        AggregatedEntry(
            rank=index + 1,
            user_id=acc.user_id,
            user_name=acc.user_name,
            base_score=acc.base_score,
            total_score=acc.total_score,
            current_streak=acc.current_streak,
            streak_multiplier=acc.streak_multiplier,
            track_count=acc.track_count,
        )
        for index, acc in enumerate(ordered)
    ]


def rank_single_track(entries: Sequence[LeaderboardEntry]) -> List[LeaderboardEntry]:
    """
    Ranking for a single track in view.

    The tracks API already ranks a single leaderboard, so its entries are
    used exactly as served: same order, same ranks.
    """
    return list(entries)
