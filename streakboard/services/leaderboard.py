"""Leaderboard service"""

import asyncio
import logging
from typing import Any, Awaitable, Iterable, List, Optional, Tuple

from streakboard.clients.upstream import UpstreamClient
from streakboard.core.config import settings
from streakboard.core.exceptions import NotFoundException
from streakboard.core.logging import log_execution_time
from streakboard.schemas.leaderboard import (
    AggregatedEntry,
    LeaderboardEntry,
    OrganizationLeaderboardResponse,
    RankedEntryView,
    TrackLeaderboardResponse,
)
from streakboard.schemas.organizations import TrackSummary
from streakboard.services.aggregation import aggregate, rank_single_track
from streakboard.utils.formatters import display_score, multiplier_label, podium_for_rank

logger = logging.getLogger(__name__)

ALL_TRACKS = "all"


async def gather_or_cancel(*aws: Awaitable[Any]) -> List[Any]:
    """
    Run awaitables concurrently and return their results in argument order.

    If any of them raises, the others are cancelled and awaited before the
    error propagates, so no fetch outlives the request that started it.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


def build_aggregated_view(
    entries: Iterable[AggregatedEntry], viewer_id: Optional[str] = None
) -> List[RankedEntryView]:
    return [
        RankedEntryView(
            rank=entry.rank,
            user_id=entry.user_id,
            user_name=entry.user_name,
            base_score=entry.base_score,
            total_score=entry.total_score,
            display_score=display_score(entry.total_score),
            current_streak=entry.current_streak,
            streak_multiplier=entry.streak_multiplier,
            multiplier_label=multiplier_label(entry.streak_multiplier),
            track_count=entry.track_count,
            podium=podium_for_rank(entry.rank),
            is_viewer=viewer_id is not None and entry.user_id == viewer_id,
        )
        for entry in entries
    ]


def build_track_view(
    entries: Iterable[LeaderboardEntry], viewer_id: Optional[str] = None
) -> List[RankedEntryView]:
    return [
        RankedEntryView(
            rank=entry.rank,
            user_id=entry.user_id,
            user_name=entry.user_name,
            base_score=entry.base_score,
            total_score=entry.total_score,
            display_score=display_score(entry.total_score),
            current_streak=entry.current_streak,
            longest_streak=entry.longest_streak,
            streak_multiplier=entry.streak_multiplier,
            multiplier_label=multiplier_label(entry.streak_multiplier),
            podium=podium_for_rank(entry.rank),
            is_viewer=viewer_id is not None and entry.user_id == viewer_id,
        )
        for entry in entries
    ]


class LeaderboardService:
    """Builds track and organization leaderboards from the tracks API"""

    def __init__(self, upstream: UpstreamClient, fetch_concurrency: Optional[int] = None):
        self.upstream = upstream
        self.fetch_concurrency = fetch_concurrency or settings.LEADERBOARD_FETCH_CONCURRENCY

    async def fetch_track_leaderboards(
        self, tracks: List[TrackSummary]
    ) -> List[Tuple[str, List[LeaderboardEntry]]]:
        """
        Fetch every track's leaderboard with bounded concurrency.

        Results come back in the order of ``tracks`` no matter which request
        finishes first, so aggregation tie-breaks are reproducible. If the
        calling task is cancelled, gather cancels every outstanding fetch.
        """
        semaphore = asyncio.Semaphore(self.fetch_concurrency)

        async def fetch(track: TrackSummary) -> Tuple[str, List[LeaderboardEntry]]:
            async with semaphore:
                return track.id, await self.upstream.get_leaderboard(track.id)

        return await gather_or_cancel(*(fetch(track) for track in tracks))

    async def get_track_leaderboard(
        self, track_id: str, viewer_id: Optional[str] = None
    ) -> TrackLeaderboardResponse:
        """Single-track leaderboard, ranked as the API serves it"""
        track, entries = await gather_or_cancel(
            self.upstream.get_track(track_id),
            self.upstream.get_leaderboard(track_id),
        )
        ranked = rank_single_track(entries)
        return TrackLeaderboardResponse(
            track_id=track_id,
            track_name=track.name if track else "Track",
            entries=build_track_view(ranked, viewer_id),
            is_empty=not ranked,
        )

    @log_execution_time()
    async def get_organization_leaderboard(
        self,
        organization_id: str,
        track_id: str = ALL_TRACKS,
        viewer_id: Optional[str] = None,
    ) -> OrganizationLeaderboardResponse:
        """
        Combined leaderboard for an organization.

        With ``track_id`` set to a single track of the organization, that
        track's leaderboard is served as-is instead of the combined ranking.
        """
        organization, tracks = await gather_or_cancel(
            self.upstream.get_organization(organization_id),
            self.upstream.list_tracks(organization_id),
        )
        organization_name = organization.name if organization else "Community"

        if track_id != ALL_TRACKS:
            track = next((t for t in tracks if t.id == track_id), None)
            if track is None:
                raise NotFoundException(
                    "Track", details={"organization_id": organization_id, "track_id": track_id}
                )
            ranked = rank_single_track(await self.upstream.get_leaderboard(track.id))
            return OrganizationLeaderboardResponse(
                organization_id=organization_id,
                organization_name=organization_name,
                selected_track_id=track.id,
                combined=False,
                tracks=tracks,
                entries=build_track_view(ranked, viewer_id),
                is_empty=not ranked,
            )

        per_track = await self.fetch_track_leaderboards(tracks)
        combined = aggregate(per_track)

        logger.info(
            "Aggregated organization leaderboard",
            extra={
                "organization_id": organization_id,
                "track_total": len(tracks),
                "tracks_with_entries": sum(1 for _, entries in per_track if entries),
                "ranked_users": len(combined),
            },
        )

        return OrganizationLeaderboardResponse(
            organization_id=organization_id,
            organization_name=organization_name,
            selected_track_id=ALL_TRACKS,
            combined=True,
            tracks=tracks,
            entries=build_aggregated_view(combined, viewer_id),
            is_empty=not combined,
        )

    async def list_my_tracks(self) -> List[TrackSummary]:
        return await self.upstream.list_my_tracks()
