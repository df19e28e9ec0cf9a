"""
Track endpoints
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from streakboard.api.deps import get_leaderboard_service
from streakboard.schemas.leaderboard import TrackLeaderboardResponse
from streakboard.schemas.organizations import TrackSummary
from streakboard.services.leaderboard import LeaderboardService

router = APIRouter()


@router.get("/my-tracks", response_model=List[TrackSummary])
async def list_my_tracks(service: LeaderboardService = Depends(get_leaderboard_service)):
    """Tracks the caller has joined"""
    return await service.list_my_tracks()


@router.get("/{track_id}/leaderboard", response_model=TrackLeaderboardResponse)
async def get_track_leaderboard(
    track_id: str,
    viewer_id: Optional[str] = Query(None, description="User id to highlight"),
    service: LeaderboardService = Depends(get_leaderboard_service),
):
    """Get a single track's leaderboard"""
    return await service.get_track_leaderboard(track_id, viewer_id=viewer_id)
