"""
Organization endpoints
Organization listing and combined organization leaderboards
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from streakboard.api.deps import get_leaderboard_service, get_organization_service
from streakboard.schemas.leaderboard import OrganizationLeaderboardResponse
from streakboard.schemas.organizations import OrganizationSummary
from streakboard.services.leaderboard import ALL_TRACKS, LeaderboardService
from streakboard.services.organizations import OrganizationService

router = APIRouter()


@router.get("", response_model=List[OrganizationSummary])
async def list_organizations(
    service: OrganizationService = Depends(get_organization_service),
):
    """List the caller's organizations"""
    return await service.list_organizations()


@router.get("/{organization_id}/leaderboard", response_model=OrganizationLeaderboardResponse)
async def get_organization_leaderboard(
    organization_id: str,
    track_id: str = Query(ALL_TRACKS, min_length=1, description="'all' or one track id"),
    viewer_id: Optional[str] = Query(None, description="User id to highlight"),
    service: LeaderboardService = Depends(get_leaderboard_service),
):
    """Combined ranking across every track of an organization"""
    return await service.get_organization_leaderboard(
        organization_id, track_id=track_id, viewer_id=viewer_id
    )
