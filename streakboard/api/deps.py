"""
Shared endpoint dependencies
"""

from typing import Optional

import httpx
from fastapi import Depends, Header, Request

from streakboard.clients.upstream import UpstreamClient
from streakboard.services.leaderboard import LeaderboardService
from streakboard.services.organizations import OrganizationService


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Shared connection pool created in the application lifespan"""
    return request.app.state.http_client


def get_bearer_token(authorization: Optional[str] = Header(default=None)) -> Optional[str]:
    """Caller's token, forwarded untouched; identity is checked upstream"""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() == "bearer" and token.strip():
        return token.strip()
    return None


def get_upstream_client(
    request: Request,
    http_client: httpx.AsyncClient = Depends(get_http_client),
    token: Optional[str] = Depends(get_bearer_token),
) -> UpstreamClient:
    return UpstreamClient(
        http_client,
        token=token,
        request_id=getattr(request.state, "request_id", None),
    )


def get_leaderboard_service(
    upstream: UpstreamClient = Depends(get_upstream_client),
) -> LeaderboardService:
    return LeaderboardService(upstream)


def get_organization_service(
    upstream: UpstreamClient = Depends(get_upstream_client),
) -> OrganizationService:
    return OrganizationService(upstream)
