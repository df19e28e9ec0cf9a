"""
Tracks API client
Thin async wrapper over the remote organization/track/leaderboard API
"""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from streakboard.core.exceptions import UpstreamServiceException
from streakboard.schemas.leaderboard import LeaderboardEntry, decode_leaderboard
from streakboard.schemas.organizations import (
    OrganizationSummary,
    TrackSummary,
    decode_organizations,
    decode_tracks,
)

logger = logging.getLogger(__name__)


class UpstreamError(Exception):
    """A single upstream call failed (transport, status or body)"""

    def __init__(self, path: str, reason: str, status_code: Optional[int] = None):
        self.path = path
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"GET {path} failed: {reason}")


def _unwrap(payload: Any, *keys: str) -> Any:
    """Return the first present envelope key, or the payload itself if it is a list"""
    if isinstance(payload, dict):
        for key in keys:
            value = payload.get(key)
            if value is not None:
                return value
        return None
    return payload


def _segment(value: str) -> str:
    """Escape an id for use as one URL path segment"""
    return quote(value, safe="")


class UpstreamClient:
    """
    Per-request view of the tracks API.

    The underlying ``httpx.AsyncClient`` is shared across requests; the
    caller's bearer token and request id are attached per call.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        token: Optional[str] = None,
        request_id: Optional[str] = None,
    ):
        self.http_client = http_client
        self.token = token
        self.request_id = request_id

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        if self.request_id:
            headers["X-Request-ID"] = self.request_id
        return headers

    async def _get_json(self, path: str) -> Any:
        try:
            response = await self.http_client.get(path, headers=self._headers())
        except httpx.HTTPError as e:
            raise UpstreamError(path, f"{type(e).__name__}: {e}") from e

        if not response.is_success:
            raise UpstreamError(path, f"HTTP {response.status_code}", response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(path, "invalid JSON body", response.status_code) from e

    def _log_failure(self, error: UpstreamError) -> None:
        logger.warning(
            str(error),
            extra={
                "upstream_path": error.path,
                "upstream_status": error.status_code,
                "request_id": self.request_id,
            },
        )

    async def list_organizations(self) -> List[OrganizationSummary]:
        """Organizations visible to the caller; failure is surfaced"""
        try:
            payload = await self._get_json("/api/organizations")
        except UpstreamError as e:
            self._log_failure(e)
            raise UpstreamServiceException(
                "Failed to fetch organizations", details={"status": e.status_code}
            ) from e
        return decode_organizations(_unwrap(payload, "organizations", "data"))

    async def get_organization(self, organization_id: str) -> Optional[OrganizationSummary]:
        try:
            payload = await self._get_json(f"/api/organizations/{_segment(organization_id)}")
        except UpstreamError as e:
            self._log_failure(e)
            return None
        found = decode_organizations([_unwrap(payload, "data", "organization")])
        return found[0] if found else None

    async def list_tracks(self, organization_id: str) -> List[TrackSummary]:
        """Tracks of an organization, in the order the API lists them"""
        try:
            payload = await self._get_json(f"/api/tracks/org/{_segment(organization_id)}")
        except UpstreamError as e:
            self._log_failure(e)
            raise UpstreamServiceException(
                "Failed to fetch tracks",
                details={"organization_id": organization_id, "status": e.status_code},
            ) from e
        return decode_tracks(_unwrap(payload, "data", "tracks"))

    async def list_my_tracks(self) -> List[TrackSummary]:
        try:
            payload = await self._get_json("/api/tracks/my-tracks")
        except UpstreamError as e:
            self._log_failure(e)
            return []
        return decode_tracks(_unwrap(payload, "tracks", "data"))

    async def get_track(self, track_id: str) -> Optional[TrackSummary]:
        try:
            payload = await self._get_json(f"/api/tracks/{_segment(track_id)}")
        except UpstreamError as e:
            self._log_failure(e)
            return None
        found = decode_tracks([_unwrap(payload, "track", "data")])
        return found[0] if found else None

    async def get_leaderboard(self, track_id: str) -> List[LeaderboardEntry]:
        """A track's ranked entries; any failure reads as an empty leaderboard"""
        try:
            payload = await self._get_json(f"/api/tracks/{_segment(track_id)}/leaderboard")
        except UpstreamError as e:
            self._log_failure(e)
            return []
        return decode_leaderboard(_unwrap(payload, "leaderboard"))
