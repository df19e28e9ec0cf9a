"""Organization service"""

from typing import List

from streakboard.clients.upstream import UpstreamClient
from streakboard.schemas.organizations import OrganizationSummary


class OrganizationService:
    def __init__(self, upstream: UpstreamClient):
        self.upstream = upstream

    async def list_organizations(self) -> List[OrganizationSummary]:
        """Organizations the caller belongs to, as listed by the tracks API"""
        return await self.upstream.list_organizations()
