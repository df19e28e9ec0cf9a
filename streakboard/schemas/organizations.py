"""Organization and track schemas"""

import logging
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic.alias_generators import to_camel

from streakboard.utils.validators import coerce_identifier, coerce_optional_count, coerce_text

logger = logging.getLogger(__name__)


class OrganizationSummary(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    name: str = "Community"
    description: Optional[str] = None
    member_count: Optional[int] = None
    track_count: Optional[int] = None
    created_at: Optional[str] = None
    role: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def accept_mongo_id(cls, data: Any) -> Any:
        if isinstance(data, dict) and "id" not in data and "_id" in data:
            data = {**data, "id": data["_id"]}
        return data

    @field_validator("id", mode="before")
    @classmethod
    def require_id(cls, v: Any) -> str:
        return coerce_identifier(v)

    @field_validator("name", mode="before")
    @classmethod
    def name_or_default(cls, v: Any) -> str:
        return coerce_text(v) or "Community"

    @field_validator("member_count", "track_count", mode="before")
    @classmethod
    def optional_count(cls, v: Any) -> Optional[int]:
        return coerce_optional_count(v)

    @field_validator("description", "created_at", "role", mode="before")
    @classmethod
    def optional_text(cls, v: Any) -> Optional[str]:
        return coerce_text(v) or None


class TrackSummary(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    name: str = "Track"
    description: Optional[str] = None
    member_count: Optional[int] = None
    week_number: Optional[int] = None
    organization_name: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def accept_mongo_id(cls, data: Any) -> Any:
        if isinstance(data, dict) and "id" not in data and "_id" in data:
            data = {**data, "id": data["_id"]}
        return data

    @field_validator("id", mode="before")
    @classmethod
    def require_id(cls, v: Any) -> str:
        return coerce_identifier(v)

    @field_validator("name", mode="before")
    @classmethod
    def name_or_default(cls, v: Any) -> str:
        return coerce_text(v) or "Track"

    @field_validator("member_count", "week_number", mode="before")
    @classmethod
    def optional_count(cls, v: Any) -> Optional[int]:
        return coerce_optional_count(v)

    @field_validator("description", "organization_name", mode="before")
    @classmethod
    def optional_text(cls, v: Any) -> Optional[str]:
        return coerce_text(v) or None


def decode_organizations(rows: Any) -> List[OrganizationSummary]:
    """Decode an upstream organization list, dropping rows without an id"""
    organizations = []
    for row in rows if isinstance(rows, list) else []:
        try:
            organizations.append(OrganizationSummary.model_validate(row))
        except ValidationError as e:
            logger.warning("Dropping malformed organization row", extra={"error": str(e)})
    return organizations


def decode_tracks(rows: Any) -> List[TrackSummary]:
    """Decode an upstream track list, dropping rows without an id"""
    tracks = []
    for row in rows if isinstance(rows, list) else []:
        try:
            tracks.append(TrackSummary.model_validate(row))
        except ValidationError as e:
            logger.warning("Dropping malformed track row", extra={"error": str(e)})
    return tracks
