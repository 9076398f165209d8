"""Asset schemas."""

from datetime import date, datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from jewelrydam.schemas.common import normalize_tags, parse_date


class AssetBase(BaseModel):
    """Base asset schema."""

    name: str = Field(..., description="Asset name (original filename on upload)")
    description: Optional[str] = None
    tags: Optional[str] = Field(None, description="Comma-separated tags")
    project_id: Optional[str] = None
    project_name: Optional[str] = None
    project_date: Optional[date] = None
    client_name: Optional[str] = None


class AssetUpdate(BaseModel):
    """Schema for updating asset metadata.

    Only fields present in the request are applied. An explicit
    ``project_id: null`` detaches the asset from its project.
    """

    name: Optional[str] = None
    description: Optional[str] = None
    tags: Optional[Union[List[str], str]] = None
    project_id: Optional[str] = None
    project_name: Optional[str] = None
    project_date: Optional[date] = None
    client_name: Optional[str] = None

    @field_validator("project_date", mode="before")
    @classmethod
    def _parse_project_date(cls, value):
        return parse_date(value)

    @field_validator("tags", mode="after")
    @classmethod
    def _normalize_tags(cls, value):
        return normalize_tags(value)

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value):
        if value is not None and not value.strip():
            raise ValueError("Asset name cannot be blank")
        return value.strip() if value is not None else value


class AssetResponse(AssetBase):
    """Schema for asset response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    primary_image_url: str
    secondary_image_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class IngestedAsset(BaseModel):
    """One asset created by an upload batch."""

    id: str
    name: str
    url: str = Field(..., description="Primary image URL")
    secondary_url: Optional[str] = Field(None, description="High-resolution TIFF URL")
    project_id: Optional[str] = None
    project_name: Optional[str] = None
    project_date: Optional[date] = None
    client_name: Optional[str] = None


class AssetUploadResponse(BaseModel):
    """Response for a successful upload batch."""

    message: str
    assets: List[IngestedAsset]


class MessageResponse(BaseModel):
    """Plain message response."""

    message: str
