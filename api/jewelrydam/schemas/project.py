"""Project schemas."""

from datetime import date, datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from jewelrydam.schemas.asset import AssetResponse
from jewelrydam.schemas.common import parse_date


class ProjectBase(BaseModel):
    """Base project schema."""

    name: str
    description: Optional[str] = None
    project_date: Optional[date] = None


class ProjectCreate(ProjectBase):
    """Schema for creating a project."""

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value):
        if not value.strip():
            raise ValueError("Project name is required")
        return value.strip()

    @field_validator("project_date", mode="before")
    @classmethod
    def _parse_project_date(cls, value):
        return parse_date(value)


class ProjectUpdate(BaseModel):
    """Schema for updating a project."""

    name: Optional[str] = None
    description: Optional[str] = None
    project_date: Optional[date] = None

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value):
        if value is not None and not value.strip():
            raise ValueError("Project name cannot be blank")
        return value.strip() if value is not None else value

    @field_validator("project_date", mode="before")
    @classmethod
    def _parse_project_date(cls, value):
        return parse_date(value)


class ProjectResponse(ProjectBase):
    """Schema for project response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: datetime
    updated_at: datetime


class ProjectSummary(ProjectResponse):
    """Project listing entry with asset enrichment."""

    asset_count: int = 0
    latest_image: Optional[str] = Field(None, description="URL of the newest asset")
    upload_dates: List[date] = Field(default_factory=list, description="Distinct upload dates, newest first")


class ProjectDetail(ProjectResponse):
    """Project with its assets grouped by upload date."""

    asset_count: int = 0
    assets_by_date: Dict[str, List[AssetResponse]] = Field(default_factory=dict)
