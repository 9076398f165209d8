"""Client schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator


class ClientCreate(BaseModel):
    """Schema for creating a client."""

    name: str

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value):
        if not value.strip():
            raise ValueError("Client name is required")
        return value.strip()


class ClientResponse(BaseModel):
    """Schema for client response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    created_at: datetime
