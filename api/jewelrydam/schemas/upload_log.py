"""Upload log schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class UploadLogResponse(BaseModel):
    """Schema for an upload log entry."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    message: str
    asset_id: Optional[str] = None
    status: str
    timestamp: datetime
