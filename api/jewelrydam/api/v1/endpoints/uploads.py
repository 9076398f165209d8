"""Upload log endpoints."""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jewelrydam.api.deps import get_db
from jewelrydam.schemas.upload_log import UploadLogResponse
from jewelrydam.services.upload_log_service import list_recent_upload_events

router = APIRouter()


@router.get("/log", response_model=List[UploadLogResponse])
def get_upload_log(db: Session = Depends(get_db)):
    """Recent upload activity, newest first."""
    return list_recent_upload_events(db)
