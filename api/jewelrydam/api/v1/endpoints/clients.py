"""Client endpoints."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from jewelrydam.api.deps import get_db
from jewelrydam.schemas.client import ClientCreate, ClientResponse
from jewelrydam.services import client_service

router = APIRouter()


@router.get("", response_model=List[ClientResponse])
def list_clients(db: Session = Depends(get_db)):
    """List all clients."""
    return client_service.list_clients(db)


@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
def create_client(
    client_data: ClientCreate,
    db: Session = Depends(get_db)
):
    """
    Create a new client.

    - **name**: Client name (required)
    """
    return client_service.create_client(db, client_data.name)
