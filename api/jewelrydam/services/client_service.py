"""Client business logic service."""

from typing import List

from sqlalchemy.orm import Session

from jewelrydam.models.client import Client


def list_clients(db: Session) -> List[Client]:
    """List all clients ordered by name."""
    return db.query(Client).order_by(Client.name.asc()).all()


def create_client(db: Session, name: str) -> Client:
    """Create a client. Names are display labels and need not be unique."""
    client = Client(name=name)
    db.add(client)
    db.commit()
    db.refresh(client)
    return client
