"""Client model."""

import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, String

from jewelrydam.database import Base


class Client(Base):
    """Client model. Assets reference clients by name only."""

    __tablename__ = "clients"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<Client(id={self.id}, name={self.name})>"
