"""Asset model."""

import uuid
from datetime import datetime

from sqlalchemy import Column, Date, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from jewelrydam.database import Base


class Asset(Base):
    """Asset model for catalogued jewelry images."""

    __tablename__ = "assets"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(500), nullable=False)
    description = Column(Text, nullable=True)
    tags = Column(Text, nullable=True)  # Comma-separated
    project_id = Column(String(36), ForeignKey("projects.id"), nullable=True, index=True)
    project_name = Column(String(255), nullable=True)  # Denormalized from projects.name
    project_date = Column(Date, nullable=True)
    client_name = Column(String(255), nullable=True)
    primary_image_url = Column(String(1000), nullable=False)
    secondary_image_url = Column(String(1000), nullable=True)  # TIFF high-res variant
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    project = relationship("Project", back_populates="assets")

    def __repr__(self):
        return f"<Asset(id={self.id}, name={self.name}, project_id={self.project_id})>"
