"""Project model."""

import uuid
from datetime import datetime

from sqlalchemy import Column, Date, DateTime, String, Text
from sqlalchemy.orm import relationship

from jewelrydam.database import Base


class Project(Base):
    """Project model grouping assets."""

    __tablename__ = "projects"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False, unique=True)
    description = Column(Text, nullable=True)
    project_date = Column(Date, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Assets are removed explicitly by the deletion workflow (blobs first)
    assets = relationship("Asset", back_populates="project", passive_deletes=True)

    def __repr__(self):
        return f"<Project(id={self.id}, name={self.name})>"
