import uuid

from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship

from timetrack.core.database import Base
from timetrack.models.project import _utcnow


class TaskName(Base):
    __tablename__ = "task_names"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    # Unique key is case-sensitive: "Review" and "review" are distinct task names
    name = Column(String(200), nullable=False, unique=True, index=True)

    # Audit fields
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    # Relationships
    time_entries = relationship("TimeEntry", back_populates="task_name", passive_deletes=True)
