import uuid

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from timetrack.core.database import Base
from timetrack.models.project import _utcnow


class TimeEntry(Base):
    __tablename__ = "time_entries"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    start_time = Column(DateTime(timezone=True), nullable=False, index=True)
    end_time = Column(DateTime(timezone=True), nullable=True)  # NULL while running
    duration = Column(Integer, nullable=True)  # in seconds

    # Relationships
    project_id = Column(String(36), ForeignKey("projects.id"), nullable=False, index=True)
    project = relationship("Project", back_populates="time_entries")

    task_name_id = Column(String(36), ForeignKey("task_names.id"), nullable=False, index=True)
    task_name = relationship("TaskName", back_populates="time_entries")

    # Audit fields
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    @property
    def is_running(self) -> bool:
        return self.end_time is None


# At most one running timer: every open entry maps to the same index key
Index(
    "uq_time_entries_single_running",
    TimeEntry.end_time.is_(None),
    unique=True,
    postgresql_where=TimeEntry.end_time.is_(None),
    sqlite_where=TimeEntry.end_time.is_(None),
)
