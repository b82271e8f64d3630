import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from timetrack.core.config import settings
from timetrack.core.errors import LinkedEntriesError
from timetrack.core.timeutils import utcnow
from timetrack.models.task_name import TaskName
from timetrack.models.time_entry import TimeEntry

logger = logging.getLogger(__name__)


class TaskNameService:
    @staticmethod
    def get_task_name(db: Session, task_name_id: str) -> Optional[TaskName]:
        """Get task name by ID"""
        return db.query(TaskName).filter(TaskName.id == task_name_id).first()

    @staticmethod
    def get_by_name(db: Session, name: str) -> Optional[TaskName]:
        """Exact, case-sensitive lookup"""
        return db.query(TaskName).filter(TaskName.name == name.strip()).first()

    @staticmethod
    def search(db: Session, query: str = "", limit: Optional[int] = None) -> List[TaskName]:
        """Autocomplete lookup.

        A blank query returns the most recently used names; otherwise a
        case-insensitive substring match ordered by name.
        """
        limit = limit or settings.TASK_SEARCH_LIMIT
        term = (query or "").strip()

        if not term:
            return (
                db.query(TaskName)
                .order_by(TaskName.updated_at.desc())
                .limit(limit)
                .all()
            )

        return (
            db.query(TaskName)
            .filter(TaskName.name.ilike(f"%{_escape_like(term)}%", escape="\\"))
            .order_by(TaskName.name.asc())
            .limit(limit)
            .all()
        )

    @staticmethod
    def create_task_name(db: Session, name: str) -> TaskName:
        """Create new task name; the unique constraint rejects duplicates"""
        db_task_name = TaskName(name=name.strip())
        db.add(db_task_name)
        db.commit()
        db.refresh(db_task_name)
        return db_task_name

    @staticmethod
    def find_or_create(db: Session, name: str) -> TaskName:
        """Return the task name with this exact label, creating it if needed.

        Reusing a name bumps its updated_at so empty-query suggestions
        surface recently used tasks first.
        """
        trimmed = name.strip()
        existing = TaskNameService.get_by_name(db, trimmed)
        if existing:
            existing.updated_at = utcnow()
            db.commit()
            db.refresh(existing)
            return existing

        try:
            return TaskNameService.create_task_name(db, trimmed)
        except IntegrityError:
            # Another request created the same name in the meantime
            db.rollback()
            existing = TaskNameService.get_by_name(db, trimmed)
            if existing is None:
                raise
            return existing

    @staticmethod
    def count_entries(db: Session, task_name_id: str) -> int:
        return db.query(TimeEntry).filter(TimeEntry.task_name_id == task_name_id).count()

    @staticmethod
    def delete_task_name(db: Session, task_name_id: str) -> bool:
        """Delete task name, refusing while time entries still reference it"""
        db_task_name = TaskNameService.get_task_name(db, task_name_id)
        if not db_task_name:
            return False

        entry_count = TaskNameService.count_entries(db, task_name_id)
        if entry_count > 0:
            logger.warning(f"Refusing to delete task name {task_name_id}: {entry_count} linked entries")
            raise LinkedEntriesError(
                f"Cannot delete task name: it has {entry_count} linked time entries. Remove them first.",
                entry_count,
            )

        db.delete(db_task_name)
        db.commit()
        logger.info(f"Deleted task name {task_name_id}")
        return True


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
