import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from timetrack.core.errors import ActiveTimerError
from timetrack.core.timeutils import as_utc, calculate_duration, utcnow
from timetrack.models.time_entry import TimeEntry
from timetrack.schemas.time_entry import TimeEntryCreate, TimeEntryUpdate, TimeEntryStop
from timetrack.services.task_name import TaskNameService

logger = logging.getLogger(__name__)


class TimeEntryService:
    """Data access for time entries.

    Every write path that can produce a running entry goes through the
    single-timer guard here, so the HTTP layer never has to re-check it.
    """

    @staticmethod
    def _query(db: Session):
        return db.query(TimeEntry).options(
            joinedload(TimeEntry.project),
            joinedload(TimeEntry.task_name),
        )

    @staticmethod
    def get_time_entry(db: Session, time_entry_id: str) -> Optional[TimeEntry]:
        """Get time entry by ID with project and task name"""
        return TimeEntryService._query(db).filter(TimeEntry.id == time_entry_id).first()

    @staticmethod
    def get_time_entries(
        db: Session,
        project_id: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> List[TimeEntry]:
        """Get time entries newest first, optionally limited to start_time in [start_date, end_date)"""
        query = TimeEntryService._query(db)

        if project_id:
            query = query.filter(TimeEntry.project_id == project_id)
        if start_date:
            query = query.filter(TimeEntry.start_time >= as_utc(start_date))
        if end_date:
            query = query.filter(TimeEntry.start_time < as_utc(end_date))

        return query.order_by(TimeEntry.start_time.desc()).all()

    @staticmethod
    def get_active_time_entry(db: Session) -> Optional[TimeEntry]:
        """Get the running timer, if any"""
        return TimeEntryService._query(db).filter(TimeEntry.end_time.is_(None)).first()

    @staticmethod
    def get_completed_in_range(
        db: Session, start_date: datetime, end_date: Optional[datetime] = None
    ) -> List[TimeEntry]:
        """Stopped entries whose start_time falls in [start_date, end_date), oldest first.

        A missing end_date leaves the range open at the top.
        """
        query = TimeEntryService._query(db).filter(
            TimeEntry.start_time >= as_utc(start_date),
            TimeEntry.end_time.isnot(None),
        )
        if end_date:
            query = query.filter(TimeEntry.start_time < as_utc(end_date))

        return query.order_by(TimeEntry.start_time.asc()).all()

    @staticmethod
    def _ensure_no_other_running(db: Session, message: str, time_entry_id: Optional[str] = None) -> None:
        active = TimeEntryService.get_active_time_entry(db)
        if active and active.id != time_entry_id:
            logger.warning(f"Single-timer guard rejected write: entry {active.id} is running")
            raise ActiveTimerError(message, active.id)

    @staticmethod
    def _commit_guarded(db: Session, message: str) -> None:
        """Commit, turning a lost race on the running-timer index into ActiveTimerError"""
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            active = TimeEntryService.get_active_time_entry(db)
            if active is None:
                raise
            logger.warning(f"Concurrent write lost to running entry {active.id}")
            raise ActiveTimerError(message, active.id)

    @staticmethod
    def start_timer(db: Session, timer_data: TimeEntryCreate) -> TimeEntry:
        """Start a new timer; fails while another one is running"""
        message = "A timer is already running. Stop it before starting a new one."
        TimeEntryService._ensure_no_other_running(db, message)

        task_name = TaskNameService.find_or_create(db, timer_data.task_name)

        db_time_entry = TimeEntry(
            project_id=timer_data.project_id,
            task_name_id=task_name.id,
            start_time=as_utc(timer_data.start_time) or utcnow(),
        )
        db.add(db_time_entry)
        TimeEntryService._commit_guarded(db, message)
        db.refresh(db_time_entry)

        logger.info(f"Started timer {db_time_entry.id} on project {db_time_entry.project_id}")
        return db_time_entry

    @staticmethod
    def stop_timer(db: Session, time_entry_id: str, stop_data: Optional[TimeEntryStop] = None) -> Optional[TimeEntry]:
        """Stop a running timer"""
        db_time_entry = db.query(TimeEntry).filter(TimeEntry.id == time_entry_id).first()
        if not db_time_entry or db_time_entry.end_time is not None:
            return None

        end_time = as_utc(stop_data.end_time) if stop_data and stop_data.end_time else utcnow()

        db_time_entry.end_time = end_time
        db_time_entry.duration = calculate_duration(db_time_entry.start_time, end_time)

        db.commit()
        db.refresh(db_time_entry)

        logger.info(f"Stopped timer {db_time_entry.id} after {db_time_entry.duration}s")
        return db_time_entry

    @staticmethod
    def update_time_entry(db: Session, time_entry_id: str, time_entry_update: TimeEntryUpdate) -> Optional[TimeEntry]:
        """Update time entry.

        Setting end_time to null re-opens the entry and is subject to the
        single-timer guard. Duration follows the times unless given explicitly.
        """
        db_time_entry = db.query(TimeEntry).filter(TimeEntry.id == time_entry_id).first()
        if not db_time_entry:
            return None

        update_data = time_entry_update.model_dump(exclude_unset=True)
        message = "Cannot re-open this entry: another timer is already running."

        if "end_time" in update_data and update_data["end_time"] is None:
            TimeEntryService._ensure_no_other_running(db, message, time_entry_id=db_time_entry.id)

        if update_data.get("task_name"):
            task_name = TaskNameService.find_or_create(db, update_data["task_name"])
            db_time_entry.task_name_id = task_name.id
        if update_data.get("project_id"):
            db_time_entry.project_id = update_data["project_id"]
        if update_data.get("start_time"):
            db_time_entry.start_time = as_utc(update_data["start_time"])
        if "end_time" in update_data:
            db_time_entry.end_time = as_utc(update_data["end_time"])

        times_changed = bool(update_data.get("start_time")) or "end_time" in update_data
        if db_time_entry.end_time is None:
            db_time_entry.duration = None
        elif "duration" in update_data:
            db_time_entry.duration = update_data["duration"]
        elif times_changed:
            db_time_entry.duration = calculate_duration(db_time_entry.start_time, db_time_entry.end_time)

        TimeEntryService._commit_guarded(db, message)
        db.refresh(db_time_entry)
        return db_time_entry

    @staticmethod
    def delete_time_entry(db: Session, time_entry_id: str) -> bool:
        """Delete time entry"""
        db_time_entry = db.query(TimeEntry).filter(TimeEntry.id == time_entry_id).first()
        if not db_time_entry:
            return False

        db.delete(db_time_entry)
        db.commit()
        logger.info(f"Deleted time entry {time_entry_id}")
        return True
