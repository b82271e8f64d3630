"""Demo data: four projects with completed entries over the last five days.

Run with ``python -m timetrack.seed``. Existing projects, task names and
time entries are deleted first.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy.orm import Session

from timetrack.core.database import SessionLocal, init_db
from timetrack.core.timeutils import calculate_duration
from timetrack.models import Project, TaskName, TimeEntry

logger = logging.getLogger(__name__)

PROJECTS = [
    ("Website Redesign", "#3B82F6"),
    ("Mobile App", "#10B981"),
    ("API Development", "#F59E0B"),
    ("Marketing Campaign", "#EF4444"),
]

# (days ago, start "HH:MM", end "HH:MM", project, task name)
ENTRIES = [
    (0, "09:00", "10:30", "Website Redesign", "Design homepage mockup"),
    (0, "10:45", "12:15", "Website Redesign", "Create color palette & typography"),
    (1, "09:00", "11:00", "Website Redesign", "Implement responsive header"),
    (1, "13:00", "15:30", "Website Redesign", "Build contact form"),
    (2, "10:00", "12:00", "Website Redesign", "Set up CMS integration"),
    (3, "14:00", "16:45", "Website Redesign", "Optimize images & assets"),
    (4, "09:30", "11:00", "Website Redesign", "Cross-browser testing"),
    (0, "13:00", "14:45", "Mobile App", "Wireframe main screens"),
    (0, "15:00", "16:30", "Mobile App", "Implement login screen"),
    (1, "11:15", "12:45", "Mobile App", "Build navigation component"),
    (2, "13:00", "15:00", "Mobile App", "Push notifications setup"),
    (3, "09:00", "11:30", "Mobile App", "Local storage caching"),
    (4, "13:00", "15:15", "Mobile App", "Unit tests for auth module"),
    (0, "16:45", "18:00", "API Development", "Create REST endpoints"),
    (1, "15:45", "17:30", "API Development", "Database schema design"),
    (2, "15:15", "17:00", "API Development", "JWT authentication middleware"),
    (2, "17:15", "18:30", "API Development", "Rate limiting implementation"),
    (3, "11:45", "13:30", "API Development", "Write API documentation"),
    (4, "15:30", "17:45", "API Development", "Integration tests"),
    (1, "08:30", "09:00", "Marketing Campaign", "Competitor analysis"),
    (2, "08:30", "10:00", "Marketing Campaign", "Content calendar planning"),
    (3, "16:45", "18:00", "Marketing Campaign", "Design social media graphics"),
    (4, "11:15", "12:45", "Marketing Campaign", "Write blog post drafts"),
    (4, "08:30", "09:15", "Marketing Campaign", "Set up email automation"),
]


def _at(days_ago: int, hhmm: str, today: datetime) -> datetime:
    hours, minutes = (int(part) for part in hhmm.split(":"))
    day = today - timedelta(days=days_ago)
    return day.replace(hour=hours, minute=minutes, second=0, microsecond=0)


def seed(db: Session, today: Optional[datetime] = None) -> int:
    """Replace all data with the demo set; returns the number of entries created"""
    today = today or datetime.now(timezone.utc)

    db.query(TimeEntry).delete()
    db.query(TaskName).delete()
    db.query(Project).delete()
    db.commit()
    logger.info("Cleared existing data")

    projects = {}
    for name, color in PROJECTS:
        projects[name] = Project(name=name, color=color)
        db.add(projects[name])

    task_names = {}
    for _, _, _, _, task in ENTRIES:
        if task not in task_names:
            task_names[task] = TaskName(name=task)
            db.add(task_names[task])
    db.flush()

    for days_ago, start, end, project, task in ENTRIES:
        start_time = _at(days_ago, start, today)
        end_time = _at(days_ago, end, today)
        db.add(
            TimeEntry(
                start_time=start_time,
                end_time=end_time,
                duration=calculate_duration(start_time, end_time),
                project_id=projects[project].id,
                task_name_id=task_names[task].id,
            )
        )
    db.commit()

    logger.info(
        f"Seeded {len(projects)} projects, {len(task_names)} task names, {len(ENTRIES)} time entries"
    )
    return len(ENTRIES)


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    init_db()
    db = SessionLocal()
    try:
        seed(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
