import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from timetrack.core.errors import LinkedEntriesError
from timetrack.models.project import Project
from timetrack.models.time_entry import TimeEntry
from timetrack.schemas.project import ProjectCreate, ProjectUpdate

logger = logging.getLogger(__name__)


class ProjectService:
    @staticmethod
    def get_project(db: Session, project_id: str) -> Optional[Project]:
        """Get project by ID"""
        return db.query(Project).filter(Project.id == project_id).first()

    @staticmethod
    def get_projects(db: Session) -> List[Project]:
        """Get all projects, newest first"""
        return db.query(Project).order_by(Project.created_at.desc()).all()

    @staticmethod
    def count_entries(db: Session, project_id: str) -> int:
        """Number of time entries linked to the project"""
        return db.query(TimeEntry).filter(TimeEntry.project_id == project_id).count()

    @staticmethod
    def create_project(db: Session, project: ProjectCreate) -> Project:
        """Create new project"""
        db_project = Project(**project.model_dump())
        db.add(db_project)
        db.commit()
        db.refresh(db_project)
        logger.info(f"Created project {db_project.id} ({db_project.name})")
        return db_project

    @staticmethod
    def update_project(db: Session, project_id: str, project_update: ProjectUpdate) -> Optional[Project]:
        """Update project"""
        db_project = db.query(Project).filter(Project.id == project_id).first()
        if not db_project:
            return None

        update_data = project_update.model_dump(exclude_unset=True, exclude_none=True)
        for field, value in update_data.items():
            setattr(db_project, field, value)

        db.commit()
        db.refresh(db_project)
        return db_project

    @staticmethod
    def delete_project(db: Session, project_id: str) -> bool:
        """Delete project, refusing while time entries still reference it"""
        db_project = db.query(Project).filter(Project.id == project_id).first()
        if not db_project:
            return False

        entry_count = ProjectService.count_entries(db, project_id)
        if entry_count > 0:
            logger.warning(f"Refusing to delete project {project_id}: {entry_count} linked entries")
            raise LinkedEntriesError(
                f"Cannot delete project: it has {entry_count} linked time entries. Remove them first.",
                entry_count,
            )

        db.delete(db_project)
        db.commit()
        logger.info(f"Deleted project {project_id}")
        return True
