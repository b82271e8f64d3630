from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from timetrack.core.database import get_db
from timetrack.schemas.project import Project, ProjectCreate, ProjectUpdate
from timetrack.services.project import ProjectService

router = APIRouter()


@router.get("", response_model=List[Project])
async def read_projects(db: Session = Depends(get_db)):
    """Get all projects, newest first"""
    return ProjectService.get_projects(db)


@router.post("", response_model=Project, status_code=status.HTTP_201_CREATED)
async def create_project(
    project: ProjectCreate,
    db: Session = Depends(get_db),
):
    """Create new project"""
    return ProjectService.create_project(db=db, project=project)


@router.get("/{project_id}", response_model=Project)
async def read_project(
    project_id: str,
    db: Session = Depends(get_db),
):
    """Get project by ID"""
    project = ProjectService.get_project(db, project_id=project_id)
    if project is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Project not found"
        )
    return project


@router.put("/{project_id}", response_model=Project)
async def update_project(
    project_id: str,
    project_update: ProjectUpdate,
    db: Session = Depends(get_db),
):
    """Update project"""
    updated_project = ProjectService.update_project(
        db, project_id=project_id, project_update=project_update
    )
    if updated_project is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Project not found"
        )
    return updated_project


@router.delete("/{project_id}")
async def delete_project(
    project_id: str,
    db: Session = Depends(get_db),
):
    """Delete project; 409 while time entries are linked to it"""
    success = ProjectService.delete_project(db, project_id=project_id)
    if not success:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Project not found"
        )
    return {"success": True}
