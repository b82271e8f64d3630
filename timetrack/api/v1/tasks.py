from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from timetrack.core.database import get_db
from timetrack.schemas.task_name import TaskName, TaskNameCreate
from timetrack.services.task_name import TaskNameService

router = APIRouter()


@router.get("", response_model=List[TaskName])
async def search_task_names(
    q: str = Query(default="", max_length=200),
    db: Session = Depends(get_db),
):
    """Autocomplete task names (case-insensitive, recent first when q is empty)"""
    return TaskNameService.search(db, query=q)


@router.post("", response_model=TaskName, status_code=status.HTTP_201_CREATED)
async def create_task_name(
    task_name: TaskNameCreate,
    response: Response,
    db: Session = Depends(get_db),
):
    """Create a task name, or return the existing one with the same label"""
    existing = TaskNameService.get_by_name(db, task_name.name)
    if existing:
        response.status_code = status.HTTP_200_OK
        return existing

    return TaskNameService.create_task_name(db, task_name.name)


@router.delete("/{task_name_id}")
async def delete_task_name(
    task_name_id: str,
    db: Session = Depends(get_db),
):
    """Delete task name; 409 while time entries are linked to it"""
    success = TaskNameService.delete_task_name(db, task_name_id=task_name_id)
    if not success:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Task name not found"
        )
    return {"success": True}
