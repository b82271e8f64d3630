from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from timetrack.core.database import get_db
from timetrack.core.timeutils import day_range
from timetrack.schemas.time_entry import (
    TimeEntryCreate, TimeEntryUpdate, TimeEntryWithDetails, TimeEntryStop
)
from timetrack.services.project import ProjectService
from timetrack.services.time_entry import TimeEntryService

router = APIRouter()


@router.get("", response_model=List[TimeEntryWithDetails])
async def read_time_entries(
    day: Optional[date] = Query(default=None, alias="date", description="UTC day (YYYY-MM-DD)"),
    project_id: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """Get time entries, newest first, optionally for a single day and/or project"""
    start_date = end_date = None
    if day:
        start_date, end_date = day_range(day, day)

    return TimeEntryService.get_time_entries(
        db,
        project_id=project_id,
        start_date=start_date,
        end_date=end_date,
    )


@router.get("/active", response_model=Optional[TimeEntryWithDetails])
async def get_active_time_entry(db: Session = Depends(get_db)):
    """Get the running timer; null (not 404) when none is running"""
    return TimeEntryService.get_active_time_entry(db)


@router.post("", response_model=TimeEntryWithDetails, status_code=status.HTTP_201_CREATED)
async def start_timer(
    timer_data: TimeEntryCreate,
    db: Session = Depends(get_db),
):
    """Start a new timer; 409 while another timer is running"""
    if ProjectService.get_project(db, timer_data.project_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Project not found"
        )

    time_entry = TimeEntryService.start_timer(db=db, timer_data=timer_data)
    return TimeEntryService.get_time_entry(db, time_entry.id)


@router.get("/{time_entry_id}", response_model=TimeEntryWithDetails)
async def read_time_entry(
    time_entry_id: str,
    db: Session = Depends(get_db),
):
    """Get time entry by ID"""
    time_entry = TimeEntryService.get_time_entry(db, time_entry_id=time_entry_id)
    if time_entry is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Time entry not found"
        )
    return time_entry


@router.post("/{time_entry_id}/stop", response_model=TimeEntryWithDetails)
async def stop_timer(
    time_entry_id: str,
    stop_data: Optional[TimeEntryStop] = None,
    db: Session = Depends(get_db),
):
    """Stop a running timer, computing its duration"""
    time_entry = TimeEntryService.get_time_entry(db, time_entry_id)
    if time_entry is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Time entry not found"
        )

    if time_entry.end_time is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="This timer is already stopped"
        )

    stopped_entry = TimeEntryService.stop_timer(
        db=db,
        time_entry_id=time_entry_id,
        stop_data=stop_data
    )
    if stopped_entry is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Failed to stop timer"
        )

    return TimeEntryService.get_time_entry(db, stopped_entry.id)


@router.put("/{time_entry_id}", response_model=TimeEntryWithDetails)
async def update_time_entry(
    time_entry_id: str,
    time_entry_update: TimeEntryUpdate,
    db: Session = Depends(get_db),
):
    """Edit a time entry; re-opening it (end_time null) is 409 while another timer runs"""
    time_entry = TimeEntryService.get_time_entry(db, time_entry_id=time_entry_id)
    if time_entry is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Time entry not found"
        )

    if time_entry_update.project_id and ProjectService.get_project(db, time_entry_update.project_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Project not found"
        )

    updated_time_entry = TimeEntryService.update_time_entry(
        db, time_entry_id=time_entry_id, time_entry_update=time_entry_update
    )
    if updated_time_entry is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Time entry not found"
        )

    return TimeEntryService.get_time_entry(db, updated_time_entry.id)


@router.delete("/{time_entry_id}")
async def delete_time_entry(
    time_entry_id: str,
    db: Session = Depends(get_db),
):
    """Delete time entry"""
    success = TimeEntryService.delete_time_entry(db, time_entry_id=time_entry_id)
    if not success:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Time entry not found"
        )
    return {"success": True}
