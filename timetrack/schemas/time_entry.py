from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from timetrack.schemas.common import UTCDateTime
from timetrack.schemas.project import Project
from timetrack.schemas.task_name import TaskName


class TimeEntryBase(BaseModel):
    start_time: UTCDateTime
    end_time: Optional[UTCDateTime] = None
    duration: Optional[int] = None  # in seconds


class TimeEntryCreate(BaseModel):
    """Starts a timer; the task name is resolved with find-or-create"""
    model_config = ConfigDict(str_strip_whitespace=True)

    task_name: str = Field(..., min_length=1, max_length=200)
    project_id: str = Field(..., min_length=1)
    start_time: Optional[UTCDateTime] = None  # defaults to now on the server


class TimeEntryUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    task_name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    project_id: Optional[str] = Field(default=None, min_length=1)
    start_time: Optional[UTCDateTime] = None
    # An explicit null re-opens the entry
    end_time: Optional[UTCDateTime] = None
    duration: Optional[int] = Field(default=None, ge=0)


class TimeEntryStop(BaseModel):
    end_time: Optional[UTCDateTime] = None  # defaults to now on the server


class TimeEntryInDBBase(TimeEntryBase):
    id: str
    project_id: str
    task_name_id: str
    created_at: UTCDateTime
    updated_at: UTCDateTime

    model_config = ConfigDict(from_attributes=True)


class TimeEntry(TimeEntryInDBBase):
    pass


class TimeEntryWithDetails(TimeEntry):
    project: Optional[Project] = None
    task_name: Optional[TaskName] = None
