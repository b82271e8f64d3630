import enum
from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field

from timetrack.schemas.common import UTCDateTime
from timetrack.schemas.project import Project
from timetrack.schemas.task_name import TaskName


class ExportFormat(str, enum.Enum):
    CSV = "csv"


class ReportFilter(BaseModel):
    """Inclusive date range as entered by the user"""
    date_from: date
    date_to: date


class ProjectReportItem(BaseModel):
    """Per-project slice of a report"""
    project: Project
    total_duration: int  # in seconds
    percentage: int
    task_count: int


class ReportEntry(BaseModel):
    """One completed time entry, flattened for tabular display"""
    project: Project
    task_name: Optional[TaskName] = None
    date: date
    start_time: UTCDateTime
    end_time: Optional[UTCDateTime] = None
    duration_hours: float


class ReportSummary(BaseModel):
    """Time report over a date range"""
    total_duration: int  # in seconds
    project_breakdown: List[ProjectReportItem] = Field(default_factory=list)
    entries: List[ReportEntry] = Field(default_factory=list)
