from .project import Project, ProjectCreate, ProjectUpdate
from .task_name import TaskName, TaskNameCreate
from .time_entry import (
    TimeEntry, TimeEntryCreate, TimeEntryUpdate, TimeEntryWithDetails,
    TimeEntryStop
)
from .reports import (
    ExportFormat, ReportFilter, ReportSummary, ReportEntry, ProjectReportItem
)

__all__ = [
    # Project schemas
    "Project", "ProjectCreate", "ProjectUpdate",
    # Task name schemas
    "TaskName", "TaskNameCreate",
    # Time entry schemas
    "TimeEntry", "TimeEntryCreate", "TimeEntryUpdate", "TimeEntryWithDetails",
    "TimeEntryStop",
    # Report schemas
    "ExportFormat", "ReportFilter", "ReportSummary", "ReportEntry", "ProjectReportItem",
]
