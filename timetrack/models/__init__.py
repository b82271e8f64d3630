from .project import Project
from .task_name import TaskName
from .time_entry import TimeEntry

__all__ = [
    "Project",
    "TaskName",
    "TimeEntry",
]
