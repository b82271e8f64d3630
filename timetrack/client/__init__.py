from .api_client import ApiClient, ApiError
from .services import ProjectClient, ReportClient, TaskClient, TimeEntryClient
from .suggestions import TaskSuggestions
from .timer_store import TimerStateError, TimerStore

__all__ = [
    "ApiClient",
    "ApiError",
    "ProjectClient",
    "ReportClient",
    "TaskClient",
    "TimeEntryClient",
    "TaskSuggestions",
    "TimerStateError",
    "TimerStore",
]
