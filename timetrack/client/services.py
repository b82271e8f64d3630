from datetime import date
from typing import Any, Dict, List, Optional

from timetrack.client.api_client import ApiClient
from timetrack.schemas.project import Project, ProjectUpdate
from timetrack.schemas.reports import ReportSummary
from timetrack.schemas.task_name import TaskName
from timetrack.schemas.time_entry import TimeEntryUpdate, TimeEntryWithDetails


class ProjectClient:
    def __init__(self, api: ApiClient):
        self.api = api

    def list(self) -> List[Project]:
        return [Project.model_validate(p) for p in self.api.get("/projects")]

    def get(self, project_id: str) -> Project:
        return Project.model_validate(self.api.get(f"/projects/{project_id}"))

    def create(self, name: str, color: Optional[str] = None) -> Project:
        body: Dict[str, Any] = {"name": name}
        if color:
            body["color"] = color
        return Project.model_validate(self.api.post("/projects", body))

    def update(self, project_id: str, **changes: Any) -> Project:
        body = ProjectUpdate(**changes).model_dump(mode="json", exclude_unset=True)
        return Project.model_validate(self.api.put(f"/projects/{project_id}", body))

    def delete(self, project_id: str) -> None:
        self.api.delete(f"/projects/{project_id}")


class TaskClient:
    def __init__(self, api: ApiClient):
        self.api = api

    def search(self, query: str = "") -> List[TaskName]:
        """Case-insensitive autocomplete, at most 10 results"""
        return [TaskName.model_validate(t) for t in self.api.get("/tasks", {"q": query})]

    def create(self, name: str) -> TaskName:
        return TaskName.model_validate(self.api.post("/tasks", {"name": name}))

    def delete(self, task_name_id: str) -> None:
        self.api.delete(f"/tasks/{task_name_id}")


class TimeEntryClient:
    def __init__(self, api: ApiClient):
        self.api = api

    def list(self, day: Optional[date] = None, project_id: Optional[str] = None) -> List[TimeEntryWithDetails]:
        params: Dict[str, str] = {}
        if day:
            params["date"] = day.isoformat()
        if project_id:
            params["project_id"] = project_id
        return [TimeEntryWithDetails.model_validate(e) for e in self.api.get("/time-entries", params)]

    def get(self, time_entry_id: str) -> TimeEntryWithDetails:
        return TimeEntryWithDetails.model_validate(self.api.get(f"/time-entries/{time_entry_id}"))

    def get_active(self) -> Optional[TimeEntryWithDetails]:
        """The running timer, or None"""
        data = self.api.get("/time-entries/active")
        return TimeEntryWithDetails.model_validate(data) if data else None

    def start(self, task_name: str, project_id: str) -> TimeEntryWithDetails:
        data = self.api.post("/time-entries", {"task_name": task_name, "project_id": project_id})
        return TimeEntryWithDetails.model_validate(data)

    def stop(self, time_entry_id: str) -> TimeEntryWithDetails:
        return TimeEntryWithDetails.model_validate(self.api.post(f"/time-entries/{time_entry_id}/stop", {}))

    def update(self, time_entry_id: str, **changes: Any) -> TimeEntryWithDetails:
        """Pass end_time=None to re-open the entry"""
        body = TimeEntryUpdate(**changes).model_dump(mode="json", exclude_unset=True)
        return TimeEntryWithDetails.model_validate(self.api.put(f"/time-entries/{time_entry_id}", body))

    def delete(self, time_entry_id: str) -> None:
        self.api.delete(f"/time-entries/{time_entry_id}")


class ReportClient:
    def __init__(self, api: ApiClient):
        self.api = api

    @staticmethod
    def _range(date_from: date, date_to: date) -> Dict[str, str]:
        return {"from": date_from.isoformat(), "to": date_to.isoformat()}

    def get(self, date_from: date, date_to: date) -> ReportSummary:
        return ReportSummary.model_validate(self.api.get("/reports", self._range(date_from, date_to)))

    def export_csv(self, date_from: date, date_to: date) -> str:
        params = self._range(date_from, date_to)
        params["format"] = "csv"
        return self.api.get("/reports/export", params)
