from datetime import date, datetime, timedelta, timezone

import httpx
import pytest

from timetrack.client import (
    ApiClient,
    ApiError,
    ProjectClient,
    ReportClient,
    TaskClient,
    TaskSuggestions,
    TimeEntryClient,
    TimerStateError,
    TimerStore,
)
from timetrack.schemas.task_name import TaskName
from timetrack.services.report import CSV_HEADER


@pytest.fixture
def api(client):
    # TestClient is an httpx.Client, so the real client code runs against the app
    return ApiClient(client)


@pytest.fixture
def project(api):
    return ProjectClient(api).create("Client project", color="#ABCDEF")


def refuse_connection(request):
    raise httpx.ConnectError("connection refused", request=request)


@pytest.fixture
def offline_api():
    with ApiClient.from_url("http://timetrack.test", transport=httpx.MockTransport(refuse_connection)) as api:
        yield api


class StubTasks:
    """TaskClient stand-in that counts lookups"""

    def __init__(self, fail=False):
        self.calls = []
        self.fail = fail

    def search(self, query=""):
        self.calls.append(query)
        if self.fail:
            raise ApiError("Service unavailable", 503)
        stamp = datetime(2026, 3, 1, tzinfo=timezone.utc)
        return [TaskName(id="t1", name=f"{query} task", created_at=stamp, updated_at=stamp)]


class FailingTimeEntries:
    def get_active(self):
        raise ApiError("Internal server error", 500)


class TestApiClient:
    def test_error_carries_status_and_payload(self, api, db):
        with pytest.raises(ApiError) as exc_info:
            api.get("/projects/missing")

        error = exc_info.value
        assert error.status_code == 404
        assert error.message == "Project not found"
        assert error.is_client_error
        assert not error.is_conflict

    def test_project_round_trip(self, api, project):
        projects = ProjectClient(api)
        assert projects.get(project.id).name == "Client project"

        updated = projects.update(project.id, name="Renamed")
        assert updated.name == "Renamed"
        assert updated.color == "#ABCDEF"

        projects.delete(project.id)
        assert projects.list() == []

    def test_delete_linked_project_conflict(self, api, project):
        TimeEntryClient(api).start("Work", project.id)

        with pytest.raises(ApiError) as exc_info:
            ProjectClient(api).delete(project.id)

        assert exc_info.value.is_conflict
        assert exc_info.value.payload["entry_count"] == 1

    def test_time_entry_reopen(self, api, project):
        entries = TimeEntryClient(api)
        entry = entries.start("Work", project.id)
        stopped = entries.stop(entry.id)
        assert stopped.duration is not None

        reopened = entries.update(entry.id, end_time=None)
        assert reopened.end_time is None
        assert entries.get_active().id == entry.id

    def test_task_client(self, api, db):
        tasks = TaskClient(api)
        created = tasks.create("Plan sprint")
        assert [t.id for t in tasks.search("plan")] == [created.id]

        tasks.delete(created.id)
        assert tasks.search("plan") == []

    def test_report_client(self, api, project):
        entries = TimeEntryClient(api)
        entry = entries.start("Work", project.id)
        entries.stop(entry.id)
        today = datetime.now(timezone.utc).date()

        reports = ReportClient(api)
        summary = reports.get(today, today)
        assert summary.project_breakdown[0].project.id == project.id
        assert len(summary.entries) == 1

        text = reports.export_csv(today, today)
        lines = text.splitlines()
        assert lines[0] == ",".join(CSV_HEADER)
        assert len(lines) == 2

    def test_report_client_bad_range(self, api, db):
        with pytest.raises(ApiError) as exc_info:
            ReportClient(api).get(date(2026, 3, 11), date(2026, 3, 10))
        assert exc_info.value.status_code == 400
        assert "from" in exc_info.value.payload["errors"]


class TestTimerStore:
    def test_restore_without_running_timer(self, api, db):
        store = TimerStore(TimeEntryClient(api))
        store.restore()
        assert not store.is_running
        assert store.active_entry_id is None
        assert store.error is None
        assert not store.is_loading

    def test_start_and_stop(self, api, project):
        store = TimerStore(TimeEntryClient(api))

        entry = store.start("Write docs", project.id)
        assert store.is_running
        assert store.active_entry_id == entry.id
        assert store.current_task_name == "Write docs"
        assert store.current_project_id == project.id

        stopped = store.stop()
        assert stopped.id == entry.id
        assert stopped.end_time is not None
        assert not store.is_running
        assert store.elapsed == 0
        assert store.stop() is None

    def test_local_double_start(self, api, project):
        store = TimerStore(TimeEntryClient(api))
        store.start("Write docs", project.id)

        with pytest.raises(TimerStateError):
            store.start("Other", project.id)

    def test_server_conflict(self, api, project):
        """A second client that missed the running timer gets the server's 409"""
        running = TimerStore(TimeEntryClient(api))
        entry = running.start("Write docs", project.id)

        stale = TimerStore(TimeEntryClient(api))
        with pytest.raises(ApiError) as exc_info:
            stale.start("Other", project.id)

        assert exc_info.value.is_conflict
        assert exc_info.value.payload["active_entry_id"] == entry.id
        assert "already running" in stale.error
        assert not stale.is_running

    def test_restore_mirrors_server(self, api, project):
        entry = TimeEntryClient(api).start("Write docs", project.id)

        store = TimerStore(TimeEntryClient(api))
        store.restore()
        assert store.is_running
        assert store.active_entry_id == entry.id
        assert store.current_task_name == "Write docs"
        assert store.start_time == entry.start_time

    def test_restore_failure(self):
        store = TimerStore(FailingTimeEntries())
        store.restore()
        assert not store.is_running
        assert store.error == "Failed to restore timer from server"
        assert not store.is_loading

    def test_tick_uses_clock(self, api, project):
        now = [datetime.now(timezone.utc)]
        store = TimerStore(TimeEntryClient(api), clock=lambda: now[0])
        store.start("Write docs", project.id)

        now[0] = store.start_time + timedelta(seconds=75)
        assert store.tick() == 75
        assert store.elapsed == 75

    def test_tick_when_idle(self, api, db):
        store = TimerStore(TimeEntryClient(api))
        assert store.tick() == 0


class TestTaskSuggestions:
    def test_results_cached_per_query(self):
        tasks = StubTasks()
        suggestions = TaskSuggestions(tasks)

        first = suggestions.search("docs")
        again = suggestions.search(" docs ")
        suggestions.search("review")

        assert again is first
        assert tasks.calls == ["docs", "review"]

    def test_invalidate_cache(self):
        tasks = StubTasks()
        suggestions = TaskSuggestions(tasks)
        suggestions.search("docs")

        suggestions.invalidate_cache()
        suggestions.search("docs")
        assert tasks.calls == ["docs", "docs"]

    def test_failure_returns_empty_and_is_not_cached(self):
        tasks = StubTasks(fail=True)
        suggestions = TaskSuggestions(tasks)

        assert suggestions.search("docs") == []
        tasks.fail = False
        assert suggestions.search("docs")[0].name == "docs task"
        assert len(tasks.calls) == 2


class TestServerUnreachable:
    def test_transport_error_becomes_api_error(self, offline_api):
        with pytest.raises(ApiError) as exc_info:
            offline_api.get("/projects")

        error = exc_info.value
        assert error.status_code == 0
        assert "connection refused" in error.message
        assert not error.is_client_error
        assert isinstance(error.__cause__, httpx.ConnectError)

    def test_restore_records_error(self, offline_api):
        store = TimerStore(TimeEntryClient(offline_api))
        store.restore()
        assert not store.is_running
        assert store.error == "Failed to restore timer from server"
        assert not store.is_loading

    def test_start_records_error(self, offline_api):
        store = TimerStore(TimeEntryClient(offline_api))

        with pytest.raises(ApiError):
            store.start("Write docs", "some-project")

        assert store.error == "connection refused"
        assert not store.is_running
        assert not store.is_loading

    def test_stop_records_error(self, offline_api):
        store = TimerStore(TimeEntryClient(offline_api))
        store.is_running = True
        store.active_entry_id = "running-entry"

        with pytest.raises(ApiError):
            store.stop()

        assert store.error == "connection refused"
        assert store.is_running

    def test_suggestions_fall_back_to_empty(self, offline_api):
        suggestions = TaskSuggestions(TaskClient(offline_api))
        assert suggestions.search("docs") == []


class TestOwnedClient:
    def test_from_url_scopes_and_closes(self):
        seen = []

        def handler(request):
            seen.append(request.url.path)
            return httpx.Response(200, json=[])

        with ApiClient.from_url("http://timetrack.test", transport=httpx.MockTransport(handler)) as api:
            assert ProjectClient(api).list() == []

        assert seen == ["/api/v1/projects"]
        assert api.http.is_closed
