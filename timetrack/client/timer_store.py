import logging
from datetime import datetime
from typing import Callable, Optional

from timetrack.client.api_client import ApiError
from timetrack.client.services import TimeEntryClient
from timetrack.core.timeutils import elapsed_since, utcnow
from timetrack.schemas.time_entry import TimeEntryWithDetails

logger = logging.getLogger(__name__)


class TimerStateError(Exception):
    """Raised when the local mirror already shows a running timer"""


class TimerStore:
    """Client-side mirror of the server's running timer.

    The server is the source of truth: ``restore`` resyncs from
    ``GET /time-entries/active`` and ``start``/``stop`` copy the state the
    server returns. ``tick`` only recomputes ``elapsed`` for display and
    never talks to the server.
    """

    def __init__(self, time_entries: TimeEntryClient, clock: Callable[[], datetime] = utcnow):
        self.time_entries = time_entries
        self.clock = clock
        self.is_loading = False
        self.error: Optional[str] = None
        self._clear()

    def _clear(self) -> None:
        self.is_running = False
        self.active_entry_id: Optional[str] = None
        self.start_time: Optional[datetime] = None
        self.elapsed = 0
        self.current_task_name = ""
        self.current_project_id: Optional[str] = None

    def _mirror(self, entry: TimeEntryWithDetails, task_name: str = "") -> None:
        self.is_running = True
        self.active_entry_id = entry.id
        self.start_time = entry.start_time
        self.elapsed = elapsed_since(entry.start_time, self.clock())
        self.current_task_name = entry.task_name.name if entry.task_name else task_name
        self.current_project_id = entry.project_id

    def reset(self) -> None:
        self._clear()
        self.is_loading = False
        self.error = None

    def restore(self) -> None:
        """Resync from the server, e.g. on startup"""
        self.is_loading = True
        self.error = None
        try:
            active = self.time_entries.get_active()
        except ApiError as exc:
            logger.warning(f"Could not restore timer: {exc.message}")
            self._clear()
            self.error = "Failed to restore timer from server"
            return
        finally:
            self.is_loading = False

        if active is not None and active.end_time is None:
            self._mirror(active)
        else:
            self._clear()

    def start(self, task_name: str, project_id: str) -> TimeEntryWithDetails:
        if self.is_running:
            raise TimerStateError("A timer is already running. Stop it first.")

        self.is_loading = True
        self.error = None
        try:
            entry = self.time_entries.start(task_name, project_id)
        except ApiError as exc:
            self.error = exc.message
            raise
        finally:
            self.is_loading = False

        self._mirror(entry, task_name)
        return entry

    def stop(self) -> Optional[TimeEntryWithDetails]:
        if not self.is_running or not self.active_entry_id:
            return None

        self.is_loading = True
        self.error = None
        try:
            stopped = self.time_entries.stop(self.active_entry_id)
        except ApiError as exc:
            self.error = exc.message
            raise
        finally:
            self.is_loading = False

        self._clear()
        return stopped

    def tick(self) -> int:
        """Recompute elapsed seconds from start_time"""
        if self.is_running and self.start_time is not None:
            self.elapsed = elapsed_since(self.start_time, self.clock())
        return self.elapsed
