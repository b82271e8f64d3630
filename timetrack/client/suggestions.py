import logging
from typing import Dict, List

from timetrack.client.api_client import ApiError
from timetrack.client.services import TaskClient
from timetrack.schemas.task_name import TaskName

logger = logging.getLogger(__name__)


class TaskSuggestions:
    """Task name autocomplete with results cached per query string"""

    def __init__(self, tasks: TaskClient):
        self.tasks = tasks
        self._cache: Dict[str, List[TaskName]] = {}

    def search(self, query: str) -> List[TaskName]:
        key = query.strip()
        if key in self._cache:
            return self._cache[key]

        try:
            results = self.tasks.search(key)
        except ApiError as exc:
            # Suggestions are optional; an empty list is not cached
            logger.warning(f"Task suggestion lookup failed: {exc.message}")
            return []

        self._cache[key] = results
        return results

    def invalidate_cache(self) -> None:
        """Drop cached results, e.g. after creating or deleting task names"""
        self._cache.clear()
