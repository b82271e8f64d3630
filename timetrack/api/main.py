from fastapi import APIRouter

from timetrack.api.v1 import projects, reports, tasks, time_entries

api_router = APIRouter()
api_router.include_router(projects.router, prefix="/projects", tags=["projects"])
api_router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
api_router.include_router(time_entries.router, prefix="/time-entries", tags=["time-entries"])
api_router.include_router(reports.router, prefix="/reports", tags=["reports"])
