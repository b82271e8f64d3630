import csv
import io
import math
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List

from timetrack.core.timeutils import as_utc
from timetrack.models.time_entry import TimeEntry
from timetrack.schemas.project import Project
from timetrack.schemas.reports import ProjectReportItem, ReportEntry, ReportSummary
from timetrack.schemas.task_name import TaskName

CSV_HEADER = ["Date", "Project", "Task", "Start Time", "End Time", "Duration (hours)"]


@dataclass
class ProjectGroup:
    """Completed entries of one project within a report range"""
    project: object
    entries: List[TimeEntry] = field(default_factory=list)
    total_duration: int = 0


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class ReportService:
    """Aggregation over already-fetched completed entries; no database access"""

    @staticmethod
    def group_by_project(entries: Iterable[TimeEntry]) -> List[ProjectGroup]:
        """Group entries by project, keeping the order projects first appear in"""
        grouped: Dict[str, ProjectGroup] = {}
        for entry in entries:
            group = grouped.get(entry.project_id)
            if group is None:
                group = grouped[entry.project_id] = ProjectGroup(project=entry.project)
            group.entries.append(entry)
            group.total_duration += entry.duration or 0
        return list(grouped.values())

    @staticmethod
    def build_report(entries: Iterable[TimeEntry]) -> ReportSummary:
        groups = ReportService.group_by_project(entries)
        total_duration = sum(g.total_duration for g in groups)

        project_breakdown = []
        report_entries = []
        for group in groups:
            project = Project.model_validate(group.project)
            project_breakdown.append(
                ProjectReportItem(
                    project=project,
                    total_duration=group.total_duration,
                    percentage=(
                        _round_half_up(group.total_duration / total_duration * 100)
                        if total_duration > 0 else 0
                    ),
                    task_count=len({e.task_name_id for e in group.entries}),
                )
            )
            for entry in group.entries:
                report_entries.append(
                    ReportEntry(
                        project=project,
                        task_name=TaskName.model_validate(entry.task_name) if entry.task_name else None,
                        date=as_utc(entry.start_time).date(),
                        start_time=entry.start_time,
                        end_time=entry.end_time,
                        duration_hours=(entry.duration or 0) / 3600,
                    )
                )

        return ReportSummary(
            total_duration=total_duration,
            project_breakdown=project_breakdown,
            entries=report_entries,
        )

    @staticmethod
    def build_csv_rows(entries: Iterable[TimeEntry]) -> List[List[str]]:
        rows = []
        for group in ReportService.group_by_project(entries):
            for entry in group.entries:
                start_time = as_utc(entry.start_time)
                end_time = as_utc(entry.end_time)
                rows.append([
                    start_time.date().isoformat(),
                    group.project.name,
                    entry.task_name.name if entry.task_name else "",
                    start_time.isoformat(),
                    end_time.isoformat() if end_time else "",
                    f"{(entry.duration or 0) / 3600:.2f}",
                ])
        return rows

    @staticmethod
    def to_csv(entries: Iterable[TimeEntry]) -> str:
        """Serialize the report rows, header first"""
        buffer = io.StringIO()
        writer = csv.writer(buffer)
        writer.writerow(CSV_HEADER)
        writer.writerows(ReportService.build_csv_rows(entries))
        return buffer.getvalue()

    @staticmethod
    def export_filename(date_from: date, date_to: date) -> str:
        return f"time-report_{date_from.isoformat()}_{date_to.isoformat()}.csv"
