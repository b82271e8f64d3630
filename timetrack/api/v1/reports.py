from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from timetrack.core.database import get_db
from timetrack.core.deps import get_report_filter
from timetrack.core.timeutils import day_range
from timetrack.schemas.reports import ExportFormat, ReportFilter, ReportSummary
from timetrack.services.report import ReportService
from timetrack.services.time_entry import TimeEntryService

router = APIRouter()


@router.get("", response_model=ReportSummary)
async def get_report(
    report_filter: ReportFilter = Depends(get_report_filter),
    db: Session = Depends(get_db),
):
    """Totals and per-project breakdown of completed entries in an inclusive date range"""
    start_date, end_date = day_range(report_filter.date_from, report_filter.date_to)
    entries = TimeEntryService.get_completed_in_range(db, start_date, end_date)
    return ReportService.build_report(entries)


@router.get("/export")
async def export_report(
    format: ExportFormat = ExportFormat.CSV,
    report_filter: ReportFilter = Depends(get_report_filter),
    db: Session = Depends(get_db),
):
    """Download completed entries in an inclusive date range as CSV"""
    start_date, end_date = day_range(report_filter.date_from, report_filter.date_to)
    entries = TimeEntryService.get_completed_in_range(db, start_date, end_date)
    filename = ReportService.export_filename(report_filter.date_from, report_filter.date_to)

    return Response(
        content=ReportService.to_csv(entries),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
