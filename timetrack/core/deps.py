from datetime import date

from fastapi import Query
from fastapi.exceptions import RequestValidationError

from timetrack.schemas.reports import ReportFilter


def get_report_filter(
    date_from: date = Query(..., alias="from", description="First day, inclusive (YYYY-MM-DD)"),
    date_to: date = Query(..., alias="to", description="Last day, inclusive (YYYY-MM-DD)"),
) -> ReportFilter:
    """Parse and check the inclusive report date range"""
    if date_from > date_to:
        raise RequestValidationError([
            {
                "type": "value_error",
                "loc": ("query", "from"),
                "msg": "'from' date must not be after 'to' date",
                "input": date_from.isoformat(),
            }
        ])
    return ReportFilter(date_from=date_from, date_to=date_to)
