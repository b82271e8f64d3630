from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator

from timetrack.core.timeutils import as_utc

# Naive datetimes (e.g. read back from SQLite) are treated as UTC
UTCDateTime = Annotated[datetime, AfterValidator(as_utc)]
