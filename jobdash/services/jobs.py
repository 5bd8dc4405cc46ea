"""
Query service for the job queue table.

Sort columns are resolved through a fixed name -> column mapping before the
statement is built, so no caller-supplied text ever reaches the SQL. The
status filter and row limit are always bound parameters.
"""

import logging
import re
from typing import List, Optional, Tuple

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from ..models.job import Job

logger = logging.getLogger("jobdash.jobs")

DEFAULT_SORT = "startTime:desc"
DEFAULT_LIMIT = 500
MIN_LIMIT = 1
MAX_LIMIT = 5000

# jobID is a signed 64-bit BIGINT
BIGINT_MIN = -(2 ** 63)
BIGINT_MAX = 2 ** 63 - 1

# ASCII digits only; int() alone would also take "1_000" and non-Latin digits
_LEADING_INT = re.compile(r"\s*([+-]?\d+)", re.ASCII)
_WHOLE_INT = re.compile(r"\s*[+-]?\d+\s*\Z", re.ASCII)

SORTABLE_COLUMNS = {
    "jobID": Job.jobID,
    "wo_no_sec": Job.wo_no_sec,
    "wo_desc": Job.wo_desc,
    "task_desc": Job.task_desc,
    "startTime": Job.startTime,
    "endTime": Job.endTime,
    "currentWorkflow": Job.currentWorkflow,
    "status": Job.status,
}


def resolve_sort(sort: Optional[str]) -> Tuple[str, str]:
    """
    Parse `column:direction` into an allowed column name and `asc`/`desc`.

    Unknown columns fall back to startTime; any direction other than a
    case-insensitive "asc" is "desc".
    """
    parts = (sort or DEFAULT_SORT).split(":")
    column = parts[0]
    direction = parts[1] if len(parts) > 1 else ""

    if column not in SORTABLE_COLUMNS:
        column = "startTime"
    direction = "asc" if direction.lower() == "asc" else "desc"
    return column, direction


def resolve_limit(limit: Optional[str]) -> int:
    """Parse the leading integer of the row limit ("10abc" -> 10), defaulting to 500 and clamping into [1, 5000]"""
    match = _LEADING_INT.match(limit or "")
    value = int(match.group(1)) if match else DEFAULT_LIMIT
    return min(max(value, MIN_LIMIT), MAX_LIMIT)


def parse_job_id(raw: Optional[str]) -> Optional[int]:
    """Return the job ID as an int, or None when it is not a base-10 integer within BIGINT range"""
    if not _WHOLE_INT.match(raw or ""):
        return None
    value = int(raw)
    if not BIGINT_MIN <= value <= BIGINT_MAX:
        return None
    return value


def list_jobs(db: Session, status: Optional[str] = None, sort: Optional[str] = None,
              limit: Optional[str] = None) -> List[Job]:
    column_name, direction = resolve_sort(sort)
    column = SORTABLE_COLUMNS[column_name]
    order = column.asc() if direction == "asc" else column.desc()

    stmt = select(Job)
    # Unknown statuses are passed through and simply match nothing
    if status:
        stmt = stmt.where(Job.status == status)
    stmt = stmt.order_by(order).limit(resolve_limit(limit))

    rows = list(db.execute(stmt).scalars())
    logger.debug("list_jobs status=%r sort=%s:%s -> %s rows", status, column_name, direction, len(rows))
    return rows


def delete_job(db: Session, job_id: int) -> int:
    """Delete one job by ID and return the number of rows removed (0 when absent)"""
    result = db.execute(delete(Job).where(Job.jobID == job_id))
    db.commit()
    affected = result.rowcount or 0
    logger.info("Deleted job %s (affectedRows=%s)", job_id, affected)
    return affected
