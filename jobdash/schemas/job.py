from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, field_serializer


def to_utc_iso(value: Optional[datetime]) -> Optional[str]:
    """Render a DB timestamp as ISO-8601 UTC with millisecond precision, e.g. 2025-01-01T10:00:00.000Z"""
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.isoformat(timespec="milliseconds") + "Z"


class JobOut(BaseModel):
    jobID: int
    wo_no_sec: str
    wo_desc: str
    service_ro_no: Optional[str] = None
    operation_no: Optional[str] = None
    task_desc: Optional[str] = None
    customer_name: Optional[str] = None
    ar_account_rep_account_rep_email: Optional[str] = None
    startTime: datetime
    endTime: Optional[datetime] = None
    currentWorkflow: Optional[str] = None
    status: str

    model_config = {"from_attributes": True}

    @field_serializer("startTime", "endTime")
    def _serialize_time(self, value: Optional[datetime]) -> Optional[str]:
        return to_utc_iso(value)


class JobListOut(BaseModel):
    ok: bool = True
    count: int
    rows: List[JobOut]


class DeleteOut(BaseModel):
    ok: bool = True
    affectedRows: int


class HealthOut(BaseModel):
    ok: bool = True
    db: bool


class ErrorOut(BaseModel):
    ok: bool = False
    error: str
