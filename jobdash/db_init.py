"""
Schema bootstrap: create the job_queue table if absent and seed demo rows on an empty table
"""
import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy import func, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from .db import Base
from .models.job import Job

log = logging.getLogger("jobdash.bootstrap")


def _seed_rows(now: datetime) -> list:
    """Example jobs, one per common status, timed relative to `now`"""
    return [
        Job(jobID=10001, wo_no_sec="MO-2025-0001", wo_desc="Ingest: ACME Trailer",
            service_ro_no="SR-1001", operation_no="OP-10", task_desc="Ingest ProRes Master",
            customer_name="ACME Studios", ar_account_rep_account_rep_email="rep1@example.com",
            startTime=now - timedelta(hours=2), endTime=None,
            currentWorkflow="Ingest Workflow", status="running"),
        Job(jobID=10002, wo_no_sec="MO-2025-0002", wo_desc="QC: ACME Trailer",
            service_ro_no="SR-1002", operation_no="OP-20", task_desc="Full QC Pass",
            customer_name="ACME Studios", ar_account_rep_account_rep_email="rep2@example.com",
            startTime=now - timedelta(minutes=90), endTime=now - timedelta(minutes=70),
            currentWorkflow="QC Workflow", status="queued"),
        Job(jobID=10003, wo_no_sec="MO-2025-0003", wo_desc="Transcode: 4K Master",
            service_ro_no="SR-1003", operation_no="OP-30", task_desc="Transcode to 4K IMF",
            customer_name="Megacorp Films", ar_account_rep_account_rep_email="rep3@example.com",
            startTime=now - timedelta(minutes=70), endTime=now - timedelta(minutes=10),
            currentWorkflow="Transcode Workflow", status="error"),
        Job(jobID=10004, wo_no_sec="MO-2025-0004", wo_desc="Package: iTunes Deliver",
            service_ro_no="SR-1004", operation_no="OP-40", task_desc="Package for iTunes Store",
            customer_name="Megacorp Films", ar_account_rep_account_rep_email="rep4@example.com",
            startTime=now - timedelta(minutes=30), endTime=None,
            currentWorkflow="Package Workflow", status="success"),
    ]


def init_schema_and_seed(engine: Engine) -> int:
    """
    Ensure the job_queue schema exists and seed example jobs when the table is empty.
    Safe to call multiple times. Returns the number of rows inserted.
    """
    Base.metadata.create_all(bind=engine, tables=[Job.__table__], checkfirst=True)

    with Session(engine) as s:
        count = s.execute(select(func.count()).select_from(Job)).scalar_one()
        if count:
            log.info("DB_BOOT: job_queue has %s rows, skipping seed", count)
            return 0

        now = datetime.now(timezone.utc).replace(tzinfo=None)
        rows = _seed_rows(now)
        s.add_all(rows)
        s.commit()

    log.info("DB_BOOT: seeded %s example jobs", len(rows))
    return len(rows)
