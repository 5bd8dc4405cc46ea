from sqlalchemy import BigInteger, Column, DateTime, Enum, Index, String
from jobdash.db import Base

JOB_STATUSES = ("queued", "running", "success", "error", "cancelled")


class Job(Base):
    __tablename__ = "job_queue"

    jobID = Column(BigInteger, primary_key=True, autoincrement=False)
    wo_no_sec = Column(String(64), nullable=False)  # media order number
    wo_desc = Column(String(255), nullable=False)  # media order name/description
    service_ro_no = Column(String(64), nullable=True)
    operation_no = Column(String(64), nullable=True)
    task_desc = Column(String(255), nullable=True)
    customer_name = Column(String(255), nullable=True)
    ar_account_rep_account_rep_email = Column(String(255), nullable=True)
    startTime = Column(DateTime, nullable=False)
    endTime = Column(DateTime, nullable=True)
    currentWorkflow = Column(String(255), nullable=True)
    status = Column(
        Enum(*JOB_STATUSES, name="job_status"),
        nullable=False,
        default="queued",
        server_default="queued",
    )

    __table_args__ = (
        Index("idx_status", "status"),
        Index("idx_startTime", "startTime"),
        {"mysql_engine": "InnoDB", "mysql_charset": "utf8mb4"},
    )

    def __repr__(self):
        return f"<Job {self.jobID} {self.status}>"
