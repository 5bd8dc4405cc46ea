"""
Jobs API: list the job queue and delete jobs (admin only)
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..auth import request_is_admin
from ..db import get_db
from ..schemas.job import DeleteOut, ErrorOut, JobListOut, JobOut
from ..services import jobs as jobs_service
from .response_builders import (
    build_db_error_response,
    build_forbidden_response,
    build_invalid_job_id_response,
)

logger = logging.getLogger("jobdash.api.jobs")

router = APIRouter()


@router.get("/api/jobs", response_model=JobListOut, responses={500: {"model": ErrorOut}})
def get_jobs(
    status: Optional[str] = Query(None),
    sort: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    """List jobs, optionally filtered by status, sorted by `column:direction`"""
    try:
        rows = jobs_service.list_jobs(db, status=status, sort=sort, limit=limit)
    except SQLAlchemyError as e:
        logger.exception("Failed to list jobs")
        return build_db_error_response(e)
    return JobListOut(count=len(rows), rows=[JobOut.model_validate(r) for r in rows])


@router.delete(
    "/api/jobs/{job_id}",
    response_model=DeleteOut,
    responses={400: {"model": ErrorOut}, 403: {"model": ErrorOut}, 500: {"model": ErrorOut}},
)
def delete_job(job_id: str, request: Request, db: Session = Depends(get_db)):
    """Delete a job by ID; requires the x-admin-token header"""
    if not request_is_admin(request):
        logger.warning("Rejected delete of job %s: bad or missing admin token", job_id)
        return build_forbidden_response()

    parsed = jobs_service.parse_job_id(job_id)
    if parsed is None:
        return build_invalid_job_id_response()

    try:
        affected = jobs_service.delete_job(db, parsed)
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to delete job %s", parsed)
        return build_db_error_response(e)
    return DeleteOut(affectedRows=affected)
