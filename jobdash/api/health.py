"""
Health check endpoint - no authentication required
"""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas.job import ErrorOut, HealthOut
from .response_builders import build_db_error_response

logger = logging.getLogger("jobdash.health")

router = APIRouter()


@router.get("/api/health", response_model=HealthOut, responses={500: {"model": ErrorOut}})
def health(db: Session = Depends(get_db)):
    try:
        value = db.execute(text("SELECT 1 AS ok")).scalar()
    except SQLAlchemyError as e:
        logger.error("Health check failed: %s", e)
        return build_db_error_response(e)
    return {"ok": True, "db": value == 1}
