"""
Response builders for consistent error responses
"""

from fastapi.responses import JSONResponse


def build_error_response(status_code: int, error: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"ok": False, "error": error})


def build_forbidden_response() -> JSONResponse:
    """403 with no hint about why the admin check failed"""
    return build_error_response(403, "Forbidden")


def build_invalid_job_id_response() -> JSONResponse:
    return build_error_response(400, "Invalid jobID")


def build_db_error_response(exc: Exception) -> JSONResponse:
    """500 carrying the raw database error text"""
    return build_error_response(500, str(exc))
