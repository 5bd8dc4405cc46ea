"""
Configuration module for the job dashboard
"""

import os
from urllib.parse import quote_plus

from . import __version__ as API_VERSION

# Server configuration
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8080"))

# Database configuration
DB_HOST = os.getenv("DB_HOST", "db")
DB_PORT = int(os.getenv("DB_PORT", "3306"))
DB_USER = os.getenv("DB_USER", "jobdash")
DB_PASS = os.getenv("DB_PASS", "jobdashpass")
DB_NAME = os.getenv("DB_NAME", "jobdash")
DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "10"))


def build_database_url() -> str:
    """Full SQLAlchemy URL: DATABASE_URL wins, otherwise built from the DB_* settings"""
    url = os.getenv("DATABASE_URL", "").strip()
    if url:
        return url
    return (
        f"mysql+pymysql://{quote_plus(DB_USER)}:{quote_plus(DB_PASS)}"
        f"@{DB_HOST}:{DB_PORT}/{DB_NAME}?charset=utf8mb4"
    )


DATABASE_URL = build_database_url()


def normalize_base_path(raw: str) -> str:
    """
    Normalize an optional mount prefix.

    "jobdash/" -> "/jobdash", "/" -> "", "" -> "".
    """
    base = (raw or "").strip()
    if base and not base.startswith("/"):
        base = "/" + base
    return base.rstrip("/")


# Optional sub-path for reverse-proxy deployments (e.g. /jobdash)
BASE_PATH = normalize_base_path(os.getenv("BASE_PATH", ""))

# Empty token means destructive endpoints are always forbidden
ADMIN_TOKEN = os.getenv("ADMIN_TOKEN", "")

# Logging configuration
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "text")
LOG_EXCLUDE_PATHS = [p for p in os.getenv("LOG_EXCLUDE_PATHS", "/api/health").split(",") if p]
