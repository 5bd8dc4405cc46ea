# jobdash/auth.py
import hmac
from typing import Optional
from fastapi import Request

ADMIN_HEADER = "x-admin-token"


def is_admin_token(presented: Optional[str], configured: Optional[str]) -> bool:
    """Fail closed: no configured token means nobody is admin"""
    if not configured:
        return False
    return hmac.compare_digest((presented or "").encode("utf-8"), configured.encode("utf-8"))


def request_is_admin(request: Request) -> bool:
    return is_admin_token(request.headers.get(ADMIN_HEADER), request.app.state.admin_token)
