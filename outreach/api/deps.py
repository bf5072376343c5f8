"""Shared request dependencies."""

from __future__ import annotations

import os
import secrets
from typing import Tuple

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from ..core import ADMIN_PASS, ADMIN_USER

security = HTTPBasic()


def _admin_creds() -> Tuple[str, str]:
    # Read fresh each request so .env changes apply after restart
    return os.getenv("ADMIN_USER", ADMIN_USER), os.getenv("ADMIN_PASS", ADMIN_PASS)


def require_admin(credentials: HTTPBasicCredentials = Depends(security)) -> bool:
    admin_user, admin_pass = _admin_creds()
    ok_user = secrets.compare_digest(credentials.username, admin_user)
    ok_pass = secrets.compare_digest(credentials.password, admin_pass)
    if not (ok_user and ok_pass):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Basic"},
        )
    return True


__all__ = ["require_admin", "security"]
