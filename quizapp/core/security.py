"""Identity helpers for FastAPI endpoints.

Tokens are issued by the external identity provider; this service only
verifies the signature and turns the claims into an explicit ``Identity``
that is handed to every service call.
"""

from typing import Literal

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel, ValidationError

from quizapp.core.config import settings

security = HTTPBearer(auto_error=False)

TEACHER = "teacher"
STUDENT = "student"


class Identity(BaseModel):
    """Caller identity extracted from a verified token."""
    subject_id: str
    role: Literal["teacher", "student"]


def decode_identity(token: str) -> Identity:
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            options={"require": ["sub"]},
        )
        return Identity(subject_id=str(payload["sub"]), role=payload.get("role"))
    except (jwt.PyJWTError, ValidationError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )


def get_current_identity(
    creds: HTTPAuthorizationCredentials | None = Depends(security),
) -> Identity:
    if not creds:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return decode_identity(creds.credentials)


def get_current_teacher(identity: Identity = Depends(get_current_identity)) -> Identity:
    if identity.role != TEACHER:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Teacher role required",
        )
    return identity


def get_current_student(identity: Identity = Depends(get_current_identity)) -> Identity:
    if identity.role != STUDENT:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Student role required",
        )
    return identity
