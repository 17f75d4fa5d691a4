"""Translate registry rejections into HTTP errors.

Status codes:
  403  caller lacks the role the operation needs
  404  credential id outside 1..credential_count
  409  the request conflicts with current state (already revoked,
       already authorized, not authorized, owner protected)

The body keeps the registry's error code next to the message so
clients can branch on `detail.code` instead of parsing text.
"""

from __future__ import annotations

from fastapi import HTTPException, status

from app.services.credential_registry import (
    CredentialNotFoundError,
    RegistryError,
    UnauthorizedError,
)


def _status_for(error: RegistryError) -> int:
    if isinstance(error, UnauthorizedError):
        return status.HTTP_403_FORBIDDEN
    if isinstance(error, CredentialNotFoundError):
        return status.HTTP_404_NOT_FOUND
    return status.HTTP_409_CONFLICT


def registry_http_error(error: RegistryError) -> HTTPException:
    return HTTPException(
        status_code=_status_for(error),
        detail={"code": error.code, "message": str(error)},
    )
