"""Health and readiness endpoints.

  /health (liveness): the process answers.  Also reports registry
    counters so an operator can eyeball the instance without /metrics.

  /ready (readiness): the registry singleton exists and owns itself,
    i.e. the owner is still in its authorized set.  The registry has no
    backing services, so there is nothing else to wait for.
"""

from __future__ import annotations

from fastapi import APIRouter, Response, status

from app.services import credential_registry

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict:
    reg = credential_registry.registry
    return {
        "status": "ok",
        "registry": {
            "owner": reg.owner,
            "credential_count": reg.credential_count,
            "events": len(credential_registry.event_log),
        },
    }


@router.get("/ready")
async def ready() -> Response:
    reg = credential_registry.registry
    if not reg.is_authorized(reg.owner):
        return Response(status_code=status.HTTP_503_SERVICE_UNAVAILABLE)
    return Response(status_code=status.HTTP_200_OK)
