"""Prometheus scrape endpoint.

Returns every metric in app/core/metrics.py in the text exposition
format (not JSON), e.g.:

  registry_operations_total{operation="issue",outcome="ok"} 12.0
  registry_operations_total{operation="revoke",outcome="already_revoked"} 1.0

Left unauthenticated; restrict it at the network edge in production.
"""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

router = APIRouter(tags=["observability"])


@router.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )
