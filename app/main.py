from __future__ import annotations

import logging

from fastapi import FastAPI

from app.api.credentials import router as credentials_router
from app.api.health import router as health_router
from app.api.institutions import router as institutions_router
from app.api.metrics_endpoint import router as metrics_router
from app.core.config import SETTINGS
from app.core.logging import setup_logging
from app.middleware.metrics import MetricsMiddleware
from app.middleware.request_context import RequestContextMiddleware
from app.services.credential_registry import registry

# Configure logging before anything else runs.
setup_logging(SETTINGS.log_level, json_format=SETTINGS.log_json)

logger = logging.getLogger(__name__)

# only app setup + router registration

app = FastAPI(
    title="credential-registry",
    docs_url="/docs" if SETTINGS.is_dev else None,
    redoc_url="/redoc" if SETTINGS.is_dev else None,
)

# Middleware execution order: last-added runs first (outermost layer).
# RequestContext (outermost) → Metrics → route handler
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestContextMiddleware)

app.include_router(metrics_router)
app.include_router(health_router)
app.include_router(credentials_router)
app.include_router(institutions_router)

logger.info(
    "credential-registry started  env=%s log_level=%s port=%d owner=%s docs=%s",
    SETTINGS.app_env,
    SETTINGS.log_level,
    SETTINGS.port,
    registry.owner,
    "on" if SETTINGS.is_dev else "off",
)
