"""
Employee Directory API - Health Check and Root Routes
======================================================

What:  Liveness check (GET /health) and a plain-text greeting (GET /).
How:   /health answers without touching the document store, so it stays
       green while the store is unreachable; store failures surface as
       503/504 on the entity routes instead.
Who:   Load balancers, container health checks, humans with curl.
"""

import time
from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from employee_directory.config import settings
from employee_directory.schemas.envelope import HealthResponse

router = APIRouter(tags=["Health"])

# Initialized once when the module loads
_start_time = time.monotonic()


def uptime_seconds() -> float:
    return round(time.monotonic() - _start_time, 3)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Reports that the process is up, how long it has been running, and its version.",
)
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="OK",
        uptime=uptime_seconds(),
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=settings.app_version,
    )


@router.get("/", response_class=PlainTextResponse, include_in_schema=False)
async def welcome() -> str:
    return "Welcome Client"
