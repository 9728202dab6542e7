"""Observability API endpoints.

Provides metrics, health checks, and readiness probes for monitoring.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from sqlalchemy.orm import Session

from .. import __version__
from ..database import get_db
from .health import HealthStatus, check_database_health, get_overall_health

router = APIRouter(tags=["Observability"])


@router.get(
    "/metrics",
    summary="Prometheus metrics endpoint",
    include_in_schema=False,
)
def metrics():
    """Expose Prometheus metrics in text exposition format."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


@router.get(
    "/health",
    summary="Health check endpoint",
    description="Returns API and database health. 503 when the database is unreachable.",
)
def health_check(db: Session = Depends(get_db)):
    """Check health of the API and its database.

    Returns:
        JSONResponse: envelope with component status, 200 or 503
    """
    components = {"database": check_database_health(db)}
    overall_status = get_overall_health(components)
    healthy = overall_status != HealthStatus.UNHEALTHY

    return JSONResponse(
        status_code=200 if healthy else 503,
        content={
            "success": healthy,
            "message": "eMunicipality API is running" if healthy else "eMunicipality API is degraded",
            "status": overall_status.value,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": __version__,
            "components": {
                name: {
                    "status": comp.status.value,
                    "message": comp.message,
                    "latency_ms": comp.latency_ms,
                }
                for name, comp in components.items()
            },
        },
    )


@router.get(
    "/ready",
    summary="Readiness check endpoint",
)
def readiness_check(db: Session = Depends(get_db)):
    """Ready once the database answers."""
    db_health = check_database_health(db)

    if db_health.status == HealthStatus.HEALTHY:
        return {"status": "ready", "message": "Application is ready to serve traffic"}
    return JSONResponse(
        content={"status": "not_ready", "message": db_health.message},
        status_code=503
    )
