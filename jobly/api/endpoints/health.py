"""Operational endpoints: liveness, readiness and the Prometheus scrape."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import JSONResponse

from jobly.core.storage.database import Database, get_db

log = logging.getLogger("jobly.request")

router = APIRouter()


@router.get("/health")
def health_check():
    return {"status": "healthy"}


@router.get("/health/ready")
def readiness(db: Database = Depends(get_db)):
    """Ready means the database answers."""
    try:
        db.query("SELECT 1")
    except Exception as e:
        log.warning("readiness failed err=%s", type(e).__name__)
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "problems": [f"database:{type(e).__name__}"]},
        )
    return {"status": "ready", "dialect": db.dialect.name}


@router.get("/metrics", include_in_schema=False)
def prometheus_metrics() -> Response:
    # jobly_* counters live in jobly.api.observability.metrics
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
