import logging
from datetime import datetime

from fastapi import APIRouter, Depends, Request
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from catalog.core.utils import utc_today
from catalog.database.connection import get_db
from catalog.models.daily_stats import DailyProductStats
from catalog.models.history import BsrHistory
from catalog.models.product import Product
from catalog.schemas.system import HealthCheckResponse, SystemMetricsResponse

router = APIRouter(tags=["System"])

logger = logging.getLogger(__name__)


def _uptime(request: Request, now: datetime) -> float:
    start_time = getattr(request.app.state, "start_time", now)
    return (now - start_time).total_seconds()


@router.get("/health", response_model=HealthCheckResponse)
def health_check(request: Request, db: Session = Depends(get_db)):
    """
    Lightweight public health check.
    Returns ok + DB connectivity check (SELECT 1).
    """
    now = datetime.utcnow()

    db_ok = True
    extra = {}
    try:
        db.execute(select(1))
    except SQLAlchemyError as e:
        logger.warning(f"Health check database ping failed: {e}")
        db_ok = False
        extra["db_error"] = str(e)

    return HealthCheckResponse(
        status="ok" if db_ok else "degraded",
        now=now,
        uptime_seconds=_uptime(request, now),
        db_ok=db_ok,
        extra=extra or None,
    )


@router.get("/metrics", response_model=SystemMetricsResponse)
def system_metrics(request: Request, db: Session = Depends(get_db)):
    """
    System metrics in JSON form.
    Uses in-process counters stored on app.state.metrics and DB-derived catalog counts.
    """
    now = datetime.utcnow()

    metrics = getattr(request.app.state, "metrics", None) or {}
    requests_count = int(metrics.get("requests", 0))
    total_response_ms = float(metrics.get("total_response_ms", 0.0))
    avg_response_ms = (total_response_ms / requests_count) if requests_count > 0 else None

    total_products = db.query(func.count(Product.id)).scalar() or 0
    deleted_products = (
        db.query(func.count(Product.id))
        .filter(Product.deleted == True)  # noqa: E712
        .scalar()
    ) or 0
    rank_observations_today = (
        db.query(func.count(BsrHistory.id))
        .filter(BsrHistory.date == utc_today())
        .scalar()
    ) or 0
    daily_stats_rows = db.query(func.count(DailyProductStats.id)).scalar() or 0

    return SystemMetricsResponse(
        uptime_seconds=_uptime(request, now),
        now=now,
        requests_count=requests_count,
        avg_response_ms=avg_response_ms,
        total_products=int(total_products),
        active_products=int(total_products - deleted_products),
        deleted_products=int(deleted_products),
        rank_observations_today=int(rank_observations_today),
        daily_stats_rows=int(daily_stats_rows),
        extra=None,
    )
