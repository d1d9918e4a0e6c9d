from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from catalog.database.connection import get_db
from catalog.enums.history_kind import HistoryKind
from catalog.schemas.daily_stats import (
    ComputeDailyStatsRequest,
    DailyProductStatsResponse,
    RefreshDailyStatsResponse,
)
from catalog.schemas.history import (
    BsrHistoryResponse,
    BsrRecordRequest,
    PriceHistoryResponse,
    PriceRecordRequest,
    ReviewHistoryResponse,
    ReviewRecordRequest,
)
from catalog.core.utils import utc_today
from catalog.services.history_service import list_history, record_bsr, record_price, record_review
from catalog.services.rollup_service import compute_daily_stats, list_daily_stats, refresh_daily_stats

router = APIRouter(tags=["History & Rollups"])

HISTORY_SCHEMAS = {
    HistoryKind.bsr: BsrHistoryResponse,
    HistoryKind.price: PriceHistoryResponse,
    HistoryKind.review: ReviewHistoryResponse,
}


# ---------- RECORD OBSERVATIONS ----------

@router.post("/products/{product_id}/history/bsr", response_model=BsrHistoryResponse, status_code=201)
def record_bsr_route(product_id: int, data: BsrRecordRequest, db: Session = Depends(get_db)):
    return record_bsr(db, product_id, data.bsr)


@router.post("/products/{product_id}/history/price", response_model=PriceHistoryResponse, status_code=201)
def record_price_route(product_id: int, data: PriceRecordRequest, db: Session = Depends(get_db)):
    return record_price(db, product_id, data.price, data.currency_code)


@router.post("/products/{product_id}/history/review", response_model=ReviewHistoryResponse, status_code=201)
def record_review_route(product_id: int, data: ReviewRecordRequest, db: Session = Depends(get_db)):
    return record_review(db, product_id, data.rating, data.reviews_count)


# ---------- READ HISTORY ----------

@router.get("/products/{product_id}/history/{kind}")
def list_history_route(
    product_id: int,
    kind: HistoryKind,
    days: Optional[int] = None,
    db: Session = Depends(get_db),
):
    schema = HISTORY_SCHEMAS[kind]
    return [schema.model_validate(row) for row in list_history(db, kind, product_id, since_days=days)]


# ---------- DAILY STATS ----------

@router.post("/products/{product_id}/daily-stats", response_model=DailyProductStatsResponse)
def compute_daily_stats_route(
    product_id: int,
    data: Optional[ComputeDailyStatsRequest] = None,
    db: Session = Depends(get_db),
):
    target_date = data.target_date if data else None
    return compute_daily_stats(db, product_id, target_date)


@router.get("/products/{product_id}/daily-stats", response_model=List[DailyProductStatsResponse])
def list_daily_stats_route(product_id: int, db: Session = Depends(get_db)):
    return list_daily_stats(db, product_id)


@router.post("/daily-stats/refresh", response_model=RefreshDailyStatsResponse)
def refresh_daily_stats_route(
    data: Optional[ComputeDailyStatsRequest] = None,
    db: Session = Depends(get_db),
):
    target_date = (data.target_date if data else None) or utc_today()
    rows_written = refresh_daily_stats(db, target_date)
    return RefreshDailyStatsResponse(target_date=target_date, rows_written=rows_written)
