import logging
from datetime import date, timedelta
from typing import List, Optional

from sqlalchemy.orm import Session

from catalog.core.config import settings
from catalog.core.exceptions import InvalidInputError, NotFoundError
from catalog.core.utils import utc_today
from catalog.enums.history_kind import HistoryKind
from catalog.models.history import BsrHistory, PriceHistory, ReviewHistory
from catalog.services.product_service import get_product_row, quantize

logger = logging.getLogger(__name__)

HISTORY_MODELS = {
    HistoryKind.bsr: BsrHistory,
    HistoryKind.price: PriceHistory,
    HistoryKind.review: ReviewHistory,
}


def _require_product(db: Session, product_id: int, kind: HistoryKind):
    if not get_product_row(db, product_id):
        logger.warning(f"Rejected {kind.value} observation, product {product_id} not found")
        raise NotFoundError(f"Product {product_id} not found")


def _append(db: Session, row):
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


# --------------------------
# RECORD OBSERVATIONS
# --------------------------
def record_bsr(
    db: Session,
    product_id: int,
    bsr: Optional[int],
    observed_on: Optional[date] = None,
) -> BsrHistory:
    """
    Append a rank observation. ``observed_on`` defaults to today (UTC) and
    exists for backfills. When configured to, refreshes the rollup of the
    observed day and any stored later rollup whose windows cover it.
    """
    if bsr is not None and bsr <= 0:
        raise InvalidInputError("bsr must be a positive integer")
    _require_product(db, product_id, HistoryKind.bsr)

    row = _append(
        db,
        BsrHistory(product_id=product_id, date=observed_on or utc_today(), bsr=bsr),
    )

    if settings.RECOMPUTE_ROLLUPS_ON_INGEST:
        # imported here, rollup_service depends on this module
        from catalog.services.rollup_service import recompute_after_observation

        recompute_after_observation(db, product_id, row.date)

    return row


def record_price(
    db: Session,
    product_id: int,
    price: Optional[float],
    currency_code: str,
    observed_on: Optional[date] = None,
) -> PriceHistory:
    if price is not None and price < 0:
        raise InvalidInputError("price must not be negative")
    if not currency_code:
        raise InvalidInputError("currency_code is required")
    _require_product(db, product_id, HistoryKind.price)

    return _append(
        db,
        PriceHistory(
            product_id=product_id,
            date=observed_on or utc_today(),
            price=quantize(price),
            currency_code=currency_code.upper(),
        ),
    )


def record_review(
    db: Session,
    product_id: int,
    rating: Optional[float],
    reviews_count: Optional[int],
    observed_on: Optional[date] = None,
) -> ReviewHistory:
    if rating is not None and not (0 <= rating <= 5):
        raise InvalidInputError("rating must be between 0 and 5")
    if reviews_count is not None and reviews_count < 0:
        raise InvalidInputError("reviews_count must not be negative")
    _require_product(db, product_id, HistoryKind.review)

    return _append(
        db,
        ReviewHistory(
            product_id=product_id,
            date=observed_on or utc_today(),
            rating=quantize(rating),
            reviews_count=reviews_count,
        ),
    )


# --------------------------
# READ HISTORY
# --------------------------
def list_history(
    db: Session,
    kind: HistoryKind,
    product_id: int,
    since_days: Optional[int] = None,
) -> List:
    """Rows newest first; ``since_days`` keeps rows dated on or after today - since_days."""
    if since_days is not None and since_days < 0:
        raise InvalidInputError("days must not be negative")

    model = HISTORY_MODELS[HistoryKind(kind)]
    query = db.query(model).filter(model.product_id == product_id)
    if since_days is not None:
        query = query.filter(model.date >= utc_today() - timedelta(days=since_days))

    return query.order_by(model.date.desc(), model.id.desc()).all()


def get_bsr_history(db: Session, product_id: int, since_days: Optional[int] = None) -> List[BsrHistory]:
    return list_history(db, HistoryKind.bsr, product_id, since_days)


def get_price_history(db: Session, product_id: int, since_days: Optional[int] = None) -> List[PriceHistory]:
    return list_history(db, HistoryKind.price, product_id, since_days)


def get_review_history(db: Session, product_id: int, since_days: Optional[int] = None) -> List[ReviewHistory]:
    return list_history(db, HistoryKind.review, product_id, since_days)
