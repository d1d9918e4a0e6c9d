import logging
from datetime import date, timedelta
from typing import Iterable, List, Optional, Tuple

from sqlalchemy.orm import Session

from catalog.core.exceptions import NotFoundError
from catalog.core.utils import utc_now, utc_today
from catalog.models.daily_stats import DailyProductStats
from catalog.models.history import BsrHistory
from catalog.services.product_service import get_product_row

logger = logging.getLogger(__name__)

ROLLUP_WINDOWS = (7, 30, 90)


def trailing_average(
    samples: Iterable[Tuple[date, Optional[int]]],
    target_date: date,
    window: int,
) -> Optional[float]:
    """
    Mean of the sample values dated within [target_date - (window - 1), target_date].

    Missing values count towards neither the sum nor the sample count. Returns
    None when the window holds no value at all.
    """
    start = target_date - timedelta(days=window - 1)
    values = [value for day, value in samples if value is not None and start <= day <= target_date]
    if not values:
        return None
    return sum(values) / len(values)


def _load_rank_samples(db: Session, product_id: int, target_date: date) -> List[Tuple[date, Optional[int]]]:
    start = target_date - timedelta(days=max(ROLLUP_WINDOWS) - 1)
    rows = (
        db.query(BsrHistory.date, BsrHistory.bsr)
        .filter(
            BsrHistory.product_id == product_id,
            BsrHistory.date >= start,
            BsrHistory.date <= target_date,
        )
        .all()
    )
    return [(row.date, row.bsr) for row in rows]


def _upsert_stats(db: Session, product_id: int, target_date: date) -> DailyProductStats:
    samples = _load_rank_samples(db, product_id, target_date)
    averages = {
        f"avg_bsr_{window}": trailing_average(samples, target_date, window)
        for window in ROLLUP_WINDOWS
    }

    stats = (
        db.query(DailyProductStats)
        .filter(
            DailyProductStats.product_id == product_id,
            DailyProductStats.date == target_date,
        )
        .first()
    )
    if stats is None:
        stats = DailyProductStats(product_id=product_id, date=target_date)
        db.add(stats)

    for key, value in averages.items():
        setattr(stats, key, value)
    stats.computed_at = utc_now()
    return stats


# --------------------------
# COMPUTE / REFRESH
# --------------------------
def compute_daily_stats(
    db: Session,
    product_id: int,
    target_date: Optional[date] = None,
) -> DailyProductStats:
    """Compute and store the 7/30/90-day rank averages; replaces an existing row for the day."""
    target_date = target_date or utc_today()
    if not get_product_row(db, product_id):
        logger.warning(f"Rollup rejected, product {product_id} not found")
        raise NotFoundError(f"Product {product_id} not found")

    stats = _upsert_stats(db, product_id, target_date)
    db.commit()
    db.refresh(stats)
    logger.debug(f"Daily stats for product {product_id} on {target_date}: {stats.avg_bsr_7}/{stats.avg_bsr_30}/{stats.avg_bsr_90}")
    return stats


def recompute_after_observation(
    db: Session,
    product_id: int,
    observed_on: date,
) -> List[DailyProductStats]:
    """
    Recompute the rollup of ``observed_on`` and every stored rollup of the
    product whose widest window reaches back to it, so a backfilled rank
    does not leave later days stale.
    """
    last_affected = observed_on + timedelta(days=max(ROLLUP_WINDOWS) - 1)
    days = {
        row.date
        for row in (
            db.query(DailyProductStats.date)
            .filter(
                DailyProductStats.product_id == product_id,
                DailyProductStats.date > observed_on,
                DailyProductStats.date <= last_affected,
            )
            .all()
        )
    }
    days.add(observed_on)

    try:
        rows = [_upsert_stats(db, product_id, day) for day in sorted(days)]
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.debug(f"Recomputed {len(rows)} rollups for product {product_id} from {observed_on}")
    return rows


def refresh_daily_stats(db: Session, target_date: Optional[date] = None) -> int:
    """Recompute the rollup of every product with rank history in the widest window."""
    target_date = target_date or utc_today()
    start = target_date - timedelta(days=max(ROLLUP_WINDOWS) - 1)

    product_ids = [
        row.product_id
        for row in (
            db.query(BsrHistory.product_id)
            .filter(BsrHistory.date >= start, BsrHistory.date <= target_date)
            .distinct()
            .order_by(BsrHistory.product_id)
            .all()
        )
    ]

    try:
        for product_id in product_ids:
            _upsert_stats(db, product_id, target_date)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(f"Refreshed daily stats for {len(product_ids)} products on {target_date}")
    return len(product_ids)


def list_daily_stats(db: Session, product_id: int) -> List[DailyProductStats]:
    return (
        db.query(DailyProductStats)
        .filter(DailyProductStats.product_id == product_id)
        .order_by(DailyProductStats.date.desc())
        .all()
    )
