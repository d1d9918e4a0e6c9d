from datetime import date, timedelta

import pytest

from catalog.core.exceptions import NotFoundError
from catalog.core.utils import utc_today
from catalog.models.daily_stats import DailyProductStats
from catalog.models.history import BsrHistory
from catalog.services.history_service import record_bsr
from catalog.services.rollup_service import (
    compute_daily_stats,
    list_daily_stats,
    refresh_daily_stats,
    trailing_average,
)


D0 = date(2026, 3, 15)


def test_trailing_average_skips_missing_values():
    samples = [(D0, 1000), (D0 - timedelta(days=1), None), (D0 - timedelta(days=2), 1200)]
    assert trailing_average(samples, D0, 7) == pytest.approx(1100.0)


def test_trailing_average_window_bounds():
    samples = [
        (D0, 10),
        (D0 - timedelta(days=6), 20),   # first day inside a 7-day window
        (D0 - timedelta(days=7), 1000),  # just outside
        (D0 + timedelta(days=1), 1000),  # after the target date
    ]
    assert trailing_average(samples, D0, 7) == pytest.approx(15.0)


def test_trailing_average_empty_window_is_none():
    assert trailing_average([], D0, 7) is None
    assert trailing_average([(D0, None)], D0, 7) is None
    assert trailing_average([(D0 - timedelta(days=40), 5)], D0, 30) is None


def test_seven_day_rollup_scenario(db, make_product):
    product = make_product("B001", marketplace_id=1)
    d0 = utc_today()

    record_bsr(db, product.id, 1000, observed_on=d0)
    record_bsr(db, product.id, 1200, observed_on=d0 - timedelta(days=1))

    stats = compute_daily_stats(db, product.id, d0)

    assert stats.avg_bsr_7 == pytest.approx(1100.0)
    assert stats.avg_bsr_30 == pytest.approx(1100.0)
    assert stats.avg_bsr_90 == pytest.approx(1100.0)


def test_windows_differ_by_span(db, make_product):
    product = make_product("R002")
    db.add_all([
        BsrHistory(product_id=product.id, date=D0, bsr=100),
        BsrHistory(product_id=product.id, date=D0 - timedelta(days=20), bsr=200),
        BsrHistory(product_id=product.id, date=D0 - timedelta(days=60), bsr=600),
    ])
    db.commit()

    stats = compute_daily_stats(db, product.id, D0)

    assert stats.avg_bsr_7 == pytest.approx(100.0)
    assert stats.avg_bsr_30 == pytest.approx(150.0)
    assert stats.avg_bsr_90 == pytest.approx(300.0)


def test_recompute_replaces_existing_row(db, make_product):
    product = make_product("R003")
    db.add(BsrHistory(product_id=product.id, date=D0, bsr=100))
    db.commit()
    first = compute_daily_stats(db, product.id, D0)

    db.add(BsrHistory(product_id=product.id, date=D0, bsr=300))
    db.commit()
    second = compute_daily_stats(db, product.id, D0)

    assert second.id == first.id
    assert second.avg_bsr_7 == pytest.approx(200.0)
    assert db.query(DailyProductStats).filter(DailyProductStats.product_id == product.id).count() == 1


def test_rollup_without_history_stores_nulls(db, make_product):
    product = make_product("R004")
    stats = compute_daily_stats(db, product.id, D0)
    assert stats.avg_bsr_7 is None
    assert stats.avg_bsr_30 is None
    assert stats.avg_bsr_90 is None


def test_rollup_for_missing_product(db, seed):
    with pytest.raises(NotFoundError):
        compute_daily_stats(db, 999, D0)


def test_refresh_covers_products_with_recent_history(db, make_product):
    with_history = make_product("R005")
    stale = make_product("R006")
    make_product("R007")
    db.add_all([
        BsrHistory(product_id=with_history.id, date=D0 - timedelta(days=2), bsr=50),
        BsrHistory(product_id=stale.id, date=D0 - timedelta(days=120), bsr=70),
    ])
    db.commit()

    assert refresh_daily_stats(db, D0) == 1

    rows = list_daily_stats(db, with_history.id)
    assert len(rows) == 1
    assert rows[0].date == D0
    assert rows[0].avg_bsr_7 == pytest.approx(50.0)
    assert list_daily_stats(db, stale.id) == []


def test_list_daily_stats_newest_first(db, make_product):
    product = make_product("R008")
    db.add(BsrHistory(product_id=product.id, date=D0, bsr=10))
    db.commit()
    compute_daily_stats(db, product.id, D0 - timedelta(days=1))
    compute_daily_stats(db, product.id, D0)

    assert [s.date for s in list_daily_stats(db, product.id)] == [D0, D0 - timedelta(days=1)]
