from datetime import timedelta

import pytest

from catalog.core.exceptions import InvalidInputError, NotFoundError
from catalog.core.utils import utc_today
from catalog.enums.history_kind import HistoryKind
from catalog.models.daily_stats import DailyProductStats
from catalog.services.history_service import (
    get_bsr_history,
    get_price_history,
    get_review_history,
    list_history,
    record_bsr,
    record_price,
    record_review,
)


def test_record_bsr_is_stamped_with_today(db, make_product):
    product = make_product("H001")

    row = record_bsr(db, product.id, 1500)

    assert row.date == utc_today()
    assert row.bsr == 1500


def test_same_day_observations_are_all_kept(db, make_product):
    product = make_product("H002")

    record_bsr(db, product.id, 100)
    record_bsr(db, product.id, 90)
    record_bsr(db, product.id, None)

    history = get_bsr_history(db, product.id)
    assert len(history) == 3
    # newest first, ties broken by insertion order descending
    assert [h.bsr for h in history] == [None, 90, 100]


def test_record_bsr_refreshes_todays_rollup(db, make_product):
    product = make_product("H003")

    record_bsr(db, product.id, 400)
    record_bsr(db, product.id, 600)

    stats = db.query(DailyProductStats).filter(DailyProductStats.product_id == product.id).all()
    assert len(stats) == 1
    assert stats[0].date == utc_today()
    assert stats[0].avg_bsr_7 == pytest.approx(500.0)


def test_backfilled_bsr_refreshes_later_stored_rollups(db, make_product):
    product = make_product("H004")
    today = utc_today()

    record_bsr(db, product.id, 1000)
    record_bsr(db, product.id, 1200, observed_on=today - timedelta(days=1))

    stats = {
        s.date: s
        for s in db.query(DailyProductStats).filter(DailyProductStats.product_id == product.id).all()
    }
    assert sorted(stats) == [today - timedelta(days=1), today]
    assert stats[today].avg_bsr_7 == pytest.approx(1100.0)
    assert stats[today - timedelta(days=1)].avg_bsr_7 == pytest.approx(1200.0)


def test_backfill_leaves_rollups_outside_the_widest_window(db, make_product):
    product = make_product("H005")
    today = utc_today()

    record_bsr(db, product.id, 1000)
    record_bsr(db, product.id, 5000, observed_on=today - timedelta(days=90))

    current = (
        db.query(DailyProductStats)
        .filter(DailyProductStats.product_id == product.id, DailyProductStats.date == today)
        .one()
    )
    assert current.avg_bsr_90 == pytest.approx(1000.0)


def test_record_for_missing_product(db, seed):
    with pytest.raises(NotFoundError):
        record_bsr(db, 999, 10)
    with pytest.raises(NotFoundError):
        record_price(db, 999, 10.0, "USD")
    with pytest.raises(NotFoundError):
        record_review(db, 999, 4.0, 10)


def test_record_rejects_out_of_range_values(db, make_product):
    product = make_product("H004")
    with pytest.raises(InvalidInputError):
        record_bsr(db, product.id, 0)
    with pytest.raises(InvalidInputError):
        record_price(db, product.id, -1.0, "USD")
    with pytest.raises(InvalidInputError):
        record_review(db, product.id, 5.5, 3)


def test_price_and_review_history(db, make_product):
    product = make_product("H005")

    record_price(db, product.id, 19.99, "usd")
    record_review(db, product.id, 4.5, 120)

    prices = get_price_history(db, product.id)
    reviews = get_review_history(db, product.id)

    assert float(prices[0].price) == pytest.approx(19.99)
    assert prices[0].currency_code == "USD"
    assert float(reviews[0].rating) == pytest.approx(4.5)
    assert reviews[0].reviews_count == 120


def test_since_days_window_is_inclusive(db, make_product):
    product = make_product("H006")
    today = utc_today()

    for offset, bsr in ((0, 10), (3, 20), (7, 30), (8, 40)):
        record_bsr(db, product.id, bsr, observed_on=today - timedelta(days=offset))

    recent = list_history(db, HistoryKind.bsr, product.id, since_days=7)
    assert [h.bsr for h in recent] == [10, 20, 30]

    everything = list_history(db, HistoryKind.bsr, product.id)
    assert [h.bsr for h in everything] == [10, 20, 30, 40]


def test_history_for_product_without_observations(db, make_product):
    product = make_product("H007")
    assert get_bsr_history(db, product.id) == []


def test_negative_since_days(db, make_product):
    product = make_product("H008")
    with pytest.raises(InvalidInputError):
        list_history(db, HistoryKind.price, product.id, since_days=-1)
