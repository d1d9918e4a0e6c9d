import pytest

from catalog.core.exceptions import ConflictError, InvalidInputError, NotFoundError
from catalog.models.product import Product
from catalog.schemas.product import ProductCreate, ProductUpdate
from catalog.services.product_service import (
    add_product_keyword,
    create_product,
    get_product,
    get_product_by_asin,
    list_product_keywords,
    soft_delete_product,
    update_product,
)


def test_create_product_sets_defaults(db, make_product):
    product = make_product("b0cx1 ", title="Running Shoe", price=59.999, rating=4.456, brand_id=1)

    assert product.id is not None
    assert product.asin == "B0CX1"
    assert product.status == "pending_enrichment"
    assert product.deleted is False
    assert product.currency_code == "USD"
    assert product.source_type == "scraper"
    assert product.first_seen_at is not None
    assert isinstance(product.price, float)
    assert product.price == pytest.approx(60.0)
    assert product.rating == pytest.approx(4.46)


def test_duplicate_asin_in_same_marketplace_conflicts(db, make_product):
    make_product("B002")
    with pytest.raises(ConflictError):
        make_product("B002")

    assert db.query(Product).filter(Product.asin == "B002").count() == 1


def test_same_asin_in_other_marketplace_is_allowed(db, make_product):
    us = make_product("B003", marketplace_id=1)
    uk = make_product("B003", marketplace_id=2)
    assert us.id != uk.id


@pytest.mark.parametrize(
    "fields",
    [
        {"marketplace_id": 99},
        {"marketplace_id": 1, "brand_id": 99},
        {"marketplace_id": 1, "product_type_id": 99},
    ],
)
def test_create_product_with_missing_reference(db, seed, fields):
    with pytest.raises(NotFoundError):
        create_product(db, ProductCreate(asin="B004", **fields))


def test_update_applies_only_sent_fields(db, make_product):
    product = make_product("B005", title="Old title", price=10.0, bsr=500)

    updated = update_product(db, product.id, ProductUpdate(title="New title", status="enriched"))

    assert updated.title == "New title"
    assert updated.status == "enriched"
    assert updated.price == pytest.approx(10.0)
    assert updated.bsr == 500
    assert updated.updated_at >= product.updated_at


def test_update_explicit_null_clears_nullable_field(db, make_product):
    product = make_product("B006", title="Has title", bsr=42)

    updated = update_product(db, product.id, ProductUpdate.model_validate({"bsr": None}))

    assert updated.bsr is None
    assert updated.title == "Has title"


def test_update_null_for_required_field_is_rejected(db, make_product):
    product = make_product("B007")
    with pytest.raises(InvalidInputError):
        update_product(db, product.id, ProductUpdate.model_validate({"status": None}))


def test_update_mark_scraped_stamps_last_scraped_at(db, make_product):
    product = make_product("B008")
    assert product.last_scraped_at is None

    updated = update_product(db, product.id, ProductUpdate(mark_scraped=True))
    assert updated.last_scraped_at is not None


def test_update_missing_product(db, seed):
    with pytest.raises(NotFoundError):
        update_product(db, 12345, ProductUpdate(title="x"))


def test_soft_delete_is_idempotent(db, make_product):
    product = make_product("B009")

    assert soft_delete_product(db, product.id) is True
    assert soft_delete_product(db, product.id) is True

    fetched = get_product(db, product.id)
    assert fetched is not None
    assert fetched.deleted is True


def test_soft_delete_missing_product(db, seed):
    assert soft_delete_product(db, 999) is False


def test_get_by_asin(db, make_product):
    product = make_product("B010", marketplace_id=2)

    assert get_product_by_asin(db, "b010", 2).id == product.id
    assert get_product_by_asin(db, "B010", 1) is None


def test_get_missing_product_returns_none(db, seed):
    assert get_product(db, 404) is None


def test_reads_fill_defaults_for_null_columns(db, make_product):
    product = make_product("B011")
    row = db.get(Product, product.id)
    row.currency_code = None
    row.source_type = None
    row.deleted = None
    db.commit()

    fetched = get_product(db, product.id)
    assert fetched.currency_code == "USD"
    assert fetched.source_type == "scraper"
    assert fetched.deleted is False


def test_product_keywords(db, make_product):
    product = make_product("B012")

    add_product_keyword(db, product.id, "  trail running ")
    add_product_keyword(db, product.id, "waterproof")

    keywords = [k.keyword for k in list_product_keywords(db, product.id)]
    assert keywords == ["trail running", "waterproof"]

    with pytest.raises(InvalidInputError):
        add_product_keyword(db, product.id, "   ")
    with pytest.raises(NotFoundError):
        add_product_keyword(db, 999, "anything")
    assert list_product_keywords(db, 999) == []
