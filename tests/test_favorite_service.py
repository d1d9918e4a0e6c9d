import pytest

from catalog.core.exceptions import InvalidInputError, NotFoundError
from catalog.models.preference import FavoriteGroupProduct
from catalog.services import favorite_service
from catalog.services.favorite_service import (
    add_product_to_group,
    create_favorite_group,
    list_favorite_groups,
    list_group_products,
    list_saved_products,
    remove_product_from_group,
    save_product,
    unsave_product,
)
from catalog.services.product_service import soft_delete_product


def test_create_and_list_groups(db, seed):
    first = create_favorite_group(db, seed["user"], "Running")
    second = create_favorite_group(db, seed["user"], " Gifts ")
    create_favorite_group(db, seed["other_user"], "Not mine")

    groups = list_favorite_groups(db, seed["user"])
    assert [g.id for g in groups] == [second.id, first.id]
    assert groups[0].name == "Gifts"


def test_create_group_validation(db, seed):
    with pytest.raises(InvalidInputError):
        create_favorite_group(db, seed["user"], "  ")
    with pytest.raises(NotFoundError):
        create_favorite_group(db, "ghost-user", "Anything")


def test_add_product_twice_returns_same_membership(db, seed, make_product):
    group = create_favorite_group(db, seed["user"], "Shoes")
    product = make_product("F001")

    first = add_product_to_group(db, seed["user"], group.id, product.id)
    second = add_product_to_group(db, seed["user"], group.id, product.id)

    assert first.id == second.id
    assert db.query(FavoriteGroupProduct).filter(FavoriteGroupProduct.group_id == group.id).count() == 1


def test_add_product_to_group_of_another_user(db, seed, make_product):
    group = create_favorite_group(db, seed["other_user"], "Theirs")
    product = make_product("F002")

    with pytest.raises(NotFoundError):
        add_product_to_group(db, seed["user"], group.id, product.id)


def test_add_missing_product_or_group(db, seed, make_product):
    group = create_favorite_group(db, seed["user"], "Mine")
    product = make_product("F003")

    with pytest.raises(NotFoundError):
        add_product_to_group(db, seed["user"], group.id, 999)
    with pytest.raises(NotFoundError):
        add_product_to_group(db, seed["user"], 999, product.id)


def test_remove_product_from_group(db, seed, make_product):
    group = create_favorite_group(db, seed["user"], "Mine")
    product = make_product("F004")
    add_product_to_group(db, seed["user"], group.id, product.id)

    assert remove_product_from_group(db, group.id, product.id) is True
    assert remove_product_from_group(db, group.id, product.id) is False
    assert list_group_products(db, group.id) == []


def test_group_products_most_recent_first(db, seed, make_product):
    group = create_favorite_group(db, seed["user"], "Ordered")
    older = make_product("F005")
    newer = make_product("F006")
    add_product_to_group(db, seed["user"], group.id, older.id)
    add_product_to_group(db, seed["user"], group.id, newer.id)

    products = list_group_products(db, group.id)
    assert [p.asin for p in products] == ["F006", "F005"]


def test_group_listing_keeps_soft_deleted_members(db, seed, make_product):
    group = create_favorite_group(db, seed["user"], "Archive")
    product = make_product("F007")
    add_product_to_group(db, seed["user"], group.id, product.id)
    soft_delete_product(db, product.id)

    products = list_group_products(db, group.id)
    assert len(products) == 1
    assert products[0].deleted is True


def test_unknown_group_lists_nothing(db, seed):
    assert list_group_products(db, 4242) == []


def test_saved_products(db, seed, make_product):
    product = make_product("F008")

    first = save_product(db, seed["user"], product.id)
    again = save_product(db, seed["user"], product.id)
    assert first.id == again.id
    assert [s.product_id for s in list_saved_products(db, seed["user"])] == [product.id]

    assert unsave_product(db, seed["user"], product.id) is True
    assert unsave_product(db, seed["user"], product.id) is False
    assert list_saved_products(db, seed["user"]) == []

    with pytest.raises(NotFoundError):
        save_product(db, seed["user"], 999)


def _miss_first_lookup(monkeypatch, name):
    """The first duplicate check finds nothing, as if another request inserted in between."""
    real = getattr(favorite_service, name)
    calls = []

    def lookup(*args):
        calls.append(args)
        return None if len(calls) == 1 else real(*args)

    monkeypatch.setattr(favorite_service, name, lookup)
    return calls


def test_concurrent_group_add_returns_existing_membership(db, seed, make_product, monkeypatch):
    group = create_favorite_group(db, seed["user"], "Race")
    product = make_product("F009")
    first = add_product_to_group(db, seed["user"], group.id, product.id)

    calls = _miss_first_lookup(monkeypatch, "_find_membership")
    second = add_product_to_group(db, seed["user"], group.id, product.id)

    assert len(calls) == 2
    assert second.id == first.id
    assert db.query(FavoriteGroupProduct).filter(FavoriteGroupProduct.group_id == group.id).count() == 1


def test_concurrent_save_returns_existing_row(db, seed, make_product, monkeypatch):
    product = make_product("F010")
    first = save_product(db, seed["user"], product.id)

    calls = _miss_first_lookup(monkeypatch, "_find_saved")
    again = save_product(db, seed["user"], product.id)

    assert len(calls) == 2
    assert again.id == first.id
    assert len(list_saved_products(db, seed["user"])) == 1
