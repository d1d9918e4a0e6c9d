import logging
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from catalog.core.exceptions import InvalidInputError, NotFoundError
from catalog.models.preference import FavoriteGroup, FavoriteGroupProduct, SavedProduct
from catalog.models.product import Product
from catalog.schemas.product import ProductResponse
from catalog.services.preference_service import require_user
from catalog.services.product_service import get_product_row

logger = logging.getLogger(__name__)


# ---------- FAVORITE GROUPS ----------

def create_favorite_group(db: Session, user_id: str, name: str) -> FavoriteGroup:
    name = (name or "").strip()
    if not name:
        raise InvalidInputError("group name must not be blank")
    try:
        require_user(db, user_id)
    except NotFoundError:
        logger.warning(f"Favorite group rejected, user {user_id} not found")
        raise

    group = FavoriteGroup(user_id=user_id, name=name)
    db.add(group)
    db.commit()
    db.refresh(group)
    logger.info(f"User {user_id} created favorite group {group.id}")
    return group


def list_favorite_groups(db: Session, user_id: str) -> List[FavoriteGroup]:
    return (
        db.query(FavoriteGroup)
        .filter(FavoriteGroup.user_id == user_id)
        .order_by(FavoriteGroup.created_at.desc(), FavoriteGroup.id.desc())
        .all()
    )


def _find_membership(db: Session, group_id: int, product_id: int):
    return (
        db.query(FavoriteGroupProduct)
        .filter(
            FavoriteGroupProduct.group_id == group_id,
            FavoriteGroupProduct.product_id == product_id,
        )
        .first()
    )


def add_product_to_group(db: Session, user_id: str, group_id: int, product_id: int) -> FavoriteGroupProduct:
    """Idempotent: an existing (group, product) membership is returned unchanged."""
    group = (
        db.query(FavoriteGroup)
        .filter(FavoriteGroup.id == group_id, FavoriteGroup.user_id == user_id)
        .first()
    )
    if not group:
        logger.warning(f"Group {group_id} not found for user {user_id}")
        raise NotFoundError(f"Favorite group {group_id} not found for user {user_id}")

    if not get_product_row(db, product_id):
        logger.warning(f"Group membership rejected, product {product_id} not found")
        raise NotFoundError(f"Product {product_id} not found")

    existing = _find_membership(db, group_id, product_id)
    if existing:
        return existing

    membership = FavoriteGroupProduct(user_id=user_id, group_id=group_id, product_id=product_id)
    db.add(membership)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        existing = _find_membership(db, group_id, product_id)
        if existing is None:
            raise
        logger.warning(f"Product {product_id} was added to group {group_id} concurrently")
        return existing

    db.refresh(membership)
    return membership


def remove_product_from_group(db: Session, group_id: int, product_id: int) -> bool:
    removed = (
        db.query(FavoriteGroupProduct)
        .filter(
            FavoriteGroupProduct.group_id == group_id,
            FavoriteGroupProduct.product_id == product_id,
        )
        .delete(synchronize_session=False)
    )
    db.commit()
    return removed > 0


def list_group_products(db: Session, group_id: int) -> List[ProductResponse]:
    rows = (
        db.query(Product)
        .join(FavoriteGroupProduct, FavoriteGroupProduct.product_id == Product.id)
        .filter(FavoriteGroupProduct.group_id == group_id)
        .order_by(FavoriteGroupProduct.created_at.desc(), FavoriteGroupProduct.id.desc())
        .all()
    )
    return [ProductResponse.model_validate(row) for row in rows]


# ---------- SAVED PRODUCTS ----------

def _find_saved(db: Session, user_id: str, product_id: int):
    return (
        db.query(SavedProduct)
        .filter(SavedProduct.user_id == user_id, SavedProduct.product_id == product_id)
        .first()
    )


def save_product(db: Session, user_id: str, product_id: int) -> SavedProduct:
    try:
        require_user(db, user_id)
        if not get_product_row(db, product_id):
            raise NotFoundError(f"Product {product_id} not found")
    except NotFoundError as exc:
        logger.warning(f"Save rejected for user {user_id}: {exc.message}")
        raise

    existing = _find_saved(db, user_id, product_id)
    if existing:
        return existing

    saved = SavedProduct(user_id=user_id, product_id=product_id)
    db.add(saved)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        existing = _find_saved(db, user_id, product_id)
        if existing is None:
            raise
        logger.warning(f"Product {product_id} was saved by user {user_id} concurrently")
        return existing

    db.refresh(saved)
    return saved


def unsave_product(db: Session, user_id: str, product_id: int) -> bool:
    removed = (
        db.query(SavedProduct)
        .filter(SavedProduct.user_id == user_id, SavedProduct.product_id == product_id)
        .delete(synchronize_session=False)
    )
    db.commit()
    return removed > 0


def list_saved_products(db: Session, user_id: str) -> List[SavedProduct]:
    return (
        db.query(SavedProduct)
        .filter(SavedProduct.user_id == user_id)
        .order_by(SavedProduct.created_at.desc(), SavedProduct.id.desc())
        .all()
    )
