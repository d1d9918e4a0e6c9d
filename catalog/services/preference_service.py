import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from catalog.core.exceptions import ConflictError, InvalidInputError, NotFoundError
from catalog.models.preference import ExcludedBrand, ExcludedKeyword, FavoriteGroup
from catalog.models.reference import Brand, Profile
from catalog.schemas.preference import (
    ExcludedBrandDetail,
    ExcludedKeywordResponse,
    FavoriteGroupResponse,
    UserPreferenceResponse,
)

logger = logging.getLogger(__name__)


def require_user(db: Session, user_id: str) -> Profile:
    profile = db.get(Profile, user_id)
    if profile is None:
        raise NotFoundError(f"User {user_id} not found")
    return profile


def _clean_keyword(keyword: Optional[str]) -> str:
    keyword = (keyword or "").strip()
    if not keyword:
        raise InvalidInputError("keyword must not be blank")
    return keyword


# ---------- EXCLUDED BRANDS ----------

def exclude_brand(db: Session, user_id: str, brand_id: int) -> ExcludedBrand:
    try:
        require_user(db, user_id)
        if db.get(Brand, brand_id) is None:
            raise NotFoundError(f"Brand {brand_id} not found")
    except NotFoundError as exc:
        logger.warning(f"Brand exclusion rejected for user {user_id}: {exc.message}")
        raise

    existing = (
        db.query(ExcludedBrand)
        .filter(ExcludedBrand.user_id == user_id, ExcludedBrand.brand_id == brand_id)
        .first()
    )
    if existing:
        logger.warning(f"Brand {brand_id} already excluded for user {user_id}")
        raise ConflictError(f"Brand {brand_id} is already excluded for user {user_id}")

    row = ExcludedBrand(user_id=user_id, brand_id=brand_id)
    db.add(row)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning(f"Brand {brand_id} already excluded for user {user_id} (race)")
        raise ConflictError(f"Brand {brand_id} is already excluded for user {user_id}") from exc

    db.refresh(row)
    logger.info(f"User {user_id} excluded brand {brand_id}")
    return row


def remove_excluded_brand(db: Session, user_id: str, brand_id: int) -> bool:
    removed = (
        db.query(ExcludedBrand)
        .filter(ExcludedBrand.user_id == user_id, ExcludedBrand.brand_id == brand_id)
        .delete(synchronize_session=False)
    )
    db.commit()
    return removed > 0


def list_excluded_brands(db: Session, user_id: str) -> List[ExcludedBrandDetail]:
    rows = (
        db.query(ExcludedBrand, Brand.name)
        .join(Brand, Brand.id == ExcludedBrand.brand_id)
        .filter(ExcludedBrand.user_id == user_id)
        .order_by(ExcludedBrand.id.asc())
        .all()
    )
    return [
        ExcludedBrandDetail(
            id=row.id,
            brand_id=row.brand_id,
            brand_name=name,
            created_at=row.created_at,
        )
        for row, name in rows
    ]


# ---------- EXCLUDED KEYWORDS ----------

def exclude_keyword(db: Session, user_id: str, keyword: str) -> ExcludedKeyword:
    """Always inserts; a repeated keyword for the same user is harmless."""
    keyword = _clean_keyword(keyword)
    try:
        require_user(db, user_id)
    except NotFoundError:
        logger.warning(f"Keyword exclusion rejected, user {user_id} not found")
        raise

    row = ExcludedKeyword(user_id=user_id, keyword=keyword)
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info(f"User {user_id} excluded keyword '{keyword}'")
    return row


def remove_excluded_keyword(db: Session, user_id: str, keyword: str) -> bool:
    keyword = (keyword or "").strip()
    removed = (
        db.query(ExcludedKeyword)
        .filter(ExcludedKeyword.user_id == user_id, ExcludedKeyword.keyword == keyword)
        .delete(synchronize_session=False)
    )
    db.commit()
    return removed > 0


def list_excluded_keywords(db: Session, user_id: str) -> List[ExcludedKeyword]:
    return (
        db.query(ExcludedKeyword)
        .filter(ExcludedKeyword.user_id == user_id)
        .order_by(ExcludedKeyword.id.asc())
        .all()
    )


# ---------- AGGREGATE ----------

def get_user_preference(db: Session, user_id: str) -> UserPreferenceResponse:
    """
    Read-side composition of the user's excluded brands, excluded keywords and
    favorite groups. A user with nothing stored gets empty lists.
    """
    groups = (
        db.query(FavoriteGroup)
        .filter(FavoriteGroup.user_id == user_id)
        .order_by(FavoriteGroup.created_at.desc(), FavoriteGroup.id.desc())
        .all()
    )
    return UserPreferenceResponse(
        user_id=user_id,
        excluded_brands=list_excluded_brands(db, user_id),
        excluded_keywords=[
            ExcludedKeywordResponse.model_validate(k) for k in list_excluded_keywords(db, user_id)
        ],
        favorite_groups=[FavoriteGroupResponse.model_validate(g) for g in groups],
    )


def replace_user_preference(
    db: Session,
    user_id: str,
    excluded_brands: Optional[List[int]] = None,
    excluded_keywords: Optional[List[str]] = None,
) -> UserPreferenceResponse:
    """
    Replace the user's excluded brand and/or keyword sets in one transaction.

    A list that is given (even an empty one) replaces the stored set; None
    leaves that set untouched. Nothing is written if any check fails.
    """
    try:
        require_user(db, user_id)

        brand_ids = None
        if excluded_brands is not None:
            brand_ids = list(dict.fromkeys(excluded_brands))
            for brand_id in brand_ids:
                if db.get(Brand, brand_id) is None:
                    raise NotFoundError(f"Brand {brand_id} not found")

        keywords = None
        if excluded_keywords is not None:
            keywords = [_clean_keyword(k) for k in excluded_keywords]

        if brand_ids is not None:
            db.query(ExcludedBrand).filter(ExcludedBrand.user_id == user_id).delete(
                synchronize_session=False
            )
            db.add_all([ExcludedBrand(user_id=user_id, brand_id=b) for b in brand_ids])

        if keywords is not None:
            db.query(ExcludedKeyword).filter(ExcludedKeyword.user_id == user_id).delete(
                synchronize_session=False
            )
            db.add_all([ExcludedKeyword(user_id=user_id, keyword=k) for k in keywords])

        db.commit()
    except Exception as exc:
        db.rollback()
        logger.warning(f"Preference replace rolled back for user {user_id}: {exc}")
        raise

    logger.info(f"Replaced preferences for user {user_id}")
    return get_user_preference(db, user_id)
