import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from catalog.core.exceptions import ConflictError, InvalidInputError, NotFoundError
from catalog.core.utils import utc_now
from catalog.enums.product_status import ProductStatus
from catalog.core.config import settings
from catalog.models.product import Product, ProductKeyword
from catalog.models.reference import Brand, Marketplace, ProductType
from catalog.schemas.product import ProductCreate, ProductResponse, ProductUpdate

logger = logging.getLogger(__name__)

# columns that must never be cleared by an explicit null in an update
NON_NULLABLE_FIELDS = ("status", "currency_code", "source_type")

TWO_PLACES = Decimal("0.01")


def quantize(value):
    if value is None:
        return None
    return Decimal(str(value)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def to_response(product: Product) -> ProductResponse:
    return ProductResponse.model_validate(product)


def get_product_row(db: Session, product_id: int) -> Optional[Product]:
    return db.query(Product).filter(Product.id == product_id).first()


def _check_references(db: Session, marketplace_id=None, product_type_id=None, brand_id=None):
    if marketplace_id is not None and db.get(Marketplace, marketplace_id) is None:
        raise NotFoundError(f"Marketplace {marketplace_id} not found")
    if product_type_id is not None and db.get(ProductType, product_type_id) is None:
        raise NotFoundError(f"Product type {product_type_id} not found")
    if brand_id is not None and db.get(Brand, brand_id) is None:
        raise NotFoundError(f"Brand {brand_id} not found")


# --------------------------
# CREATE PRODUCT
# --------------------------
def create_product(db: Session, data: ProductCreate) -> ProductResponse:
    try:
        _check_references(db, data.marketplace_id, data.product_type_id, data.brand_id)
    except NotFoundError as exc:
        logger.warning(f"Rejected product {data.asin}/{data.marketplace_id}: {exc.message}")
        raise

    existing = (
        db.query(Product.id)
        .filter(Product.asin == data.asin, Product.marketplace_id == data.marketplace_id)
        .first()
    )
    if existing:
        logger.warning(f"Duplicate product {data.asin} in marketplace {data.marketplace_id}")
        raise ConflictError(
            f"Product {data.asin} already exists in marketplace {data.marketplace_id}"
        )

    values = data.model_dump()
    values["price"] = quantize(values.get("price"))
    values["rating"] = quantize(values.get("rating"))
    values["currency_code"] = values.get("currency_code") or settings.DEFAULT_CURRENCY
    values["source_type"] = values.get("source_type") or settings.DEFAULT_SOURCE_TYPE

    now = utc_now()
    product = Product(
        **values,
        status=ProductStatus.pending_enrichment.value,
        deleted=False,
        first_seen_at=now,
        created_at=now,
        updated_at=now,
    )
    db.add(product)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning(f"Duplicate product {data.asin} in marketplace {data.marketplace_id} (race)")
        raise ConflictError(
            f"Product {data.asin} already exists in marketplace {data.marketplace_id}"
        ) from exc

    db.refresh(product)
    logger.info(f"Created product {product.id} ({product.asin}/{product.marketplace_id})")
    return to_response(product)


# --------------------------
# GET PRODUCT
# --------------------------
def get_product(db: Session, product_id: int) -> Optional[ProductResponse]:
    """Direct lookup; soft-deleted products are returned as well."""
    product = get_product_row(db, product_id)
    return to_response(product) if product else None


def get_product_by_asin(db: Session, asin: str, marketplace_id: int) -> Optional[ProductResponse]:
    product = (
        db.query(Product)
        .filter(Product.asin == asin.strip().upper(), Product.marketplace_id == marketplace_id)
        .first()
    )
    return to_response(product) if product else None


# --------------------------
# UPDATE PRODUCT
# --------------------------
def update_product(db: Session, product_id: int, data: ProductUpdate) -> ProductResponse:
    product = get_product_row(db, product_id)
    if not product:
        logger.warning(f"Update rejected, product {product_id} not found")
        raise NotFoundError(f"Product {product_id} not found")

    changes = data.model_dump(exclude_unset=True)
    mark_scraped = changes.pop("mark_scraped", False)

    for key in NON_NULLABLE_FIELDS:
        if key in changes and changes[key] is None:
            raise InvalidInputError(f"{key} cannot be null")

    _check_references(
        db,
        product_type_id=changes.get("product_type_id"),
        brand_id=changes.get("brand_id"),
    )

    if "price" in changes:
        changes["price"] = quantize(changes["price"])
    if "rating" in changes:
        changes["rating"] = quantize(changes["rating"])

    for key, value in changes.items():
        if hasattr(product, key):
            setattr(product, key, value)

    now = utc_now()
    product.updated_at = now
    if mark_scraped:
        product.last_scraped_at = now

    db.commit()
    db.refresh(product)
    logger.info(f"Updated product {product_id}: {sorted(changes)}")
    return to_response(product)


# --------------------------
# SOFT DELETE PRODUCT
# --------------------------
def soft_delete_product(db: Session, product_id: int) -> bool:
    product = get_product_row(db, product_id)
    if not product:
        logger.warning(f"Soft delete rejected, product {product_id} not found")
        return False

    product.deleted = True
    product.updated_at = utc_now()
    db.commit()
    logger.info(f"Soft-deleted product {product_id}")
    return True


# --------------------------
# KEYWORDS
# --------------------------
def add_product_keyword(db: Session, product_id: int, keyword: str) -> ProductKeyword:
    keyword = (keyword or "").strip()
    if not keyword:
        raise InvalidInputError("keyword must not be blank")

    if not get_product_row(db, product_id):
        logger.warning(f"Keyword rejected, product {product_id} not found")
        raise NotFoundError(f"Product {product_id} not found")

    row = ProductKeyword(product_id=product_id, keyword=keyword)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def list_product_keywords(db: Session, product_id: int) -> List[ProductKeyword]:
    return (
        db.query(ProductKeyword)
        .filter(ProductKeyword.product_id == product_id)
        .order_by(ProductKeyword.id.asc())
        .all()
    )
