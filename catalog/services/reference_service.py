from typing import List, Optional

from sqlalchemy.orm import Session

from catalog.models.reference import Brand, Marketplace, ProductType, Profile


def list_marketplaces(db: Session) -> List[Marketplace]:
    return db.query(Marketplace).order_by(Marketplace.id.asc()).all()


def list_product_types(db: Session) -> List[ProductType]:
    return db.query(ProductType).order_by(ProductType.name.asc()).all()


def list_brands(db: Session) -> List[Brand]:
    return db.query(Brand).order_by(Brand.name.asc()).all()


def get_profile(db: Session, user_id: str) -> Optional[Profile]:
    return db.get(Profile, user_id)
