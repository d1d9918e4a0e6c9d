from datetime import datetime
from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    ForeignKey,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from catalog.database.connection import Base


class ExcludedBrand(Base):
    __tablename__ = "excluded_brands"
    __table_args__ = (
        UniqueConstraint("user_id", "brand_id", name="uq_excluded_brands_user_brand"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        String(36), ForeignKey("profiles.user_id", ondelete="CASCADE"), nullable=False, index=True
    )
    brand_id = Column(
        Integer, ForeignKey("brands.id", ondelete="CASCADE"), nullable=False
    )
    created_at = Column(DateTime, default=datetime.utcnow)


class ExcludedKeyword(Base):
    __tablename__ = "excluded_keywords"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        String(36), ForeignKey("profiles.user_id", ondelete="CASCADE"), nullable=False, index=True
    )
    keyword = Column(String, nullable=False)  # stored as typed, matched case-insensitively
    created_at = Column(DateTime, default=datetime.utcnow)


class FavoriteGroup(Base):
    __tablename__ = "favorite_groups"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        String(36), ForeignKey("profiles.user_id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    products = relationship(
        "FavoriteGroupProduct",
        back_populates="group",
        cascade="all, delete-orphan",
    )


class FavoriteGroupProduct(Base):
    __tablename__ = "user_favorite_products_groups"
    __table_args__ = (
        UniqueConstraint("group_id", "product_id", name="uq_favorite_group_product"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        String(36), ForeignKey("profiles.user_id", ondelete="CASCADE"), nullable=False
    )
    group_id = Column(
        Integer, ForeignKey("favorite_groups.id", ondelete="CASCADE"), nullable=False, index=True
    )
    product_id = Column(
        Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False
    )
    created_at = Column(DateTime, default=datetime.utcnow)

    group = relationship("FavoriteGroup", back_populates="products")


class SavedProduct(Base):
    __tablename__ = "saved_products"
    __table_args__ = (
        UniqueConstraint("user_id", "product_id", name="uq_saved_products_user_product"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        String(36), ForeignKey("profiles.user_id", ondelete="CASCADE"), nullable=False, index=True
    )
    product_id = Column(
        Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False
    )
    created_at = Column(DateTime, default=datetime.utcnow)
