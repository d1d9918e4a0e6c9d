from datetime import datetime
from sqlalchemy import (
    Column,
    Integer,
    SmallInteger,
    String,
    Text,
    Numeric,
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    JSON,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from catalog.database.connection import Base


class Product(Base):
    __tablename__ = "products"
    __table_args__ = (
        UniqueConstraint("asin", "marketplace_id", name="uq_products_asin_marketplace"),
    )

    id = Column(Integer, primary_key=True, index=True)
    asin = Column(String, nullable=False, index=True)
    marketplace_id = Column(SmallInteger, ForeignKey("marketplaces.id"), nullable=False, index=True)
    product_type_id = Column(SmallInteger, ForeignKey("product_types.id"), nullable=True, index=True)
    brand_id = Column(Integer, ForeignKey("brands.id"), nullable=True, index=True)

    title = Column(String, nullable=True)
    description_text = Column(Text, nullable=True)
    bullet_points = Column(JSON, nullable=True)
    images = Column(JSON, nullable=True)
    product_url = Column(String, nullable=True)
    published_at = Column(Date, nullable=True, index=True)

    price = Column(Numeric(10, 2), nullable=True, index=True)
    currency_code = Column(String, default="USD")
    rating = Column(Numeric(3, 2), nullable=True, index=True)
    reviews_count = Column(Integer, nullable=True, index=True)
    bsr = Column(Integer, nullable=True, index=True)
    bsr_30_days_avg = Column(Integer, nullable=True, index=True)

    deleted = Column(Boolean, default=False, index=True)
    status = Column(String, nullable=False, default="pending_enrichment")  # pending_enrichment / enriched / ...

    discovery_query = Column(String, nullable=True)
    source_type = Column(String, default="scraper")
    raw_data = Column(JSON, nullable=True)

    first_seen_at = Column(DateTime, default=datetime.utcnow, index=True)
    last_scraped_at = Column(DateTime, nullable=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)

    keywords = relationship(
        "ProductKeyword",
        back_populates="product",
        cascade="all, delete-orphan",
    )


class ProductKeyword(Base):
    __tablename__ = "product_keywords"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(
        Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True
    )
    keyword = Column(String, nullable=False, index=True)

    product = relationship("Product", back_populates="keywords")
