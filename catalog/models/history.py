from sqlalchemy import Column, Integer, String, Numeric, Date, ForeignKey, Index

from catalog.database.connection import Base


# Append-only observation logs. Several rows per product per day are allowed.

class BsrHistory(Base):
    __tablename__ = "bsr_history"
    __table_args__ = (
        Index("idx_bsr_history_product_date", "product_id", "date"),
    )

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(
        Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False
    )
    date = Column(Date, nullable=False)
    bsr = Column(Integer, nullable=True)


class PriceHistory(Base):
    __tablename__ = "price_history"
    __table_args__ = (
        Index("idx_price_history_product_date", "product_id", "date"),
    )

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(
        Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False
    )
    date = Column(Date, nullable=False)
    price = Column(Numeric(10, 2), nullable=True)
    currency_code = Column(String, nullable=False)


class ReviewHistory(Base):
    __tablename__ = "review_history"
    __table_args__ = (
        Index("idx_review_history_product_date", "product_id", "date"),
    )

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(
        Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False
    )
    date = Column(Date, nullable=False)
    rating = Column(Numeric(3, 2), nullable=True)
    reviews_count = Column(Integer, nullable=True)
