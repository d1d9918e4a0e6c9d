from datetime import datetime
from sqlalchemy import Column, Integer, Float, Date, DateTime, ForeignKey, UniqueConstraint

from catalog.database.connection import Base


class DailyProductStats(Base):
    __tablename__ = "daily_product_stats"
    __table_args__ = (
        UniqueConstraint("product_id", "date", name="uq_daily_product_stats_product_date"),
    )

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(
        Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True
    )
    date = Column(Date, nullable=False, index=True)
    # NULL when the window holds no rank observation
    avg_bsr_7 = Column(Float, nullable=True)
    avg_bsr_30 = Column(Float, nullable=True)
    avg_bsr_90 = Column(Float, nullable=True)
    computed_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
