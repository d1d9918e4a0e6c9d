from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel


class DailyProductStatsResponse(BaseModel):
    id: int
    product_id: int
    date: date
    avg_bsr_7: Optional[float] = None
    avg_bsr_30: Optional[float] = None
    avg_bsr_90: Optional[float] = None
    computed_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ComputeDailyStatsRequest(BaseModel):
    target_date: Optional[date] = None


class RefreshDailyStatsResponse(BaseModel):
    target_date: date
    rows_written: int
