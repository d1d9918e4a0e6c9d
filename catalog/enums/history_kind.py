from enum import Enum

class HistoryKind(str, Enum):
    bsr = "bsr"
    price = "price"
    review = "review"
