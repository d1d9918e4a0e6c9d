from enum import Enum

class ProductSortField(str, Enum):
    id = "id"
    price = "price"
    bsr = "bsr"
    rating = "rating"
    reviews_count = "reviews_count"
    first_seen_at = "first_seen_at"
    published_at = "published_at"


class SortOrder(str, Enum):
    asc = "asc"
    desc = "desc"
