# Import every model module so Base.metadata knows all tables
# (create_all in main/tests and Alembic autogenerate rely on it).
from catalog.models.reference import Marketplace, ProductType, Brand, Profile  # noqa: F401
from catalog.models.product import Product, ProductKeyword  # noqa: F401
from catalog.models.history import BsrHistory, PriceHistory, ReviewHistory  # noqa: F401
from catalog.models.daily_stats import DailyProductStats  # noqa: F401
from catalog.models.preference import (  # noqa: F401
    ExcludedBrand,
    ExcludedKeyword,
    FavoriteGroup,
    FavoriteGroupProduct,
    SavedProduct,
)
