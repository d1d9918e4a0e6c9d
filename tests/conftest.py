import os

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from catalog.database.connection import Base, get_db
from catalog.models import registry  # noqa: F401
from catalog.models.reference import Brand, Marketplace, ProductType, Profile
from catalog.schemas.product import ProductCreate
from catalog.services.product_service import create_product

TEST_DB_URL = "sqlite:///:memory:"

engine = create_engine(
    TEST_DB_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

USER_ID = "7b0f5a3e-2c1d-4e8f-9a6b-1d2c3e4f5a6b"
OTHER_USER_ID = "0c9e8d7f-6a5b-4c3d-8e2f-1a0b9c8d7e6f"


@pytest.fixture()
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def seed(db):
    """Reference rows the catalog expects to exist already."""
    db.add_all([
        Marketplace(id=1, code="US", name="Amazon.com"),
        Marketplace(id=2, code="UK", name="Amazon.co.uk"),
        ProductType(id=1, name="Shoes"),
        ProductType(id=2, name="Apparel"),
        Brand(id=1, name="Nike", normalized_name="nike"),
        Brand(id=2, name="Adidas", normalized_name="adidas"),
        Brand(id=3, name="Puma", normalized_name="puma"),
        Profile(user_id=USER_ID, email="shopper@example.com", full_name="Test Shopper"),
        Profile(user_id=OTHER_USER_ID, email="other@example.com"),
    ])
    db.commit()
    return {
        "us": 1,
        "uk": 2,
        "shoes": 1,
        "apparel": 2,
        "nike": 1,
        "adidas": 2,
        "puma": 3,
        "user": USER_ID,
        "other_user": OTHER_USER_ID,
    }


@pytest.fixture()
def make_product(db, seed):
    def _make(asin, marketplace_id=1, **fields):
        return create_product(db, ProductCreate(asin=asin, marketplace_id=marketplace_id, **fields))

    return _make


@pytest.fixture()
def client(db):
    from catalog.main import app

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
