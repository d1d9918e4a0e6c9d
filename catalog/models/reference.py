from datetime import datetime
from sqlalchemy import Column, Integer, SmallInteger, String, DateTime

from catalog.database.connection import Base


# Reference tables are owned by the admin tooling; the catalog only reads them.

class Marketplace(Base):
    __tablename__ = "marketplaces"

    id = Column(SmallInteger, primary_key=True)
    code = Column(String, unique=True, nullable=False)  # e.g. US, UK, DE
    name = Column(String, nullable=False)


class ProductType(Base):
    __tablename__ = "product_types"

    id = Column(SmallInteger, primary_key=True)
    name = Column(String, unique=True, nullable=False)


class Brand(Base):
    __tablename__ = "brands"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)
    normalized_name = Column(String, nullable=False)


class Profile(Base):
    __tablename__ = "profiles"

    user_id = Column(String(36), primary_key=True)  # UUID issued by the identity provider
    email = Column(String, nullable=True)
    full_name = Column(String, nullable=True)
    avatar_url = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
