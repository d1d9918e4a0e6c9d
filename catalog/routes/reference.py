from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from catalog.database.connection import get_db
from catalog.schemas.reference import BrandResponse, MarketplaceResponse, ProductTypeResponse, ProfileResponse
from catalog.services.reference_service import get_profile, list_brands, list_marketplaces, list_product_types

router = APIRouter(tags=["Reference Data"])


@router.get("/marketplaces", response_model=List[MarketplaceResponse])
def marketplaces(db: Session = Depends(get_db)):
    return list_marketplaces(db)


@router.get("/product-types", response_model=List[ProductTypeResponse])
def product_types(db: Session = Depends(get_db)):
    return list_product_types(db)


@router.get("/brands", response_model=List[BrandResponse])
def brands(db: Session = Depends(get_db)):
    return list_brands(db)


@router.get("/users/{user_id}/profile", response_model=ProfileResponse)
def profile(user_id: str, db: Session = Depends(get_db)):
    found = get_profile(db, user_id)
    if not found:
        raise HTTPException(404, "User not found")
    return found
