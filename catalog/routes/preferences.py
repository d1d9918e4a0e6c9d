from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from catalog.database.connection import get_db
from catalog.schemas.preference import (
    ExcludedBrandCreate,
    ExcludedBrandDetail,
    ExcludedBrandResponse,
    ExcludedKeywordCreate,
    ExcludedKeywordResponse,
    UserPreferenceReplace,
    UserPreferenceResponse,
)
from catalog.services.preference_service import (
    exclude_brand,
    exclude_keyword,
    get_user_preference,
    list_excluded_brands,
    list_excluded_keywords,
    remove_excluded_brand,
    remove_excluded_keyword,
    replace_user_preference,
)

router = APIRouter(prefix="/users/{user_id}", tags=["User Preferences"])


# ---------- AGGREGATE ----------

@router.get("/preferences", response_model=UserPreferenceResponse)
def get_preferences(user_id: str, db: Session = Depends(get_db)):
    return get_user_preference(db, user_id)


@router.put("/preferences", response_model=UserPreferenceResponse)
def replace_preferences(user_id: str, data: UserPreferenceReplace, db: Session = Depends(get_db)):
    return replace_user_preference(
        db,
        user_id,
        excluded_brands=data.excluded_brands,
        excluded_keywords=data.excluded_keywords,
    )


# ---------- EXCLUDED BRANDS ----------

@router.post("/excluded-brands", response_model=ExcludedBrandResponse, status_code=201)
def add_excluded_brand(user_id: str, data: ExcludedBrandCreate, db: Session = Depends(get_db)):
    return exclude_brand(db, user_id, data.brand_id)


@router.get("/excluded-brands", response_model=List[ExcludedBrandDetail])
def get_excluded_brands(user_id: str, db: Session = Depends(get_db)):
    return list_excluded_brands(db, user_id)


@router.delete("/excluded-brands/{brand_id}")
def delete_excluded_brand(user_id: str, brand_id: int, db: Session = Depends(get_db)):
    return {"removed": remove_excluded_brand(db, user_id, brand_id)}


# ---------- EXCLUDED KEYWORDS ----------

@router.post("/excluded-keywords", response_model=ExcludedKeywordResponse, status_code=201)
def add_excluded_keyword(user_id: str, data: ExcludedKeywordCreate, db: Session = Depends(get_db)):
    return exclude_keyword(db, user_id, data.keyword)


@router.get("/excluded-keywords", response_model=List[ExcludedKeywordResponse])
def get_excluded_keywords(user_id: str, db: Session = Depends(get_db)):
    return list_excluded_keywords(db, user_id)


@router.delete("/excluded-keywords/{keyword}")
def delete_excluded_keyword(user_id: str, keyword: str, db: Session = Depends(get_db)):
    return {"removed": remove_excluded_keyword(db, user_id, keyword)}
