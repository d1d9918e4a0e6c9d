from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from catalog.database.connection import get_db
from catalog.schemas.preference import (
    FavoriteGroupCreate,
    FavoriteGroupResponse,
    GroupMembershipCreate,
    GroupMembershipResponse,
    SavedProductCreate,
    SavedProductResponse,
)
from catalog.schemas.product import ProductResponse
from catalog.services.favorite_service import (
    add_product_to_group,
    create_favorite_group,
    list_favorite_groups,
    list_group_products,
    list_saved_products,
    remove_product_from_group,
    save_product,
    unsave_product,
)

router = APIRouter(tags=["Favorites"])


# ---------- FAVORITE GROUPS ----------

@router.post("/users/{user_id}/favorite-groups", response_model=FavoriteGroupResponse, status_code=201)
def create_group(user_id: str, data: FavoriteGroupCreate, db: Session = Depends(get_db)):
    return create_favorite_group(db, user_id, data.name)


@router.get("/users/{user_id}/favorite-groups", response_model=List[FavoriteGroupResponse])
def list_groups(user_id: str, db: Session = Depends(get_db)):
    return list_favorite_groups(db, user_id)


@router.post(
    "/users/{user_id}/favorite-groups/{group_id}/products",
    response_model=GroupMembershipResponse,
)
def add_group_product(
    user_id: str,
    group_id: int,
    data: GroupMembershipCreate,
    db: Session = Depends(get_db),
):
    return add_product_to_group(db, user_id, group_id, data.product_id)


@router.delete("/favorite-groups/{group_id}/products/{product_id}")
def remove_group_product(group_id: int, product_id: int, db: Session = Depends(get_db)):
    return {"removed": remove_product_from_group(db, group_id, product_id)}


@router.get("/favorite-groups/{group_id}/products", response_model=List[ProductResponse])
def get_group_products(group_id: int, db: Session = Depends(get_db)):
    return list_group_products(db, group_id)


# ---------- SAVED PRODUCTS ----------

@router.post("/users/{user_id}/saved-products", response_model=SavedProductResponse)
def save(user_id: str, data: SavedProductCreate, db: Session = Depends(get_db)):
    return save_product(db, user_id, data.product_id)


@router.get("/users/{user_id}/saved-products", response_model=List[SavedProductResponse])
def list_saved(user_id: str, db: Session = Depends(get_db)):
    return list_saved_products(db, user_id)


@router.delete("/users/{user_id}/saved-products/{product_id}")
def unsave(user_id: str, product_id: int, db: Session = Depends(get_db)):
    return {"removed": unsave_product(db, user_id, product_id)}
