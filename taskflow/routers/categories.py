from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from taskflow.core.database import get_db
from taskflow.core.deps import get_current_user
from taskflow.models.profile import Profile
from taskflow.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from taskflow.schemas.common import DataResponse, SuccessResponse
from taskflow.services import category_service

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=DataResponse[List[CategoryResponse]])
def list_categories(
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return {"data": category_service.list_categories(db, current_user.id)}


@router.post("", response_model=DataResponse[CategoryResponse], status_code=status.HTTP_201_CREATED)
def create_category(
    data: CategoryCreate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return {"data": category_service.create_category(db, data.model_dump(), current_user.id)}


@router.put("/{category_id}", response_model=DataResponse[CategoryResponse])
def update_category(
    category_id: int,
    data: CategoryUpdate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    category = category_service.update_category(db, category_id, data.model_dump(exclude_unset=True), current_user.id)
    return {"data": category}


@router.delete("/{category_id}", response_model=SuccessResponse)
def delete_category(
    category_id: int,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    category_service.delete_category(db, category_id, current_user.id)
    return {"success": True}
