from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from taskflow.core.database import get_db
from taskflow.core.deps import get_current_user
from taskflow.models.profile import Profile
from taskflow.schemas.common import DataResponse, SuccessResponse
from taskflow.schemas.integration import IntegrationCreate, IntegrationResponse, IntegrationUpdate
from taskflow.services import integration_service

router = APIRouter(prefix="/integrations", tags=["integrations"])


@router.get("", response_model=DataResponse[List[IntegrationResponse]])
def list_integrations(
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return {"data": integration_service.list_integrations(db, current_user.id)}


@router.post("", response_model=DataResponse[IntegrationResponse], status_code=status.HTTP_201_CREATED)
def create_integration(
    data: IntegrationCreate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return {"data": integration_service.create_integration(db, data.model_dump(), current_user.id)}


@router.get("/{integration_id}", response_model=DataResponse[IntegrationResponse])
def get_integration(
    integration_id: str,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return {"data": integration_service.get_integration(db, integration_id, current_user.id)}


@router.put("/{integration_id}", response_model=DataResponse[IntegrationResponse])
def update_integration(
    integration_id: str,
    data: IntegrationUpdate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    integration = integration_service.update_integration(
        db, integration_id, data.model_dump(exclude_unset=True), current_user.id
    )
    return {"data": integration}


@router.delete("/{integration_id}", response_model=SuccessResponse)
def delete_integration(
    integration_id: str,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    integration_service.delete_integration(db, integration_id, current_user.id)
    return {"success": True}
