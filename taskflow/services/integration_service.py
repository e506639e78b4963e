from typing import List
from sqlalchemy.orm import Session

from taskflow.core.exceptions import NotFoundError
from taskflow.models.integration import Integration


def list_integrations(db: Session, user_id: str) -> List[Integration]:
    return db.query(Integration).filter(
        Integration.user_id == user_id
    ).order_by(Integration.created_at.desc()).all()


def create_integration(db: Session, data: dict, user_id: str) -> Integration:
    integration = Integration(
        name=data["name"],
        type=data["type"],
        config=data.get("config") or {},
        is_active=data.get("is_active", True),
        user_id=user_id,
    )
    db.add(integration)
    db.commit()
    db.refresh(integration)
    return integration


def get_integration(db: Session, integration_id: str, user_id: str) -> Integration:
    integration = db.query(Integration).filter(
        Integration.id == integration_id,
        Integration.user_id == user_id
    ).first()
    if not integration:
        raise NotFoundError("Integration not found")
    return integration


def update_integration(db: Session, integration_id: str, data: dict, user_id: str) -> Integration:
    integration = get_integration(db, integration_id, user_id)
    for key, value in data.items():
        if value is not None:
            setattr(integration, key, value)
    db.commit()
    db.refresh(integration)
    return integration


def delete_integration(db: Session, integration_id: str, user_id: str) -> None:
    integration = get_integration(db, integration_id, user_id)
    db.delete(integration)
    db.commit()
