import secrets
from typing import List
from sqlalchemy.orm import Session

from taskflow.core.exceptions import NotFoundError
from taskflow.models.webhook import Webhook


def list_webhooks(db: Session, user_id: str) -> List[Webhook]:
    return db.query(Webhook).filter(
        Webhook.user_id == user_id
    ).order_by(Webhook.created_at.desc()).all()


def create_webhook(db: Session, data: dict, user_id: str) -> Webhook:
    webhook = Webhook(
        url=str(data["url"]),
        events=list(data["events"]),
        # handed to the receiver once, to verify payload signatures
        secret=secrets.token_hex(32),
        is_active=data.get("is_active", True),
        user_id=user_id,
    )
    db.add(webhook)
    db.commit()
    db.refresh(webhook)
    return webhook


def get_webhook(db: Session, webhook_id: str, user_id: str) -> Webhook:
    webhook = db.query(Webhook).filter(
        Webhook.id == webhook_id,
        Webhook.user_id == user_id
    ).first()
    if not webhook:
        raise NotFoundError("Webhook not found")
    return webhook


def update_webhook(db: Session, webhook_id: str, data: dict, user_id: str) -> Webhook:
    webhook = get_webhook(db, webhook_id, user_id)
    if data.get("url") is not None:
        webhook.url = str(data["url"])
    if data.get("events") is not None:
        webhook.events = list(data["events"])
    if data.get("is_active") is not None:
        webhook.is_active = data["is_active"]
    db.commit()
    db.refresh(webhook)
    return webhook


def delete_webhook(db: Session, webhook_id: str, user_id: str) -> None:
    webhook = get_webhook(db, webhook_id, user_id)
    db.delete(webhook)
    db.commit()
