from typing import List
from sqlalchemy import or_
from sqlalchemy.orm import Session

from taskflow.core.exceptions import BadRequestError, NotFoundError
from taskflow.models.category import Category


def list_categories(db: Session, user_id: str) -> List[Category]:
    # own categories plus the global ones (user_id NULL)
    return db.query(Category).filter(
        or_(Category.user_id == user_id, Category.user_id.is_(None))
    ).order_by(Category.name).all()


def _clean_name(name: str) -> str:
    name = (name or "").strip()
    if not name:
        raise BadRequestError("Category name cannot be empty")
    return name


def create_category(db: Session, data: dict, user_id: str) -> Category:
    category = Category(
        name=_clean_name(data.get("name")),
        color=data.get("color") or "#6366f1",
        user_id=user_id,
    )
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


def get_category(db: Session, category_id: int, user_id: str) -> Category:
    category = db.query(Category).filter(
        Category.id == category_id,
        Category.user_id == user_id
    ).first()
    if not category:
        raise NotFoundError("Category not found")
    return category


def update_category(db: Session, category_id: int, data: dict, user_id: str) -> Category:
    category = get_category(db, category_id, user_id)
    if "name" in data and data["name"] is not None:
        category.name = _clean_name(data["name"])
    if data.get("color"):
        category.color = data["color"]
    db.commit()
    db.refresh(category)
    return category


def delete_category(db: Session, category_id: int, user_id: str) -> None:
    category = get_category(db, category_id, user_id)
    db.delete(category)
    db.commit()
