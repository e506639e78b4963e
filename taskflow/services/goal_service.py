import logging
from typing import List
from sqlalchemy.orm import Session

from taskflow.core.exceptions import BadRequestError, NotFoundError
from taskflow.models.goal import Goal

logger = logging.getLogger(__name__)

# columns that cannot be cleared; a null in an update leaves them alone
REQUIRED_FIELDS = ("title", "target", "completed", "category", "type")


def list_goals(db: Session, user_id: str) -> List[Goal]:
    return db.query(Goal).filter(
        Goal.user_id == user_id
    ).order_by(Goal.created_at.desc(), Goal.id.desc()).all()


def create_goal(db: Session, data: dict, user_id: str) -> Goal:
    goal = Goal(user_id=user_id, **data)
    db.add(goal)
    db.commit()
    db.refresh(goal)
    logger.info(f"Goal {goal.id} created for {user_id}")
    return goal


def get_goal(db: Session, goal_id: int, user_id: str) -> Goal:
    goal = db.query(Goal).filter(
        Goal.id == goal_id,
        Goal.user_id == user_id
    ).first()
    if not goal:
        raise NotFoundError("Goal not found")
    return goal


def update_goal(db: Session, goal_id: int, data: dict, user_id: str) -> Goal:
    goal = get_goal(db, goal_id, user_id)
    data = {key: value for key, value in data.items() if value is not None or key not in REQUIRED_FIELDS}

    start_date = data.get("start_date", goal.start_date)
    end_date = data.get("end_date", goal.end_date)
    if start_date and end_date and end_date < start_date:
        raise BadRequestError("end_date must not be before start_date")

    for field, value in data.items():
        setattr(goal, field, value)
    db.commit()
    db.refresh(goal)
    return goal


def delete_goal(db: Session, goal_id: int, user_id: str) -> None:
    goal = get_goal(db, goal_id, user_id)
    db.delete(goal)
    db.commit()
