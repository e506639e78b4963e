import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from taskflow.core.database import Base, engine, get_db
from taskflow.services.task_service import migrate_legacy_statuses

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/setup", tags=["setup"])


@router.post("/init-db")
def init_db(db: Session = Depends(get_db)):
    """Create missing tables and move legacy status tags into `status`"""
    Base.metadata.create_all(bind=engine)
    migrated = migrate_legacy_statuses(db)
    logger.info(f"Database initialized, {migrated} task(s) migrated")
    return {"success": True, "message": "Database initialized", "migrated": migrated}
