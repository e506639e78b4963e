import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskflow.core.config import settings
from taskflow.core.database import engine, Base
from taskflow.core.logging_setup import setup_logging
from taskflow.routers import (
    health, auth, profiles, tasks, categories, collaborations, assignments, comments,
    attachments, notifications, google_calendar, integrations, webhooks, goals, setup_db
)

setup_logging()
logger = logging.getLogger(__name__)

# Init DB
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="TaskFlow API",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_origin_regex=settings.CORS_ORIGIN_REGEX,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes
app.include_router(health.router, prefix="/health")
app.include_router(auth.router, prefix="/api")
app.include_router(profiles.router, prefix="/api")
app.include_router(tasks.router, prefix="/api")
app.include_router(categories.router, prefix="/api")
app.include_router(collaborations.router, prefix="/api")
app.include_router(assignments.router, prefix="/api")
app.include_router(comments.router, prefix="/api")
app.include_router(attachments.router, prefix="/api")
app.include_router(notifications.router, prefix="/api")
# before integrations so /google-calendar is not taken for an {integration_id}
app.include_router(google_calendar.router, prefix="/api")
app.include_router(integrations.router, prefix="/api")
app.include_router(webhooks.router, prefix="/api")
app.include_router(goals.router, prefix="/api")
app.include_router(setup_db.router, prefix="/api")

logger.info(f"TaskFlow API ready, CORS origins: {settings.CORS_ORIGINS}")
