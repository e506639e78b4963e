"""
Google Calendar connection and synchronization, one connection per profile.

Connection state: disconnected -> authenticating -> connected, and
connected <-> syncing while a sync runs. Disconnecting forgets the tokens and
the import/export bookkeeping.

Imported events become tasks in the `imported` category; their event ids are
remembered so the same event is never imported twice. Exported tasks are
remembered by task id for the same reason. The `conflict_resolution` setting
is stored but no sync step compares local and remote edits yet, so
`conflicts` is always 0.
"""

import logging
from datetime import timedelta
from typing import Callable, List

from sqlalchemy.orm import Session

from taskflow.core.exceptions import BadRequestError
from taskflow.models.integration import CalendarConnection
from taskflow.models.task import Task
from taskflow.schemas.integration import SyncSettingsUpdate
from taskflow.services.google_calendar_client import (
    GoogleCalendarClient,
    GoogleCalendarError,
    parse_event_start,
    task_to_event,
)
from taskflow.utils.time import utc_now

logger = logging.getLogger(__name__)

ClientFactory = Callable[..., GoogleCalendarClient]

IMPORTED_CATEGORY = "imported"
WINDOW_BACK = timedelta(days=30)
WINDOW_AHEAD = timedelta(days=365)


def get_connection(db: Session, user_id: str) -> CalendarConnection:
    connection = db.query(CalendarConnection).filter(CalendarConnection.user_id == user_id).first()
    if not connection:
        connection = CalendarConnection(user_id=user_id, state="disconnected", calendars=[],
                                        imported_event_ids=[], exported_events={})
        db.add(connection)
        db.commit()
        db.refresh(connection)
    return connection


def client_for(connection: CalendarConnection, client_factory: ClientFactory) -> GoogleCalendarClient:
    def store_tokens(access_token, refresh_token):
        connection.access_token = access_token
        connection.refresh_token = refresh_token

    return client_factory(
        access_token=connection.access_token,
        refresh_token=connection.refresh_token,
        on_tokens=store_tokens,
    )


def connection_status(db: Session, user_id: str) -> dict:
    connection = get_connection(db, user_id)
    return {
        "state": connection.state,
        "connected": connection.state in ("connected", "syncing"),
        "last_sync_at": connection.last_sync_at,
    }


def authorization_url(db: Session, user_id: str, client_factory: ClientFactory) -> str:
    connection = get_connection(db, user_id)
    connection.state = "authenticating"
    db.commit()
    return client_factory().authorization_url(state=user_id)


def complete_authentication(db: Session, user_id: str, code: str, client_factory: ClientFactory) -> bool:
    connection = get_connection(db, user_id)
    client = client_factory()
    try:
        client.exchange_code(code)
    except GoogleCalendarError as e:
        logger.error(f"Google Calendar authentication failed for {user_id}: {e}")
        connection.state = "disconnected"
        db.commit()
        return False

    connection.access_token = client.access_token
    connection.refresh_token = client.refresh_token
    connection.state = "connected"
    db.commit()
    logger.info(f"Google Calendar connected for {user_id}")
    return True


def get_settings(db: Session, user_id: str) -> CalendarConnection:
    return get_connection(db, user_id)


def update_settings(db: Session, user_id: str, data: SyncSettingsUpdate) -> CalendarConnection:
    connection = get_connection(db, user_id)
    for key, value in data.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(connection, key, list(value) if key == "calendars" else value)
    db.commit()
    db.refresh(connection)
    return connection


def list_calendars(db: Session, user_id: str, client_factory: ClientFactory) -> List[dict]:
    connection = get_connection(db, user_id)
    if connection.state not in ("connected", "syncing"):
        raise BadRequestError("Not connected to Google Calendar")
    try:
        calendars = client_for(connection, client_factory).get_calendar_list()
    except GoogleCalendarError as e:
        logger.error(f"Failed to get calendar list for {user_id}: {e}")
        raise
    finally:
        # persists a token refreshed during the call
        db.commit()
    return calendars


def _import_events(db: Session, connection: CalendarConnection, events: List[dict]) -> int:
    known = set(connection.imported_event_ids or [])
    exported = set((connection.exported_events or {}).values())
    imported = 0

    for event in events:
        event_id = event.get("id")
        if not event_id or event_id in known or event_id in exported:
            continue
        completed = event.get("status") == "cancelled"
        db.add(Task(
            user_id=connection.user_id,
            title=event.get("summary") or "(untitled)",
            description=event.get("description") or "",
            due_date=parse_event_start(event),
            priority="medium",
            category=IMPORTED_CATEGORY,
            completed=completed,
            status="completed" if completed else "pending",
            tags=[],
        ))
        known.add(event_id)
        imported += 1

    # JSON columns only persist on reassignment
    connection.imported_event_ids = sorted(known)
    return imported


def _export_tasks(db: Session, connection: CalendarConnection, client: GoogleCalendarClient,
                  calendar_id: str, time_min, time_max) -> int:
    exported_events = dict(connection.exported_events or {})
    tasks = db.query(Task).filter(
        Task.user_id == connection.user_id,
        Task.due_date.isnot(None),
        Task.due_date >= time_min,
        Task.due_date <= time_max
    ).order_by(Task.due_date).all()

    exported = 0
    try:
        for task in tasks:
            if str(task.id) in exported_events or task.category == IMPORTED_CATEGORY:
                continue
            event = client.create_event(calendar_id, task_to_event(task))
            exported_events[str(task.id)] = event.get("id")
            exported += 1
    finally:
        connection.exported_events = exported_events
    return exported


def _failed(error: str) -> dict:
    return {"success": False, "imported": 0, "exported": 0, "conflicts": 0, "errors": [error]}


def perform_sync(db: Session, connection: CalendarConnection, client: GoogleCalendarClient, now=None) -> dict:
    if not connection.enabled:
        return _failed("Sync is disabled")
    # only a connected account may enter "syncing"
    if connection.state != "connected":
        return _failed("Not connected to Google Calendar")

    result = {"success": True, "imported": 0, "exported": 0, "conflicts": 0, "errors": []}
    now = now or utc_now()
    time_min, time_max = now - WINDOW_BACK, now + WINDOW_AHEAD

    connection.state = "syncing"
    db.commit()

    try:
        for calendar_id in connection.calendars or []:
            try:
                if connection.sync_direction in ("import", "bidirectional"):
                    events = client.get_events(calendar_id, time_min, time_max)
                    result["imported"] += _import_events(db, connection, events)
                if connection.sync_direction in ("export", "bidirectional"):
                    result["exported"] += _export_tasks(db, connection, client, calendar_id, time_min, time_max)
            except GoogleCalendarError as e:
                logger.warning(f"Failed to sync calendar {calendar_id} for {connection.user_id}: {e}")
                result["errors"].append(f"Failed to sync calendar {calendar_id}: {e}")
                result["success"] = False
    finally:
        connection.state = "connected"
        connection.last_sync_at = now
        db.commit()

    logger.info(
        f"Calendar sync for {connection.user_id}: imported={result['imported']} "
        f"exported={result['exported']} errors={len(result['errors'])}"
    )
    return result


def sync_user(db: Session, user_id: str, client_factory: ClientFactory) -> dict:
    connection = get_connection(db, user_id)
    return perform_sync(db, connection, client_for(connection, client_factory))


def run_due_syncs(db: Session, client_factory: ClientFactory, now=None) -> int:
    """Sync every enabled connection whose interval has elapsed. Returns how many ran."""
    now = now or utc_now()
    connections = db.query(CalendarConnection).filter(
        CalendarConnection.enabled == True,
        CalendarConnection.state == "connected"
    ).all()

    ran = 0
    for connection in connections:
        if connection.last_sync_at and connection.last_sync_at + timedelta(minutes=connection.sync_frequency) > now:
            continue
        perform_sync(db, connection, client_for(connection, client_factory), now=now)
        ran += 1
    return ran


def disconnect(db: Session, user_id: str) -> None:
    connection = get_connection(db, user_id)
    connection.state = "disconnected"
    connection.access_token = None
    connection.refresh_token = None
    connection.enabled = False
    connection.imported_event_ids = []
    connection.exported_events = {}
    connection.last_sync_at = None
    db.commit()
    logger.info(f"Google Calendar disconnected for {user_id}")
