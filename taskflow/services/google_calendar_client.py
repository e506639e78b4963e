"""
Google Calendar client - OAuth2 token endpoint + Calendar v3 REST API.

Tokens are held by the server (CalendarConnection row). The client refreshes
the access token once on a 401 and retries the failed request once; that
is the only automatic retry. Refreshed tokens are handed to `on_tokens` so
the caller can persist them.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional
from urllib.parse import quote, urlencode

import requests

from taskflow.core.config import settings

logger = logging.getLogger(__name__)

AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
TOKEN_URL = "https://oauth2.googleapis.com/token"
API_URL = "https://www.googleapis.com/calendar/v3"
SCOPE = "https://www.googleapis.com/auth/calendar"
REQUEST_TIMEOUT = 30


class GoogleCalendarError(Exception):
    pass


def _rfc3339(value: datetime) -> str:
    # naive datetimes are UTC throughout the app
    return value.replace(microsecond=0).isoformat() + "Z" if value.tzinfo is None else value.isoformat()


class GoogleCalendarClient:
    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        access_token: Optional[str] = None,
        refresh_token: Optional[str] = None,
        on_tokens: Optional[Callable[[str, Optional[str]], None]] = None,
        session: requests.Session = None,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.access_token = access_token
        self.refresh_token = refresh_token
        self.on_tokens = on_tokens
        self.session = session or requests.Session()

    # ---- OAuth ----

    def authorization_url(self, state: str = None) -> str:
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "scope": SCOPE,
            "response_type": "code",
            "access_type": "offline",
            "prompt": "consent",
        }
        if state:
            params["state"] = state
        return f"{AUTH_URL}?{urlencode(params)}"

    def exchange_code(self, code: str) -> dict:
        try:
            response = self.session.post(TOKEN_URL, data={
                "code": code,
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "redirect_uri": self.redirect_uri,
                "grant_type": "authorization_code",
            }, timeout=REQUEST_TIMEOUT)
        except requests.RequestException as e:
            raise GoogleCalendarError(f"Failed to exchange code for tokens: {e}") from e

        if response.status_code != 200:
            raise GoogleCalendarError(f"Failed to exchange code for tokens: {response.status_code}")

        data = response.json()
        self.access_token = data.get("access_token")
        self.refresh_token = data.get("refresh_token") or self.refresh_token
        if not self.access_token:
            raise GoogleCalendarError("Token response without access_token")
        return data

    def refresh_access_token(self) -> bool:
        if not self.refresh_token:
            return False

        try:
            response = self.session.post(TOKEN_URL, data={
                "refresh_token": self.refresh_token,
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "grant_type": "refresh_token",
            }, timeout=REQUEST_TIMEOUT)
        except requests.RequestException as e:
            logger.warning(f"Failed to refresh token: {e}")
            return False

        if response.status_code != 200:
            logger.warning(f"Failed to refresh token: {response.status_code}")
            return False

        access_token = response.json().get("access_token")
        if not access_token:
            return False
        self.access_token = access_token
        if self.on_tokens:
            self.on_tokens(self.access_token, self.refresh_token)
        return True

    # ---- API ----

    def _request(self, method: str, url: str, **kwargs):
        if not self.access_token:
            raise GoogleCalendarError("Not authenticated with Google Calendar")

        def send():
            headers = {"Authorization": f"Bearer {self.access_token}", "Content-Type": "application/json"}
            return self.session.request(method, url, headers=headers, timeout=REQUEST_TIMEOUT, **kwargs)

        try:
            response = send()
            if response.status_code == 401 and self.refresh_access_token():
                response = send()
        except requests.RequestException as e:
            raise GoogleCalendarError(f"Google Calendar API error: {e}") from e

        if response.status_code >= 400:
            raise GoogleCalendarError(f"Google Calendar API error: {response.status_code} {response.reason}")
        if response.status_code == 204 or not response.content:
            return {}
        return response.json()

    def get_calendar_list(self) -> List[dict]:
        return self._request("GET", f"{API_URL}/users/me/calendarList").get("items", [])

    def get_events(self, calendar_id: str = "primary", time_min: datetime = None,
                   time_max: datetime = None) -> List[dict]:
        params = {"singleEvents": "true", "orderBy": "startTime"}
        if time_min:
            params["timeMin"] = _rfc3339(time_min)
        if time_max:
            params["timeMax"] = _rfc3339(time_max)
        url = f"{API_URL}/calendars/{quote(calendar_id, safe='')}/events"
        return self._request("GET", url, params=params).get("items", [])

    def create_event(self, calendar_id: str, event: dict) -> dict:
        url = f"{API_URL}/calendars/{quote(calendar_id, safe='')}/events"
        return self._request("POST", url, json=event)

    def update_event(self, calendar_id: str, event_id: str, event: dict) -> dict:
        url = f"{API_URL}/calendars/{quote(calendar_id, safe='')}/events/{quote(event_id, safe='')}"
        return self._request("PUT", url, json=event)

    def delete_event(self, calendar_id: str, event_id: str) -> None:
        url = f"{API_URL}/calendars/{quote(calendar_id, safe='')}/events/{quote(event_id, safe='')}"
        self._request("DELETE", url)


def build_client(access_token=None, refresh_token=None, on_tokens=None) -> GoogleCalendarClient:
    return GoogleCalendarClient(
        settings.GOOGLE_CLIENT_ID,
        settings.GOOGLE_CLIENT_SECRET,
        settings.GOOGLE_REDIRECT_URI,
        access_token=access_token,
        refresh_token=refresh_token,
        on_tokens=on_tokens,
    )


PRIORITY_COLORS = {"high": "11", "medium": "5", "low": "1"}


def task_to_event(task) -> dict:
    start = task.due_date
    end = start + timedelta(hours=1)
    return {
        "summary": task.title,
        "description": task.description or "",
        "start": {"dateTime": _rfc3339(start), "timeZone": "UTC"},
        "end": {"dateTime": _rfc3339(end), "timeZone": "UTC"},
        "colorId": PRIORITY_COLORS.get(task.priority or "low", "1"),
        "reminders": {"useDefault": True},
    }


def parse_event_start(event: dict) -> Optional[datetime]:
    """Event start as a naive UTC datetime; all-day events start at midnight."""
    start = event.get("start") or {}
    raw = start.get("dateTime") or start.get("date")
    if not raw:
        return None
    value = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def get_client_factory():
    """FastAPI dependency; tests override it to hand out fake clients."""
    return build_client
