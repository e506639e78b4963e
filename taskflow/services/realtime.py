"""
In-process change feed.

Services publish a channel name after each committed write; subscribers get
called with no payload and are expected to re-run their list query. There is
no diffing: every notification means "reload everything".
"""

import logging
import threading
from collections import defaultdict
from typing import Callable, Dict, List

logger = logging.getLogger(__name__)

_listeners: Dict[str, List[Callable[[], None]]] = defaultdict(list)
_lock = threading.Lock()


class Subscription:
    def __init__(self, channel: str, listener: Callable[[], None]):
        self.channel = channel
        self._listener = listener

    def unsubscribe(self) -> None:
        with _lock:
            listeners = _listeners.get(self.channel, [])
            if self._listener in listeners:
                listeners.remove(self._listener)


def subscribe(channel: str, listener: Callable[[], None]) -> Subscription:
    with _lock:
        _listeners[channel].append(listener)
    return Subscription(channel, listener)


def publish(channel: str) -> None:
    with _lock:
        listeners = list(_listeners.get(channel, []))
    for listener in listeners:
        try:
            listener()
        except Exception as e:
            # one broken subscriber must not fail the write that triggered it
            logger.error(f"Listener on {channel} failed: {e}")


def comments_channel(task_id: int) -> str:
    return f"task_comments:{task_id}"


def attachments_channel(task_id: int) -> str:
    return f"task_attachments:{task_id}"


def notifications_channel(user_id: str) -> str:
    return f"user_notifications:{user_id}"


def reset() -> None:
    """Drop every subscription."""
    with _lock:
        _listeners.clear()
