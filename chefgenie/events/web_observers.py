"""Web-facing observers for session events.

This module subscribes to the GLOBAL_EVENT_BUS and stores a lightweight
in-memory ring buffer of recent events that the web layer can serve to a
polling client, so a page learns about images generated in the background
without reloading everything.

Design:
  * Each event stored with an auto-increment integer id (cursor) so clients
    can request only newer events (since=<last_id_seen>).
  * A Lock guards the buffer; the TestClient and uvicorn may call from
    worker threads.
  * A MAX_EVENTS cap prevents unbounded memory growth.
"""
from __future__ import annotations
from typing import List, Dict, Any
from threading import Lock
from datetime import datetime, timezone

from .Event_Bus import (
    GLOBAL_EVENT_BUS, FAVORITES_CHANGED, PLAN_GENERATED, RECIPE_IMAGE_READY, SHOPPING_LIST_CHANGED
)

_lock = Lock()
_events: List[Dict[str, Any]] = []
_next_id = 1
MAX_EVENTS = 300  # keep a few hundred recent events
_started = False

OBSERVED_EVENTS = (RECIPE_IMAGE_READY, SHOPPING_LIST_CHANGED, PLAN_GENERATED, FAVORITES_CHANGED)


def _record(event_name: str, payload: Any):  # signature expected by EventBus
    global _next_id
    with _lock:
        evt = {
            'id': _next_id,
            'type': event_name,
            'ts': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        }
        if isinstance(payload, dict):
            # Only plain fields; never echo image payloads back to the poller
            for k, v in payload.items():
                if k != 'image' and isinstance(v, (str, int, float, bool)):
                    evt[k] = v
        _events.append(evt)
        _next_id += 1
        # Trim buffer
        if len(_events) > MAX_EVENTS:
            del _events[: len(_events) - MAX_EVENTS]


def start():
    """Idempotent start: subscribe observers once."""
    global _started
    if _started:
        return
    for name in OBSERVED_EVENTS:
        GLOBAL_EVENT_BUS.subscribe(name, _record)
    _started = True


def get_events(since: int | None = None, event_type: str | None = None) -> Dict[str, Any]:
    """Events with id greater than `since`, optionally of a single type.

    `next_cursor` is the newest id in the buffer whatever the type filter, so a
    client polling for images only does not re-read skipped events.
    """
    with _lock:
        data = [
            e for e in _events
            if (since is None or e['id'] > since) and (event_type is None or e['type'] == event_type)
        ]
        next_cursor = _events[-1]['id'] if _events else since or 0
    return {'events': data, 'next_cursor': next_cursor}


__all__ = ['start', 'get_events', 'OBSERVED_EVENTS']
