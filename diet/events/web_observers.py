"""Web-facing observers for booking events.

Subscribes to the GLOBAL_EVENT_BUS for appointment events and keeps a
bounded in-memory buffer of recent ones, which the owner dashboard polls
through /api/events.

  * Each event gets an auto-increment id (cursor) so clients can ask only
    for newer events (since=<last_id_seen>).
  * A Lock guards the buffer; with several worker processes each keeps its
    own buffer, which is acceptable for notifications.
  * MAX_EVENTS caps memory.
"""
from __future__ import annotations
import logging
from typing import List, Dict, Any, Optional
from threading import Lock
from datetime import datetime, timezone

from .Event_Bus import (
    GLOBAL_EVENT_BUS, APPOINTMENT_REQUESTED, APPOINTMENT_CONFLICT, APPOINTMENT_STATUS_CHANGED
)

logger = logging.getLogger(__name__)

_lock = Lock()
_events: List[Dict[str, Any]] = []
_next_id = 1
MAX_EVENTS = 300
_started = False


def _record(event_name: str, payload: Any):  # signature expected by EventBus
    global _next_id
    evt = {
        'type': event_name,
        'ts': datetime.now(timezone.utc).isoformat(),
    }
    if isinstance(payload, dict):
        appointment = payload.get('appointment')
        if appointment is not None:
            evt['owner_id'] = appointment.dietitian_id
            evt['appointment_id'] = appointment.id
            evt['start_time'] = appointment.start_time
            evt['status'] = appointment.status
            evt['guest_name'] = appointment.guest_name
        for k in ('owner_id', 'start_time', 'source', 'previous'):
            if k in payload and k not in evt:
                evt[k] = payload[k]
    with _lock:
        evt['id'] = _next_id
        _events.append(evt)
        _next_id += 1
        if len(_events) > MAX_EVENTS:
            del _events[: len(_events) - MAX_EVENTS]


def start():
    """Idempotent start: subscribe observers once."""
    global _started
    if _started:
        return
    for name in (APPOINTMENT_REQUESTED, APPOINTMENT_CONFLICT, APPOINTMENT_STATUS_CHANGED):
        GLOBAL_EVENT_BUS.subscribe(name, _record)
    _started = True
    logger.info("Booking event observers started")


def get_events(since: Optional[int] = None, owner_id: Optional[str] = None) -> Dict[str, Any]:
    """Return events newer than 'since' (exclusive), optionally for one owner.

    next_cursor is the largest id seen so the client can poll with since=next_cursor.
    """
    with _lock:
        data = [e for e in _events if since is None or e['id'] > since]
        next_cursor = _events[-1]['id'] if _events else since or 0
    if owner_id is not None:
        data = [e for e in data if e.get('owner_id') == owner_id]
    return {'events': data, 'next_cursor': next_cursor}


__all__ = ['start', 'get_events']
