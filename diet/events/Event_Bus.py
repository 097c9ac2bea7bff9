"""In-process publish/subscribe for booking notifications.

Event names:
  appointment.requested -> payload {"appointment": Appointment, "source": "public" | "owner"}
  appointment.conflict -> payload {"owner_id": str, "start_time": str, "source": str}
  appointment.status_changed -> payload {"appointment": Appointment, "previous": str}

Handlers are callables taking (event_name, payload). Bookings publish from
request worker threads, so the handler table is guarded by a lock and
handlers run on the publishing thread, outside the lock.
"""
from __future__ import annotations
import logging
from threading import Lock
from typing import Any, Callable, Dict, Tuple

logger = logging.getLogger(__name__)

APPOINTMENT_REQUESTED = "appointment.requested"
APPOINTMENT_CONFLICT = "appointment.conflict"
APPOINTMENT_STATUS_CHANGED = "appointment.status_changed"

Handler = Callable[[str, Any], None]


class EventBus:
	def __init__(self):
		self._lock = Lock()
		self._handlers: Dict[str, Tuple[Handler, ...]] = {}

	def subscribe(self, event_name: str, handler: Handler) -> Callable[[], None]:
		"""Register ``handler`` once per event; returns a callable that removes it."""
		with self._lock:
			current = self._handlers.get(event_name, ())
			if handler not in current:
				self._handlers[event_name] = current + (handler,)
		return lambda: self.unsubscribe(event_name, handler)

	def unsubscribe(self, event_name: str, handler: Handler) -> bool:
		with self._lock:
			current = self._handlers.get(event_name, ())
			if handler not in current:
				return False
			remaining = tuple(h for h in current if h != handler)
			if remaining:
				self._handlers[event_name] = remaining
			else:
				del self._handlers[event_name]
		return True

	def handler_count(self, event_name: str) -> int:
		with self._lock:
			return len(self._handlers.get(event_name, ()))

	def publish(self, event_name: str, payload: Any = None) -> int:
		"""Deliver to every handler; returns how many handled it without raising."""
		with self._lock:
			handlers = self._handlers.get(event_name, ())
		delivered = 0
		for handler in handlers:
			try:
				handler(event_name, payload)
			except Exception:
				logger.exception("Handler %r failed on %s", handler, event_name)
			else:
				delivered += 1
		return delivered


GLOBAL_EVENT_BUS = EventBus()


def publish(event_name: str, payload: Any = None) -> int:
	"""Publish on the process-wide bus."""
	return GLOBAL_EVENT_BUS.publish(event_name, payload)


__all__ = [
	'EventBus', 'GLOBAL_EVENT_BUS', 'publish',
	'APPOINTMENT_REQUESTED', 'APPOINTMENT_CONFLICT', 'APPOINTMENT_STATUS_CHANGED',
]
