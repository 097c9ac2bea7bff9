from datetime import datetime
from typing import Iterable, List, Optional
import logging

from diet.domain.Appointment import Appointment
from diet.infra import paths
from diet.infra.json_store import JsonStore
from diet.utilities.timeutils import parse_timestamp

logger = logging.getLogger(__name__)


class SlotAlreadyBookedError(ValueError):
    """Unique (owner, start_time) among blocking appointments was violated."""


def _same_instant(a: str, b: str) -> bool:
    try:
        return parse_timestamp(a) == parse_timestamp(b)
    except ValueError:
        return a == b


class AppointmentRepository:
    def __init__(self, path=None):
        self.store = JsonStore(path or paths.APPOINTMENTS_FILE)

    def _readable(self, rows: List[dict]) -> List[Appointment]:
        """Rows as Appointments; a row that is not a valid appointment is logged and skipped."""
        result = []
        for row in rows:
            if not isinstance(row, dict):
                logger.warning("Skipping non-object row in %s: %r", self.store.path.name, row)
                continue
            try:
                result.append(Appointment.from_dict(row))
            except (TypeError, ValueError) as e:
                logger.warning("Skipping unreadable appointment %s: %s", row.get("id"), e)
        return result

    def all(self) -> List[Appointment]:
        return self._readable(self.store.load())

    def get(self, appointment_id: str) -> Optional[Appointment]:
        for appointment in self.all():
            if appointment.id == appointment_id:
                return appointment
        return None

    def list_for_owner(self, owner_id: str, start: Optional[datetime] = None, end: Optional[datetime] = None,
                       statuses: Optional[Iterable[str]] = None) -> List[Appointment]:
        """Owner's appointments with start_time in [start, end), optionally filtered by status.

        Rows whose start_time cannot be parsed are skipped when a range is given.
        """
        wanted = set(statuses) if statuses is not None else None
        result = []
        for appointment in self.all():
            if appointment.dietitian_id != owner_id:
                continue
            if wanted is not None and appointment.status not in wanted:
                continue
            if start is not None or end is not None:
                try:
                    at = parse_timestamp(appointment.start_time)
                except ValueError:
                    logger.warning("Skipping appointment %s with bad start_time %r",
                                   appointment.id, appointment.start_time)
                    continue
                if start is not None and at < start:
                    continue
                if end is not None and at >= end:
                    continue
            result.append(appointment)
        result.sort(key=lambda a: a.start_time or "")
        return result

    def _check_unique(self, rows: List[dict], candidate: Appointment) -> None:
        if not candidate.blocks_slot:
            return
        for other in self._readable(rows):
            if (other.id != candidate.id and other.dietitian_id == candidate.dietitian_id
                    and other.blocks_slot and _same_instant(other.start_time, candidate.start_time)):
                raise SlotAlreadyBookedError(
                    f"Owner {candidate.dietitian_id} already has an appointment at {candidate.start_time}")

    def add(self, appointment: Appointment) -> Appointment:
        def change(rows):
            self._check_unique(rows, appointment)
            rows.append(appointment.to_dict())
            return rows
        self.store.update(change)
        return appointment

    def save(self, appointment: Appointment) -> Appointment:
        '''Replace an existing row (matched by id).'''
        def change(rows):
            if not any(isinstance(row, dict) and row.get("id") == appointment.id for row in rows):
                raise KeyError(appointment.id)
            self._check_unique(rows, appointment)
            return [appointment.to_dict() if isinstance(row, dict) and row.get("id") == appointment.id else row
                    for row in rows]
        self.store.update(change)
        return appointment

    def delete(self, appointment_id: str) -> bool:
        removed = []

        def change(rows):
            kept = [row for row in rows if not (isinstance(row, dict) and row.get("id") == appointment_id)]
            removed.append(len(kept) != len(rows))
            return kept
        self.store.update(change)
        return removed[0]
