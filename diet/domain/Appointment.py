"""Appointment domain entity: one booking of an owner's time, by a client or a guest."""
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4
from diet.utilities.constants import APPOINTMENT_STATUSES, BLOCKING_STATUSES, STATUS_PENDING


class Appointment:
    def __init__(self, dietitian_id: str, start_time: str, status: str = STATUS_PENDING,
                 id: Optional[str] = None, client_id: Optional[str] = None,
                 guest_name: Optional[str] = None, guest_phone: Optional[str] = None,
                 note: str = "", created_at: Optional[str] = None):
        if status not in APPOINTMENT_STATUSES:
            raise ValueError(f"Unknown appointment status: {status}")
        self.id = id or str(uuid4())
        self.dietitian_id = dietitian_id
        self.client_id = client_id
        self.guest_name = guest_name
        self.guest_phone = guest_phone
        self.note = note or ""
        self.start_time = start_time
        self.status = status
        self.created_at = created_at or datetime.now(timezone.utc).isoformat()

    @property
    def blocks_slot(self) -> bool:
        return self.status in BLOCKING_STATUSES

    def __str__(self) -> str:
        who = self.guest_name or self.client_id or "?"
        return f"{self.start_time} - {who} - {self.status}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Creates an Appointment from a stored row. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        allowed = {"id", "dietitian_id", "client_id", "guest_name", "guest_phone",
                   "note", "start_time", "status", "created_at"}
        filtered = {k: v for k, v in d.items() if k in allowed}
        filtered.setdefault("dietitian_id", "")
        filtered.setdefault("start_time", "")
        return Appointment(**filtered)

    def to_dict(self):
        return {
            "id": self.id,
            "dietitian_id": self.dietitian_id,
            "client_id": self.client_id,
            "guest_name": self.guest_name,
            "guest_phone": self.guest_phone,
            "note": self.note,
            "start_time": self.start_time,
            "status": self.status,
            "created_at": self.created_at,
        }
