"""DietList domain entity: a titled diet plan text stored for one client."""
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4
from diet.domain.DietPlan import PlanDocument
from diet.logic.codec.plan_codec import decode
from diet.utilities.constants import MODE_DAILY, MODE_WEEKLY


class DietList:
    def __init__(self, client_id: str, dietitian_id: str, title: str, content: str,
                 mode: Optional[str] = None, id: Optional[str] = None, created_at: Optional[str] = None):
        if mode not in (None, MODE_DAILY, MODE_WEEKLY):
            raise ValueError(f"Unknown plan mode: {mode}")
        self.id = id or str(uuid4())
        self.client_id = client_id
        self.dietitian_id = dietitian_id
        self.title = title
        self.content = content
        # None for rows written before the mode was stored; those are inferred on read
        self.mode = mode
        self.created_at = created_at or datetime.now(timezone.utc).isoformat()

    def document(self) -> PlanDocument:
        return decode(self.content, self.mode)

    def __str__(self) -> str:
        return f"{self.title} ({self.mode or 'inferred'})"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        allowed = {"id", "client_id", "dietitian_id", "title", "content", "mode", "created_at"}
        filtered = {k: v for k, v in d.items() if k in allowed}
        for key in ("client_id", "dietitian_id", "title", "content"):
            filtered.setdefault(key, "")
        return DietList(**filtered)

    def to_dict(self):
        return {
            "id": self.id,
            "client_id": self.client_id,
            "dietitian_id": self.dietitian_id,
            "title": self.title,
            "content": self.content,
            "mode": self.mode,
            "created_at": self.created_at,
        }
