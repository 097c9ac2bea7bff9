"""Diet plan domain entities: DayPlan (four meal slots), WeekPlan (seven days) and PlanDocument."""
from typing import Dict, List, Optional, Tuple
from diet.utilities.constants import DAY_KEYS, MEAL_KEYS, MODE_DAILY, MODE_WEEKLY


class DayPlan:
    def __init__(self, breakfast: str = "", lunch: str = "", snack: str = "", dinner: str = ""):
        # None is stored as "" so every slot is always a string
        self.breakfast = breakfast or ""
        self.lunch = lunch or ""
        self.snack = snack or ""
        self.dinner = dinner or ""

    def get(self, meal: str) -> str:
        if meal not in MEAL_KEYS:
            raise KeyError(meal)
        return getattr(self, meal)

    def set(self, meal: str, text: str):
        if meal not in MEAL_KEYS:
            raise KeyError(meal)
        setattr(self, meal, text or "")

    def append(self, meal: str, text: str):
        '''Appends a line to a meal, newline-joined.'''
        current = self.get(meal)
        self.set(meal, f"{current}\n{text}" if current else text)

    def filled_meals(self) -> List[Tuple[str, str]]:
        '''Returns (meal, text) pairs for non-empty meals in fixed order.'''
        return [(meal, self.get(meal)) for meal in MEAL_KEYS if self.get(meal).strip()]

    def is_empty(self) -> bool:
        return not self.filled_meals()

    def __eq__(self, other) -> bool:
        if not isinstance(other, DayPlan):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"DayPlan({self.to_dict()!r})"

    @staticmethod
    def from_dict(data):
        '''Creates a DayPlan from a dictionary. Ignores unknown keys.'''
        d = data if isinstance(data, dict) else {}
        return DayPlan(**{meal: str(d.get(meal) or "") for meal in MEAL_KEYS})

    def to_dict(self) -> Dict[str, str]:
        return {meal: self.get(meal) for meal in MEAL_KEYS}


class WeekPlan:
    def __init__(self, days: Optional[Dict[str, DayPlan]] = None):
        days = days or {}
        unknown = set(days) - set(DAY_KEYS)
        if unknown:
            raise KeyError(f"Unknown day keys: {sorted(unknown)}")
        self.days: Dict[str, DayPlan] = {key: days.get(key) or DayPlan() for key in DAY_KEYS}

    def __getitem__(self, day: str) -> DayPlan:
        return self.days[day]

    def __iter__(self):
        return iter(self.days.items())

    def filled_days(self) -> List[Tuple[str, DayPlan]]:
        return [(key, plan) for key, plan in self.days.items() if not plan.is_empty()]

    def is_empty(self) -> bool:
        return not self.filled_days()

    def __eq__(self, other) -> bool:
        if not isinstance(other, WeekPlan):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"WeekPlan({self.to_dict()!r})"

    @staticmethod
    def from_dict(data):
        d = data if isinstance(data, dict) else {}
        return WeekPlan({key: DayPlan.from_dict(d.get(key)) for key in DAY_KEYS})

    def to_dict(self) -> Dict[str, Dict[str, str]]:
        return {key: plan.to_dict() for key, plan in self.days.items()}


class PlanDocument:
    """General notes plus either a single DayPlan (daily) or a WeekPlan (weekly)."""

    def __init__(self, notes: str = "", day: Optional[DayPlan] = None, week: Optional[WeekPlan] = None):
        if day is not None and week is not None:
            raise ValueError("A plan document is either daily or weekly, not both")
        self.notes = notes or ""
        self.week = week
        self.day = day if week is not None or day is not None else DayPlan()

    @property
    def mode(self) -> str:
        return MODE_WEEKLY if self.week is not None else MODE_DAILY

    @property
    def is_weekly(self) -> bool:
        return self.week is not None

    def is_empty(self) -> bool:
        plan = self.week if self.is_weekly else self.day
        return not self.notes.strip() and plan.is_empty()

    def __eq__(self, other) -> bool:
        if not isinstance(other, PlanDocument):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"PlanDocument({self.to_dict()!r})"

    @staticmethod
    def daily(notes: str = "", **meals):
        return PlanDocument(notes, day=DayPlan(**meals))

    @staticmethod
    def weekly(notes: str = "", days: Optional[Dict[str, DayPlan]] = None):
        return PlanDocument(notes, week=WeekPlan(days))

    @staticmethod
    def from_dict(data):
        '''Builds a document from {"notes", "mode", "day" | "week"}; mode defaults to daily.'''
        d = data if isinstance(data, dict) else {}
        notes = str(d.get("notes") or "")
        if d.get("mode") == MODE_WEEKLY:
            return PlanDocument(notes, week=WeekPlan.from_dict(d.get("week")))
        return PlanDocument(notes, day=DayPlan.from_dict(d.get("day")))

    def to_dict(self):
        data = {"notes": self.notes, "mode": self.mode}
        if self.is_weekly:
            data["week"] = self.week.to_dict()
        else:
            data["day"] = self.day.to_dict()
        return data
