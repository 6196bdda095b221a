"""PlannedSlot domain entity: one (date, meal slot) cell of the weekly plan holding a meal."""
from datetime import date, datetime
from enum import Enum
from typing import Optional
from uuid import uuid4

from mealbudget.domain.Meal import Meal
from mealbudget.domain.errors import ValidationError
from mealbudget.utilities.constants import DATE_FORMAT


class MealSlot(str, Enum):
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"

    @classmethod
    def parse(cls, value) -> "MealSlot":
        if isinstance(value, MealSlot):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValidationError(f"Unknown meal slot: {value!r}", field="meal_slot") from None


def parse_day(value) -> date:
    """Accept a date, a datetime or an ISO 'YYYY-MM-DD' string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(str(value).strip(), DATE_FORMAT).date()
    except ValueError:
        raise ValidationError(f"Invalid date (expected YYYY-MM-DD): {value!r}", field="date") from None


class PlannedSlot:
    def __init__(self, date, meal_slot, meal: Meal, id: Optional[str] = None):
        self.id = str(id) if id is not None else str(uuid4())
        self.date: date = parse_day(date)
        self.meal_slot = MealSlot.parse(meal_slot)
        self.meal = meal

    @property
    def cell(self):
        return self.date, self.meal_slot

    def __str__(self) -> str:
        return f"{self.date.isoformat()} {self.meal_slot.value}: {self.meal.name}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data, meal: Optional[Meal] = None):
        '''Builds a slot from a stored record; the meal may come embedded or be passed in joined.'''
        d = dict(data)
        if meal is None:
            meal = Meal.from_dict(d.get("meal") or {"id": d.get("meal_id")})
        return PlannedSlot(d["date"], d.get("meal_type", d.get("meal_slot")), meal, id=d.get("id"))

    def to_dict(self):
        return {
            "id": self.id,
            "date": self.date.strftime(DATE_FORMAT),
            "meal_type": self.meal_slot.value,
            "meal_id": self.meal.id,
        }

    def to_view(self):
        """Record for the calendar view, with the meal joined in."""
        return {**self.to_dict(), "meal": self.meal.summary()}
