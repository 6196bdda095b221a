"""WeeklyBudget domain entity: the spending ceiling a user set for one Monday-start week."""
from datetime import date, timedelta
from decimal import Decimal
from typing import Any

from mealbudget.utilities.numbers import parse_decimal


class WeeklyBudget:
    def __init__(self, week_key: str, amount: Any, user_id: str = "local"):
        self.user_id = user_id
        self.week_key = week_key
        self.amount: Decimal = parse_decimal(amount)

    @property
    def valid_from(self) -> date:
        return date.fromisoformat(self.week_key)

    @property
    def valid_until(self) -> date:
        """Exclusive end of the validity range (the following Monday)."""
        return self.valid_from + timedelta(days=7)

    def covers(self, day: date) -> bool:
        return self.valid_from <= day < self.valid_until

    def __eq__(self, other) -> bool:
        if not isinstance(other, WeeklyBudget):
            return NotImplemented
        return (self.user_id, self.week_key, self.amount) == (other.user_id, other.week_key, other.amount)

    def __str__(self) -> str:
        return f"Budget {self.week_key} ({self.user_id}): {self.amount}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data)
        return WeeklyBudget(d["week_key"], d.get("amount", 0), user_id=d.get("user_id", "local"))

    def to_dict(self):
        return {
            "user_id": self.user_id,
            "week_key": self.week_key,
            "amount": str(self.amount),
            "valid_from": self.valid_from.isoformat(),
            "valid_until": self.valid_until.isoformat(),
        }
