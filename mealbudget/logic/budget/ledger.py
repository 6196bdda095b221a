"""Budget ledger: used / left / over-budget for the meals planned in one week."""
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, Optional

from mealbudget.utilities.numbers import ZERO, parse_decimal, round_money


@dataclass(frozen=True)
class Ledger:
    budget: Decimal
    used: Decimal
    left: Decimal
    over_budget: bool
    # used / budget capped at 1; None when no budget is set
    progress: Optional[Decimal]

    def to_dict(self):
        return {
            "budget": str(round_money(self.budget)),
            "used": str(round_money(self.used)),
            "left": str(round_money(self.left)),
            "over_budget": self.over_budget,
            "progress": float(self.progress) if self.progress is not None else None,
        }


def evaluate(budget_amount: Any, planned_meals: Iterable[Any]) -> Ledger:
    """Evaluate a week.

    Costs are each meal's estimated_cost snapshot taken at face value. A budget
    of 0 means "not set": it never flags over-budget and has no progress ratio.
    """
    budget = parse_decimal(budget_amount)
    used = sum((parse_decimal(meal.estimated_cost) for meal in planned_meals), ZERO)
    left = max(ZERO, budget - used)
    over_budget = budget > 0 and used > budget
    progress = min(Decimal(1), used / budget) if budget > 0 else None
    return Ledger(budget=budget, used=used, left=left, over_budget=over_budget, progress=progress)


__all__ = ['Ledger', 'evaluate']
