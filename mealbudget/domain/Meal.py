"""Meal domain entity: a catalog recipe with its ingredients and a cached cost snapshot."""
from decimal import Decimal
from typing import Any, List, Optional
from uuid import uuid4

from mealbudget.domain.Ingredient import Ingredient
from mealbudget.utilities.numbers import ZERO, parse_decimal


class Meal:
    """A recipe in the meal catalog.

    estimated_cost is a snapshot taken when the meal was saved (rounded to
    cents). It is deliberately not recomputed from the ingredients: the budget
    ledger reads it at face value, so later price edits only show up once the
    meal is saved again.
    """

    def __init__(self, id: Optional[str] = None, name: str = "", estimated_cost: Any = ZERO,
                 ingredients: Optional[List[Ingredient]] = None):
        self.id = str(id) if id is not None else str(uuid4())
        self.name = (name or "").strip()
        self.estimated_cost: Decimal = parse_decimal(estimated_cost)
        self.ingredients = ingredients[:] if ingredients else []

    def __str__(self) -> str:
        return f"{self.name} - {self.estimated_cost} - {len(self.ingredients)} ingredients"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data)
        return Meal(
            id=d.get("id"),
            name=d.get("name", ""),
            estimated_cost=d.get("estimated_cost", 0),
            ingredients=[Ingredient.from_dict(ing) for ing in d.get("ingredients", []) or []],
        )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "estimated_cost": str(self.estimated_cost),
            "ingredients": [ing.to_dict() for ing in self.ingredients],
        }

    def summary(self):
        """Catalog listing shape (id, name, cost) without the ingredient rows."""
        return {"id": self.id, "name": self.name, "estimated_cost": str(self.estimated_cost)}
