"""Storage ports the planner core talks to.

The core never opens files or sockets itself. Hosts receive one of these
collaborators at construction time; production wires in the JSON adapters from
mealbudget.infra, tests pass in-memory fakes.

Every method either returns its result or raises StorageFailure.
"""
from datetime import date
from decimal import Decimal
from typing import List, Optional, Protocol, Sequence

from mealbudget.domain.GroceryItem import GroceryItem
from mealbudget.domain.Ingredient import Ingredient
from mealbudget.domain.Meal import Meal
from mealbudget.domain.PlannedSlot import PlannedSlot
from mealbudget.domain.WeeklyBudget import WeeklyBudget


class MealCatalog(Protocol):
    def fetch_meal_catalog(self) -> List[Meal]:
        """All meals, ordered by name."""
        ...

    def fetch_ingredients(self, meal_id: str) -> List[Ingredient]:
        ...


class PlannedSlotStore(Protocol):
    def fetch_planned_slots(self, start: date, end: date) -> List[PlannedSlot]:
        """Slots whose date falls in [start, end], inclusive."""
        ...

    def persist_planned_slot(self, slot: PlannedSlot) -> PlannedSlot:
        """Store the slot; the returned record carries the id the store kept."""
        ...

    def find_planned_slot(self, slot_id: str) -> Optional[PlannedSlot]:
        """The stored slot with this id in any week, or None."""
        ...

    def delete_planned_slot(self, slot_id: str) -> None:
        """Deleting an id the store does not know is not an error."""
        ...


class BudgetStore(Protocol):
    def fetch_budget(self, week_key: str) -> Optional[WeeklyBudget]:
        ...

    def upsert_budget(self, week_key: str, amount: Decimal) -> WeeklyBudget:
        ...


class GroceryListStorage(Protocol):
    def load_local_grocery_list(self) -> List[GroceryItem]:
        ...

    def save_local_grocery_list(self, items: Sequence[GroceryItem]) -> None:
        ...


__all__ = ['MealCatalog', 'PlannedSlotStore', 'BudgetStore', 'GroceryListStorage']
