"""GroceryList host: the running grocery list backed by an injected storage port."""
import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

from mealbudget.domain.GroceryItem import GroceryItem
from mealbudget.domain.Ingredient import Ingredient
from mealbudget.domain.errors import StorageFailure, ValidationError
from mealbudget.domain.ports import GroceryListStorage, MealCatalog
from mealbudget.events.Event_Bus import EventBus
from mealbudget.events.event_helpers import publish_grocery_changed
from mealbudget.logic.costing.ingredient_cost import parse_submitted
from mealbudget.logic.shopping import aggregator
from mealbudget.utilities.constants import MANUAL_SOURCE, RECIPE_SOURCE
from mealbudget.utilities.numbers import ZERO, round_money

logger = logging.getLogger(__name__)


class GroceryList:
    def __init__(self, storage: GroceryListStorage, catalog: Optional[MealCatalog] = None,
                 event_bus: Optional[EventBus] = None):
        self.storage = storage
        self.catalog = catalog
        self.items: List[GroceryItem] = []
        self._loaded = False
        self._bus = event_bus

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def load(self) -> List[GroceryItem]:
        self.items = list(self.storage.load_local_grocery_list())
        self._loaded = True
        return self.items

    def _commit(self, new_items: List[GroceryItem]) -> List[GroceryItem]:
        """Save the full list; on failure keep the previous list in memory and re-raise."""
        previous = self.items
        self.items = new_items
        try:
            self.storage.save_local_grocery_list(new_items)
        except StorageFailure:
            self.items = previous
            logger.error("Grocery list not saved; keeping previous %d item(s)", len(previous))
            raise
        publish_grocery_changed(len(new_items), aggregator.total(new_items), bus=self._bus)
        return self.items

    def add_from_meal(self, meal_id: str) -> List[GroceryItem]:
        """Merge a catalog meal's ingredients, labelled with the meal name."""
        if self.catalog is None:
            raise ValidationError("No meal catalog configured", field="meal_id")
        ingredients = self.catalog.fetch_ingredients(meal_id)
        label = RECIPE_SOURCE
        for meal in self.catalog.fetch_meal_catalog():
            if meal.id == str(meal_id):
                label = meal.name or RECIPE_SOURCE
                break
        logger.info("Adding %d ingredient(s) from %s", len(ingredients), label)
        return self._commit(aggregator.merge(self.items, ingredients, label))

    def add_manual(self, name: str, amount: Any = 0, unit_price: Any = 0) -> List[GroceryItem]:
        """Merge a product typed in by hand. Blank amount or price count as 0;
        non-numeric or negative ones are rejected before anything is saved."""
        clean = (name or "").strip()
        if not clean:
            raise ValidationError("Product name cannot be empty", field="name")
        kilograms = parse_submitted(amount, "amount", blank=ZERO)
        price = parse_submitted(unit_price, "unit_price", blank=ZERO)
        return self._commit(aggregator.merge(self.items, [Ingredient(clean, price, kilograms)], MANUAL_SOURCE))

    def merge(self, new_items, provenance: str = MANUAL_SOURCE) -> List[GroceryItem]:
        return self._commit(aggregator.merge(self.items, new_items, provenance))

    def toggle_checked(self, item_id: str) -> List[GroceryItem]:
        return self._commit(aggregator.toggle_checked(self.items, item_id))

    def remove(self, item_id: str) -> List[GroceryItem]:
        return self._commit(aggregator.remove(self.items, item_id))

    def clear_checked(self) -> List[GroceryItem]:
        return self._commit(aggregator.clear_checked(self.items))

    def total(self) -> Decimal:
        return aggregator.total(self.items)

    def view(self) -> Dict[str, Any]:
        return {
            "items": [aggregator.item_view(i) for i in self.items],
            "count": len(self.items),
            "has_checked": aggregator.has_checked(self.items),
            "total": str(round_money(self.total())),
            "total_display": aggregator.format_money(self.total()),
        }
