"""Meal catalog repository (JSON file persistence)."""
import logging
from pathlib import Path
from typing import List, Optional

from mealbudget.domain.Ingredient import Ingredient
from mealbudget.domain.Meal import Meal
from mealbudget.infra.json_store import atomic_write_json, read_json
from mealbudget.infra.paths import MEALS_FILE

logger = logging.getLogger(__name__)


class MealRepository:
    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else MEALS_FILE

    def _load(self) -> List[Meal]:
        return [Meal.from_dict(entry) for entry in read_json(self.path, [])]

    def fetch_meal_catalog(self) -> List[Meal]:
        """All meals ordered by name (case-insensitive)."""
        return sorted(self._load(), key=lambda m: m.name.lower())

    def get_meal(self, meal_id: str) -> Optional[Meal]:
        for meal in self._load():
            if meal.id == str(meal_id):
                return meal
        return None

    def fetch_ingredients(self, meal_id: str) -> List[Ingredient]:
        meal = self.get_meal(meal_id)
        if meal is None:
            logger.warning("Ingredients requested for unknown meal %s", meal_id)
            return []
        return list(meal.ingredients)

    def add_meal(self, meal: Meal) -> Meal:
        meals = self._load()
        meals.append(meal)
        atomic_write_json(self.path, [m.to_dict() for m in meals])
        logger.info("Saved meal %s (%s)", meal.name, meal.estimated_cost)
        return meal
