"""Planned meal repository: one JSON record per (date, meal slot), joined with the meal catalog on read."""
import logging
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional

from mealbudget.domain.PlannedSlot import PlannedSlot
from mealbudget.domain.errors import StorageFailure, ValidationError
from mealbudget.infra.Meal_Repository import MealRepository
from mealbudget.infra.json_store import atomic_write_json, read_json
from mealbudget.infra.paths import PLANNED_MEALS_FILE

logger = logging.getLogger(__name__)


class PlanRepository:
    def __init__(self, path: Optional[Path] = None, meals: Optional[MealRepository] = None):
        self.path = Path(path) if path is not None else PLANNED_MEALS_FILE
        self.meals = meals if meals is not None else MealRepository()

    def _records(self) -> List[Dict]:
        return list(read_json(self.path, []))

    def fetch_planned_slots(self, start: date, end: date) -> List[PlannedSlot]:
        """Slots dated within [start, end]; records whose meal was deleted are skipped."""
        catalog = {m.id: m for m in self.meals.fetch_meal_catalog()}
        slots: List[PlannedSlot] = []
        for rec in self._records():
            try:
                d = date.fromisoformat(rec.get("date", ""))
            except ValueError:
                logger.warning("Skipping planned meal with bad date: %s", rec)
                continue
            if not (start <= d <= end):
                continue
            meal = catalog.get(str(rec.get("meal_id")))
            if meal is None:
                logger.warning("Planned meal %s points at missing meal %s", rec.get("id"), rec.get("meal_id"))
                continue
            slots.append(PlannedSlot.from_dict(rec, meal=meal))
        return slots

    def find_planned_slot(self, slot_id: str) -> Optional[PlannedSlot]:
        for rec in self._records():
            if rec.get("id") == slot_id:
                meal = self.meals.get_meal(rec.get("meal_id"))
                try:
                    return PlannedSlot.from_dict(rec, meal=meal)
                except (KeyError, ValidationError):
                    logger.warning("Stored planned meal %s is unreadable", slot_id)
                    return None
        return None

    def persist_planned_slot(self, slot: PlannedSlot) -> PlannedSlot:
        records = self._records()
        for rec in records:
            if rec.get("date") == slot.date.isoformat() and rec.get("meal_type") == slot.meal_slot.value \
                    and rec.get("id") != slot.id:
                raise StorageFailure(f"{slot.meal_slot.value} on {slot.date} is already stored", operation="persist")
        records = [r for r in records if r.get("id") != slot.id]
        records.append(slot.to_dict())
        atomic_write_json(self.path, records)
        return slot

    def delete_planned_slot(self, slot_id: str) -> None:
        records = self._records()
        kept = [r for r in records if r.get("id") != slot_id]
        if len(kept) == len(records):
            logger.debug("Planned meal %s already gone", slot_id)
            return
        atomic_write_json(self.path, kept)
