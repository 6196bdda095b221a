"""Weekly planning grid: 7 days x 3 meal slots for one Monday-start week.

The grid is a pure in-memory structure. It refuses to overwrite a filled cell,
resolves meal ids through a catalog lookup, and keeps slots in insertion order
for the budget ledger. Mirroring changes to storage is the planner's job
(see mealbudget.logic.planning.planner).
"""
import logging
from datetime import date
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from mealbudget.domain.Meal import Meal
from mealbudget.domain.PlannedSlot import MealSlot, PlannedSlot, parse_day
from mealbudget.domain.errors import GridNotLoaded, SlotOccupied, UnknownMeal, ValidationError
from mealbudget.logic.planning.week_keys import DateLike, week_days, week_key, week_range

logger = logging.getLogger(__name__)

Cell = Tuple[date, MealSlot]
MealLookup = Union[Mapping[str, Meal], Callable[[str], Optional[Meal]]]


class WeeklyPlanningGrid:
    def __init__(self, any_day: DateLike, meal_lookup: Optional[MealLookup] = None):
        self.start, self.end = week_range(any_day)
        self.week_key = week_key(any_day)
        self._lookup = meal_lookup if meal_lookup is not None else {}
        self._cells: Dict[Cell, PlannedSlot] = {}
        self._loaded = False

    # --- state ---------------------------------------------------------------
    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def days(self) -> List[date]:
        return week_days(self.start)

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def set_meal_lookup(self, meal_lookup: MealLookup):
        self._lookup = meal_lookup
        return self

    def _resolve(self, meal_id: str) -> Optional[Meal]:
        if callable(self._lookup):
            return self._lookup(meal_id)
        return self._lookup.get(str(meal_id))

    # --- loading -------------------------------------------------------------
    def load(self, records: Iterable[PlannedSlot]) -> "WeeklyPlanningGrid":
        """Replace the grid content with stored records of this week.

        No records is a valid, empty week. Records dated outside the week are
        skipped, and a second record for an already filled cell is dropped so
        the one-meal-per-cell rule survives a divergent store.
        """
        self._cells = {}
        for slot in records:
            if not self.contains(slot.date):
                logger.debug("Skipping slot %s outside week %s", slot.id, self.week_key)
                continue
            if slot.cell in self._cells:
                logger.warning("Duplicate stored slot %s for %s %s; keeping %s",
                               slot.id, slot.date, slot.meal_slot.value, self._cells[slot.cell].id)
                continue
            self._cells[slot.cell] = slot
        self._loaded = True
        return self

    # --- queries -------------------------------------------------------------
    def cell(self, day, meal_slot) -> Optional[PlannedSlot]:
        return self._cells.get((parse_day(day), MealSlot.parse(meal_slot)))

    def find(self, planned_slot_id: str) -> Optional[PlannedSlot]:
        for slot in self._cells.values():
            if slot.id == planned_slot_id:
                return slot
        return None

    def slots_in_week(self) -> List[PlannedSlot]:
        """Planned slots in insertion order (not date-sorted)."""
        if not self._loaded:
            raise GridNotLoaded(f"Week {self.week_key} has not been loaded")
        return list(self._cells.values())

    def planned_meals(self) -> List[Meal]:
        return [slot.meal for slot in self.slots_in_week()]

    def rows(self) -> List[Dict]:
        """One row per meal slot, seven cells each (Monday first)."""
        days = self.days
        return [
            {"meal_slot": ms.value, "cells": [self._cells.get((d, ms)) for d in days]}
            for ms in MealSlot
        ]

    # --- mutations -----------------------------------------------------------
    def assign(self, day, meal_slot, meal_id: str) -> PlannedSlot:
        d = parse_day(day)
        ms = MealSlot.parse(meal_slot)
        if not self.contains(d):
            raise ValidationError(f"{d.isoformat()} is outside week {self.week_key}", field="date")
        occupant = self._cells.get((d, ms))
        if occupant is not None:
            raise SlotOccupied(d, ms.value, occupant)
        meal = self._resolve(str(meal_id))
        if meal is None:
            raise UnknownMeal(meal_id)
        slot = PlannedSlot(d, ms, meal)
        self._cells[slot.cell] = slot
        logger.debug("Assigned %s", slot)
        return slot

    def place(self, slot: PlannedSlot) -> PlannedSlot:
        """Put back a slot object as-is (used to undo a removal)."""
        occupant = self._cells.get(slot.cell)
        if occupant is not None and occupant.id != slot.id:
            raise SlotOccupied(slot.date, slot.meal_slot.value, occupant)
        self._cells[slot.cell] = slot
        return slot

    def remove(self, planned_slot_id: str) -> Optional[PlannedSlot]:
        """Remove by id. An unknown id is a no-op and returns None."""
        slot = self.find(planned_slot_id)
        if slot is None:
            return None
        del self._cells[slot.cell]
        logger.debug("Removed %s", slot)
        return slot

    def readopt(self, local_id: str, persisted: PlannedSlot) -> PlannedSlot:
        """Swap a locally created slot for the record the store returned (store-side id)."""
        local = self.find(local_id)
        if local is None:
            return persisted
        persisted.date, persisted.meal_slot = local.date, local.meal_slot
        if persisted.meal is None:
            persisted.meal = local.meal
        self._cells[local.cell] = persisted
        return persisted

    def to_view(self) -> Dict:
        return {
            "week_key": self.week_key,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "loaded": self._loaded,
            "days": [d.isoformat() for d in self.days],
            "rows": [
                {"meal_slot": row["meal_slot"],
                 "cells": [c.to_view() if c else None for c in row["cells"]]}
                for row in self.rows()
            ],
        }
