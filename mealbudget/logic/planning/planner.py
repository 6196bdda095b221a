"""WeekPlanner: the planning grid wired to the meal catalog and slot storage.

Every mutation is a two-phase update: apply to the grid, log it as pending,
mirror it to the store. When the store fails the grid change is undone, the
operation stays in the log as failed and StorageFailure propagates. Loading a
week always rebuilds the grid from the store and drops the pending log.
"""
import logging
from datetime import date
from typing import Dict, List, Optional

from mealbudget.domain.Meal import Meal
from mealbudget.domain.PlannedSlot import PlannedSlot
from mealbudget.domain.errors import GridNotLoaded, StorageFailure, UnknownMeal
from mealbudget.domain.ports import MealCatalog, PlannedSlotStore
from mealbudget.events.Event_Bus import EventBus
from mealbudget.events.event_helpers import publish_slot_assigned, publish_slot_removed, publish_sync_failed
from mealbudget.logic.planning.grid import WeeklyPlanningGrid
from mealbudget.logic.planning.week_keys import DateLike, week_range
from mealbudget.logic.sync.pending_log import PendingLog, PendingOperation

logger = logging.getLogger(__name__)

ASSIGN = "assign"
REMOVE = "remove"


class WeekPlanner:
    def __init__(self, catalog: MealCatalog, store: PlannedSlotStore, event_bus: Optional[EventBus] = None):
        self.catalog = catalog
        self.store = store
        self.pending = PendingLog()
        self.grid: Optional[WeeklyPlanningGrid] = None
        self.meals: Dict[str, Meal] = {}
        self._bus = event_bus

    @property
    def is_loaded(self) -> bool:
        return self.grid is not None and self.grid.is_loaded

    def _require_grid(self) -> WeeklyPlanningGrid:
        if not self.is_loaded:
            raise GridNotLoaded("No week loaded yet")
        return self.grid

    def load(self, day: DateLike) -> WeeklyPlanningGrid:
        """Fetch catalog and the week's slots and rebuild the grid from store state."""
        start, end = week_range(day)
        catalog = self.catalog.fetch_meal_catalog()
        records = self.store.fetch_planned_slots(start, end)
        self.meals = {m.id: m for m in catalog}
        grid = WeeklyPlanningGrid(start, self.meals)
        grid.load(records)
        self.grid = grid
        self.pending.clear()
        logger.info("Loaded week %s: %d planned slot(s), %d meal(s) in catalog",
                    grid.week_key, len(grid.slots_in_week()), len(self.meals))
        return grid

    def catalog_meals(self) -> List[Meal]:
        return sorted(self.meals.values(), key=lambda m: m.name.lower())

    # --- mutations -----------------------------------------------------------
    def assign(self, day, meal_slot, meal_id: str) -> PlannedSlot:
        grid = self._require_grid()
        slot = grid.assign(day, meal_slot, meal_id)
        op = self.pending.record(ASSIGN, slot=slot)
        return self._mirror_assign(op, slot)

    def remove(self, planned_slot_id: str) -> Optional[PlannedSlot]:
        """Remove a slot; an id that is not planned is reported as success."""
        grid = self._require_grid()
        slot = grid.remove(planned_slot_id)
        if slot is None:
            return None
        op = self.pending.record(REMOVE, slot=slot)
        return self._mirror_remove(op, slot)

    def week_of(self, planned_slot_id: str) -> Optional[date]:
        """Date of a stored slot in any week, so callers can load the week that holds it."""
        stored = self.store.find_planned_slot(planned_slot_id)
        return stored.date if stored is not None else None

    def retry(self, op_id: str):
        """Re-apply and re-mirror a failed operation."""
        op = self.pending.get(op_id)
        if op is None:
            return None
        grid = self._require_grid()
        slot: PlannedSlot = op.payload["slot"]
        if op.kind == ASSIGN:
            grid.place(slot)
            return self._mirror_assign(op, slot)
        removed = grid.remove(slot.id)
        if removed is None:
            self.pending.confirm(op)
            return None
        return self._mirror_remove(op, removed)

    def discard(self, op_id: str) -> bool:
        return self.pending.discard(op_id)

    def failed_operations(self) -> List[PendingOperation]:
        return self.pending.failed()

    # --- storage mirroring ---------------------------------------------------
    def _mirror_assign(self, op: PendingOperation, slot: PlannedSlot) -> PlannedSlot:
        self.pending.start(op)
        try:
            persisted = self.store.persist_planned_slot(slot)
        except StorageFailure as e:
            self.grid.remove(slot.id)
            self._failed(op, e)
            raise
        stored = self.grid.readopt(slot.id, persisted) if persisted is not None else slot
        self.pending.confirm(op)
        publish_slot_assigned(stored, self.grid.week_key, bus=self._bus)
        return stored

    def _mirror_remove(self, op: PendingOperation, slot: PlannedSlot) -> PlannedSlot:
        self.pending.start(op)
        try:
            self.store.delete_planned_slot(slot.id)
        except StorageFailure as e:
            self.grid.place(slot)
            self._failed(op, e)
            raise
        self.pending.confirm(op)
        publish_slot_removed(slot, self.grid.week_key, bus=self._bus)
        return slot

    def _failed(self, op: PendingOperation, error: StorageFailure):
        self.pending.fail(op, error)
        logger.error("Could not persist %s: %s", op.kind, error)
        publish_sync_failed(op, error, bus=self._bus)

    def meal(self, meal_id: str) -> Meal:
        meal = self.meals.get(str(meal_id))
        if meal is None:
            raise UnknownMeal(meal_id)
        return meal
