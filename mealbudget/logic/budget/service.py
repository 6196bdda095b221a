"""Budget ceiling persistence and the per-week ledger."""
import logging
from decimal import Decimal
from typing import Any, Optional

from mealbudget.domain.WeeklyBudget import WeeklyBudget
from mealbudget.domain.errors import InvalidAmount
from mealbudget.domain.ports import BudgetStore
from mealbudget.events.Event_Bus import EventBus
from mealbudget.events.event_helpers import publish_budget_over, publish_budget_set
from mealbudget.logic.budget.ledger import Ledger, evaluate
from mealbudget.logic.planning.grid import WeeklyPlanningGrid
from mealbudget.logic.planning.week_keys import parse_week_key
from mealbudget.utilities.numbers import ZERO, parse_strict_decimal

logger = logging.getLogger(__name__)


class BudgetService:
    def __init__(self, store: BudgetStore, event_bus: Optional[EventBus] = None):
        self.store = store
        self._bus = event_bus

    def get_budget(self, week_key: str) -> Decimal:
        """Stored ceiling for the week, 0 when none was set."""
        record = self.store.fetch_budget(week_key)
        return record.amount if record is not None else ZERO

    def set_budget(self, week_key: str, amount: Any) -> WeeklyBudget:
        """Upsert the ceiling. Non-numeric or negative input is rejected before the store is touched."""
        parse_week_key(week_key)
        try:
            value = parse_strict_decimal(amount)
        except ValueError:
            raise InvalidAmount(amount) from None
        if value < 0:
            raise InvalidAmount(amount)
        record = self.store.upsert_budget(week_key, value)
        logger.info("Budget for week %s set to %s", week_key, record.amount)
        publish_budget_set(record, bus=self._bus)
        return record

    def ledger_for(self, grid: WeeklyPlanningGrid, budget_amount: Optional[Decimal] = None,
                   notify: bool = False) -> Optional[Ledger]:
        """Ledger for a loaded grid; None while the week is still loading.

        Reads are silent. Callers that just changed the week (a new meal, a new
        ceiling) pass notify=True so an over-budget week publishes budget.over.
        """
        if not grid.is_loaded:
            return None
        if budget_amount is None:
            budget_amount = self.get_budget(grid.week_key)
        ledger = evaluate(budget_amount, grid.planned_meals())
        if notify and ledger.over_budget:
            logger.info("Week %s is over budget: %s > %s", grid.week_key, ledger.used, ledger.budget)
            publish_budget_over(grid.week_key, ledger.used, ledger.budget, bus=self._bus)
        return ledger
