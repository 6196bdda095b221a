"""Weekly budget repository: one ceiling per (user, week key), upsert-only."""
import logging
from decimal import Decimal
from pathlib import Path
from typing import Dict, Optional

from mealbudget.domain.WeeklyBudget import WeeklyBudget
from mealbudget.infra.json_store import atomic_write_json, read_json
from mealbudget.infra.paths import BUDGETS_FILE
from mealbudget.utilities.config import DEFAULT_USER_ID

logger = logging.getLogger(__name__)


class BudgetRepository:
    def __init__(self, path: Optional[Path] = None, user_id: str = DEFAULT_USER_ID):
        self.path = Path(path) if path is not None else BUDGETS_FILE
        self.user_id = user_id

    def _store(self) -> Dict[str, Dict[str, str]]:
        data = read_json(self.path, {})
        return data if isinstance(data, dict) else {}

    def fetch_budget(self, week_key: str) -> Optional[WeeklyBudget]:
        amount = self._store().get(self.user_id, {}).get(week_key)
        if amount is None or amount == "":
            return None
        return WeeklyBudget(week_key, amount, user_id=self.user_id)

    def upsert_budget(self, week_key: str, amount: Decimal) -> WeeklyBudget:
        store = self._store()
        store.setdefault(self.user_id, {})[week_key] = str(amount)
        atomic_write_json(self.path, store)
        return WeeklyBudget(week_key, amount, user_id=self.user_id)
