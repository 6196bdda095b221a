from datetime import date as _date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from mealbudget.api.deps import get_budget_service, get_planner
from mealbudget.logic.budget.service import BudgetService
from mealbudget.logic.planning.planner import WeekPlanner
from mealbudget.logic.planning.week_keys import today, week_key, week_label
from mealbudget.utilities.validators import BudgetInput

router = APIRouter(prefix="/api/budget", tags=["budget"])


@router.get("")
def get_budget(day: Optional[_date] = Query(default=None),
               planner: WeekPlanner = Depends(get_planner),
               budgets: BudgetService = Depends(get_budget_service)):
    grid = planner.load(day or today())
    ledger = budgets.ledger_for(grid)
    return {"week_key": grid.week_key, "label": week_label(grid.start), **ledger.to_dict()}


@router.put("")
def put_budget(payload: BudgetInput,
               planner: WeekPlanner = Depends(get_planner),
               budgets: BudgetService = Depends(get_budget_service)):
    key = payload.week_key or week_key(payload.day or today())
    record = budgets.set_budget(key, payload.amount)
    grid = planner.load(record.valid_from)
    ledger = budgets.ledger_for(grid, record.amount, notify=True)
    return {"week_key": record.week_key, "label": week_label(grid.start), **ledger.to_dict()}
