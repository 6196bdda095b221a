from datetime import date as _date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from mealbudget.api.deps import get_budget_service, get_planner
from mealbudget.logic.budget.service import BudgetService
from mealbudget.logic.planning.planner import WeekPlanner
from mealbudget.logic.planning.week_keys import iter_weeks, shift_week, today, week_label
from mealbudget.utilities.validators import AssignSlotInput

router = APIRouter(prefix="/api/plan", tags=["plan"])


def week_payload(planner: WeekPlanner, budgets: BudgetService):
    grid = planner.grid
    ledger = budgets.ledger_for(grid)
    return {
        **grid.to_view(),
        "label": week_label(grid.start),
        "ledger": ledger.to_dict() if ledger else None,
        "meals": [m.summary() for m in planner.catalog_meals()],
    }


@router.get("")
def get_week(day: Optional[_date] = Query(default=None),
             planner: WeekPlanner = Depends(get_planner),
             budgets: BudgetService = Depends(get_budget_service)):
    """Grid, catalog and ledger for the week containing `day` (default today)."""
    planner.load(day or today())
    return week_payload(planner, budgets)


@router.get("/weeks")
def list_weeks(day: Optional[_date] = Query(default=None),
               before: int = Query(default=1, ge=0, le=26),
               count: int = Query(default=6, ge=1, le=52)):
    """Week selector around `day`: `before` past weeks, then `count` weeks in total."""
    current = today()
    weeks = iter_weeks(shift_week(day or current, -before), count, today=current)
    return {"weeks": [{**w, "start": w["start"].isoformat(), "end": w["end"].isoformat()} for w in weeks]}


@router.post("/slots", status_code=201)
def assign_slot(payload: AssignSlotInput,
                planner: WeekPlanner = Depends(get_planner),
                budgets: BudgetService = Depends(get_budget_service)):
    planner.load(payload.day)
    slot = planner.assign(payload.day, payload.meal_slot, payload.meal_id)
    return {"slot": slot.to_view(), "ledger": budgets.ledger_for(planner.grid, notify=True).to_dict()}


@router.delete("/slots/{slot_id}")
def remove_slot(slot_id: str,
                day: Optional[_date] = Query(default=None),
                planner: WeekPlanner = Depends(get_planner),
                budgets: BudgetService = Depends(get_budget_service)):
    """Idempotent: removing a slot that is not planned still succeeds.

    The week is taken from the stored slot; `day` only picks the week whose
    ledger is returned when the id is unknown.
    """
    grid = planner.load(planner.week_of(slot_id) or day or today())
    removed = planner.remove(slot_id)
    return {
        "removed": removed is not None,
        "week_key": grid.week_key,
        "ledger": budgets.ledger_for(grid).to_dict(),
    }
