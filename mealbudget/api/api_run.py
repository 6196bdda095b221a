from fastapi import FastAPI, Request, Query, Depends
from fastapi.responses import JSONResponse, Response

from datetime import date as _date
from typing import Optional
import logging

from mealbudget.api.deps import get_budget_service, get_grocery_list, get_planner
from mealbudget.api.routes import budget, grocery, meals, plan
from mealbudget.domain.errors import (
    GridNotLoaded, SlotOccupied, StorageFailure, UnknownMeal, ValidationError
)
from mealbudget.events.web_observers import start as start_event_observers, get_events as get_web_events
from mealbudget.infra.pdf_utils import generate_pdf_for_grocery_list, generate_pdf_for_week
from mealbudget.logic.budget.service import BudgetService
from mealbudget.logic.planning.planner import WeekPlanner
from mealbudget.logic.planning.week_keys import today
from mealbudget.logic.shopping.grocery_list import GroceryList

# Logging
logger = logging.getLogger("mealbudget_app")

# Initialize FastAPI app
app = FastAPI(title="Weekly Meal Budget Planner API")

# Include routers
app.include_router(meals.router)
app.include_router(plan.router)
app.include_router(budget.router)
app.include_router(grocery.router)


@app.on_event("startup")
def _startup_web_observers():
    """Register event bus subscribers for web alerts when the app starts."""
    start_event_observers()
    logger.info("Web observers for planner events started")


# -------------------- Error mapping --------------------
def _error(status: int, exc: Exception, **extra):
    return JSONResponse(status_code=status, content={"detail": str(exc), **extra})


@app.exception_handler(ValidationError)
def _validation_error(request: Request, exc: ValidationError):
    return _error(400, exc, field=exc.field)


@app.exception_handler(UnknownMeal)
def _unknown_meal(request: Request, exc: UnknownMeal):
    return _error(404, exc, meal_id=str(exc.meal_id))


@app.exception_handler(SlotOccupied)
def _slot_occupied(request: Request, exc: SlotOccupied):
    occupant = exc.occupant.to_view() if exc.occupant is not None else None
    return _error(409, exc, occupant=occupant)


@app.exception_handler(GridNotLoaded)
def _grid_not_loaded(request: Request, exc: GridNotLoaded):
    return _error(409, exc)


@app.exception_handler(StorageFailure)
def _storage_failure(request: Request, exc: StorageFailure):
    logger.error("Storage failure during %s %s: %s", request.method, request.url.path, exc)
    return _error(503, exc, operation=exc.operation)


# -------------------- Events --------------------
@app.get('/api/events')
def api_events(since: Optional[int] = Query(default=None),
               limit: Optional[int] = Query(default=None, ge=0, le=300)):
    """Recent planner events newer than `since`; poll with the returned next_cursor."""
    return get_web_events(since, limit)


# -------------------- PDF export --------------------
@app.get("/export_pdf")
def export_pdf(day: Optional[_date] = Query(default=None),
               planner: WeekPlanner = Depends(get_planner),
               budgets: BudgetService = Depends(get_budget_service)):
    grid = planner.load(day or today())
    pdf_bytes = generate_pdf_for_week(grid, budgets.ledger_for(grid))
    headers = {"Content-Disposition": f'attachment; filename="meal_plan_{grid.week_key}.pdf"'}
    return Response(content=pdf_bytes, media_type="application/pdf", headers=headers)


@app.get("/export_pdf/grocery")
def export_grocery_pdf(groceries: GroceryList = Depends(get_grocery_list)):
    pdf_bytes = generate_pdf_for_grocery_list(groceries.items)
    headers = {"Content-Disposition": 'attachment; filename="grocery_list.pdf"'}
    return Response(content=pdf_bytes, media_type="application/pdf", headers=headers)
