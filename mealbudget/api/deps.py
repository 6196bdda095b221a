"""Request-scoped wiring of the planner hosts to the JSON adapters.

Each request builds its hosts fresh from storage, so the in-memory grid and
grocery list never outlive a request. Tests override get_data_dir.
"""
from pathlib import Path

from fastapi import Depends

from mealbudget.infra.Budget_Repository import BudgetRepository
from mealbudget.infra.Local_Storage import GroceryListStore, LocalKeyValueStore
from mealbudget.infra.Meal_Repository import MealRepository
from mealbudget.infra.Plan_Repository import PlanRepository
from mealbudget.infra.paths import (
    BUDGETS_FILE, DATA_DIR, LOCAL_STORAGE_FILE, MEALS_FILE, PLANNED_MEALS_FILE, data_file
)
from mealbudget.logic.budget.service import BudgetService
from mealbudget.logic.planning.planner import WeekPlanner
from mealbudget.logic.shopping.grocery_list import GroceryList
from mealbudget.utilities.config import DEFAULT_USER_ID


def get_data_dir() -> Path:
    return DATA_DIR


def get_meal_repository(data_dir: Path = Depends(get_data_dir)) -> MealRepository:
    return MealRepository(data_file(data_dir, MEALS_FILE.name))


def get_planner(data_dir: Path = Depends(get_data_dir),
                meals: MealRepository = Depends(get_meal_repository)) -> WeekPlanner:
    return WeekPlanner(meals, PlanRepository(data_file(data_dir, PLANNED_MEALS_FILE.name), meals))


def get_budget_service(data_dir: Path = Depends(get_data_dir)) -> BudgetService:
    return BudgetService(BudgetRepository(data_file(data_dir, BUDGETS_FILE.name), user_id=DEFAULT_USER_ID))


def get_grocery_list(data_dir: Path = Depends(get_data_dir),
                     meals: MealRepository = Depends(get_meal_repository)) -> GroceryList:
    storage = GroceryListStore(LocalKeyValueStore(data_file(data_dir, LOCAL_STORAGE_FILE.name)))
    groceries = GroceryList(storage, catalog=meals)
    groceries.load()
    return groceries
