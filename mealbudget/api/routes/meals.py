from fastapi import APIRouter, Depends, HTTPException

from mealbudget.api.deps import get_meal_repository
from mealbudget.infra.Meal_Repository import MealRepository
from mealbudget.logic.costing.ingredient_cost import build_meal, draft_cost, estimate_meal_cost
from mealbudget.utilities.numbers import round_money
from mealbudget.utilities.validators import CostPreviewInput, MealInput

router = APIRouter(prefix="/api/meals", tags=["meals"])


@router.get("")
def list_meals(meals: MealRepository = Depends(get_meal_repository)):
    """Meal catalog ordered by name (id, name, estimated cost)."""
    catalog = meals.fetch_meal_catalog()
    return {"meals": [m.summary() for m in catalog], "count": len(catalog)}


@router.post("", status_code=201)
def create_meal(payload: MealInput, meals: MealRepository = Depends(get_meal_repository)):
    meal = build_meal(payload.name, [i.model_dump() for i in payload.ingredients])
    meals.add_meal(meal)
    return meal.to_dict()


@router.post("/cost-preview")
def cost_preview(payload: CostPreviewInput):
    """Running cost of a meal form that is still being edited."""
    rows = [i.model_dump() for i in payload.ingredients]
    return {
        "rows": [str(round_money(draft_cost(r))) for r in rows],
        "estimated_cost": str(estimate_meal_cost(rows)),
    }


@router.get("/{meal_id}/ingredients")
def meal_ingredients(meal_id: str, meals: MealRepository = Depends(get_meal_repository)):
    meal = meals.get_meal(meal_id)
    if meal is None:
        raise HTTPException(status_code=404, detail="Meal not found")
    return {"meal_id": meal.id, "name": meal.name, "ingredients": [i.to_dict() for i in meal.ingredients]}
