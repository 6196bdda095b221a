from fastapi import APIRouter, Depends

from mealbudget.api.deps import get_grocery_list
from mealbudget.logic.shopping.grocery_list import GroceryList
from mealbudget.utilities.validators import GroceryFromMealInput, GroceryManualInput

router = APIRouter(prefix="/api/grocery", tags=["grocery"])


@router.get("")
def list_groceries(groceries: GroceryList = Depends(get_grocery_list)):
    return groceries.view()


@router.post("/from-meal")
def add_from_meal(payload: GroceryFromMealInput, groceries: GroceryList = Depends(get_grocery_list)):
    groceries.add_from_meal(payload.meal_id)
    return groceries.view()


@router.post("/manual")
def add_manual(payload: GroceryManualInput, groceries: GroceryList = Depends(get_grocery_list)):
    groceries.add_manual(payload.name, payload.amount, payload.unit_price)
    return groceries.view()


@router.post("/clear-checked")
def clear_checked(groceries: GroceryList = Depends(get_grocery_list)):
    groceries.clear_checked()
    return groceries.view()


@router.post("/{item_id}/toggle")
def toggle_item(item_id: str, groceries: GroceryList = Depends(get_grocery_list)):
    groceries.toggle_checked(item_id)
    return groceries.view()


@router.delete("/{item_id}")
def remove_item(item_id: str, groceries: GroceryList = Depends(get_grocery_list)):
    groceries.remove(item_id)
    return groceries.view()
