"""Ingredient and meal cost math.

Inputs come straight from form fields while the user is still typing, so the
calculator is permissive: anything that does not parse as a non-negative
number counts as 0 and the running total keeps rendering.
"""
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from mealbudget.domain.Ingredient import Ingredient
from mealbudget.domain.Meal import Meal
from mealbudget.domain.errors import ValidationError
from mealbudget.utilities.numbers import ZERO, parse_decimal, parse_strict_decimal, round_money


def cost(unit_price: Any, amount: Any) -> Decimal:
    """Price per kg times kilograms, both coerced from draft text."""
    return parse_decimal(unit_price) * parse_decimal(amount)


def draft_cost(draft: Dict[str, Any]) -> Decimal:
    """Cost of one ingredient form row (name / unit_price / amount keys)."""
    ing = Ingredient.from_dict(draft)
    return cost(ing.unit_price, ing.amount)


def estimate_meal_cost(ingredients: Iterable[Any]) -> Decimal:
    """Sum of ingredient costs, rounded to cents for the meal's cost snapshot."""
    total = ZERO
    for ing in ingredients:
        if isinstance(ing, Ingredient):
            total += cost(ing.unit_price, ing.amount)
        else:
            total += draft_cost(ing)
    return round_money(total)


def _is_filled(value: Any) -> bool:
    return value is not None and str(value).strip() != ""


def parse_submitted(value: Any, field: str, blank: Optional[Decimal] = None) -> Decimal:
    """Strict parse for saved input: non-numeric or negative raises ValidationError.

    A blank value yields `blank` when given, otherwise it is rejected too.
    """
    if blank is not None and not _is_filled(value):
        return blank
    try:
        number = parse_strict_decimal(value)
    except ValueError:
        raise ValidationError(f"{field} must be a number, got {value!r}", field=field) from None
    if number < 0:
        raise ValidationError(f"{field} cannot be negative, got {value!r}", field=field)
    return number


def build_meal(name: str, drafts: Iterable[Dict[str, Any]]) -> Meal:
    """Turn the meal form into a Meal with its cost snapshot.

    Rows missing a name, a price or an amount are dropped; at least one
    complete row is required. A complete row with a non-numeric or negative
    price or amount is rejected.
    """
    meal_name = (name or "").strip()
    if not meal_name:
        raise ValidationError("Please enter a meal name.", field="name")

    ingredients: List[Ingredient] = []
    for d in drafts:
        d = dict(d)
        price = d.get("unit_price", d.get("kg_price", d.get("kgPrice")))
        amount = d.get("amount", d.get("amount_kg"))
        if not (d.get("name") or "").strip() or not _is_filled(price) or not _is_filled(amount):
            continue
        ingredients.append(Ingredient(
            d["name"], parse_submitted(price, "unit_price"), parse_submitted(amount, "amount"),
        ))

    if not ingredients:
        raise ValidationError("Please add at least one ingredient.", field="ingredients")

    return Meal(name=meal_name, estimated_cost=estimate_meal_cost(ingredients), ingredients=ingredients)


__all__ = ['cost', 'draft_cost', 'estimate_meal_cost', 'parse_submitted', 'build_meal']
