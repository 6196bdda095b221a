"""Grocery aggregation.

merge() folds ingredients from a recipe, or items typed in by hand, into the
running grocery list:

  - items are matched on their trimmed, lower-cased name;
  - amounts (always kilograms) add up across sources;
  - each recipe name is recorded once in the item's source list, manual
    entries leave no source;
  - unit price is last-non-zero-wins: a stored price of 0 adopts the incoming
    price, any stored non-zero price is kept. Two recipes disagreeing on a
    price are not reconciled; the first known price stays.

All functions here are pure: they return new lists and copies of changed
items and never touch their inputs.
"""
from dataclasses import replace
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Sequence

from mealbudget.domain.GroceryItem import GroceryItem
from mealbudget.domain.Ingredient import Ingredient
from mealbudget.domain.UnitAmount import UnitAmount
from mealbudget.utilities.config import CURRENCY_SYMBOL
from mealbudget.utilities.constants import MANUAL_SOURCE
from mealbudget.utilities.numbers import ZERO, round_money


def merge_key(name: str) -> str:
    return (name or "").strip().lower()


def _incoming(item: Any) -> Ingredient:
    if isinstance(item, Ingredient):
        return item
    if isinstance(item, GroceryItem):
        return Ingredient(item.name, item.unit_price, item.amount)
    return Ingredient.from_dict(item)


def merge(existing: Sequence[GroceryItem], new_items: Iterable[Any], provenance: str = MANUAL_SOURCE) -> List[GroceryItem]:
    merged: List[GroceryItem] = list(existing)
    index: Dict[str, int] = {item.key: i for i, item in enumerate(merged)}
    copied = set()

    for raw in new_items:
        ing = _incoming(raw)
        key = merge_key(ing.name)
        if not key:
            continue

        if key in index:
            pos = index[key]
            current = merged[pos]
            if pos not in copied:
                current = replace(current, source=list(current.source))
                copied.add(pos)
            current.amount = current.amount + ing.amount
            if provenance != MANUAL_SOURCE and provenance and provenance not in current.source:
                current.source.append(provenance)
            if current.unit_price == 0 and ing.unit_price != 0:
                current.unit_price = ing.unit_price
            merged[pos] = current
        else:
            merged.append(GroceryItem(
                name=ing.name,
                amount=ing.amount,
                unit_price=ing.unit_price,
                checked=False,
                source=[provenance] if provenance and provenance != MANUAL_SOURCE else [],
            ))
            index[key] = len(merged) - 1
            copied.add(len(merged) - 1)
    return merged


def toggle_checked(items: Sequence[GroceryItem], item_id: str) -> List[GroceryItem]:
    return [replace(i, checked=not i.checked, source=list(i.source)) if i.id == item_id else i for i in items]


def remove(items: Sequence[GroceryItem], item_id: str) -> List[GroceryItem]:
    return [i for i in items if i.id != item_id]


def clear_checked(items: Sequence[GroceryItem]) -> List[GroceryItem]:
    return [i for i in items if not i.checked]


def has_checked(items: Sequence[GroceryItem]) -> bool:
    return any(i.checked for i in items)


def item_cost(item: GroceryItem) -> Decimal:
    return item.amount * item.unit_price


def total(items: Sequence[GroceryItem]) -> Decimal:
    """Remaining-to-buy cost: unchecked items only, full precision."""
    return sum((item_cost(i) for i in items if not i.checked), ZERO)


# --- display ---------------------------------------------------------------
def format_amount(kilograms: Any) -> str:
    return UnitAmount(kilograms).display()


def format_money(value: Decimal) -> str:
    return f"{round_money(value)}{CURRENCY_SYMBOL}"


def item_view(item: GroceryItem) -> Dict[str, Any]:
    view = item.to_dict()
    view["amount_display"] = format_amount(item.amount)
    cost = item_cost(item)
    view["cost"] = str(round_money(cost))
    view["cost_display"] = format_money(cost) if cost > 0 else ""
    return view


__all__ = [
    'merge_key', 'merge', 'toggle_checked', 'remove', 'clear_checked', 'has_checked',
    'item_cost', 'total', 'format_amount', 'format_money', 'item_view',
]
