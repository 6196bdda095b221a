"""Ingredient domain entity: name, price per kilogram and amount in kilograms."""
from decimal import Decimal
from typing import Any, Optional

from mealbudget.utilities.numbers import ZERO, parse_decimal, plain


class Ingredient:
    def __init__(self, name: str = "", unit_price: Any = ZERO, amount: Any = ZERO):
        self.name = (name or "").strip()
        # currency per kg
        self.unit_price: Decimal = parse_decimal(unit_price)
        # kg
        self.amount: Decimal = parse_decimal(amount)

    @property
    def key(self) -> str:
        """Case-insensitive identity used for matching across sources."""
        return self.name.lower()

    def cost(self) -> Decimal:
        return self.unit_price * self.amount

    def __eq__(self, other) -> bool:
        if not isinstance(other, Ingredient):
            return NotImplemented
        return (self.key, self.unit_price, self.amount) == (other.key, other.unit_price, other.amount)

    def __str__(self) -> str:
        return f"{self.name} - {plain(self.amount)} kg @ {plain(self.unit_price)}/kg"

    __repr__ = __str__

    @staticmethod
    def from_dict(data: Optional[dict]):
        '''Creates an Ingredient from a dictionary. Accepts the older price/amount key spellings.'''
        d = dict(data) if isinstance(data, dict) else {}
        price = d.get("unit_price", d.get("kg_price", d.get("kgPrice", 0)))
        amount = d.get("amount_kg", d.get("amount", 0))
        return Ingredient(d.get("name", "") or "", price, amount)

    def to_dict(self):
        '''Converts the Ingredient to a dictionary for JSON persistence.'''
        return {
            "name": self.name,
            "unit_price": str(self.unit_price),
            "amount": str(self.amount),
        }
