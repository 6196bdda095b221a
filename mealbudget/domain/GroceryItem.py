"""GroceryItem domain entity: one deduplicated line of the grocery list."""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List
from uuid import uuid4

from mealbudget.utilities.numbers import ZERO, parse_decimal


def new_item_id() -> str:
    return str(uuid4())


@dataclass
class GroceryItem:
    name: str
    amount: Decimal = ZERO  # kg
    unit_price: Decimal = ZERO  # per kg
    checked: bool = False
    source: List[str] = field(default_factory=list)
    id: str = field(default_factory=new_item_id)

    def __post_init__(self):
        self.name = (self.name or "").strip()
        self.amount = parse_decimal(self.amount)
        self.unit_price = parse_decimal(self.unit_price)
        self.source = [s for s in (self.source or []) if s]

    @property
    def key(self) -> str:
        return self.name.lower()

    def cost(self) -> Decimal:
        return self.amount * self.unit_price

    @staticmethod
    def from_dict(data):
        '''Items saved without an id (older lists) get a fresh one.'''
        d = dict(data)
        return GroceryItem(
            name=d.get("name", "") or "",
            amount=d.get("amount", 0),
            unit_price=d.get("unit_price", d.get("kgPrice", 0)),
            checked=bool(d.get("checked", False)),
            source=list(d.get("source") or []),
            id=str(d["id"]) if d.get("id") else new_item_id(),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "amount": str(self.amount),
            "unit_price": str(self.unit_price),
            "checked": self.checked,
            "source": list(self.source),
        }
