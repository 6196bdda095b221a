import unittest
from decimal import Decimal

from mealbudget.domain.Ingredient import Ingredient
from mealbudget.domain.errors import StorageFailure, ValidationError
from mealbudget.events.Event_Bus import EventBus, GROCERY_CHANGED
from mealbudget.logic.shopping.grocery_list import GroceryList
from mealbudget.tests.fakes import InMemoryCatalog, InMemoryGroceryStorage, make_meal


class TestGroceryList(unittest.TestCase):

    def setUp(self):
        spaghetti = make_meal("Spaghetti", "2.50", ingredients=[
            Ingredient("Pasta", "3.00", "0.5"),
            Ingredient("Tomato", "2.50", "0.4"),
        ])
        self.catalog = InMemoryCatalog([spaghetti])
        self.storage = InMemoryGroceryStorage()
        self.bus = EventBus()
        self.seen = []
        self.bus.subscribe(GROCERY_CHANGED, lambda name, payload: self.seen.append(payload))
        self.groceries = GroceryList(self.storage, self.catalog, event_bus=self.bus)
        self.groceries.load()

    def test_add_from_meal_labels_items_with_meal_name(self):
        items = self.groceries.add_from_meal("spaghetti")
        self.assertEqual([i.name for i in items], ["Pasta", "Tomato"])
        self.assertTrue(all(i.source == ["Spaghetti"] for i in items))
        self.assertEqual(self.storage.saves, 1)
        self.assertEqual(len(self.seen), 1)

    def test_unknown_meal_adds_nothing(self):
        items = self.groceries.add_from_meal("nope")
        self.assertEqual(items, [])

    def test_manual_entry_requires_name(self):
        with self.assertRaises(ValidationError):
            self.groceries.add_manual("   ", "1", "1")
        self.assertEqual(self.storage.saves, 0)

    def test_every_change_is_saved(self):
        self.groceries.add_manual("Milk", "1", "1.20")
        item_id = self.groceries.items[0].id
        self.groceries.toggle_checked(item_id)
        self.assertTrue(self.storage.items[0].checked)
        self.groceries.clear_checked()
        self.assertEqual(self.storage.items, [])
        self.assertEqual(self.storage.saves, 3)

    def test_failed_save_keeps_previous_list(self):
        self.groceries.add_manual("Milk", "1", "1.20")
        before = list(self.groceries.items)
        self.storage.fail_writes = True
        with self.assertRaises(StorageFailure):
            self.groceries.add_from_meal("spaghetti")
        self.assertEqual(self.groceries.items, before)
        self.assertEqual(len(self.seen), 1)

    def test_reload_restores_saved_items(self):
        self.groceries.add_from_meal("spaghetti")
        again = GroceryList(self.storage, self.catalog, event_bus=self.bus)
        self.assertFalse(again.is_loaded)
        again.load()
        self.assertEqual([i.name for i in again.items], ["Pasta", "Tomato"])

    def test_view_totals(self):
        self.groceries.add_from_meal("spaghetti")
        view = self.groceries.view()
        self.assertEqual(view["count"], 2)
        self.assertEqual(view["total"], "2.50")
        self.assertFalse(view["has_checked"])
        self.assertEqual(self.groceries.total(), Decimal("2.500"))

    def test_negative_manual_amount_is_rejected_without_saving(self):
        with self.assertRaises(ValidationError) as ctx:
            self.groceries.add_manual("Milk", "-1", "1.20")
        self.assertEqual(ctx.exception.field, "amount")
        with self.assertRaises(ValidationError) as ctx:
            self.groceries.add_manual("Milk", "1", "cheap")
        self.assertEqual(ctx.exception.field, "unit_price")
        self.assertEqual(self.groceries.items, [])
        self.assertEqual(self.storage.saves, 0)
        self.assertEqual(self.seen, [])

    def test_blank_manual_amount_counts_as_zero(self):
        items = self.groceries.add_manual("Salt", "", None)
        self.assertEqual(items[0].amount, Decimal("0"))
        self.assertEqual(items[0].unit_price, Decimal("0"))
