import json
import tempfile
import unittest
from datetime import date
from decimal import Decimal
from pathlib import Path

from mealbudget.domain.GroceryItem import GroceryItem
from mealbudget.domain.Ingredient import Ingredient
from mealbudget.domain.PlannedSlot import PlannedSlot
from mealbudget.domain.errors import StorageFailure
from mealbudget.infra.Budget_Repository import BudgetRepository
from mealbudget.infra.Local_Storage import GroceryListStore, LocalKeyValueStore
from mealbudget.infra.Meal_Repository import MealRepository
from mealbudget.infra.Plan_Repository import PlanRepository
from mealbudget.tests.fakes import make_meal


class TestJsonRepositories(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self._tmp.name)
        self.meals = MealRepository(self.dir / 'meals.json')
        self.plan = PlanRepository(self.dir / 'planned_meals.json', self.meals)

    def tearDown(self):
        self._tmp.cleanup()

    def test_missing_files_read_as_empty(self):
        self.assertEqual(self.meals.fetch_meal_catalog(), [])
        self.assertEqual(self.plan.fetch_planned_slots(date(2024, 3, 11), date(2024, 3, 17)), [])
        self.assertIsNone(BudgetRepository(self.dir / 'weekly_budgets.json').fetch_budget("2024-03-11"))

    def test_catalog_sorted_by_name(self):
        self.meals.add_meal(make_meal("salad", "4.30"))
        self.meals.add_meal(make_meal("Pasta", "3.10", ingredients=[Ingredient("Pasta", "3", "0.5")]))
        self.assertEqual([m.name for m in self.meals.fetch_meal_catalog()], ["Pasta", "salad"])
        ingredients = self.meals.fetch_ingredients("pasta")
        self.assertEqual(ingredients, [Ingredient("Pasta", "3", "0.5")])
        self.assertEqual(self.meals.fetch_ingredients("nope"), [])

    def test_planned_slots_round_trip_with_meal_join(self):
        salad = self.meals.add_meal(make_meal("Salad", "4.30"))
        slot = self.plan.persist_planned_slot(PlannedSlot("2024-03-12", "lunch", salad))
        self.plan.persist_planned_slot(PlannedSlot("2024-03-19", "lunch", salad))
        found = self.plan.fetch_planned_slots(date(2024, 3, 11), date(2024, 3, 17))
        self.assertEqual([s.id for s in found], [slot.id])
        self.assertEqual(found[0].meal.estimated_cost, Decimal("4.30"))

    def test_find_planned_slot_by_id(self):
        salad = self.meals.add_meal(make_meal("Salad", "4.30"))
        slot = self.plan.persist_planned_slot(PlannedSlot("2024-03-20", "dinner", salad))
        found = self.plan.find_planned_slot(slot.id)
        self.assertEqual(found.date, date(2024, 3, 20))
        self.assertEqual(found.meal.name, "Salad")
        self.assertIsNone(self.plan.find_planned_slot("missing"))

    def test_stored_cell_is_unique(self):
        salad = self.meals.add_meal(make_meal("Salad", "4.30"))
        self.plan.persist_planned_slot(PlannedSlot("2024-03-12", "lunch", salad))
        with self.assertRaises(StorageFailure):
            self.plan.persist_planned_slot(PlannedSlot("2024-03-12", "lunch", salad))

    def test_delete_is_idempotent(self):
        salad = self.meals.add_meal(make_meal("Salad", "4.30"))
        slot = self.plan.persist_planned_slot(PlannedSlot("2024-03-12", "lunch", salad))
        self.plan.delete_planned_slot(slot.id)
        self.plan.delete_planned_slot(slot.id)
        self.assertEqual(self.plan.fetch_planned_slots(date(2024, 3, 11), date(2024, 3, 17)), [])

    def test_slot_for_deleted_meal_is_skipped(self):
        records = [{"id": "x", "date": "2024-03-12", "meal_type": "lunch", "meal_id": "gone"},
                   {"id": "y", "date": "bad", "meal_type": "lunch", "meal_id": "gone"}]
        (self.dir / 'planned_meals.json').write_text(json.dumps(records), encoding='utf-8')
        self.assertEqual(self.plan.fetch_planned_slots(date(2024, 3, 11), date(2024, 3, 17)), [])

    def test_budget_upsert_per_user(self):
        path = self.dir / 'weekly_budgets.json'
        mine = BudgetRepository(path, user_id="me")
        other = BudgetRepository(path, user_id="you")
        mine.upsert_budget("2024-03-11", Decimal("150.00"))
        mine.upsert_budget("2024-03-11", Decimal("120"))
        other.upsert_budget("2024-03-11", Decimal("80"))
        self.assertEqual(mine.fetch_budget("2024-03-11").amount, Decimal("120"))
        self.assertEqual(other.fetch_budget("2024-03-11").amount, Decimal("80"))
        self.assertIsNone(mine.fetch_budget("2024-03-18"))

    def test_grocery_list_persists_under_its_key(self):
        kv = LocalKeyValueStore(self.dir / 'local_storage.json')
        kv.set_item("theme", "dark")
        store = GroceryListStore(kv)
        store.save_local_grocery_list([GroceryItem("Tomato", "0.5", "2.50", source=["Spaghetti"], id="t")])
        loaded = store.load_local_grocery_list()
        self.assertEqual(loaded[0].id, "t")
        self.assertEqual(loaded[0].amount, Decimal("0.5"))
        self.assertEqual(loaded[0].source, ["Spaghetti"])
        self.assertEqual(kv.get_item("theme"), "dark")

    def test_grocery_items_without_id_get_one(self):
        kv = LocalKeyValueStore(self.dir / 'local_storage.json')
        kv.set_item("my-food-app-grocery-list", [{"name": "Milk", "amount": 1, "kgPrice": 1.2, "checked": True}])
        loaded = GroceryListStore(kv).load_local_grocery_list()
        self.assertTrue(loaded[0].id)
        self.assertTrue(loaded[0].checked)
        self.assertEqual(loaded[0].unit_price, Decimal("1.2"))

    def test_corrupt_file_is_a_storage_failure(self):
        (self.dir / 'meals.json').write_text("{not json", encoding='utf-8')
        with self.assertRaises(StorageFailure):
            self.meals.fetch_meal_catalog()
