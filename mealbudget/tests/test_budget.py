import unittest
from datetime import date
from decimal import Decimal

from mealbudget.domain.errors import InvalidAmount, ValidationError
from mealbudget.events.Event_Bus import BUDGET_OVER, BUDGET_SET, EventBus
from mealbudget.logic.budget.ledger import evaluate
from mealbudget.logic.budget.service import BudgetService
from mealbudget.logic.planning.grid import WeeklyPlanningGrid
from mealbudget.tests.fakes import InMemoryBudgetStore, make_meal


class TestLedger(unittest.TestCase):

    def test_used_and_left(self):
        ledger = evaluate("150.00", [make_meal("Spaghetti", "12.50"), make_meal("Salad", "4.30")])
        self.assertEqual(ledger.used, Decimal("16.80"))
        self.assertEqual(ledger.left, Decimal("133.20"))
        self.assertFalse(ledger.over_budget)

    def test_exactly_at_budget_is_not_over(self):
        ledger = evaluate("100.00", [make_meal("A", "60.00"), make_meal("B", "40.00")])
        self.assertFalse(ledger.over_budget)
        self.assertEqual(ledger.left, Decimal("0"))
        self.assertEqual(ledger.progress, Decimal("1"))

    def test_one_cent_over(self):
        ledger = evaluate("100.00", [make_meal("A", "60.00"), make_meal("B", "40.01")])
        self.assertTrue(ledger.over_budget)
        self.assertEqual(ledger.left, Decimal("0"))
        self.assertEqual(ledger.progress, Decimal("1"))

    def test_zero_budget_means_unset(self):
        ledger = evaluate(0, [make_meal("A", "5")])
        self.assertFalse(ledger.over_budget)
        self.assertIsNone(ledger.progress)
        self.assertEqual(ledger.left, Decimal("0"))
        self.assertIsNone(ledger.to_dict()["progress"])

    def test_empty_week(self):
        ledger = evaluate("50", [])
        self.assertEqual(ledger.used, Decimal("0"))
        self.assertEqual(ledger.left, Decimal("50"))
        self.assertEqual(ledger.progress, Decimal("0"))

    def test_same_meal_twice_counts_twice(self):
        pasta = make_meal("Pasta", "3.10")
        self.assertEqual(evaluate("10", [pasta, pasta]).used, Decimal("6.20"))

    def test_to_dict_rounds_money(self):
        data = evaluate("150", [make_meal("Spaghetti", "12.5")]).to_dict()
        self.assertEqual(data["budget"], "150.00")
        self.assertEqual(data["used"], "12.50")
        self.assertEqual(data["left"], "137.50")
        self.assertAlmostEqual(data["progress"], 12.5 / 150)


class TestBudgetService(unittest.TestCase):

    def setUp(self):
        self.store = InMemoryBudgetStore()
        self.bus = EventBus()
        self.events = []
        for name in (BUDGET_SET, BUDGET_OVER):
            self.bus.subscribe(name, lambda event, payload: self.events.append(event))
        self.service = BudgetService(self.store, event_bus=self.bus)

    def test_unset_week_reads_zero(self):
        self.assertEqual(self.service.get_budget("2024-03-11"), Decimal("0"))

    def test_set_budget_upserts(self):
        self.service.set_budget("2024-03-11", "150")
        self.service.set_budget("2024-03-11", "120,50")
        self.assertEqual(self.service.get_budget("2024-03-11"), Decimal("120.50"))
        self.assertEqual(self.store.writes, 2)
        self.assertEqual(self.events, [BUDGET_SET, BUDGET_SET])

    def test_budgets_are_per_week(self):
        self.service.set_budget("2024-03-11", "150")
        self.assertEqual(self.service.get_budget("2024-03-18"), Decimal("0"))

    def test_invalid_amount_keeps_previous_value(self):
        self.service.set_budget("2024-03-11", "150")
        for bad in ("abc", "", "-5", None):
            with self.assertRaises(InvalidAmount):
                self.service.set_budget("2024-03-11", bad)
        self.assertEqual(self.service.get_budget("2024-03-11"), Decimal("150"))
        self.assertEqual(self.store.writes, 1)

    def test_zero_is_accepted(self):
        self.service.set_budget("2024-03-11", "0")
        self.assertEqual(self.service.get_budget("2024-03-11"), Decimal("0"))

    def test_week_key_must_be_monday(self):
        with self.assertRaises(ValidationError):
            self.service.set_budget("2024-03-12", "100")
        self.assertEqual(self.store.writes, 0)

    def test_ledger_waits_for_loaded_grid(self):
        grid = WeeklyPlanningGrid(date(2024, 3, 11), {})
        self.assertIsNone(self.service.ledger_for(grid))

    def test_ledger_for_over_budget_week(self):
        meal = make_meal("Feast", "80")
        grid = WeeklyPlanningGrid(date(2024, 3, 11), {meal.id: meal}).load([])
        grid.assign("2024-03-11", "dinner", meal.id)
        grid.assign("2024-03-12", "dinner", meal.id)
        self.service.set_budget("2024-03-11", "150")
        ledger = self.service.ledger_for(grid)
        self.assertEqual(ledger.used, Decimal("160"))
        self.assertTrue(ledger.over_budget)
        self.assertEqual(self.events, [BUDGET_SET])

    def test_reading_ledger_twice_publishes_nothing(self):
        meal = make_meal("Feast", "80")
        grid = WeeklyPlanningGrid(date(2024, 3, 11), {meal.id: meal}).load([])
        grid.assign("2024-03-11", "dinner", meal.id)
        self.service.set_budget("2024-03-11", "50")
        self.service.ledger_for(grid)
        self.service.ledger_for(grid)
        self.assertEqual(self.events, [BUDGET_SET])
        self.service.ledger_for(grid, notify=True)
        self.assertEqual(self.events, [BUDGET_SET, BUDGET_OVER])
