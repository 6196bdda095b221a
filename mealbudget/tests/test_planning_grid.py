import unittest
from datetime import date

from mealbudget.domain.PlannedSlot import MealSlot, PlannedSlot
from mealbudget.domain.errors import GridNotLoaded, SlotOccupied, UnknownMeal, ValidationError
from mealbudget.logic.planning.grid import WeeklyPlanningGrid
from mealbudget.tests.fakes import make_meal


class TestWeeklyPlanningGrid(unittest.TestCase):

    def setUp(self):
        self.spaghetti = make_meal("Spaghetti", "12.50")
        self.salad = make_meal("Salad", "4.30")
        self.lookup = {m.id: m for m in (self.spaghetti, self.salad)}
        self.grid = WeeklyPlanningGrid(date(2024, 3, 13), self.lookup)

    def test_week_bounds_from_any_day(self):
        self.assertEqual(self.grid.start, date(2024, 3, 11))
        self.assertEqual(self.grid.end, date(2024, 3, 17))
        self.assertEqual(self.grid.week_key, "2024-03-11")

    def test_not_loaded_is_distinct_from_empty(self):
        self.assertFalse(self.grid.is_loaded)
        with self.assertRaises(GridNotLoaded):
            self.grid.slots_in_week()
        self.grid.load([])
        self.assertTrue(self.grid.is_loaded)
        self.assertEqual(self.grid.slots_in_week(), [])

    def test_load_keeps_only_this_week(self):
        records = [
            PlannedSlot(date(2024, 3, 11), "breakfast", self.spaghetti, id="mon"),
            PlannedSlot(date(2024, 3, 17), "dinner", self.salad, id="sun"),
            PlannedSlot(date(2024, 3, 18), "lunch", self.salad, id="next-mon"),
            PlannedSlot(date(2024, 3, 10), "lunch", self.salad, id="prev-sun"),
        ]
        self.grid.load(records)
        self.assertEqual([s.id for s in self.grid.slots_in_week()], ["mon", "sun"])

    def test_load_drops_duplicate_cell(self):
        records = [
            PlannedSlot("2024-03-12", "lunch", self.spaghetti, id="first"),
            PlannedSlot("2024-03-12", "lunch", self.salad, id="second"),
        ]
        with self.assertLogs("mealbudget.logic.planning.grid", level="WARNING"):
            self.grid.load(records)
        self.assertEqual([s.id for s in self.grid.slots_in_week()], ["first"])

    def test_assign_fills_cell(self):
        self.grid.load([])
        slot = self.grid.assign("2024-03-12", "lunch", "spaghetti")
        self.assertEqual(slot.meal, self.spaghetti)
        self.assertIs(self.grid.cell(date(2024, 3, 12), MealSlot.LUNCH), slot)
        self.assertIs(self.grid.find(slot.id), slot)

    def test_occupied_cell_is_refused(self):
        self.grid.load([])
        first = self.grid.assign("2024-03-12", "lunch", "spaghetti")
        with self.assertRaises(SlotOccupied) as ctx:
            self.grid.assign("2024-03-12", "LUNCH", "salad")
        self.assertIs(ctx.exception.occupant, first)
        self.assertEqual(len(self.grid.slots_in_week()), 1)

    def test_same_meal_in_other_cells_is_allowed(self):
        self.grid.load([])
        self.grid.assign("2024-03-12", "lunch", "spaghetti")
        self.grid.assign("2024-03-12", "dinner", "spaghetti")
        self.grid.assign("2024-03-13", "lunch", "spaghetti")
        self.assertEqual(len(self.grid.planned_meals()), 3)

    def test_unknown_meal_is_refused(self):
        self.grid.load([])
        with self.assertRaises(UnknownMeal):
            self.grid.assign("2024-03-12", "lunch", "pizza")
        self.assertEqual(self.grid.slots_in_week(), [])

    def test_day_outside_week_is_refused(self):
        self.grid.load([])
        with self.assertRaises(ValidationError):
            self.grid.assign("2024-03-18", "lunch", "salad")

    def test_bad_slot_name_is_refused(self):
        self.grid.load([])
        with self.assertRaises(ValidationError):
            self.grid.assign("2024-03-12", "brunch", "salad")

    def test_remove_is_idempotent(self):
        self.grid.load([])
        slot = self.grid.assign("2024-03-12", "lunch", "salad")
        self.assertIs(self.grid.remove(slot.id), slot)
        self.assertIsNone(self.grid.remove(slot.id))
        self.assertIsNone(self.grid.remove("never-existed"))
        self.assertEqual(self.grid.slots_in_week(), [])

    def test_removed_cell_can_be_refilled(self):
        self.grid.load([])
        slot = self.grid.assign("2024-03-12", "lunch", "salad")
        self.grid.remove(slot.id)
        again = self.grid.assign("2024-03-12", "lunch", "spaghetti")
        self.assertEqual(again.meal, self.spaghetti)

    def test_callable_lookup(self):
        grid = WeeklyPlanningGrid(date(2024, 3, 13), self.lookup.get).load([])
        self.assertEqual(grid.assign("2024-03-11", "breakfast", "salad").meal, self.salad)

    def test_view_has_three_rows_of_seven(self):
        self.grid.load([])
        self.grid.assign("2024-03-11", "dinner", "salad")
        view = self.grid.to_view()
        self.assertEqual([r["meal_slot"] for r in view["rows"]], ["breakfast", "lunch", "dinner"])
        self.assertTrue(all(len(r["cells"]) == 7 for r in view["rows"]))
        self.assertEqual(view["rows"][2]["cells"][0]["meal"]["name"], "Salad")
        self.assertIsNone(view["rows"][0]["cells"][0])
