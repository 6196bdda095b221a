"""Planner error taxonomy.

ValidationError    - bad user input; rejected locally, never reaches storage.
SlotOccupied       - assign refused, the cell already holds a meal.
UnknownMeal        - assign refused, the meal id is not in the catalog.
GridNotLoaded      - the week has not been loaded yet (distinct from empty).
StorageFailure     - a store read/write failed; recoverable, caller decides retry.
"""
from typing import Optional


class PlannerError(Exception):
    """Base class for all planner errors."""


class ValidationError(PlannerError, ValueError):
    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class InvalidAmount(ValidationError):
    def __init__(self, value, field: str = "amount"):
        super().__init__(f"Amount must be a non-negative number, got {value!r}", field=field)
        self.value = value


class SlotOccupied(PlannerError):
    def __init__(self, day, meal_slot, occupant=None):
        super().__init__(f"{meal_slot} on {day} already holds a meal")
        self.day = day
        self.meal_slot = meal_slot
        self.occupant = occupant


class UnknownMeal(PlannerError, LookupError):
    def __init__(self, meal_id):
        super().__init__(f"Meal '{meal_id}' not found in catalog")
        self.meal_id = meal_id


class GridNotLoaded(PlannerError):
    pass


class StorageFailure(PlannerError):
    def __init__(self, message: str, operation: Optional[str] = None):
        super().__init__(message)
        self.operation = operation


__all__ = [
    'PlannerError', 'ValidationError', 'InvalidAmount', 'SlotOccupied',
    'UnknownMeal', 'GridNotLoaded', 'StorageFailure',
]
