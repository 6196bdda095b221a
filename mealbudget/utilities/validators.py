"""
Input validation schemas using Pydantic for the JSON API.

Prices and amounts stay loosely typed (text or number): the meal form sends
draft values, and the cost calculator decides how to coerce them.
"""
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional, Union
from datetime import date

NumberLike = Union[str, int, float]


class IngredientInput(BaseModel):
    """One row of the meal form."""
    name: str = ""
    unit_price: Optional[NumberLike] = None
    amount: Optional[NumberLike] = None

    @field_validator('name')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        return v.strip() if isinstance(v, str) else v


class MealInput(BaseModel):
    """Schema for the meal form."""
    name: str = Field(..., max_length=200)
    ingredients: List[IngredientInput] = Field(default_factory=list)


class CostPreviewInput(BaseModel):
    ingredients: List[IngredientInput] = Field(default_factory=list)


class AssignSlotInput(BaseModel):
    """Schema for placing a meal into the weekly grid."""
    day: date
    meal_slot: str = Field(..., pattern=r'^(breakfast|lunch|dinner)$')
    meal_id: str = Field(..., min_length=1)


class BudgetInput(BaseModel):
    """Budget ceiling; the amount is parsed and range-checked by the budget service."""
    day: Optional[date] = None
    week_key: Optional[str] = None
    amount: NumberLike


class GroceryFromMealInput(BaseModel):
    meal_id: str = Field(..., min_length=1)


class GroceryManualInput(BaseModel):
    """Schema for a product typed in by hand."""
    name: str = Field(..., max_length=100)
    amount: Optional[NumberLike] = None
    unit_price: Optional[NumberLike] = None

    @field_validator('name')
    @classmethod
    def strip_name(cls, v):
        return v.strip()
