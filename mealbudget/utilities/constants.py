from typing import Final

DATE_FORMAT: Final[str] = "%Y-%m-%d"
MEAL_SLOTS: Final[tuple[str, ...]] = ("breakfast", "lunch", "dinner")
DAYS_OF_WEEK: Final[tuple[str, ...]] = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"
)

# Provenance label for items typed in by hand; never shown as a source badge
MANUAL_SOURCE: Final[str] = "Manual"
# Fallback provenance when a meal id no longer resolves in the catalog
RECIPE_SOURCE: Final[str] = "Recipe"

GROCERY_STORAGE_KEY: Final[str] = "my-food-app-grocery-list"

MONEY_PLACES: Final[str] = "0.01"
GRAMS_PER_KG: Final[int] = 1000
