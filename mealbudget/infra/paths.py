from pathlib import Path

from mealbudget.utilities.config import DATA_DIR

# Centralized paths for data files (single source of truth)
MEALS_FILE = DATA_DIR / 'meals.json'
PLANNED_MEALS_FILE = DATA_DIR / 'planned_meals.json'
BUDGETS_FILE = DATA_DIR / 'weekly_budgets.json'
LOCAL_STORAGE_FILE = DATA_DIR / 'local_storage.json'


def data_file(data_dir: Path, name: str) -> Path:
    """Resolve one of the data file names against another directory (tests, alternate profiles)."""
    return (Path(data_dir) / name).resolve()


__all__ = ['DATA_DIR', 'MEALS_FILE', 'PLANNED_MEALS_FILE', 'BUDGETS_FILE', 'LOCAL_STORAGE_FILE', 'data_file']
