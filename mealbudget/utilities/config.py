"""Configuration management for the meal budget planner."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'INFO').upper()

# Week keys are computed on the calendar date in this zone
REFERENCE_TIMEZONE: Final[str] = os.getenv('REFERENCE_TIMEZONE', 'Europe/Helsinki')

# Single-user deployment: budgets are still partitioned per user id
DEFAULT_USER_ID: Final[str] = os.getenv('DEFAULT_USER_ID', 'local')

CURRENCY_SYMBOL: Final[str] = os.getenv('CURRENCY_SYMBOL', '€')

# File Paths (data directory env var: MEALBUDGET_DATA_DIR)
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = Path(os.getenv('MEALBUDGET_DATA_DIR', str(BASE_DIR / 'data'))).resolve()
