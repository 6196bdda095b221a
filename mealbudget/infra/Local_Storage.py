"""Local key/value persistence (browser-localStorage style) and the grocery list store built on it."""
import logging
from pathlib import Path
from typing import Any, List, Optional, Sequence

from mealbudget.domain.GroceryItem import GroceryItem
from mealbudget.infra.json_store import atomic_write_json, read_json
from mealbudget.infra.paths import LOCAL_STORAGE_FILE
from mealbudget.utilities.constants import GROCERY_STORAGE_KEY

logger = logging.getLogger(__name__)


class LocalKeyValueStore:
    """All keys live in one JSON object on disk."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else LOCAL_STORAGE_FILE

    def _all(self) -> dict:
        data = read_json(self.path, {})
        return data if isinstance(data, dict) else {}

    def get_item(self, key: str, default: Any = None) -> Any:
        return self._all().get(key, default)

    def set_item(self, key: str, value: Any) -> None:
        data = self._all()
        data[key] = value
        atomic_write_json(self.path, data)


class GroceryListStore:
    """Grocery list port backed by a fixed key of the local store."""

    def __init__(self, store: Optional[LocalKeyValueStore] = None, key: str = GROCERY_STORAGE_KEY):
        self.store = store if store is not None else LocalKeyValueStore()
        self.key = key

    def load_local_grocery_list(self) -> List[GroceryItem]:
        raw = self.store.get_item(self.key, [])
        if not isinstance(raw, list):
            logger.warning("Ignoring malformed grocery list under %s", self.key)
            return []
        return [GroceryItem.from_dict(entry) for entry in raw if isinstance(entry, dict)]

    def save_local_grocery_list(self, items: Sequence[GroceryItem]) -> None:
        self.store.set_item(self.key, [i.to_dict() for i in items])
