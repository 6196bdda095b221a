"""JSON file helpers shared by the repositories.

Reads treat a missing file as the given default. Writes go to a temp file in
the same directory and are moved over the target, so a crash never leaves a
half-written store. Any I/O or decode error surfaces as StorageFailure.
"""
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any

from mealbudget.domain.errors import StorageFailure

logger = logging.getLogger(__name__)


def read_json(path: Path, default: Any) -> Any:
    path = Path(path)
    if not path.exists():
        return default
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in %s: %s", path, e)
        raise StorageFailure(f"Invalid JSON in {path.name}", operation="read") from e
    except OSError as e:
        logger.error("Could not read %s: %s", path, e)
        raise StorageFailure(f"Could not read {path.name}", operation="read") from e
    return default if data is None else data


def atomic_write_json(path: Path, data: Any) -> None:
    path = Path(path)
    tmp_path = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=str(path.parent), prefix=f".{path.stem}_", suffix=".json")
        with os.fdopen(fd, "w", encoding="utf-8") as tmp:
            json.dump(data, tmp, indent=2, ensure_ascii=False)
        shutil.move(tmp_path, str(path))
    except OSError as e:
        logger.error("Could not write %s: %s", path, e)
        raise StorageFailure(f"Could not write {path.name}", operation="write") from e
    finally:
        if tmp_path and os.path.exists(tmp_path):
            try:
                os.remove(tmp_path)
            except OSError:
                logger.warning("Left temp file behind: %s", tmp_path)
