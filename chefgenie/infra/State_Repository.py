import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, Optional, Union

from chefgenie.domain.Favorites import Favorites
from chefgenie.domain.Plan import WeeklyPlan
from chefgenie.domain.Session import SessionState
from chefgenie.domain.ShoppingList import ShoppingList
from chefgenie.infra.paths import CACHE_FILE, DATA_DIR, FAVORITES_FILE, PLAN_FILE, SHOPPING_LIST_FILE
from chefgenie.logic.cache.recipe_cache import RecipeCache
from chefgenie.utilities.config import STORAGE_QUOTA_BYTES

logger = logging.getLogger(__name__)


class PersistenceOverflow(Exception):
    """A serialized blob does not fit in the storage quota."""


def strip_images(data: Any) -> Any:
    """Copy of a JSON-like structure with every 'image' field removed."""
    if isinstance(data, dict):
        return {k: strip_images(v) for k, v in data.items() if k != 'image'}
    if isinstance(data, list):
        return [strip_images(v) for v in data]
    return data


class StateRepository:
    """Four independently keyed JSON blobs: shopping list, favourites, plan, recipe cache."""

    def __init__(self, data_dir: Union[str, Path] = DATA_DIR, quota_bytes: int = STORAGE_QUOTA_BYTES):
        self.data_dir = Path(data_dir)
        self.quota_bytes = quota_bytes

    # --- low level -------------------------------------------------------
    def _path(self, filename: str) -> Path:
        return self.data_dir / filename

    def _read(self, filename: str, default):
        path = self._path(filename)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except FileNotFoundError:
            return default
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in {path}: {e}")
            return default
        except OSError as e:
            logger.error(f"Error reading {path}: {e}")
            return default

    def _atomic_write(self, filename: str, payload: str) -> None:
        if len(payload.encode('utf-8')) > self.quota_bytes:
            raise PersistenceOverflow(f"{filename} exceeds {self.quota_bytes} bytes")
        self.data_dir.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=str(self.data_dir), prefix=f".{Path(filename).stem}_", suffix=".json")
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as tmp:
                tmp.write(payload)
            shutil.move(tmp_path, self._path(filename))
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)

    def save_with_quota_check(self, filename: str, data: Any) -> bool:
        """Write a blob; over quota, retry once without images, then give up. Returns success."""
        try:
            self._atomic_write(filename, json.dumps(data, ensure_ascii=False))
            return True
        except PersistenceOverflow:
            logger.warning(f"Storage quota exceeded for {filename}. Saving without images.")
        except OSError as e:
            logger.error(f"Storage error for {filename}: {e}")
            return False
        try:
            self._atomic_write(filename, json.dumps(strip_images(data), ensure_ascii=False))
            return True
        except (PersistenceOverflow, OSError) as e:
            logger.error(f"Failed to save {filename} even without images: {e}")
            return False

    # --- blobs -----------------------------------------------------------
    def load_shopping_list(self) -> ShoppingList:
        return ShoppingList.from_list(self._read(SHOPPING_LIST_FILE, []))

    def save_shopping_list(self, shopping_list: ShoppingList) -> bool:
        return self.save_with_quota_check(SHOPPING_LIST_FILE, shopping_list.to_list())

    def load_favorites(self) -> Favorites:
        return Favorites.from_list(self._read(FAVORITES_FILE, []))

    def save_favorites(self, favorites: Favorites) -> bool:
        return self.save_with_quota_check(FAVORITES_FILE, favorites.to_list())

    def load_plan(self) -> Optional[WeeklyPlan]:
        data = self._read(PLAN_FILE, None)
        return WeeklyPlan.from_dict(data) if isinstance(data, dict) else None

    def save_plan(self, plan: Optional[WeeklyPlan]) -> bool:
        # An absent plan is never written over a saved one
        if plan is None:
            return False
        return self.save_with_quota_check(PLAN_FILE, plan.to_dict())

    def load_cache(self) -> RecipeCache:
        return RecipeCache.from_list(self._read(CACHE_FILE, []))

    def save_cache(self, cache: RecipeCache) -> bool:
        return self.save_with_quota_check(CACHE_FILE, cache.to_list())

    def load_session(self) -> SessionState:
        return SessionState(
            cache=self.load_cache(),
            shopping_list=self.load_shopping_list(),
            favorites=self.load_favorites(),
            plan=self.load_plan(),
        )

    def save_session(self, session: SessionState) -> None:
        self.save_shopping_list(session.shopping_list)
        self.save_favorites(session.favorites)
        self.save_plan(session.plan)
        self.save_cache(session.cache)
