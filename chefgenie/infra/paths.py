from pathlib import Path

from chefgenie.utilities.config import DATA_DIR as _CONFIGURED_DATA_DIR

# Centralized file names for the persisted session blobs (single source of truth)
DATA_DIR = Path(_CONFIGURED_DATA_DIR).resolve()
SHOPPING_LIST_FILE = 'shopping_list.json'
FAVORITES_FILE = 'favorites.json'
PLAN_FILE = 'plan.json'
CACHE_FILE = 'recipe_cache.json'

__all__ = ['DATA_DIR', 'SHOPPING_LIST_FILE', 'FAVORITES_FILE', 'PLAN_FILE', 'CACHE_FILE']
