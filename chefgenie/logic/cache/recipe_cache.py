"""Recipe cache: every recipe seen this session, deduplicated by title.

The cache only answers "what do I have"; whether that is enough to skip the
oracle is decided by the caller (see logic.search.discovery).
"""
import logging
from typing import Iterable, Iterator, List, Optional, Set

from chefgenie.domain.Filters import FilterState
from chefgenie.domain.Recipe import Recipe
from chefgenie.utilities.constants import ANY

logger = logging.getLogger(__name__)


def difficulty_matches(label: str, level: int) -> bool:
    if label == 'Easy':
        return level <= 2
    if label == 'Medium':
        return level == 3  # strict, not a range
    if label == 'Hard':
        return level >= 4
    return True


def recipe_matches(recipe: Recipe, filters: FilterState) -> bool:
    if recipe.meal_type != filters.meal_type:
        return False
    if not (filters.any_protein or recipe.protein in filters.protein):
        return False
    if recipe.prep_time_minutes > filters.max_time:
        return False
    if filters.difficulty != ANY and not difficulty_matches(filters.difficulty, recipe.difficulty):
        return False
    return True


class RecipeCache:
    def __init__(self, recipes: Optional[Iterable[Recipe]] = None):
        self._recipes: List[Recipe] = []
        if recipes:
            self.insert(recipes)

    def __len__(self) -> int:
        return len(self._recipes)

    def __iter__(self) -> Iterator[Recipe]:
        return iter(self._recipes)

    def titles(self) -> Set[str]:
        return {r.title for r in self._recipes}

    def get(self, recipe_id: str) -> Optional[Recipe]:
        for r in self._recipes:
            if r.id == recipe_id:
                return r
        return None

    def match(self, filters: FilterState) -> List[Recipe]:
        """Every cached recipe satisfying all constraints. Order is unspecified."""
        return [r for r in self._recipes if recipe_matches(r, filters)]

    def insert(self, new_recipes: Iterable[Recipe]) -> int:
        """Append recipes whose title is not cached yet; returns how many were added."""
        existing = self.titles()
        unique_new = []
        for recipe in new_recipes:
            if recipe.title in existing:
                continue
            existing.add(recipe.title)
            unique_new.append(recipe)
        if unique_new:
            self._recipes = self._recipes + unique_new
            logger.info("Cached %d new recipes (total %d)", len(unique_new), len(self._recipes))
        return len(unique_new)

    def patch_image(self, recipe_id: str, image: str) -> bool:
        changed = False
        patched = []
        for r in self._recipes:
            if r.id == recipe_id:
                r = r.with_image(image)
                changed = True
            patched.append(r)
        self._recipes = patched
        return changed

    def to_list(self):
        return [r.to_dict() for r in self._recipes]

    @staticmethod
    def from_list(data):
        return RecipeCache(Recipe.from_dict(d) for d in (data or []) if isinstance(d, dict))
