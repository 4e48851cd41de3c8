"""Favorites collection: recipes the user starred, matched by title."""
from typing import Iterable, Iterator, List, Optional

from chefgenie.domain.Recipe import Recipe


class Favorites:
    def __init__(self, recipes: Optional[Iterable[Recipe]] = None):
        self.recipes: List[Recipe] = list(recipes or [])

    def __len__(self) -> int:
        return len(self.recipes)

    def __iter__(self) -> Iterator[Recipe]:
        return iter(self.recipes)

    def is_favorite(self, recipe: Recipe) -> bool:
        return any(r.title == recipe.title for r in self.recipes)

    def toggle(self, recipe: Recipe) -> bool:
        '''Adds the recipe, or removes every favourite with the same title. Returns True when added.'''
        if self.is_favorite(recipe):
            self.recipes = [r for r in self.recipes if r.title != recipe.title]
            return False
        self.recipes = self.recipes + [recipe]
        return True

    def patch_image(self, recipe_id: str, image: str) -> bool:
        changed = any(r.id == recipe_id for r in self.recipes)
        if changed:
            self.recipes = [r.with_image(image) if r.id == recipe_id else r for r in self.recipes]
        return changed

    def to_list(self):
        return [r.to_dict() for r in self.recipes]

    @staticmethod
    def from_list(data):
        return Favorites(Recipe.from_dict(d) for d in (data or []) if isinstance(d, dict))
