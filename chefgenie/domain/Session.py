"""Session state: the one owner of results, cache, shopping list, favourites and plan.

Recipes are copied into each collection, so a field patch (an image arriving
later) has to be applied to every collection explicitly.
"""
from typing import List, Optional

from chefgenie.domain.Favorites import Favorites
from chefgenie.domain.Plan import DayPlan, WeeklyPlan
from chefgenie.domain.Recipe import Recipe
from chefgenie.domain.ShoppingList import ShoppingList
from chefgenie.logic.cache.recipe_cache import RecipeCache


class SessionState:
    def __init__(self, cache: Optional[RecipeCache] = None, shopping_list: Optional[ShoppingList] = None,
                 favorites: Optional[Favorites] = None, plan: Optional[WeeklyPlan] = None,
                 results: Optional[List[Recipe]] = None):
        self.cache = cache or RecipeCache()
        self.shopping_list = shopping_list or ShoppingList()
        self.favorites = favorites or Favorites()
        self.plan = plan
        self.results: List[Recipe] = list(results or [])

    def find_recipe(self, recipe_id: str) -> Optional[Recipe]:
        '''Looks a recipe up by id in results, favourites, plan and cache (in that order).'''
        candidates = list(self.results) + list(self.favorites)
        if self.plan is not None:
            candidates += self.plan.recipes()
        for r in candidates:
            if r.id == recipe_id:
                return r
        return self.cache.get(recipe_id)

    def patch_image(self, recipe_id: str, image: str) -> bool:
        """Attach an image to every copy of the recipe. Returns True if any copy changed."""
        changed = False

        if any(r.id == recipe_id for r in self.results):
            self.results = [r.with_image(image) if r.id == recipe_id else r for r in self.results]
            changed = True

        changed = self.favorites.patch_image(recipe_id, image) or changed
        changed = self.cache.patch_image(recipe_id, image) or changed

        if self.plan is not None and any(r.id == recipe_id for r in self.plan.recipes()):
            self.plan = WeeklyPlan({
                day: DayPlan(*(_patched(r, recipe_id, image) for r in (slots.lunch, slots.dinner)))
                for day, slots in self.plan.items()
            })
            changed = True
        return changed


def _patched(recipe: Optional[Recipe], recipe_id: str, image: str) -> Optional[Recipe]:
    if recipe is not None and recipe.id == recipe_id:
        return recipe.with_image(image)
    return recipe
