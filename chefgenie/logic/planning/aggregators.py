"""Bulk operations over the plan, favourites, cache and shopping list."""
import logging
from typing import List, Optional

from chefgenie.domain.Plan import WeeklyPlan
from chefgenie.domain.Recipe import Protein, Recipe
from chefgenie.domain.Session import SessionState
from chefgenie.domain.ShoppingList import ShoppingList
from chefgenie.logic.cache.recipe_cache import RecipeCache

logger = logging.getLogger(__name__)


def plan_recipes(plan: Optional[WeeklyPlan]) -> List[Recipe]:
    return plan.recipes() if plan is not None else []


def add_plan_to_list(plan: Optional[WeeklyPlan], shopping_list: ShoppingList) -> int:
    """Add every planned recipe not already in the list; returns how many were added.

    Membership is re-checked after each add, so a title planned twice is added once.
    """
    count = 0
    for recipe in plan_recipes(plan):
        if shopping_list.is_recipe_in_list(recipe.title):
            continue
        shopping_list.add_recipe(recipe)
        count += 1
    return count


def cache_plan_recipes(plan: Optional[WeeklyPlan], cache: RecipeCache) -> int:
    recipes = plan_recipes(plan)
    if not recipes:
        return 0
    return cache.insert(recipes)


def normalize_proteins(proteins: Optional[List[str]]) -> List[str]:
    """Selecting Any drops specific proteins; an empty selection means Any."""
    chosen = [str(p) for p in (proteins or [])]
    if not chosen or Protein.ANY.value in chosen:
        return [Protein.ANY.value]
    return list(dict.fromkeys(chosen))


async def generate_plan(session: SessionState, oracle, proteins: List[str], max_time: int,
                        difficulty: str, supermarket: str) -> Optional[WeeklyPlan]:
    """Replace the session plan with a freshly generated one and cache its recipes.

    On oracle failure the session is left untouched and None is returned.
    """
    plan = await oracle.fetch_weekly_plan(normalize_proteins(proteins), max_time, difficulty, supermarket)
    if plan is None:
        logger.warning("Weekly plan generation failed; keeping the current plan")
        return None
    session.plan = plan
    added = cache_plan_recipes(plan, session.cache)
    logger.info("New weekly plan with %d recipes (%d new to the cache)", len(plan.recipes()), added)
    return plan
