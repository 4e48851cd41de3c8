from fastapi import APIRouter, Depends, Request

from chefgenie.api.deps import get_images, get_oracle, get_repository, get_session, require_recipe, schedule_images
from chefgenie.domain.Session import SessionState
from chefgenie.infra.State_Repository import StateRepository
from chefgenie.logic.images.generation import ImageGenerator
from chefgenie.logic.search import discovery
from chefgenie.utilities.validators import SearchFilters

router = APIRouter(prefix="/api/recipes", tags=["recipes"])


def recipe_view(session: SessionState, recipe) -> dict:
    data = recipe.to_dict()
    data["isFavorite"] = session.favorites.is_favorite(recipe)
    data["inShoppingList"] = session.shopping_list.is_recipe_in_list(recipe.title)
    return data


@router.post("/search")
async def search_recipes(request: Request, filters: SearchFilters,
                         session: SessionState = Depends(get_session),
                         repo: StateRepository = Depends(get_repository),
                         oracle=Depends(get_oracle)):
    """Show recipes for the filters, from the cache when it has enough of them."""
    cached_before = len(session.cache)
    results = await discovery.search(session, oracle, filters.to_filter_state())
    if len(session.cache) != cached_before:
        repo.save_cache(session.cache)
    schedule_images(request, results)
    return {
        "count": len(results),
        "recipes": [recipe_view(session, r) for r in results],
    }


@router.post("/more")
async def load_more_recipes(request: Request, filters: SearchFilters,
                            session: SessionState = Depends(get_session),
                            repo: StateRepository = Depends(get_repository),
                            oracle=Depends(get_oracle)):
    cached_before = len(session.cache)
    added = await discovery.load_more(session, oracle, filters.to_filter_state())
    if len(session.cache) != cached_before:
        repo.save_cache(session.cache)
    schedule_images(request, added)
    return {
        "added": len(added),
        "count": len(session.results),
        "recipes": [recipe_view(session, r) for r in added],
    }


@router.get("/results")
def current_results(session: SessionState = Depends(get_session)):
    return {
        "count": len(session.results),
        "recipes": [recipe_view(session, r) for r in session.results],
    }


@router.get("/cache")
def cache_summary(session: SessionState = Depends(get_session)):
    """Cache size plus a light listing (no image payloads)."""
    return {
        "count": len(session.cache),
        "recipes": [
            {
                "id": r.id,
                "title": r.title,
                "mealType": r.meal_type.value,
                "protein": r.protein,
                "prepTimeMinutes": r.prep_time_minutes,
                "difficulty": r.difficulty,
                "hasImage": bool(r.image),
            }
            for r in session.cache
        ],
    }


@router.get("/{recipe_id}")
def recipe_detail(recipe_id: str, session: SessionState = Depends(get_session)):
    return recipe_view(session, require_recipe(session, recipe_id))


@router.post("/{recipe_id}/image")
async def generate_recipe_image(recipe_id: str,
                                session: SessionState = Depends(get_session),
                                images: ImageGenerator = Depends(get_images)):
    """Generate the recipe's image now and wait for it."""
    recipe = require_recipe(session, recipe_id)
    if recipe.image:
        return {"recipe_id": recipe.id, "image": recipe.image, "generated": False}
    image = await images.generate_now(recipe)
    # No image is a normal outcome ("no image yet"), not an error
    return {"recipe_id": recipe.id, "image": image, "generated": image is not None}
