from fastapi import APIRouter, Depends

from chefgenie.api.deps import get_repository, get_session, require_recipe
from chefgenie.api.routes.recipes import recipe_view
from chefgenie.domain.Session import SessionState
from chefgenie.events.Event_Bus import FAVORITES_CHANGED, publish
from chefgenie.infra.State_Repository import StateRepository
from chefgenie.utilities.validators import RecipeRef

router = APIRouter(prefix="/api/favorites", tags=["favorites"])


@router.get("")
def list_favorites(session: SessionState = Depends(get_session)):
    return {
        "count": len(session.favorites),
        "recipes": [recipe_view(session, r) for r in session.favorites],
    }


@router.post("/toggle")
def toggle_favorite(payload: RecipeRef,
                    session: SessionState = Depends(get_session),
                    repo: StateRepository = Depends(get_repository)):
    """Star or unstar a recipe. Favourites are matched by title."""
    recipe = require_recipe(session, payload.recipe_id)
    favorite = session.favorites.toggle(recipe)
    repo.save_favorites(session.favorites)
    publish(FAVORITES_CHANGED, {"title": recipe.title, "favorite": favorite})
    return {"title": recipe.title, "isFavorite": favorite, "count": len(session.favorites)}
