"""FastAPI dependencies handing the session-wide collaborators to route handlers."""
from fastapi import HTTPException, Request

from chefgenie.domain.Recipe import Recipe
from chefgenie.domain.Session import SessionState
from chefgenie.infra.State_Repository import StateRepository
from chefgenie.logic.images.generation import ImageGenerator


def get_session(request: Request) -> SessionState:
    return request.app.state.session


def get_repository(request: Request) -> StateRepository:
    return request.app.state.repository


def get_oracle(request: Request):
    return request.app.state.oracle


def get_images(request: Request) -> ImageGenerator:
    return request.app.state.images


def schedule_images(request: Request, recipes) -> int:
    """Queue background images for recipes, unless the app was built without them."""
    if not request.app.state.auto_images:
        return 0
    return request.app.state.images.schedule_missing(recipes)


def require_recipe(session: SessionState, recipe_id: str) -> Recipe:
    recipe = session.find_recipe(recipe_id)
    if recipe is None:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return recipe
