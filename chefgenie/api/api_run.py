from fastapi import FastAPI, Query
from typing import Optional
import logging

from chefgenie.api.api_ai import RecipeOracle
from chefgenie.api.routes import favorites, planner, recipes, shopping
from chefgenie.events.web_observers import start as start_event_observers, get_events as get_web_events
from chefgenie.infra.State_Repository import StateRepository
from chefgenie.logic.images.generation import ImageGenerator
from chefgenie.logic.images.image_queue import ImageRequestQueue
from chefgenie.utilities.config import DEBUG

# Logging
logger = logging.getLogger("chefgenie")
if DEBUG:
    logging.basicConfig(level=logging.DEBUG)


def create_app(repository: Optional[StateRepository] = None, oracle=None,
               image_queue: Optional[ImageRequestQueue] = None, auto_images: bool = True) -> FastAPI:
    """Build the API around one session loaded from ``repository``.

    ``oracle`` is anything with the RecipeOracle coroutine methods; tests pass a fake.
    """
    repository = repository or StateRepository()
    oracle = oracle or RecipeOracle()

    app = FastAPI(title="ChefGenie Meal Planner API")
    app.state.repository = repository
    app.state.oracle = oracle
    app.state.session = repository.load_session()
    app.state.auto_images = auto_images
    app.state.images = ImageGenerator(
        app.state.session,
        oracle,
        image_queue or ImageRequestQueue(),
        on_patched=repository.save_session,
    )
    logger.info(
        "Session loaded: %d cached recipes, %d list items, %d favourites, plan=%s",
        len(app.state.session.cache), len(app.state.session.shopping_list),
        len(app.state.session.favorites), app.state.session.plan is not None,
    )

    # Include routers
    app.include_router(recipes.router)
    app.include_router(favorites.router)
    app.include_router(planner.router)
    app.include_router(shopping.router)

    start_event_observers()

    # -------------------- API: Session events (polled by frontend) --------------------
    @app.get('/api/events')
    def api_events(
        since: Optional[int] = Query(default=None, description="Return events with id greater than this value"),
        type: Optional[str] = Query(default=None, description="Only events of this type, e.g. recipe.image_ready"),
    ):
        """
        Return recent session events (images ready, list/plan/favourite changes).

        Client polling strategy:
            1. First call without 'since' to load current backlog (optional).
            2. Store 'next_cursor' from response.
            3. Subsequent polls: /api/events?since=<next_cursor>
        """
        return get_web_events(since, type)

    @app.get('/api/health')
    def health():
        session = app.state.session
        return {
            "status": "ok",
            "cached_recipes": len(session.cache),
            "shopping_list_items": len(session.shopping_list),
            "favorites": len(session.favorites),
            "has_plan": session.plan is not None,
        }

    return app


app = create_app()
