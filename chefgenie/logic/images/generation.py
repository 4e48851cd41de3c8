"""Background image generation for displayed recipes.

Each recipe without an image is requested once (per id) through the
ImageRequestQueue; a successful image is patched into every copy held by the
session and announced on the event bus.
"""
import logging
from typing import Callable, Iterable, Optional, Set

from chefgenie.domain.Recipe import Recipe
from chefgenie.domain.Session import SessionState
from chefgenie.events.Event_Bus import GLOBAL_EVENT_BUS, RECIPE_IMAGE_READY, EventBus
from chefgenie.logic.images.image_queue import ImageRequestQueue

logger = logging.getLogger(__name__)


class ImageGenerator:
    def __init__(self, session: SessionState, oracle, queue: ImageRequestQueue,
                 on_patched: Optional[Callable[[SessionState], None]] = None,
                 bus: EventBus = GLOBAL_EVENT_BUS):
        self.session = session
        self.oracle = oracle
        self.queue = queue
        self.on_patched = on_patched
        self.bus = bus
        self._requested: Set[str] = set()

    def apply(self, recipe_id: str, title: str, image: Optional[str]) -> bool:
        """Fan a finished image out to the session. No image means "no image yet"."""
        if not image:
            logger.info("No image generated for %r", title)
            return False
        changed = self.session.patch_image(recipe_id, image)
        if changed:
            if self.on_patched is not None:
                self.on_patched(self.session)
            self.bus.publish(RECIPE_IMAGE_READY, {"recipe_id": recipe_id, "title": title})
        return changed

    def schedule_missing(self, recipes: Iterable[Recipe]) -> int:
        """Queue generation for recipes without an image; returns how many were queued."""
        queued = 0
        for recipe in recipes:
            if recipe.image or recipe.id in self._requested:
                continue
            self._requested.add(recipe.id)
            self.queue.add(self._task_for(recipe.id, recipe.title))
            queued += 1
        return queued

    def _task_for(self, recipe_id: str, title: str):
        async def task() -> None:
            try:
                image = await self.oracle.generate_image(title)
            finally:
                self._requested.discard(recipe_id)
            self.apply(recipe_id, title, image)
        return task

    async def generate_now(self, recipe: Recipe) -> Optional[str]:
        """Generate through the gate and wait for the result.

        Returns None straight away when a request for this recipe is already in
        flight; its image arrives through apply() like any background image.
        """
        if recipe.id in self._requested:
            logger.info("Image for %r already requested", recipe.title)
            return None
        self._requested.add(recipe.id)
        try:
            image = await self.queue.submit(lambda: self.oracle.generate_image(recipe.title))
        finally:
            self._requested.discard(recipe.id)
        self.apply(recipe.id, recipe.title, image)
        return image
