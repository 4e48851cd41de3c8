"""Simple Event Bus / Observer implementation for session changes.

Event names used so far:
  recipe.image_ready     -> payload {"recipe_id": str, "title": str}
  shopping_list.changed  -> payload {"action": str, "count": int}
  plan.generated         -> payload {"recipes": int}
  favorites.changed      -> payload {"title": str, "favorite": bool}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
RECIPE_IMAGE_READY = "recipe.image_ready"
SHOPPING_LIST_CHANGED = "shopping_list.changed"
PLAN_GENERATED = "plan.generated"
FAVORITES_CHANGED = "favorites.changed"


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Callable[[str, Any], None]]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		if callback not in self._subscribers[event_name]:
			self._subscribers[event_name].append(callback)

	def unsubscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		try:
			self._subscribers[event_name].remove(callback)
		except (ValueError, KeyError):
			pass

	def publish(self, event_name: str, payload: Any = None):
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception:
				logger.exception("Error delivering %s to %r", event_name, cb)


# A singleton-like instance (can be imported)
GLOBAL_EVENT_BUS = EventBus()


def publish(event_name: str, payload: Any = None) -> None:
	"""Publish an event on the global bus (sugar function)."""
	GLOBAL_EVENT_BUS.publish(event_name, payload)


__all__ = [
	'EventBus', 'GLOBAL_EVENT_BUS', 'publish',
	'RECIPE_IMAGE_READY', 'SHOPPING_LIST_CHANGED', 'PLAN_GENERATED', 'FAVORITES_CHANGED',
]
