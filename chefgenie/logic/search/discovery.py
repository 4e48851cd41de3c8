"""Recipe discovery: search and "load more".

Both first look in the session cache; only when it holds fewer than
CACHE_SUFFICIENT_MATCHES suitable recipes is the oracle asked, in several
small concurrent batches. Results always flow back into the cache.
"""
import asyncio
import logging
import random
from collections import OrderedDict
from typing import List, Optional

from chefgenie.domain.Filters import FilterState
from chefgenie.domain.Recipe import Recipe
from chefgenie.domain.Session import SessionState
from chefgenie.utilities.config import CACHE_SUFFICIENT_MATCHES, SEARCH_BATCHES, SEARCH_BATCH_SIZE

logger = logging.getLogger(__name__)


def dedupe_by_title(recipes: List[Recipe]) -> List[Recipe]:
    """One recipe per title: position of the first, contents of the last."""
    by_title: "OrderedDict[str, Recipe]" = OrderedDict()
    for r in recipes:
        by_title[r.title] = r
    return list(by_title.values())


def _shuffled(recipes: List[Recipe], rng: Optional[random.Random] = None) -> List[Recipe]:
    out = list(recipes)
    (rng or random).shuffle(out)
    return out


async def fetch_batches(oracle, filters: FilterState, batches: int = SEARCH_BATCHES,
                        batch_size: int = SEARCH_BATCH_SIZE) -> List[Recipe]:
    """Fire ``batches`` concurrent oracle calls of ``batch_size`` recipes and concatenate them."""
    calls = [
        oracle.fetch_recipes(filters.meal_type, filters.protein, filters.max_time,
                             filters.supermarket, filters.difficulty, batch_size)
        for _ in range(batches)
    ]
    results = await asyncio.gather(*calls, return_exceptions=True)
    combined: List[Recipe] = []
    for batch in results:
        if isinstance(batch, BaseException):
            logger.error("Recipe batch failed: %s", batch)
            continue
        combined.extend(batch or [])
    if len(combined) < batches * batch_size:
        logger.info("Oracle returned %d of %d requested recipes", len(combined), batches * batch_size)
    return combined


async def search(session: SessionState, oracle, filters: FilterState,
                 threshold: int = CACHE_SUFFICIENT_MATCHES, rng: Optional[random.Random] = None) -> List[Recipe]:
    """Replace the displayed results for ``filters``; returns the new results."""
    session.results = []
    matches = session.cache.match(filters)
    if len(matches) >= threshold:
        logger.info("Serving %d of %d cached matches for %s", threshold, len(matches), filters)
        session.results = _shuffled(matches, rng)[:threshold]
        return session.results

    fetched = await fetch_batches(oracle, filters)
    unique = dedupe_by_title(fetched)
    session.results = unique
    session.cache.insert(unique)
    return session.results


async def load_more(session: SessionState, oracle, filters: FilterState,
                    threshold: int = CACHE_SUFFICIENT_MATCHES, rng: Optional[random.Random] = None) -> List[Recipe]:
    """Append more recipes to the displayed results; returns the ones appended."""
    shown = {r.title for r in session.results}
    available = [r for r in session.cache.match(filters) if r.title not in shown]
    if len(available) >= threshold:
        added = _shuffled(available, rng)[:threshold]
        session.results = session.results + added
        return added

    fetched = await fetch_batches(oracle, filters)
    # Re-read the results: other requests may have changed them while we waited
    existing = {r.title for r in session.results}
    added = [r for r in dedupe_by_title(fetched) if r.title not in existing]
    session.results = session.results + added
    session.cache.insert(fetched)
    return added
