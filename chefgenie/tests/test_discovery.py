import random

import pytest

from chefgenie.domain.Filters import FilterState
from chefgenie.domain.Recipe import MealType
from chefgenie.domain.Session import SessionState
from chefgenie.logic.cache.recipe_cache import RecipeCache
from chefgenie.logic.search.discovery import dedupe_by_title, load_more, search
from chefgenie.tests.conftest import FakeOracle, build_recipe

FILTERS = FilterState(meal_type=MealType.DINNER, protein=["Any"], max_time=45, difficulty="Any")


def _cached(count):
    return RecipeCache([build_recipe(f"Cached {i}") for i in range(count)])


@pytest.mark.asyncio
async def test_search_served_from_cache_when_enough_matches():
    oracle = FakeOracle()
    session = SessionState(cache=_cached(10))
    results = await search(session, oracle, FILTERS, rng=random.Random(1))
    assert oracle.calls == []
    assert len(results) == 9
    assert len({r.title for r in results}) == 9
    assert session.results == results


@pytest.mark.asyncio
async def test_search_asks_oracle_in_three_batches_below_threshold():
    batches = [[build_recipe(f"New {b}-{i}") for i in range(3)] for b in range(3)]
    oracle = FakeOracle(batches=batches)
    session = SessionState(cache=_cached(8))
    results = await search(session, oracle, FILTERS)
    assert len(oracle.calls) == 3
    assert all(call[-1] == 3 for call in oracle.calls)
    assert len(results) == 9
    assert len(session.cache) == 17


@pytest.mark.asyncio
async def test_search_dedupes_oracle_titles_and_skips_cached_titles():
    oracle = FakeOracle(batches=[
        [build_recipe("Pho", prep=10), build_recipe("Laksa")],
        [build_recipe("Pho", prep=30)],
        [build_recipe("Cached 0")],
    ])
    session = SessionState(cache=_cached(1))
    results = await search(session, oracle, FILTERS)
    assert [r.title for r in results] == ["Pho", "Laksa", "Cached 0"]
    assert results[0].prep_time_minutes == 30
    assert sorted(session.cache.titles()) == ["Cached 0", "Laksa", "Pho"]


@pytest.mark.asyncio
async def test_search_failure_yields_empty_results():
    class BrokenOracle(FakeOracle):
        async def fetch_recipes(self, *args, **kwargs):
            raise RuntimeError("network down")

    session = SessionState(results=[build_recipe("Old")])
    results = await search(session, BrokenOracle(), FILTERS)
    assert results == []
    assert session.results == []
    assert len(session.cache) == 0


@pytest.mark.asyncio
async def test_load_more_from_cache_excludes_shown_titles():
    session = SessionState(cache=_cached(20))
    first = await search(session, FakeOracle(), FILTERS, rng=random.Random(2))
    added = await load_more(session, FakeOracle(), FILTERS, rng=random.Random(3))
    assert len(added) == 9
    assert not {r.title for r in first} & {r.title for r in added}
    assert len(session.results) == 18


@pytest.mark.asyncio
async def test_load_more_merges_into_latest_results():
    session = SessionState(results=[build_recipe("Shown")])

    class SlowOracle(FakeOracle):
        async def fetch_recipes(self, *args, **kwargs):
            # Results change while the request is in flight
            if "Arrived Meanwhile" not in {r.title for r in session.results}:
                session.results = session.results + [build_recipe("Arrived Meanwhile")]
            return [build_recipe("Arrived Meanwhile"), build_recipe("Fresh")]

    added = await load_more(session, SlowOracle(), FILTERS)
    titles = [r.title for r in session.results]
    assert titles[0] == "Shown"
    assert titles.count("Arrived Meanwhile") == 1
    assert "Fresh" in titles
    assert [r.title for r in added] == ["Fresh"]


def test_dedupe_by_title_keeps_first_position_last_contents():
    recipes = [build_recipe("A", prep=1), build_recipe("B"), build_recipe("A", prep=2)]
    out = dedupe_by_title(recipes)
    assert [r.title for r in out] == ["A", "B"]
    assert out[0].prep_time_minutes == 2
