import asyncio
import time

import pytest

from chefgenie.domain.Session import SessionState
from chefgenie.events.Event_Bus import RECIPE_IMAGE_READY, EventBus
from chefgenie.logic.cache.recipe_cache import RecipeCache
from chefgenie.logic.images.generation import ImageGenerator
from chefgenie.logic.images.image_queue import ImageRequestQueue
from chefgenie.tests.conftest import FakeOracle, build_recipe


@pytest.mark.asyncio
async def test_starts_are_spaced_but_tasks_overlap():
    queue = ImageRequestQueue(min_delay=0.05)
    starts, finishes = [], []

    def make(i):
        async def task():
            starts.append((i, time.monotonic()))
            await asyncio.sleep(0.2)
            finishes.append(i)
        return task

    for i in range(3):
        queue.add(make(i))
    await queue.drain()

    assert [i for i, _ in starts] == [0, 1, 2]
    times = [t for _, t in starts]
    for earlier, later in zip(times, times[1:]):
        assert later - earlier >= 0.045
    # All three were started before the first finished
    assert times[2] - times[0] < 0.2
    assert sorted(finishes) == [0, 1, 2]


@pytest.mark.asyncio
async def test_failing_task_does_not_stop_the_queue(caplog):
    queue = ImageRequestQueue(min_delay=0.0)
    ran = []

    async def broken():
        raise RuntimeError("rate limited")

    async def fine():
        ran.append("fine")

    queue.add(broken)
    queue.add(fine)
    await queue.drain()
    assert ran == ["fine"]
    assert "Image queue task failed" in caplog.text


@pytest.mark.asyncio
async def test_submit_returns_result_or_none():
    queue = ImageRequestQueue(min_delay=0.0)

    async def ok():
        return "data:image/png;base64,QQ"

    async def boom():
        raise ValueError("bad")

    assert await queue.submit(ok) == "data:image/png;base64,QQ"
    assert await queue.submit(boom) is None


@pytest.mark.asyncio
async def test_generator_patches_session_and_publishes():
    recipe = build_recipe("Pho")
    session = SessionState(cache=RecipeCache([recipe]), results=[recipe])
    bus = EventBus()
    events, saved = [], []
    bus.subscribe(RECIPE_IMAGE_READY, lambda name, payload: events.append(payload))
    oracle = FakeOracle(image="data:image/png;base64,IMG")
    generator = ImageGenerator(session, oracle, ImageRequestQueue(min_delay=0.0),
                               on_patched=saved.append, bus=bus)

    assert generator.schedule_missing([recipe, recipe]) == 1
    await generator.queue.drain()

    assert oracle.image_calls == ["Pho"]
    assert session.results[0].image == "data:image/png;base64,IMG"
    assert session.cache.get(recipe.id).image == "data:image/png;base64,IMG"
    assert saved == [session]
    assert events == [{"recipe_id": recipe.id, "title": "Pho"}]


@pytest.mark.asyncio
async def test_generator_without_image_leaves_recipe_untouched():
    recipe = build_recipe("Pho")
    session = SessionState(results=[recipe])
    generator = ImageGenerator(session, FakeOracle(image=None), ImageRequestQueue(min_delay=0.0),
                               bus=EventBus())
    assert await generator.generate_now(recipe) is None
    assert session.results[0].image is None


@pytest.mark.asyncio
async def test_generate_now_skips_recipe_already_queued():
    recipe = build_recipe("Pho")
    session = SessionState(results=[recipe])
    oracle = FakeOracle(image="data:image/png;base64,IMG")
    generator = ImageGenerator(session, oracle, ImageRequestQueue(min_delay=0.0), bus=EventBus())

    generator.schedule_missing([recipe])
    assert await generator.generate_now(recipe) is None
    await generator.queue.drain()

    assert oracle.image_calls == ["Pho"]
    assert session.results[0].image == "data:image/png;base64,IMG"


@pytest.mark.asyncio
async def test_generate_now_blocks_background_duplicate():
    recipe = build_recipe("Pho")
    session = SessionState(results=[recipe])
    oracle = FakeOracle(image="data:image/png;base64,IMG")
    generator = ImageGenerator(session, oracle, ImageRequestQueue(min_delay=0.0), bus=EventBus())

    pending = asyncio.ensure_future(generator.generate_now(recipe))
    await asyncio.sleep(0)
    assert generator.schedule_missing([recipe]) == 0
    assert await pending == "data:image/png;base64,IMG"
    await generator.queue.drain()
    assert oracle.image_calls == ["Pho"]
