"""Tests for group-barrier concurrent mapping."""

import asyncio

import pytest

from app.services.generation.concurrency import map_in_groups


class Recorder:
    def __init__(self, failing=()):
        self.failing = set(failing)
        self.events = []
        self.active = 0
        self.max_active = 0

    async def __call__(self, item):
        self.events.append(("start", item))
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        # Later items finish first inside a group
        await asyncio.sleep(0.02 if item % 2 == 0 else 0.005)
        self.active -= 1
        self.events.append(("end", item))
        if item in self.failing:
            raise RuntimeError(f"item {item} failed")
        return item * 10


@pytest.mark.asyncio
async def test_results_are_in_input_order_with_exceptions_in_place():
    recorder = Recorder(failing={4})

    results = await map_in_groups(list(range(7)), 2, recorder)

    assert [r for i, r in enumerate(results) if i != 4] == [0, 10, 20, 30, 50, 60]
    assert isinstance(results[4], RuntimeError)


@pytest.mark.asyncio
async def test_groups_are_barriers():
    recorder = Recorder(failing={2})
    items = list(range(10))

    await map_in_groups(items, 2, recorder)

    assert recorder.max_active == 2
    position = {event: index for index, event in enumerate(recorder.events)}
    for group_start in range(0, 8, 2):
        last_end = max(position[("end", i)] for i in items[group_start : group_start + 2])
        next_starts = [position[("start", i)] for i in items[group_start + 2 : group_start + 4]]
        assert last_end < min(next_starts)


@pytest.mark.asyncio
async def test_last_group_may_be_partial():
    recorder = Recorder()

    results = await map_in_groups([1, 2, 3], 2, recorder)

    assert results == [10, 20, 30]


@pytest.mark.asyncio
async def test_empty_input():
    assert await map_in_groups([], 2, Recorder()) == []


@pytest.mark.asyncio
@pytest.mark.parametrize("width", [0, -1])
async def test_width_must_be_positive(width):
    with pytest.raises(ValueError):
        await map_in_groups([1], width, Recorder())
