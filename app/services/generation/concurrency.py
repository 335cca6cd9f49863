import asyncio
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

from app.utils.logger import setup_logger

logger = setup_logger("generation.concurrency")

T = TypeVar("T")
R = TypeVar("R")


async def map_in_groups(
    items: Sequence[T],
    width: int,
    func: Callable[[T], Awaitable[R]],
    log_prefix: str = "",
) -> list[R | BaseException]:
    """
    Apply ``func`` to every item, at most ``width`` at a time, with hard group
    boundaries.

    Items are split into consecutive groups of ``width``. All calls in a group
    run concurrently and the next group starts only after every call in the
    current one has finished, successfully or not. A failing call does not
    stop its group or later groups; its exception takes its slot in the result.

    Args:
        items: Inputs, processed in order.
        width: Group size, must be at least 1.
        func: Coroutine function applied to each item.
        log_prefix: Prefix for log lines, e.g. a run id.

    Returns:
        One entry per item, in input order: the call's return value or the
        exception it raised.
    """
    if width < 1:
        raise ValueError(f"width must be at least 1, got {width}")

    results: list[R | BaseException] = []
    total_groups = (len(items) + width - 1) // width

    for group_index, start in enumerate(range(0, len(items), width), start=1):
        group = items[start : start + width]
        logger.debug(
            f"{log_prefix}Dispatching group {group_index}/{total_groups} ({len(group)} items)"
        )
        group_results = await asyncio.gather(
            *(func(item) for item in group), return_exceptions=True
        )
        failed = sum(isinstance(r, BaseException) for r in group_results)
        if failed:
            logger.debug(
                f"{log_prefix}Group {group_index}/{total_groups} finished with {failed} failed items"
            )
        results.extend(group_results)

    return results
