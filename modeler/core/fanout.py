import asyncio
import logging
from starlette.concurrency import run_in_threadpool
from typing import Any, Callable, Iterable, List, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def gather_lookups(
    keys: Iterable[T],
    lookup: Callable[[T], Optional[Any]],
    label: str = "item"
) -> List[Any]:
    """
    Run lookup(key) for every key concurrently on the threadpool.

    Results keep the order of keys. A lookup that raises or returns None
    drops its item from the result and is logged as a warning.
    """
    keys = list(keys)
    results = await asyncio.gather(
        *[run_in_threadpool(lookup, key) for key in keys],
        return_exceptions=True
    )

    items = []
    for key, result in zip(keys, results):
        if isinstance(result, Exception):
            logger.warning("Dropping %s %s: %s", label, key, result)
            continue
        if result is None:
            logger.warning("Dropping %s %s: not found", label, key)
            continue
        items.append(result)
    return items
