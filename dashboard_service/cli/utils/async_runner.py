"""Bridge between click's synchronous callbacks and async services."""

import asyncio
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any


def coro[T](f: Callable[..., Awaitable[T]]) -> Callable[..., T]:
    """
    Run an async click command on a fresh event loop.

    Usage:
        @dummies.command("seed")
        @coro
        async def seed(count: int) -> None:
            async with get_async_session() as session:
                ...
    """

    @wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> T:
        async def _call() -> T:
            return await f(*args, **kwargs)

        return asyncio.run(_call())

    return wrapper
