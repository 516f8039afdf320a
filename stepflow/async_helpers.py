"""Helpers for calling user code that may or may not be async."""

import inspect
from typing import Any, Callable


async def call_maybe_async(fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    """Call ``fn`` and await the result when it is awaitable.

    Lets step bodies, predicates and observer callbacks be written either
    as plain functions or as coroutine functions.

    Args:
        fn: Function to call (sync or async)
        *args: Positional arguments for fn
        **kwargs: Keyword arguments for fn

    Returns:
        The (awaited) return value of fn

    Example:
        >>> await call_maybe_async(lambda ctx: ctx.metadata.update(done=True), context)
    """
    result = fn(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
