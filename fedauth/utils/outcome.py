"""Helpers for turning throwing calls into `result.Result` values.

Collaborator calls raise on failure. Wrapping them with `capture` or
`capture_async` yields an `Ok`/`Err` that can be passed along a chain of
asynchronous steps, and `resolve` turns it back into a value or the
original exception.
"""

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from result import Err, Result, as_async_result, as_result

T = TypeVar("T")


def capture(fn: Callable[..., T], *args: Any, **kwargs: Any) -> Result[T, Exception]:
    """Run `fn` and hold either its return value or the exception it raised."""
    return as_result(Exception)(fn)(*args, **kwargs)


async def capture_async(
    fn: Callable[..., Awaitable[T]], *args: Any, **kwargs: Any
) -> Result[T, Exception]:
    """Await `fn` and hold either its return value or the exception it raised."""
    return await as_async_result(Exception)(fn)(*args, **kwargs)


def resolve(outcome: Result[T, Exception]) -> T:
    """Return the success value, or raise the captured exception unchanged."""
    if isinstance(outcome, Err):
        raise outcome.unwrap_err()
    return outcome.unwrap()
