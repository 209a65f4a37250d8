"""Transaction boundary shared by every lifecycle operation.

Operations return ``Result`` values for expected outcomes. Anything else
raised inside an operation is logged, the store is rolled back and the
caller receives ``User.Unexpected``. Cancellation is never converted: the
store is rolled back and ``CancelledError`` propagates.
"""

from __future__ import annotations

import asyncio
import functools
import logging
from typing import TYPE_CHECKING, Any, Awaitable, Callable, TypeVar

from vet_identity.domain.shared import Result
from vet_identity.domain.user.errors import UserErrors

if TYPE_CHECKING:
    from vet_identity.application.ports import CredentialStore

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=Result)


async def commit(store: CredentialStore) -> None:
    """Commit, letting an already started commit finish under cancellation.

    The commit runs in its own task and every wait on it is shielded, so
    repeated cancellation of the caller never reaches the commit. Once the
    commit has finished the cancellation propagates.
    """
    task = asyncio.ensure_future(store.commit())
    cancelled = False
    while not task.done():
        try:
            await asyncio.shield(task)
        except asyncio.CancelledError:
            cancelled = True
        except Exception:
            break

    if cancelled:
        if not task.cancelled() and task.exception() is not None:
            logger.error("Commit failed after cancellation: %s", task.exception())
        raise asyncio.CancelledError

    task.result()


async def _rollback(store: CredentialStore, operation: str) -> None:
    try:
        await store.rollback()
    except Exception:
        logger.exception("Rollback failed during %s", operation)


def operation_boundary(
    operation: str,
) -> Callable[[Callable[..., Awaitable[R]]], Callable[..., Awaitable[R]]]:
    """Wrap a service method in the transaction boundary.

    The decorated method's instance must expose the store as ``_store``.
    Failed results are rolled back as well, so nothing staged before the
    failure leaks into a later commit on the same store.
    """

    def decorator(func: Callable[..., Awaitable[R]]) -> Callable[..., Awaitable[R]]:
        @functools.wraps(func)
        async def wrapper(self: Any, *args: Any, **kwargs: Any) -> R:
            store: CredentialStore = self._store
            try:
                result = await func(self, *args, **kwargs)
            except asyncio.CancelledError:
                logger.info("%s cancelled, rolling back", operation)
                await _rollback(store, operation)
                raise
            except Exception:
                logger.exception("Unexpected error during %s", operation)
                await _rollback(store, operation)
                return Result.failure(UserErrors.unexpected(operation))  # type: ignore[return-value]

            if result.is_failure:
                await _rollback(store, operation)
            return result

        return wrapper

    return decorator
