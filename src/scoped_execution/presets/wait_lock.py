"""Lock-guarded execution preset.

`with_wait_lock` builds a context whose pre-step waits for a lock from an
injected provider and whose post-step flushes pending side effects and
releases it. The lock handle travels from pre-step to post-step on the state
object under `LOCK_STATE_KEY`.

Example::

    ctx = with_wait_lock(
        {"timeout_ms": 1000},
        guard_kind=GuardKind.DOCUMENT_LOCK,
        lock_provider=locks,
        flush_provider=store,
    )
    ctx.work = lambda state, rows: store.append(rows)
    ctx.execute(rows)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any, Protocol

from scoped_execution.config import WaitLockOptions
from scoped_execution.core.context import ContextManager
from scoped_execution.core.dispatch import SWALLOW, Disposition
from scoped_execution.core.errors import InvalidGuardKindError

logger = logging.getLogger(__name__)

LOCK_STATE_KEY = "lock"


class GuardKind(str, Enum):
    SCRIPT_LOCK = "scriptLock"
    DOCUMENT_LOCK = "documentLock"
    USER_LOCK = "userLock"


class Lock(Protocol):
    """A lock handle handed out by a `LockProvider`."""

    def acquire(self, timeout_ms: int) -> Any:
        """Block up to `timeout_ms`; raise if the lock could not be taken."""
        ...

    def release(self) -> None: ...


class LockProvider(Protocol):
    def get_lock(self, kind: GuardKind) -> Lock: ...


class FlushProvider(Protocol):
    """Commits side effects made while the lock was held."""

    def flush(self) -> None: ...


class LockGuardedContext(ContextManager):
    """Context whose default state has a slot for the lock handle."""

    def default_object(self) -> dict[str, Any]:
        return {LOCK_STATE_KEY: None}


def _resolve_guard_kind(guard_kind: GuardKind | str) -> GuardKind:
    try:
        return GuardKind(guard_kind)
    except ValueError:
        raise InvalidGuardKindError(guard_kind) from None


_OPTION_ALIASES: dict[str, str] = {"timeoutMs": "timeout_ms", "timeout": "timeout_ms"}


def _resolve_options(options: WaitLockOptions | Mapping[str, Any] | None) -> WaitLockOptions:
    if options is None:
        return WaitLockOptions()
    if isinstance(options, WaitLockOptions):
        return options

    values = {_OPTION_ALIASES.get(key, key): value for key, value in options.items()}
    unknown = sorted(set(values) - set(WaitLockOptions.model_fields))
    if unknown:
        raise ValueError(f"Unknown wait lock options: {', '.join(unknown)}")
    return WaitLockOptions(**values)


def with_wait_lock(
    options: WaitLockOptions | Mapping[str, Any] | None = None,
    *,
    guard_kind: GuardKind | str = GuardKind.SCRIPT_LOCK,
    lock_provider: LockProvider,
    flush_provider: FlushProvider,
) -> LockGuardedContext:
    """Create a context that runs its work while holding a lock.

    Args:
        options: Lock options; loaded from the environment when omitted. A
            mapping may use `timeout_ms`, `timeoutMs` or `timeout`.
        guard_kind: Which lock the provider should hand out.
        lock_provider: Source of lock handles.
        flush_provider: Flushed after the work, before the lock is released.

    Returns:
        A new context with pre-step, post-step and error handler configured.
        The error handler swallows every failure; assign `error_handler` on
        the returned context to change that.

    Raises:
        InvalidGuardKindError: If `guard_kind` is not a `GuardKind`. Raised
            before the providers are touched.
        ValueError: If an options mapping has an unknown key.
    """
    kind = _resolve_guard_kind(guard_kind)
    timeout_ms = _resolve_options(options).timeout_ms

    def acquire_lock(state: dict[str, Any], param: Any) -> None:
        lock = lock_provider.get_lock(kind)
        lock.acquire(timeout_ms)
        state[LOCK_STATE_KEY] = lock
        logger.debug(f"Acquired {kind.value} (timeout {timeout_ms} ms)")

    def flush_and_release(state: dict[str, Any], param: Any) -> None:
        lock = state.get(LOCK_STATE_KEY)
        state[LOCK_STATE_KEY] = None
        if lock is None:
            return
        try:
            flush_provider.flush()
        finally:
            lock.release()
            logger.debug(f"Released {kind.value}")

    def swallow_errors(state: dict[str, Any], error: Exception) -> Disposition:
        logger.warning(
            f"Swallowed error in {kind.value} context: {error}",
            exc_info=error,
            extra={"guard_kind": kind.value},
        )
        return SWALLOW

    ctx = LockGuardedContext()
    ctx.pre_step = acquire_lock
    ctx.post_step = flush_and_release
    ctx.error_handler = swallow_errors
    return ctx
