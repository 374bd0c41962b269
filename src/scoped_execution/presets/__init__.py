"""Pre-configured contexts for common patterns."""

from scoped_execution.presets.wait_lock import (
    LOCK_STATE_KEY,
    FlushProvider,
    GuardKind,
    Lock,
    LockGuardedContext,
    LockProvider,
    with_wait_lock,
)

__all__ = [
    "FlushProvider",
    "GuardKind",
    "LOCK_STATE_KEY",
    "Lock",
    "LockGuardedContext",
    "LockProvider",
    "with_wait_lock",
]
