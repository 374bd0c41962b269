"""Scoped execution.

Wraps a unit of work with a pre-step, a guaranteed post-step and a single
error handler that decides whether failures are swallowed or propagated:
- `ContextManager` runs the pre/work/post protocol
- `with_wait_lock` builds a lock-guarded context from injected backends
"""

__version__ = "0.1.0"

from scoped_execution.core import (
    PROPAGATE,
    SWALLOW,
    BodyNotDefinedError,
    ContextManager,
    Disposition,
    InvalidGuardKindError,
    ScopedExecutionError,
    prior_result,
)
from scoped_execution.presets import GuardKind, with_wait_lock

__all__ = [
    "__version__",
    "BodyNotDefinedError",
    "ContextManager",
    "Disposition",
    "GuardKind",
    "InvalidGuardKindError",
    "PROPAGATE",
    "SWALLOW",
    "ScopedExecutionError",
    "prior_result",
    "with_wait_lock",
]
