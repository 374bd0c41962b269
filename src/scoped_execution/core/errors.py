"""Exceptions raised by the execution engine and its presets.

Failures raised by hooks are never wrapped: they reach the error handler (and,
if propagated, the caller) as the original exception objects.
"""

from __future__ import annotations


class ScopedExecutionError(Exception):
    """Base class for errors raised by scoped_execution itself."""


class BodyNotDefinedError(ScopedExecutionError, RuntimeError):
    """`execute` was called on a context with no work hook configured."""

    def __init__(self) -> None:
        super().__init__("Body method for context has not been defined")


class InvalidGuardKindError(ScopedExecutionError, ValueError):
    """A lock preset was asked for a guard kind it does not know."""

    def __init__(self, guard_kind: object) -> None:
        self.guard_kind = guard_kind
        super().__init__(f"No such guard: {guard_kind!r}")
