"""Core package initialization."""

from scoped_execution.core.context import ContextManager
from scoped_execution.core.dispatch import (
    PRIOR_RESULT_ATTR,
    PROPAGATE,
    SWALLOW,
    Disposition,
    ErrorDispatcher,
    has_prior_result,
    prior_result,
)
from scoped_execution.core.errors import (
    BodyNotDefinedError,
    InvalidGuardKindError,
    ScopedExecutionError,
)
from scoped_execution.core.settings import HookSettings, parse_settings
from scoped_execution.core.state import StateContainer

__all__ = [
    "BodyNotDefinedError",
    "ContextManager",
    "Disposition",
    "ErrorDispatcher",
    "HookSettings",
    "InvalidGuardKindError",
    "PRIOR_RESULT_ATTR",
    "PROPAGATE",
    "SWALLOW",
    "ScopedExecutionError",
    "StateContainer",
    "has_prior_result",
    "parse_settings",
    "prior_result",
]
