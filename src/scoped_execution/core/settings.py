"""Hook configuration for a context.

Every hook slot is always callable. Unset slots, and slots set to ``None`` at
construction or by assignment, fall back to a no-op, except the error handler,
whose default propagates every failure. The work hook has no default: a missing
work hook is only reported when the context is executed.

Keys are the snake_case field names or their camelCase aliases (``preStep``,
``postStep``, ``errorHandler``). Any other key is rejected.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from scoped_execution.core.dispatch import PROPAGATE, Disposition

Hook = Callable[[Any, Any], Any]
ErrorHandler = Callable[[Any, Exception], Any]


def noop_hook(state: Any, param: Any) -> None:
    return None


def propagate_errors(state: Any, error: Exception) -> Disposition:
    return PROPAGATE


class HookSettings(BaseModel):
    """The hook slots and payload of a context."""

    pre_step: Hook = Field(
        default=noop_hook,
        description="Runs before the work hook with (state, param)",
    )
    post_step: Hook = Field(
        default=noop_hook,
        description="Always runs after the work hook with (state, param)",
    )
    error_handler: ErrorHandler = Field(
        default=propagate_errors,
        description="Receives (state, error); return SWALLOW to suppress the error",
    )
    param: Any = Field(
        default=None,
        description="Opaque payload forwarded verbatim to every hook",
    )
    work: Hook | None = Field(
        default=None,
        description="The body of the context; required by execute()",
    )

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
        extra="forbid",
    )

    @field_validator("pre_step", "post_step", mode="before")
    @classmethod
    def _default_step(cls, value: Any) -> Any:
        return noop_hook if value is None else value

    @field_validator("error_handler", mode="before")
    @classmethod
    def _default_error_handler(cls, value: Any) -> Any:
        return propagate_errors if value is None else value


def parse_settings(obj: HookSettings | Mapping[str, Any] | None) -> HookSettings:
    """Build a `HookSettings` from a mapping, filling in defaults.

    Keys whose value is ``None`` are treated as absent so their defaults apply.
    A `HookSettings` instance is copied so the caller's object is not shared
    between contexts.
    """
    if obj is None:
        return HookSettings()
    if isinstance(obj, HookSettings):
        return obj.model_copy()
    return HookSettings(**{key: value for key, value in obj.items() if value is not None})
