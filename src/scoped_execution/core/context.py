"""The scoped-execution engine.

A `ContextManager` wraps a unit of work with a pre-step, a post-step that is
guaranteed to run, and an error handler that decides whether failures are
swallowed or propagated. Every hook receives the context's state object as its
first argument and the configured payload as its second::

    ctx = ContextManager.create(settings={"work": lambda state, param: param * 2})
    ctx.execute(21)  # -> 42

Run protocol:

1. pre-step; if it fails the work hook is skipped
2. work hook; its return value is the result
3. a pre-step or work failure is dispatched to the error handler; when it is
   swallowed the exception object becomes the result, otherwise it is pending
4. post-step, exactly once, whatever happened before
5. a post-step failure is dispatched on its own: if it propagates it replaces
   any pending failure; if it is swallowed it becomes the result, annotated
   with the prior result (see `prior_result`)
6. a pending failure is raised, otherwise the result is returned

Only `Exception` subclasses are dispatched. Anything else (for instance
`KeyboardInterrupt`) still triggers the post-step and then propagates.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from scoped_execution.core.dispatch import ErrorDispatcher, annotate_prior_result
from scoped_execution.core.errors import BodyNotDefinedError
from scoped_execution.core.settings import ErrorHandler, Hook, HookSettings, parse_settings
from scoped_execution.core.state import StateContainer

logger = logging.getLogger(__name__)

_UNSET: Any = object()


def _hook_name(hook: object) -> str:
    return getattr(hook, "__qualname__", None) or type(hook).__name__


class ContextManager:
    """Configurable pre/work/post execution wrapper.

    A context owns one `HookSettings` and one state object. Hooks and state can
    be replaced any number of times between runs, and `run`/`execute` can be
    called repeatedly; each call is a fresh pass sharing the same state.

    This is not a `with`-statement context manager: it has no `__enter__` or
    `__exit__`. Work is passed to `run` or configured and started with `execute`.
    Assigning `None` to a hook restores its default.

    Not safe for concurrent runs on the same instance.
    """

    def __init__(
        self,
        state: Any = None,
        settings: HookSettings | Mapping[str, Any] | None = None,
    ) -> None:
        self._settings: HookSettings = parse_settings(settings)
        self._state = StateContainer(self.default_object, state)
        self._dispatcher = ErrorDispatcher(lambda: self._settings.error_handler)

    @classmethod
    def create(
        cls,
        state: Any = None,
        settings: HookSettings | Mapping[str, Any] | None = None,
    ) -> ContextManager:
        return cls(state=state, settings=settings)

    def default_object(self) -> Any:
        """Return the state used when none is supplied.

        Subclasses override this to start from a richer structure.
        """
        return {}

    @property
    def settings(self) -> HookSettings:
        return self._settings

    @settings.setter
    def settings(self, obj: HookSettings | Mapping[str, Any] | None) -> None:
        self._settings = parse_settings(obj)

    @property
    def state(self) -> Any:
        return self._state.get()

    @state.setter
    def state(self, obj: Any) -> None:
        self._state.set(obj)

    @property
    def pre_step(self) -> Hook:
        return self._settings.pre_step

    @pre_step.setter
    def pre_step(self, func: Hook | None) -> None:
        self._settings.pre_step = func

    @property
    def post_step(self) -> Hook:
        return self._settings.post_step

    @post_step.setter
    def post_step(self, func: Hook | None) -> None:
        self._settings.post_step = func

    @property
    def error_handler(self) -> ErrorHandler:
        return self._settings.error_handler

    @error_handler.setter
    def error_handler(self, func: ErrorHandler | None) -> None:
        self._settings.error_handler = func

    @property
    def param(self) -> Any:
        return self._settings.param

    @param.setter
    def param(self, obj: Any) -> None:
        self._settings.param = obj

    @property
    def work(self) -> Hook | None:
        return self._settings.work

    @work.setter
    def work(self, func: Hook | None) -> None:
        self._settings.work = func

    def execute(self, param: Any = None) -> Any:
        """Run the configured work hook with `param` as payload.

        Raises:
            BodyNotDefinedError: If no work hook is configured. No hook runs.
        """
        work = self._settings.work
        if work is None:
            raise BodyNotDefinedError()
        self._settings.param = param
        return self.run(work)

    def dispatch_error(self, state: Any, error: Exception) -> bool:
        """Return True if the error handler swallows `error`."""
        return self._dispatcher.dispatch(state, error)

    def run(self, work: Hook) -> Any:
        """Run `work` inside the context and return its result.

        Args:
            work: Hook invoked as ``work(state, param)``.

        Returns:
            The work hook's return value, or the exception object if a failure
            was swallowed.

        Raises:
            Exception: A failure the error handler did not swallow, raised
                after the post-step has run.
        """
        settings = self._settings
        state = self._state.get()
        if state is None:
            state = self.default_object()
        param = settings.param

        logger.debug("Running %s in context", _hook_name(work))

        result: Any = _UNSET
        caught: Exception | None = None
        try:
            settings.pre_step(state, param)
            result = work(state, param)
        except Exception as error:
            caught = error
            if not self.dispatch_error(state, error):
                raise
            result = error
        finally:
            try:
                settings.post_step(state, param)
            except Exception as error:
                if not self.dispatch_error(state, error):
                    raise
                prior = caught if caught is not None else result
                result = error if prior is _UNSET else annotate_prior_result(error, prior)

        return result
