"""Error dispatch policy.

The error handler of a context decides the fate of every failure raised by the
pre-step, the work hook or the post-step. It returns a `Disposition`: only an
explicit `SWALLOW` suppresses the failure. Any other return value, including
``None`` from a handler that forgot to return, propagates it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

PRIOR_RESULT_ATTR = "ctx_body_result"


class Disposition(str, Enum):
    SWALLOW = "swallow"
    PROPAGATE = "propagate"


SWALLOW = Disposition.SWALLOW
PROPAGATE = Disposition.PROPAGATE


class ErrorDispatcher:
    """Applies the configured error handler to a failure.

    The handler is looked up on every call so that replacing it on the context
    takes effect immediately. Dispatching is stateless and may happen twice
    within one run (once for the body, once for the post-step).
    """

    def __init__(self, handler: Callable[[], Callable[[Any, Exception], Any]]) -> None:
        self._handler = handler

    def dispatch(self, state: Any, error: Exception) -> bool:
        """Return True if `error` should be swallowed."""
        disposition = self._handler()(state, error)
        swallow = disposition is Disposition.SWALLOW
        logger.debug(
            "Dispatched %s: %s",
            type(error).__name__,
            "swallowed" if swallow else "propagating",
        )
        return swallow


def annotate_prior_result(error: Exception, prior: Any) -> Exception:
    """Attach the result that preceded a swallowed post-step failure."""
    setattr(error, PRIOR_RESULT_ATTR, prior)
    return error


def prior_result(error: BaseException, default: Any = None) -> Any:
    """Read the prior result attached by `annotate_prior_result`."""
    return getattr(error, PRIOR_RESULT_ATTR, default)


def has_prior_result(error: BaseException) -> bool:
    return hasattr(error, PRIOR_RESULT_ATTR)
