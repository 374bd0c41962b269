"""Holder for the execution state shared by every hook of a context."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any


class StateContainer:
    """Keeps a single mutable state object by reference.

    Setting ``None`` stores a fresh object from `factory` instead. The factory
    is called on assignment, not on every run, so the same object is seen by
    all subsequent runs until the state is replaced.
    """

    def __init__(self, factory: Callable[[], Any], initial: Any = None) -> None:
        self._factory = factory
        self._value: Any = None
        self.set(initial)

    def get(self) -> Any:
        return self._value

    def set(self, obj: Any) -> None:
        self._value = self._factory() if obj is None else obj
