"""Test configuration and fixtures."""

from __future__ import annotations

from typing import Any
from unittest.mock import Mock

import pytest

from scoped_execution.core.context import ContextManager
from scoped_execution.presets.wait_lock import FlushProvider, Lock, LockProvider


class CallLog:
    """Records hook invocations in order."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, Any]] = []

    def hook(self, name: str, result: Any = None, raises: BaseException | None = None):
        def _hook(state: Any, arg: Any) -> Any:
            self.calls.append((name, arg))
            if raises is not None:
                raise raises
            return result

        return _hook

    @property
    def names(self) -> list[str]:
        return [name for name, _ in self.calls]


@pytest.fixture
def call_log() -> CallLog:
    return CallLog()


@pytest.fixture
def ctx(call_log: CallLog) -> ContextManager:
    """Provide a context whose pre/post steps are recorded."""
    return ContextManager.create(
        settings={
            "pre_step": call_log.hook("pre"),
            "post_step": call_log.hook("post"),
        }
    )


@pytest.fixture
def lock() -> Mock:
    return Mock(spec=Lock)


@pytest.fixture
def lock_provider(lock: Mock) -> Mock:
    provider = Mock(spec=LockProvider)
    provider.get_lock.return_value = lock
    return provider


@pytest.fixture
def flush_provider() -> Mock:
    return Mock(spec=FlushProvider)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Keep settings tests independent of the developer's environment."""
    monkeypatch.chdir(tmp_path)
    for name in (
        "SCOPED_EXECUTION_LOG_LEVEL",
        "SCOPED_EXECUTION_DEBUG",
        "SCOPED_EXECUTION_WAIT_LOCK_TIMEOUT_MS",
    ):
        monkeypatch.delenv(name, raising=False)
