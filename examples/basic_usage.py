#!/usr/bin/env python3
"""Programmatic usage example.

This demonstrates:

* a plain context with pre/post steps and an error handler
* the lock preset, backed here by in-process `threading.Lock` objects and a
  list that stands in for a buffered writer

Lock and flush backends are supplied by the caller; scoped_execution does not
ship any.
"""

from __future__ import annotations

import argparse
import threading
from typing import Any, Sequence

from scoped_execution import SWALLOW, ContextManager, GuardKind, prior_result, with_wait_lock
from scoped_execution.config import ScopedExecutionSettings


class ThreadingLock:
    def __init__(self, lock: threading.Lock) -> None:
        self._lock = lock

    def acquire(self, timeout_ms: int) -> bool:
        if not self._lock.acquire(timeout=timeout_ms / 1000):
            raise TimeoutError(f"Lock not acquired within {timeout_ms} ms")
        return True

    def release(self) -> None:
        self._lock.release()


class ThreadingLockProvider:
    def __init__(self) -> None:
        self._locks = {kind: threading.Lock() for kind in GuardKind}

    def get_lock(self, kind: GuardKind) -> ThreadingLock:
        return ThreadingLock(self._locks[kind])


class BufferedWriter:
    def __init__(self) -> None:
        self.pending: list[str] = []
        self.written: list[str] = []

    def flush(self) -> None:
        self.written.extend(self.pending)
        self.pending.clear()


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run work inside scoped contexts.")
    parser.add_argument("--rows", default="a,b,c", help="Comma-separated rows to write")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    rows = [row.strip() for row in args.rows.split(",") if row.strip()]

    settings = ScopedExecutionSettings()
    settings.setup_logging()

    counter = ContextManager.create(
        settings={
            "pre_step": lambda state, param: state.setdefault("runs", 0),
            "post_step": lambda state, param: state.update(runs=state["runs"] + 1),
            "error_handler": lambda state, error: SWALLOW,
            "work": lambda state, param: sum(param),
        }
    )
    print(f"sum: {counter.execute([1, 2, 3])}")
    print(f"swallowed: {counter.execute(['x'])!r}")
    print(f"runs: {counter.state['runs']}")

    writer = BufferedWriter()
    ctx = with_wait_lock(
        settings.wait_lock,
        guard_kind=GuardKind.DOCUMENT_LOCK,
        lock_provider=ThreadingLockProvider(),
        flush_provider=writer,
    )

    def write(state: dict[str, Any], batch: list[str]) -> int:
        writer.pending.extend(batch)
        return len(batch)

    ctx.work = write
    result = ctx.execute(rows)
    if isinstance(result, Exception):
        print(f"Write failed: {result} (prior result: {prior_result(result)!r})")
        return 1

    print(f"Wrote {result} rows: {writer.written}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
