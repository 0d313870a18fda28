"""Executors that run fight simulations off the caller's thread."""

from __future__ import annotations

import threading
from collections.abc import Callable
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Optional, TypeVar

T = TypeVar("T")


class InlineExecutor(Executor):
    """Run every submitted call immediately on the calling thread."""

    def submit(self, fn: Callable[..., T], /, *args, **kwargs) -> Future[T]:
        future: Future[T] = Future()
        try:
            result = fn(*args, **kwargs)
        except BaseException as exc:
            future.set_exception(exc)
        else:
            future.set_result(result)
        return future


class BackgroundExecutor(Executor):
    """One long-lived worker thread shared by every call.

    The pool is created lazily on first use and recreated if it was shut
    down, so the executor can outlive individual shutdowns in tests.
    """

    def __init__(self, thread_name_prefix: str = "outcome-core") -> None:
        self._thread_name_prefix = thread_name_prefix
        self._pool: Optional[ThreadPoolExecutor] = None
        self._lock = threading.Lock()

    def _ensure_pool(self) -> ThreadPoolExecutor:
        with self._lock:
            if self._pool is None:
                self._pool = ThreadPoolExecutor(
                    max_workers=1, thread_name_prefix=self._thread_name_prefix
                )
            return self._pool

    def submit(self, fn: Callable[..., T], /, *args, **kwargs) -> Future[T]:
        return self._ensure_pool().submit(fn, *args, **kwargs)

    def shutdown(self, wait: bool = True, *, cancel_futures: bool = False) -> None:
        with self._lock:
            pool, self._pool = self._pool, None
        if pool is not None:
            pool.shutdown(wait=wait, cancel_futures=cancel_futures)


_shared_executor: Optional[BackgroundExecutor] = None
_shared_lock = threading.Lock()


def get_background_executor() -> BackgroundExecutor:
    """Return the process-wide background executor."""

    global _shared_executor
    with _shared_lock:
        if _shared_executor is None:
            _shared_executor = BackgroundExecutor()
        return _shared_executor


def shutdown_background_executor(wait: bool = True) -> None:
    global _shared_executor
    with _shared_lock:
        executor, _shared_executor = _shared_executor, None
    if executor is not None:
        executor.shutdown(wait=wait)
