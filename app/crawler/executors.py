"""
Executors that run an accepted crawl off the caller's thread.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any, Protocol


class CrawlTaskExecutor(Protocol):
    def submit(self, task: Callable[..., None], *args: Any, **kwargs: Any) -> None:
        ...


class ThreadTaskExecutor:
    """
    Runs each submitted task on its own daemon thread.
    """

    def __init__(self, *, name: str = "inventory-crawl") -> None:
        self._name = name
        self._threads: list[threading.Thread] = []

    def submit(self, task: Callable[..., None], *args: Any, **kwargs: Any) -> None:
        thread = threading.Thread(
            target=task,
            args=args,
            kwargs=kwargs,
            name=self._name,
            daemon=True,
        )
        self._threads = [running for running in self._threads if running.is_alive()]
        self._threads.append(thread)
        thread.start()

    @property
    def tracked_threads(self) -> int:
        return len(self._threads)

    def join(self, timeout: float | None = None) -> None:
        for thread in list(self._threads):
            thread.join(timeout)
        self._threads = [thread for thread in self._threads if thread.is_alive()]
