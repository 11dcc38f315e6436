"""Periodic tick sources for the countdown."""

import asyncio
import contextlib
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

_logger = logging.getLogger(__name__)


class Ticker(Protocol):
    """A single periodic callback source."""

    @property
    def running(self) -> bool:
        """Return True while the tick source is active."""

    def start(self, callback: Callable[[], None]) -> None:
        """Begin calling callback periodically; no-op when already running."""

    def stop(self) -> None:
        """Stop calling the callback."""


@dataclass
class AsyncioTicker(Ticker):
    """Ticker backed by one asyncio task on the running loop."""

    interval_seconds: float = 1.0
    _task: asyncio.Task[None] | None = field(default=None, init=False, repr=False)

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, callback: Callable[[], None]) -> None:
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run(callback))

    def stop(self) -> None:
        task = self._task
        self._task = None
        if task is not None and not task.done():
            task.cancel()

    async def aclose(self) -> None:
        """Stop and wait for the tick task to finish."""
        task = self._task
        self.stop()
        if task is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await task

    async def _run(self, callback: Callable[[], None]) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            try:
                callback()
            except Exception:
                _logger.exception("Tick callback failed")
                raise
