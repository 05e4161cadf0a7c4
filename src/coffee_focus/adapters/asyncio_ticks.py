"""Tick source running on an asyncio event loop."""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field

from coffee_focus.services.timer import TickSource


@dataclass
class AsyncioTickSource(TickSource):
    """Delivers one callback per interval via ``loop.call_later``.

    The next tick is scheduled only after the previous callback returns, so
    callbacks never overlap. ``cancel`` drops the pending handle immediately.
    """

    loop: asyncio.AbstractEventLoop
    interval_seconds: float = 1.0
    _callback: Callable[[], None] | None = field(init=False, default=None)
    _handle: asyncio.TimerHandle | None = field(init=False, default=None)
    _generation: int = field(init=False, default=0)

    @property
    def is_active(self) -> bool:
        return self._callback is not None

    def start(self, callback: Callable[[], None]) -> None:
        """Begin ticking; ignored while already active."""
        if self._callback is not None:
            return
        self._generation += 1
        self._callback = callback
        self._schedule(self._generation)

    def cancel(self) -> None:
        """Stop ticking and drop any pending callback."""
        self._generation += 1
        self._callback = None
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _schedule(self, generation: int) -> None:
        self._handle = self.loop.call_later(
            self.interval_seconds, self._fire, generation
        )

    def _fire(self, generation: int) -> None:
        self._handle = None
        callback = self._callback
        if callback is None or generation != self._generation:
            return
        try:
            callback()
        finally:
            if generation == self._generation and self._handle is None:
                self._schedule(generation)
