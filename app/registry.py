"""In-memory debounce registry for outbound webhook calls.

Triggers for the same key are coalesced into one delayed call. Every trigger
pushes the call back by a full window, unless the window measured from the
first trigger has already elapsed, in which case the call is sent right away
and a fresh window begins.

All mutations happen on the event loop thread: triggers arrive from async
route handlers and timers are ``loop.call_later`` callbacks, so no lock is
needed. Each scheduled fire carries a token; a fire whose token no longer
matches the stored entry has been superseded and does nothing.
"""

import asyncio
import itertools
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from app.config import DEBOUNCE_TIME_S
from app.dispatcher import dispatch
from app.logger import logger
from app.models import WebhookTarget

DispatchFn = Callable[[WebhookTarget], Awaitable[bool]]


@dataclass
class PendingCall:
    key: str
    target: WebhookTarget
    first_trigger_at: float
    token: int
    handle: asyncio.TimerHandle | None = None


class DebounceRegistry:
    def __init__(
        self,
        window: float,
        dispatcher: DispatchFn = dispatch,
        clock: Callable[[], float] = time.monotonic,
    ):
        if window <= 0:
            raise ValueError(f"window must be positive, got {window}")
        self._window = window
        self._dispatch = dispatcher
        self._clock = clock
        self._pending: dict[str, PendingCall] = {}
        self._tokens = itertools.count(1)
        self._inflight: set[asyncio.Task] = set()

    @property
    def window(self) -> float:
        return self._window

    @property
    def size(self) -> int:
        return len(self._pending)

    def __contains__(self, key: str) -> bool:
        return key in self._pending

    def get(self, key: str) -> PendingCall | None:
        return self._pending.get(key)

    def register_trigger(
        self, key: str, target: WebhookTarget, now: float | None = None
    ) -> bool:
        """Register a trigger for ``key``. Returns True if a call was sent now."""
        if now is None:
            now = self._clock()
        loop = asyncio.get_running_loop()

        sent_now = False
        first_trigger_at = now
        existing = self._pending.get(key)
        if existing is not None:
            if existing.handle is not None:
                existing.handle.cancel()
            if now - existing.first_trigger_at >= self._window:
                logger.info(f"Debounce window elapsed for {key!r}, sending now")
                self._start_dispatch(target)
                sent_now = True
            else:
                first_trigger_at = existing.first_trigger_at

        token = next(self._tokens)
        call = PendingCall(
            key=key,
            target=target,
            first_trigger_at=first_trigger_at,
            token=token,
        )
        call.handle = loop.call_later(self._window, self._fire, key, token)
        self._pending[key] = call
        return sent_now

    def cancel(self, key: str) -> bool:
        """Drop the pending call for ``key`` without sending it."""
        call = self._pending.pop(key, None)
        if call is None:
            return False
        if call.handle is not None:
            call.handle.cancel()
        return True

    def cancel_all(self) -> int:
        """Drop every pending call. Returns how many were dropped."""
        calls = list(self._pending.values())
        self._pending.clear()
        for call in calls:
            if call.handle is not None:
                call.handle.cancel()
        return len(calls)

    async def drain(self) -> None:
        """Wait for dispatches already in flight."""
        if self._inflight:
            await asyncio.gather(*self._inflight, return_exceptions=True)

    def _fire(self, key: str, token: int) -> None:
        call = self._pending.get(key)
        if call is None or call.token != token:
            logger.debug(f"Ignoring superseded timer for {key!r}")
            return
        del self._pending[key]
        self._start_dispatch(call.target)

    def _start_dispatch(self, target: WebhookTarget) -> None:
        task = asyncio.get_running_loop().create_task(self._dispatch(target))
        self._inflight.add(task)
        task.add_done_callback(self._dispatch_done)

    def _dispatch_done(self, task: asyncio.Task) -> None:
        self._inflight.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(f"Unexpected dispatch error: {exc}", exc_info=exc)


# Singleton shared by the HTTP layer.
registry = DebounceRegistry(window=DEBOUNCE_TIME_S)
