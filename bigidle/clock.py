from __future__ import annotations

import itertools
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable


def now_ms() -> int:
    """Wall-clock milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


@dataclass(eq=False)
class Subscription:
    """Handle for a periodic callback. Cancelled handles never fire again."""

    interval_ms: int
    callback: Callable[[], None]
    next_due: float
    seq: int = 0
    active: bool = field(default=True)

    def cancel(self) -> None:
        self.active = False


class Clock(ABC):
    """Time source that can invoke callbacks every N milliseconds.

    Callbacks run one at a time on the caller's thread, in due-time order;
    ties go to the older subscription.
    """

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []
        self._seq = itertools.count()

    @abstractmethod
    def now_ms(self) -> float: ...

    def every(self, interval_ms: int, callback: Callable[[], None]) -> Subscription:
        if interval_ms <= 0:
            raise ValueError(f"Interval must be positive, got {interval_ms}")
        sub = Subscription(
            interval_ms=interval_ms,
            callback=callback,
            next_due=self.now_ms() + interval_ms,
            seq=next(self._seq),
        )
        self._subscriptions.append(sub)
        return sub

    @property
    def active_subscriptions(self) -> list[Subscription]:
        self._subscriptions = [s for s in self._subscriptions if s.active]
        return list(self._subscriptions)

    def _next_subscription(self) -> Subscription | None:
        subs = self.active_subscriptions
        if not subs:
            return None
        return min(subs, key=lambda s: (s.next_due, s.seq))


class ManualClock(Clock):
    """Deterministic clock driven by ``advance``; used in tests and simulations."""

    def __init__(self, start: float = 0) -> None:
        super().__init__()
        self._now = start

    def now_ms(self) -> float:
        return self._now

    def advance(self, ms: float) -> int:
        """Move time forward by *ms*, firing every callback that falls due.

        Returns the number of callbacks fired.
        """
        if ms < 0:
            raise ValueError("Cannot move a clock backwards")
        target = self._now + ms
        fired = 0
        while True:
            sub = self._next_subscription()
            if sub is None or sub.next_due > target:
                break
            self._now = sub.next_due
            sub.next_due += sub.interval_ms
            sub.callback()
            fired += 1
        self._now = target
        return fired

    def set_time(self, now: float) -> None:
        """Jump to *now* without firing anything (simulates the app being closed)."""
        self._now = now
        for sub in self.active_subscriptions:
            if sub.next_due < now:
                sub.next_due = now + sub.interval_ms


class SystemClock(Clock):
    """Real-time clock; ``run`` sleeps until each callback is due."""

    def __init__(
        self,
        sleep: Callable[[float], None] = time.sleep,
        time_source: Callable[[], float] = now_ms,
    ) -> None:
        super().__init__()
        self._sleep = sleep
        self._time_source = time_source
        self._stopped = False

    def now_ms(self) -> float:
        return self._time_source()

    def stop(self) -> None:
        self._stopped = True

    def run(self, duration: float | None = None) -> None:
        """Dispatch callbacks until stopped, out of subscriptions, or *duration* s pass."""
        self._stopped = False
        end = None if duration is None else self.now_ms() + duration * 1000
        while not self._stopped:
            sub = self._next_subscription()
            if sub is None:
                return
            if end is not None and sub.next_due > end:
                remaining = end - self.now_ms()
                if remaining > 0:
                    self._sleep(remaining / 1000)
                return
            wait = sub.next_due - self.now_ms()
            if wait > 0:
                self._sleep(wait / 1000)
            if not sub.active or self._stopped:
                continue
            # Missed periods are skipped rather than replayed in a burst.
            now = self.now_ms()
            sub.next_due += sub.interval_ms
            while sub.next_due <= now:
                sub.next_due += sub.interval_ms
            sub.callback()
