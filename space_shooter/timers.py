"""
Game clock and deferred effects
-------------------------------
- GameClock: wall-clock milliseconds that only advance while the game runs
- TimerQueue: keyed callbacks that fire once the game clock passes their due time
- ManualTime: a settable time source for headless drivers
"""

from __future__ import annotations

import itertools
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Hashable, List, Optional


class ManualTime:
    """Time source that only moves when told to (seconds, like time.monotonic)"""

    def __init__(self, start: float = 0.0):
        self.now = start

    def advance(self, seconds: float):
        self.now += seconds

    def advance_ms(self, ms: float):
        self.now += ms / 1000.0

    def __call__(self) -> float:
        return self.now


class GameClock:
    """
    Pausable wall clock.

    Reads the underlying time source while running and freezes while paused,
    so anything timed against it is suspended rather than merely delayed.
    """

    def __init__(self, time_fn: Callable[[], float] = time.monotonic):
        self._time_fn = time_fn
        self._elapsed_ms = 0.0
        self._started_at: Optional[float] = None

    @property
    def running(self) -> bool:
        return self._started_at is not None

    def now_ms(self) -> float:
        if self._started_at is None:
            return self._elapsed_ms
        return self._elapsed_ms + (self._time_fn() - self._started_at) * 1000.0

    def resume(self):
        if self._started_at is None:
            self._started_at = self._time_fn()

    def pause(self):
        if self._started_at is not None:
            self._elapsed_ms = self.now_ms()
            self._started_at = None

    def reset(self):
        self._elapsed_ms = 0.0
        if self._started_at is not None:
            self._started_at = self._time_fn()


@dataclass(order=True)
class _Timer:
    due_ms: float
    seq: int
    key: Hashable = field(compare=False)
    callback: Callable[[], None] = field(compare=False)


class TimerQueue:
    """
    Scheduled callbacks keyed by due time.

    Scheduling under a key that is already pending replaces the old entry,
    which is how powerup expiries restart instead of stacking. Callbacks run
    from poll(), in due-time order, never re-entrantly.
    """

    def __init__(self):
        self._timers: Dict[Hashable, _Timer] = {}
        self._seq = itertools.count()

    def schedule(self, due_ms: float, callback: Callable[[], None], key: Optional[Hashable] = None) -> Hashable:
        seq = next(self._seq)
        if key is None:
            key = ("anon", seq)
        self._timers[key] = _Timer(due_ms, seq, key, callback)
        return key

    def cancel(self, key: Hashable):
        self._timers.pop(key, None)

    def due_at(self, key: Hashable) -> Optional[float]:
        timer = self._timers.get(key)
        return None if timer is None else timer.due_ms

    def poll(self, now_ms: float) -> int:
        """Fire every timer due at or before now_ms, returns how many fired"""
        due: List[_Timer] = sorted(t for t in self._timers.values() if t.due_ms <= now_ms)
        fired = 0
        for timer in due:
            # An earlier callback may have rescheduled or cancelled this key
            if self._timers.get(timer.key) is not timer:
                continue
            del self._timers[timer.key]
            timer.callback()
            fired += 1
        return fired

    def clear(self):
        self._timers = {}

    def __len__(self) -> int:
        return len(self._timers)
