"""
Game lifecycle controller
-------------------------
States: start -> playing <-> paused, playing -> gameOver -> playing (restart).

Stepping is driven by an external frame source (one callback per display
refresh). At most one frame callback is pending at any time; pausing or
ending the game cancels it and resuming/restarting arms exactly one new one.
"""

from __future__ import annotations

import itertools
import logging
import random
import time
from typing import Callable, Dict, Hashable, List, Optional, Protocol

from .config import LEVEL_SCORE_STEP, MAX_STEPS_PER_FRAME
from .interface import NO_INTENTS, Intents, LifecycleState, Snapshot, take_snapshot
from .simulation import Simulation
from .timers import GameClock

logger = logging.getLogger(__name__)

FrameCallback = Callable[[], None]


class FrameSource(Protocol):
    """Something that calls back once per frame, like requestAnimationFrame"""

    def request_frame(self, callback: FrameCallback) -> Hashable:
        ...

    def cancel_frame(self, handle: Hashable) -> None:
        ...


class ManualFrameSource:
    """Frame source pumped by hand; used headless and in tests"""

    def __init__(self):
        self._pending: Dict[int, FrameCallback] = {}
        self._handles = itertools.count()

    def request_frame(self, callback: FrameCallback) -> int:
        handle = next(self._handles)
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: Hashable) -> None:
        self._pending.pop(handle, None)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def fire(self) -> int:
        """Deliver one frame; callbacks requested meanwhile wait for the next"""
        batch = list(self._pending.values())
        self._pending = {}
        for callback in batch:
            callback()
        return len(batch)


class GameController:
    """
    Owns the Simulation for the current session and the lifecycle around it.

    Args:
        frame_source: delivers frame callbacks; defaults to a ManualFrameSource
        intent_source: returns the Intents for the coming tick
        time_fn: wall clock in seconds, feeds the pausable game clock
        seed: seed for the simulation RNG
        fixed_step_ms: if set, run as many fixed steps per frame as the elapsed
            game time allows (capped) instead of one step per frame
    """

    def __init__(
        self,
        frame_source: Optional[FrameSource] = None,
        intent_source: Optional[Callable[[], Intents]] = None,
        time_fn: Callable[[], float] = time.monotonic,
        seed: Optional[int] = None,
        fixed_step_ms: Optional[float] = None,
        level_score_step: Optional[int] = LEVEL_SCORE_STEP,
    ):
        if fixed_step_ms is not None and fixed_step_ms <= 0:
            raise ValueError(f"fixed_step_ms must be positive, got {fixed_step_ms!r}")

        self.frame_source = frame_source if frame_source is not None else ManualFrameSource()
        self.intent_source = intent_source if intent_source is not None else (lambda: NO_INTENTS)
        self.clock = GameClock(time_fn)
        self.rng = random.Random(seed)
        self.fixed_step_ms = fixed_step_ms
        self.level_score_step = level_score_step

        self.state = LifecycleState.START
        self.high_score = 0
        self.simulation = self._new_simulation()

        self._frame_handle: Optional[Hashable] = None
        self._listeners: List[Callable[[Snapshot], None]] = []
        self._accumulator_ms = 0.0
        self._last_frame_ms: Optional[float] = None
        self._snapshot = take_snapshot(self.simulation, self.state)

    def _new_simulation(self) -> Simulation:
        return Simulation(
            clock=self.clock,
            rng=self.rng,
            high_score=self.high_score,
            level_score_step=self.level_score_step,
        )

    # ----------------------------
    # Lifecycle commands
    # ----------------------------

    def start_game(self):
        """Start or restart: discard the old session and begin playing"""
        self._disarm()
        self.clock.pause()
        self.clock.reset()
        self.simulation = self._new_simulation()
        self._accumulator_ms = 0.0

        self._set_state(LifecycleState.PLAYING)
        self.clock.resume()
        self._last_frame_ms = self.clock.now_ms()
        self._arm()
        self._publish()

    def toggle_pause(self):
        if self.state is LifecycleState.PLAYING:
            self._disarm()
            self.clock.pause()
            self._set_state(LifecycleState.PAUSED)
        elif self.state is LifecycleState.PAUSED:
            self.clock.resume()
            self._set_state(LifecycleState.PLAYING)
            self._arm()
        else:
            logger.debug("Ignoring pause toggle in state %s", self.state.value)
            return
        self._publish()

    # ----------------------------
    # Snapshot output
    # ----------------------------

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    def add_listener(self, listener: Callable[[Snapshot], None]):
        self._listeners.append(listener)

    def remove_listener(self, listener: Callable[[Snapshot], None]):
        self._listeners.remove(listener)

    def _publish(self):
        self._snapshot = take_snapshot(self.simulation, self.state)
        for listener in list(self._listeners):
            listener(self._snapshot)

    # ----------------------------
    # Frame handling
    # ----------------------------

    @property
    def frame_pending(self) -> bool:
        return self._frame_handle is not None

    def _arm(self):
        if self._frame_handle is None:
            self._frame_handle = self.frame_source.request_frame(self._on_frame)

    def _disarm(self):
        if self._frame_handle is not None:
            self.frame_source.cancel_frame(self._frame_handle)
            self._frame_handle = None

    def _on_frame(self):
        self._frame_handle = None
        if self.state is not LifecycleState.PLAYING:
            return

        intents = self.intent_source()
        if intents.pause:
            self.toggle_pause()
            return

        for _ in range(self._steps_due()):
            self.simulation.step(intents)
            if self.simulation.game_over:
                self._end_game()
                break

        self._publish()
        if self.state is LifecycleState.PLAYING:
            self._arm()

    def _steps_due(self) -> int:
        if self.fixed_step_ms is None:
            return 1

        now = self.clock.now_ms()
        if self._last_frame_ms is None:
            self._last_frame_ms = now
        self._accumulator_ms += now - self._last_frame_ms
        self._last_frame_ms = now

        steps = min(int(self._accumulator_ms // self.fixed_step_ms), MAX_STEPS_PER_FRAME)
        self._accumulator_ms -= steps * self.fixed_step_ms
        if steps == MAX_STEPS_PER_FRAME:
            # Drop the backlog rather than spiral
            self._accumulator_ms = min(self._accumulator_ms, self.fixed_step_ms)
        return steps

    def _end_game(self):
        self._disarm()
        self.clock.pause()
        self.high_score = self.simulation.scoreboard.high_score
        self._set_state(LifecycleState.GAME_OVER)
        logger.info(
            "Game over: score=%d level=%d high_score=%d",
            self.simulation.scoreboard.score,
            self.simulation.scoreboard.level,
            self.high_score,
        )

    def _set_state(self, state: LifecycleState):
        logger.debug("Lifecycle %s -> %s", self.state.value, state.value)
        self.state = state
