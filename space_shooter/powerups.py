"""
Powerup system - timed buffs and the firing rules they modify
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional

from .config import (
    BULLET_HEIGHT,
    BULLET_WIDTH,
    FIRE_COOLDOWN_MS,
    MAX_LIVES,
    POWERUP_DURATION_MS,
    RAPID_FIRE_COOLDOWN_MS,
    SPREAD_ANGLE,
    SPREAD_OFFSET_X,
    SPREAD_OFFSET_Y,
)
from .entities import ActivePowerups, Bullet, PowerupKind

if TYPE_CHECKING:
    from .simulation import Simulation

logger = logging.getLogger(__name__)


class PowerupSystem:
    """
    Activation and expiry of powerups.

    Timed flags expire on the game clock, which keeps running between ticks
    but stops while the game is paused. Re-collecting an active powerup
    replaces its pending expiry, so durations never stack.
    """

    def __init__(self, sim: "Simulation"):
        self.sim = sim
        self.active = ActivePowerups()
        self.last_shot_ms: Optional[float] = None

    def collect(self, kind: PowerupKind):
        sim = self.sim
        if kind is PowerupKind.EXTRA_LIFE:
            sim.scoreboard.lives = min(sim.scoreboard.lives + 1, MAX_LIVES)
            logger.debug("Extra life collected, lives=%d", sim.scoreboard.lives)
            return

        self.active.set(kind, True)
        due = sim.clock.now_ms() + POWERUP_DURATION_MS
        sim.timers.schedule(due, lambda: self._expire(kind), key=("powerup", kind))
        logger.debug("Powerup %s active until %.0fms", kind.value, due)

    def _expire(self, kind: PowerupKind):
        self.active.set(kind, False)
        logger.debug("Powerup %s expired", kind.value)

    def expires_at(self, kind: PowerupKind) -> Optional[float]:
        return self.sim.timers.due_at(("powerup", kind))

    @property
    def shielded(self) -> bool:
        return self.active.shield

    @property
    def fire_cooldown_ms(self) -> int:
        return RAPID_FIRE_COOLDOWN_MS if self.active.rapid_fire else FIRE_COOLDOWN_MS

    def try_fire(self) -> List[Bullet]:
        """Fire from the player's nose if the cooldown allows it"""
        now = self.sim.clock.now_ms()
        if self.last_shot_ms is not None and now - self.last_shot_ms <= self.fire_cooldown_ms:
            return []
        self.last_shot_ms = now

        player = self.sim.player
        x = player.x + player.width / 2 - BULLET_WIDTH / 2
        y = player.y - BULLET_HEIGHT

        bullets = [Bullet(x, y, 0.0)]
        if self.active.spread:
            bullets.append(Bullet(x - SPREAD_OFFSET_X, y + SPREAD_OFFSET_Y, -SPREAD_ANGLE))
            bullets.append(Bullet(x + SPREAD_OFFSET_X, y + SPREAD_OFFSET_Y, SPREAD_ANGLE))

        for bullet in bullets:
            self.sim.store.bullets.add(bullet)
        return bullets
