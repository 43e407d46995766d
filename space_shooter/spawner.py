"""
Spawn director - decides when hostiles, the boss and powerups enter play
"""

from __future__ import annotations

import logging
from functools import partial
from typing import TYPE_CHECKING

from .config import (
    BOSS_DROP_COUNT,
    BOSS_DROP_SPACING,
    BOSS_DROP_STAGGER_MS,
    BOSS_LEVELS,
    ENEMY_BASE_SPEED,
    ENEMY_HEIGHT,
    ENEMY_SPEED_PER_LEVEL,
    ENEMY_WIDTH,
    FAST_ENEMY_CHANCE,
    GAME_WIDTH,
    POWERUP_DROP_CHANCE,
    POWERUP_FALL_SPEED,
    POWERUP_WIDTH,
    SPAWN_BASE_TICKS,
    SPAWN_MIN_TICKS,
    SPAWN_TICKS_PER_LEVEL,
)
from .entities import Hostile, HostileKind, Powerup, PowerupKind

if TYPE_CHECKING:
    from .simulation import Simulation

logger = logging.getLogger(__name__)


def spawn_interval(level: int) -> int:
    """Ticks between hostile spawns at a given level"""
    return max(SPAWN_BASE_TICKS - level * SPAWN_TICKS_PER_LEVEL, SPAWN_MIN_TICKS)


class SpawnDirector:
    """Time-gated creation of hostiles, the boss and powerups"""

    def __init__(self, sim: "Simulation"):
        self.sim = sim
        self.hostile_countdown = spawn_interval(sim.scoreboard.level)

    def update(self):
        sim = self.sim
        level = sim.scoreboard.level

        if not sim.is_boss_fight and sim.store.boss is None and level in BOSS_LEVELS:
            sim.boss_controller.spawn(level)

        # Ordinary spawning is frozen for the whole boss fight
        if sim.is_boss_fight:
            return

        self.hostile_countdown -= 1
        if self.hostile_countdown <= 0:
            self.hostile_countdown = spawn_interval(level)
            self.spawn_hostile()

    def spawn_hostile(self) -> Hostile:
        rng = self.sim.rng
        level = self.sim.scoreboard.level

        x = rng.random() * (GAME_WIDTH - ENEMY_WIDTH)
        speed = ENEMY_BASE_SPEED + level * ENEMY_SPEED_PER_LEVEL + rng.random()
        kind = HostileKind.FAST if rng.random() > 1.0 - FAST_ENEMY_CHANCE else HostileKind.NORMAL

        hostile = Hostile(x=x, y=-ENEMY_HEIGHT, speed=speed, kind=kind)
        self.sim.store.hostiles.add(hostile)
        return hostile

    # ----------------------------
    # Powerup drops
    # ----------------------------

    def maybe_drop(self, x: float, y: float):
        """Roll the per-kill drop chance at (x, y)"""
        if self.sim.rng.random() < POWERUP_DROP_CHANCE:
            self.drop(x, y)

    def drop(self, x: float, y: float) -> Powerup:
        kind = self.sim.rng.choice(list(PowerupKind))
        powerup = Powerup(x=x - POWERUP_WIDTH / 2, y=y, kind=kind, speed=POWERUP_FALL_SPEED)
        self.sim.store.powerups.add(powerup)
        logger.debug("Dropped %s powerup at (%.0f, %.0f)", kind.value, x, y)
        return powerup

    def schedule_boss_drops(self, x: float, y: float):
        """Queue the staggered drops released by a defeated boss"""
        now = self.sim.clock.now_ms()
        for i in range(BOSS_DROP_COUNT):
            offset = (i - (BOSS_DROP_COUNT - 1) / 2) * BOSS_DROP_SPACING
            self.sim.timers.schedule(
                now + i * BOSS_DROP_STAGGER_MS,
                partial(self.drop, x + offset, y),
                key=("boss_drop", self.sim.tick, i),
            )
