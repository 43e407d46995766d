"""
Boss controller - phase state machine, movement and attack patterns
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, List, Optional

from .config import (
    BOSS_ATTACK_TICKS,
    BOSS_BASE_HEALTH,
    BOSS_BASE_SPEED,
    BOSS_DESCENT_SPEED,
    BOSS_HEALTH_PER_LEVEL,
    BOSS_HEIGHT,
    BOSS_PROJECTILE_SIZE,
    BOSS_SCORE_MULTIPLIER,
    BOSS_SHOT_SPEED,
    BOSS_SPEED_PER_LEVEL,
    BOSS_TARGET_Y,
    BOSS_WIDTH,
    GAME_WIDTH,
    PHASE2_THRESHOLD,
    PHASE3_THRESHOLD,
    SPIRAL_LATERAL_SPEED,
    SPIRAL_RADIUS_X,
    SPIRAL_RADIUS_Y,
    SPIRAL_SHOT_SPEED,
    SPIRAL_STEP_DEG,
    SPREAD_SHOT_STEP,
)
from .entities import Boss, BossProjectile, ProjectileKind

if TYPE_CHECKING:
    from .simulation import Simulation

logger = logging.getLogger(__name__)


def phase_for(health: int, max_health: int, current: int) -> int:
    """Phase a boss should be in after a hit; never lower than current"""
    fraction = health / max_health
    if fraction <= PHASE3_THRESHOLD and current < 3:
        return 3
    if fraction <= PHASE2_THRESHOLD and current < 2:
        return 2
    return current


class BossController:
    """
    Drives the single boss entity.

    Phases only move forward (1 -> 2 -> 3), based on the remaining health
    fraction right after each hit. The attack timer counts ticks during a boss
    fight and fires the current phase's pattern when it reaches the phase's
    threshold. Every operation is a no-op while no boss is present.
    """

    def __init__(self, sim: "Simulation"):
        self.sim = sim
        self.attack_timer = 0

    @property
    def boss(self) -> Optional[Boss]:
        return self.sim.store.boss

    def spawn(self, level: int) -> Boss:
        max_health = BOSS_BASE_HEALTH + level * BOSS_HEALTH_PER_LEVEL
        boss = Boss(
            x=GAME_WIDTH / 2 - BOSS_WIDTH / 2,
            y=-BOSS_HEIGHT,
            target_y=BOSS_TARGET_Y,
            health=max_health,
            max_health=max_health,
            speed=BOSS_BASE_SPEED + level * BOSS_SPEED_PER_LEVEL,
        )
        self.sim.store.spawn_boss(boss)
        self.sim.store.hostiles.clear()
        self.sim.is_boss_fight = True
        self.attack_timer = 0
        logger.info("Boss spawned at level %d with %d health", level, max_health)
        return boss

    def update(self):
        boss = self.boss
        if boss is None:
            return

        self._move(boss)

        if not self.sim.is_boss_fight:
            return
        self.attack_timer += 1
        if self.attack_timer >= BOSS_ATTACK_TICKS[boss.phase]:
            self.attack_timer = 0
            self.attack()

    def _move(self, boss: Boss):
        # Entry animation first, then sweep side to side
        if boss.y < boss.target_y:
            boss.y = min(boss.y + BOSS_DESCENT_SPEED, boss.target_y)
            return

        boss.x += boss.speed * boss.direction
        right_edge = GAME_WIDTH - BOSS_WIDTH
        if boss.x <= 0:
            boss.x = 0
            boss.direction = -boss.direction
        elif boss.x >= right_edge:
            boss.x = right_edge
            boss.direction = -boss.direction

    # ----------------------------
    # Attacks
    # ----------------------------

    def attack(self) -> List[BossProjectile]:
        boss = self.boss
        if boss is None:
            return []

        center_x = boss.x + BOSS_WIDTH / 2
        bottom_y = boss.y + BOSS_HEIGHT
        origin_x = center_x - BOSS_PROJECTILE_SIZE / 2

        if boss.phase == 1:
            shots = [BossProjectile(origin_x, bottom_y, 0.0, BOSS_SHOT_SPEED, ProjectileKind.NORMAL)]
        elif boss.phase == 2:
            shots = [
                BossProjectile(origin_x, bottom_y, i * SPREAD_SHOT_STEP, BOSS_SHOT_SPEED, ProjectileKind.SPREAD)
                for i in range(-2, 3)
            ]
        else:
            angle = math.radians(boss.attack_pattern * SPIRAL_STEP_DEG)
            shots = [BossProjectile(
                origin_x + math.cos(angle) * SPIRAL_RADIUS_X,
                bottom_y + math.sin(angle) * SPIRAL_RADIUS_Y,
                math.cos(angle + math.pi / 2) * SPIRAL_LATERAL_SPEED,
                SPIRAL_SHOT_SPEED,
                ProjectileKind.SPIRAL,
            )]

        boss.attack_pattern += 1
        for shot in shots:
            self.sim.store.boss_projectiles.add(shot)
        return shots

    # ----------------------------
    # Damage & defeat
    # ----------------------------

    def damage(self, amount: int = 1) -> bool:
        """Apply a hit; returns True when the hit defeated the boss"""
        boss = self.boss
        if boss is None:
            return False

        boss.health = max(boss.health - amount, 0)
        if boss.health <= 0:
            self._defeat(boss)
            return True

        new_phase = phase_for(boss.health, boss.max_health, boss.phase)
        assert new_phase >= boss.phase, "boss phase moved backwards"
        if new_phase != boss.phase:
            logger.info("Boss entered phase %d (%d/%d health)", new_phase, boss.health, boss.max_health)
            boss.phase = new_phase
        return False

    def _defeat(self, boss: Boss):
        sim = self.sim
        cx, cy = boss.center

        sim.store.clear_boss()
        sim.add_explosion(cx, cy)
        sim.store.boss_projectiles.clear()
        sim.scoreboard.score += boss.max_health * BOSS_SCORE_MULTIPLIER
        sim.spawner.schedule_boss_drops(cx, cy)
        sim.scoreboard.level += 1
        sim.is_boss_fight = False
        self.attack_timer = 0

        logger.info("Boss defeated, advancing to level %d", sim.scoreboard.level)
