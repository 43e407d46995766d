"""
Simulation - the per-game state and the single step function that mutates it
-----------------------------------------------------------------------------
One step, in order:
  1. fire deferred effects that came due (powerup expiry, boss drops, explosions)
  2. apply movement / fire intents to the player
  3. advance bullets, powerups, hostiles, stars and boss projectiles
  4. spawn director
  5. boss controller (movement + attack timer)
  6. collision resolver
  7. level progression

Speeds are per tick, so the game runs faster when frames arrive faster.

Levels also rise every `level_score_step` points between boss levels (500 by
default, never past an unbeaten boss level). Pass `level_score_step=None` to
level up on boss defeat only.
"""

from __future__ import annotations

import random
from typing import Optional

from .boss import BossController
from .collisions import CollisionResolver
from .config import (
    BOSS_LEVELS,
    BULLET_DRIFT,
    BULLET_HEIGHT,
    BULLET_SPEED,
    EXPLOSION_DURATION_MS,
    GAME_HEIGHT,
    GAME_WIDTH,
    LEVEL_SCORE_STEP,
    PLAYER_SPEED,
    PLAYER_WIDTH,
    PLAYER_Y,
    PROJECTILE_MARGIN,
    START_LEVEL,
    START_LIVES,
    STAR_COUNT,
)
from .entities import Explosion, Player, Scoreboard, Star
from .interface import Intents
from .powerups import PowerupSystem
from .spawner import SpawnDirector
from .store import EntityStore
from .timers import GameClock, TimerQueue


class Simulation:
    """State of one game session plus the step that advances it"""

    def __init__(
        self,
        clock: Optional[GameClock] = None,
        rng: Optional[random.Random] = None,
        high_score: int = 0,
        level: int = START_LEVEL,
        lives: int = START_LIVES,
        level_score_step: Optional[int] = LEVEL_SCORE_STEP,
    ):
        self.clock = clock if clock is not None else GameClock()
        self.rng = rng if rng is not None else random.Random()
        self.level_score_step = level_score_step

        self.timers = TimerQueue()
        self.store = EntityStore()
        self.player = Player(x=GAME_WIDTH / 2 - PLAYER_WIDTH / 2, y=PLAYER_Y)
        self.scoreboard = Scoreboard(score=0, high_score=high_score, lives=lives, level=level)
        self.scoreboard.check()

        self.is_boss_fight = False
        self.game_over = False
        self.tick = 0

        self.powerups = PowerupSystem(self)
        self.boss_controller = BossController(self)
        self.spawner = SpawnDirector(self)
        self.collisions = CollisionResolver(self)

        self.store.stars = [self._new_star(self.rng.random() * GAME_HEIGHT) for _ in range(STAR_COUNT)]

    def _new_star(self, y: float) -> Star:
        rng = self.rng
        return Star(
            x=rng.random() * GAME_WIDTH,
            y=y,
            size=rng.random() * 2 + 1,
            speed=rng.random() * 2 + 1,
            opacity=rng.random() * 0.5 + 0.3,
        )

    # ----------------------------
    # Step
    # ----------------------------

    def step(self, intents: Intents):
        if self.game_over:
            return
        self.tick += 1

        self.timers.poll(self.clock.now_ms())
        self._apply_intents(intents)
        self._advance_entities()
        self.spawner.update()
        self.boss_controller.update()
        self.collisions.resolve()
        self._update_level()

        self.scoreboard.check()

    def _apply_intents(self, intents: Intents):
        player = self.player
        if intents.move_left:
            player.x = max(0, player.x - PLAYER_SPEED)
        if intents.move_right:
            player.x = min(GAME_WIDTH - PLAYER_WIDTH, player.x + PLAYER_SPEED)
        if intents.fire:
            self.powerups.try_fire()

    def _advance_entities(self):
        store = self.store

        for b in store.bullets:
            b.y -= BULLET_SPEED
            b.x += b.angle * BULLET_DRIFT
        store.bullets.keep(lambda b: b.y > -BULLET_HEIGHT and 0 < b.x < GAME_WIDTH)

        for p in store.powerups:
            p.y += p.speed
        store.powerups.keep(lambda p: p.y < GAME_HEIGHT)

        for h in store.hostiles:
            h.y += h.speed
        store.hostiles.keep(lambda h: h.y < GAME_HEIGHT)

        for s in store.stars:
            s.y += s.speed
            if s.y > GAME_HEIGHT:
                s.y = 0
                s.x = self.rng.random() * GAME_WIDTH

        for p in store.boss_projectiles:
            p.x += p.vx
            p.y += p.vy
        store.boss_projectiles.keep(
            lambda p: p.y < GAME_HEIGHT and -PROJECTILE_MARGIN < p.x < GAME_WIDTH + PROJECTILE_MARGIN
        )

    def _update_level(self):
        # Score-driven levelling halts at boss levels until the boss falls
        if not self.level_score_step or self.is_boss_fight or self.game_over:
            return
        sb = self.scoreboard
        target = START_LEVEL + sb.score // self.level_score_step
        while sb.level < target and sb.level not in BOSS_LEVELS:
            sb.level += 1

    # ----------------------------
    # Shared effects
    # ----------------------------

    def add_explosion(self, x: float, y: float) -> Explosion:
        now = self.clock.now_ms()
        explosion = Explosion(x=x, y=y, born_at=now)
        explosion_id = self.store.explosions.add(explosion)
        self.timers.schedule(
            now + EXPLOSION_DURATION_MS,
            lambda: self.store.explosions.remove(explosion_id),
            key=("explosion", explosion_id),
        )
        return explosion

    def lose_life(self):
        """Take one life; running out ends the game and settles the high score"""
        if self.game_over:
            return
        sb = self.scoreboard
        sb.lives -= 1
        if sb.lives <= 0:
            sb.lives = 0
            self.game_over = True
            sb.high_score = max(sb.high_score, sb.score)
