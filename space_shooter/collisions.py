"""
Collision resolver - per-tick pair checks and their score/life effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Set

from .config import SCORE_FAST, SCORE_NORMAL
from .entities import HostileKind
from .utils import aabb_overlap

if TYPE_CHECKING:
    from .simulation import Simulation


class CollisionResolver:
    """
    Runs the collision checks once per tick, in a fixed order:
    bullets vs hostiles, bullets vs boss, player vs powerups,
    player vs hostiles, player vs boss projectiles.

    Matches are collected first and removed with a single filter per pool,
    and a bullet that already hit something is skipped for the rest of the
    tick.
    """

    def __init__(self, sim: "Simulation"):
        self.sim = sim

    def resolve(self):
        self.bullets_vs_hostiles()
        self.bullets_vs_boss()
        self.player_vs_powerups()
        self.player_vs_hostiles()
        self.player_vs_boss_projectiles()

    def bullets_vs_hostiles(self) -> Set[int]:
        sim = self.sim
        store = sim.store
        hit_bullets: Set[int] = set()
        hit_hostiles: Set[int] = set()

        for bullet in store.bullets:
            for hostile in store.hostiles:
                if hostile.id in hit_hostiles:
                    continue
                if not aabb_overlap(*bullet.rect, *hostile.rect):
                    continue

                hit_bullets.add(bullet.id)
                hit_hostiles.add(hostile.id)
                cx, cy = hostile.center
                sim.add_explosion(cx, cy)
                sim.spawner.maybe_drop(cx, cy)
                sim.scoreboard.score += SCORE_FAST if hostile.kind is HostileKind.FAST else SCORE_NORMAL
                break

        store.bullets.remove_ids(hit_bullets)
        store.hostiles.remove_ids(hit_hostiles)
        return hit_bullets

    def bullets_vs_boss(self):
        sim = self.sim
        store = sim.store
        hit_bullets: Set[int] = set()

        for bullet in store.bullets:
            boss = store.boss
            if boss is None:
                break
            if aabb_overlap(*bullet.rect, *boss.rect):
                hit_bullets.add(bullet.id)
                sim.boss_controller.damage(1)

        store.bullets.remove_ids(hit_bullets)

    def player_vs_powerups(self):
        sim = self.sim
        collected = [p for p in sim.store.powerups if aabb_overlap(*sim.player.rect, *p.rect)]
        sim.store.powerups.remove_ids(p.id for p in collected)
        for powerup in collected:
            sim.powerups.collect(powerup.kind)

    def player_vs_hostiles(self):
        sim = self.sim
        rammed = [h for h in sim.store.hostiles if aabb_overlap(*sim.player.rect, *h.rect)]
        if not rammed:
            return

        sim.store.hostiles.remove_ids(h.id for h in rammed)
        for hostile in rammed:
            sim.add_explosion(*hostile.center)

        if not sim.powerups.shielded:
            sim.lose_life()

    def player_vs_boss_projectiles(self):
        sim = self.sim
        hits = [p for p in sim.store.boss_projectiles if aabb_overlap(*sim.player.rect, *p.rect)]
        if not hits:
            return

        sim.store.boss_projectiles.remove_ids(p.id for p in hits)
        if not sim.powerups.shielded:
            sim.lose_life()
