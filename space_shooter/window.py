"""
Arcade front-end: keyboard -> intents, snapshot -> pixels.

The window doubles as the controller's frame source: every on_update
delivers the pending frame callback, if any.
"""

from __future__ import annotations

from typing import Dict, Hashable, Optional

import arcade

from .config import (
    BOSS_HEIGHT,
    BOSS_PROJECTILE_SIZE,
    BOSS_WIDTH,
    BULLET_HEIGHT,
    BULLET_WIDTH,
    ENEMY_HEIGHT,
    ENEMY_WIDTH,
    FRAME_RATE,
    GAME_HEIGHT,
    GAME_WIDTH,
    POWERUP_HEIGHT,
    POWERUP_WIDTH,
)
from .entities import HostileKind, PowerupKind, ProjectileKind
from .game import FrameCallback, GameController
from .interface import Intents, LifecycleState, Snapshot

HUD_HEIGHT = 40

LEFT_KEYS = (arcade.key.LEFT, arcade.key.A)
RIGHT_KEYS = (arcade.key.RIGHT, arcade.key.D)
FIRE_KEYS = (arcade.key.SPACE, arcade.key.UP)

PHASE_COLORS = {1: (147, 51, 234), 2: (249, 115, 22), 3: (239, 68, 68)}
PROJECTILE_COLORS = {
    ProjectileKind.NORMAL: (168, 85, 247),
    ProjectileKind.SPREAD: (249, 115, 22),
    ProjectileKind.SPIRAL: (239, 68, 68),
}
POWERUP_COLORS = {
    PowerupKind.RAPID_FIRE: (236, 72, 153),
    PowerupKind.SHIELD: (6, 182, 212),
    PowerupKind.SPREAD: (234, 179, 8),
    PowerupKind.EXTRA_LIFE: (34, 197, 94),
}
POWERUP_LABELS = {
    PowerupKind.RAPID_FIRE: "R",
    PowerupKind.SHIELD: "S",
    PowerupKind.SPREAD: "W",
    PowerupKind.EXTRA_LIFE: "+",
}


def flip_y(y: float, height: float = 0.0) -> float:
    """Top-down playfield y to Arcade's bottom-up screen y"""
    return GAME_HEIGHT - y - height


class SpaceShooterWindow(arcade.Window):
    """Arcade window that plays (or just shows) a GameController"""

    def __init__(
        self,
        controller: Optional[GameController] = None,
        interactive: bool = True,
        seed: Optional[int] = None,
        fixed_step_ms: Optional[float] = None,
    ):
        super().__init__(GAME_WIDTH, GAME_HEIGHT + HUD_HEIGHT, "Space Shooter")
        self.background_color = (10, 10, 26)
        self.interactive = interactive

        self._pending: Dict[int, FrameCallback] = {}
        self._next_handle = 0
        self._held = set()
        self._pause_edge = False

        if controller is None:
            controller = GameController(
                frame_source=self,
                intent_source=self.read_intents,
                seed=seed,
                fixed_step_ms=fixed_step_ms,
            )
        self.controller = controller
        self.set_update_rate(1 / FRAME_RATE)

    # ----------------------------
    # Frame source
    # ----------------------------

    def request_frame(self, callback: FrameCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: Hashable) -> None:
        self._pending.pop(handle, None)

    def on_update(self, delta_time: float):
        if not self.interactive:
            return
        batch = list(self._pending.values())
        self._pending = {}
        for callback in batch:
            callback()

    # ----------------------------
    # Input
    # ----------------------------

    def read_intents(self) -> Intents:
        intents = Intents(
            move_left=any(k in self._held for k in LEFT_KEYS),
            move_right=any(k in self._held for k in RIGHT_KEYS),
            fire=any(k in self._held for k in FIRE_KEYS),
            pause=self._pause_edge,
        )
        self._pause_edge = False
        return intents

    def on_key_press(self, key: int, modifiers: int):
        if not self.interactive:
            return
        self._held.add(key)

        state = self.controller.state
        if key == arcade.key.ENTER and state in (LifecycleState.START, LifecycleState.GAME_OVER):
            self.controller.start_game()
        elif key in (arcade.key.P, arcade.key.ESCAPE):
            if state is LifecycleState.PLAYING:
                self._pause_edge = True
            elif state is LifecycleState.PAUSED:
                self.controller.toggle_pause()

    def on_key_release(self, key: int, modifiers: int):
        self._held.discard(key)

    # ----------------------------
    # Drawing
    # ----------------------------

    def on_draw(self):
        self.clear()
        snap = self.controller.snapshot

        for star in snap.stars:
            arcade.draw_circle_filled(
                star.x, flip_y(star.y), star.size / 2, (255, 255, 255, int(star.opacity * 255))
            )

        for p in snap.powerups:
            self._rect(p.x, p.y, POWERUP_WIDTH, POWERUP_HEIGHT, POWERUP_COLORS[p.kind])
            arcade.draw_text(
                POWERUP_LABELS[p.kind], p.x + POWERUP_WIDTH / 2, flip_y(p.y + POWERUP_HEIGHT / 2),
                arcade.color.WHITE, 12, anchor_x="center", anchor_y="center",
            )

        for h in snap.hostiles:
            color = (236, 72, 153) if h.kind is HostileKind.FAST else (139, 92, 246)
            top = flip_y(h.y)
            arcade.draw_triangle_filled(
                h.x, top, h.x + ENEMY_WIDTH, top, h.x + ENEMY_WIDTH / 2, top - ENEMY_HEIGHT, color
            )

        if snap.boss is not None:
            self._draw_boss(snap)

        for p in snap.boss_projectiles:
            half = BOSS_PROJECTILE_SIZE / 2
            arcade.draw_circle_filled(p.x + half, flip_y(p.y + half), half, PROJECTILE_COLORS[p.kind])

        for b in snap.bullets:
            self._rect(b.x, b.y, BULLET_WIDTH, BULLET_HEIGHT, (165, 243, 252))

        if snap.state is not LifecycleState.START:
            self._draw_player(snap)

        for e in snap.explosions:
            radius = 8 + e.age_ms / 15
            arcade.draw_circle_filled(e.x, flip_y(e.y), radius, (251, 146, 60, 200))

        self._draw_hud(snap)
        self._draw_overlay(snap)

    def _rect(self, x, y, w, h, color):
        arcade.draw_lrbt_rectangle_filled(x, x + w, flip_y(y, h), flip_y(y), color)

    def _draw_player(self, snap: Snapshot):
        p = snap.player
        flags = snap.active_powerups
        if flags.spread:
            color = (250, 204, 21)
        elif flags.rapid_fire:
            color = (244, 114, 182)
        else:
            color = (34, 211, 238)

        bottom = flip_y(p.y, p.height)
        if flags.shield:
            arcade.draw_circle_outline(
                p.x + p.width / 2, bottom + p.height / 2, p.width * 0.8, (34, 211, 238), 2
            )
        arcade.draw_triangle_filled(
            p.x, bottom, p.x + p.width, bottom, p.x + p.width / 2, bottom + p.height, color
        )

    def _draw_boss(self, snap: Snapshot):
        boss = snap.boss
        color = PHASE_COLORS[boss.phase]
        self._rect(boss.x, boss.y, BOSS_WIDTH, BOSS_HEIGHT, color)

        bar_top = flip_y(boss.y) + 10
        arcade.draw_lrbt_rectangle_filled(boss.x, boss.x + BOSS_WIDTH, bar_top - 6, bar_top, (31, 41, 55))
        fill = BOSS_WIDTH * boss.health_fraction
        if fill > 0:
            arcade.draw_lrbt_rectangle_filled(boss.x, boss.x + fill, bar_top - 6, bar_top, color)
        arcade.draw_text(
            f"PHASE {boss.phase}", boss.x + BOSS_WIDTH / 2, bar_top + 2,
            arcade.color.WHITE, 9, anchor_x="center",
        )

    def _draw_hud(self, snap: Snapshot):
        sb = snap.scoreboard
        flags = snap.active_powerups
        y0 = GAME_HEIGHT
        arcade.draw_lrbt_rectangle_filled(0, GAME_WIDTH, y0, y0 + HUD_HEIGHT, (15, 15, 42))

        tags = [name for name, on in (("RAPID", flags.rapid_fire), ("SHIELD", flags.shield),
                                      ("SPREAD", flags.spread), ("BOSS", snap.is_boss_fight)) if on]
        arcade.draw_text(f"{sb.score:06d}   LIVES {sb.lives}   LEVEL {sb.level}", 10, y0 + 22,
                         (220, 220, 220), 12)
        arcade.draw_text(f"HI {sb.high_score}  {' '.join(tags)}", 10, y0 + 6, (156, 163, 175), 10)

    def _draw_overlay(self, snap: Snapshot):
        lines = {
            LifecycleState.START: ["SPACE SHOOTER", "Press ENTER to start"],
            LifecycleState.PAUSED: ["PAUSED", "Press P to resume"],
            LifecycleState.GAME_OVER: [
                "GAME OVER",
                f"Final score {snap.scoreboard.score}  level {snap.scoreboard.level}",
                "Press ENTER to play again",
            ],
        }.get(snap.state)
        if not lines:
            return

        arcade.draw_lrbt_rectangle_filled(0, GAME_WIDTH, 0, GAME_HEIGHT, (0, 0, 0, 170))
        y = GAME_HEIGHT / 2 + 30
        for i, line in enumerate(lines):
            arcade.draw_text(line, GAME_WIDTH / 2, y, arcade.color.WHITE, 22 if i == 0 else 12,
                             anchor_x="center")
            y -= 36


def run_window(seed: Optional[int] = None, fixed_step_ms: Optional[float] = None):
    """Open an interactive window and block until it is closed"""
    SpaceShooterWindow(seed=seed, fixed_step_ms=fixed_step_ms)
    arcade.run()
