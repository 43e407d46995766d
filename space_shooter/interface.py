"""
Boundary contract with the input and rendering collaborators.

Input side: an ``Intents`` value per tick. Output side: an immutable
``Snapshot`` taken after each completed step.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple

from .entities import HostileKind, PowerupKind, ProjectileKind

if TYPE_CHECKING:
    from .simulation import Simulation


class LifecycleState(str, Enum):
    START = "start"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "gameOver"


@dataclass(frozen=True)
class Intents:
    """Abstract per-tick input; pause is edge-triggered"""
    move_left: bool = False
    move_right: bool = False
    fire: bool = False
    pause: bool = False


NO_INTENTS = Intents()


@dataclass(frozen=True)
class PlayerView:
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class BulletView:
    id: int
    x: float
    y: float
    angle: float


@dataclass(frozen=True)
class HostileView:
    id: int
    x: float
    y: float
    speed: float
    kind: HostileKind


@dataclass(frozen=True)
class BossView:
    id: int
    x: float
    y: float
    phase: int
    health: int
    max_health: int
    health_fraction: float
    direction: int


@dataclass(frozen=True)
class ProjectileView:
    id: int
    x: float
    y: float
    vx: float
    vy: float
    kind: ProjectileKind


@dataclass(frozen=True)
class PowerupView:
    id: int
    x: float
    y: float
    kind: PowerupKind


@dataclass(frozen=True)
class ExplosionView:
    id: int
    x: float
    y: float
    age_ms: float


@dataclass(frozen=True)
class StarView:
    x: float
    y: float
    size: float
    opacity: float


@dataclass(frozen=True)
class ScoreboardView:
    score: int
    high_score: int
    lives: int
    level: int


@dataclass(frozen=True)
class PowerupFlags:
    rapid_fire: bool
    shield: bool
    spread: bool


@dataclass(frozen=True)
class Snapshot:
    state: LifecycleState
    tick: int
    player: PlayerView
    bullets: Tuple[BulletView, ...]
    hostiles: Tuple[HostileView, ...]
    boss: Optional[BossView]
    boss_projectiles: Tuple[ProjectileView, ...]
    powerups: Tuple[PowerupView, ...]
    explosions: Tuple[ExplosionView, ...]
    stars: Tuple[StarView, ...]
    scoreboard: ScoreboardView
    active_powerups: PowerupFlags
    is_boss_fight: bool

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def take_snapshot(sim: "Simulation", state: LifecycleState) -> Snapshot:
    """Copy the render-relevant parts of a simulation into a Snapshot"""
    store = sim.store
    now = sim.clock.now_ms()
    boss = store.boss
    sb = sim.scoreboard
    flags = sim.powerups.active

    return Snapshot(
        state=state,
        tick=sim.tick,
        player=PlayerView(sim.player.x, sim.player.y, sim.player.width, sim.player.height),
        bullets=tuple(BulletView(b.id, b.x, b.y, b.angle) for b in store.bullets),
        hostiles=tuple(HostileView(h.id, h.x, h.y, h.speed, h.kind) for h in store.hostiles),
        boss=None if boss is None else BossView(
            boss.id, boss.x, boss.y, boss.phase, boss.health, boss.max_health,
            boss.health_fraction, boss.direction,
        ),
        boss_projectiles=tuple(
            ProjectileView(p.id, p.x, p.y, p.vx, p.vy, p.kind) for p in store.boss_projectiles
        ),
        powerups=tuple(PowerupView(p.id, p.x, p.y, p.kind) for p in store.powerups),
        explosions=tuple(
            ExplosionView(e.id, e.x, e.y, now - e.born_at) for e in store.explosions
        ),
        stars=tuple(StarView(s.x, s.y, s.size, s.opacity) for s in store.stars),
        scoreboard=ScoreboardView(sb.score, sb.high_score, sb.lives, sb.level),
        active_powerups=PowerupFlags(flags.rapid_fire, flags.shield, flags.spread),
        is_boss_fight=sim.is_boss_fight,
    )
