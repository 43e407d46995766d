"""
Game entity dataclasses
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from .config import (
    BOSS_HEIGHT,
    BOSS_PROJECTILE_SIZE,
    BOSS_WIDTH,
    BULLET_HEIGHT,
    BULLET_WIDTH,
    ENEMY_HEIGHT,
    ENEMY_WIDTH,
    MAX_LIVES,
    POWERUP_HEIGHT,
    POWERUP_WIDTH,
    PLAYER_HEIGHT,
    PLAYER_WIDTH,
)

Rect = Tuple[float, float, float, float]


class HostileKind(str, Enum):
    NORMAL = "normal"
    FAST = "fast"


class PowerupKind(str, Enum):
    RAPID_FIRE = "rapidFire"
    SHIELD = "shield"
    SPREAD = "spread"
    EXTRA_LIFE = "extraLife"


class ProjectileKind(str, Enum):
    NORMAL = "normal"
    SPREAD = "spread"
    SPIRAL = "spiral"


# Kinds that set a timed flag when collected
TIMED_POWERUPS = (PowerupKind.RAPID_FIRE, PowerupKind.SHIELD, PowerupKind.SPREAD)


@dataclass
class Player:
    """Player craft, moves only horizontally"""
    x: float
    y: float
    width: float = PLAYER_WIDTH
    height: float = PLAYER_HEIGHT

    @property
    def rect(self) -> Rect:
        return (self.x, self.y, self.width, self.height)


@dataclass
class Bullet:
    """Player-fired projectile travelling upwards"""
    x: float
    y: float
    angle: float = 0.0  # horizontal drift, radians
    id: int = -1

    @property
    def rect(self) -> Rect:
        return (self.x, self.y, BULLET_WIDTH, BULLET_HEIGHT)


@dataclass
class Hostile:
    """Falling enemy ship"""
    x: float
    y: float
    speed: float
    kind: HostileKind = HostileKind.NORMAL
    id: int = -1

    @property
    def rect(self) -> Rect:
        return (self.x, self.y, ENEMY_WIDTH, ENEMY_HEIGHT)

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + ENEMY_WIDTH / 2, self.y + ENEMY_HEIGHT / 2)


@dataclass
class Boss:
    """Multi-phase boss entity"""
    x: float
    y: float
    target_y: float
    health: int
    max_health: int
    speed: float
    phase: int = 1
    direction: int = 1
    attack_pattern: int = 0  # number of attacks fired so far
    id: int = -1

    @property
    def rect(self) -> Rect:
        return (self.x, self.y, BOSS_WIDTH, BOSS_HEIGHT)

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + BOSS_WIDTH / 2, self.y + BOSS_HEIGHT / 2)

    @property
    def health_fraction(self) -> float:
        return self.health / self.max_health


@dataclass
class BossProjectile:
    """Projectile fired by the boss"""
    x: float
    y: float
    vx: float
    vy: float
    kind: ProjectileKind = ProjectileKind.NORMAL
    id: int = -1

    @property
    def rect(self) -> Rect:
        return (self.x, self.y, BOSS_PROJECTILE_SIZE, BOSS_PROJECTILE_SIZE)


@dataclass
class Powerup:
    """Collectible powerup drifting downwards"""
    x: float
    y: float
    kind: PowerupKind
    speed: float = 2.0
    id: int = -1

    @property
    def rect(self) -> Rect:
        return (self.x, self.y, POWERUP_WIDTH, POWERUP_HEIGHT)


@dataclass
class Explosion:
    """Cosmetic explosion centred on (x, y)"""
    x: float
    y: float
    born_at: float  # game clock ms
    id: int = -1


@dataclass
class Star:
    """Decorative background particle"""
    x: float
    y: float
    size: float
    speed: float
    opacity: float


@dataclass
class ActivePowerups:
    """Timed powerup flags; extraLife is applied immediately and never stored"""
    rapid_fire: bool = False
    shield: bool = False
    spread: bool = False

    _FIELDS = {
        PowerupKind.RAPID_FIRE: "rapid_fire",
        PowerupKind.SHIELD: "shield",
        PowerupKind.SPREAD: "spread",
    }

    def is_active(self, kind: PowerupKind) -> bool:
        return getattr(self, self._FIELDS[kind])

    def set(self, kind: PowerupKind, value: bool):
        setattr(self, self._FIELDS[kind], value)


@dataclass
class Scoreboard:
    score: int = 0
    high_score: int = 0
    lives: int = 3
    level: int = 1

    def check(self):
        assert self.score >= 0 and self.high_score >= 0, "negative score"
        assert 0 <= self.lives <= MAX_LIVES, f"lives out of range: {self.lives}"
        assert self.level >= 1, f"level out of range: {self.level}"
