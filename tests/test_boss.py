import math
import random

import pytest

from space_shooter.boss import phase_for
from space_shooter.config import BOSS_WIDTH, GAME_WIDTH
from space_shooter.entities import Bullet, Hostile, ProjectileKind
from space_shooter.interface import Intents
from space_shooter.simulation import Simulation
from space_shooter.timers import GameClock


def _boss_at_target(sim, level=5):
    boss = sim.boss_controller.spawn(level)
    boss.y = boss.target_y
    return boss


def test_boss_spawns_on_boss_level(seeded_rng, manual_time):
    clock = GameClock(manual_time)
    clock.resume()
    sim = Simulation(clock=clock, rng=seeded_rng, level=5, level_score_step=None)
    sim.store.hostiles.add(Hostile(x=10, y=0, speed=1))
    sim.player.x = 0

    sim.step(Intents())

    boss = sim.store.boss
    assert boss is not None
    assert boss.max_health == 150
    assert boss.health == 150
    assert boss.phase == 1
    assert sim.is_boss_fight
    assert len(sim.store.hostiles) == 0

    countdown = sim.spawner.hostile_countdown
    for _ in range(120):
        sim.step(Intents())
    assert len(sim.store.hostiles) == 0
    assert sim.spawner.hostile_countdown == countdown


def test_no_boss_off_boss_levels(sim):
    for _ in range(10):
        sim.step(Intents())
    assert sim.store.boss is None
    assert not sim.is_boss_fight


def test_spawn_geometry(sim):
    boss = sim.boss_controller.spawn(10)
    assert boss.x == GAME_WIDTH / 2 - BOSS_WIDTH / 2
    assert boss.y == -60
    assert boss.target_y == 60
    assert boss.direction == 1
    assert boss.speed == pytest.approx(3.5)
    assert boss.max_health == 250


@pytest.mark.parametrize("health,current,expected", [
    (100, 1, 1),
    (67, 1, 1),
    (66, 1, 2),
    (34, 2, 2),
    (33, 1, 3),
    (33, 2, 3),
    (90, 3, 3),
])
def test_phase_for(health, current, expected):
    assert phase_for(health, 100, current) == expected


def test_phase_is_monotonic_under_damage(sim):
    rng = random.Random(7)
    boss = _boss_at_target(sim)
    phases = [boss.phase]

    while sim.store.boss is not None:
        sim.boss_controller.damage(rng.randint(1, 4))
        if sim.store.boss is not None:
            phases.append(boss.phase)

    assert phases == sorted(phases)
    assert phases[-1] == 3


def test_boss_defeat(sim, manual_time):
    sim.scoreboard.level = 5
    boss = _boss_at_target(sim)
    boss.health = 1
    boss.max_health = 100
    sim.boss_controller.attack()
    cx, cy = boss.center
    sim.store.bullets.add(Bullet(cx, cy))

    sim.collisions.resolve()

    assert sim.store.boss is None
    assert sim.scoreboard.score == 1000
    assert not sim.is_boss_fight
    assert sim.scoreboard.level == 6
    assert len(sim.store.boss_projectiles) == 0
    assert [(e.x, e.y) for e in sim.store.explosions] == [(cx, cy)]

    sim.timers.poll(sim.clock.now_ms())
    assert len(sim.store.powerups) == 1
    manual_time.advance_ms(100)
    sim.timers.poll(sim.clock.now_ms())
    assert len(sim.store.powerups) == 2
    manual_time.advance_ms(100)
    sim.timers.poll(sim.clock.now_ms())
    assert len(sim.store.powerups) == 3

    xs = sorted(p.x + 14 for p in sim.store.powerups)
    assert xs == [pytest.approx(cx - 30), pytest.approx(cx), pytest.approx(cx + 30)]


def test_boss_descends_then_sweeps(sim):
    boss = sim.boss_controller.spawn(5)
    sim.boss_controller.update()
    assert boss.y == -58
    assert boss.x == 160

    for _ in range(59):
        sim.boss_controller.update()
    assert boss.y == 60

    sim.boss_controller.update()
    assert boss.y == 60
    assert boss.x == pytest.approx(162.5)


def test_boss_reverses_at_edges(sim):
    boss = _boss_at_target(sim)
    boss.x = GAME_WIDTH - BOSS_WIDTH - 1
    sim.boss_controller.update()
    assert boss.x == GAME_WIDTH - BOSS_WIDTH
    assert boss.direction == -1

    boss.x = 1
    sim.boss_controller.update()
    assert boss.x == 0
    assert boss.direction == 1


@pytest.mark.parametrize("phase,cadence", [(1, 40), (2, 20), (3, 8)])
def test_attack_cadence(sim, phase, cadence):
    boss = _boss_at_target(sim)
    boss.phase = phase
    for _ in range(cadence - 1):
        sim.boss_controller.update()
    assert len(sim.store.boss_projectiles) == 0

    sim.boss_controller.update()
    assert len(sim.store.boss_projectiles) > 0
    assert sim.boss_controller.attack_timer == 0


def test_phase_one_pattern(sim):
    boss = _boss_at_target(sim)
    cx = boss.x + BOSS_WIDTH / 2

    shots = sim.boss_controller.attack()

    assert len(shots) == 1
    assert shots[0].kind is ProjectileKind.NORMAL
    assert (shots[0].x, shots[0].vx, shots[0].vy) == (cx - 4, 0, 4)


def test_phase_two_spread(sim):
    boss = _boss_at_target(sim)
    boss.phase = 2

    shots = sim.boss_controller.attack()

    assert [s.vx for s in shots] == [-3.0, -1.5, 0.0, 1.5, 3.0]
    assert all(s.vy == 4 for s in shots)
    assert all(s.kind is ProjectileKind.SPREAD for s in shots)


def test_phase_three_spiral_rotates(sim):
    boss = _boss_at_target(sim)
    boss.phase = 3
    cx = boss.x + BOSS_WIDTH / 2
    bottom = boss.y + 60

    first = sim.boss_controller.attack()[0]
    second = sim.boss_controller.attack()[0]

    assert first.kind is ProjectileKind.SPIRAL
    assert first.x == pytest.approx(cx - 4 + 30)
    assert first.y == pytest.approx(bottom)
    assert first.vx == pytest.approx(0.0, abs=1e-9)
    assert first.vy == 5

    angle = math.radians(30)
    assert second.x == pytest.approx(cx - 4 + math.cos(angle) * 30)
    assert second.y == pytest.approx(bottom + math.sin(angle) * 10)
    assert second.vx == pytest.approx(-1.0)
    assert boss.attack_pattern == 2


def test_no_attacks_outside_boss_fight(sim):
    _boss_at_target(sim)
    sim.is_boss_fight = False
    for _ in range(100):
        sim.boss_controller.update()
    assert len(sim.store.boss_projectiles) == 0


def test_operations_without_boss_are_noops(sim):
    assert sim.boss_controller.damage(5) is False
    assert sim.boss_controller.attack() == []
    sim.boss_controller.update()
    assert sim.scoreboard.score == 0
