import random

from space_shooter.entities import Bullet
from space_shooter.interface import Intents
from space_shooter.simulation import Simulation
from space_shooter.timers import GameClock


def test_score_unchanged_without_collisions(sim):
    for _ in range(50):
        sim.step(Intents())
    assert sim.scoreboard.score == 0


def test_score_never_changes_without_firing(sim, manual_time):
    sim.player.x = 0
    for _ in range(1000):
        manual_time.advance_ms(16)
        sim.step(Intents(move_left=True))
        assert sim.scoreboard.score == 0


def test_player_stays_in_bounds(sim):
    for _ in range(100):
        sim.step(Intents(move_left=True))
    assert sim.player.x == 0

    for _ in range(100):
        sim.step(Intents(move_right=True))
    assert sim.player.x == 400 - 40


def test_fire_intent_spawns_moving_bullet(sim):
    sim.step(Intents(fire=True))

    bullets = list(sim.store.bullets)
    assert len(bullets) == 1
    assert bullets[0].y == sim.player.y - 12 - 10


def test_bullets_leave_the_top(sim):
    sim.store.bullets.add(Bullet(100, 5))
    sim.step(Intents())
    assert len(sim.store.bullets) == 1
    sim.step(Intents())
    assert len(sim.store.bullets) == 0


def test_angled_bullets_drift(sim):
    sim.store.bullets.add(Bullet(100, 300, angle=0.2))
    sim.step(Intents())
    bullet = next(iter(sim.store.bullets))
    assert bullet.x == 102


def test_stars_wrap(sim):
    star = sim.store.stars[0]
    star.y = 599
    star.speed = 2
    sim.step(Intents())
    assert star.y == 0
    assert 0 <= star.x < 400


def test_explosions_expire(sim, manual_time):
    sim.add_explosion(50, 50)

    manual_time.advance_ms(299)
    sim.step(Intents())
    assert len(sim.store.explosions) == 1

    manual_time.advance_ms(1)
    sim.step(Intents())
    assert len(sim.store.explosions) == 0


def test_initial_state():
    sim = Simulation(rng=random.Random(0))
    assert sim.player.x == 180
    assert sim.player.y == 520
    assert (sim.scoreboard.score, sim.scoreboard.lives, sim.scoreboard.level) == (0, 3, 1)
    assert len(sim.store.stars) == 50
    assert sim.store.boss is None
    assert not sim.is_boss_fight


def test_score_raises_level_up_to_next_boss(seeded_rng, manual_time):
    clock = GameClock(manual_time)
    clock.resume()
    sim = Simulation(clock=clock, rng=seeded_rng, level_score_step=500)
    sim.player.x = 0

    sim.scoreboard.score = 1200
    sim.step(Intents())
    assert sim.scoreboard.level == 3

    sim.scoreboard.score = 9000
    sim.step(Intents())
    assert sim.scoreboard.level == 5

    sim.step(Intents())
    assert sim.store.boss is not None
    assert sim.scoreboard.level == 5


def test_level_fixed_without_score_step(sim):
    sim.scoreboard.score = 100_000
    sim.step(Intents())
    assert sim.scoreboard.level == 1


def test_lives_stay_in_range_under_random_play(manual_time):
    clock = GameClock(manual_time)
    clock.resume()
    rng = random.Random(3)
    sim = Simulation(clock=clock, rng=random.Random(11))

    for _ in range(5000):
        manual_time.advance_ms(16)
        sim.step(Intents(
            move_left=rng.random() < 0.3,
            move_right=rng.random() < 0.3,
            fire=rng.random() < 0.5,
        ))
        assert 0 <= sim.scoreboard.lives <= 5
        assert (sim.scoreboard.lives == 0) == sim.game_over
        if sim.game_over:
            break
