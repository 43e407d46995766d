import numpy as np
import pytest

from space_shooter.entities import Hostile
from space_shooter.env import MOVE_RIGHT, SpaceShooterEnv


def test_reset_returns_valid_observation():
    env = SpaceShooterEnv()
    obs, info = env.reset(seed=0)

    assert obs.shape == env.observation_space.shape
    assert obs.dtype == np.float32
    assert env.observation_space.contains(obs)
    assert info["lives"] == 3
    assert info["score"] == 0


def test_step_moves_player():
    env = SpaceShooterEnv()
    env.reset(seed=0)
    x0 = env.controller.snapshot.player.x

    obs, reward, terminated, truncated, info = env.step(np.array([MOVE_RIGHT, 0]))

    assert env.controller.snapshot.player.x == x0 + 6
    assert isinstance(reward, float)
    assert not terminated and not truncated
    assert env.observation_space.contains(obs)


def test_truncates_at_max_steps():
    env = SpaceShooterEnv(max_steps=5)
    env.reset(seed=1)
    truncated = False
    for _ in range(5):
        _, _, terminated, truncated, _ = env.step(np.array([0, 0]))
    assert truncated


def test_terminates_on_game_over():
    env = SpaceShooterEnv()
    env.reset(seed=2)
    sim = env.controller.simulation
    sim.scoreboard.lives = 1
    sim.store.hostiles.add(Hostile(x=sim.player.x, y=sim.player.y, speed=0))

    _, reward, terminated, _, info = env.step(np.array([0, 0]))

    assert terminated
    assert info["lives"] == 0
    assert reward == pytest.approx(-5.0)


def test_random_rollout_stays_in_bounds():
    env = SpaceShooterEnv(max_steps=300)
    obs, _ = env.reset(seed=3)
    env.action_space.seed(3)
    done = False
    while not done:
        obs, _, terminated, truncated, _ = env.step(env.action_space.sample())
        assert env.observation_space.contains(obs)
        done = terminated or truncated


def test_rejects_unknown_render_mode():
    with pytest.raises(ValueError):
        SpaceShooterEnv(render_mode="rgb_array")


def test_reward_uses_live_simulation_state():
    env = SpaceShooterEnv()
    env.reset(seed=4)
    env.controller.simulation.scoreboard.score = 300

    _, reward, _, _, info = env.step(np.array([0, 0]))

    assert info["score"] == 300
    assert reward == pytest.approx(0.0)
