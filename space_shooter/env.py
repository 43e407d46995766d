"""
SpaceShooterEnv - Gymnasium wrapper around the space shooter simulation
-----------------------------------------------------------------------
- Drives a GameController headlessly with a manual frame source and clock
- Discrete MultiDiscrete action space: [move(3), fire(2)]
- Vector observation: player/scoreboard/boss state + nearest hostiles,
  boss projectiles and powerups relative to the player
- Reward: scaled score gain minus a penalty per life lost

Quick test:
    python -m space_shooter --episode
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .config import BOSS_LEVELS, ENV_CONFIG, GAME_HEIGHT, GAME_WIDTH, MAX_LIVES
from .game import GameController, ManualFrameSource
from .interface import Intents, LifecycleState, Snapshot
from .timers import ManualTime
from .utils import clamp

# move: 0 stay, 1 left, 2 right
MOVE_STAY, MOVE_LEFT, MOVE_RIGHT = 0, 1, 2


class SpaceShooterEnv(gym.Env):
    """Headless space shooter environment"""

    metadata = {"render_modes": ["human"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        max_steps: int = ENV_CONFIG["max_steps"],
        dt_ms: float = ENV_CONFIG["dt_ms"],
        k_hostiles: int = ENV_CONFIG["k_hostiles"],
        m_projectiles: int = ENV_CONFIG["m_projectiles"],
        m_powerups: int = ENV_CONFIG["m_powerups"],
        life_penalty: float = ENV_CONFIG["life_penalty"],
        score_scale: float = ENV_CONFIG["score_scale"],
    ):
        super().__init__()

        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unsupported render_mode: {render_mode!r}")
        self.render_mode = render_mode

        self.max_steps = max_steps
        self.dt_ms = dt_ms
        self.k_hostiles = k_hostiles
        self.m_projectiles = m_projectiles
        self.m_powerups = m_powerups
        self.life_penalty = life_penalty
        self.score_scale = score_scale

        self.action_space = spaces.MultiDiscrete([3, 2])

        # Player x(1) lives(1) level(1) flags(3) boss present/health/x(3)
        # Each hostile / projectile / powerup: rel pos(2)
        obs_dim = 9 + 2 * (self.k_hostiles + self.m_projectiles + self.m_powerups)
        self.observation_space = spaces.Box(low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32)

        self._time = ManualTime()
        self._frames = ManualFrameSource()
        self._intents = Intents()
        self.controller: Optional[GameController] = None
        self._window = None
        self._step_count = 0

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)

        self._time = ManualTime()
        self._frames = ManualFrameSource()
        self._intents = Intents()
        self._step_count = 0
        self.controller = GameController(
            frame_source=self._frames,
            intent_source=lambda: self._intents,
            time_fn=self._time,
            seed=seed,
        )
        self.controller.start_game()

        snapshot = self.controller.snapshot
        return self._get_obs(snapshot), self._get_info(snapshot)

    def step(self, action):
        assert self.controller is not None, "call reset() before step()"
        move, fire = int(action[0]), int(action[1])
        self._intents = Intents(
            move_left=move == MOVE_LEFT,
            move_right=move == MOVE_RIGHT,
            fire=bool(fire),
        )

        sb = self.controller.simulation.scoreboard
        score_before, lives_before = sb.score, sb.lives
        self._time.advance_ms(self.dt_ms)
        self._frames.fire()
        snapshot = self.controller.snapshot
        after = snapshot.scoreboard

        reward = (after.score - score_before) * self.score_scale
        lives_lost = max(lives_before - after.lives, 0)
        reward -= lives_lost * self.life_penalty

        terminated = snapshot.state is LifecycleState.GAME_OVER
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        if self.render_mode == "human":
            self.render()

        return self._get_obs(snapshot), float(reward), terminated, truncated, self._get_info(snapshot)

    # ----------------------------
    # Observation / info
    # ----------------------------

    def _nearest(self, snapshot: Snapshot, items: Sequence, k: int) -> List[float]:
        px = snapshot.player.x + snapshot.player.width / 2
        py = snapshot.player.y + snapshot.player.height / 2
        ranked = sorted(items, key=lambda e: (e.x - px) ** 2 + (e.y - py) ** 2)

        parts: List[float] = []
        for i in range(k):
            if i < len(ranked):
                e = ranked[i]
                parts += [clamp((e.x - px) / GAME_WIDTH, -1, 1), clamp((e.y - py) / GAME_HEIGHT, -1, 1)]
            else:
                parts += [0.0, 0.0]
        return parts

    def _get_obs(self, snapshot: Snapshot) -> np.ndarray:
        sb = snapshot.scoreboard
        flags = snapshot.active_powerups
        boss = snapshot.boss

        obs_parts = [
            snapshot.player.x / GAME_WIDTH * 2 - 1,
            sb.lives / MAX_LIVES * 2 - 1,
            clamp(sb.level / BOSS_LEVELS[-1], 0, 1) * 2 - 1,
            1.0 if flags.rapid_fire else -1.0,
            1.0 if flags.shield else -1.0,
            1.0 if flags.spread else -1.0,
            1.0 if boss is not None else -1.0,
            boss.health_fraction * 2 - 1 if boss is not None else -1.0,
            clamp((boss.x - snapshot.player.x) / GAME_WIDTH, -1, 1) if boss is not None else 0.0,
        ]
        obs_parts += self._nearest(snapshot, snapshot.hostiles, self.k_hostiles)
        obs_parts += self._nearest(snapshot, snapshot.boss_projectiles, self.m_projectiles)
        obs_parts += self._nearest(snapshot, snapshot.powerups, self.m_powerups)

        return np.clip(np.array(obs_parts, dtype=np.float32), -1.0, 1.0)

    def _get_info(self, snapshot: Snapshot) -> Dict[str, Any]:
        sb = snapshot.scoreboard
        return {
            "score": sb.score,
            "lives": sb.lives,
            "level": sb.level,
            "num_hostiles": len(snapshot.hostiles),
            "num_bullets": len(snapshot.bullets),
            "boss_fight": snapshot.is_boss_fight,
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def render(self):
        if self.render_mode is None or self.controller is None:
            return None

        if self._window is None:
            from .window import SpaceShooterWindow
            self._window = SpaceShooterWindow(self.controller, interactive=False)

        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = False, seed: Optional[int] = 42) -> Tuple[float, Dict[str, Any]]:
    """Run a random-policy episode and return (total reward, final info)"""
    env = SpaceShooterEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    print("Running episode...")
    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

    print(f"Random episode return: {total:.2f}  score={info['score']} level={info['level']}")
    env.close()
    return total, info
