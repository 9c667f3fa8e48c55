"""
ShooterEnv - the arcade shooter as a Gymnasium environment
----------------------------------------------------------
- Same world and step function as the windowed game
- One env step = one display frame of ``frame_ms`` milliseconds
- Discrete MultiDiscrete action space: [move(3), fire(2), rotate(3)]
- Vector observation: ship state + top-K nearest enemies
- Reward is the score change of the step (hits +10, escapes -10 in variant B)
- Episode terminates on game over, truncates at ``max_steps``

Quick test:
    python -m game.shooter2d.shooter_env
"""

from __future__ import annotations

import math
import random
import time
from typing import Any, Dict, FrozenSet, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .entities import World
from .input import Action
from .render import build_frame
from .settings import GameSettings
from .simulation import create_world, step as sim_step
from .utils import clamp


class ShooterEnv(gym.Env):
    """Arcade shooter environment"""

    metadata = {"render_modes": ["human"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        variant: str = "a",
        settings: Optional[GameSettings] = None,
        frame_ms: float = 1000 / 60,
        max_steps: int = 3600,  # 60s at 60 FPS
        k_enemies: int = 5,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unsupported render_mode {render_mode!r}"
        assert frame_ms >= 0, "frame_ms must be non-negative"
        self.render_mode = render_mode

        self.settings = settings if settings is not None else GameSettings.variant(variant)
        self.frame_ms = frame_ms
        self.max_steps = max_steps
        self.k_enemies = k_enemies

        # Action space:
        # move: 0 stay, 1 left, 2 right
        # fire: 0/1
        # rotate: 0 none, 1 left, 2 right (ignored unless the ship rotates)
        self.action_space = spaces.MultiDiscrete([3, 2, 3])

        # Observation space (vector)
        # Ship: x(1) sin/cos angle(2) cooldown(1)
        # Each enemy: rel pos(2)
        obs_dim = 4 + self.k_enemies * 2
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._window = None
        self._rng = random.Random()
        self.world: World = None  # type: ignore

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        self._rng = random.Random(seed)
        self.world = create_world(self.settings)
        return self._get_obs(), self._get_info()

    def step(self, action):
        held = self._held_from_action(action)

        prev_score = self.world.score
        sim_step(self.world, self.frame_ms, held, self._rng)
        reward = float(self.world.score - prev_score)

        terminated = self.world.game_over
        truncated = self.world.step_count >= self.max_steps

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), reward, terminated, truncated, self._get_info()

    def render(self):
        if self.render_mode is None:
            return None

        if self._window is None:
            from .window import ShooterWindow

            self._window = ShooterWindow(self.settings.width, self.settings.height, "ShooterEnv - Arcade")

        self._window.dispatch_events()
        self._window.present(build_frame(self.world))
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None

    # ----------------------------
    # Helpers
    # ----------------------------

    @staticmethod
    def _held_from_action(action) -> FrozenSet[Action]:
        move, fire, rotate = int(action[0]), int(action[1]), int(action[2])
        held = set()
        if move == 1:
            held.add(Action.MOVE_LEFT)
        elif move == 2:
            held.add(Action.MOVE_RIGHT)
        if fire == 1:
            held.add(Action.FIRE)
        if rotate == 1:
            held.add(Action.ROTATE_LEFT)
        elif rotate == 2:
            held.add(Action.ROTATE_RIGHT)
        return frozenset(held)

    def _get_obs(self) -> np.ndarray:
        s = self.settings
        p = self.world.player

        span = max(1e-6, s.width - p.size)
        cooldown = self.world.cooldown_ms / max(1e-6, s.fire_delay_ms)

        obs_parts = [
            clamp(p.x / span * 2 - 1, -1, 1),
            math.sin(p.angle),
            math.cos(p.angle),
            clamp(cooldown * 2 - 1, -1, 1),
        ]

        # Enemies: top-K nearest to the ship center
        cx, cy = p.center_x, p.y + p.size / 2
        enemies_sorted = sorted(
            self.world.enemies,
            key=lambda e: (e.x + e.width / 2 - cx) ** 2 + (e.y + e.height / 2 - cy) ** 2
        )
        for i in range(self.k_enemies):
            if i < len(enemies_sorted):
                e = enemies_sorted[i]
                dx = (e.x + e.width / 2 - cx) / s.width
                dy = (e.y + e.height / 2 - cy) / s.height
                obs_parts += [clamp(dx, -1, 1), clamp(dy, -1, 1)]
            else:
                obs_parts += [0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.world.score,
            "elapsed_ms": self.world.elapsed_ms,
            "num_enemies": len(self.world.enemies),
            "num_bullets": len(self.world.bullets),
            "kills": self.world.events["kills"],
            "escapes": self.world.events["escapes"],
            "shots": self.world.events["shots"],
            "spawned": self.world.events["spawned"],
            "step": self.world.step_count,
        }


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = False, seed: Optional[int] = 42, variant: str = "a") -> Dict[str, Any]:
    """Run one episode with random actions and return the final info"""
    env = ShooterEnv(render_mode="human" if render else None, variant=variant)
    obs, info = env.reset(seed=seed)
    env.action_space.seed(seed)

    terminated = False
    truncated = False
    total = 0.0

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward
        if render:
            time.sleep(env.frame_ms / 1000)

    print(f"Random episode return: {total} (score {info['score']}, {info['step']} steps)")
    env.close()
    return info


if __name__ == "__main__":
    run_random_episode(render=True)
