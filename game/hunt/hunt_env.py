"""
HuntEnv - the duck hunt round as a Gymnasium environment
---------------------------------------------------------
- One episode = one round of a HuntSession (level/round chosen at reset)
- Gymnasium API
- MultiDiscrete action space: [move(9), fire(2)]
- Vector observation: reticle + ammo/quota + top-K nearest live birds
- Arcade window for human rendering, numpy raster for rgb_array

Quick test:
    python -m game.hunt.hunt_env
"""

from __future__ import annotations

import time
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .constants import HORIZON_Y, MAX_LEVELS, ROUNDS_PER_LEVEL, SPAWN_SPEED_RANGE
from .entities import FrameInput, GameState
from .session import HuntSession
from .utils import clamp

# move: 0 stay, 1 up, 2 down, 3 left, 4 right,
#       5 up-left, 6 up-right, 7 down-left, 8 down-right
MOVE_KEYS = [
    FrameInput(),
    FrameInput(up=True),
    FrameInput(down=True),
    FrameInput(left=True),
    FrameInput(right=True),
    FrameInput(up=True, left=True),
    FrameInput(up=True, right=True),
    FrameInput(down=True, left=True),
    FrameInput(down=True, right=True),
]

DEFAULT_REWARD_CONFIG = {
    "R_KILL": 1.0,
    "R_CLEAR": 2.0,
    "R_SHOT": 0.05,
    "R_ESCAPE": 2.0,
    "R_OUT_OF_AMMO": 1.0,
    "R_TIME": 0.001,
}

# Fastest possible bird at the top level, for velocity normalization
_MAX_BIRD_SPEED = SPAWN_SPEED_RANGE[1] * (0.8 + MAX_LEVELS * 0.12)


class HuntEnv(gym.Env):
    """Single-round duck hunt environment"""

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        obs_mode: str = "vector",
        level: int = 1,
        round: int = 1,
        random_level: bool = False,
        dt: float = 1 / 60,
        max_steps: int = 3000,
        k_birds: int = 3,
        reward_config: Optional[Dict[str, float]] = None,
        width: int = 420,
        height: int = 180,
        verbose: int = 0,
    ):
        super().__init__()

        assert obs_mode in ("vector",), "Only the 'vector' observation is supported"
        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.obs_mode = obs_mode

        self.level = level
        self.round = round
        self.random_level = random_level
        self.dt = dt
        self.max_steps = max_steps
        self.k_birds = k_birds
        self.reward_config = dict(DEFAULT_REWARD_CONFIG)
        if reward_config:
            self.reward_config.update(reward_config)
        self.width = width
        self.height = height
        self.verbose = verbose

        self.action_space = spaces.MultiDiscrete([len(MOVE_KEYS), 2])

        # Reticle pos(2), ammo left(1), kills/quota(1), hit marker(1)
        # Each bird: rel pos(2) vel(2) present(1)
        obs_dim = 2 + 1 + 1 + 1 + self.k_birds * 5
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self.session: HuntSession = None  # type: ignore
        self._window = None
        self._step_count = 0
        self._events: Dict[str, float] = {}

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        options = options or {}

        level = options.get("level", self.level)
        rnd = options.get("round", self.round)
        if self.random_level and "level" not in options:
            level = int(self.np_random.integers(1, MAX_LEVELS + 1))
            rnd = int(self.np_random.integers(1, ROUNDS_PER_LEVEL + 1))

        session_seed = int(self.np_random.integers(0, 2**31 - 1))
        self.session = HuntSession(seed=session_seed, verbose=self.verbose, skip_splash=True)
        self.session.start_round(level, rnd)
        if self._window is not None:
            self._window.attach(self.session)

        self._step_count = 0
        self._events = {}

        return self._get_obs(), self._get_info()

    def step(self, action):
        self._events = {"kill": 0.0, "shot": 0.0, "escape": 0.0}
        move, shoot = int(action[0]), int(action[1])

        before = self.session.state.counters

        # Fire lands immediately, before the frame is simulated
        if shoot:
            self.session.fire()
        self.session.tick(MOVE_KEYS[move % len(MOVE_KEYS)], self.dt)

        after = self.session.state.counters
        self._events["kill"] = float(after.birds_killed - before.birds_killed)
        self._events["shot"] = float(after.shots_fired - before.shots_fired)
        self._events["escape"] = float(after.birds_escaped - before.birds_escaped)

        reward = self._compute_reward()

        terminated = self.session.game_state != GameState.PLAYING
        self._step_count += 1
        truncated = (not terminated) and self._step_count >= self.max_steps

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        s = self.session.state
        rx, ry = s.reticle
        cfg = s.config

        obs_parts = [
            rx / 50.0 - 1.0, ry / 50.0 - 1.0,  # map to [-1,1]
            s.ammo_left / max(1, cfg.total_ammo) * 2 - 1,
            s.counters.birds_killed / max(1, cfg.total_birds) * 2 - 1,
            1.0 if s.show_hit_marker else -1.0,
        ]

        birds_sorted = sorted(
            s.live_birds,
            key=lambda b: (b.x - rx) ** 2 + (b.y - ry) ** 2
        )
        for i in range(self.k_birds):
            if i < len(birds_sorted):
                b = birds_sorted[i]
                obs_parts += [
                    clamp((b.x - rx) / 100.0, -1, 1),
                    clamp((b.y - ry) / 100.0, -1, 1),
                    clamp(b.vx / _MAX_BIRD_SPEED, -1, 1),
                    clamp(b.vy / _MAX_BIRD_SPEED, -1, 1),
                    1.0,
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0, 0.0, -1.0]

        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self) -> float:
        rc = self.reward_config
        s = self.session.state

        reward = 0.0
        reward += rc["R_KILL"] * self._events.get("kill", 0.0)
        reward -= rc["R_SHOT"] * self._events.get("shot", 0.0)
        reward -= rc["R_ESCAPE"] * self._events.get("escape", 0.0)
        reward -= rc["R_TIME"]

        if s.state in (GameState.ROUND_WIN, GameState.LEVEL_WIN):
            reward += rc["R_CLEAR"]
        elif s.state == GameState.ROUND_LOSE and self._events.get("escape", 0.0) == 0.0:
            reward -= rc["R_OUT_OF_AMMO"]

        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        s = self.session.state
        c = s.counters
        return {
            "state": s.state.value,
            "level": s.level,
            "round": s.round,
            "birds_killed": c.birds_killed,
            "birds_escaped": c.birds_escaped,
            "birds_spawned": c.birds_spawned,
            "shots_fired": c.shots_fired,
            "total_birds": s.config.total_birds,
            "total_ammo": s.config.total_ammo,
            "num_birds": len(s.live_birds),
            "round_cleared": s.state in (GameState.ROUND_WIN, GameState.LEVEL_WIN),
            "lose_reason": s.lose_reason.value if s.lose_reason is not None else None,
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self.render_mode == "human":
            if self._window is None:
                # Arcade is only needed once a window is requested
                from .window import HuntWindow
                self._window = HuntWindow(self.session, interactive=False)
            self._window.attach(self.session)
            self._window.on_draw()
            return None

        return self._render_rgb_array()

    def _render_rgb_array(self) -> np.ndarray:
        """Rasterize the snapshot: sky, ground, birds and reticle"""
        s = self.session.state
        h, w = self.height, self.width
        frame = np.zeros((h, w, 3), dtype=np.uint8)

        horizon_px = int(round(HORIZON_Y / 100.0 * h))
        frame[:horizon_px] = (120, 180, 235)
        frame[horizon_px:] = (150, 110, 60)

        ys, xs = np.ogrid[:h, :w]

        def disc(cx: float, cy: float, r: float, color: Tuple[int, int, int]):
            px, py = cx / 100.0 * w, cy / 100.0 * h
            mask = (xs - px) ** 2 + (ys - py) ** 2 <= r * r
            frame[mask] = color

        for b in s.birds:
            color = (90, 90, 90) if b.is_dead else ((200, 60, 40) if b.kind.value == "fast" else (60, 40, 20))
            disc(b.x, b.y, max(2.0, 0.02 * w), color)

        rx, ry = s.reticle
        cx, cy = int(rx / 100.0 * (w - 1)), int(ry / 100.0 * (h - 1))
        marker = (255, 255, 255) if s.show_hit_marker else (230, 30, 30)
        frame[cy, max(0, cx - 4): cx + 5] = marker
        frame[max(0, cy - 4): cy + 5, cx] = marker

        return frame

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True, seed: int = 42) -> List[Dict[str, Any]]:
    """Run random rounds until one ends; returns the per-step infos"""
    env = HuntEnv(render_mode="human" if render else None, verbose=1)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0
    infos = [info]

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward
        infos.append(info)

        if render and env._window:
            env._window.dispatch_events()
            env._window.on_draw()
            env._window.flip()
            time.sleep(env.dt)

    print(f"Random episode return: {total:.3f} ({info['state']}, "
          f"{info['birds_killed']}/{info['total_birds']} birds, "
          f"{info['shots_fired']}/{info['total_ammo']} shots)")

    env.close()
    return infos


if __name__ == "__main__":
    run_random_episode(render=True)
