"""Gymnasium environment wrapper for Mini Racer.

Exposes the simulation as a standard Gymnasium environment so agents can
be trained or evaluated headlessly (no arcade window).

Observation space: Box(0, 1, (3 + lane_count,), float32), see
``racer_env.observations``.

Action space: Box(low=[-1, -1], high=[1, 1], shape=(2,), float32)
  - [0] Steering:  -1 (full left)  to  +1 (full right)
  - [1] Throttle:  -1 (full brake) to  +1 (full throttle)
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import gymnasium as gym
import numpy as np

from racer.config import load_config
from racer.intents import Intents
from racer.simulation import Command, Simulation
from racer_env.observations import build_observation, make_observation_space
from racer_env.rewards import StepInfo, compute_reward


class LaneRacerEnv(gym.Env):
    """Gymnasium environment over the Mini Racer simulation.

    Each ``step()`` advances the game by one fixed timestep (``ai.step_ms``).
    The continuous action is quantized to the four boolean driver intents,
    so the simulation is driven exactly as it is from the keyboard.
    """

    metadata = {"render_modes": []}

    def __init__(
        self,
        config: dict | None = None,
        config_path: str | Path | None = None,
        render_mode: str | None = None,
    ) -> None:
        """Initialize the environment.

        Args:
            config: Already-loaded config dict. Takes precedence over config_path.
            config_path: Path to a YAML config (default config if both are None).
            render_mode: Only None is supported.
        """
        super().__init__()
        self.render_mode = render_mode

        self._config: dict = config if config is not None else load_config(config_path)
        ai_cfg: dict = self._config.get("ai", {})

        self._dt: float = float(ai_cfg.get("step_ms", 16))
        self._max_steps: int = int(ai_cfg.get("max_episode_steps", 3000))
        self._steer_threshold: float = float(ai_cfg.get("steer_threshold", 0.1))
        self._throttle_threshold: float = float(ai_cfg.get("throttle_threshold", 0.1))

        self._sim: Simulation | None = Simulation(self._config)

        self.observation_space: gym.spaces.Box = make_observation_space(self._sim.track.lane_count)
        self.action_space: gym.spaces.Box = gym.spaces.Box(
            low=np.array([-1.0, -1.0], dtype=np.float32),
            high=np.array([1.0, 1.0], dtype=np.float32),
            dtype=np.float32,
        )

        self._step_count: int = 0

    # ------------------------------------------------------------------
    # Gymnasium API
    # ------------------------------------------------------------------

    def reset(
        self,
        *,
        seed: int | None = None,
        options: dict[str, Any] | None = None,
    ) -> tuple[np.ndarray, dict[str, Any]]:
        """Restart the game with the obstacle generator tied to ``self.np_random``."""
        super().reset(seed=seed)
        sim = self._require_sim()

        sim.obstacles.rng = self.np_random
        sim.handle(Command.RESTART)
        self._step_count = 0

        return build_observation(sim), {"score": 0}

    def step(
        self, action: np.ndarray
    ) -> tuple[np.ndarray, float, bool, bool, dict[str, Any]]:
        """Advance the game by one fixed timestep.

        Args:
            action: Array of shape (2,): [steering, throttle].

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        sim = self._require_sim()

        intents = self.action_to_intents(action)
        score_before = sim.state.score
        result = sim.step(self._dt, intents)
        self._step_count += 1

        reward, breakdown = compute_reward(
            StepInfo(
                score_gained=sim.state.score - score_before,
                passed=result.passed,
                crashed=result.crashed,
            ),
            self._config,
        )

        terminated = result.crashed
        truncated = not terminated and self._step_count >= self._max_steps
        info: dict[str, Any] = {
            "score": result.hud.score,
            "speed": result.hud.speed,
            "passed": result.passed,
            "step_count": self._step_count,
            "reward_breakdown": breakdown,
        }
        return build_observation(sim), float(reward), terminated, truncated, info

    def close(self) -> None:
        self._sim = None

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def action_to_intents(self, action: np.ndarray) -> Intents:
        """Quantize a continuous [steering, throttle] action into intents."""
        steer, throttle = float(action[0]), float(action[1])
        return Intents(
            steer_left=steer < -self._steer_threshold,
            steer_right=steer > self._steer_threshold,
            accelerate=throttle > self._throttle_threshold,
            brake=throttle < -self._throttle_threshold,
        )

    @property
    def simulation(self) -> Simulation:
        return self._require_sim()

    def _require_sim(self) -> Simulation:
        if self._sim is None:
            raise RuntimeError("Environment is closed")
        return self._sim
