"""Observation builder for the headless environment.

Observation vector, all values normalized to [0, 1]:

    0: player x       -- 0 = left road edge, 1 = right road edge
    1: lateral vel    -- 0.5 = still, 0 = full left, 1 = full right
    2: speed          -- 0 = min speed, 1 = max speed
    3..: per lane     -- gap from the player's front to the nearest obstacle
                         in that lane, as a fraction of screen height
                         (1.0 = lane clear, 0.0 = obstacle alongside)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import gymnasium as gym
import numpy as np

if TYPE_CHECKING:
    from racer.simulation import Simulation

NUM_STATE_VALUES: int = 3


def make_observation_space(lane_count: int) -> gym.spaces.Box:
    """Box(0, 1, (3 + lane_count,), float32)."""
    return gym.spaces.Box(
        low=0.0,
        high=1.0,
        shape=(NUM_STATE_VALUES + lane_count,),
        dtype=np.float32,
    )


def lane_gaps(sim: "Simulation") -> np.ndarray:
    """Normalized distance ahead of the player to the nearest obstacle per lane."""
    track = sim.track
    player = sim.player.rect
    gaps = np.ones(track.lane_count, dtype=np.float32)

    for obstacle in sim.obstacles.obstacles:
        if obstacle.rect.top > player.bottom:
            continue  # already behind the player
        gap = max(0.0, player.top - obstacle.rect.bottom) / track.height
        gaps[obstacle.lane] = min(gaps[obstacle.lane], gap)

    return gaps


def build_observation(sim: "Simulation") -> np.ndarray:
    """Build the observation vector for the current simulation state."""
    player = sim.player
    difficulty = sim.difficulty

    x_range = player.max_x - player.min_x
    x_norm = (player.x - player.min_x) / x_range if x_range > 0 else 0.5
    vel_norm = 0.5 + player.velocity_x / (2.0 * player.max_steer)
    speed_range = difficulty.max_speed - difficulty.min_speed
    speed_norm = (sim.state.speed - difficulty.min_speed) / speed_range if speed_range > 0 else 0.0

    obs = np.concatenate([
        np.array([x_norm, vel_norm, speed_norm], dtype=np.float32),
        lane_gaps(sim),
    ])
    return np.clip(obs, 0.0, 1.0).astype(np.float32)
