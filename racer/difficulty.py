"""Speed, score and spawn-cadence rules.

The controller holds only tuning constants; the values it updates (speed,
score, spawn timer and interval) live on the SimulationState passed in.

- Speed rises while accelerating, falls while braking and always decays a
  little, all scaled by dt and kept inside [min, max].
- Score accrues continuously in proportion to speed, plus a fixed reward
  for each obstacle that leaves the screen.
- The spawn interval shrinks by a fixed step for every ``score_step``
  points, down to a floor. It is only recomputed when a spawn happens.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from racer.intents import Intents

if TYPE_CHECKING:
    from racer.simulation import SimulationState


class DifficultyController:
    """Tuning rules for speed, score accrual and obstacle cadence."""

    def __init__(self, config: dict) -> None:
        speed_cfg = config["speed"]
        scoring_cfg = config["scoring"]
        spawn_cfg = config["spawn"]

        self.initial_speed: float = float(speed_cfg["initial"])
        self.min_speed: float = float(speed_cfg["min"])
        self.max_speed: float = float(speed_cfg["max"])
        self.accel_rate: float = float(speed_cfg["accel_rate"])
        self.brake_rate: float = float(speed_cfg["brake_rate"])
        self.passive_decay: float = float(speed_cfg["passive_decay"])

        self.pass_reward: float = float(scoring_cfg["pass_reward"])
        self.score_rate: float = float(scoring_cfg["score_rate"])
        self.time_unit: float = float(scoring_cfg["time_unit"])

        self.initial_interval: float = float(spawn_cfg["initial_interval"])
        self.min_interval: float = float(spawn_cfg["min_interval"])
        self.interval_step: float = float(spawn_cfg["interval_step"])
        self.score_step: float = float(spawn_cfg["score_step"])

    def reset(self, state: "SimulationState") -> None:
        """Restore speed, score and spawn cadence to their starting values."""
        state.speed = self.initial_speed
        state.score = 0.0
        state.spawn_timer = 0.0
        state.spawn_interval = self.initial_interval

    def update_speed(self, state: "SimulationState", intents: Intents, dt: float) -> None:
        """Apply accelerate/brake and the passive slowdown for ``dt`` ms.

        Accelerate and brake are independent; holding both applies both.
        """
        if intents.accelerate:
            state.speed = min(self.max_speed, state.speed + self.accel_rate * dt)
        if intents.brake:
            state.speed = max(self.min_speed, state.speed - self.brake_rate * dt)
        state.speed = max(self.min_speed, state.speed - self.passive_decay * dt)

    def spawn_interval_for(self, score: float) -> float:
        """Spawn interval for the given score: one step shorter per ``score_step`` points."""
        steps = int(score // self.score_step)
        return max(self.min_interval, self.initial_interval - steps * self.interval_step)

    def advance_spawn_timer(self, state: "SimulationState", dt: float) -> bool:
        """Accumulate ``dt`` and report whether an obstacle is due.

        When one is due the timer restarts at zero and the interval is
        recomputed from the current score.
        """
        state.spawn_timer += dt
        if state.spawn_timer > state.spawn_interval:
            state.spawn_timer = 0.0
            state.spawn_interval = self.spawn_interval_for(state.score)
            return True
        return False

    def award_passes(self, state: "SimulationState", passed: int) -> None:
        """Add the pass reward for each obstacle that left the screen."""
        state.score += passed * self.pass_reward

    def accrue_score(self, state: "SimulationState", dt: float) -> None:
        """Passive score, proportional to speed and elapsed time."""
        state.score += state.speed * self.score_rate * (dt / self.time_unit)
