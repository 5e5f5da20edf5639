"""Reward function for the headless lane-racer environment.

Separated into its own module so reward shaping can be iterated without
touching the environment. All weights come from config["ai"].
The function is a pure function with no side effects.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class StepInfo:
    """Everything reward computation needs from one environment step.

    Attributes:
        score_gained: Game score earned this step (passive accrual + passes).
        passed: Obstacles that left the screen this step.
        crashed: True if the step ended in a collision.
    """

    score_gained: float
    passed: int
    crashed: bool


def compute_reward(info: StepInfo, config: dict) -> tuple[float, dict[str, float]]:
    """Compute the total reward for one step plus a per-component breakdown.

    Components:
        score: score gained this step, scaled by ``score_reward_scale``.
        pass:  ``pass_bonus`` for every obstacle dodged.
        crash: ``-crash_penalty`` on collision.

    Returns:
        (total_reward, breakdown)
    """
    ai = config.get("ai", {})

    score_scale = float(ai.get("score_reward_scale", 0.1))
    pass_bonus = float(ai.get("pass_bonus", 1.0))
    crash_penalty = float(ai.get("crash_penalty", 20.0))

    breakdown: dict[str, float] = {
        "score": info.score_gained * score_scale,
        "pass": info.passed * pass_bonus,
        "crash": -crash_penalty if info.crashed else 0.0,
    }
    return sum(breakdown.values()), breakdown
