"""Obstacle traffic — spawning, downward motion and retirement.

The ObstacleManager exclusively owns the list of active obstacles. Other
code reads rectangles from it (for collision checks and drawing) but only
the manager adds, moves or removes obstacles.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from racer.physics import Rect, rects_overlap
from racer.track import Track

logger = logging.getLogger(__name__)


@dataclass
class Obstacle:
    """A car driving down the road.

    Attributes:
        x: Left edge, aligned to the spawn lane and fixed for its lifetime.
        y: Top edge; increases as the obstacle scrolls down.
        width: Horizontal extent.
        height: Vertical extent.
        lane: Lane the obstacle spawned in (informational).
        speed_factor: Per-obstacle multiplier on the road speed, sampled once.
    """
    x: float
    y: float
    width: float
    height: float
    lane: int
    speed_factor: float

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)


@dataclass(frozen=True)
class AdvanceResult:
    """Outcome of one ``ObstacleManager.advance`` pass.

    Attributes:
        passed: Obstacles retired below the visible area during the pass.
        hit: The obstacle that collided with the target, if any.
    """
    passed: int
    hit: Optional[Obstacle]


class ObstacleManager:
    """Owns the active obstacle set and its lifecycle."""

    def __init__(
        self,
        config: dict,
        track: Track,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        """Initialize an empty obstacle set.

        Args:
            config: Full game config dict (needs 'obstacles' and 'scoring').
            track: Road geometry used for lane positions.
            rng: Random generator; a fresh unseeded one is created if omitted.
        """
        obstacle_cfg = config["obstacles"]

        self.track: Track = track
        self.width: float = float(obstacle_cfg["width"])
        self.height: float = float(obstacle_cfg["height"])
        self.spawn_jitter: int = int(obstacle_cfg["spawn_jitter"])
        self.min_speed_factor: float = float(obstacle_cfg["min_speed_factor"])
        self.max_speed_factor: float = float(obstacle_cfg["max_speed_factor"])
        self.removal_y: float = track.height + float(obstacle_cfg["removal_margin"])
        self.time_unit: float = float(config["scoring"]["time_unit"])

        self.rng: np.random.Generator = rng if rng is not None else np.random.default_rng()
        self._obstacles: list[Obstacle] = []

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def spawn(self) -> Obstacle:
        """Create an obstacle in a random lane just above the visible area."""
        lane = int(self.rng.integers(0, self.track.lane_count))
        obstacle = Obstacle(
            x=self.track.lane_x(lane, self.width),
            y=-self.height - int(self.rng.integers(0, self.spawn_jitter + 1)),
            width=self.width,
            height=self.height,
            lane=lane,
            speed_factor=float(self.rng.uniform(self.min_speed_factor, self.max_speed_factor)),
        )
        self._obstacles.append(obstacle)
        logger.debug("Spawned obstacle in lane %d (factor %.2f)", lane, obstacle.speed_factor)
        return obstacle

    def advance(self, dt: float, speed: float, target: Optional[Rect] = None) -> AdvanceResult:
        """Move obstacles down, retire the ones that left the screen, and
        stop at the first one that hits ``target``.

        Obstacles are visited newest first. Each one is moved, then either
        retired (if it is past the bottom of the screen) or checked against
        ``target``. On a hit the pass ends: older obstacles are neither moved
        nor retired this tick. Deleting by index while walking backwards
        never skips an element.

        Args:
            dt: Delta time in ms.
            speed: Current road speed.
            target: Rectangle to test for collisions (the player), or None.

        Returns:
            AdvanceResult with the retired count and the obstacle hit, if any.
        """
        step = speed * (dt / self.time_unit)
        passed = 0
        for index in range(len(self._obstacles) - 1, -1, -1):
            obstacle = self._obstacles[index]
            obstacle.y += step * obstacle.speed_factor
            if obstacle.y > self.removal_y:
                del self._obstacles[index]
                passed += 1
            elif target is not None and rects_overlap(target, obstacle.rect):
                return AdvanceResult(passed=passed, hit=obstacle)
        return AdvanceResult(passed=passed, hit=None)

    def clear(self) -> None:
        """Drop every active obstacle (used on restart)."""
        self._obstacles = []

    # ------------------------------------------------------------------
    # Read-only queries
    # ------------------------------------------------------------------

    def rects(self) -> tuple[Rect, ...]:
        """Snapshot of the active obstacles' bounding boxes."""
        return tuple(obstacle.rect for obstacle in self._obstacles)

    @property
    def obstacles(self) -> tuple[Obstacle, ...]:
        return tuple(self._obstacles)

    def __len__(self) -> int:
        return len(self._obstacles)
