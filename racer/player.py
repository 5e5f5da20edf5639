"""Player car — lateral steering with friction and road-edge clamping.

The player car never moves vertically; the road scrolls under it. Its
physical state is the continuous ``x`` position and a lateral velocity.
This module has zero dependency on arcade or any rendering library.

Steering model:
- Holding left/right changes velocity by a fixed increment per frame,
  capped at ``max_steer``.
- With no steering input, velocity decays by a friction multiplier per
  frame and snaps to zero below ``snap_epsilon`` so it never creeps.
- Position integrates velocity once per frame and is clamped to the road.

Steering is deliberately frame-coupled (not scaled by dt). It gives the
car a snappy feel; speed and obstacle motion are the dt-scaled parts.
"""

from racer.intents import Intents
from racer.physics import Rect
from racer.track import Track


class PlayerCar:
    """Player-controlled car.

    Call ``update(intents)`` once per tick. Rendering code reads ``rect``.
    """

    def __init__(self, config: dict, track: Track) -> None:
        """Initialize the car in its start lane.

        Args:
            config: Full game config dict (needs 'player' and 'screen' sections).
            track: Road geometry used for lane positions and bounds.
        """
        player_cfg = config["player"]

        self.track: Track = track
        self.width: float = float(player_cfg["width"])
        self.height: float = float(player_cfg["height"])
        self.start_lane: int = int(player_cfg["start_lane"])
        self.max_steer: float = float(player_cfg["max_steer"])
        self.steer_increment: float = float(player_cfg["steer_increment"])
        self.friction: float = float(player_cfg["friction"])
        self.snap_epsilon: float = float(player_cfg["snap_epsilon"])

        # Fixed row near the bottom of the screen
        self.y: float = track.height - self.height - float(player_cfg["bottom_offset"])
        self.min_x, self.max_x = track.x_bounds(self.width)

        self.lane: int = self.start_lane
        self.x: float = 0.0
        self.velocity_x: float = 0.0
        self.reset()

    def update(self, intents: Intents) -> None:
        """Run one frame of steering.

        Args:
            intents: Current driver intents; only the steering flags are read.
        """
        if intents.steer_left:
            self.velocity_x = max(self.velocity_x - self.steer_increment, -self.max_steer)
        elif intents.steer_right:
            self.velocity_x = min(self.velocity_x + self.steer_increment, self.max_steer)
        else:
            self.velocity_x *= self.friction
            if abs(self.velocity_x) < self.snap_epsilon:
                self.velocity_x = 0.0

        self.x += self.velocity_x
        if self.x < self.min_x:
            self.x = self.min_x
        elif self.x > self.max_x:
            self.x = self.max_x

        self.lane = self.track.lane_at(self.x + self.width / 2.0)

    def reset(self, lane: int | None = None) -> None:
        """Place the car centred in ``lane`` (start lane by default), at rest."""
        self.lane = self.start_lane if lane is None else lane
        self.x = min(max(self.track.lane_x(self.lane, self.width), self.min_x), self.max_x)
        self.velocity_x = 0.0

    @property
    def rect(self) -> Rect:
        """Current bounding box."""
        return Rect(self.x, self.y, self.width, self.height)
