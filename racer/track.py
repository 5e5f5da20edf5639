"""Road geometry — lane layout and the playable horizontal range."""

from __future__ import annotations


class Track:
    """A straight road split into equal-width lanes.

    Lanes only seed positions (player start, obstacle spawn); nothing
    constrains a car to stay inside one.
    """

    def __init__(self, width: float, height: float, lane_count: int, margin: float) -> None:
        self.width: float = width
        self.height: float = height
        self.lane_count: int = lane_count
        self.margin: float = margin
        self.lane_width: float = width / lane_count

    @classmethod
    def from_config(cls, config: dict) -> "Track":
        """Build the track from the ``screen`` and ``track`` config sections."""
        screen_cfg = config["screen"]
        track_cfg = config["track"]
        return cls(
            width=float(screen_cfg["width"]),
            height=float(screen_cfg["height"]),
            lane_count=int(track_cfg["lane_count"]),
            margin=float(track_cfg["margin"]),
        )

    def lane_x(self, lane: int, item_width: float) -> float:
        """Left edge that centres an item of ``item_width`` in ``lane``."""
        return lane * self.lane_width + (self.lane_width - item_width) / 2.0

    def lane_at(self, center_x: float) -> int:
        """Lane containing the horizontal position ``center_x``, clamped to a valid lane."""
        lane = int(center_x // self.lane_width)
        return max(0, min(self.lane_count - 1, lane))

    def x_bounds(self, item_width: float) -> tuple[float, float]:
        """(min_x, max_x) for the left edge of an item that must stay on the road."""
        return self.margin, self.width - item_width - self.margin
