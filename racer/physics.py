"""Axis-aligned rectangle geometry and collision detection.

Everything in the game is an upright rectangle, so collision detection is a
single AABB overlap test. All functions are pure geometry: no rendering,
no arcade dependency.

Coordinates are canvas-style: ``y`` grows downward, so ``top`` is the
smaller ``y`` and ``bottom`` the larger.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle.

    Attributes:
        x: Left edge.
        y: Top edge.
        width: Horizontal extent.
        height: Vertical extent.
    """
    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.height


def rects_overlap(a: Rect, b: Rect) -> bool:
    """Return True if two rectangles overlap.

    Rectangles are separated only when one lies strictly to the left, right,
    above or below the other. Edges that exactly touch count as a collision.
    The test is symmetric in ``a`` and ``b``.
    """
    return not (
        a.right < b.left
        or a.left > b.right
        or a.bottom < b.top
        or a.top > b.bottom
    )
