"""Frame clock — turns wall-clock frame timestamps into a bounded delta time.

A single long gap between frames (window dragged, laptop asleep, debugger
breakpoint) would otherwise push obstacles straight through the player and
award a burst of score. The delta is therefore clamped to ``max_delta``.
"""


def clamp_delta(previous: float, now: float, max_delta: float) -> float:
    """Return the elapsed time between two timestamps, capped at ``max_delta``.

    A timestamp that went backwards yields 0.0, which every update treats as
    a no-op.

    Args:
        previous: Timestamp of the previous frame (ms).
        now: Timestamp of the current frame (ms).
        max_delta: Upper bound for the returned delta (ms).

    Returns:
        Delta time in ms, in ``[0, max_delta]``.
    """
    return max(0.0, min(max_delta, now - previous))


class FrameClock:
    """Remembers the previous frame timestamp and hands out clamped deltas."""

    def __init__(self, config: dict) -> None:
        self.max_delta: float = float(config["clock"]["max_delta"])
        self._last: float | None = None

    def reset(self, now: float) -> None:
        """Re-synchronise to ``now`` so time spent paused or idle is not counted."""
        self._last = now

    def tick(self, now: float) -> float:
        """Return the clamped delta since the previous tick and remember ``now``.

        The first tick after construction returns 0.0.
        """
        if self._last is None:
            self._last = now
            return 0.0
        dt = clamp_delta(self._last, now, self.max_delta)
        self._last = now
        return dt
