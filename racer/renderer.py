"""Main game view — frame driver, draw loop, input handling.

RacerView is the arcade.View that drives the Simulation:

1. on_update: Sample a timestamp, get a clamped delta from the FrameClock,
   convert held keys to intents and step the simulation.
2. on_draw: Draw the road and cars from a read-only snapshot, draw the
   HUD, then collect any pending crash notice so it is shown only after
   the crash frame has been drawn.
3. on_key_press / on_key_release: Maintain the keys_pressed set and turn
   Enter / Space / R into START / TOGGLE_PAUSE / RESTART commands.

The simulation works in canvas coordinates (y down); this view flips them
into arcade's y-up screen space.
"""

import logging
import time

import arcade

from racer.clock import FrameClock
from racer.hud import HUD
from racer.intents import intents_from_keys
from racer.physics import Rect
from racer.simulation import Command, CrashNotice, Phase, RenderSnapshot, Simulation

logger = logging.getLogger(__name__)


def _now_ms() -> float:
    return time.perf_counter() * 1000.0


class RacerView(arcade.View):
    """Owns the simulation and renders it each frame."""

    def __init__(self, config: dict) -> None:
        """Initialize the view with game config.

        Does NOT create game objects yet. Call setup() after attaching
        the view to a window.

        Args:
            config: Full game config dict loaded from default.yaml.
        """
        super().__init__()
        self.config: dict = config

        # Input state: set of currently held arcade.key constants
        self.keys_pressed: set[int] = set()

        # These are initialized by setup()
        self.simulation: Simulation | None = None
        self.clock: FrameClock | None = None
        self.hud: HUD | None = None
        self.crash_notice: CrashNotice | None = None

        # Colors from config
        colors_cfg = config["colors"]
        self._bg_color: tuple[int, int, int] = tuple(colors_cfg["background_color"])
        self._road_color: tuple[int, int, int] = tuple(colors_cfg["road_color"])
        self._marker_color: tuple[int, ...] = tuple(colors_cfg["lane_marker_color"])
        self._border_color: tuple[int, ...] = tuple(colors_cfg["road_border_color"])
        self._road_padding: float = float(config["track"].get("road_padding", 12))

    def setup(self) -> None:
        """Create the simulation (in IDLE), clock and HUD."""
        screen_cfg = self.config["screen"]

        self.simulation = Simulation(self.config)
        self.clock = FrameClock(self.config)
        self.clock.reset(_now_ms())
        self.hud = HUD(self.config, screen_cfg["width"], screen_cfg["height"])
        self.crash_notice = None
        self.keys_pressed.clear()

    # ------------------------------------------------------------------
    # Game loop
    # ------------------------------------------------------------------

    def on_update(self, delta_time: float) -> None:
        """Run one tick of the simulation.

        arcade's own delta_time is ignored; the FrameClock measures and
        clamps the gap between frames in milliseconds.
        """
        dt = self.clock.tick(_now_ms())
        self.simulation.step(dt, intents_from_keys(self.keys_pressed))

    def on_draw(self) -> None:
        """Render the current frame."""
        self.clear(color=self._bg_color)

        snapshot = self.simulation.snapshot()
        self._draw_road(snapshot)
        for rect in snapshot.obstacles:
            self._draw_car(snapshot, rect, snapshot.obstacle_color, oncoming=True)
        self._draw_car(snapshot, snapshot.player, snapshot.player_color, oncoming=False)

        self.hud.draw(snapshot.hud)

        if snapshot.phase is Phase.IDLE:
            self.hud.draw_idle()
        elif snapshot.phase is Phase.PAUSED:
            self.hud.draw_paused()
        elif snapshot.phase is Phase.CRASHED and self.crash_notice is not None:
            self.hud.draw_crashed(self.crash_notice.message)

        # The crash frame is on screen now; collect the notice for next frames.
        notice = self.simulation.take_notification()
        if notice is not None:
            self.crash_notice = notice
            logger.info(notice.message)

    # ------------------------------------------------------------------
    # Input handling
    # ------------------------------------------------------------------

    def on_key_press(self, key: int, modifiers: int) -> None:
        """Handle key down events.

        Args:
            key: The arcade.key constant for the pressed key.
            modifiers: Bitfield of active modifier keys.
        """
        self.keys_pressed.add(key)

        if key == arcade.key.ESCAPE:
            arcade.exit()
        elif key in (arcade.key.ENTER, arcade.key.RETURN):
            self._send(Command.START)
        elif key == arcade.key.SPACE:
            self._send(Command.TOGGLE_PAUSE)
        elif key == arcade.key.R:
            self.crash_notice = None
            self._send(Command.RESTART)

    def on_key_release(self, key: int, modifiers: int) -> None:
        """Handle key up events.

        Args:
            key: The arcade.key constant for the released key.
            modifiers: Bitfield of active modifier keys.
        """
        self.keys_pressed.discard(key)

    def _send(self, command: Command) -> None:
        """Forward a command and resync the clock if play (re)starts."""
        before = self.simulation.state.phase
        after = self.simulation.handle(command)
        if after is Phase.RUNNING and (before is not Phase.RUNNING or command is Command.RESTART):
            self.clock.reset(_now_ms())

    # ------------------------------------------------------------------
    # Drawing helpers
    # ------------------------------------------------------------------

    def _to_screen(self, snapshot: RenderSnapshot, rect: Rect) -> "arcade.types.Rect":
        """Flip a canvas rect (y down) into an arcade LBWH rect (y up)."""
        bottom = snapshot.track_height - rect.bottom
        return arcade.LBWH(rect.x, bottom, rect.width, rect.height)

    def _draw_road(self, snapshot: RenderSnapshot) -> None:
        """Draw the road surface, dashed lane markers and border."""
        pad = self._road_padding
        road_w = snapshot.track_width - pad * 2
        road_h = snapshot.track_height

        arcade.draw_rect_filled(arcade.LBWH(pad, 0, road_w, road_h), self._road_color)

        dash, gap = 18, 14
        lane_gap = road_w / snapshot.lane_count
        for i in range(1, snapshot.lane_count):
            lx = pad + i * lane_gap
            y = road_h
            while y > 0:
                arcade.draw_line(lx, y, lx, max(0.0, y - dash), self._marker_color, 4)
                y -= dash + gap

        arcade.draw_rect_outline(arcade.LBWH(pad, 0, road_w, road_h), self._border_color, border_width=2)

    def _draw_car(
        self,
        snapshot: RenderSnapshot,
        rect: Rect,
        color: tuple[int, ...],
        oncoming: bool,
    ) -> None:
        """Draw a car body with windshield, wheels and lights."""
        body = self._to_screen(snapshot, rect)
        left, bottom, w, h = body.left, body.bottom, body.width, body.height
        top = bottom + h

        arcade.draw_rect_filled(body, color)

        # Windshield, near the front (top of the sprite)
        arcade.draw_rect_filled(
            arcade.LBWH(left + w * 0.18, top - h * 0.40, w * 0.64, h * 0.28),
            (255, 255, 255, 31),
        )

        # Wheels at the rear
        wheel_w, wheel_h = w * 0.18, h * 0.12
        wheel_bottom = bottom + wheel_h / 1.2 - wheel_h
        arcade.draw_rect_filled(arcade.LBWH(left + w * 0.08, wheel_bottom, wheel_w, wheel_h), (0, 0, 0, 204))
        arcade.draw_rect_filled(
            arcade.LBWH(left + w - w * 0.08 - wheel_w, wheel_bottom, wheel_w, wheel_h),
            (0, 0, 0, 204),
        )

        # Head/tail lights
        light_color = (255, 212, 212) if oncoming else (255, 225, 107)
        light_bottom = top - h * 0.48
        arcade.draw_rect_filled(arcade.LBWH(left + w * 0.02, light_bottom, w * 0.06, h * 0.12), light_color)
        arcade.draw_rect_filled(
            arcade.LBWH(left + w - w * 0.02 - w * 0.06, light_bottom, w * 0.06, h * 0.12),
            light_color,
        )
