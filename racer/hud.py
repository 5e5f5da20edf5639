"""HUD module — score/speed readout and the idle, paused and crash overlays.

The HUD renders in screen space using its own fixed Camera2D. All drawing
uses the arcade 3.x API: draw_text, draw_rect_filled with LBWH, etc.

Layout (screen coordinates, origin bottom-left):
- Top-left: translucent panel with score and speed
- Center: start instructions (idle), "PAUSED", or the crash message
"""

import arcade

from racer.simulation import HudValues


class HUD:
    """Renders the heads-up display and full-screen overlays."""

    def __init__(self, config: dict, screen_width: int, screen_height: int) -> None:
        """Initialize the HUD from game config.

        Args:
            config: Full game config dict (needs 'colors' section).
            screen_width: Window width in pixels.
            screen_height: Window height in pixels.
        """
        colors_cfg = config["colors"]

        self.screen_width: int = screen_width
        self.screen_height: int = screen_height
        self.text_color: tuple[int, int, int] = tuple(colors_cfg["hud_text_color"])

        # HUD camera, fixed in screen space
        self._camera: arcade.Camera2D = arcade.Camera2D()

    def draw(self, hud: HudValues) -> None:
        """Draw the score/speed panel in the top-left corner."""
        self._camera.use()

        top_y = self.screen_height - 12
        arcade.draw_rect_filled(
            arcade.LBWH(12, top_y - 44, 120, 44),
            (255, 255, 255, 16),
        )
        arcade.draw_text(
            f"Score: {hud.score}",
            20,
            top_y - 14,
            self.text_color,
            font_size=14,
            anchor_x="left",
            anchor_y="center",
        )
        arcade.draw_text(
            f"Speed: {hud.speed}",
            20,
            top_y - 34,
            (*self.text_color, 200),
            font_size=12,
            anchor_x="left",
            anchor_y="center",
        )

    def draw_idle(self) -> None:
        """Draw the start instructions shown before the first game."""
        self._camera.use()
        cx = self.screen_width / 2
        cy = self.screen_height / 2

        arcade.draw_text(
            "Press Enter to start",
            cx,
            cy + 10,
            arcade.color.WHITE,
            font_size=18,
            anchor_x="center",
            anchor_y="center",
        )
        arcade.draw_text(
            "Arrow keys or WASD to drive, Space to pause",
            cx,
            cy - 18,
            arcade.color.WHITE,
            font_size=12,
            anchor_x="center",
            anchor_y="center",
        )

    def draw_paused(self) -> None:
        self._camera.use()
        self._draw_dim()
        arcade.draw_text(
            "PAUSED",
            self.screen_width / 2,
            self.screen_height / 2,
            arcade.color.WHITE,
            font_size=36,
            anchor_x="center",
            anchor_y="center",
        )

    def draw_crashed(self, message: str) -> None:
        """Draw the crash overlay with the final-score message."""
        self._camera.use()
        self._draw_dim()

        cx = self.screen_width / 2
        cy = self.screen_height / 2

        arcade.draw_text(
            message,
            cx,
            cy + 30,
            arcade.color.RED,
            font_size=30,
            anchor_x="center",
            anchor_y="center",
        )
        arcade.draw_text(
            "Press R to restart",
            cx,
            cy - 30,
            arcade.color.WHITE,
            font_size=18,
            anchor_x="center",
            anchor_y="center",
        )

    def _draw_dim(self) -> None:
        arcade.draw_rect_filled(
            arcade.LBWH(0, 0, self.screen_width, self.screen_height),
            (0, 0, 0, 150),
        )
