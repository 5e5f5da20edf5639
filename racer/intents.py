"""Keyboard-to-intent mapping.

The simulation never sees key codes. The arcade view keeps a set of held
keys and converts it into an ``Intents`` value once per tick.
"""

from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Key codes: match arcade.key constants so we can compare against the
# keys_pressed set without importing arcade in the game logic layer.
# ---------------------------------------------------------------------------
KEY_W = 119
KEY_UP = 65362
KEY_S = 115
KEY_DOWN = 65364
KEY_A = 97
KEY_LEFT = 65361
KEY_D = 100
KEY_RIGHT = 65363


@dataclass(frozen=True)
class Intents:
    """Driver intents sampled at tick time. All four are independent."""

    steer_left: bool = False
    steer_right: bool = False
    accelerate: bool = False
    brake: bool = False


NO_INTENTS = Intents()


def intents_from_keys(keys_pressed: set[int]) -> Intents:
    """Map the currently held keys to driver intents (arrows or WASD)."""
    return Intents(
        steer_left=KEY_A in keys_pressed or KEY_LEFT in keys_pressed,
        steer_right=KEY_D in keys_pressed or KEY_RIGHT in keys_pressed,
        accelerate=KEY_W in keys_pressed or KEY_UP in keys_pressed,
        brake=KEY_S in keys_pressed or KEY_DOWN in keys_pressed,
    )
