"""Configuration loading for Mini Racer.

All tunables live in a single YAML file (``configs/default.yaml``). Every
component receives the full config dict and unpacks its own section in
``__init__``, so this module only has to load the file and make sure the
sections the simulation depends on are present and sane.
"""

from __future__ import annotations

from pathlib import Path

import yaml

DEFAULT_CONFIG_PATH: Path = Path(__file__).resolve().parent.parent / "configs" / "default.yaml"

# Section -> keys the game and its window read.
REQUIRED_KEYS: dict[str, tuple[str, ...]] = {
    "screen": ("width", "height", "fps"),
    "track": ("lane_count", "margin"),
    "player": (
        "width", "height", "bottom_offset", "start_lane",
        "max_steer", "steer_increment", "friction", "snap_epsilon",
    ),
    "obstacles": (
        "width", "height", "spawn_jitter",
        "min_speed_factor", "max_speed_factor", "removal_margin",
    ),
    "speed": ("initial", "min", "max", "accel_rate", "brake_rate", "passive_decay"),
    "scoring": ("pass_reward", "score_rate", "time_unit"),
    "spawn": ("initial_interval", "min_interval", "interval_step", "score_step"),
    "clock": ("max_delta",),
}

# Values that must be strictly positive for the geometry to make sense.
_POSITIVE: tuple[tuple[str, str], ...] = (
    ("screen", "width"),
    ("screen", "height"),
    ("screen", "fps"),
    ("track", "lane_count"),
    ("player", "width"),
    ("player", "height"),
    ("obstacles", "width"),
    ("obstacles", "height"),
    ("scoring", "time_unit"),
    ("spawn", "score_step"),
    ("clock", "max_delta"),
)


class ConfigError(ValueError):
    """Raised when a config file is missing a section or holds a bad value."""


def load_config(path: str | Path | None = None) -> dict:
    """Load and validate a YAML game config.

    Args:
        path: Path to the YAML file. Defaults to ``configs/default.yaml``
            next to the project root.

    Returns:
        The parsed config dict.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigError: If a required section/key is missing or a value is invalid.
    """
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        config = yaml.safe_load(f)

    if not isinstance(config, dict):
        raise ConfigError(f"Config file {config_path} does not contain a mapping")

    validate_config(config)
    return config


def validate_config(config: dict) -> None:
    """Check that every section and key the simulation reads is present.

    Raises:
        ConfigError: On the first problem found.
    """
    for section, keys in REQUIRED_KEYS.items():
        values = config.get(section)
        if not isinstance(values, dict):
            raise ConfigError(f"Missing config section: '{section}'")
        for key in keys:
            if key not in values:
                raise ConfigError(f"Missing config key: '{section}.{key}'")

    for section, key in _POSITIVE:
        value = config[section][key]
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"'{section}.{key}' must be a number, got {value!r}")
        if value <= 0:
            raise ConfigError(f"'{section}.{key}' must be positive, got {value}")

    speed_cfg = config["speed"]
    if not speed_cfg["min"] <= speed_cfg["initial"] <= speed_cfg["max"]:
        raise ConfigError("'speed.initial' must lie between 'speed.min' and 'speed.max'")

    obstacle_cfg = config["obstacles"]
    if obstacle_cfg["min_speed_factor"] > obstacle_cfg["max_speed_factor"]:
        raise ConfigError("'obstacles.min_speed_factor' exceeds 'obstacles.max_speed_factor'")

    lane_count = config["track"]["lane_count"]
    if not 0 <= config["player"]["start_lane"] < lane_count:
        raise ConfigError(f"'player.start_lane' must be in [0, {lane_count})")
