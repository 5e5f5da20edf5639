"""Headless Gymnasium environment for Mini Racer."""
from .env import LaneRacerEnv

__all__ = ["LaneRacerEnv"]
