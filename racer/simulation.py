"""Simulation orchestrator — the game state machine and per-tick update.

Simulation owns every piece of mutable game state: the player car, the
obstacle manager and a SimulationState record. An external driver (the
arcade view or the headless Gymnasium env) does three things:

1. Sends control commands (START, TOGGLE_PAUSE, RESTART) via ``handle``.
2. Calls ``step(dt, intents)`` once per frame.
3. Reads ``snapshot()`` to draw, then ``take_notification()`` to collect
   the crash notice after the crash frame has been drawn.

Phases::

    IDLE --START--> RUNNING <--TOGGLE_PAUSE--> PAUSED
                       |
                   collision
                       v
                    CRASHED

    RESTART from any phase -> fresh RUNNING

Per-tick order while RUNNING:
    steer player -> update speed -> one pass over the obstacles, newest
    first (move, retire with a pass reward, or collide; a hit ends the
    tick) -> spawn timer / spawn -> passive score -> HUD emit
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from racer.difficulty import DifficultyController
from racer.intents import Intents
from racer.obstacles import ObstacleManager
from racer.physics import Rect
from racer.player import PlayerCar
from racer.track import Track

logger = logging.getLogger(__name__)


class Phase(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    CRASHED = "crashed"


class Command(enum.Enum):
    """Control-surface messages consumed by ``Simulation.handle``."""
    START = "start"
    TOGGLE_PAUSE = "toggle_pause"
    RESTART = "restart"


@dataclass(frozen=True)
class CrashNotice:
    """Terminal notification raised by a collision."""
    final_score: int

    @property
    def message(self) -> str:
        return f"Crashed! Score: {self.final_score}"


@dataclass(frozen=True)
class HudValues:
    """Score and speed as shown on the HUD (both floored)."""
    score: int
    speed: int


@dataclass
class SimulationState:
    """All scalar game state for one session.

    Attributes:
        phase: Current state-machine phase.
        score: Accumulated score; never decreases until a restart.
        speed: Road speed, kept in [min, max] by the difficulty controller.
        spawn_timer: Time accumulated since the last spawn (ms).
        spawn_interval: Time required between spawns (ms).
        pending_notification: Crash notice waiting for the driver, if any.
        ticks: Running ticks since the last restart.
    """
    phase: Phase = Phase.IDLE
    score: float = 0.0
    speed: float = 0.0
    spawn_timer: float = 0.0
    spawn_interval: float = 0.0
    pending_notification: Optional[CrashNotice] = None
    ticks: int = 0

    @property
    def running(self) -> bool:
        """True while the session is live (running or paused)."""
        return self.phase in (Phase.RUNNING, Phase.PAUSED)

    @property
    def paused(self) -> bool:
        return self.phase is Phase.PAUSED


@dataclass(frozen=True)
class StepResult:
    """Outcome of one ``Simulation.step`` call.

    Attributes:
        crashed: True if this tick ended in a collision.
        passed: Obstacles that left the screen this tick.
        hud: HUD values after the tick.
    """
    crashed: bool
    passed: int
    hud: HudValues


@dataclass(frozen=True)
class RenderSnapshot:
    """Everything the renderer needs to draw one frame. Read-only."""
    player: Rect
    player_color: tuple[int, ...]
    obstacles: tuple[Rect, ...]
    obstacle_color: tuple[int, ...]
    phase: Phase
    hud: HudValues
    lane_count: int
    track_width: float
    track_height: float


HudListener = Callable[[HudValues], None]


class Simulation:
    """Owns and advances the whole game state."""

    def __init__(self, config: dict, rng: Optional[np.random.Generator] = None) -> None:
        """Build the track, player, obstacle manager and rules from config.

        The simulation starts in IDLE; send ``Command.START`` to begin.

        Args:
            config: Full game config dict.
            rng: Random generator for obstacle spawning (seed it for
                reproducible runs).
        """
        self.track: Track = Track.from_config(config)
        self.player: PlayerCar = PlayerCar(config, self.track)
        self.obstacles: ObstacleManager = ObstacleManager(config, self.track, rng)
        self.difficulty: DifficultyController = DifficultyController(config)
        self.state: SimulationState = SimulationState()
        self.difficulty.reset(self.state)

        colors_cfg = config.get("colors", {})
        self._player_color: tuple[int, ...] = tuple(colors_cfg.get("player_color", (42, 210, 74)))
        self._obstacle_color: tuple[int, ...] = tuple(colors_cfg.get("obstacle_color", (210, 63, 63)))

        self._hud_listeners: list[HudListener] = []

    # ------------------------------------------------------------------
    # Control surface
    # ------------------------------------------------------------------

    def handle(self, command: Command) -> Phase:
        """Apply a control command and return the resulting phase."""
        if command is Command.START:
            if self.state.phase is Phase.IDLE:
                self.state.spawn_timer = 0.0
                self._set_phase(Phase.RUNNING)
        elif command is Command.TOGGLE_PAUSE:
            if self.state.phase is Phase.RUNNING:
                self._set_phase(Phase.PAUSED)
            elif self.state.phase is Phase.PAUSED:
                self._set_phase(Phase.RUNNING)
        elif command is Command.RESTART:
            self.restart()
        return self.state.phase

    def restart(self) -> None:
        """Reset every piece of session state and go straight to RUNNING."""
        self.obstacles.clear()
        self.player.reset()
        self.difficulty.reset(self.state)
        self.state.pending_notification = None
        self.state.ticks = 0
        self._set_phase(Phase.RUNNING)

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def step(self, dt: float, intents: Intents) -> StepResult:
        """Advance the simulation by ``dt`` ms.

        Outside RUNNING, or with a zero delta, nothing changes.

        Args:
            dt: Clamped delta time in ms.
            intents: Driver intents sampled for this tick.

        Returns:
            StepResult describing the tick.
        """
        if self.state.phase is not Phase.RUNNING or dt <= 0:
            return StepResult(crashed=False, passed=0, hud=self.hud_values())

        state = self.state

        # 1. Player steering and position
        self.player.update(intents)

        # 2. Road speed
        self.difficulty.update_speed(state, intents, dt)

        # 3-4. Obstacle motion, retirement and collision in one pass.
        # The first hit stops the pass and ends the tick.
        advanced = self.obstacles.advance(dt, state.speed, self.player.rect)
        passed = advanced.passed
        if passed:
            self.difficulty.award_passes(state, passed)
            logger.debug("%d obstacle(s) passed, score %.1f", passed, state.score)

        if advanced.hit is not None:
            self._crash()
            return StepResult(crashed=True, passed=passed, hud=self.hud_values())

        # 5. Spawn cadence
        if self.difficulty.advance_spawn_timer(state, dt):
            self.obstacles.spawn()

        # 6. Passive score
        self.difficulty.accrue_score(state, dt)
        state.ticks += 1

        # 7. HUD
        hud = self.hud_values()
        for listener in self._hud_listeners:
            listener(hud)
        return StepResult(crashed=False, passed=passed, hud=hud)

    # ------------------------------------------------------------------
    # Outputs for external collaborators
    # ------------------------------------------------------------------

    def take_notification(self) -> Optional[CrashNotice]:
        """Hand over the pending crash notice (if any) exactly once."""
        notice = self.state.pending_notification
        self.state.pending_notification = None
        return notice

    def add_hud_listener(self, listener: HudListener) -> None:
        """Register a callback that receives HUD values after every tick."""
        self._hud_listeners.append(listener)

    def hud_values(self) -> HudValues:
        return HudValues(score=int(self.state.score), speed=int(self.state.speed))

    def snapshot(self) -> RenderSnapshot:
        """Read-only view of the current frame for the renderer."""
        return RenderSnapshot(
            player=self.player.rect,
            player_color=self._player_color,
            obstacles=self.obstacles.rects(),
            obstacle_color=self._obstacle_color,
            phase=self.state.phase,
            hud=self.hud_values(),
            lane_count=self.track.lane_count,
            track_width=self.track.width,
            track_height=self.track.height,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _crash(self) -> None:
        notice = CrashNotice(final_score=int(self.state.score))
        self.state.pending_notification = notice
        self._set_phase(Phase.CRASHED)
        logger.info("Crash after %d ticks: final score %d", self.state.ticks, notice.final_score)

    def _set_phase(self, phase: Phase) -> None:
        if phase is not self.state.phase:
            logger.info("Phase %s -> %s", self.state.phase.name, phase.name)
        self.state.phase = phase
