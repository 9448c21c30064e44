# Copyright (C) 2025 Richard Owen
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
"""Fixed-interval driver that feeds sensor samples to the goalie engine."""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, List, Literal, Optional

from netminder.utils.debug import DecisionDebugger

from .arrival import AgentState
from .clearance import AlwaysClear, ClearanceStrategy, CurvedPathClearance
from .config import ENGINE_CONFIG, EngineConfig
from .goalkeeper import GoalkeeperDecisionEngine, TickDecision
from .physics import InvalidTimeStep, MotionEstimator, Vector2D


@dataclass
class TickEvent:
    """Snapshot of a noteworthy tick.

    Parameters
    ----------
    timestamp : float
        Seconds elapsed since the simulation started.
    event_type : str
        Category of event (``"intercept"``, ``"safe_mode"``, ``"idle"`` or ``"skipped"``).
    description : str
        Human-readable summary of what happened.
    decision : TickDecision | None, optional
        Decision that produced the event; ``None`` for skipped ticks.
    """

    timestamp: float
    event_type: str
    description: str
    decision: Optional[TickDecision] = None


@dataclass
class ScenarioState:
    """Everything the driver owns between ticks.

    Parameters
    ----------
    ball : MotionEstimator
        Tracked ball.
    opponent : AgentState
        Opponent position and velocity.
    pass_target : Vector2D
        Teammate position.
    shoot_target : Vector2D
        Goal position.
    sim_time : float, optional
        Elapsed simulation time in seconds.
    ticks : int, optional
        Number of ticks processed.
    events : List[TickEvent], optional
        Ordered tick history.
    """

    ball: MotionEstimator
    opponent: AgentState
    pass_target: Vector2D
    shoot_target: Vector2D
    sim_time: float = 0.0
    ticks: int = 0
    events: List[TickEvent] = field(default_factory=list)

    @classmethod
    def from_config(cls, config: EngineConfig) -> "ScenarioState":
        """Build the initial scene described by ``config.scenario``.

        Parameters
        ----------
        config : EngineConfig
            Configuration holding the scene layout.

        Returns
        -------
        ScenarioState
            Fresh state with zero elapsed time.
        """
        scene = config.scenario
        return cls(
            ball=MotionEstimator(
                Vector2D.from_tuple(scene.ball_start),
                correction_factor=config.motion.error_correction_factor,
            ),
            opponent=AgentState(
                position=Vector2D.from_tuple(scene.opponent_position),
                velocity=Vector2D.from_tuple(scene.opponent_velocity),
            ),
            pass_target=Vector2D.from_tuple(scene.pass_target),
            shoot_target=Vector2D.from_tuple(scene.shoot_target),
        )


class GoalieSimulation:
    """Real-time loop that moves the ball, runs the goalie and records outcomes.

    Parameters
    ----------
    config : EngineConfig | None, optional
        Tuning and scene configuration; defaults to the shared configuration.
    variant : Literal["redirect", "rendezvous"], optional
        ``"redirect"`` clears toward the goal and checks the curved lane;
        ``"rendezvous"`` simply meets the ball at its forecast position.
    debugger : DecisionDebugger | None, optional
        Telemetry sink; a new one writing to ``debug_logs/`` is created when omitted.
    on_decision : Callable[[TickDecision], None] | None, optional
        Callback invoked with every decision, typically a console renderer.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        variant: Literal["redirect", "rendezvous"] = "redirect",
        debugger: Optional[DecisionDebugger] = None,
        on_decision: Optional[Callable[[TickDecision], None]] = None,
    ) -> None:
        """Set up the scene, the engine and the debugger.

        Parameters
        ----------
        config : EngineConfig | None, optional
            Tuning and scene configuration.
        variant : Literal["redirect", "rendezvous"], optional
            Decision variant to run.
        debugger : DecisionDebugger | None, optional
            Telemetry sink.
        on_decision : Callable[[TickDecision], None] | None, optional
            Callback invoked with every decision.
        """
        if variant not in ("redirect", "rendezvous"):
            raise ValueError(f"Unknown variant '{variant}'. Known variants: redirect, rendezvous")
        self.config = config if config is not None else ENGINE_CONFIG
        self.variant = variant
        clearance: ClearanceStrategy
        if variant == "redirect":
            clearance = CurvedPathClearance(self.config.clearance.clearance_radius, self.config.clearance.sample_count)
        else:
            clearance = AlwaysClear()
        self.debugger = debugger if debugger is not None else DecisionDebugger()
        self.engine = GoalkeeperDecisionEngine(
            self.config,
            clearance=clearance,
            position=Vector2D.from_tuple(self.config.scenario.goalie_start),
            debugger=self.debugger,
        )
        self.state = ScenarioState.from_config(self.config)
        self.on_decision = on_decision
        self.is_running = False

    def start(self) -> None:
        """Run ticks in real time until stopped or ``max_ticks`` is reached."""
        sim_cfg = self.config.simulation
        self.is_running = True
        last_update = time.monotonic()

        while self.is_running:
            if sim_cfg.max_ticks and self.state.ticks >= sim_cfg.max_ticks:
                break
            time.sleep(sim_cfg.tick_interval)
            now = time.monotonic()
            self._update(now - last_update)
            last_update = now

        self.stop()

    def stop(self) -> None:
        """Stop the loop and close the debugger."""
        self.is_running = False
        self.debugger.close()

    def _update(self, dt: float) -> Optional[TickDecision]:
        """Advance the scene by one tick of ``dt`` seconds.

        Parameters
        ----------
        dt : float
            Elapsed time since the previous tick.

        Returns
        -------
        TickDecision | None
            The engine's decision, or ``None`` when the tick was skipped.
        """
        state = self.state
        state.ticks += 1
        step = Vector2D.from_tuple(self.config.scenario.ball_step)

        try:
            state.ball.nudge(step, dt)
        except InvalidTimeStep as exc:
            self.debugger.log_error("invalid_time_step", str(exc))
            self._record(TickEvent(state.sim_time, "skipped", f"Tick {state.ticks} skipped: {exc}"))
            return None

        state.sim_time += dt

        shoot_target = state.shoot_target if self.variant == "redirect" else None
        pass_target = state.pass_target if self.variant == "redirect" else None
        decision = self.engine.step(state.ball, state.opponent, dt, pass_target=pass_target, shoot_target=shoot_target)

        self.debugger.log_ball_state(
            state.sim_time,
            state.ball.position.as_tuple(),
            state.ball.velocity.as_tuple(),
            decision.forecast.as_tuple() if decision.forecast is not None else None,
        )
        self.debugger.log_agent_state(
            state.sim_time,
            "opponent",
            state.opponent.position.as_tuple(),
            velocity=state.opponent.velocity.as_tuple() if state.opponent.velocity is not None else None,
            speed=state.opponent.effective_speed,
        )
        self.debugger.log_agent_state(
            state.sim_time,
            "goalie",
            self.engine.position.as_tuple(),
            speed=self.config.arrival.goalie_speed,
        )

        if decision.is_intercepting:
            target = decision.target
            event = TickEvent(
                state.sim_time,
                "intercept",
                f"Intercept ({decision.action.kind}) at ({target.x:.2f}, {target.y:.2f})",
                decision,
            )
        elif decision.is_safe_mode:
            event = TickEvent(state.sim_time, "safe_mode", f"Safe mode: {decision.reason}", decision)
        else:
            event = TickEvent(state.sim_time, "idle", "Ball outside zone", decision)
        self._record(event)

        if self.on_decision is not None:
            self.on_decision(decision)
        return decision

    def _record(self, event: TickEvent) -> None:
        """Append ``event`` to the history and mirror it to the debugger.

        Parameters
        ----------
        event : TickEvent
            Event to store.
        """
        self.state.events.append(event)
        self.debugger.log_tick_event(event.timestamp, event.event_type, event.description)
