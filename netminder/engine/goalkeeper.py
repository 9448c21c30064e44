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
"""Goalkeeper decision engine: race the opponent to the ball or retreat.

Every tick is evaluated from scratch. The ball must be inside the zone of
relevance; the goalie then compares its own arrival time at the forecast ball
position with the opponent's. When it can win the race (allowing for the
configured slack) it intercepts and clears toward the goal, or toward a
teammate when the opponent blocks the lane. Otherwise it falls back to its
home position.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, Optional, Union

from .arrival import time_to_reach
from .clearance import ClearanceStrategy, CurvedPathClearance
from .config import ENGINE_CONFIG, EngineConfig
from .physics import Vector2D

if TYPE_CHECKING:
    from netminder.utils.debug import DecisionDebugger

    from .arrival import AgentState
    from .physics import MotionEstimator


@dataclass(frozen=True)
class Intercept:
    """Move to ``target`` and play the ball there.

    Parameters
    ----------
    target : Vector2D
        Point the goalie relocates to.
    kind : Literal["shoot", "pass", "rendezvous"], optional
        Why this target was chosen: the open lane to goal, the teammate after
        a blocked lane, or the forecast ball position itself.
    """

    target: Vector2D
    kind: Literal["shoot", "pass", "rendezvous"] = "shoot"


@dataclass(frozen=True)
class SafeMode:
    """Retreat to the home position.

    Parameters
    ----------
    home : Vector2D
        Default position the goalie resets to.
    """

    home: Vector2D


Action = Union[Intercept, SafeMode]


@dataclass(slots=True)
class TickDecision:
    """Structured outcome of one goalie tick, including intermediate values.

    Parameters
    ----------
    state : Literal["idle", "intercepting", "safe_mode"]
        Terminal state reached this tick.
    action : Intercept | SafeMode | None, optional
        Chosen action; ``None`` while idle.
    ball_position : Vector2D | None, optional
        Current (not forecast) ball position used for the zone gate.
    forecast : Vector2D | None, optional
        Forecast ball position the agents race to.
    goalie_time : float | None, optional
        Goalie arrival time at the forecast.
    enemy_time : float | None, optional
        Opponent arrival time at the forecast.
    path_blocked : bool | None, optional
        Clearance verdict for the primary target, when checked.
    movement_vector : Vector2D | None, optional
        Average velocity needed to reach the target within the tick.
    path_origin : Vector2D | None, optional
        Goalie position the clearance path was checked from.
    reason : str, optional
        Short human-readable explanation.
    """

    state: Literal["idle", "intercepting", "safe_mode"]
    action: Optional[Action] = None
    ball_position: Optional[Vector2D] = None
    forecast: Optional[Vector2D] = None
    goalie_time: Optional[float] = None
    enemy_time: Optional[float] = None
    path_blocked: Optional[bool] = None
    movement_vector: Optional[Vector2D] = None
    path_origin: Optional[Vector2D] = None
    reason: str = ""

    @property
    def is_idle(self) -> bool:
        """Return ``True`` when the ball was outside the zone and nothing happened."""
        return self.state == "idle"

    @property
    def is_intercepting(self) -> bool:
        """Return ``True`` when the goalie chose to intercept."""
        return self.state == "intercepting"

    @property
    def is_safe_mode(self) -> bool:
        """Return ``True`` when the goalie retreated."""
        return self.state == "safe_mode"

    @property
    def target(self) -> Optional[Vector2D]:
        """Return the position the action moves the goalie to, if any."""
        if isinstance(self.action, Intercept):
            return self.action.target
        if isinstance(self.action, SafeMode):
            return self.action.home
        return None


class GoalkeeperDecisionEngine:
    """Goalie AI that owns the goalie position and picks one action per tick.

    Parameters
    ----------
    config : EngineConfig | None, optional
        Tuning parameters; defaults to the shared engine configuration.
    clearance : ClearanceStrategy | None, optional
        Path check used to redirect blocked clearances. Defaults to
        :class:`CurvedPathClearance` with the configured radius and sample
        count; pass :class:`AlwaysClear` for the rendezvous variant.
    position : Vector2D | None, optional
        Starting goalie position; defaults to the configured home position.
    debugger : DecisionDebugger | None, optional
        Telemetry sink that receives every decision made by :meth:`step`.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        clearance: Optional[ClearanceStrategy] = None,
        position: Optional[Vector2D] = None,
        debugger: Optional["DecisionDebugger"] = None,
    ) -> None:
        """Instantiate the engine and cache the home position.

        Parameters
        ----------
        config : EngineConfig | None, optional
            Tuning parameters; defaults to the shared engine configuration.
        clearance : ClearanceStrategy | None, optional
            Path check used to redirect blocked clearances.
        position : Vector2D | None, optional
            Starting goalie position.
        debugger : DecisionDebugger | None, optional
            Telemetry sink for decisions.
        """
        self.config = config if config is not None else ENGINE_CONFIG
        if clearance is None:
            clearance = CurvedPathClearance(
                self.config.clearance.clearance_radius, self.config.clearance.sample_count
            )
        self.clearance = clearance
        self.home = Vector2D.from_tuple(self.config.decision.default_position)
        self.position = position if position is not None else Vector2D(self.home.x, self.home.y)
        self.last_decision: Optional[TickDecision] = None
        self.debugger = debugger
        self.elapsed_time = 0.0

    def in_zone(self, ball_position: Vector2D) -> bool:
        """Check whether ``ball_position`` lies inside the zone of relevance.

        Parameters
        ----------
        ball_position : Vector2D
            Current ball position.

        Returns
        -------
        bool
            ``True`` when both coordinates are within the configured bounds.
        """
        zone = self.config.zone
        return abs(ball_position.x) <= zone.half_width and abs(ball_position.y) <= zone.half_height

    def decide(
        self,
        ball_forecast: Vector2D,
        own_position: Vector2D,
        own_speed: float,
        opponent_position: Vector2D,
        opponent_velocity: Vector2D,
        pass_target: Optional[Vector2D] = None,
        shoot_target: Optional[Vector2D] = None,
        intercept_threshold: Optional[float] = None,
        delta_time: Optional[float] = None,
    ) -> TickDecision:
        """Choose between intercepting and safe mode for a forecast ball position.

        This does not touch the engine's own position; call :meth:`apply` with
        the returned action to carry it out.

        Parameters
        ----------
        ball_forecast : Vector2D
            Forecast ball position both agents race to.
        own_position : Vector2D
            Goalie position.
        own_speed : float
            Goalie nominal speed.
        opponent_position : Vector2D
            Opponent position.
        opponent_velocity : Vector2D
            Opponent velocity; its magnitude is used as the opponent's speed.
        pass_target : Vector2D | None, optional
            Secondary target used when the primary lane is blocked.
        shoot_target : Vector2D | None, optional
            Primary target; when omitted the goalie meets the ball at the forecast.
        intercept_threshold : float | None, optional
            Slack factor; defaults to configuration.
        delta_time : float | None, optional
            Tick length used to report the movement vector.

        Returns
        -------
        TickDecision
            Outcome with forecast, both arrival times and the clearance verdict.
        """
        if intercept_threshold is None:
            intercept_threshold = self.config.decision.intercept_threshold
        home = SafeMode(Vector2D(self.home.x, self.home.y))

        inputs_finite = (
            ball_forecast.is_finite()
            and own_position.is_finite()
            and opponent_position.is_finite()
            and opponent_velocity.is_finite()
            and math.isfinite(own_speed)
        )
        if not inputs_finite:
            return TickDecision("safe_mode", home, forecast=ball_forecast, reason="non-finite input")

        floor = self.config.arrival.speed_floor
        goalie_time = time_to_reach(own_position, own_speed, ball_forecast, floor)
        enemy_time = time_to_reach(opponent_position, opponent_velocity.magnitude(), ball_forecast, floor)

        decision = TickDecision(
            "safe_mode",
            home,
            forecast=ball_forecast,
            goalie_time=goalie_time,
            enemy_time=enemy_time,
        )
        if not (math.isfinite(goalie_time) and math.isfinite(enemy_time)):
            decision.reason = "non-finite input"
            return decision

        if goalie_time > enemy_time * intercept_threshold:
            decision.reason = "opponent reaches the ball first"
            return decision

        if shoot_target is None:
            primary, kind = ball_forecast, "rendezvous"
        else:
            primary, kind = shoot_target, "shoot"

        blocked = self.clearance.is_blocked(own_position, primary, [opponent_position])
        if blocked and pass_target is not None:
            target, kind, reason = pass_target, "pass", "path blocked, passing to teammate"
        elif blocked:
            target, reason = primary, "path blocked, no teammate to pass to"
        else:
            target, reason = primary, "path clear"

        decision.state = "intercepting"
        decision.action = Intercept(target, kind)
        decision.path_blocked = blocked
        decision.path_origin = own_position
        decision.reason = reason
        if delta_time is not None and delta_time > 0:
            decision.movement_vector = (target - own_position) / delta_time
        return decision

    def apply(self, action: Optional[Action]) -> None:
        """Carry out ``action`` by relocating the goalie.

        Interception teleports straight to the target; there is no model of the
        goalie's own movement between ticks.

        Parameters
        ----------
        action : Intercept | SafeMode | None
            Action to apply; ``None`` leaves the position unchanged.
        """
        if isinstance(action, Intercept):
            self.position = action.target
        elif isinstance(action, SafeMode):
            self.position = action.home

    def step(
        self,
        ball: "MotionEstimator",
        opponent: "AgentState",
        delta_time: float,
        pass_target: Optional[Vector2D] = None,
        shoot_target: Optional[Vector2D] = None,
    ) -> TickDecision:
        """Run one complete tick: zone gate, forecast, decision and application.

        The decision is written to the attached debugger, if any, stamped with
        the engine's accumulated tick time.

        Parameters
        ----------
        ball : MotionEstimator
            Tracked ball; only read.
        opponent : AgentState
            Opponent position and velocity.
        delta_time : float
            Forecast horizon, normally the elapsed time since the last tick.
        pass_target : Vector2D | None, optional
            Teammate position.
        shoot_target : Vector2D | None, optional
            Goal position.

        Returns
        -------
        TickDecision
            Outcome of the tick; also stored as :attr:`last_decision`.
        """
        self.elapsed_time += delta_time
        if ball.position.is_finite() and not self.in_zone(ball.position):
            return self._finish(TickDecision("idle", ball_position=ball.position, reason="ball outside zone"))

        forecast = ball.predict(delta_time)
        velocity = opponent.velocity
        if opponent.speed is not None or velocity is None:
            velocity = Vector2D(opponent.effective_speed, 0.0)

        decision = self.decide(
            forecast,
            self.position,
            self.config.arrival.goalie_speed,
            opponent.position,
            velocity,
            pass_target=pass_target,
            shoot_target=shoot_target,
            delta_time=delta_time,
        )
        decision.ball_position = ball.position
        self.apply(decision.action)
        return self._finish(decision)

    def _finish(self, decision: TickDecision) -> TickDecision:
        """Store ``decision`` as the latest outcome and hand it to the debugger.

        Parameters
        ----------
        decision : TickDecision
            Outcome of the current tick.

        Returns
        -------
        TickDecision
            The same decision, for chaining.
        """
        self.last_decision = decision
        if self.debugger is not None:
            self.debugger.log_decision(self.elapsed_time, decision)
        return decision
