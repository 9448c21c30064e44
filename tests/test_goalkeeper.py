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
"""Tests for the goalkeeper decision engine."""

import math
from pathlib import Path

import pytest

from netminder.engine.arrival import AgentState
from netminder.engine.clearance import AlwaysClear, CurvedPathClearance
from netminder.engine.config import DecisionConfig, EngineConfig
from netminder.engine.goalkeeper import GoalkeeperDecisionEngine, Intercept, SafeMode, TickDecision
from netminder.engine.physics import MotionEstimator, Vector2D
from netminder.utils.debug import DecisionDebugger

GOAL = Vector2D(0.0, -20.0)
TEAMMATE = Vector2D(-5.0, 10.0)


@pytest.fixture
def engine() -> GoalkeeperDecisionEngine:
    """Engine with the curved clearance check and default tuning."""
    return GoalkeeperDecisionEngine(EngineConfig(), clearance=CurvedPathClearance())


def _decide(engine: GoalkeeperDecisionEngine, opponent: Vector2D, velocity: Vector2D) -> TickDecision:
    """Run the standard scenario: goalie at the origin, forecast at (2, 2)."""
    return engine.decide(
        Vector2D(2.0, 2.0),
        Vector2D(0.0, 0.0),
        2.0,
        opponent,
        velocity,
        pass_target=TEAMMATE,
        shoot_target=GOAL,
    )


class TestDecide:
    """Race and clearance decisions for a single forecast."""

    def test_clear_path_shoots(self, engine: GoalkeeperDecisionEngine) -> None:
        """A distant slow opponent leaves the lane to goal open."""
        decision = _decide(engine, Vector2D(100.0, 100.0), Vector2D(0.1, 0.0))

        assert decision.is_intercepting
        assert decision.goalie_time == pytest.approx(math.sqrt(2.0))
        assert decision.goalie_time <= decision.enemy_time * 1.2
        assert decision.path_blocked is False
        assert decision.action == Intercept(GOAL, "shoot")
        assert decision.reason == "path clear"

    def test_blocked_path_redirects_to_teammate(self, engine: GoalkeeperDecisionEngine) -> None:
        """An opponent on the lane to goal sends the clearance to the teammate."""
        decision = _decide(engine, Vector2D(0.0, -10.0), Vector2D(0.1, 0.0))

        assert decision.is_intercepting
        assert decision.path_blocked is True
        assert decision.action == Intercept(TEAMMATE, "pass")
        assert decision.target == TEAMMATE

    def test_blocked_without_teammate_keeps_goal(self, engine: GoalkeeperDecisionEngine) -> None:
        """With no pass target the goalie still clears toward goal."""
        decision = engine.decide(
            Vector2D(2.0, 2.0),
            Vector2D(0.0, 0.0),
            2.0,
            Vector2D(0.0, -10.0),
            Vector2D(0.1, 0.0),
            shoot_target=GOAL,
        )
        assert decision.path_blocked is True
        assert decision.action == Intercept(GOAL, "shoot")

    def test_fast_opponent_triggers_safe_mode(self, engine: GoalkeeperDecisionEngine) -> None:
        """An opponent that arrives far sooner forces a retreat."""
        decision = _decide(engine, Vector2D(3.0, 3.0), Vector2D(50.0, 0.0))

        assert decision.is_safe_mode
        assert decision.goalie_time > decision.enemy_time * 1.2
        assert decision.action == SafeMode(Vector2D(0.0, 0.0))
        assert decision.path_blocked is None

    def test_tie_goes_to_interception(self) -> None:
        """Arrival times exactly at the threshold still intercept."""
        config = EngineConfig(decision=DecisionConfig(intercept_threshold=1.5))
        engine = GoalkeeperDecisionEngine(config)
        forecast = Vector2D(6.0, 0.0)

        tie = engine.decide(forecast, Vector2D(0.0, 0.0), 1.0, Vector2D(10.0, 0.0), Vector2D(1.0, 0.0))
        assert tie.goalie_time == tie.enemy_time * 1.5
        assert tie.is_intercepting

        lose = engine.decide(forecast, Vector2D(0.0, 0.0), 1.0, Vector2D(9.9, 0.0), Vector2D(1.0, 0.0))
        assert lose.is_safe_mode

    def test_explicit_threshold_overrides_config(self, engine: GoalkeeperDecisionEngine) -> None:
        """A per-call threshold replaces the configured slack."""
        forecast = Vector2D(6.0, 0.0)
        args = (forecast, Vector2D(0.0, 0.0), 1.0, Vector2D(10.0, 0.0), Vector2D(1.0, 0.0))
        assert engine.decide(*args).is_safe_mode
        assert engine.decide(*args, intercept_threshold=1.5).is_intercepting

    def test_rendezvous_without_shoot_target(self) -> None:
        """With no shoot target the goalie meets the ball at its forecast."""
        engine = GoalkeeperDecisionEngine(EngineConfig())
        decision = engine.decide(
            Vector2D(2.0, 2.0), Vector2D(0.0, 0.0), 2.0, Vector2D(100.0, 100.0), Vector2D(0.1, 0.0)
        )
        assert decision.action == Intercept(Vector2D(2.0, 2.0), "rendezvous")
        assert decision.path_blocked is False

    def test_movement_vector(self, engine: GoalkeeperDecisionEngine) -> None:
        """The movement vector covers the distance to the target within the tick."""
        decision = engine.decide(
            Vector2D(2.0, 2.0),
            Vector2D(0.0, 0.0),
            2.0,
            Vector2D(100.0, 100.0),
            Vector2D(0.1, 0.0),
            shoot_target=GOAL,
            delta_time=0.5,
        )
        assert decision.movement_vector == Vector2D(0.0, -40.0)

    @pytest.mark.parametrize(
        "forecast, opponent_velocity, speed",
        [
            (Vector2D(math.nan, 2.0), Vector2D(0.1, 0.0), 2.0),
            (Vector2D(2.0, 2.0), Vector2D(math.inf, 0.0), 2.0),
            (Vector2D(2.0, 2.0), Vector2D(0.1, 0.0), math.nan),
        ],
    )
    def test_non_finite_inputs_fall_back_to_safe_mode(
        self,
        engine: GoalkeeperDecisionEngine,
        forecast: Vector2D,
        opponent_velocity: Vector2D,
        speed: float,
    ) -> None:
        """Non-finite values never produce an interception."""
        decision = engine.decide(forecast, Vector2D(0.0, 0.0), speed, Vector2D(3.0, 3.0), opponent_velocity)
        assert decision.is_safe_mode
        assert decision.reason == "non-finite input"

    def test_default_engine_redirects_blocked_clearance(self) -> None:
        """A default-constructed engine checks the curved lane and passes to the teammate."""
        engine = GoalkeeperDecisionEngine()
        assert isinstance(engine.clearance, CurvedPathClearance)

        decision = _decide(engine, Vector2D(0.0, -10.0), Vector2D(0.1, 0.0))

        assert decision.path_blocked is True
        assert decision.action == Intercept(TEAMMATE, "pass")

    def test_always_clear_is_opt_in(self) -> None:
        """Injecting the trivial check skips the redirect."""
        engine = GoalkeeperDecisionEngine(clearance=AlwaysClear())
        decision = _decide(engine, Vector2D(0.0, -10.0), Vector2D(0.1, 0.0))
        assert decision.path_blocked is False
        assert decision.action == Intercept(GOAL, "shoot")

    def test_overflowing_arrival_time_falls_back_to_safe_mode(self, engine: GoalkeeperDecisionEngine) -> None:
        """Finite inputs whose distances overflow are treated like non-finite input."""
        decision = engine.decide(
            Vector2D(-1e308, 0.0), Vector2D(1e308, 0.0), 2.0, Vector2D(0.0, 0.0), Vector2D(0.1, 0.0)
        )
        assert math.isinf(decision.goalie_time)
        assert decision.is_safe_mode
        assert decision.reason == "non-finite input"

    def test_path_origin_is_pre_move_position(self, engine: GoalkeeperDecisionEngine) -> None:
        """The decision records where the checked lane starts."""
        own = Vector2D(1.0, -1.0)
        decision = engine.decide(
            Vector2D(2.0, 2.0), own, 2.0, Vector2D(100.0, 100.0), Vector2D(0.1, 0.0), shoot_target=GOAL
        )
        assert decision.path_origin == own

    def test_decide_does_not_move_goalie(self, engine: GoalkeeperDecisionEngine) -> None:
        """Deciding alone leaves the goalie where it is."""
        _decide(engine, Vector2D(100.0, 100.0), Vector2D(0.1, 0.0))
        assert engine.position == Vector2D(0.0, 0.0)


class TestZoneGate:
    """Zone of relevance checks."""

    @pytest.mark.parametrize(
        "position, inside",
        [
            (Vector2D(0.0, 0.0), True),
            (Vector2D(10.0, 20.0), True),
            (Vector2D(-10.0, -20.0), True),
            (Vector2D(10.01, 0.0), False),
            (Vector2D(0.0, -20.5), False),
            (Vector2D(15.0, 0.0), False),
        ],
    )
    def test_in_zone(self, engine: GoalkeeperDecisionEngine, position: Vector2D, inside: bool) -> None:
        """Bounds are inclusive on every edge."""
        assert engine.in_zone(position) is inside


class TestStep:
    """Full ticks through the engine, including position updates."""

    def test_ball_outside_zone_is_noop(self, engine: GoalkeeperDecisionEngine) -> None:
        """A ball outside the zone leaves the goalie where it is."""
        engine.position = Vector2D(3.0, -4.0)
        ball = MotionEstimator(Vector2D(15.0, 0.0))
        opponent = AgentState(Vector2D(15.5, 0.0), velocity=Vector2D(50.0, 0.0))

        decision = engine.step(ball, opponent, 0.1, pass_target=TEAMMATE, shoot_target=GOAL)

        assert decision.is_idle
        assert decision.action is None
        assert decision.forecast is None
        assert engine.position == Vector2D(3.0, -4.0)
        assert engine.last_decision is decision

    def test_intercept_moves_goalie_to_target(self, engine: GoalkeeperDecisionEngine) -> None:
        """An interception relocates the goalie to the clearance target."""
        ball = MotionEstimator(Vector2D(2.0, 2.0))
        opponent = AgentState(Vector2D(100.0, 100.0), velocity=Vector2D(0.1, 0.0))

        decision = engine.step(ball, opponent, 0.1, pass_target=TEAMMATE, shoot_target=GOAL)

        assert decision.is_intercepting
        assert decision.ball_position == Vector2D(2.0, 2.0)
        assert decision.forecast == Vector2D(2.0, 2.0)
        assert engine.position == GOAL

    def test_safe_mode_resets_to_home(self, engine: GoalkeeperDecisionEngine) -> None:
        """Safe mode returns the goalie to the default position."""
        engine.position = Vector2D(1.0, 1.0)
        ball = MotionEstimator(Vector2D(2.0, 2.0))
        opponent = AgentState(Vector2D(3.0, 3.0), speed=50.0)

        decision = engine.step(ball, opponent, 0.1, pass_target=TEAMMATE, shoot_target=GOAL)

        assert decision.is_safe_mode
        assert engine.position == Vector2D(0.0, 0.0)

    def test_corrupted_ball_state_falls_back_to_safe_mode(self, engine: GoalkeeperDecisionEngine) -> None:
        """A NaN ball position is never treated as outside the zone or intercepted."""
        engine.position = Vector2D(1.0, 1.0)
        ball = MotionEstimator(Vector2D(math.nan, 0.0))
        opponent = AgentState(Vector2D(100.0, 100.0), velocity=Vector2D(0.1, 0.0))

        decision = engine.step(ball, opponent, 0.1, pass_target=TEAMMATE, shoot_target=GOAL)

        assert decision.is_safe_mode
        assert engine.position == Vector2D(0.0, 0.0)

    def test_custom_home_position(self) -> None:
        """Safe mode uses the configured default position."""
        config = EngineConfig(decision=DecisionConfig(default_position=(0.0, -18.0)))
        engine = GoalkeeperDecisionEngine(config)
        assert engine.position == Vector2D(0.0, -18.0)

        ball = MotionEstimator(Vector2D(2.0, 2.0))
        engine.position = Vector2D(5.0, 5.0)
        engine.step(ball, AgentState(Vector2D(2.5, 2.5), speed=50.0), 0.1)
        assert engine.position == Vector2D(0.0, -18.0)

    def test_apply_none_is_noop(self, engine: GoalkeeperDecisionEngine) -> None:
        """Applying no action keeps the goalie in place."""
        engine.position = Vector2D(2.0, 2.0)
        engine.apply(None)
        assert engine.position == Vector2D(2.0, 2.0)

    def test_opponent_speed_matches_agent_arrival_time(self, engine: GoalkeeperDecisionEngine) -> None:
        """A fixed opponent speed is clamped the same way the agent clamps it."""
        ball = MotionEstimator(Vector2D(2.0, 2.0))
        opponent = AgentState(Vector2D(3.0, 3.0), speed=-50.0)

        decision = engine.step(ball, opponent, 0.1, pass_target=TEAMMATE, shoot_target=GOAL)

        assert decision.enemy_time == pytest.approx(opponent.time_to_reach(Vector2D(2.0, 2.0)))
        assert decision.is_intercepting

    def test_step_logs_decisions_to_debugger(self, tmp_path: Path) -> None:
        """Every tick, idle or not, is written to the attached debugger."""
        debugger = DecisionDebugger(tmp_path)
        engine = GoalkeeperDecisionEngine(EngineConfig(), debugger=debugger)
        opponent = AgentState(Vector2D(100.0, 100.0), velocity=Vector2D(0.1, 0.0))

        engine.step(MotionEstimator(Vector2D(2.0, 2.0)), opponent, 0.1, shoot_target=GOAL)
        engine.step(MotionEstimator(Vector2D(15.0, 0.0)), opponent, 0.1)
        debugger.close()

        decisions = [line for line in debugger.get_recent_events() if "DECISION:" in line]
        assert len(decisions) == 2
        assert "Time: 0.10s | State: intercepting" in decisions[0]
        assert "Target: (0.00, -20.00)" in decisions[0]
        assert "Time: 0.20s | State: idle" in decisions[1]
