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
"""Tests for arrival-time estimates."""

import math

import pytest

from netminder.engine.arrival import AgentState, time_to_reach
from netminder.engine.config import ENGINE_CONFIG
from netminder.engine.physics import Vector2D


def test_time_is_distance_over_speed() -> None:
    """Divide the straight-line distance by the agent's speed."""
    assert time_to_reach(Vector2D(0.0, 0.0), 2.0, Vector2D(3.0, 4.0)) == pytest.approx(2.5)


def test_zero_speed_is_clamped() -> None:
    """A stationary agent gets a huge but finite arrival time."""
    t = time_to_reach(Vector2D(0.0, 0.0), 0.0, Vector2D(1.0, 0.0))
    assert math.isfinite(t)
    assert t == pytest.approx(1.0 / ENGINE_CONFIG.arrival.speed_floor)


def test_negative_speed_is_clamped() -> None:
    """Negative speeds never yield negative times."""
    assert time_to_reach(Vector2D(0.0, 0.0), -5.0, Vector2D(1.0, 0.0)) > 0


def test_already_at_target() -> None:
    """Zero distance means zero time, even for a stationary agent."""
    assert time_to_reach(Vector2D(2.0, 2.0), 0.0, Vector2D(2.0, 2.0)) == 0.0


def test_custom_speed_floor() -> None:
    """An explicit floor overrides the configured one."""
    assert time_to_reach(Vector2D(0.0, 0.0), 0.0, Vector2D(1.0, 0.0), speed_floor=0.5) == pytest.approx(2.0)


def test_monotonic_in_distance() -> None:
    """Farther targets never take less time."""
    origin = Vector2D(0.0, 0.0)
    times = [time_to_reach(origin, 1.5, Vector2D(d, 0.0)) for d in (0.0, 0.5, 1.0, 4.0, 20.0)]
    assert times == sorted(times)


def test_monotonic_in_speed() -> None:
    """Faster agents never take more time."""
    origin = Vector2D(0.0, 0.0)
    target = Vector2D(6.0, 8.0)
    times = [time_to_reach(origin, s, target) for s in (0.0, 0.1, 1.0, 2.0, 50.0)]
    assert times == sorted(times, reverse=True)


class TestAgentState:
    """Tests for the AgentState container."""

    def test_nominal_speed(self) -> None:
        """Use the fixed speed when one is given."""
        goalie = AgentState(Vector2D(0.0, 0.0), speed=2.0)
        assert goalie.effective_speed == 2.0
        assert goalie.time_to_reach(Vector2D(2.0, 2.0)) == pytest.approx(math.sqrt(8.0) / 2.0)

    def test_velocity_magnitude(self) -> None:
        """Use the observed velocity magnitude when no speed is given."""
        opponent = AgentState(Vector2D(1.0, 5.0), velocity=Vector2D(0.3, -0.4))
        assert opponent.effective_speed == pytest.approx(0.5)

    def test_speed_wins_over_velocity(self) -> None:
        """A fixed speed takes precedence over an observed velocity."""
        agent = AgentState(Vector2D(0.0, 0.0), velocity=Vector2D(10.0, 0.0), speed=1.0)
        assert agent.effective_speed == 1.0

    def test_effective_speed_is_strictly_positive(self) -> None:
        """Stationary or speedless agents are clamped to the floor."""
        assert AgentState(Vector2D(0.0, 0.0), velocity=Vector2D(0.0, 0.0)).effective_speed > 0
        assert AgentState(Vector2D(0.0, 0.0)).effective_speed > 0
