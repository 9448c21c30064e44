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
"""Central configuration for goalie tuning parameters."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple


@dataclass(slots=True)
class MotionConfig:
    """Settings for the ball motion estimator.

    Parameters
    ----------
    error_correction_factor : float, default=0.1
        Fraction of the extrapolated displacement added on top of the raw
        Taylor forecast to compensate for systematic undershoot.
    """

    error_correction_factor: float = 0.1


@dataclass(slots=True)
class ArrivalConfig:
    """Speeds used when estimating time-to-reach.

    Parameters
    ----------
    goalie_speed : float, default=2.0
        Nominal goalie speed in distance units per second.
    speed_floor : float, default=1e-6
        Smallest speed ever used as a divisor.
    """

    goalie_speed: float = 2.0
    speed_floor: float = 1e-6


@dataclass(slots=True)
class ClearanceConfig:
    """Sampling parameters for the path obstruction test.

    Parameters
    ----------
    clearance_radius : float, default=1.0
        Distance below which a sampled path point counts as blocked.
    sample_count : int, default=11
        Number of equally spaced samples across the curve parameter domain.
    """

    clearance_radius: float = 1.0
    sample_count: int = 11


@dataclass(slots=True)
class ZoneConfig:
    """Rectangular zone of relevance centred on the origin.

    Parameters
    ----------
    half_width : float, default=10.0
        Maximum absolute x coordinate for the ball to be considered.
    half_height : float, default=20.0
        Maximum absolute y coordinate for the ball to be considered.
    """

    half_width: float = 10.0
    half_height: float = 20.0


@dataclass(slots=True)
class DecisionConfig:
    """Thresholds for the intercept-or-retreat decision.

    Parameters
    ----------
    intercept_threshold : float, default=1.2
        Slack factor; the goalie intercepts when its arrival time is at most
        this multiple of the opponent's.
    default_position : Tuple[float, float], default=(0.0, 0.0)
        Home position the goalie returns to in safe mode.
    """

    intercept_threshold: float = 1.2
    default_position: Tuple[float, float] = (0.0, 0.0)


@dataclass(slots=True)
class SimulationConfig:
    """Timing controls for the fixed-interval driver loop.

    Parameters
    ----------
    tick_interval : float, default=0.1
        Sleep between ticks in seconds when running in real time.
    max_ticks : int, default=0
        Number of ticks to run before stopping; ``0`` runs until stopped.
    """

    tick_interval: float = 0.1
    max_ticks: int = 0


@dataclass(slots=True)
class ScenarioConfig:
    """Initial placement of the ball, agents and targets.

    Parameters
    ----------
    goalie_start : Tuple[float, float], default=(0.0, 0.0)
        Starting goalie position.
    ball_start : Tuple[float, float], default=(0.0, 6.0)
        Starting ball position.
    ball_step : Tuple[float, float], default=(0.1, -0.2)
        Displacement applied to the ball on every driver tick.
    opponent_position : Tuple[float, float], default=(1.0, 5.0)
        Opponent position.
    opponent_velocity : Tuple[float, float], default=(0.2, -0.1)
        Opponent velocity vector.
    pass_target : Tuple[float, float], default=(-5.0, 10.0)
        Teammate position used when the shooting lane is blocked.
    shoot_target : Tuple[float, float], default=(0.0, -20.0)
        Goal position the goalie clears toward when the lane is open.
    """

    goalie_start: Tuple[float, float] = (0.0, 0.0)
    ball_start: Tuple[float, float] = (0.0, 6.0)
    ball_step: Tuple[float, float] = (0.1, -0.2)
    opponent_position: Tuple[float, float] = (1.0, 5.0)
    opponent_velocity: Tuple[float, float] = (0.2, -0.1)
    pass_target: Tuple[float, float] = (-5.0, 10.0)
    shoot_target: Tuple[float, float] = (0.0, -20.0)


@dataclass(slots=True)
class EngineConfig:
    """Top-level container for all tuning structures.

    Parameters
    ----------
    motion : MotionConfig, default=MotionConfig()
        Motion estimator settings.
    arrival : ArrivalConfig, default=ArrivalConfig()
        Arrival-time speeds.
    clearance : ClearanceConfig, default=ClearanceConfig()
        Path obstruction sampling.
    zone : ZoneConfig, default=ZoneConfig()
        Zone of relevance bounds.
    decision : DecisionConfig, default=DecisionConfig()
        Decision thresholds.
    simulation : SimulationConfig, default=SimulationConfig()
        Driver loop timing.
    scenario : ScenarioConfig, default=ScenarioConfig()
        Initial scene layout.
    """

    motion: MotionConfig = field(default_factory=MotionConfig)
    arrival: ArrivalConfig = field(default_factory=ArrivalConfig)
    clearance: ClearanceConfig = field(default_factory=ClearanceConfig)
    zone: ZoneConfig = field(default_factory=ZoneConfig)
    decision: DecisionConfig = field(default_factory=DecisionConfig)
    simulation: SimulationConfig = field(default_factory=SimulationConfig)
    scenario: ScenarioConfig = field(default_factory=ScenarioConfig)


ENGINE_CONFIG = EngineConfig()
"""Singleton-style access to the default engine configuration."""
