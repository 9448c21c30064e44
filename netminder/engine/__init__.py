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
"""Goalie engine: motion estimation, arrival times, path clearance and decisions."""
from __future__ import annotations

from .arrival import AgentState, time_to_reach
from .clearance import (
    AlwaysClear,
    ClearanceStrategy,
    CurvedPathClearance,
    StraightPathClearance,
    is_path_blocked,
)
from .config import ENGINE_CONFIG, EngineConfig
from .curves import BezierCurve
from .goalkeeper import Action, GoalkeeperDecisionEngine, Intercept, SafeMode, TickDecision
from .physics import InvalidTimeStep, MotionEstimator, Vector2D

__all__ = [
    "Action",
    "AgentState",
    "AlwaysClear",
    "BezierCurve",
    "ClearanceStrategy",
    "CurvedPathClearance",
    "ENGINE_CONFIG",
    "EngineConfig",
    "GoalkeeperDecisionEngine",
    "Intercept",
    "InvalidTimeStep",
    "MotionEstimator",
    "SafeMode",
    "StraightPathClearance",
    "TickDecision",
    "Vector2D",
    "is_path_blocked",
    "time_to_reach",
]
