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
"""Arrival-time estimates for agents racing to a point."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .config import ENGINE_CONFIG
from .physics import Vector2D


def time_to_reach(
    agent_position: Vector2D,
    agent_speed: float,
    target: Vector2D,
    speed_floor: Optional[float] = None,
) -> float:
    """Return the straight-line travel time from ``agent_position`` to ``target``.

    Parameters
    ----------
    agent_position : Vector2D
        Current agent location.
    agent_speed : float
        Agent speed; values at or below ``speed_floor`` are clamped to it.
    target : Vector2D
        Destination point.
    speed_floor : float | None, optional
        Minimum divisor; defaults to configuration.

    Returns
    -------
    float
        Non-negative time in seconds.
    """
    if speed_floor is None:
        speed_floor = ENGINE_CONFIG.arrival.speed_floor
    return agent_position.distance_to(target) / max(agent_speed, speed_floor)


@dataclass
class AgentState:
    """Position and motion of a goalie or opponent.

    Either ``speed`` (a fixed nominal speed) or ``velocity`` (an observed
    vector) describes how fast the agent moves; ``speed`` wins when both are
    given.

    Parameters
    ----------
    position : Vector2D
        Current position.
    velocity : Vector2D | None, optional
        Observed velocity vector.
    speed : float | None, optional
        Fixed nominal speed.
    """

    position: Vector2D
    velocity: Optional[Vector2D] = None
    speed: Optional[float] = None

    @property
    def effective_speed(self) -> float:
        """Return the agent's speed clamped to the configured positive floor."""
        floor = ENGINE_CONFIG.arrival.speed_floor
        if self.speed is not None:
            return max(self.speed, floor)
        if self.velocity is not None:
            return max(self.velocity.magnitude(), floor)
        return floor

    def time_to_reach(self, target: Vector2D) -> float:
        """Return the time this agent needs to reach ``target``.

        Parameters
        ----------
        target : Vector2D
            Destination point.

        Returns
        -------
        float
            Non-negative time in seconds.
        """
        return time_to_reach(self.position, self.effective_speed, target)
