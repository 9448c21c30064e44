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
"""Path obstruction checks used to choose between shooting and passing.

The check is a discrete approximation: the path is sampled at a fixed number
of parameters and a sample closer than the clearance radius to an obstacle
marks the path as blocked. A thin obstacle falling between two samples can be
missed; raise ``sample_count`` to tighten the check.
"""
from __future__ import annotations

from typing import Iterable, Optional

from .config import ENGINE_CONFIG
from .curves import BezierCurve
from .physics import Vector2D


def is_path_blocked(
    path: BezierCurve,
    obstacle: Vector2D,
    clearance_radius: Optional[float] = None,
    sample_count: Optional[int] = None,
) -> bool:
    """Return ``True`` when any sampled point of ``path`` is too close to ``obstacle``.

    Parameters
    ----------
    path : BezierCurve
        Candidate path.
    obstacle : Vector2D
        Obstacle position.
    clearance_radius : float | None, optional
        Blocking distance; defaults to configuration.
    sample_count : int | None, optional
        Number of samples across ``[0, 1]``; defaults to configuration.

    Returns
    -------
    bool
        Whether the path is obstructed.
    """
    cfg = ENGINE_CONFIG.clearance
    if clearance_radius is None:
        clearance_radius = cfg.clearance_radius
    if sample_count is None:
        sample_count = cfg.sample_count
    return any(point.distance_to(obstacle) < clearance_radius for point in path.sample(sample_count))


class ClearanceStrategy:
    """Base class for the pluggable path check used by the decision engine.

    Parameters
    ----------
    clearance_radius : float | None, optional
        Blocking distance; defaults to configuration.
    sample_count : int | None, optional
        Samples per path; defaults to configuration.
    """

    def __init__(self, clearance_radius: Optional[float] = None, sample_count: Optional[int] = None) -> None:
        """Store sampling parameters, falling back to configuration.

        Parameters
        ----------
        clearance_radius : float | None, optional
            Blocking distance; defaults to configuration.
        sample_count : int | None, optional
            Samples per path; defaults to configuration.
        """
        cfg = ENGINE_CONFIG.clearance
        self.clearance_radius = cfg.clearance_radius if clearance_radius is None else clearance_radius
        self.sample_count = cfg.sample_count if sample_count is None else sample_count

    def build_path(self, start: Vector2D, end: Vector2D) -> Optional[BezierCurve]:
        """Return the path this strategy checks between ``start`` and ``end``.

        Parameters
        ----------
        start : Vector2D
            Path origin.
        end : Vector2D
            Path destination.

        Returns
        -------
        BezierCurve | None
            The candidate path, or ``None`` when no path is checked.
        """
        raise NotImplementedError

    def is_blocked(self, start: Vector2D, end: Vector2D, obstacles: Iterable[Vector2D]) -> bool:
        """Return ``True`` when any obstacle blocks the path from ``start`` to ``end``.

        Parameters
        ----------
        start : Vector2D
            Path origin.
        end : Vector2D
            Path destination.
        obstacles : Iterable[Vector2D]
            Obstacle positions.

        Returns
        -------
        bool
            Whether the path is obstructed.
        """
        path = self.build_path(start, end)
        if path is None:
            return False
        return any(
            is_path_blocked(path, obstacle, self.clearance_radius, self.sample_count) for obstacle in obstacles
        )


class CurvedPathClearance(ClearanceStrategy):
    """Check the flattened cubic Bézier path.

    Parameters
    ----------
    clearance_radius : float | None, optional
        Blocking distance; defaults to configuration.
    sample_count : int | None, optional
        Samples per path; defaults to configuration.
    """

    def build_path(self, start: Vector2D, end: Vector2D) -> BezierCurve:
        """Return the cubic path between ``start`` and ``end``.

        Parameters
        ----------
        start : Vector2D
            Path origin.
        end : Vector2D
            Path destination.

        Returns
        -------
        BezierCurve
            Four-point curve.
        """
        return BezierCurve.cubic(start, end)


class StraightPathClearance(ClearanceStrategy):
    """Check the two-point straight path.

    Parameters
    ----------
    clearance_radius : float | None, optional
        Blocking distance; defaults to configuration.
    sample_count : int | None, optional
        Samples per path; defaults to configuration.
    """

    def build_path(self, start: Vector2D, end: Vector2D) -> BezierCurve:
        """Return the straight path between ``start`` and ``end``.

        Parameters
        ----------
        start : Vector2D
            Path origin.
        end : Vector2D
            Path destination.

        Returns
        -------
        BezierCurve
            Two-point curve.
        """
        return BezierCurve.linear(start, end)


class AlwaysClear(ClearanceStrategy):
    """Trivial strategy that never reports an obstruction.

    Parameters
    ----------
    clearance_radius : float | None, optional
        Unused; accepted for interface compatibility.
    sample_count : int | None, optional
        Unused; accepted for interface compatibility.
    """

    def build_path(self, start: Vector2D, end: Vector2D) -> None:
        """Return ``None``; nothing is checked.

        Parameters
        ----------
        start : Vector2D
            Path origin.
        end : Vector2D
            Path destination.
        """
        return None
