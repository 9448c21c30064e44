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
"""Bézier paths between the goalie and a clearing target.

Curves are value objects: the control points are fixed at construction and a
new curve is built whenever the decision engine considers a different path.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Tuple

from .physics import Vector2D


@dataclass(frozen=True)
class BezierCurve:
    """Parametric Bézier curve defined by an ordered tuple of control points.

    Parameters
    ----------
    control_points : Tuple[Vector2D, ...]
        At least two control points; the first and last are the endpoints.
    """

    control_points: Tuple[Vector2D, ...]

    def __post_init__(self) -> None:
        if len(self.control_points) < 2:
            raise ValueError("A Bézier curve needs at least two control points")

    @classmethod
    def cubic(cls, start: Vector2D, end: Vector2D) -> "BezierCurve":
        """Build the flattened cubic between ``start`` and ``end``.

        The inner control points sit one third and two thirds along the
        straight segment, so the curve traces that segment until perturbed.

        Parameters
        ----------
        start : Vector2D
            First control point.
        end : Vector2D
            Last control point.

        Returns
        -------
        BezierCurve
            Four-point curve.
        """
        third = (end - start) / 3.0
        return cls((start, start + third, end - third, end))

    @classmethod
    def linear(cls, start: Vector2D, end: Vector2D) -> "BezierCurve":
        """Build the two-point straight path between ``start`` and ``end``.

        Parameters
        ----------
        start : Vector2D
            First control point.
        end : Vector2D
            Last control point.

        Returns
        -------
        BezierCurve
            Degree-one curve.
        """
        return cls((start, end))

    @property
    def degree(self) -> int:
        """Return the polynomial degree of the curve."""
        return len(self.control_points) - 1

    @property
    def start(self) -> Vector2D:
        """Return the first control point."""
        return self.control_points[0]

    @property
    def end(self) -> Vector2D:
        """Return the last control point."""
        return self.control_points[-1]

    def evaluate(self, t: float) -> Vector2D:
        """Return the point on the curve at parameter ``t``.

        Values outside ``[0, 1]`` extrapolate the polynomial and are not clamped.

        Parameters
        ----------
        t : float
            Curve parameter.

        Returns
        -------
        Vector2D
            Blended position.
        """
        u = 1.0 - t
        if self.degree == 3:
            c0, c1, c2, c3 = self.control_points
            return c0 * u**3 + c1 * (3 * u**2 * t) + c2 * (3 * u * t**2) + c3 * t**3

        n = self.degree
        x = y = 0.0
        for i, point in enumerate(self.control_points):
            weight = math.comb(n, i) * u ** (n - i) * t**i
            x += weight * point.x
            y += weight * point.y
        return Vector2D(x, y)

    def delta_vector(self, t: float) -> Vector2D:
        """Return the displacement from the curve start to the point at ``t``.

        Parameters
        ----------
        t : float
            Curve parameter.

        Returns
        -------
        Vector2D
            ``evaluate(t) - evaluate(0)``.
        """
        return self.evaluate(t) - self.evaluate(0.0)

    def sample(self, count: int) -> List[Vector2D]:
        """Return ``count`` points at equally spaced parameters over ``[0, 1]``.

        Parameters
        ----------
        count : int
            Number of samples; must be at least two.

        Returns
        -------
        List[Vector2D]
            Points ordered from start to end.
        """
        if count < 2:
            raise ValueError(f"Need at least two samples, got {count}")
        step = count - 1
        return [self.evaluate(i / step) for i in range(count)]
