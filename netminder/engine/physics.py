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
"""Low-level physics primitives used by the goalie engine.

The physics layer provides a small vector maths helper and the motion
estimator that turns successive ball observations into a local kinematic model.
Velocity, acceleration and jerk are derived by finite differences rather than
observed, so the estimator is the only place that needs to worry about the
sampling interval.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from .config import ENGINE_CONFIG


class InvalidTimeStep(ValueError):
    """Raised when a motion update is given a zero, negative or non-finite step.

    Parameters
    ----------
    delta_time : float
        The rejected elapsed time in seconds.
    """

    def __init__(self, delta_time: float) -> None:
        """Store the offending step and build the error message.

        Parameters
        ----------
        delta_time : float
            The rejected elapsed time in seconds.
        """
        super().__init__(f"Elapsed time must be positive and finite, got {delta_time!r}")
        self.delta_time = delta_time


@dataclass
class Vector2D:
    """Two-dimensional vector with convenience operations.

    The class mirrors the bare minimum functionality required by the engine:
    addition/subtraction for positional offsets, scalar multiplication and
    division for rates, and helpers for magnitude/normalisation.

    Parameters
    ----------
    x : float
        Horizontal component.
    y : float
        Vertical component.
    """

    x: float
    y: float

    def __add__(self, other: "Vector2D") -> "Vector2D":
        """Return the vector sum of ``self`` and ``other``."""
        return Vector2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2D") -> "Vector2D":
        """Return the vector difference ``self - other``."""
        return Vector2D(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vector2D":
        """Scale the vector by ``scalar`` while preserving direction."""
        return Vector2D(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> "Vector2D":
        """Divide both components by ``scalar``."""
        return Vector2D(self.x / scalar, self.y / scalar)

    def magnitude(self) -> float:
        """Return the Euclidean length of the vector.

        Returns
        -------
        float
            Scalar magnitude.
        """
        return math.hypot(self.x, self.y)

    def normalize(self) -> "Vector2D":
        """Return a unit vector pointing in the same direction as ``self``.

        Returns
        -------
        Vector2D
            Normalised vector; zero vector when ``self`` has no magnitude.
        """
        mag = self.magnitude()
        if mag == 0:
            return Vector2D(0, 0)
        return Vector2D(self.x / mag, self.y / mag)

    def distance_to(self, other: "Vector2D") -> float:
        """Return the straight-line distance between ``self`` and ``other``.

        Parameters
        ----------
        other : Vector2D
            Vector whose separation from ``self`` should be measured.

        Returns
        -------
        float
            Euclidean distance between the two points.
        """
        return (other - self).magnitude()

    def dot(self, other: "Vector2D") -> float:
        """Return the dot product of ``self`` and ``other``.

        Parameters
        ----------
        other : Vector2D
            Second operand.

        Returns
        -------
        float
            Sum of the component-wise products.
        """
        return self.x * other.x + self.y * other.y

    def is_finite(self) -> bool:
        """Return ``True`` when neither component is NaN or infinite.

        Returns
        -------
        bool
            Whether both components are finite numbers.
        """
        return math.isfinite(self.x) and math.isfinite(self.y)

    def as_tuple(self) -> Tuple[float, float]:
        """Return the components as a plain ``(x, y)`` tuple.

        Returns
        -------
        Tuple[float, float]
            Components in ``(x, y)`` order.
        """
        return (self.x, self.y)

    @classmethod
    def from_tuple(cls, value: Tuple[float, float]) -> "Vector2D":
        """Build a vector from an ``(x, y)`` pair.

        Parameters
        ----------
        value : Tuple[float, float]
            Pair of coordinates.

        Returns
        -------
        Vector2D
            New vector holding the coordinates as floats.
        """
        x, y = value
        return cls(float(x), float(y))


class MotionEstimator:
    """Finite-difference kinematic model of a tracked point (usually the ball).

    Each update derives velocity from the last two positions, acceleration
    from the last two velocities and jerk from the last two accelerations, all
    at the step supplied with the update. Before the first update every
    derivative is zero, so a fresh estimator forecasts its own position.

    Parameters
    ----------
    position : Vector2D
        Initial observed position.
    correction_factor : float | None, optional
        Overshoot correction applied by :meth:`predict`; defaults to configuration.
    """

    def __init__(self, position: Vector2D, correction_factor: Optional[float] = None) -> None:
        """Create an estimator with zero motion history.

        Parameters
        ----------
        position : Vector2D
            Initial observed position.
        correction_factor : float | None, optional
            Overshoot correction applied by :meth:`predict`; defaults to configuration.
        """
        if correction_factor is None:
            correction_factor = ENGINE_CONFIG.motion.error_correction_factor
        self.correction_factor = correction_factor
        self.position = position
        self.velocity = Vector2D(0.0, 0.0)
        self.acceleration = Vector2D(0.0, 0.0)
        self.jerk = Vector2D(0.0, 0.0)
        self.updates = 0

    def update(self, new_position: Vector2D, delta_time: float) -> None:
        """Feed a new observation taken ``delta_time`` seconds after the previous one.

        Parameters
        ----------
        new_position : Vector2D
            Newly observed position.
        delta_time : float
            Elapsed time since the previous update in seconds.

        Raises
        ------
        InvalidTimeStep
            When ``delta_time`` is zero, negative or not finite. The stored
            state is left untouched.
        """
        if not math.isfinite(delta_time) or delta_time <= 0:
            raise InvalidTimeStep(delta_time)

        new_velocity = (new_position - self.position) / delta_time
        new_acceleration = (new_velocity - self.velocity) / delta_time
        new_jerk = (new_acceleration - self.acceleration) / delta_time

        self.jerk = new_jerk
        self.acceleration = new_acceleration
        self.velocity = new_velocity
        self.position = new_position
        self.updates += 1

    def nudge(self, offset: Vector2D, delta_time: float) -> None:
        """Apply a displacement instead of an absolute observation.

        Parameters
        ----------
        offset : Vector2D
            Displacement since the previous observation.
        delta_time : float
            Elapsed time since the previous update in seconds.
        """
        self.update(self.position + offset, delta_time)

    def predict(self, delta_time: float) -> Vector2D:
        """Extrapolate the position ``delta_time`` seconds ahead.

        Uses a third-order Taylor expansion, then pushes the result further
        along its own displacement by ``correction_factor``. Negative steps
        extrapolate backwards.

        Parameters
        ----------
        delta_time : float
            Forecast horizon in seconds.

        Returns
        -------
        Vector2D
            Forecast position.
        """
        extrapolated = (
            self.position
            + self.velocity * delta_time
            + self.acceleration * (0.5 * delta_time**2)
            + self.jerk * (delta_time**3 / 6.0)
        )
        return extrapolated + (extrapolated - self.position) * self.correction_factor

    def is_finite(self) -> bool:
        """Return ``True`` when every stored kinematic quantity is finite.

        Returns
        -------
        bool
            ``False`` if any of position, velocity, acceleration or jerk holds NaN/inf.
        """
        return all(v.is_finite() for v in (self.position, self.velocity, self.acceleration, self.jerk))

    def reset(self, position: Vector2D) -> None:
        """Discard the motion history and restart at ``position``.

        Parameters
        ----------
        position : Vector2D
            New position with zero velocity, acceleration and jerk.
        """
        self.position = position
        self.velocity = Vector2D(0.0, 0.0)
        self.acceleration = Vector2D(0.0, 0.0)
        self.jerk = Vector2D(0.0, 0.0)
        self.updates = 0
