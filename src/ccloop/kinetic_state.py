# Copyright (C) 2025 Gil Benezer
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""
KineticState - Position/Velocity/Acceleration Triple

The universal unit of a control loop: goals, references, measurements and
errors are all KineticStates.

Arithmetic is component-wise and total. NaN and infinity propagate through
every operator and are never trapped.

Usage
-----
>>> reference = KineticState(10.0, 2.0)
>>> measurement = KineticState(7.5, 1.0)
>>> error = reference - measurement
>>> error
KineticState(position=2.5, velocity=1.0, acceleration=0.0)
>>> error * 2.0
KineticState(position=5.0, velocity=2.0, acceleration=0.0)
"""

from dataclasses import dataclass, replace

import numpy as np

from ccloop.types.core import ArrayLike, ScalarLike


@dataclass(frozen=True)
class KineticState:
    """
    Immutable state of a kinetic system.

    Attributes
    ----------
    position : float
        Position of the system
    velocity : float
        Velocity of the system
    acceleration : float
        Acceleration of the system

    Notes
    -----
    Subtraction is not commutative. A control error is always
    ``reference - measurement``; swapping the operands inverts the sign of
    every downstream control action.
    """

    position: float = 0.0
    velocity: float = 0.0
    acceleration: float = 0.0

    def __add__(self, other: "KineticState") -> "KineticState":
        if not isinstance(other, KineticState):
            return NotImplemented
        return KineticState(
            self.position + other.position,
            self.velocity + other.velocity,
            self.acceleration + other.acceleration,
        )

    def __sub__(self, other: "KineticState") -> "KineticState":
        if not isinstance(other, KineticState):
            return NotImplemented
        return KineticState(
            self.position - other.position,
            self.velocity - other.velocity,
            self.acceleration - other.acceleration,
        )

    def __mul__(self, scalar: ScalarLike) -> "KineticState":
        if isinstance(scalar, KineticState):
            return NotImplemented
        return KineticState(
            self.position * scalar,
            self.velocity * scalar,
            self.acceleration * scalar,
        )

    __rmul__ = __mul__

    def __neg__(self) -> "KineticState":
        return KineticState(-self.position, -self.velocity, -self.acceleration)

    def replace(self, **changes: float) -> "KineticState":
        """
        Copy of this state with some channels changed.

        Examples
        --------
        >>> KineticState(1.0, 2.0, 3.0).replace(position=0.5)
        KineticState(position=0.5, velocity=2.0, acceleration=3.0)
        """
        return replace(self, **changes)

    def as_array(self) -> np.ndarray:
        """State as a (3,) array ordered position, velocity, acceleration."""
        return np.array([self.position, self.velocity, self.acceleration], dtype=float)

    @classmethod
    def from_array(cls, values: ArrayLike) -> "KineticState":
        """
        Build a state from a length-3 array.

        Raises
        ------
        ValueError
            If values does not hold exactly three elements
        """
        arr = np.asarray(values, dtype=float).reshape(-1)
        if arr.shape != (3,):
            raise ValueError(
                f"Expected 3 values (position, velocity, acceleration), got {arr.size}"
            )
        return cls(float(arr[0]), float(arr[1]), float(arr[2]))
