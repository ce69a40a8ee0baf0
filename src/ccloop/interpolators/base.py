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
Interpolator Element Base

An interpolator owns the goal and hands the control loop a reference that
moves toward it. The reference is read once per control tick.
"""

from abc import ABC, abstractmethod
from typing import Optional

from ccloop.kinetic_state import KineticState


class InterpolatorElement(ABC):
    """
    Abstract base class for interpolators.

    Subclasses provide the ``goal`` property (get and set) and
    ``current_reference``. Reading ``current_reference`` may advance the
    interpolator's state.
    """

    @property
    @abstractmethod
    def goal(self) -> KineticState:
        """Final state the interpolator moves toward."""

    @goal.setter
    @abstractmethod
    def goal(self, value: KineticState) -> None:
        pass

    @property
    @abstractmethod
    def current_reference(self) -> KineticState:
        """Reference for the current tick."""

    def reset(self) -> None:
        """Restart interpolation from the initial state."""


class ConstantInterpolator(InterpolatorElement):
    """
    Interpolator whose reference is the goal itself.

    Examples
    --------
    >>> interp = ConstantInterpolator()
    >>> interp.goal = KineticState(10.0)
    >>> interp.current_reference
    KineticState(position=10.0, velocity=0.0, acceleration=0.0)
    """

    def __init__(self, goal: Optional[KineticState] = None):
        self._goal = goal if goal is not None else KineticState()

    @property
    def goal(self) -> KineticState:
        return self._goal

    @goal.setter
    def goal(self, value: KineticState) -> None:
        self._goal = value

    @property
    def current_reference(self) -> KineticState:
        return self._goal

    def __repr__(self) -> str:
        return f"ConstantInterpolator(goal={self._goal})"
