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
Angular Feedback - Shortest-Path Error Wrapping

Decorates another feedback element so that position error on a rotating
mechanism is measured the short way round. An error of 359 degrees becomes
-1 degree, so a turret at 1 degree moving to 0 degrees turns by one degree
instead of a full revolution.

Only the position channel is wrapped; velocity and acceleration error pass
through unchanged.
"""

import math
from enum import Enum

import numpy as np

from ccloop.feedback.base import FeedbackElement
from ccloop.kinetic_state import KineticState


class AngleType(Enum):
    """
    Angle unit of a position channel.

    The value of each member is half a revolution in that unit.
    """

    RADIANS = math.pi
    DEGREES = 180.0
    REVOLUTIONS = 0.5

    @property
    def half_revolution(self) -> float:
        return self.value

    @property
    def full_revolution(self) -> float:
        return 2.0 * self.value


def normalize_angle(value: float, angle_type: AngleType) -> float:
    """
    Wrap an angle into (-h, h], h being half a revolution.

    Parameters
    ----------
    value : float
        Angle in the units of angle_type
    angle_type : AngleType
        Unit of value

    Returns
    -------
    float
        Equivalent angle in (-h, h]

    Examples
    --------
    >>> normalize_angle(359.0, AngleType.DEGREES)
    -1.0
    >>> normalize_angle(-182.0, AngleType.DEGREES)
    178.0
    >>> normalize_angle(180.0, AngleType.DEGREES)
    180.0
    >>> normalize_angle(1.25, AngleType.REVOLUTIONS)
    0.25
    """
    h = AngleType(angle_type).half_revolution
    return float(h - np.mod(h - value, 2.0 * h))


class AngularFeedback(FeedbackElement):
    """
    Feedback decorator that wraps position error to the shortest angle.

    Parameters
    ----------
    angle_type : AngleType
        Unit of the position channel
    feedback : FeedbackElement
        Element that receives the wrapped error

    Examples
    --------
    >>> turret = AngularFeedback(AngleType.DEGREES, PIDElement(FeedbackType.POSITION, kP=1.0))
    >>> turret.calculate(KineticState(359.0))
    -1.0
    """

    def __init__(self, angle_type: AngleType, feedback: FeedbackElement):
        if not isinstance(feedback, FeedbackElement):
            raise TypeError(
                f"feedback must be a FeedbackElement, got {type(feedback).__name__}"
            )
        self.angle_type = AngleType(angle_type)
        self.feedback = feedback

    def wrap(self, error: KineticState) -> KineticState:
        """Error with its position channel wrapped into (-h, h]."""
        return error.replace(position=normalize_angle(error.position, self.angle_type))

    def calculate(self, error: KineticState) -> float:
        return self.feedback.calculate(self.wrap(error))

    def reset(self) -> None:
        self.feedback.reset()

    def __repr__(self) -> str:
        return f"AngularFeedback({self.angle_type.name}, {self.feedback!r})"
