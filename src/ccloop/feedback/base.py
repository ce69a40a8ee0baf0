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
Feedback Element Base - Abstract Interface for Error-Driven Control

A feedback element turns the current error (reference minus filtered
measurement) into a power that drives the error toward zero.

This module defines the abstract base class, the FeedbackType enum used to
select which error channels a controller reads, and the do-nothing
NullFeedback.
"""

from abc import ABC, abstractmethod
from enum import Enum

from ccloop.kinetic_state import KineticState


class FeedbackType(Enum):
    """
    Which pair of error channels a feedback controller acts on.

    Attributes
    ----------
    POSITION : str
        Position error is the proportional/integrated term, velocity error
        the derivative term
    VELOCITY : str
        Velocity error is the proportional/integrated term, acceleration
        error the derivative term
    """

    POSITION = "position"
    VELOCITY = "velocity"

    def select(self, error: KineticState):
        """
        Pick the (proportional, derivative) channels of an error.

        Examples
        --------
        >>> FeedbackType.VELOCITY.select(KineticState(1.0, 2.0, 3.0))
        (2.0, 3.0)
        """
        if self is FeedbackType.POSITION:
            return error.position, error.velocity
        return error.velocity, error.acceleration


class FeedbackElement(ABC):
    """
    Abstract base class for feedback elements.

    Subclasses implement calculate(); reset() defaults to a no-op for
    stateless elements.

    Examples
    --------
    >>> class Proportional(FeedbackElement):
    ...     def __init__(self, kP):
    ...         self.kP = kP
    ...     def calculate(self, error):
    ...         return self.kP * error.position
    >>>
    >>> Proportional(2.0).calculate(KineticState(1.5))
    3.0
    """

    @abstractmethod
    def calculate(self, error: KineticState) -> float:
        """
        Compute the power to apply to the system.

        Parameters
        ----------
        error : KineticState
            Current error, ``reference - measurement``

        Returns
        -------
        float
            Power to apply
        """
        pass

    def reset(self) -> None:
        """Clear any internal state."""


class NullFeedback(FeedbackElement):
    """
    Feedback element that always returns zero.

    Use it for feedforward-only systems.
    """

    def calculate(self, error: KineticState) -> float:
        return 0.0

    def __repr__(self) -> str:
        return "NullFeedback()"
