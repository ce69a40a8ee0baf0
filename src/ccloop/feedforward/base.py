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
Feedforward Element Base

A feedforward element predicts the power needed to follow the reference,
independently of any measured error. It sees only the reference.
"""

from abc import ABC, abstractmethod

from ccloop.kinetic_state import KineticState


class FeedforwardElement(ABC):
    """
    Abstract base class for feedforward elements.

    Feedforward models are normally stateless; reset() is a no-op unless a
    subclass overrides it.
    """

    @abstractmethod
    def calculate(self, reference: KineticState) -> float:
        """
        Compute the power needed to follow the reference.

        Parameters
        ----------
        reference : KineticState
            Current reference from the interpolator

        Returns
        -------
        float
            Power to apply
        """
        pass

    def reset(self) -> None:
        """Clear any internal state."""


class NullFeedforward(FeedforwardElement):
    """Feedforward element that always returns zero."""

    def calculate(self, reference: KineticState) -> float:
        return 0.0

    def __repr__(self) -> str:
        return "NullFeedforward()"
