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
First-Order EMA Interpolator

The reference approaches the goal geometrically: every read moves it a
fraction alpha of the remaining distance.

    reference_k = alpha * goal + (1 - alpha) * reference_{k-1}

The update is pull-based. It happens on each ``current_reference`` read,
not on a clock, so the approach rate depends on the loop rate.
"""

from dataclasses import dataclass, field
from typing import Optional

from ccloop.interpolators.base import InterpolatorElement
from ccloop.kinetic_state import KineticState
from ccloop.validation import validate_unit_interval


@dataclass
class FirstOrderEMAParameters:
    """
    EMA interpolator configuration.

    Attributes
    ----------
    alpha : float
        Fraction of the remaining distance covered per read, in [0, 1]
    starting_reference : KineticState
        Reference before the first read

    Raises
    ------
    ValidationError
        If alpha is outside [0, 1]
    """

    alpha: float
    starting_reference: KineticState = field(default_factory=KineticState)

    def __post_init__(self):
        validate_unit_interval("alpha", self.alpha)


class FirstOrderEMAInterpolator(InterpolatorElement):
    """
    Exponential moving average toward the goal.

    Parameters
    ----------
    alpha : float or FirstOrderEMAParameters
        Smoothing factor, or a full parameter set
    starting_reference : Optional[KineticState]
        Reference before the first read (ignored when parameters are given)

    Examples
    --------
    >>> ema = FirstOrderEMAInterpolator(0.5)
    >>> ema.goal = KineticState(5.0)
    >>> [ema.current_reference.position for _ in range(3)]
    [2.5, 3.75, 4.375]
    """

    def __init__(self, alpha, starting_reference: Optional[KineticState] = None):
        if isinstance(alpha, FirstOrderEMAParameters):
            if starting_reference is not None:
                raise TypeError(
                    "Pass either FirstOrderEMAParameters or starting_reference, not both"
                )
            self.parameters = FirstOrderEMAParameters(alpha.alpha, alpha.starting_reference)
        elif starting_reference is None:
            self.parameters = FirstOrderEMAParameters(alpha)
        else:
            self.parameters = FirstOrderEMAParameters(alpha, starting_reference)

        self._goal = KineticState()
        self.last_reference = self.parameters.starting_reference

    @property
    def alpha(self) -> float:
        return self.parameters.alpha

    @property
    def goal(self) -> KineticState:
        return self._goal

    @goal.setter
    def goal(self, value: KineticState) -> None:
        self._goal = value

    @property
    def current_reference(self) -> KineticState:
        self.last_reference = self._goal * self.alpha + self.last_reference * (1.0 - self.alpha)
        return self.last_reference

    def reset(self) -> None:
        self.last_reference = self.parameters.starting_reference

    def __repr__(self) -> str:
        return (
            f"FirstOrderEMAInterpolator(alpha={self.alpha}, goal={self._goal}, "
            f"last_reference={self.last_reference})"
        )
