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
Low-Pass Filter - Exponential Smoothing

    estimate_k = alpha * estimate_{k-1} + (1 - alpha) * x_k

alpha is the weight of the previous estimate: 0 passes every sample
through, 1 freezes the estimate at its starting value.
"""

from dataclasses import dataclass
from typing import Optional

from ccloop.filters.base import Filter
from ccloop.validation import validate_unit_interval


@dataclass
class LowPassParameters:
    """
    Low-pass filter configuration.

    Attributes
    ----------
    alpha : float
        Weight of the previous estimate, in [0, 1]
    starting_estimate : float
        Estimate before the first sample

    Raises
    ------
    ValidationError
        If alpha is outside [0, 1]
    """

    alpha: float
    starting_estimate: float = 0.0

    def __post_init__(self):
        validate_unit_interval("alpha", self.alpha)


class LowPassFilter(Filter):
    """
    First-order low-pass filter.

    Parameters
    ----------
    alpha : float or LowPassParameters
        Weight of the previous estimate, or a full parameter set
    starting_estimate : float
        Estimate before the first sample (ignored when parameters are given)

    Examples
    --------
    >>> lp = LowPassFilter(0.5)
    >>> [lp.filter(x) for x in (10.0, 20.0, 25.0)]
    [5.0, 12.5, 18.75]
    """

    def __init__(self, alpha, starting_estimate: Optional[float] = None):
        if isinstance(alpha, LowPassParameters):
            if starting_estimate is not None:
                raise TypeError("Pass either LowPassParameters or starting_estimate, not both")
            self.parameters = LowPassParameters(alpha.alpha, alpha.starting_estimate)
        else:
            self.parameters = LowPassParameters(
                alpha, 0.0 if starting_estimate is None else starting_estimate
            )
        self.estimate = self.parameters.starting_estimate

    @property
    def alpha(self) -> float:
        return self.parameters.alpha

    def filter(self, x: float) -> float:
        self.estimate = self.alpha * self.estimate + (1.0 - self.alpha) * x
        return self.estimate

    def reset(self) -> None:
        self.estimate = self.parameters.starting_estimate

    def __repr__(self) -> str:
        return f"LowPassFilter(alpha={self.alpha}, estimate={self.estimate})"
