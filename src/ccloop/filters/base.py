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
Filter Base

Scalar filters applied to one measurement channel at a time.
"""

from abc import ABC, abstractmethod


class Filter(ABC):
    """
    Abstract base class for scalar filters.

    Examples
    --------
    >>> class Clamp(Filter):
    ...     def filter(self, x):
    ...         return max(-1.0, min(1.0, x))
    >>> Clamp().filter(3.0)
    1.0
    """

    @abstractmethod
    def filter(self, x: float) -> float:
        """
        Filter one sample.

        Parameters
        ----------
        x : float
            Raw sample

        Returns
        -------
        float
            Filtered sample
        """
        pass

    def reset(self) -> None:
        """Clear any internal state."""


class PassThroughFilter(Filter):
    """Filter that returns its input unchanged."""

    def filter(self, x: float) -> float:
        return x

    def __repr__(self) -> str:
        return "PassThroughFilter()"
