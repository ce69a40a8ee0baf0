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
Filter Element - Per-Channel Measurement Filtering

Holds one scalar filter per KineticState channel. Channels are filtered
independently; no filter sees another channel's value.
"""

from typing import Optional

from ccloop.filters.base import Filter, PassThroughFilter
from ccloop.kinetic_state import KineticState


class FilterElement:
    """
    Filters a measurement channel by channel.

    Parameters
    ----------
    position_filter, velocity_filter, acceleration_filter : Optional[Filter]
        Filter for each channel (default: pass-through)

    Examples
    --------
    >>> element = FilterElement(position_filter=LowPassFilter(0.5))
    >>> element.filter(KineticState(4.0, 4.0))
    KineticState(position=2.0, velocity=4.0, acceleration=0.0)
    """

    def __init__(
        self,
        position_filter: Optional[Filter] = None,
        velocity_filter: Optional[Filter] = None,
        acceleration_filter: Optional[Filter] = None,
    ):
        self.position_filter = _or_pass_through(position_filter, "position_filter")
        self.velocity_filter = _or_pass_through(velocity_filter, "velocity_filter")
        self.acceleration_filter = _or_pass_through(acceleration_filter, "acceleration_filter")

    def filter(self, measurement: KineticState) -> KineticState:
        return KineticState(
            self.position_filter.filter(measurement.position),
            self.velocity_filter.filter(measurement.velocity),
            self.acceleration_filter.filter(measurement.acceleration),
        )

    def reset(self) -> None:
        self.position_filter.reset()
        self.velocity_filter.reset()
        self.acceleration_filter.reset()

    def __repr__(self) -> str:
        return (
            f"FilterElement({self.position_filter!r}, {self.velocity_filter!r}, "
            f"{self.acceleration_filter!r})"
        )


def _or_pass_through(f: Optional[Filter], name: str) -> Filter:
    if f is None:
        return PassThroughFilter()
    if not isinstance(f, Filter):
        raise TypeError(f"{name} must be a Filter, got {type(f).__name__}")
    return f
