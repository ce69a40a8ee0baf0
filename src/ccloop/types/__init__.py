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
Types Module

Central import point for type definitions.

Module Organization
------------------
- core: Scalars, arrays, time units
- protocols: Clock protocol
- results: TypedDict result types
"""

from .core import (
    NANOSECONDS_PER_SECOND,
    SECONDS_PER_NANOSECOND,
    ArrayLike,
    Nanoseconds,
    ScalarLike,
    Seconds,
    Timestamp,
)
from .protocols import Clock
from .results import ControlOutput, ProfileSample, ProfileTimings

__all__ = [
    # Core
    "ArrayLike",
    "ScalarLike",
    "Timestamp",
    "Nanoseconds",
    "Seconds",
    "NANOSECONDS_PER_SECOND",
    "SECONDS_PER_NANOSECOND",
    # Protocols
    "Clock",
    # Results
    "ControlOutput",
    "ProfileTimings",
    "ProfileSample",
]
