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
Measurement Filters

Module Organization
------------------
- base: Filter, PassThroughFilter
- low_pass: LowPassFilter, LowPassParameters
- chained: ChainedFilter
- filter_element: FilterElement (one filter per KineticState channel)
"""

from .base import Filter, PassThroughFilter
from .chained import ChainedFilter
from .filter_element import FilterElement
from .low_pass import LowPassFilter, LowPassParameters

__all__ = [
    "Filter",
    "PassThroughFilter",
    "LowPassFilter",
    "LowPassParameters",
    "ChainedFilter",
    "FilterElement",
]
