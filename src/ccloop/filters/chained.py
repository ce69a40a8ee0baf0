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
Chained Filter - Sequential Composition
"""

from ccloop.filters.base import Filter
from ccloop.validation import validate_not_empty


class ChainedFilter(Filter):
    """
    Applies filters one after another, in constructor order.

    Parameters
    ----------
    *filters : Filter
        At least one filter

    Raises
    ------
    ValidationError
        If no filter is given
    TypeError
        If an argument is not a Filter

    Examples
    --------
    >>> chain = ChainedFilter(LowPassFilter(0.5), LowPassFilter(0.5))
    >>> chain.filter(8.0)
    2.0
    """

    def __init__(self, *filters: Filter):
        validate_not_empty("ChainedFilter", filters)
        for f in filters:
            if not isinstance(f, Filter):
                raise TypeError(f"ChainedFilter takes Filter instances, got {type(f).__name__}")
        self.filters = tuple(filters)

    def filter(self, x: float) -> float:
        for f in self.filters:
            x = f.filter(x)
        return x

    def reset(self) -> None:
        for f in self.filters:
            f.reset()

    def __len__(self) -> int:
        return len(self.filters)

    def __repr__(self) -> str:
        return f"ChainedFilter({', '.join(repr(f) for f in self.filters)})"
