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
Construction-Time Validation

Checks applied when control elements are configured. Every failure raises
ValidationError immediately; values are never clamped into range.

Checks:
- Gains that must lie in the closed unit interval (filter and
  interpolator alphas)
- Non-empty filter chains
- Motion profile limits that must be nonzero and share one sign

Runtime numerical edge values (NaN, infinity in measurements or goals) are
not validated anywhere in the package; they propagate to the output.
"""

import math
from typing import Sequence


# ============================================================================
# Exceptions
# ============================================================================


class ValidationError(ValueError):
    """Raised when an element is constructed with an invalid configuration"""
    pass


# ============================================================================
# Validators
# ============================================================================


def validate_unit_interval(name: str, value: float) -> float:
    """
    Require a gain to lie in [0, 1].

    Parameters
    ----------
    name : str
        Parameter name used in the error message
    value : float
        Value to check

    Returns
    -------
    float
        The value, unchanged

    Raises
    ------
    ValidationError
        If value is outside [0, 1] or NaN

    Examples
    --------
    >>> validate_unit_interval("alpha", 0.5)
    0.5
    >>> validate_unit_interval("alpha", 1.5)
    Traceback (most recent call last):
        ...
    ValidationError: alpha must be between 0 and 1, but was 1.5
    """
    if not 0.0 <= value <= 1.0:
        raise ValidationError(f"{name} must be between 0 and 1, but was {value}")
    return value


def validate_not_empty(name: str, items: Sequence) -> Sequence:
    """Require at least one item."""
    if len(items) == 0:
        raise ValidationError(f"{name} must have at least one element")
    return items


def validate_same_sign(**values: float) -> None:
    """
    Require all values to be nonzero, finite-signed and of one sign.

    Parameters
    ----------
    **values : float
        Named values to compare, e.g. ``max_vel=1.0, accel=2.0``

    Raises
    ------
    ValidationError
        If any value is zero or NaN, or the signs disagree

    Examples
    --------
    >>> validate_same_sign(max_vel=-1.0, accel=-2.0, decel=-2.0)
    >>> validate_same_sign(max_vel=1.0, accel=-2.0)
    Traceback (most recent call last):
        ...
    ValidationError: max_vel, accel must share the same sign, but were {'max_vel': 1.0, 'accel': -2.0}
    """
    for name, value in values.items():
        if math.isnan(value) or value == 0.0:
            raise ValidationError(f"{name} must be nonzero, but was {value}")

    signs = {math.copysign(1.0, value) for value in values.values()}
    if len(signs) > 1:
        raise ValidationError(
            f"{', '.join(values)} must share the same sign, but were {dict(values)}"
        )
