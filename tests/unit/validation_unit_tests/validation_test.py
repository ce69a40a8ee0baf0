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
Unit Tests for Construction-Time Validation
"""

import pytest

from ccloop.validation import (
    ValidationError,
    validate_not_empty,
    validate_same_sign,
    validate_unit_interval,
)


class TestValidationError:
    def test_is_value_error(self):
        """ValidationError can be caught as ValueError."""
        assert issubclass(ValidationError, ValueError)


class TestUnitInterval:
    """Test validate_unit_interval."""

    @pytest.mark.parametrize("value", [0.0, 0.25, 0.5, 1.0])
    def test_accepts_closed_interval(self, value):
        assert validate_unit_interval("alpha", value) == value

    @pytest.mark.parametrize("value", [-0.01, 1.01, 5.0, float("nan")])
    def test_rejects_outside(self, value):
        with pytest.raises(ValidationError, match="alpha must be between 0 and 1"):
            validate_unit_interval("alpha", value)


class TestNotEmpty:
    def test_accepts_items(self):
        assert validate_not_empty("filters", (1,)) == (1,)

    def test_rejects_empty(self):
        with pytest.raises(ValidationError, match="at least one"):
            validate_not_empty("filters", ())


class TestSameSign:
    """Test validate_same_sign."""

    def test_all_positive(self):
        validate_same_sign(a=1.0, b=2.0, c=3.0)

    def test_all_negative(self):
        validate_same_sign(a=-1.0, b=-2.0, c=-3.0)

    def test_mixed_signs(self):
        with pytest.raises(ValidationError, match="must share the same sign"):
            validate_same_sign(a=1.0, b=-2.0)

    @pytest.mark.parametrize("bad", [0.0, -0.0, float("nan")])
    def test_rejects_zero_and_nan(self, bad):
        with pytest.raises(ValidationError, match="b must be nonzero"):
            validate_same_sign(a=1.0, b=bad)
