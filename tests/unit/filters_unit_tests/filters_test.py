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
Unit Tests for Measurement Filters

Tests cover:
- LowPassFilter recurrence, alpha limits, validation and reset
- ChainedFilter ordering, validation and reset
- FilterElement per-channel filtering
- PassThroughFilter
"""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from ccloop.filters.base import Filter, PassThroughFilter
from ccloop.filters.chained import ChainedFilter
from ccloop.filters.filter_element import FilterElement
from ccloop.filters.low_pass import LowPassFilter, LowPassParameters
from ccloop.kinetic_state import KineticState
from ccloop.validation import ValidationError

RNG = np.random.default_rng(42)
SIGNAL = list(RNG.normal(0.0, 10.0, size=50))


class AddConstant(Filter):
    """Adds a constant; makes filter order observable."""

    def __init__(self, constant):
        self.constant = constant
        self.reset_calls = 0

    def filter(self, x):
        return x + self.constant

    def reset(self):
        self.reset_calls += 1


class Double(Filter):
    def filter(self, x):
        return 2.0 * x


# ============================================================================
# LowPassFilter
# ============================================================================


class TestLowPassFilter:
    """estimate = alpha*prev + (1 - alpha)*x"""

    def test_known_sequence(self):
        """alpha 0.5 on 10, 20, 25 gives 5, 12.5, 18.75."""
        lp = LowPassFilter(0.5)
        assert [lp.filter(x) for x in (10.0, 20.0, 25.0)] == [5.0, 12.5, 18.75]

    def test_alpha_zero_passes_through(self):
        lp = LowPassFilter(0.0)
        assert [lp.filter(x) for x in SIGNAL] == SIGNAL

    def test_alpha_one_freezes(self):
        lp = LowPassFilter(1.0, starting_estimate=3.0)
        assert all(lp.filter(x) == 3.0 for x in SIGNAL)

    def test_matches_recurrence(self):
        """Filtered signal follows the recurrence computed directly."""
        alpha = 0.8
        lp = LowPassFilter(LowPassParameters(alpha, starting_estimate=1.0))
        expected = []
        estimate = 1.0
        for x in SIGNAL:
            estimate = alpha * estimate + (1 - alpha) * x
            expected.append(estimate)
        assert_allclose([lp.filter(x) for x in SIGNAL], expected)

    def test_reduces_noise(self):
        """A heavy filter lowers the variance of white noise."""
        lp = LowPassFilter(0.9)
        filtered = [lp.filter(x) for x in SIGNAL]
        assert np.std(filtered) < np.std(SIGNAL)

    @pytest.mark.parametrize("alpha", [-0.1, 1.5, float("nan")])
    def test_invalid_alpha(self, alpha):
        with pytest.raises(ValidationError, match="alpha"):
            LowPassFilter(alpha)

    def test_invalid_parameters(self):
        with pytest.raises(ValidationError):
            LowPassParameters(2.0)

    def test_reset_restores_starting_estimate(self):
        lp = LowPassFilter(0.5, starting_estimate=4.0)
        lp.filter(100.0)
        lp.reset()
        assert lp.estimate == 4.0
        assert lp.filter(0.0) == 2.0

    def test_parameters_and_estimate_rejected(self):
        with pytest.raises(TypeError):
            LowPassFilter(LowPassParameters(0.5), starting_estimate=1.0)


# ============================================================================
# ChainedFilter
# ============================================================================


class TestChainedFilter:
    def test_empty_rejected(self):
        with pytest.raises(ValidationError):
            ChainedFilter()

    def test_non_filter_rejected(self):
        with pytest.raises(TypeError):
            ChainedFilter(PassThroughFilter(), lambda x: x)

    def test_single_filter_passthrough(self):
        """A chain of one pass-through filter returns its input."""
        chain = ChainedFilter(PassThroughFilter())
        assert [chain.filter(x) for x in SIGNAL] == SIGNAL

    def test_order_preserved(self):
        """Filters run in constructor order: (x + 1) * 2 differs from x * 2 + 1."""
        assert ChainedFilter(AddConstant(1.0), Double()).filter(3.0) == 8.0
        assert ChainedFilter(Double(), AddConstant(1.0)).filter(3.0) == 7.0

    def test_two_low_pass(self):
        chain = ChainedFilter(LowPassFilter(0.5), LowPassFilter(0.5))
        assert chain.filter(8.0) == 2.0

    def test_reset_resets_all(self):
        first, second = AddConstant(1.0), AddConstant(2.0)
        chain = ChainedFilter(first, second)
        chain.reset()
        assert (first.reset_calls, second.reset_calls) == (1, 1)

    def test_len(self):
        assert len(ChainedFilter(Double(), Double(), Double())) == 3


# ============================================================================
# FilterElement
# ============================================================================


class TestFilterElement:
    def test_defaults_pass_through(self):
        element = FilterElement()
        state = KineticState(1.0, -2.0, 3.0)
        assert element.filter(state) == state

    def test_channels_independent(self):
        """Each channel has its own filter and state."""
        element = FilterElement(
            position_filter=LowPassFilter(0.5),
            velocity_filter=AddConstant(10.0),
            acceleration_filter=Double(),
        )
        assert element.filter(KineticState(4.0, 4.0, 4.0)) == KineticState(2.0, 14.0, 8.0)
        assert element.filter(KineticState(4.0, 4.0, 4.0)) == KineticState(3.0, 14.0, 8.0)

    def test_reset_resets_each_channel(self):
        pos, vel, acc = AddConstant(0.0), AddConstant(0.0), AddConstant(0.0)
        FilterElement(pos, vel, acc).reset()
        assert (pos.reset_calls, vel.reset_calls, acc.reset_calls) == (1, 1, 1)

    def test_rejects_non_filter(self):
        with pytest.raises(TypeError):
            FilterElement(position_filter=3.0)
