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
Unit Tests for PID and SquID Controllers

Tests cover:
- Zero gains and zero error
- Proportional, integral and derivative terms in isolation
- First-call policy (no integral contribution)
- Integral reset on zero crossing
- Derivative fallback from position error
- Reset semantics
- SquID square-root proportional term
- PIDElement / SquIDElement channel selection, gains and clock use

Controllers are driven with explicit timestamps, elements with a
ManualClock, so every integral is exact.
"""

import math

import numpy as np
import pytest
from numpy.testing import assert_allclose

from ccloop.clock import ManualClock
from ccloop.feedback.base import FeedbackType
from ccloop.feedback.pid import (
    PIDCoefficients,
    PIDController,
    PIDElement,
    SquIDController,
    SquIDElement,
)
from ccloop.kinetic_state import KineticState

RNG = np.random.default_rng(42)
ERROR_GRID = list(RNG.uniform(-100.0, 100.0, size=12))


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def clock():
    """Deterministic clock starting at 0 ns."""
    return ManualClock()


def run(controller, errors, start=1, step=1, derivative=0.0):
    """Feed errors at evenly spaced timestamps and collect outputs."""
    return [
        controller.calculate(start + i * step, e, derivative) for i, e in enumerate(errors)
    ]


# ============================================================================
# PIDController
# ============================================================================


class TestPIDControllerTerms:
    """Each term in isolation."""

    def test_zero_gains_give_zero(self):
        """All gains zero gives zero output for any error."""
        controller = PIDController(PIDCoefficients(0.0, 0.0, 0.0))
        assert run(controller, [20.0, -3.0, 7.5], derivative=10.0) == [0.0, 0.0, 0.0]

    def test_zero_error_gives_zero_repeatedly(self):
        """Zero error held over time gives zero output."""
        controller = PIDController(PIDCoefficients(1.0, 1.0, 1.0))
        assert run(controller, [0.0] * 5) == [0.0] * 5

    @pytest.mark.parametrize("error", ERROR_GRID)
    def test_unit_kp_returns_error(self, error):
        """kP = 1 with other gains zero returns the raw error."""
        controller = PIDController(PIDCoefficients(1.0))
        assert controller.calculate(0, error, 14.0) == error

    def test_unit_ki_integrates(self):
        """kI = 1, error 10 at 1 ns ticks gives 0, 10, 20, 30, 40."""
        controller = PIDController(PIDCoefficients(0.0, 1.0, 0.0))
        assert run(controller, [10.0] * 5) == [0.0, 10.0, 20.0, 30.0, 40.0]

    def test_integral_uses_elapsed_nanoseconds(self):
        """The integral weights each sample by the time since the previous one."""
        controller = PIDController(PIDCoefficients(0.0, 1.0, 0.0))
        controller.calculate(0, 2.0, 0.0)
        controller.calculate(5, 2.0, 0.0)
        assert controller.calculate(15, 3.0, 0.0) == 2.0 * 5 + 3.0 * 10
        assert controller.error_sum == 40.0

    @pytest.mark.parametrize("derivative", ERROR_GRID)
    def test_unit_kd_returns_derivative_error(self, derivative):
        """kD = 1 returns the supplied derivative error."""
        controller = PIDController(PIDCoefficients(0.0, 0.0, 1.0))
        assert controller.calculate(0, 5.0, derivative) == derivative
        assert controller.calculate(1, 5.0, derivative) == derivative

    def test_combined_gains(self):
        """Second call combines all three terms."""
        controller = PIDController(PIDCoefficients(1.0, 0.5, 0.2))
        first = controller.calculate(100, 5.0, 2.0)
        second = controller.calculate(101, 5.0, 2.0)
        assert first == pytest.approx(1.0 * 5.0 + 0.2 * 2.0)
        assert second == pytest.approx(1.0 * 5.0 + 0.5 * 5.0 + 0.2 * 2.0)


class TestPIDControllerState:
    """State bookkeeping."""

    def test_first_call_has_no_integral(self):
        """The first call integrates nothing, whatever the timestamp."""
        controller = PIDController(PIDCoefficients(0.0, 1.0, 0.0))
        assert controller.calculate(1_000_000, 50.0, 0.0) == 0.0
        assert controller.error_sum == 0.0

    def test_calculate_records_last_values(self):
        """last_error and last_timestamp track the most recent call."""
        controller = PIDController(PIDCoefficients(1.0, 0.5, 0.2))
        controller.calculate(100, 5.0, 2.0)
        assert controller.last_error == 5.0
        assert controller.last_timestamp == 100

    def test_reset_restores_initial_state(self):
        """reset() clears the integral, last error and last timestamp."""
        controller = PIDController(PIDCoefficients(1.0, 0.5, 0.2))
        run(controller, [5.0, 6.0, 7.0])
        controller.reset()
        assert controller.error_sum == 0.0
        assert controller.last_error == 0.0
        assert controller.last_timestamp is None

    def test_reset_then_calculate_matches_fresh(self):
        """After reset() the controller behaves like a new one."""
        gains = PIDCoefficients(0.3, 0.1, 0.05)
        used = PIDController(gains)
        run(used, [5.0, -2.0, 7.0], derivative=1.0)
        used.reset()
        fresh = PIDController(PIDCoefficients(0.3, 0.1, 0.05))
        errors = [1.0, 2.0, 3.0]
        assert run(used, errors, start=50) == run(fresh, errors, start=50)

    def test_gains_read_live(self):
        """Changing the coefficients object affects the next call."""
        gains = PIDCoefficients(1.0)
        controller = PIDController(gains)
        assert controller.calculate(0, 2.0, 0.0) == 2.0
        gains.kP = 3.0
        assert controller.calculate(1, 2.0, 0.0) == 6.0


class TestZeroCrossing:
    """Integral reset when the error changes sign."""

    def test_sign_change_clears_integral(self):
        """The integral restarts from the sample that crossed zero."""
        controller = PIDController(PIDCoefficients(0.0, 1.0, 0.0))
        outputs = run(controller, [10.0, 10.0, -4.0, -4.0])
        assert outputs == [0.0, 10.0, -4.0, -8.0]

    def test_reaching_zero_clears_integral(self):
        """sign(0) differs from sign(positive), so arriving at zero resets."""
        controller = PIDController(PIDCoefficients(0.0, 1.0, 0.0))
        outputs = run(controller, [10.0, 10.0, 0.0, 5.0])
        assert outputs == [0.0, 10.0, 0.0, 5.0]

    def test_reset_disabled_keeps_integral(self):
        """With the reset disabled the integral carries across the crossing."""
        controller = PIDController(
            PIDCoefficients(0.0, 1.0, 0.0), reset_integral_on_zero_crossover=False
        )
        outputs = run(controller, [10.0, 10.0, -4.0, -4.0])
        assert outputs == [0.0, 10.0, 6.0, 2.0]

    def test_squid_also_resets(self):
        """The reset applies to SquID as well."""
        controller = SquIDController(PIDCoefficients(0.0, 1.0, 0.0))
        outputs = run(controller, [10.0, 10.0, -4.0])
        assert outputs == [0.0, 10.0, -4.0]


class TestDerivativeFallback:
    """Derivative estimated from position error when none is supplied."""

    def test_first_call_derivative_is_zero(self):
        """No elapsed time means no derivative."""
        controller = PIDController(PIDCoefficients(0.0, 0.0, 1.0))
        assert controller.calculate(0, 10.0) == 0.0

    def test_finite_difference(self):
        """Derivative is the change in error over elapsed nanoseconds."""
        controller = PIDController(PIDCoefficients(0.0, 0.0, 1.0))
        controller.calculate(0, 10.0)
        assert controller.calculate(4, 18.0) == pytest.approx(2.0)
        assert controller.calculate(6, 14.0) == pytest.approx(-2.0)

    def test_same_timestamp_does_not_divide_by_zero(self):
        """Two calls at one timestamp give a zero derivative."""
        controller = PIDController(PIDCoefficients(0.0, 0.0, 1.0))
        controller.calculate(7, 1.0)
        assert controller.calculate(7, 5.0) == 0.0

    def test_supplied_derivative_wins(self):
        """An explicit derivative error is used as given."""
        controller = PIDController(PIDCoefficients(0.0, 0.0, 1.0))
        controller.calculate(0, 10.0, 0.0)
        assert controller.calculate(4, 18.0, -3.0) == -3.0


class TestNonFiniteError:
    def test_nan_error_gives_nan(self):
        """NaN propagates to the output."""
        controller = PIDController(PIDCoefficients(1.0, 1.0, 1.0))
        controller.calculate(0, 1.0, 0.0)
        assert math.isnan(controller.calculate(1, float("nan"), 0.0))


# ============================================================================
# SquIDController
# ============================================================================


class TestSquIDController:
    """Square-root proportional term."""

    def test_sqrt_of_error(self):
        """kP = 1, error 10 gives sqrt(10)."""
        controller = SquIDController(PIDCoefficients(1.0))
        assert controller.calculate(0, 10.0, 0.0) == pytest.approx(math.sqrt(10.0))

    @pytest.mark.parametrize("error", ERROR_GRID)
    def test_sign_preserved(self, error):
        """Output keeps the sign of the error."""
        controller = SquIDController(PIDCoefficients(2.0))
        expected = math.copysign(math.sqrt(abs(2.0 * error)), error)
        assert controller.calculate(0, error, 0.0) == pytest.approx(expected)

    def test_zero_error(self):
        """sqrt(0) with sign(0) is zero."""
        assert SquIDController(PIDCoefficients(4.0)).calculate(0, 0.0, 0.0) == 0.0

    def test_integral_and_derivative_unchanged(self):
        """Only the proportional term differs from PID."""
        pid = PIDController(PIDCoefficients(0.0, 0.5, 0.25))
        squid = SquIDController(PIDCoefficients(0.0, 0.5, 0.25))
        errors = [3.0, 4.0, 5.0]
        assert run(pid, errors, derivative=2.0) == run(squid, errors, derivative=2.0)


# ============================================================================
# Feedback Elements
# ============================================================================


class TestPIDElement:
    """PIDElement wrapping a controller."""

    def test_loose_gains_match_coefficients(self):
        """Both constructor forms give the same gains."""
        loose = PIDElement(FeedbackType.POSITION, kP=1.0, kI=1.0, kD=1.0)
        packed = PIDElement(FeedbackType.POSITION, PIDCoefficients(1.0, 1.0, 1.0))
        assert loose.coefficients == packed.coefficients

    def test_both_forms_rejected(self):
        """Coefficients and loose gains are mutually exclusive."""
        with pytest.raises(TypeError):
            PIDElement(FeedbackType.POSITION, PIDCoefficients(1.0), kP=2.0)

    def test_coefficients_are_copied(self):
        """Mutating the passed coefficients does not retune the element."""
        gains = PIDCoefficients(1.0)
        element = PIDElement(FeedbackType.POSITION, gains, clock=ManualClock())
        gains.kP = 100.0
        assert element.calculate(KineticState(2.0)) == 2.0

    def test_set_gains(self, clock):
        """set_gains() changes only the named gains."""
        element = PIDElement(FeedbackType.POSITION, kP=1.0, kD=0.5, clock=clock)
        element.set_gains(kP=3.0)
        assert element.coefficients == PIDCoefficients(3.0, 0.0, 0.5)
        assert element.calculate(KineticState(2.0)) == 6.0

    def test_position_type_reads_position_and_velocity(self, clock):
        """POSITION uses position error for P and velocity error for D."""
        element = PIDElement(FeedbackType.POSITION, kP=1.0, kD=10.0, clock=clock)
        assert element.calculate(KineticState(10.0, 14.0, 99.0)) == 10.0 + 140.0

    def test_velocity_type_reads_velocity_and_acceleration(self, clock):
        """VELOCITY uses velocity error for P and acceleration error for D."""
        element = PIDElement(FeedbackType.VELOCITY, kP=1.0, kD=10.0, clock=clock)
        assert element.calculate(KineticState(27.0, 10.0, 97.0)) == 10.0 + 970.0

    @pytest.mark.parametrize("feedback_type", list(FeedbackType))
    def test_unit_ki_with_manual_clock(self, clock, feedback_type):
        """Integral follows the injected clock."""
        element = PIDElement(feedback_type, kI=1.0, clock=clock)
        error = KineticState(10.0, 10.0, 0.0)
        outputs = []
        for _ in range(5):
            outputs.append(element.calculate(error))
            clock.advance(nanoseconds=1)
        assert outputs == [0.0, 10.0, 20.0, 30.0, 40.0]

    def test_calculate_at_explicit_timestamp(self):
        """calculate_at bypasses the clock."""
        element = PIDElement(FeedbackType.POSITION, kI=1.0, clock=ManualClock())
        element.calculate_at(0, KineticState(2.0))
        assert element.calculate_at(3, KineticState(2.0)) == 6.0

    def test_reset_clears_integral(self, clock):
        """reset() delegates to the controller."""
        element = PIDElement(FeedbackType.POSITION, kI=1.0, clock=clock)
        element.calculate(KineticState(10.0))
        clock.advance(nanoseconds=5)
        element.calculate(KineticState(10.0))
        element.reset()
        assert element.controller.last_timestamp is None
        clock.advance(nanoseconds=5)
        assert element.calculate(KineticState(10.0)) == 0.0

    def test_realistic_loop_rate(self, clock):
        """A 50 Hz loop integrates in nanoseconds."""
        element = PIDElement(FeedbackType.POSITION, kI=1e-9, clock=clock)
        element.calculate(KineticState(1.0))
        for _ in range(50):
            clock.advance(milliseconds=20)
            output = element.calculate(KineticState(1.0))
        assert_allclose(output, 1.0, rtol=1e-9)


class TestSquIDElement:
    def test_sqrt_of_position_error(self, clock):
        """SquIDElement applies the square-root law to the selected channel."""
        element = SquIDElement(FeedbackType.POSITION, kP=1.0, clock=clock)
        assert element.calculate(KineticState(-4.0, 100.0)) == -2.0

    def test_velocity_type(self, clock):
        element = SquIDElement(FeedbackType.VELOCITY, kP=1.0, clock=clock)
        assert element.calculate(KineticState(100.0, 9.0)) == 3.0

    def test_wraps_squid_controller(self):
        element = SquIDElement(FeedbackType.POSITION, kP=1.0, clock=ManualClock())
        assert isinstance(element.controller, SquIDController)
