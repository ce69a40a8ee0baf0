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
PID and SquID Feedback

Time-integrating controllers and the feedback elements that wrap them.

Control Law
-----------
PID:
    u = kP*e + kI*S + kD*d

SquID (square-root proportional):
    u = sign(e)*sqrt(|kP*e|) + kI*S + kD*d

where e is the proportional error channel, d the derivative channel, and S
the integral of e over time.

Numerical Policy
----------------
- Integral: right-endpoint Riemann sum, ``S += e_k * (t_k - t_{k-1})``.
  The first sample after a gap contributes ``e * dt``, not an average.
- Time unit: ``dt`` is measured in nanoseconds, so kI is a per-nanosecond gain.
- First call: no time has elapsed, nothing is integrated. The output is
  ``kP*e + kD*d`` (plus ``kI*S``, which is 0 after construction or reset).
- Zero crossing: when the sign of e changes between calls the integral is
  cleared before accumulating, so windup does not carry across an overshoot.
- Derivative fallback: when no derivative error is supplied, d is
  ``(e_k - e_{k-1}) / dt``, and 0 when dt is 0.

Usage
-----
>>> clock = ManualClock()
>>> pid = PIDElement(FeedbackType.POSITION, PIDCoefficients(kP=0.5, kI=1e-9), clock=clock)
>>> power = pid.calculate(reference - measurement)
>>>
>>> # Retune live
>>> pid.set_gains(kP=0.8)
"""

import math
from dataclasses import dataclass, replace
from typing import Optional

import numpy as np

from ccloop.clock import MonotonicClock
from ccloop.feedback.base import FeedbackElement, FeedbackType
from ccloop.kinetic_state import KineticState
from ccloop.types.core import Timestamp
from ccloop.types.protocols import Clock


@dataclass
class PIDCoefficients:
    """
    Gains of a PID or SquID controller.

    Attributes
    ----------
    kP : float
        Proportional gain, multiplied by the error
    kI : float
        Integral gain, multiplied by the integral of the error over time
        (per nanosecond)
    kD : float
        Derivative gain, multiplied by the derivative of the error
    """

    kP: float
    kI: float = 0.0
    kD: float = 0.0


# ============================================================================
# Controllers
# ============================================================================


class PIDController:
    """
    Proportional-integral-derivative controller.

    Owns the integrator state. Not thread-safe; one controller belongs to
    one feedback element.

    Attributes
    ----------
    coefficients : PIDCoefficients
        Gains, read on every call
    reset_integral_on_zero_crossover : bool
        Clear the integral when the error changes sign
    last_error : float
        Proportional error from the previous call
    error_sum : float
        Accumulated integral of the error
    last_timestamp : Optional[int]
        Timestamp of the previous call, None before the first call

    Examples
    --------
    >>> controller = PIDController(PIDCoefficients(0.0, 1.0, 0.0))
    >>> [controller.calculate(t, 10.0, 0.0) for t in range(1, 6)]
    [0.0, 10.0, 20.0, 30.0, 40.0]
    """

    def __init__(
        self,
        coefficients: PIDCoefficients,
        reset_integral_on_zero_crossover: bool = True,
        clock: Optional[Clock] = None,
    ):
        """
        Initialize controller.

        Parameters
        ----------
        coefficients : PIDCoefficients
            Controller gains. Used as given, not copied.
        reset_integral_on_zero_crossover : bool
            Clear the integral when the error changes sign (default: True)
        clock : Optional[Clock]
            Used to measure time between timestamps. Defaults to MonotonicClock.
        """
        self.coefficients = coefficients
        self.reset_integral_on_zero_crossover = reset_integral_on_zero_crossover
        self.clock = clock if clock is not None else MonotonicClock()

        self.last_error: float = 0.0
        self.error_sum: float = 0.0
        self.last_timestamp: Optional[Timestamp] = None

    def calculate(
        self,
        timestamp: Timestamp,
        position_error: float,
        velocity_error: Optional[float] = None,
    ) -> float:
        """
        Compute the controller output and advance its state.

        Parameters
        ----------
        timestamp : int
            Current time in nanoseconds, from the same clock as every
            previous call
        position_error : float
            Proportional error channel, integrated over time
        velocity_error : Optional[float]
            Derivative error channel. If None, estimated from the change in
            position_error since the previous call.

        Returns
        -------
        float
            Controller output
        """
        if self.last_timestamp is None:
            self.last_error = position_error
            self.last_timestamp = timestamp

        if self.reset_integral_on_zero_crossover and np.sign(self.last_error) != np.sign(
            position_error
        ):
            self.error_sum = 0.0

        delta_t = self.clock.duration_between(self.last_timestamp, timestamp)
        self.error_sum += position_error * delta_t

        if velocity_error is None:
            velocity_error = (position_error - self.last_error) / delta_t if delta_t != 0.0 else 0.0

        self.last_error = position_error
        self.last_timestamp = timestamp

        c = self.coefficients
        return self._proportional(position_error) + c.kI * self.error_sum + c.kD * velocity_error

    def _proportional(self, error: float) -> float:
        return self.coefficients.kP * error

    def reset(self) -> None:
        """Return to the state before the first call."""
        self.error_sum = 0.0
        self.last_error = 0.0
        self.last_timestamp = None

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}({self.coefficients}, "
            f"error_sum={self.error_sum}, last_timestamp={self.last_timestamp})"
        )


class SquIDController(PIDController):
    """
    Square-root proportional + ID controller.

    Identical to PIDController except that the proportional term is
    ``sign(e) * sqrt(|kP * e|)``, which softens the response near the
    setpoint and keeps its sign for negative errors.

    Examples
    --------
    >>> controller = SquIDController(PIDCoefficients(kP=1.0))
    >>> round(controller.calculate(0, 10.0, 0.0), 4)
    3.1623
    """

    def _proportional(self, error: float) -> float:
        return math.sqrt(abs(self.coefficients.kP * error)) * float(np.sign(error))


# ============================================================================
# Feedback Elements
# ============================================================================


class _IntegratingFeedback(FeedbackElement):
    """Feedback element wrapping a PIDController subclass."""

    controller_class = PIDController

    def __init__(
        self,
        feedback_type: FeedbackType,
        coefficients: Optional[PIDCoefficients] = None,
        *,
        kP: float = 0.0,
        kI: float = 0.0,
        kD: float = 0.0,
        reset_integral_on_zero_crossover: bool = True,
        clock: Optional[Clock] = None,
    ):
        """
        Initialize feedback element.

        Parameters
        ----------
        feedback_type : FeedbackType
            POSITION feeds (position, velocity) error to the controller,
            VELOCITY feeds (velocity, acceleration)
        coefficients : Optional[PIDCoefficients]
            Gains. Copied, so later changes to the passed object have no
            effect; use set_gains() to retune.
        kP, kI, kD : float
            Loose gains, used when coefficients is None
        reset_integral_on_zero_crossover : bool
            Clear the integral when the error changes sign (default: True)
        clock : Optional[Clock]
            Time source for the integral. Defaults to MonotonicClock.

        Raises
        ------
        TypeError
            If both coefficients and loose gains are given
        """
        if coefficients is None:
            coefficients = PIDCoefficients(kP, kI, kD)
        elif kP or kI or kD:
            raise TypeError("Pass either coefficients or kP/kI/kD, not both")
        else:
            coefficients = replace(coefficients)

        self.feedback_type = FeedbackType(feedback_type)
        self.clock = clock if clock is not None else MonotonicClock()
        self._controller = self.controller_class(
            coefficients, reset_integral_on_zero_crossover, self.clock
        )

    @property
    def coefficients(self) -> PIDCoefficients:
        """Gains currently in use."""
        return self._controller.coefficients

    @property
    def controller(self) -> PIDController:
        """The wrapped controller, for inspecting integrator state."""
        return self._controller

    def set_gains(
        self, kP: Optional[float] = None, kI: Optional[float] = None, kD: Optional[float] = None
    ) -> None:
        """
        Hot-swap gains. Omitted gains keep their value; integrator state is
        kept.
        """
        c = self._controller.coefficients
        if kP is not None:
            c.kP = kP
        if kI is not None:
            c.kI = kI
        if kD is not None:
            c.kD = kD

    def calculate(self, error: KineticState) -> float:
        return self.calculate_at(self.clock.now(), error)

    def calculate_at(self, timestamp: Timestamp, error: KineticState) -> float:
        """Compute the output for an error observed at an explicit timestamp."""
        proportional, derivative = self.feedback_type.select(error)
        return self._controller.calculate(timestamp, proportional, derivative)

    def reset(self) -> None:
        self._controller.reset()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.feedback_type.name}, {self.coefficients})"


class PIDElement(_IntegratingFeedback):
    """
    Feedback element wrapping a PIDController.

    Examples
    --------
    >>> pid = PIDElement(FeedbackType.POSITION, kP=1.0)
    >>> pid.calculate(KineticState(2.5, 1.0))
    2.5
    >>>
    >>> vel_pid = PIDElement(FeedbackType.VELOCITY, PIDCoefficients(0.1, 0.0, 0.01))
    """

    controller_class = PIDController


class SquIDElement(_IntegratingFeedback):
    """
    Feedback element wrapping a SquIDController.

    Examples
    --------
    >>> squid = SquIDElement(FeedbackType.POSITION, kP=1.0)
    >>> squid.calculate(KineticState(-4.0))
    -2.0
    """

    controller_class = SquIDController
