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
Trapezoid Motion Profile

Plans motion from rest at position 0 to a goal position in three
constant-acceleration phases:

1. Accelerate at ``accel`` up to ``max_vel``
2. Cruise at ``max_vel``
3. Decelerate at ``decel`` down to rest at the goal

Phase Timings
-------------
    t_accel = max_vel / accel
    t_decel = max_vel / decel
    const_dist = goal - (accel*t_accel^2/2 + decel*t_decel^2/2)
    t_const = const_dist / max_vel

Timings are derived from the goal and parameters on every evaluation, so
changing either takes effect on the next read.

Short Moves
-----------
When the goal is too close to reach max_vel (t_const < 0) the profile is
triangular: it peaks at

    v_peak = sign(max_vel) * sqrt(2*goal*accel*decel / (accel + decel))

and starts decelerating immediately. A goal on the opposite side of 0 from
the profile direction cannot be reached; the peak is 0 and the profile
stays at rest. A NaN goal gives a NaN peak velocity, so every
state after t = 0 has a NaN position.

After the profile ends it holds the final position with zero velocity and
acceleration.

Usage
-----
>>> profile = TrapezoidProfile(TrapezoidProfileParameters(max_vel=2.0, accel=1.0))
>>> profile.goal = KineticState(10.0)
>>> profile.duration
7.0
>>> profile[1.0]
KineticState(position=0.5, velocity=1.0, acceleration=1.0)
"""

import math
import warnings
from dataclasses import dataclass, replace
from typing import Optional

import numpy as np

from ccloop.clock import MonotonicClock
from ccloop.interpolators.base import InterpolatorElement
from ccloop.kinetic_state import KineticState
from ccloop.types.core import NANOSECONDS_PER_SECOND, ArrayLike, Timestamp
from ccloop.types.protocols import Clock
from ccloop.types.results import ProfileSample, ProfileTimings
from ccloop.validation import validate_same_sign


@dataclass
class TrapezoidProfileParameters:
    """
    Limits of a trapezoid profile.

    All three values must be nonzero and share one sign; the sign is the
    direction of travel.

    Attributes
    ----------
    max_vel : float
        Cruise velocity
    accel : float
        Acceleration during the first phase
    decel : Optional[float]
        Deceleration during the last phase (default: accel)

    Raises
    ------
    ValidationError
        If any value is zero or NaN, or the signs disagree
    """

    max_vel: float
    accel: float
    decel: Optional[float] = None

    def __post_init__(self):
        if self.decel is None:
            self.decel = self.accel
        validate_same_sign(max_vel=self.max_vel, accel=self.accel, decel=self.decel)


class TrapezoidProfile:
    """
    Time-indexed trapezoid motion profile.

    Index with a time in seconds to get the planned state:
    ``profile[t] -> KineticState``.

    Attributes
    ----------
    params : TrapezoidProfileParameters
        Velocity and acceleration limits, copied at construction
    goal : KineticState
        Target; only the position channel is used
    """

    def __init__(self, params: TrapezoidProfileParameters, goal: Optional[KineticState] = None):
        self.params = replace(params)
        self._goal = KineticState()
        if goal is not None:
            self.goal = goal

    @property
    def goal(self) -> KineticState:
        return self._goal

    @goal.setter
    def goal(self, value: KineticState) -> None:
        if value.position * self.params.max_vel < 0:
            warnings.warn(
                f"Goal position {value.position} is opposite to the profile direction "
                f"(max_vel={self.params.max_vel}); the profile will stay at rest",
                UserWarning,
                stacklevel=2,
            )
        self._goal = value

    # ========================================================================
    # Timings
    # ========================================================================

    def _peak_velocity(self) -> float:
        p = self.params
        if math.isnan(self._goal.position):
            return math.nan
        t_accel = p.max_vel / p.accel
        t_decel = p.max_vel / p.decel
        const_dist = self._goal.position - (
            0.5 * p.accel * t_accel**2 + 0.5 * p.decel * t_decel**2
        )
        if const_dist / p.max_vel >= 0:
            return p.max_vel

        radicand = 2.0 * self._goal.position * p.accel * p.decel / (p.accel + p.decel)
        if not radicand > 0:
            return 0.0
        return math.copysign(math.sqrt(radicand), p.max_vel)

    @property
    def timings(self) -> ProfileTimings:
        """
        Phase timings for the current goal.

        Returns
        -------
        ProfileTimings
            Durations of each phase, the peak velocity and whether the
            profile is triangular

        Examples
        --------
        >>> profile = TrapezoidProfile(TrapezoidProfileParameters(2.0, 1.0), KineticState(2.0))
        >>> profile.timings['is_triangular'], profile.timings['peak_velocity']
        (True, 1.4142135623730951)
        """
        p = self.params
        v = self._peak_velocity()
        t_accel = v / p.accel
        t_decel = v / p.decel
        if v == p.max_vel:
            const_dist = self._goal.position - (
                0.5 * p.accel * t_accel**2 + 0.5 * p.decel * t_decel**2
            )
            t_const = const_dist / v
        else:
            t_const = 0.0

        return ProfileTimings(
            t_accel=t_accel,
            t_const=t_const,
            t_decel=t_decel,
            t_decel_start=t_accel + t_const,
            duration=t_accel + t_const + t_decel,
            peak_velocity=v,
            is_triangular=v != p.max_vel,
        )

    @property
    def duration(self) -> float:
        """Total time from start to rest at the goal (s)."""
        return self.timings["duration"]

    # ========================================================================
    # Evaluation
    # ========================================================================

    def __getitem__(self, t: float) -> KineticState:
        """
        Planned state at time t.

        Parameters
        ----------
        t : float
            Seconds since the profile started

        Returns
        -------
        KineticState
            Position, velocity and acceleration at t
        """
        if t <= 0:
            return KineticState()

        timings = self.timings
        accel = self.params.accel
        decel = self.params.decel
        v = timings["peak_velocity"]
        t_accel = timings["t_accel"]
        t_decel_start = timings["t_decel_start"]

        accel_end = 0.5 * accel * t_accel**2
        cruise_end = accel_end + v * timings["t_const"]

        if t <= t_accel:
            return _segment(0.0, 0.0, accel, t)
        if t <= t_decel_start:
            return _segment(accel_end, v, 0.0, t - t_accel)
        if t < timings["duration"]:
            return _segment(cruise_end, v, -decel, t - t_decel_start)

        final = _segment(cruise_end, v, -decel, timings["t_decel"])
        return KineticState(final.position, 0.0, 0.0)

    def sample(self, times: ArrayLike) -> ProfileSample:
        """
        Evaluate the profile on a time grid.

        Parameters
        ----------
        times : ArrayLike
            Sample times in seconds (T,)

        Returns
        -------
        ProfileSample
            Time grid and the position, velocity and acceleration at each
            time

        Examples
        --------
        >>> sample = profile.sample(np.linspace(0.0, profile.duration, 50))
        >>> bool(np.isclose(sample['position'][-1], profile.goal.position))
        True
        """
        t = np.asarray(times, dtype=float).reshape(-1)
        states = np.array([self[float(ti)].as_array() for ti in t]).reshape(-1, 3)
        return ProfileSample(
            t=t,
            position=states[:, 0],
            velocity=states[:, 1],
            acceleration=states[:, 2],
        )

    def __repr__(self) -> str:
        return f"TrapezoidProfile({self.params}, goal={self._goal})"


def _segment(x0: float, v0: float, a: float, tau: float) -> KineticState:
    return KineticState(x0 + v0 * tau + 0.5 * a * tau**2, v0 + a * tau, a)


class TrapezoidInterpolator(InterpolatorElement):
    """
    Interpolator that follows a trapezoid profile in real time.

    The profile clock starts at the first ``current_reference`` read after
    construction or reset(). Changing the goal does not restart the clock.

    Parameters
    ----------
    params : TrapezoidProfileParameters or float
        Profile limits, or max_vel when accel is also given
    accel : Optional[float]
        Acceleration, when params is a bare max_vel
    decel : Optional[float]
        Deceleration (default: accel)
    clock : Optional[Clock]
        Time source (default: MonotonicClock)

    Examples
    --------
    >>> clock = ManualClock()
    >>> interp = TrapezoidInterpolator(2.0, 1.0, clock=clock)
    >>> interp.goal = KineticState(10.0)
    >>> interp.current_reference
    KineticState(position=0.0, velocity=0.0, acceleration=0.0)
    >>> clock.advance(seconds=1.0)
    >>> interp.current_reference
    KineticState(position=0.5, velocity=1.0, acceleration=1.0)
    """

    def __init__(
        self,
        params,
        accel: Optional[float] = None,
        decel: Optional[float] = None,
        *,
        clock: Optional[Clock] = None,
    ):
        if isinstance(params, TrapezoidProfileParameters):
            if accel is not None or decel is not None:
                raise TypeError("Pass either TrapezoidProfileParameters or max_vel/accel/decel")
        else:
            if accel is None:
                raise TypeError("accel is required when max_vel is given directly")
            params = TrapezoidProfileParameters(params, accel, decel)

        self.profile = TrapezoidProfile(params)
        self.clock = clock if clock is not None else MonotonicClock()
        self.start_timestamp: Optional[Timestamp] = None

    @property
    def goal(self) -> KineticState:
        return self.profile.goal

    @goal.setter
    def goal(self, value: KineticState) -> None:
        self.profile.goal = value

    @property
    def elapsed(self) -> float:
        """Seconds since the profile started, 0 before the first read."""
        if self.start_timestamp is None:
            return 0.0
        return (
            self.clock.duration_between(self.start_timestamp, self.clock.now())
            / NANOSECONDS_PER_SECOND
        )

    @property
    def current_reference(self) -> KineticState:
        if self.start_timestamp is None:
            self.start_timestamp = self.clock.now()
        return self.profile[self.elapsed]

    def reset(self) -> None:
        self.start_timestamp = None

    def __repr__(self) -> str:
        return f"TrapezoidInterpolator({self.profile!r}, start={self.start_timestamp})"
