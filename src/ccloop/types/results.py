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
Result Types

Structured return values for control loop diagnostics and motion profile
inspection. Result types are TypedDict.

Usage
-----
>>> from ccloop.types.results import ControlOutput, ProfileTimings
>>>
>>> result: ControlOutput = system.calculate_detailed(measurement)
>>> print(result['feedback'], result['feedforward'])
>>>
>>> timings: ProfileTimings = profile.timings
>>> if timings['is_triangular']:
...     print(f"Peak velocity {timings['peak_velocity']:.2f}")
"""

from typing import TYPE_CHECKING

import numpy as np
from typing_extensions import TypedDict

if TYPE_CHECKING:
    from ccloop.kinetic_state import KineticState


# ============================================================================
# Control Loop Results
# ============================================================================


class ControlOutput(TypedDict):
    """
    One tick of a ControlSystem, broken into its contributions.

    Fields
    ------
    output : float
        Total power, ``feedback + feedforward``
    feedback : float
        Feedback element contribution
    feedforward : float
        Feedforward element contribution
    reference : KineticState
        Reference read from the interpolator this tick
    measurement : KineticState
        Filtered measurement
    error : KineticState
        ``reference - measurement``

    Examples
    --------
    >>> result: ControlOutput = system.calculate_detailed(KineticState(1.0))
    >>> assert result['output'] == result['feedback'] + result['feedforward']
    """

    output: float
    feedback: float
    feedforward: float
    reference: "KineticState"
    measurement: "KineticState"
    error: "KineticState"


# ============================================================================
# Motion Profile Results
# ============================================================================


class ProfileTimings(TypedDict):
    """
    Phase timings of a trapezoid profile for its current goal.

    Fields
    ------
    t_accel : float
        Duration of the acceleration phase (s)
    t_const : float
        Duration of the constant-velocity phase (s), 0 for triangular profiles
    t_decel : float
        Duration of the deceleration phase (s)
    t_decel_start : float
        Time at which deceleration begins (s)
    duration : float
        Total profile duration (s)
    peak_velocity : float
        Highest velocity reached, signed with the profile direction
    is_triangular : bool
        True if the goal is too close for the profile to reach max velocity
    """

    t_accel: float
    t_const: float
    t_decel: float
    t_decel_start: float
    duration: float
    peak_velocity: float
    is_triangular: bool


class ProfileSample(TypedDict):
    """
    Motion profile evaluated on a time grid.

    Fields
    ------
    t : np.ndarray
        Sample times (T,)
    position : np.ndarray
        Position at each time (T,)
    velocity : np.ndarray
        Velocity at each time (T,)
    acceleration : np.ndarray
        Acceleration at each time (T,)

    Examples
    --------
    >>> sample: ProfileSample = profile.sample(np.linspace(0, profile.duration, 100))
    >>> np.max(np.abs(sample['velocity'])) <= abs(profile.params.max_vel)
    True
    """

    t: np.ndarray
    position: np.ndarray
    velocity: np.ndarray
    acceleration: np.ndarray
