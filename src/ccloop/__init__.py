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
Composable Control Loops
========================

A control loop built from four replaceable stages (measurement filter,
goal interpolator, feedback, feedforward) and evaluated as one scalar
power per tick.

Quick Start
-----------
>>> from ccloop import ControlSystem, KineticState
>>>
>>> system = (
...     ControlSystem.builder()
...     .pos_pid(0.05, 0.0, 0.002)
...     .elevator_ff(kG=0.12)
...     .trapezoid_interpolator(40.0, 80.0)
...     .build()
... )
>>> system.goal = KineticState(100.0)
>>>
>>> while not system.is_within_tolerance(KineticState(1.0, 5.0, float('inf'))):
...     motor.power = system.calculate(KineticState(encoder.position, encoder.velocity))

Elements
--------
>>> from ccloop import (
...     PIDElement, SquIDElement, BangBangElement, AngularFeedback,
...     BasicFeedforward, ElevatorFeedforward, ArmFeedforward,
...     LowPassFilter, ChainedFilter, FilterElement,
...     ConstantInterpolator, FirstOrderEMAInterpolator, TrapezoidInterpolator,
... )

Time
----
Time-dependent elements read an injectable Clock. Use ManualClock in tests
and simulations:

>>> from ccloop import ManualClock
>>> clock = ManualClock()
>>> system = ControlSystem.builder().clock(clock).pos_pid(1.0, 1e-9).build()
>>> clock.advance(milliseconds=20)

Authors
-------
Gil Benezer

License
-------
GNU Affero General Public License v3.0
"""

from .builder import ControlSystemBuilder, FeedbackElementBuilder, FilterBuilder, control_system
from .clock import ManualClock, MonotonicClock
from .control_system import ControlSystem
from .feedback import (
    AngleType,
    AngularFeedback,
    BangBangElement,
    FeedbackElement,
    FeedbackType,
    NullFeedback,
    PIDCoefficients,
    PIDController,
    PIDElement,
    SquIDController,
    SquIDElement,
    normalize_angle,
)
from .feedforward import (
    ArmFeedforward,
    BasicFeedforward,
    BasicFeedforwardParameters,
    ElevatorFeedforward,
    FeedforwardElement,
    GravityFeedforwardParameters,
    NullFeedforward,
)
from .filters import (
    ChainedFilter,
    Filter,
    FilterElement,
    LowPassFilter,
    LowPassParameters,
    PassThroughFilter,
)
from .interpolators import (
    ConstantInterpolator,
    FirstOrderEMAInterpolator,
    FirstOrderEMAParameters,
    InterpolatorElement,
    TrapezoidInterpolator,
    TrapezoidProfile,
    TrapezoidProfileParameters,
)
from .kinetic_state import KineticState
from .types import Clock, ControlOutput, ProfileSample, ProfileTimings
from .validation import ValidationError

__version__ = "1.0.0"
__author__ = "Gil Benezer"

__all__ = [
    # Core
    "KineticState",
    "ControlSystem",
    "ControlOutput",
    "ValidationError",
    # Builder
    "ControlSystemBuilder",
    "FeedbackElementBuilder",
    "FilterBuilder",
    "control_system",
    # Time
    "Clock",
    "MonotonicClock",
    "ManualClock",
    # Feedback
    "FeedbackElement",
    "FeedbackType",
    "NullFeedback",
    "PIDCoefficients",
    "PIDController",
    "SquIDController",
    "PIDElement",
    "SquIDElement",
    "BangBangElement",
    "AngleType",
    "AngularFeedback",
    "normalize_angle",
    # Feedforward
    "FeedforwardElement",
    "NullFeedforward",
    "BasicFeedforward",
    "BasicFeedforwardParameters",
    "ElevatorFeedforward",
    "ArmFeedforward",
    "GravityFeedforwardParameters",
    # Filters
    "Filter",
    "PassThroughFilter",
    "LowPassFilter",
    "LowPassParameters",
    "ChainedFilter",
    "FilterElement",
    # Interpolators
    "InterpolatorElement",
    "ConstantInterpolator",
    "FirstOrderEMAInterpolator",
    "FirstOrderEMAParameters",
    "TrapezoidProfile",
    "TrapezoidProfileParameters",
    "TrapezoidInterpolator",
    "ProfileTimings",
    "ProfileSample",
]
