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
Control System Builder - Fluent Configuration

Assembles a ControlSystem stage by stage. Every stage has a default, so a
builder only names what differs:

- feedback: NullFeedback
- feedforward: NullFeedforward
- filters: pass-through on every channel
- interpolator: ConstantInterpolator at the zero state

Elements are created at build() time, so a clock given with ``.clock()``
reaches the time-dependent ones no matter where it appears in the chain, and
every build() gets elements of its own. An element instance passed in
directly (``feedback()``, ``feedforward()``, ``interpolator()``,
``custom()``) can belong to one ControlSystem only; a second build() that
would reuse it raises RuntimeError.

Usage
-----
>>> system = (
...     ControlSystem.builder()
...     .pos_pid(0.05, 0.0, 0.001)
...     .elevator_ff(kG=0.1)
...     .pos_filter(lambda f: f.low_pass(0.2))
...     .build()
... )
>>>
>>> # Functional form
>>> turret = control_system(
...     lambda b: b.angular(AngleType.DEGREES, lambda fb: fb.pos_pid(0.01)).basic_ff(kS=0.05)
... )
"""

from typing import Callable, List, Optional

from ccloop.control_system import ControlSystem
from ccloop.feedback.angular import AngleType, AngularFeedback
from ccloop.feedback.bang_bang import BangBangElement
from ccloop.feedback.base import FeedbackElement, FeedbackType, NullFeedback
from ccloop.feedback.pid import PIDCoefficients, PIDElement, SquIDElement
from ccloop.feedforward.base import FeedforwardElement, NullFeedforward
from ccloop.feedforward.basic import BasicFeedforward, BasicFeedforwardParameters
from ccloop.feedforward.gravity import (
    ArmFeedforward,
    ElevatorFeedforward,
    GravityFeedforwardParameters,
)
from ccloop.filters.base import Filter, PassThroughFilter
from ccloop.filters.chained import ChainedFilter
from ccloop.filters.filter_element import FilterElement
from ccloop.filters.low_pass import LowPassFilter, LowPassParameters
from ccloop.interpolators.base import ConstantInterpolator, InterpolatorElement
from ccloop.interpolators.ema import FirstOrderEMAInterpolator
from ccloop.interpolators.trapezoid import TrapezoidInterpolator, TrapezoidProfileParameters
from ccloop.kinetic_state import KineticState
from ccloop.types.protocols import Clock

FeedbackFactory = Callable[[Optional[Clock]], FeedbackElement]


class _HandOver:
    """Factory that gives a caller-supplied element to the first build only."""

    def __init__(self, element):
        self.element = element
        self.taken = False

    def __call__(self, clock: Optional[Clock] = None):
        if self.taken:
            raise RuntimeError(
                f"{self.element!r} already belongs to a ControlSystem; "
                "pass a new instance before building again"
            )
        self.taken = True
        return self.element


def _coefficients(kP, kI: float, kD: float) -> PIDCoefficients:
    if isinstance(kP, PIDCoefficients):
        if kI or kD:
            raise TypeError("Pass either PIDCoefficients or kP/kI/kD, not both")
        return kP
    return PIDCoefficients(kP, kI, kD)


# ============================================================================
# Element Builders
# ============================================================================


class FeedbackElementBuilder:
    """
    Chooses one feedback element. The last call wins.

    PID and SquID methods take either a PIDCoefficients in place of kP or
    the gains themselves: ``pos_pid(PIDCoefficients(1.0))`` or
    ``pos_pid(1.0, 0.0, 0.1)``.
    """

    def __init__(self):
        self._factory: FeedbackFactory = lambda clock: NullFeedback()

    def custom(self, feedback: FeedbackElement) -> "FeedbackElementBuilder":
        if not isinstance(feedback, FeedbackElement):
            raise TypeError(
                f"feedback must be a FeedbackElement, got {type(feedback).__name__}"
            )
        self._factory = _HandOver(feedback)
        return self

    def _integrating(self, cls, feedback_type, kP, kI, kD) -> "FeedbackElementBuilder":
        gains = _coefficients(kP, kI, kD)
        self._factory = lambda clock: cls(feedback_type, gains, clock=clock)
        return self

    def pos_pid(self, kP=0.0, kI: float = 0.0, kD: float = 0.0) -> "FeedbackElementBuilder":
        return self._integrating(PIDElement, FeedbackType.POSITION, kP, kI, kD)

    def vel_pid(self, kP=0.0, kI: float = 0.0, kD: float = 0.0) -> "FeedbackElementBuilder":
        return self._integrating(PIDElement, FeedbackType.VELOCITY, kP, kI, kD)

    def pos_squid(self, kP=0.0, kI: float = 0.0, kD: float = 0.0) -> "FeedbackElementBuilder":
        return self._integrating(SquIDElement, FeedbackType.POSITION, kP, kI, kD)

    def vel_squid(self, kP=0.0, kI: float = 0.0, kD: float = 0.0) -> "FeedbackElementBuilder":
        return self._integrating(SquIDElement, FeedbackType.VELOCITY, kP, kI, kD)

    def bang_bang(self, feedback_type: FeedbackType = FeedbackType.POSITION):
        self._factory = lambda clock: BangBangElement(feedback_type)
        return self

    def angular(
        self, angle_type: AngleType, configure: Callable[["FeedbackElementBuilder"], object]
    ) -> "FeedbackElementBuilder":
        """Wrap the feedback configured by ``configure`` in AngularFeedback."""
        inner = FeedbackElementBuilder()
        configure(inner)
        self._factory = lambda clock: AngularFeedback(angle_type, inner.build(clock))
        return self

    def build(self, clock: Optional[Clock] = None) -> FeedbackElement:
        return self._factory(clock)


class FilterBuilder:
    """
    Collects filters for one measurement channel, applied in the order added.

    Holds one factory per filter; build() creates fresh filters each time.
    """

    def __init__(self):
        self.factories: List[Callable[[], Filter]] = []

    def custom(self, filter: Filter) -> "FilterBuilder":
        if not isinstance(filter, Filter):
            raise TypeError(f"filter must be a Filter, got {type(filter).__name__}")
        self.factories.append(_HandOver(filter))
        return self

    def low_pass(self, alpha, starting_estimate: float = 0.0) -> "FilterBuilder":
        """Add a low-pass filter from an alpha or a LowPassParameters."""
        if isinstance(alpha, LowPassParameters):
            prototype = LowPassFilter(alpha)
        else:
            prototype = LowPassFilter(alpha, starting_estimate)
        self.factories.append(lambda: LowPassFilter(prototype.parameters))
        return self

    def build(self) -> Filter:
        """
        Returns
        -------
        Filter
            PassThroughFilter for no filters, the filter itself for one,
            otherwise a ChainedFilter
        """
        filters = [factory() for factory in self.factories]
        if not filters:
            return PassThroughFilter()
        if len(filters) == 1:
            return filters[0]
        return ChainedFilter(*filters)


# ============================================================================
# Control System Builder
# ============================================================================


class ControlSystemBuilder:
    """
    Fluent builder for ControlSystem.

    Every method returns the builder. Call build() to get the system.

    Examples
    --------
    >>> clock = ManualClock()
    >>> system = (
    ...     ControlSystemBuilder()
    ...     .clock(clock)
    ...     .vel_pid(0.1, 1e-9)
    ...     .basic_ff(kV=0.02)
    ...     .trapezoid_interpolator(2.0, 1.0)
    ...     .build()
    ... )
    """

    def __init__(self):
        self._feedback = FeedbackElementBuilder()
        self._feedforward: Callable[[], FeedforwardElement] = NullFeedforward
        self._pos_filter = FilterBuilder()
        self._vel_filter = FilterBuilder()
        self._accel_filter = FilterBuilder()
        self._interpolator: Callable[[Optional[Clock]], InterpolatorElement] = (
            lambda clock: ConstantInterpolator(KineticState())
        )
        self._clock: Optional[Clock] = None

    def clock(self, clock: Clock) -> "ControlSystemBuilder":
        """Time source for every time-dependent element."""
        self._clock = clock
        return self

    # Feedback ---------------------------------------------------------------

    def feedback(self, feedback: FeedbackElement) -> "ControlSystemBuilder":
        self._feedback.custom(feedback)
        return self

    def pos_pid(self, kP=0.0, kI: float = 0.0, kD: float = 0.0) -> "ControlSystemBuilder":
        self._feedback.pos_pid(kP, kI, kD)
        return self

    def vel_pid(self, kP=0.0, kI: float = 0.0, kD: float = 0.0) -> "ControlSystemBuilder":
        self._feedback.vel_pid(kP, kI, kD)
        return self

    def pos_squid(self, kP=0.0, kI: float = 0.0, kD: float = 0.0) -> "ControlSystemBuilder":
        self._feedback.pos_squid(kP, kI, kD)
        return self

    def vel_squid(self, kP=0.0, kI: float = 0.0, kD: float = 0.0) -> "ControlSystemBuilder":
        self._feedback.vel_squid(kP, kI, kD)
        return self

    def bang_bang(
        self, feedback_type: FeedbackType = FeedbackType.POSITION
    ) -> "ControlSystemBuilder":
        self._feedback.bang_bang(feedback_type)
        return self

    def angular(
        self, angle_type: AngleType, configure: Callable[[FeedbackElementBuilder], object]
    ) -> "ControlSystemBuilder":
        self._feedback.angular(angle_type, configure)
        return self

    # Feedforward ------------------------------------------------------------

    def feedforward(self, feedforward: FeedforwardElement) -> "ControlSystemBuilder":
        if not isinstance(feedforward, FeedforwardElement):
            raise TypeError(
                f"feedforward must be a FeedforwardElement, got {type(feedforward).__name__}"
            )
        self._feedforward = _HandOver(feedforward)
        return self

    def basic_ff(
        self,
        parameters: Optional[BasicFeedforwardParameters] = None,
        *,
        kV: float = 0.0,
        kA: float = 0.0,
        kS: float = 0.0,
    ) -> "ControlSystemBuilder":
        prototype = BasicFeedforward(parameters, kV=kV, kA=kA, kS=kS)
        self._feedforward = lambda: BasicFeedforward(prototype.parameters)
        return self

    def elevator_ff(
        self,
        parameters: Optional[GravityFeedforwardParameters] = None,
        *,
        kG: float = 0.0,
        kV: float = 0.0,
        kA: float = 0.0,
        kS: float = 0.0,
    ) -> "ControlSystemBuilder":
        prototype = ElevatorFeedforward(parameters, kG=kG, kV=kV, kA=kA, kS=kS)
        self._feedforward = lambda: ElevatorFeedforward(prototype.parameters)
        return self

    def arm_ff(
        self,
        parameters: Optional[GravityFeedforwardParameters] = None,
        *,
        kG: float = 0.0,
        kV: float = 0.0,
        kA: float = 0.0,
        kS: float = 0.0,
        position_to_angle: Optional[Callable[[float], float]] = None,
    ) -> "ControlSystemBuilder":
        prototype = ArmFeedforward(
            parameters, kG=kG, kV=kV, kA=kA, kS=kS, position_to_angle=position_to_angle
        )
        self._feedforward = lambda: ArmFeedforward(
            prototype.parameters, position_to_angle=prototype.position_to_angle
        )
        return self

    # Filters ----------------------------------------------------------------

    def pos_filter(self, configure: Callable[[FilterBuilder], object]) -> "ControlSystemBuilder":
        configure(self._pos_filter)
        return self

    def vel_filter(self, configure: Callable[[FilterBuilder], object]) -> "ControlSystemBuilder":
        configure(self._vel_filter)
        return self

    def accel_filter(self, configure: Callable[[FilterBuilder], object]) -> "ControlSystemBuilder":
        configure(self._accel_filter)
        return self

    # Interpolator -----------------------------------------------------------

    def interpolator(self, interpolator: InterpolatorElement) -> "ControlSystemBuilder":
        if not isinstance(interpolator, InterpolatorElement):
            raise TypeError(
                f"interpolator must be an InterpolatorElement, got {type(interpolator).__name__}"
            )
        self._interpolator = _HandOver(interpolator)
        return self

    def ema_interpolator(
        self, alpha, starting_reference: Optional[KineticState] = None
    ) -> "ControlSystemBuilder":
        """Use a FirstOrderEMAInterpolator, from an alpha or FirstOrderEMAParameters."""
        prototype = FirstOrderEMAInterpolator(alpha, starting_reference)
        self._interpolator = lambda clock: FirstOrderEMAInterpolator(prototype.parameters)
        return self

    def trapezoid_interpolator(
        self, params, accel: Optional[float] = None, decel: Optional[float] = None
    ) -> "ControlSystemBuilder":
        """Use a TrapezoidInterpolator, from limits or TrapezoidProfileParameters."""
        if not isinstance(params, TrapezoidProfileParameters):
            if accel is None:
                raise TypeError("accel is required when max_vel is given directly")
            params = TrapezoidProfileParameters(params, accel, decel)
        self._interpolator = lambda clock: TrapezoidInterpolator(params, clock=clock)
        return self

    # Build ------------------------------------------------------------------

    def build(self) -> ControlSystem:
        return ControlSystem(
            feedback=self._feedback.build(self._clock),
            feedforward=self._feedforward(),
            filter=FilterElement(
                self._pos_filter.build(),
                self._vel_filter.build(),
                self._accel_filter.build(),
            ),
            interpolator=self._interpolator(self._clock),
        )


def control_system(configure: Callable[[ControlSystemBuilder], object]) -> ControlSystem:
    """
    Build a ControlSystem by configuring a fresh builder.

    Examples
    --------
    >>> system = control_system(lambda b: b.pos_pid(1.0).ema_interpolator(0.5))
    """
    builder = ControlSystemBuilder()
    configure(builder)
    return builder.build()
