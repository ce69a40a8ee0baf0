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
Control System - Composition of the Four Loop Stages

A ControlSystem runs one tick of a feedback/feedforward loop:

    measurement -> [filter] -> filtered
    [interpolator] -> reference                (read once per tick)
    error = reference - filtered
    output = feedback(error) + feedforward(reference)

Each stage is an independently replaceable element, fixed at construction.

Usage
-----
>>> system = ControlSystem(
...     feedback=PIDElement(FeedbackType.POSITION, kP=0.05),
...     feedforward=ElevatorFeedforward(kG=0.1),
...     filter=FilterElement(),
...     interpolator=ConstantInterpolator(),
... )
>>> system.goal = KineticState(100.0)
>>> power = system.calculate(KineticState(80.0))
>>>
>>> # Or with the builder
>>> system = ControlSystem.builder().pos_pid(0.05).elevator_ff(kG=0.1).build()
"""

from typing import TYPE_CHECKING, Optional

from ccloop.feedback.base import FeedbackElement
from ccloop.feedforward.base import FeedforwardElement
from ccloop.filters.filter_element import FilterElement
from ccloop.interpolators.base import InterpolatorElement
from ccloop.kinetic_state import KineticState
from ccloop.types.results import ControlOutput

if TYPE_CHECKING:
    from ccloop.builder import ControlSystemBuilder


class ControlSystem:
    """
    A complete control loop.

    Not thread-safe. Call calculate() from one thread at a time; elements
    carry state between calls.

    Parameters
    ----------
    feedback : FeedbackElement
        Turns the error into power
    feedforward : FeedforwardElement
        Turns the reference into power
    filter : FilterElement
        Filters the raw measurement, channel by channel
    interpolator : InterpolatorElement
        Owns the goal and produces the reference

    Attributes
    ----------
    last_measurement : KineticState
        Filtered measurement from the most recent tick
    last_reference : Optional[KineticState]
        Reference from the most recent tick, None before the first tick

    Raises
    ------
    TypeError
        If an element does not implement its stage's interface
    """

    def __init__(
        self,
        feedback: FeedbackElement,
        feedforward: FeedforwardElement,
        filter: FilterElement,
        interpolator: InterpolatorElement,
    ):
        _require(feedback, FeedbackElement, "feedback")
        _require(feedforward, FeedforwardElement, "feedforward")
        _require(filter, FilterElement, "filter")
        _require(interpolator, InterpolatorElement, "interpolator")

        self.feedback = feedback
        self.feedforward = feedforward
        self.filter = filter
        self.interpolator = interpolator

        self.last_measurement = KineticState()
        self.last_reference: Optional[KineticState] = None

    @classmethod
    def builder(cls) -> "ControlSystemBuilder":
        """Start a ControlSystemBuilder."""
        from ccloop.builder import ControlSystemBuilder

        return ControlSystemBuilder()

    # ========================================================================
    # Goal
    # ========================================================================

    @property
    def goal(self) -> KineticState:
        """The interpolator's goal."""
        return self.interpolator.goal

    @goal.setter
    def goal(self, value: KineticState) -> None:
        self.interpolator.goal = value

    # ========================================================================
    # Evaluation
    # ========================================================================

    def calculate(self, measurement: KineticState = KineticState()) -> float:
        """
        Run one tick and return the power to apply.

        Parameters
        ----------
        measurement : KineticState
            Current sensor reading. Leave at the default for
            feedforward-only systems.

        Returns
        -------
        float
            ``feedback(error) + feedforward(reference)``
        """
        return self.calculate_detailed(measurement)["output"]

    def calculate_detailed(self, measurement: KineticState = KineticState()) -> ControlOutput:
        """
        Run one tick and return every intermediate value.

        Parameters
        ----------
        measurement : KineticState
            Current sensor reading

        Returns
        -------
        ControlOutput
            Output, the feedback and feedforward contributions, and the
            reference, filtered measurement and error used to compute them

        Examples
        --------
        >>> result = system.calculate_detailed(KineticState(80.0))
        >>> result['error']
        KineticState(position=20.0, velocity=0.0, acceleration=0.0)
        """
        filtered = self.filter.filter(measurement)
        self.last_measurement = filtered

        reference = self.interpolator.current_reference
        self.last_reference = reference

        error = reference - filtered
        feedback = self.feedback.calculate(error)
        feedforward = self.feedforward.calculate(reference)

        return ControlOutput(
            output=feedback + feedforward,
            feedback=feedback,
            feedforward=feedforward,
            reference=reference,
            measurement=filtered,
            error=error,
        )

    def is_within_tolerance(self, tolerance: KineticState) -> bool:
        """
        Whether the last filtered measurement is within tolerance of the goal.

        Every channel must satisfy ``|goal - last_measurement| <= tolerance``.
        Before the first tick the last measurement is the zero state.
        """
        diff = self.goal - self.last_measurement
        return (
            abs(diff.position) <= tolerance.position
            and abs(diff.velocity) <= tolerance.velocity
            and abs(diff.acceleration) <= tolerance.acceleration
        )

    def reset(self) -> None:
        """Reset all four elements. The goal and last measurement are kept."""
        self.feedback.reset()
        self.feedforward.reset()
        self.filter.reset()
        self.interpolator.reset()

    def __repr__(self) -> str:
        return (
            f"ControlSystem(feedback={self.feedback!r}, feedforward={self.feedforward!r}, "
            f"filter={self.filter!r}, interpolator={self.interpolator!r})"
        )


def _require(element, kind: type, name: str) -> None:
    if not isinstance(element, kind):
        raise TypeError(f"{name} must be a {kind.__name__}, got {type(element).__name__}")
