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
Unit Tests for AngularFeedback and Angle Normalization
"""

import math

import numpy as np
import pytest

from ccloop.clock import ManualClock
from ccloop.feedback.angular import AngleType, AngularFeedback, normalize_angle
from ccloop.feedback.base import FeedbackElement, FeedbackType
from ccloop.feedback.pid import PIDElement
from ccloop.kinetic_state import KineticState


class RecordingFeedback(FeedbackElement):
    """Returns the position error it receives and remembers every error."""

    def __init__(self):
        self.errors = []
        self.reset_calls = 0

    def calculate(self, error):
        self.errors.append(error)
        return error.position

    def reset(self):
        self.reset_calls += 1


@pytest.fixture
def proportional():
    return PIDElement(FeedbackType.POSITION, kP=1.0, clock=ManualClock())


# ============================================================================
# normalize_angle
# ============================================================================


class TestNormalizeAngle:
    """Wrapping into (-h, h]."""

    @pytest.mark.parametrize(
        "value, angle_type, expected",
        [
            (359.0, AngleType.DEGREES, -1.0),
            (170.0, AngleType.DEGREES, 170.0),
            (-182.0, AngleType.DEGREES, 178.0),
            (180.0, AngleType.DEGREES, 180.0),
            (-180.0, AngleType.DEGREES, 180.0),
            (720.0, AngleType.DEGREES, 0.0),
            (5 * math.pi / 4, AngleType.RADIANS, -3 * math.pi / 4),
            (1.25, AngleType.REVOLUTIONS, 0.25),
            (-0.75, AngleType.REVOLUTIONS, 0.25),
        ],
    )
    def test_known_values(self, value, angle_type, expected):
        assert normalize_angle(value, angle_type) == pytest.approx(expected, abs=1e-6)

    @pytest.mark.parametrize("angle_type", list(AngleType))
    def test_range_over_grid(self, angle_type):
        """Every wrapped value lies in (-h, h] and differs from the input by whole turns."""
        h = angle_type.half_revolution
        values = np.random.default_rng(42).uniform(-10 * h, 10 * h, size=200)
        for value in values:
            wrapped = normalize_angle(value, angle_type)
            assert -h < wrapped <= h
            turns = (value - wrapped) / angle_type.full_revolution
            assert turns == pytest.approx(round(turns), abs=1e-9)

    def test_half_revolutions(self):
        assert AngleType.RADIANS.half_revolution == math.pi
        assert AngleType.DEGREES.half_revolution == 180.0
        assert AngleType.REVOLUTIONS.half_revolution == 0.5


# ============================================================================
# AngularFeedback
# ============================================================================


class TestAngularFeedback:
    """Decorator behavior."""

    def test_wraps_359_degrees(self, proportional):
        """359 degrees of error is -1 degree the short way."""
        feedback = AngularFeedback(AngleType.DEGREES, proportional)
        assert feedback.calculate(KineticState(359.0)) == pytest.approx(-1.0, abs=1e-6)

    def test_small_error_unchanged(self, proportional):
        """170 degrees is already the short way."""
        feedback = AngularFeedback(AngleType.DEGREES, proportional)
        assert feedback.calculate(KineticState(170.0)) == pytest.approx(170.0, abs=1e-6)

    def test_velocity_and_acceleration_pass_through(self):
        """Only position is wrapped."""
        inner = RecordingFeedback()
        AngularFeedback(AngleType.DEGREES, inner).calculate(KineticState(359.0, 400.0, -700.0))
        assert inner.errors[0].velocity == 400.0
        assert inner.errors[0].acceleration == -700.0

    def test_radians(self):
        inner = RecordingFeedback()
        output = AngularFeedback(AngleType.RADIANS, inner).calculate(
            KineticState(5 * math.pi / 4)
        )
        assert output == pytest.approx(-3 * math.pi / 4)

    def test_reset_delegates(self):
        inner = RecordingFeedback()
        AngularFeedback(AngleType.REVOLUTIONS, inner).reset()
        assert inner.reset_calls == 1

    def test_rejects_non_feedback(self):
        with pytest.raises(TypeError):
            AngularFeedback(AngleType.DEGREES, lambda error: 0.0)
