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
Feedback Elements

Turn the control error into power.

Module Organization
------------------
- base: FeedbackElement, FeedbackType, NullFeedback
- pid: PIDController, SquIDController, PIDElement, SquIDElement
- bang_bang: BangBangElement
- angular: AngleType, normalize_angle, AngularFeedback
"""

from .angular import AngleType, AngularFeedback, normalize_angle
from .bang_bang import BangBangElement
from .base import FeedbackElement, FeedbackType, NullFeedback
from .pid import (
    PIDCoefficients,
    PIDController,
    PIDElement,
    SquIDController,
    SquIDElement,
)

__all__ = [
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
]
