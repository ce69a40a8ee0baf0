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
Bang-Bang Feedback

Full power toward the reference: the output is the sign of one error
channel, so it is always -1, 0 or 1 (NaN for a NaN error).
"""

import numpy as np

from ccloop.feedback.base import FeedbackElement, FeedbackType
from ccloop.kinetic_state import KineticState


class BangBangElement(FeedbackElement):
    """
    Bang-bang feedback element.

    Parameters
    ----------
    feedback_type : FeedbackType
        POSITION acts on the position error, VELOCITY on the velocity error

    Examples
    --------
    >>> BangBangElement(FeedbackType.POSITION).calculate(KineticState(-3.2, 5.0))
    -1.0
    >>> BangBangElement(FeedbackType.VELOCITY).calculate(KineticState(-3.2, 5.0))
    1.0
    """

    def __init__(self, feedback_type: FeedbackType):
        self.feedback_type = FeedbackType(feedback_type)

    def calculate(self, error: KineticState) -> float:
        channel, _ = self.feedback_type.select(error)
        return float(np.sign(channel))

    def __repr__(self) -> str:
        return f"BangBangElement({self.feedback_type.name})"
