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
Basic Feedforward - Velocity, Acceleration and Static Friction

Model
-----
    u = kV*v + kA*a + kS*sign(v)

kS overcomes static friction in the direction of motion; with v == 0 the
static term is 0.
"""

from dataclasses import dataclass, replace
from typing import Optional

import numpy as np

from ccloop.feedforward.base import FeedforwardElement
from ccloop.kinetic_state import KineticState


@dataclass
class BasicFeedforwardParameters:
    """
    Gains of a velocity/acceleration/static feedforward.

    Attributes
    ----------
    kV : float
        Power per unit of reference velocity
    kA : float
        Power per unit of reference acceleration
    kS : float
        Static friction power, applied in the direction of motion
    """

    kV: float = 0.0
    kA: float = 0.0
    kS: float = 0.0


def motion_terms(params, reference: KineticState) -> float:
    """``kV*v + kA*a + kS*sign(v)`` for any parameters carrying kV, kA, kS."""
    return (
        params.kV * reference.velocity
        + params.kA * reference.acceleration
        + params.kS * float(np.sign(reference.velocity))
    )


class BasicFeedforward(FeedforwardElement):
    """
    Feedforward for mechanisms without gravity load (flywheels, drivetrains).

    Examples
    --------
    >>> ff = BasicFeedforward(kV=0.5, kS=0.1)
    >>> ff.calculate(KineticState(0.0, 2.0))
    1.1
    >>> ff.calculate(KineticState(0.0, -2.0))
    -1.1
    """

    def __init__(
        self,
        parameters: Optional[BasicFeedforwardParameters] = None,
        *,
        kV: float = 0.0,
        kA: float = 0.0,
        kS: float = 0.0,
    ):
        if parameters is None:
            parameters = BasicFeedforwardParameters(kV, kA, kS)
        elif kV or kA or kS:
            raise TypeError("Pass either parameters or kV/kA/kS, not both")
        self.parameters = replace(parameters)

    def set_gains(
        self, kV: Optional[float] = None, kA: Optional[float] = None, kS: Optional[float] = None
    ) -> None:
        """Hot-swap gains; omitted gains keep their value."""
        changes = {k: v for k, v in {"kV": kV, "kA": kA, "kS": kS}.items() if v is not None}
        self.parameters = replace(self.parameters, **changes)

    def calculate(self, reference: KineticState) -> float:
        return motion_terms(self.parameters, reference)

    def __repr__(self) -> str:
        return f"BasicFeedforward({self.parameters})"
