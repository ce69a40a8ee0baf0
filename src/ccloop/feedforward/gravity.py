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
Gravity Feedforward - Elevators and Arms

Models
------
Elevator (constant gravity load):
    u = kG + kV*v + kA*a + kS*sign(v)

Arm (gravity torque varies with the arm angle):
    u = kG*cos(theta) + kV*v + kA*a + kS*sign(v),  theta = position_to_angle(x)

position_to_angle converts the reference position into radians measured
from horizontal. It defaults to the identity, i.e. positions already in
radians.

Usage
-----
>>> lift = ElevatorFeedforward(kG=0.2, kV=1.0)
>>> arm = ArmFeedforward(kG=0.3, position_to_angle=np.deg2rad)
>>> round(arm.calculate(KineticState(60.0)), 6)
0.15
"""

from dataclasses import dataclass, replace
from typing import Callable, Optional

import numpy as np

from ccloop.feedforward.base import FeedforwardElement
from ccloop.feedforward.basic import motion_terms
from ccloop.kinetic_state import KineticState


@dataclass
class GravityFeedforwardParameters:
    """
    Gains of a gravity-compensating feedforward.

    Attributes
    ----------
    kG : float
        Power that holds the mechanism against gravity (at horizontal for
        an arm)
    kV : float
        Power per unit of reference velocity
    kA : float
        Power per unit of reference acceleration
    kS : float
        Static friction power, applied in the direction of motion
    """

    kG: float = 0.0
    kV: float = 0.0
    kA: float = 0.0
    kS: float = 0.0


class _GravityFeedforward(FeedforwardElement):
    """Shared construction and retuning for gravity feedforward models."""

    def __init__(
        self,
        parameters: Optional[GravityFeedforwardParameters] = None,
        *,
        kG: float = 0.0,
        kV: float = 0.0,
        kA: float = 0.0,
        kS: float = 0.0,
    ):
        if parameters is None:
            parameters = GravityFeedforwardParameters(kG, kV, kA, kS)
        elif kG or kV or kA or kS:
            raise TypeError("Pass either parameters or kG/kV/kA/kS, not both")
        self.parameters = replace(parameters)

    def set_gains(
        self,
        kG: Optional[float] = None,
        kV: Optional[float] = None,
        kA: Optional[float] = None,
        kS: Optional[float] = None,
    ) -> None:
        """Hot-swap gains; omitted gains keep their value."""
        gains = {"kG": kG, "kV": kV, "kA": kA, "kS": kS}
        self.parameters = replace(
            self.parameters, **{k: v for k, v in gains.items() if v is not None}
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.parameters})"


class ElevatorFeedforward(_GravityFeedforward):
    """
    Feedforward for a linear mechanism lifting a constant load.

    Examples
    --------
    >>> ElevatorFeedforward(kG=0.2, kV=1.0).calculate(KineticState(0.0, 0.5))
    0.7
    """

    def calculate(self, reference: KineticState) -> float:
        return self.parameters.kG + motion_terms(self.parameters, reference)


class ArmFeedforward(_GravityFeedforward):
    """
    Feedforward for a pivoting arm.

    Parameters
    ----------
    parameters : Optional[GravityFeedforwardParameters]
        Gains; alternatively pass kG, kV, kA, kS as keywords
    position_to_angle : Callable[[float], float]
        Converts reference position to radians from horizontal
        (default: identity)
    """

    def __init__(
        self,
        parameters: Optional[GravityFeedforwardParameters] = None,
        *,
        kG: float = 0.0,
        kV: float = 0.0,
        kA: float = 0.0,
        kS: float = 0.0,
        position_to_angle: Optional[Callable[[float], float]] = None,
    ):
        super().__init__(parameters, kG=kG, kV=kV, kA=kA, kS=kS)
        self.position_to_angle = position_to_angle if position_to_angle is not None else _identity

    def calculate(self, reference: KineticState) -> float:
        angle = self.position_to_angle(reference.position)
        return self.parameters.kG * float(np.cos(angle)) + motion_terms(self.parameters, reference)


def _identity(x: float) -> float:
    return x
