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
Core Types

Basic aliases shared across the package: scalars, arrays and the time units
used by clocks and controllers.

Time Conventions
----------------
- Timestamps are integer nanoseconds read from a Clock
- Durations between timestamps are float nanoseconds
- Motion profiles are evaluated in float seconds

Usage
-----
>>> from ccloop.types.core import Timestamp, Nanoseconds, Seconds
>>>
>>> t0: Timestamp = clock.now()
>>> dt: Nanoseconds = clock.duration_between(t0, clock.now())
>>> elapsed: Seconds = dt * SECONDS_PER_NANOSECOND
"""

from typing import Sequence, Union

import numpy as np

# ============================================================================
# Numeric Types
# ============================================================================

ScalarLike = Union[float, int, np.number]
"""
Scalar value accepted by arithmetic on control states.

Examples
--------
>>> gain: ScalarLike = 0.5
"""

ArrayLike = Union[np.ndarray, Sequence[float]]
"""
Array-like input converted with ``np.asarray``.

Examples
--------
>>> times: ArrayLike = np.linspace(0.0, 5.0, 100)
>>> times: ArrayLike = [0.0, 0.5, 1.0]
"""

# ============================================================================
# Time Types
# ============================================================================

Timestamp = int
"""
Monotonic timestamp in integer nanoseconds.

Only differences between timestamps from the same clock are meaningful.
"""

Nanoseconds = float
"""Duration in nanoseconds."""

Seconds = float
"""Duration in seconds."""

NANOSECONDS_PER_SECOND = 1_000_000_000
SECONDS_PER_NANOSECOND = 1e-9
