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
Clocks - Injectable Monotonic Time Sources

Two implementations of the Clock protocol:

- MonotonicClock: reads ``time.monotonic_ns()``; the default for every
  time-dependent element
- ManualClock: only moves when told to; use it to make integral sums and
  motion profiles reproducible

Usage
-----
>>> clock = ManualClock()
>>> pid = PIDElement(FeedbackType.POSITION, kP=0.0, kI=1.0, clock=clock)
>>> pid.calculate(KineticState(10.0))
0.0
>>> clock.advance(nanoseconds=1)
>>> pid.calculate(KineticState(10.0))
10.0
"""

import time

from ccloop.types.core import NANOSECONDS_PER_SECOND, Nanoseconds, Timestamp


class MonotonicClock:
    """
    Clock backed by the operating system's monotonic timer.

    Examples
    --------
    >>> clock = MonotonicClock()
    >>> start = clock.now()
    >>> clock.duration_between(start, clock.now()) >= 0.0
    True
    """

    def now(self) -> Timestamp:
        return time.monotonic_ns()

    def duration_between(self, start: Timestamp, end: Timestamp) -> Nanoseconds:
        return float(end - start)

    def __repr__(self) -> str:
        return "MonotonicClock()"


class ManualClock:
    """
    Deterministic clock that advances only when told to.

    Attributes
    ----------
    timestamp : int
        Current reading in nanoseconds

    Examples
    --------
    >>> clock = ManualClock()
    >>> clock.advance(milliseconds=1500)
    >>> clock.now()
    1500000000
    >>> clock.advance(seconds=0.5)
    >>> clock.now()
    2000000000
    """

    def __init__(self, start: Timestamp = 0):
        self.timestamp = int(start)

    def now(self) -> Timestamp:
        return self.timestamp

    def duration_between(self, start: Timestamp, end: Timestamp) -> Nanoseconds:
        return float(end - start)

    def advance(
        self, nanoseconds: int = 0, milliseconds: float = 0.0, seconds: float = 0.0
    ) -> None:
        """
        Move the clock forward.

        The three arguments are summed; fractional nanoseconds are rounded.

        Raises
        ------
        ValueError
            If the total step is negative
        """
        step = (
            nanoseconds
            + round(milliseconds * 1_000_000)
            + round(seconds * NANOSECONDS_PER_SECOND)
        )
        if step < 0:
            raise ValueError(f"ManualClock cannot move backwards (step of {step} ns)")
        self.timestamp += int(step)

    def set(self, timestamp: Timestamp) -> None:
        """
        Jump to an absolute timestamp.

        Raises
        ------
        ValueError
            If timestamp is earlier than the current reading
        """
        if timestamp < self.timestamp:
            raise ValueError(
                f"ManualClock cannot move backwards (from {self.timestamp} to {timestamp})"
            )
        self.timestamp = int(timestamp)

    def __repr__(self) -> str:
        return f"ManualClock(timestamp={self.timestamp})"
