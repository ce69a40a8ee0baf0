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
Structural Subtyping Protocols

Protocols for collaborators that the package consumes but does not need to
own, so any object with the right methods can be injected.

**Protocols**:
- Clock: monotonic nanosecond time source

Example
-------
>>> from ccloop.types.protocols import Clock
>>>
>>> class FrameClock:
...     '''Clock driven by a simulation frame counter.'''
...     def __init__(self):
...         self.frame = 0
...     def now(self) -> int:
...         return self.frame * 10_000_000  # 100 Hz
...     def duration_between(self, start: int, end: int) -> float:
...         return float(end - start)
>>>
>>> isinstance(FrameClock(), Clock)
True
"""

from typing import Protocol, runtime_checkable

from ccloop.types.core import Nanoseconds, Timestamp


@runtime_checkable
class Clock(Protocol):
    """
    Monotonic time source.

    Implementations must return strictly non-decreasing timestamps with
    nanosecond (or finer) resolution. Controllers never read a global clock;
    they ask the Clock they were given, so a deterministic fake can stand in
    during tests.

    Methods
    -------
    now() -> Timestamp
        Current timestamp in integer nanoseconds
    duration_between(start, end) -> Nanoseconds
        ``end - start`` as float nanoseconds

    See Also
    --------
    ccloop.clock.MonotonicClock : Wall-clock implementation
    ccloop.clock.ManualClock : Deterministic implementation for tests
    """

    def now(self) -> Timestamp:
        ...

    def duration_between(self, start: Timestamp, end: Timestamp) -> Nanoseconds:
        ...
