# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Inclusive/exclusive range endpoints shared by length and value constraints.

Span rule:
  * Inclusive–Inclusive and mixed pairs need ``upper - lower >= 0``.
  * Exclusive–Exclusive needs ``upper - lower > unit``, where the unit is
    ``1`` for integers and the smallest positive float for reals. Callers that
    know the value domain pass the unit explicitly.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Optional, Union

Number = Union[int, float]

_ZERO = 0

REAL_UNIT = sys.float_info.min
INTEGER_UNIT = 1


def unit_of(value: Number) -> Number:
    """Return the smallest positive step for the type of *value*."""
    if isinstance(value, int):
        return INTEGER_UNIT
    return REAL_UNIT


@dataclass(frozen=True)
class Limit:
    """One endpoint of a numeric range."""

    value: Number
    inclusive: bool = True

    @classmethod
    def inclusive_of(cls, value: Number) -> "Limit":
        return cls(value, inclusive=True)

    @classmethod
    def exclusive_of(cls, value: Number) -> "Limit":
        return cls(value, inclusive=False)

    def is_lesser(self, value: Number) -> bool:
        """True iff *value* lies at or below the threshold (strictly below when exclusive)."""
        if self.inclusive:
            return value <= self.value
        return value < self.value

    def is_greater(self, value: Number) -> bool:
        """True iff *value* lies at or above the threshold (strictly above when exclusive)."""
        if self.inclusive:
            return value >= self.value
        return value > self.value

    def has_span(self, upper: "Limit", unit: Optional[Number] = None) -> bool:
        """True iff the interval from this lower endpoint to *upper* can hold a value.

        *unit* defaults to the step of the width's own type (see :func:`unit_of`).
        """
        width = upper.value - self.value
        if not self.inclusive and not upper.inclusive:
            return width > (unit_of(width) if unit is None else unit)
        return width >= _ZERO
