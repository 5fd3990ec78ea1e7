"""
Copyright 2026 bending-light-shapely authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import math
from typing import ClassVar, Optional

from ..core.constants import MISS_STRING, READING_DECIMALS


class Reading:
    """
    A single intensity meter reading.

    Either a hit carrying the relative intensity in [0, 1], or the MISS
    sentinel (no ray crossed the probe), which has no value.
    """

    MISS: ClassVar['Reading']

    __slots__ = ('_value',)

    def __init__(self, value: Optional[float]) -> None:
        """
        Raises:
            ValueError: If value is not None and not a finite number in [0, 1].
        """
        if value is not None:
            if not isinstance(value, (int, float)) or not math.isfinite(value) or not 0.0 <= value <= 1.0:
                raise ValueError(f"Reading value must be in [0, 1], got {value}")
            value = float(value)
        self._value = value

    @property
    def value(self) -> Optional[float]:
        """Relative intensity, or None for a miss."""
        return self._value

    def is_hit(self) -> bool:
        return self._value is not None

    @staticmethod
    def format(value: float) -> str:
        """Format a relative intensity as a percentage, e.g. 0.87 -> '87.00%'."""
        return f"{value * 100:.{READING_DECIMALS}f}%"

    def get_string(self) -> str:
        if self._value is None:
            return MISS_STRING
        return Reading.format(self._value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Reading):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __str__(self) -> str:
        return self.get_string()

    def __repr__(self) -> str:
        if self._value is None:
            return "Reading.MISS"
        return f"Reading({self._value})"


Reading.MISS = Reading(None)
