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
from typing import Dict, List, Tuple

from .constants import (
    WAVELENGTH_RED,
    GLASS_INDEX_FOR_RED,
    GLASS_CAUCHY_B,
    CUSTOM_INDEX_MIN,
    CUSTOM_INDEX_MAX,
)


class DispersionFunction:
    """
    Wavelength -> index of refraction for one medium.

    Uses Cauchy's equation n(lambda) = A + B / lambda^2 with lambda in um.
    B grows linearly with how far the medium is from vacuum, reaching
    GLASS_CAUCHY_B at the glass preset, so air barely disperses and diamond
    disperses strongly. A is then chosen so that the index at the reference
    wavelength is exactly `index_for_red`.

    Since B >= 0 and A >= 1 for index_for_red >= 1, the index is at least 1
    at every wavelength.

    Attributes:
        index_for_red: Index of refraction at the reference wavelength.
        reference_wavelength: Calibration wavelength in nm.
        cauchy_a: Cauchy coefficient A.
        cauchy_b: Cauchy coefficient B, in micrometer squared.
    """

    def __init__(self, index_for_red: float, reference_wavelength: float = WAVELENGTH_RED) -> None:
        if not math.isfinite(index_for_red) or index_for_red < 1.0:
            raise ValueError(
                f"Index of refraction must be a finite number >= 1, got {index_for_red}"
            )
        if not math.isfinite(reference_wavelength) or reference_wavelength <= 0:
            raise ValueError(f"reference_wavelength must be > 0, got {reference_wavelength}")

        self.index_for_red = float(index_for_red)
        self.reference_wavelength = float(reference_wavelength)

        # wavelength is in nm, cauchy_b is in um^2
        self.cauchy_b = GLASS_CAUCHY_B * (self.index_for_red - 1.0) / (GLASS_INDEX_FOR_RED - 1.0)
        reference_um = self.reference_wavelength * 0.001
        self.cauchy_a = self.index_for_red - self.cauchy_b / (reference_um * reference_um)

    def get_index_of_refraction(self, wavelength: float) -> float:
        """
        Args:
            wavelength: Vacuum wavelength in nm.
        """
        wavelength_um = wavelength * 0.001
        return self.cauchy_a + self.cauchy_b / (wavelength_um * wavelength_um)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DispersionFunction):
            return NotImplemented
        return (self.index_for_red, self.reference_wavelength) == (other.index_for_red, other.reference_wavelength)

    def __hash__(self) -> int:
        return hash((self.index_for_red, self.reference_wavelength))

    def __repr__(self) -> str:
        return f"DispersionFunction(A={self.cauchy_a:.6f}, B={self.cauchy_b:.6f})"


class Medium:
    """
    Immutable state for a bulk refractive material.

    Holds the name, the dispersion function and the flags for "mystery"
    (index hidden from the user) and "custom" (index set by the user).
    Changing a medium means building a new one; a trace in progress keeps
    seeing the object it was given.
    """

    def __init__(self, name: str, index_for_red: float, mystery: bool = False, custom: bool = False) -> None:
        self._name = name
        self._dispersion_function = DispersionFunction(index_for_red, WAVELENGTH_RED)
        self._mystery = bool(mystery)
        self._custom = bool(custom)

    @property
    def name(self) -> str:
        return self._name

    @property
    def dispersion_function(self) -> DispersionFunction:
        return self._dispersion_function

    @property
    def mystery(self) -> bool:
        return self._mystery

    @property
    def custom(self) -> bool:
        return self._custom

    def index_of_refraction(self, wavelength: float) -> float:
        """Index of refraction at a vacuum wavelength in nm."""
        return self._dispersion_function.get_index_of_refraction(wavelength)

    def get_index_of_refraction_for_red_light(self) -> float:
        """Determines the index of refraction for WAVELENGTH_RED."""
        return self._dispersion_function.get_index_of_refraction(WAVELENGTH_RED)

    @property
    def display_name(self) -> str:
        """Label for a medium selector; mystery media do not reveal their index."""
        if self._mystery:
            return self._name
        return f"{self._name} (n = {self.get_index_of_refraction_for_red_light():.2f})"

    def with_index_for_red(self, index_for_red: float) -> 'Medium':
        """New custom medium with the same name and a different index."""
        return custom_medium(index_for_red, name=self._name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Medium):
            return NotImplemented
        return (
            self._name == other._name
            and self._dispersion_function == other._dispersion_function
            and self._mystery == other._mystery
            and self._custom == other._custom
        )

    def __hash__(self) -> int:
        return hash((self._name, self._dispersion_function, self._mystery, self._custom))

    def __repr__(self) -> str:
        flags = []
        if self._mystery:
            flags.append("mystery")
        if self._custom:
            flags.append("custom")
        flag_str = f", {', '.join(flags)}" if flags else ""
        return f"Medium('{self._name}', n_red={self._dispersion_function.index_for_red}{flag_str})"


# (name, index_for_red, mystery, custom)
_PRESET_TABLE: List[Tuple[str, float, bool, bool]] = [
    ('Air', 1.000293, False, False),
    ('Water', 1.333, False, False),
    ('Glass', 1.5, False, False),
    ('Diamond', 2.419, False, False),
    ('Mystery A', 2.419, True, False),
    ('Mystery B', 1.4, True, False),
    ('Custom', 1.2, False, True),
]

AIR = Medium(*_PRESET_TABLE[0])
WATER = Medium(*_PRESET_TABLE[1])
GLASS = Medium(*_PRESET_TABLE[2])
DIAMOND = Medium(*_PRESET_TABLE[3])
MYSTERY_A = Medium(*_PRESET_TABLE[4])
MYSTERY_B = Medium(*_PRESET_TABLE[5])
CUSTOM = Medium(*_PRESET_TABLE[6])

MEDIUM_PRESETS: Tuple[Medium, ...] = (AIR, WATER, GLASS, DIAMOND, MYSTERY_A, MYSTERY_B, CUSTOM)

_PRESETS_BY_NAME: Dict[str, Medium] = {m.name.lower(): m for m in MEDIUM_PRESETS}


def get_preset(name: str) -> Medium:
    """
    Look up a preset medium by name (case-insensitive).

    Raises:
        ValueError: If no preset has that name.
    """
    try:
        return _PRESETS_BY_NAME[name.strip().lower()]
    except KeyError:
        valid = ", ".join(m.name for m in MEDIUM_PRESETS)
        raise ValueError(f"Unknown medium '{name}'. Valid options: {valid}") from None


def custom_medium(index_for_red: float, name: str = 'Custom') -> Medium:
    """
    Build a medium from a user-adjusted index.

    Raises:
        ValueError: If the index is outside [CUSTOM_INDEX_MIN, CUSTOM_INDEX_MAX].
    """
    if not CUSTOM_INDEX_MIN <= index_for_red <= CUSTOM_INDEX_MAX:
        raise ValueError(
            f"Custom index of refraction must be in [{CUSTOM_INDEX_MIN}, {CUSTOM_INDEX_MAX}], "
            f"got {index_for_red}"
        )
    return Medium(name, index_for_red, mystery=False, custom=True)
