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
from typing import List, Tuple

import numpy as np

from .color import RGB, WHITE, wavelength_to_rgb
from .constants import (
    WAVELENGTH_MIN,
    WAVELENGTH_MAX,
    WAVELENGTH_RED,
    WHITE_LIGHT_MIN,
    WHITE_LIGHT_MAX,
    WHITE_LIGHT_SAMPLE_COUNT,
)
from .geometry import Vector2


class Laser:
    """
    The light source: a pose, a wavelength and a color mode.

    Attributes:
        position (Vector2): Emission point (beam center).
        angle (float): Direction of propagation in radians from +x.
        wavelength (float): Vacuum wavelength in nm for monochromatic light.
        color_mode (str): 'monochromatic' or 'white'.
        on (bool): Whether the laser emits.
        power (float): Source power in (0, 1] (1.0 = 100%).
        ray_count (int): Number of parallel rays across the beam.
        beam_width (float): Spacing extent of those rays, perpendicular to the
            direction, in model units.
        wave (bool): Wave view flag; sensors use it, the tracer ignores it.
    """

    VALID_COLOR_MODES = ('monochromatic', 'white')

    def __init__(
        self,
        position: Vector2,
        angle: float,
        wavelength: float = WAVELENGTH_RED,
        color_mode: str = 'monochromatic',
        on: bool = True,
        power: float = 1.0,
        ray_count: int = 1,
        beam_width: float = 0.0,
        wave: bool = False
    ) -> None:
        if not position.is_finite():
            raise ValueError(f"Laser position must be finite, got {position}")
        if not math.isfinite(angle):
            raise ValueError(f"Laser angle must be finite, got {angle}")
        if not math.isfinite(power) or not 0 < power <= 1:
            raise ValueError(f"Laser power must be in (0, 1], got {power}")
        if not isinstance(ray_count, int) or ray_count < 1:
            raise ValueError(f"ray_count must be a positive integer, got {ray_count}")
        if not math.isfinite(beam_width) or beam_width < 0:
            raise ValueError(f"beam_width must be >= 0, got {beam_width}")

        self.position = position
        self.angle = float(angle)
        self.wavelength = wavelength
        self.color_mode = color_mode
        self.on = bool(on)
        self.power = float(power)
        self.ray_count = ray_count
        self.beam_width = float(beam_width)
        self.wave = bool(wave)

    @property
    def wavelength(self) -> float:
        return self._wavelength

    @wavelength.setter
    def wavelength(self, value: float) -> None:
        """Set the wavelength in nm, validated against the visible range."""
        if not isinstance(value, (int, float)) or not WAVELENGTH_MIN <= value <= WAVELENGTH_MAX:
            raise ValueError(
                f"wavelength must be in [{WAVELENGTH_MIN}, {WAVELENGTH_MAX}] nm, got {value}"
            )
        self._wavelength = float(value)

    @property
    def color_mode(self) -> str:
        return self._color_mode

    @color_mode.setter
    def color_mode(self, value: str) -> None:
        if value not in self.VALID_COLOR_MODES:
            raise ValueError(
                f"Invalid color_mode '{value}'. "
                f"Valid options: {self.VALID_COLOR_MODES}"
            )
        self._color_mode = value

    @property
    def direction(self) -> Vector2:
        """Unit vector of propagation."""
        return Vector2.from_angle(self.angle)

    def emission_points(self) -> List[Tuple[Vector2, float]]:
        """
        Tail points of the emitted rays with their power fraction.

        A single ray starts at the position. Several rays are spread evenly
        across `beam_width`, centered on the position and perpendicular to the
        direction, and share the power equally.
        """
        if self.ray_count == 1 or self.beam_width == 0:
            offsets = np.zeros(self.ray_count)
        else:
            half = self.beam_width / 2.0
            offsets = np.linspace(-half, half, self.ray_count)

        across = self.direction.perpendicular()
        share = 1.0 / self.ray_count
        return [(self.position + across * float(offset), share) for offset in offsets]

    def get_translated_instance(self, dx: float, dy: float) -> 'Laser':
        return Laser(
            self.position + Vector2(dx, dy), self.angle, self._wavelength, self._color_mode,
            self.on, self.power, self.ray_count, self.beam_width, self.wave
        )

    def __repr__(self) -> str:
        state = "on" if self.on else "off"
        return (f"Laser(position={self.position}, angle={math.degrees(self.angle):.2f} deg, "
                f"{self._color_mode}, wavelength={self._wavelength}, {state})")


def resolve_color_mode(laser: Laser) -> List[Tuple[float, float, RGB]]:
    """
    Expand the laser's color mode into the wavelengths to trace.

    Returns:
        List of (wavelength_nm, power_share, color). Shares sum to 1.
        Monochromatic: one entry with the laser wavelength.
        White: WHITE_LIGHT_SAMPLE_COUNT wavelengths evenly spaced over
        [WHITE_LIGHT_MIN, WHITE_LIGHT_MAX], each carrying an equal share and
        the color of its own wavelength (the bundle reads as white).
    """
    if laser.color_mode == 'monochromatic':
        return [(laser.wavelength, 1.0, wavelength_to_rgb(laser.wavelength))]

    wavelengths = np.linspace(WHITE_LIGHT_MIN, WHITE_LIGHT_MAX, WHITE_LIGHT_SAMPLE_COUNT)
    share = 1.0 / WHITE_LIGHT_SAMPLE_COUNT
    return [(float(wl), share, wavelength_to_rgb(float(wl))) for wl in wavelengths]


def bundle_color(laser: Laser) -> RGB:
    """Display color of the whole beam."""
    if laser.color_mode == 'white':
        return WHITE
    return wavelength_to_rgb(laser.wavelength)
