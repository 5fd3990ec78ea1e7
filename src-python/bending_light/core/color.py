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

from typing import Optional, Tuple

import numpy as np

from .constants import WAVELENGTH_MIN, WAVELENGTH_MAX, WAVELENGTH_RED

RGB = Tuple[int, int, int]

WHITE: RGB = (255, 255, 255)

# Hue anchors over the laser's wavelength range: (nm, r, g, b), linear in between
_SPECTRUM = np.array([
    (WAVELENGTH_MIN, 1.0, 0.0, 1.0),
    (440.0, 0.0, 0.0, 1.0),
    (490.0, 0.0, 1.0, 1.0),
    (510.0, 0.0, 1.0, 0.0),
    (580.0, 1.0, 1.0, 0.0),
    (645.0, 1.0, 0.0, 0.0),
    (WAVELENGTH_MAX, 1.0, 0.0, 0.0),
])

# Violet dims toward the short end of the range
_VIOLET_FADE_END = 420.0
_VIOLET_FADE_FLOOR = 0.3


def wavelength_to_rgb(wavelength: Optional[float]) -> RGB:
    """
    Display color of a vacuum wavelength in nm.

    Wavelengths outside [WAVELENGTH_MIN, WAVELENGTH_MAX] take the color of
    the nearest end; None is the red reference wavelength.

    Returns:
        (r, g, b) values from 0-255
    """
    if wavelength is None:
        wavelength = WAVELENGTH_RED
    wavelength = min(max(float(wavelength), WAVELENGTH_MIN), WAVELENGTH_MAX)

    channels = [np.interp(wavelength, _SPECTRUM[:, 0], _SPECTRUM[:, i]) for i in (1, 2, 3)]
    brightness = np.interp(
        wavelength, (WAVELENGTH_MIN, _VIOLET_FADE_END), (_VIOLET_FADE_FLOOR, 1.0)
    )
    return tuple(int(round(255 * float(c) * float(brightness))) for c in channels)


def rgb_to_hex(color: RGB) -> str:
    """Format an RGB tuple as '#rrggbb' for the drawing layer."""
    return '#{:02x}{:02x}{:02x}'.format(*color)
