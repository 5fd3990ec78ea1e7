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

from typing import Iterable

from ..core.geometry import Vector2, ZERO
from ..core.ray import LightRay
from .intensity_meter import hits_probe


class VelocitySensor:
    """
    Reports the velocity of light at a point: c / n along the ray direction.

    Attributes:
        position (Vector2): Sensor point.
        tolerance (float): How close a segment must pass to count.
        value (Vector2): Last measured velocity in m/s (zero when no ray).
    """

    DEFAULT_TOLERANCE = 1e-3

    def __init__(self, position: Vector2, tolerance: float = DEFAULT_TOLERANCE) -> None:
        if tolerance <= 0:
            raise ValueError(f"tolerance must be positive, got {tolerance}")
        self.position = position
        self.tolerance = float(tolerance)
        self.value: Vector2 = ZERO

    def measure(self, rays: Iterable[LightRay]) -> Vector2:
        """Velocity of the first segment passing through the sensor."""
        for ray in rays:
            if hits_probe(ray, self.position, 2.0 * self.tolerance):
                self.value = ray.velocity
                break
        else:
            self.value = ZERO
        return self.value

    def translated(self, dx: float, dy: float) -> 'VelocitySensor':
        return VelocitySensor(self.position + Vector2(dx, dy), self.tolerance)
