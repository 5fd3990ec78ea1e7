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
import uuid as _uuid_mod
from dataclasses import dataclass, field
from typing import Optional

from shapely.geometry import LineString

from .color import RGB, wavelength_to_rgb
from .constants import SPEED_OF_LIGHT, DEFAULT_LENGTH_SCALE
from .geometry import Vector2, Geometry

TWO_PI = 2.0 * math.pi

INTERACTION_TYPES = ('source', 'reflect', 'refract', 'tir')


@dataclass(frozen=True)
class LightRay:
    """
    One straight segment of a traced light path.

    Attributes:
        tail: Starting point of the segment.
        direction: Unit direction of propagation.
        length: Length of the segment (up to the next boundary, or to the
            edge of the traced region for rays that exit to infinity).
        wavelength: Vacuum wavelength in nm.
        power: Fraction of the source power carried (0.0 to 1.0).
        index_of_refraction: Index of the medium the segment travels through.
        color: RGB color (from the wavelength, or fixed per white-light
            component).
        phase: Wave phase at the tail, in radians in [0, 2 pi).
        length_scale: Meters per model unit, used for phase and wave values.

    Lineage Attributes:
        uuid: Unique identifier for this segment (auto-generated).
        parent_uuid: UUID of the segment that spawned this one.
        interaction_type: How this segment was created:
            'source' = emitted by the laser (no parent)
            'reflect' = Fresnel reflection
            'refract' = Snell's law refraction
            'tir' = total internal reflection
        depth: Number of boundary crossings between the laser and this segment.
    """
    tail: Vector2
    direction: Vector2
    length: float
    wavelength: float
    power: float
    index_of_refraction: float = 1.0
    color: Optional[RGB] = None
    phase: float = 0.0
    length_scale: float = DEFAULT_LENGTH_SCALE
    uuid: str = field(default_factory=lambda: str(_uuid_mod.uuid4()))
    parent_uuid: Optional[str] = None
    interaction_type: str = 'source'
    depth: int = 0

    def __post_init__(self) -> None:
        if self.interaction_type not in INTERACTION_TYPES:
            raise ValueError(
                f"Invalid interaction_type '{self.interaction_type}'. "
                f"Valid options: {INTERACTION_TYPES}"
            )
        if not math.isfinite(self.power) or not 0.0 <= self.power <= 1.0:
            raise ValueError(f"Ray power must be a fraction in [0, 1], got {self.power}")
        if self.color is None:
            object.__setattr__(self, 'color', wavelength_to_rgb(self.wavelength))
        object.__setattr__(self, 'phase', self.phase % TWO_PI)

    @property
    def tip(self) -> Vector2:
        """End point of the segment."""
        return self.tail + self.direction * self.length

    @property
    def angle(self) -> float:
        """Direction of propagation in radians from +x."""
        return self.direction.angle

    @property
    def speed(self) -> float:
        """Speed of light in the segment's medium, m/s."""
        return SPEED_OF_LIGHT / self.index_of_refraction

    @property
    def velocity(self) -> Vector2:
        return self.direction * self.speed

    @property
    def wavelength_in_medium(self) -> float:
        """Wavelength inside the medium, nm."""
        return self.wavelength / self.index_of_refraction

    @property
    def angular_frequency(self) -> float:
        """omega = 2 pi c / lambda (vacuum), rad/s."""
        return TWO_PI * SPEED_OF_LIGHT / (self.wavelength * 1e-9)

    def phase_at(self, distance: float) -> float:
        """
        Phase at a distance (model units) along the segment from the tail.
        """
        meters = distance * self.length_scale
        return (self.phase + TWO_PI * meters / (self.wavelength_in_medium * 1e-9)) % TWO_PI

    def end_phase(self) -> float:
        return self.phase_at(self.length)

    def distance_to(self, point: Vector2) -> float:
        """Perpendicular distance from a point to this segment."""
        return Geometry.point_segment_distance(point, self.tail, self.tip)

    def project(self, point: Vector2) -> float:
        """Distance along the segment of the point's projection, clamped to it."""
        along = (point - self.tail).dot(self.direction)
        return min(max(along, 0.0), self.length)

    def contains_projection(self, point: Vector2) -> bool:
        """True if the point projects onto the segment (not past either end)."""
        along = (point - self.tail).dot(self.direction)
        return 0.0 <= along <= self.length

    def wave_value_at(self, point: Vector2, time: float) -> float:
        """
        Instantaneous wave amplitude at a point (projected onto the segment).

        The amplitude scales with sqrt(power) so that intensity ~ power.
        """
        phase = self.phase_at(self.project(point))
        return math.sqrt(self.power) * math.cos(phase - self.angular_frequency * time)

    def to_line_string(self) -> LineString:
        """Convert to Shapely LineString (tail -> tip)."""
        return LineString([self.tail.to_tuple(), self.tip.to_tuple()])

    def __repr__(self) -> str:
        lineage_str = f", uuid={self.uuid[:8]}..."
        if self.parent_uuid:
            lineage_str += f", parent={self.parent_uuid[:8]}..."
        if self.interaction_type != 'source':
            lineage_str += f", {self.interaction_type}"
        return (f"LightRay(tail=({self.tail.x:.4f}, {self.tail.y:.4f}), "
                f"direction=({self.direction.x:.4f}, {self.direction.y:.4f}), "
                f"length={self.length:.4f}, power={self.power:.6f}, "
                f"wavelength={self.wavelength}, n={self.index_of_refraction:.4f}{lineage_str})")
