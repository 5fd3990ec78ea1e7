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
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from shapely.geometry import Point as ShapelyPoint, LineString


@dataclass(frozen=True)
class Vector2:
    """
    A point or direction in the model plane.

    Immutable value type. Can be converted to/from Shapely Point objects.
    """
    x: float
    y: float

    def __add__(self, other: 'Vector2') -> 'Vector2':
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Vector2') -> 'Vector2':
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> 'Vector2':
        return Vector2(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __neg__(self) -> 'Vector2':
        return Vector2(-self.x, -self.y)

    def dot(self, other: 'Vector2') -> float:
        """Dot product, treating both points as vectors."""
        return self.x * other.x + self.y * other.y

    def cross(self, other: 'Vector2') -> float:
        """Cross product (z-component in 2D)."""
        return self.x * other.y - self.y * other.x

    @property
    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)

    @property
    def magnitude_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    @property
    def angle(self) -> float:
        """Angle of the vector from the +x axis, in radians."""
        return math.atan2(self.y, self.x)

    def normalized(self) -> 'Vector2':
        """
        Unit vector in the same direction.

        Raises:
            ValueError: If the vector has zero magnitude.
        """
        length = self.magnitude
        if length < 1e-15:
            raise ValueError("Cannot normalize zero vector")
        return Vector2(self.x / length, self.y / length)

    def rotated(self, angle: float) -> 'Vector2':
        """Rotate by the given angle in radians (counterclockwise)."""
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        return Vector2(
            self.x * cos_a - self.y * sin_a,
            self.x * sin_a + self.y * cos_a
        )

    def perpendicular(self) -> 'Vector2':
        """The vector rotated by +90 degrees."""
        return Vector2(-self.y, self.x)

    def distance(self, other: 'Vector2') -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def distance_squared(self, other: 'Vector2') -> float:
        dx = self.x - other.x
        dy = self.y - other.y
        return dx * dx + dy * dy

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)

    @classmethod
    def from_angle(cls, angle: float, magnitude: float = 1.0) -> 'Vector2':
        """Create a vector with the given polar angle (radians) and magnitude."""
        return cls(magnitude * math.cos(angle), magnitude * math.sin(angle))

    def to_shapely(self) -> ShapelyPoint:
        """Convert to Shapely Point."""
        return ShapelyPoint(self.x, self.y)

    @classmethod
    def from_shapely(cls, sp: ShapelyPoint) -> 'Vector2':
        """Create Vector2 from Shapely Point."""
        return cls(sp.x, sp.y)

    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary representation."""
        return {'x': self.x, 'y': self.y}


ZERO = Vector2(0.0, 0.0)


class Geometry:
    """
    Geometric queries shared by shapes, the tracer and the sensors.

    All rays are given as a tail point plus a unit direction.
    """

    @staticmethod
    def ray_segment_intersection(
        tail: Vector2,
        direction: Vector2,
        a: Vector2,
        b: Vector2
    ) -> Optional[Tuple[float, float]]:
        """
        Intersect a ray with the segment a-b.

        Args:
            tail: Ray tail point.
            direction: Unit direction of the ray.
            a: First endpoint of the segment.
            b: Second endpoint of the segment.

        Returns:
            (t, u) where t is the distance along the ray and u in [0, 1] the
            position along the segment, or None if the ray is parallel to the
            segment or misses it.
        """
        edge = b - a
        denominator = direction.cross(edge)
        if abs(denominator) < 1e-12:
            # Parallel (or collinear) - no single crossing point
            return None

        offset = a - tail
        t = offset.cross(edge) / denominator
        u = offset.cross(direction) / denominator
        if u < 0.0 or u > 1.0:
            return None
        return t, u

    @staticmethod
    def ray_circle_parameters(
        tail: Vector2,
        direction: Vector2,
        center: Vector2,
        radius: float
    ) -> List[float]:
        """
        Solve |tail + t * direction - center|^2 = radius^2 for t.

        Returns:
            The real roots in increasing order; a tangent ray gives its double
            root once, a miss gives an empty list.
        """
        offset = tail - center
        b = 2.0 * direction.dot(offset)
        c = offset.magnitude_squared - radius * radius
        discriminant = b * b - 4.0 * c

        if discriminant < 0:
            return []
        if discriminant == 0:
            return [-b / 2.0]

        root = math.sqrt(discriminant)
        return [(-b - root) / 2.0, (-b + root) / 2.0]

    @staticmethod
    def ray_exit_distance(
        tail: Vector2,
        direction: Vector2,
        bounds: Tuple[float, float, float, float]
    ) -> Optional[float]:
        """
        Distance along the ray until it leaves an axis-aligned bounds box.

        Args:
            tail: Ray tail point.
            direction: Unit direction.
            bounds: (min_x, min_y, max_x, max_y).

        Returns:
            The exit distance, or None if the tail is outside the box.
        """
        min_x, min_y, max_x, max_y = bounds
        if not (min_x <= tail.x <= max_x and min_y <= tail.y <= max_y):
            return None

        exit_distance = math.inf
        if direction.x > 0:
            exit_distance = min(exit_distance, (max_x - tail.x) / direction.x)
        elif direction.x < 0:
            exit_distance = min(exit_distance, (min_x - tail.x) / direction.x)
        if direction.y > 0:
            exit_distance = min(exit_distance, (max_y - tail.y) / direction.y)
        elif direction.y < 0:
            exit_distance = min(exit_distance, (min_y - tail.y) / direction.y)
        return exit_distance

    @staticmethod
    def point_segment_distance(point: Vector2, a: Vector2, b: Vector2) -> float:
        """
        Perpendicular distance from a point to the segment a-b (not the line).
        """
        if a.distance_squared(b) == 0:
            return point.distance(a)
        return LineString([a.to_tuple(), b.to_tuple()]).distance(point.to_shapely())

    @staticmethod
    def reflect(direction: Vector2, normal: Vector2) -> Vector2:
        """Mirror a direction about a unit normal."""
        return direction - normal * (2.0 * direction.dot(normal))
