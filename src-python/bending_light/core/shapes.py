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

Prism and medium-region boundaries.

The set of shapes is closed: a shape is either a Circle or a Polygon. Both
are immutable; translating or rotating returns a new instance. Every shape
answers the same intersection query:

    shape.get_intersections(ray) -> [Intersection, ...]

where `ray` is anything with a `tail` point and a unit `direction`. Results
are ordered by distance from the tail and only include points strictly ahead
of it. Normals are flipped so that they point against the incoming ray.
"""

import math
from typing import List, Optional, Sequence, Tuple, Union, TYPE_CHECKING

import numpy as np
from shapely.geometry import Polygon as ShapelyPolygon
from shapely.geometry.polygon import orient

from .constants import DUPLICATE_INTERSECTION_EPSILON
from .geometry import Vector2, Geometry
from .intersection import Intersection

if TYPE_CHECKING:
    from .ray import LightRay


def _oriented_normal(normal: Vector2, direction: Vector2) -> Vector2:
    """Flip the normal if it points along the ray."""
    if normal.dot(direction) > 0:
        return -normal
    return normal


class Circle:
    """
    A circular prism boundary.

    Attributes:
        center: Center of the circle.
        radius: Radius of the circle (> 0).
    """

    kind = 'circle'

    def __init__(self, center: Vector2, radius: float) -> None:
        """
        Raises:
            ValueError: If the radius is not a positive finite number or the
                center is not finite.
        """
        if not math.isfinite(radius) or radius <= 0:
            raise ValueError(f"Circle radius must be a positive finite number, got {radius}")
        if not center.is_finite():
            raise ValueError(f"Circle center must be finite, got {center}")
        self._center = center
        self._radius = float(radius)

    @property
    def center(self) -> Vector2:
        return self._center

    @property
    def radius(self) -> float:
        return self._radius

    def get_translated_instance(self, dx: float, dy: float) -> 'Circle':
        """Create a new Circle translated by the specified amount."""
        return Circle(self._center + Vector2(dx, dy), self._radius)

    def get_rotated_instance(self, angle: float, rotation_point: Vector2) -> 'Circle':
        """
        Create a new Circle whose center is rotated about rotation_point.

        Args:
            angle: Rotation angle in radians (counterclockwise).
            rotation_point: Pivot of the rotation.
        """
        rotated = (self.get_rotation_center() - rotation_point).rotated(angle)
        return Circle(rotated + rotation_point, self._radius)

    def get_rotation_center(self) -> Vector2:
        return self._center

    def get_reference_point(self) -> Optional[Vector2]:
        """A circle has no rotation handle."""
        return None

    def contains_point(self, point: Vector2) -> bool:
        return point.distance(self._center) <= self._radius

    def get_bounds(self) -> Tuple[float, float, float, float]:
        """(min_x, min_y, max_x, max_y)."""
        c, r = self._center, self._radius
        return (c.x - r, c.y - r, c.x + r, c.y + r)

    def get_intersections(self, ray: 'LightRay') -> List[Intersection]:
        """
        Find the intersections between the circle and the specified ray.

        Args:
            ray: Object with `tail` and unit `direction`.

        Returns:
            Intersections ordered by distance from the tail.
        """
        tail, direction = ray.tail, ray.direction
        intersections = []
        for t in Geometry.ray_circle_parameters(tail, direction, self._center, self._radius):
            # Only consider intersections that are in front of the ray
            if t <= 0:
                continue
            point = tail + direction * t
            normal = _oriented_normal((point - self._center).normalized(), direction)
            intersections.append(Intersection(normal, point, t))
        return intersections

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Circle):
            return NotImplemented
        return self._center == other._center and self._radius == other._radius

    def __hash__(self) -> int:
        return hash((self.kind, self._center, self._radius))

    def __repr__(self) -> str:
        return f"Circle(center={self._center}, radius={self._radius})"


class Polygon:
    """
    A simple (non self-intersecting) polygonal prism boundary.

    Vertices are stored counterclockwise regardless of the order given, so
    the outward normal of edge (v_i, v_i+1) is the edge direction rotated
    by -90 degrees.

    Attributes:
        vertices: Tuple of corner points, counterclockwise.
        reference_point_index: Index of the vertex used as rotation handle.
    """

    kind = 'polygon'

    MIN_AREA = 1e-12

    def __init__(
        self,
        vertices: Sequence[Union[Vector2, Tuple[float, float]]],
        reference_point_index: int = 0
    ) -> None:
        """
        Raises:
            ValueError: If there are fewer than three vertices, any vertex is
                not finite, the loop self-intersects, or the area is zero.
        """
        points = [v if isinstance(v, Vector2) else Vector2(float(v[0]), float(v[1])) for v in vertices]
        if len(points) < 3:
            raise ValueError(f"Polygon needs at least 3 vertices, got {len(points)}")
        if not all(p.is_finite() for p in points):
            raise ValueError("Polygon vertices must be finite")
        if not 0 <= reference_point_index < len(points):
            raise ValueError(
                f"reference_point_index {reference_point_index} out of range for {len(points)} vertices"
            )

        shape = ShapelyPolygon([p.to_tuple() for p in points])
        if not shape.is_valid:
            raise ValueError("Polygon must be a simple closed curve (edges may not cross)")
        if shape.area < self.MIN_AREA:
            raise ValueError(f"Polygon area must be positive, got {shape.area}")

        reference = points[reference_point_index]
        shape = orient(shape, sign=1.0)
        ccw = [Vector2(x, y) for x, y in list(shape.exterior.coords)[:-1]]

        self._shape = shape
        self._vertices: Tuple[Vector2, ...] = tuple(ccw)
        self._reference_point_index = self._vertices.index(reference) if reference in self._vertices else 0

    @property
    def vertices(self) -> Tuple[Vector2, ...]:
        return self._vertices

    @property
    def reference_point_index(self) -> int:
        return self._reference_point_index

    @property
    def area(self) -> float:
        return self._shape.area

    def get_edges(self) -> List[Tuple[Vector2, Vector2]]:
        n = len(self._vertices)
        return [(self._vertices[i], self._vertices[(i + 1) % n]) for i in range(n)]

    def _transformed(self, coords: np.ndarray) -> 'Polygon':
        return Polygon([Vector2(float(x), float(y)) for x, y in coords], self._reference_point_index)

    def _coords(self) -> np.ndarray:
        return np.array([v.to_tuple() for v in self._vertices], dtype=np.float64)

    def get_translated_instance(self, dx: float, dy: float) -> 'Polygon':
        """Create a new Polygon translated by the specified amount."""
        return self._transformed(self._coords() + np.array([dx, dy]))

    def get_rotated_instance(self, angle: float, rotation_point: Vector2) -> 'Polygon':
        """
        Create a new Polygon rotated about rotation_point.

        Args:
            angle: Rotation angle in radians (counterclockwise).
            rotation_point: Pivot of the rotation.
        """
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        rotation = np.array([[cos_a, -sin_a], [sin_a, cos_a]])
        pivot = np.array(rotation_point.to_tuple())
        return self._transformed((self._coords() - pivot) @ rotation.T + pivot)

    def get_rotation_center(self) -> Vector2:
        """Centroid of the corner points."""
        cx, cy = self._coords().mean(axis=0)
        return Vector2(float(cx), float(cy))

    def get_reference_point(self) -> Optional[Vector2]:
        return self._vertices[self._reference_point_index]

    def contains_point(self, point: Vector2) -> bool:
        return self._shape.covers(point.to_shapely())

    def get_bounds(self) -> Tuple[float, float, float, float]:
        return tuple(self._shape.bounds)

    def to_shapely(self) -> ShapelyPolygon:
        return self._shape

    def get_intersections(self, ray: 'LightRay') -> List[Intersection]:
        """
        Find the intersections between the polygon edges and the specified ray.

        A ray through a vertex crosses both adjacent edges at the same point.
        That crossing is reported once, with the normals of the two edges
        averaged, so a ray down the bisector of a corner is not deflected
        by whichever edge happens to come first.

        Args:
            ray: Object with `tail` and unit `direction`.

        Returns:
            Intersections ordered by distance from the tail.
        """
        tail, direction = ray.tail, ray.direction
        intersections = []
        for a, b in self.get_edges():
            hit = Geometry.ray_segment_intersection(tail, direction, a, b)
            if hit is None:
                continue
            t, _u = hit
            if t <= 0:
                continue
            edge = b - a
            outward = Vector2(edge.y, -edge.x).normalized()
            normal = _oriented_normal(outward, direction)
            intersections.append(Intersection(normal, tail + direction * t, t))
        intersections.sort(key=lambda intersection: intersection.distance)

        merged: List[Intersection] = []
        for intersection in intersections:
            if merged and intersection.is_duplicate_of(merged[-1], DUPLICATE_INTERSECTION_EPSILON):
                # Vertex
                previous = merged[-1]
                normal = (previous.normal + intersection.normal).normalized()
                merged[-1] = Intersection(normal, previous.point, previous.distance)
            else:
                merged.append(intersection)
        return merged

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Polygon):
            return NotImplemented
        return self._vertices == other._vertices

    def __hash__(self) -> int:
        return hash((self.kind, self._vertices))

    def __repr__(self) -> str:
        points = ", ".join(f"({v.x:g}, {v.y:g})" for v in self._vertices)
        return f"Polygon([{points}])"


Shape = Union[Circle, Polygon]


def get_intersections(shape: Shape, ray: 'LightRay') -> List[Intersection]:
    """
    Intersection query over the closed set of shape kinds.

    Raises:
        TypeError: If `shape` is not a Circle or a Polygon.
    """
    if isinstance(shape, (Circle, Polygon)):
        return shape.get_intersections(ray)
    raise TypeError(f"Unsupported shape type: {type(shape).__name__}")
