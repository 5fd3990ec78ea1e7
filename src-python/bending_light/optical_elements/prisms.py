"""
Copyright 2026 bending-light-shapely authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

===============================================================================
PRISM TOOLBOX
===============================================================================
Factories for the prisms a user can drag into the play area, plus the
classic prism deviation formula.

Every factory builds its shape around `center` and then rotates it by
`rotation` degrees (counterclockwise) about that center.

Triangle vertex layout (before rotation):

    Coordinate system: +X = East, +Y = North

            V2 (apex)
           / \
          /   \
         /     \
        V0-----V1

    Vertex traversal V0->V1->V2->V0 is counterclockwise.
===============================================================================
"""

from __future__ import annotations

import math
from typing import List, Sequence, Tuple, Union

from ..core.geometry import Vector2
from ..core.medium import Medium, GLASS
from ..core.scene import Prism
from ..core.shapes import Circle, Polygon

PointLike = Union[Vector2, Tuple[float, float]]


def _as_vector(point: PointLike) -> Vector2:
    if isinstance(point, Vector2):
        return point
    return Vector2(float(point[0]), float(point[1]))


def _placed(vertices: List[Vector2], center: Vector2, rotation: float) -> Polygon:
    """Offset vertices (given relative to the center) and rotate them."""
    polygon = Polygon([center + v for v in vertices])
    if rotation:
        polygon = polygon.get_rotated_instance(math.radians(rotation), center)
    return polygon


def _check_positive(**sizes: float) -> None:
    for name, value in sizes.items():
        if not math.isfinite(value) or value <= 0:
            raise ValueError(f"{name} must be a positive number, got {value}")


def triangle_prism(
    center: PointLike,
    side: float,
    medium: Medium = GLASS,
    rotation: float = 0.0
) -> Prism:
    """
    Equilateral triangle prism, centered on its centroid.

    Args:
        center: Centroid of the triangle.
        side: Length of each side.
        medium: Material of the prism.
        rotation: Rotation in degrees (counterclockwise).
    """
    _check_positive(side=side)
    height = side * math.sqrt(3) / 2
    vertices = [
        Vector2(-side / 2, -height / 3),
        Vector2(side / 2, -height / 3),
        Vector2(0.0, 2 * height / 3),
    ]
    return Prism(_placed(vertices, _as_vector(center), rotation), medium)


def trapezoid_prism(
    center: PointLike,
    bottom: float,
    top: float,
    height: float,
    medium: Medium = GLASS,
    rotation: float = 0.0
) -> Prism:
    """
    Symmetric trapezoid, centered on the midpoint of its height.

    Args:
        center: Midpoint between the bottom and top edges.
        bottom: Length of the bottom edge.
        top: Length of the top edge.
        height: Distance between the edges.
    """
    _check_positive(bottom=bottom, top=top, height=height)
    vertices = [
        Vector2(-bottom / 2, -height / 2),
        Vector2(bottom / 2, -height / 2),
        Vector2(top / 2, height / 2),
        Vector2(-top / 2, height / 2),
    ]
    return Prism(_placed(vertices, _as_vector(center), rotation), medium)


def square_prism(
    center: PointLike,
    side: float,
    medium: Medium = GLASS,
    rotation: float = 0.0
) -> Prism:
    _check_positive(side=side)
    half = side / 2
    vertices = [Vector2(-half, -half), Vector2(half, -half), Vector2(half, half), Vector2(-half, half)]
    return Prism(_placed(vertices, _as_vector(center), rotation), medium)


def circle_prism(center: PointLike, radius: float, medium: Medium = GLASS) -> Prism:
    _check_positive(radius=radius)
    return Prism(Circle(_as_vector(center), radius), medium)


def polygon_prism(
    vertices: Sequence[PointLike],
    medium: Medium = GLASS,
    reference_point_index: int = 0
) -> Prism:
    """Prism from an arbitrary simple polygon (any winding)."""
    return Prism(Polygon([_as_vector(v) for v in vertices], reference_point_index), medium)


def default_toolbox(medium: Medium = GLASS, size: float = 100.0) -> List[Prism]:
    """
    The standard set of prisms offered to the user, all at the origin.

    Args:
        medium: Material for every prism.
        size: Characteristic size (side, diameter or bottom width).
    """
    origin = Vector2(0.0, 0.0)
    return [
        triangle_prism(origin, size, medium),
        trapezoid_prism(origin, size, size / 2, size * math.sqrt(3) / 4, medium),
        square_prism(origin, size, medium),
        circle_prism(origin, size / 2, medium),
    ]


PRISM_TOOLBOX: Tuple[Prism, ...] = tuple(default_toolbox())


def minimum_deviation(apex_angle_deg: float, n: float) -> float:
    """
    Minimum deviation angle (degrees) for a prism in vacuum.

    Formula: D_min = 2 * arcsin(n * sin(A/2)) - A

    Raises:
        ValueError: If the calculation is impossible (n * sin(A/2) > 1).

    Example:
        >>> minimum_deviation(60.0, 1.5)  # Equilateral prism, n=1.5
        37.18...  # degrees
    """
    A = math.radians(apex_angle_deg)
    arg = n * math.sin(A / 2)
    if arg > 1.0:
        raise ValueError(
            f"Minimum deviation impossible: n * sin(A/2) = {arg:.4f} > 1. "
            f"Try a smaller apex angle or lower refractive index."
        )
    return math.degrees(2 * math.asin(arg) - A)


def minimum_deviation_for_medium(apex_angle_deg: float, medium: Medium, wavelength: float) -> float:
    """Minimum deviation at a given wavelength, using the medium's dispersion."""
    return minimum_deviation(apex_angle_deg, medium.index_of_refraction(wavelength))
