"""
Copyright 2026 bending-light-shapely authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

===============================================================================
Snell's law and Fresnel equation utilities
===============================================================================
Pure functions used by the tracer at every boundary crossing, and callable
standalone to ask "what should I expect?" without running a trace.

Angles are measured from the surface normal. Cosines are taken against a
normal that points back into the incident medium, so cos1 >= 0.

All functions return values; no print() side effects.
===============================================================================
"""

from __future__ import annotations

import math
from typing import Dict, Optional

from .geometry import Vector2, Geometry


def snell_refraction_cosine(n1: float, n2: float, cos1: float) -> Optional[float]:
    """
    cos(theta2) from Snell's law n1 sin(theta1) = n2 sin(theta2).

    Args:
        n1: Index of the incident medium.
        n2: Index of the transmitting medium.
        cos1: Cosine of the angle of incidence.

    Returns:
        cos(theta2), or None under total internal reflection.
    """
    ratio = n1 / n2
    sin1_sq = max(0.0, 1.0 - cos1 * cos1)
    sq = 1.0 - ratio * ratio * sin1_sq
    if sq < 0:
        return None
    return math.sqrt(sq)


def fresnel_coefficients(n1: float, n2: float, cos1: float, cos2: float) -> Dict[str, float]:
    """
    Fresnel power reflectances for a dielectric interface.

    Returns:
        Dict with keys:
        - 'R_s': s-polarization power reflectance
        - 'R_p': p-polarization power reflectance
        - 'R': unpolarized reflectance (R_s + R_p) / 2
        - 'T': unpolarized transmittance 1 - R
    """
    denominator_s = n1 * cos1 + n2 * cos2
    denominator_p = n1 * cos2 + n2 * cos1
    if denominator_s <= 0 or denominator_p <= 0:
        # Exactly grazing: everything reflects
        return {'R_s': 1.0, 'R_p': 1.0, 'R': 1.0, 'T': 0.0}
    R_s = ((n1 * cos1 - n2 * cos2) / denominator_s) ** 2
    R_p = ((n1 * cos2 - n2 * cos1) / denominator_p) ** 2
    R = 0.5 * (R_s + R_p)
    return {'R_s': R_s, 'R_p': R_p, 'R': R, 'T': 1.0 - R}


def fresnel_reflectance(n1: float, n2: float, cos1: float, cos2: float) -> float:
    """Unpolarized Fresnel reflectance, clamped to [0, 1]."""
    R = fresnel_coefficients(n1, n2, cos1, cos2)['R']
    return min(1.0, max(0.0, R))


def normal_incidence_reflectance(n1: float, n2: float) -> float:
    """((n1 - n2) / (n1 + n2))^2"""
    return ((n1 - n2) / (n1 + n2)) ** 2


def critical_angle(n1: float, n2: float) -> float:
    """
    Critical angle for total internal reflection, in degrees.

    Raises:
        ValueError: If n1 <= n2 (no TIR possible).
    """
    if n1 <= n2:
        raise ValueError(
            f"No TIR possible: n1={n1} must be greater than n2={n2}."
        )
    return math.degrees(math.asin(n2 / n1))


def brewster_angle(n1: float, n2: float) -> float:
    """Brewster's angle (where R_p = 0), in degrees."""
    return math.degrees(math.atan(n2 / n1))


def refraction_angle(n1: float, n2: float, theta1_deg: float) -> Optional[float]:
    """
    Refraction angle in degrees, or None under total internal reflection.
    """
    sin2 = n1 * math.sin(math.radians(theta1_deg)) / n2
    if abs(sin2) > 1.0:
        return None
    return math.degrees(math.asin(sin2))


def reflect_direction(direction: Vector2, normal: Vector2) -> Vector2:
    """Mirror direction about the boundary normal."""
    return Geometry.reflect(direction, normal)


def refract_direction(direction: Vector2, normal: Vector2, n1: float, n2: float) -> Optional[Vector2]:
    """
    Transmitted direction from the vector form of Snell's law.

    Reference: http://en.wikipedia.org/wiki/Snell%27s_law#Vector_form

    Args:
        direction: Unit incident direction.
        normal: Unit normal pointing back into the incident medium.
        n1: Index of the incident medium.
        n2: Index of the transmitting medium.

    Returns:
        Unit transmitted direction, or None under total internal reflection.
    """
    cos1 = -normal.dot(direction)
    cos2 = snell_refraction_cosine(n1, n2, cos1)
    if cos2 is None:
        return None
    ratio = n1 / n2
    return (direction * ratio + normal * (ratio * cos1 - cos2)).normalized()
