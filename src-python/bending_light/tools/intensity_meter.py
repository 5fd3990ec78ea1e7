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
from typing import Iterable, List, Set

from ..core.geometry import Vector2
from ..core.ray import LightRay
from .reading import Reading


def hits_probe(ray: LightRay, probe_position: Vector2, probe_diameter: float) -> bool:
    """True if the segment (not its infinite line) passes through the probe disk."""
    return ray.distance_to(probe_position) <= probe_diameter / 2.0


def _handed_on(ray: LightRay, parent_uuids: Set[str], probe_position: Vector2, probe_diameter: float) -> bool:
    """
    True if the segment ends inside the probe and its children carry on
    from there. The children start at the same point, so they are inside
    the probe too and already account for the segment's power.
    """
    return ray.uuid in parent_uuids and ray.tip.distance(probe_position) <= probe_diameter / 2.0


def sample(rays: Iterable[LightRay], probe_position: Vector2, probe_diameter: float) -> Reading:
    """
    Measure the relative intensity at a circular probe.

    A segment whose split point lies inside the probe is not counted next
    to its own children, so a probe on a boundary reads the power arriving
    there rather than twice that.

    Args:
        rays: Traced segments.
        probe_position: Center of the probe.
        probe_diameter: Probe diameter in model units.

    Returns:
        Reading with the summed power of every segment crossing the probe,
        clamped to 1.0, or Reading.MISS if none does.
    """
    rays = list(rays)
    parent_uuids = {ray.parent_uuid for ray in rays if ray.parent_uuid is not None}
    hit_powers: List[float] = [
        ray.power for ray in rays
        if hits_probe(ray, probe_position, probe_diameter)
        and not _handed_on(ray, parent_uuids, probe_position, probe_diameter)
    ]
    if not hit_powers:
        return Reading.MISS
    return Reading(min(1.0, math.fsum(hit_powers)))


class IntensityMeter:
    """
    Movable intensity probe.

    Attributes:
        position (Vector2): Probe center.
        diameter (float): Probe diameter (> 0).
        reading (Reading): Result of the last sample (MISS before any).
    """

    def __init__(self, position: Vector2, diameter: float) -> None:
        if not math.isfinite(diameter) or diameter <= 0:
            raise ValueError(f"Probe diameter must be a positive number, got {diameter}")
        if not position.is_finite():
            raise ValueError(f"Probe position must be finite, got {position}")
        self.position = position
        self.diameter = float(diameter)
        self.reading: Reading = Reading.MISS

    def sample(self, rays: Iterable[LightRay]) -> Reading:
        """Sample the rays; the meter keeps the result in `reading`."""
        self.reading = sample(rays, self.position, self.diameter)
        return self.reading

    def translated(self, dx: float, dy: float) -> 'IntensityMeter':
        return IntensityMeter(self.position + Vector2(dx, dy), self.diameter)

    def __repr__(self) -> str:
        return f"IntensityMeter(position={self.position}, diameter={self.diameter}, reading={self.reading})"
