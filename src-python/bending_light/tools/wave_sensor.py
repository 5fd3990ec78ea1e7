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

from collections import deque
from typing import Deque, Iterable, List, Optional, Tuple

from ..core.geometry import Vector2
from ..core.ray import LightRay
from .intensity_meter import hits_probe

Sample = Tuple[float, Optional[float]]


class Probe:
    """
    One wave sensor probe: a point and a bounded (time, value) series.

    Attributes:
        position (Vector2): Probe center.
        diameter (float): Probe diameter.
        series (deque): (time, value) samples; value is None when no ray
            crosses the probe.
    """

    def __init__(self, position: Vector2, diameter: float, max_samples: int) -> None:
        self.position = position
        self.diameter = diameter
        self.series: Deque[Sample] = deque(maxlen=max_samples)

    def value_at(self, rays: Iterable[LightRay], time: float) -> Optional[float]:
        """Wave value of the first ray crossing the probe, or None."""
        for ray in rays:
            if hits_probe(ray, self.position, self.diameter):
                return ray.wave_value_at(self.position, time)
        return None

    def step(self, rays: Iterable[LightRay], time: float) -> Optional[float]:
        value = self.value_at(rays, time)
        self.series.append((time, value))
        return value


class WaveSensor:
    """
    Two-probe oscilloscope: records the wave value seen by each probe over time.

    Attributes:
        probe1 (Probe): First probe.
        probe2 (Probe): Second probe.
        max_samples (int): Length of each series; older samples are dropped.
    """

    DEFAULT_MAX_SAMPLES = 200

    def __init__(
        self,
        probe1_position: Vector2,
        probe2_position: Vector2,
        probe_diameter: float,
        max_samples: int = DEFAULT_MAX_SAMPLES
    ) -> None:
        if probe_diameter <= 0:
            raise ValueError(f"Probe diameter must be positive, got {probe_diameter}")
        if not isinstance(max_samples, int) or max_samples < 1:
            raise ValueError(f"max_samples must be a positive integer, got {max_samples}")
        self.max_samples = max_samples
        self.probe1 = Probe(probe1_position, float(probe_diameter), max_samples)
        self.probe2 = Probe(probe2_position, float(probe_diameter), max_samples)

    @property
    def probes(self) -> Tuple[Probe, Probe]:
        return (self.probe1, self.probe2)

    def step(self, rays: Iterable[LightRay], time: float) -> Tuple[Optional[float], Optional[float]]:
        """Append one sample per probe at the given time (seconds)."""
        rays = list(rays)
        return self.probe1.step(rays, time), self.probe2.step(rays, time)

    def reset(self) -> None:
        for probe in self.probes:
            probe.series.clear()

    def series(self) -> List[List[Sample]]:
        return [list(probe.series) for probe in self.probes]
