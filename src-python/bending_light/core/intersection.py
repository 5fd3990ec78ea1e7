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

from dataclasses import dataclass

from .geometry import Vector2


@dataclass(frozen=True)
class Intersection:
    """
    One boundary crossing of a ray with a shape.

    Attributes:
        normal: Unit normal at the crossing, oriented against the incoming
            ray direction (it points back into the incident medium).
        point: The crossing point.
        distance: Distance from the ray tail to the point.
    """
    normal: Vector2
    point: Vector2
    distance: float

    def is_duplicate_of(self, other: 'Intersection', epsilon: float) -> bool:
        """True if both records describe the same crossing point."""
        return self.point.distance_squared(other.point) < epsilon * epsilon
