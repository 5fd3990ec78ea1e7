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
import uuid as uuid_module
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .constants import (
    DEFAULT_BOUNDS,
    DEFAULT_LENGTH_SCALE,
    DEFAULT_MAX_DEPTH,
    DEFAULT_MIN_POWER_EXP,
)
from .geometry import Vector2
from .medium import Medium, AIR
from .shapes import Circle, Polygon, Shape

Bounds = Tuple[float, float, float, float]


@dataclass(frozen=True)
class Prism:
    """
    A solid region of one medium bounded by a shape.

    Attributes:
        shape: Circle or Polygon boundary.
        medium: Medium filling the shape.
    """
    shape: Shape
    medium: Medium

    def __post_init__(self) -> None:
        if not isinstance(self.shape, (Circle, Polygon)):
            raise ValueError(f"Prism shape must be a Circle or Polygon, got {type(self.shape).__name__}")
        if not isinstance(self.medium, Medium):
            raise ValueError(f"Prism medium must be a Medium, got {type(self.medium).__name__}")

    def translated(self, dx: float, dy: float) -> 'Prism':
        return Prism(self.shape.get_translated_instance(dx, dy), self.medium)

    def rotated(self, angle: float, rotation_point: Optional[Vector2] = None) -> 'Prism':
        """Rotate about rotation_point (default: the shape's rotation center)."""
        pivot = rotation_point if rotation_point is not None else self.shape.get_rotation_center()
        return Prism(self.shape.get_rotated_instance(angle, pivot), self.medium)

    def with_medium(self, medium: Medium) -> 'Prism':
        return Prism(self.shape, medium)

    def contains_point(self, point: Vector2) -> bool:
        return self.shape.contains_point(point)


@dataclass(frozen=True)
class SceneSnapshot:
    """
    Read-only view of a scene taken at the start of a trace.

    Attributes:
        environment_medium: Medium outside every prism.
        prisms: Prisms in priority order (earlier wins overlaps and ties).
        bounds: (min_x, min_y, max_x, max_y) of the traced region.
        max_depth: Maximum number of boundary crossings along any path.
        min_power_threshold: Relative power below which children are dropped.
        length_scale: Meters per model unit.
    """
    environment_medium: Medium
    prisms: Tuple[Prism, ...]
    bounds: Bounds
    max_depth: int
    min_power_threshold: float
    length_scale: float

    def medium_at(self, point: Vector2) -> Medium:
        """Medium of the first prism containing the point, else the environment."""
        for prism in self.prisms:
            if prism.contains_point(point):
                return prism.medium
        return self.environment_medium


class Scene:
    """
    Container for prisms and tracing settings.

    A Scene is the mutable configuration a user edits; the tracer only ever
    reads a SceneSnapshot of it, so a trace sees one consistent state.

    Attributes:
        prisms (list): Prisms in priority order.
        environment_medium (Medium): Medium filling the rest of the plane.
        bounds (tuple): Traced region; rays that leave it are terminated.
        max_depth (int): Maximum boundary crossings along any path.
        length_scale (float): Meters per model unit (phase and wave values).
        warning (str or None): Warning from the last trace run on this scene.
        name (str or None): Optional name for the scene.

    Properties:
        min_power_exp (int): Exponent for the minimum power threshold. The
            threshold is 10^(-min_power_exp) of the source power. For example:
            - 3 means threshold = 10^(-3) = 0.1%
            - 6 means threshold = 10^(-6) = 1ppm
    """

    def __init__(
        self,
        environment_medium: Medium = AIR,
        prisms: Optional[List[Prism]] = None,
        bounds: Bounds = DEFAULT_BOUNDS
    ) -> None:
        self.environment_medium = environment_medium
        self.prisms: List[Prism] = []
        for prism in prisms or []:
            self.add_prism(prism)
        self.bounds = bounds
        self._max_depth = DEFAULT_MAX_DEPTH
        self._min_power_exp = DEFAULT_MIN_POWER_EXP
        self._length_scale = DEFAULT_LENGTH_SCALE
        self.warning: Optional[str] = None
        self.name: Optional[str] = None
        self._uuid: str = str(uuid_module.uuid4())

    @property
    def uuid(self) -> str:
        """Unique identifier for the scene (read-only)."""
        return self._uuid

    @property
    def environment_medium(self) -> Medium:
        return self._environment_medium

    @environment_medium.setter
    def environment_medium(self, value: Medium) -> None:
        if not isinstance(value, Medium):
            raise ValueError(f"environment_medium must be a Medium, got {type(value).__name__}")
        self._environment_medium = value

    @property
    def bounds(self) -> Bounds:
        return self._bounds

    @bounds.setter
    def bounds(self, value: Bounds) -> None:
        """Set (min_x, min_y, max_x, max_y), which must be finite with min < max."""
        if len(value) != 4:
            raise ValueError(f"bounds must be (min_x, min_y, max_x, max_y), got {value}")
        min_x, min_y, max_x, max_y = (float(v) for v in value)
        if not all(math.isfinite(v) for v in (min_x, min_y, max_x, max_y)):
            raise ValueError(f"bounds must be finite, got {value}")
        if min_x >= max_x or min_y >= max_y:
            raise ValueError(f"bounds must satisfy min < max, got {value}")
        self._bounds = (min_x, min_y, max_x, max_y)

    @property
    def max_depth(self) -> int:
        return self._max_depth

    @max_depth.setter
    def max_depth(self, value: int) -> None:
        if not isinstance(value, int) or isinstance(value, bool) or value < 1:
            raise ValueError(f"max_depth must be a positive integer, got {value}")
        self._max_depth = value

    @property
    def min_power_exp(self) -> int:
        """
        Exponent for the minimum power threshold.

        The threshold is calculated as 10^(-value) of the source power.
        """
        return self._min_power_exp

    @min_power_exp.setter
    def min_power_exp(self, value: int) -> None:
        """
        Raises:
            ValueError: If value is not a positive number.
        """
        if not isinstance(value, (int, float)) or isinstance(value, bool) or value <= 0:
            raise ValueError(f"min_power_exp must be a positive number, got {value}")
        self._min_power_exp = value

    def get_min_power_threshold(self) -> float:
        """Relative power below which a child ray is not traced."""
        return 10 ** (-self._min_power_exp)

    @property
    def length_scale(self) -> float:
        return self._length_scale

    @length_scale.setter
    def length_scale(self, value: float) -> None:
        if not isinstance(value, (int, float)) or not math.isfinite(value) or value <= 0:
            raise ValueError(f"length_scale must be a positive number, got {value}")
        self._length_scale = float(value)

    def add_prism(self, prism: Prism) -> Prism:
        if not isinstance(prism, Prism):
            raise ValueError(f"Expected a Prism, got {type(prism).__name__}")
        self.prisms.append(prism)
        return prism

    def remove_prism(self, prism: Prism) -> None:
        """
        Raises:
            ValueError: If the prism is not in the scene.
        """
        self.prisms.remove(prism)

    def replace_prism(self, old: Prism, new: Prism) -> None:
        """Swap a prism in place, keeping its priority."""
        if not isinstance(new, Prism):
            raise ValueError(f"Expected a Prism, got {type(new).__name__}")
        index = self.prisms.index(old)
        self.prisms[index] = new

    def clear(self) -> None:
        self.prisms.clear()

    def medium_at(self, point: Vector2) -> Medium:
        return self.snapshot().medium_at(point)

    def snapshot(self) -> SceneSnapshot:
        return SceneSnapshot(
            environment_medium=self._environment_medium,
            prisms=tuple(self.prisms),
            bounds=self._bounds,
            max_depth=self._max_depth,
            min_power_threshold=self.get_min_power_threshold(),
            length_scale=self._length_scale,
        )

    def __repr__(self) -> str:
        return (f"Scene(environment={self._environment_medium.name}, "
                f"prisms={len(self.prisms)}, bounds={self._bounds})")
