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

import logging
import math
from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional, Tuple, Union

from .color import RGB
from .constants import (
    DEFAULT_MAX_RAYS,
    DUPLICATE_INTERSECTION_EPSILON,
    MEDIUM_PROBE_OFFSET,
    MIN_RAY_SEGMENT_LENGTH,
    TIE_DISTANCE_EPSILON,
)
from .fresnel import fresnel_reflectance, reflect_direction, refract_direction
from .geometry import Vector2, Geometry
from .intersection import Intersection
from .laser import Laser, resolve_color_mode
from .ray import LightRay
from .scene import Scene, SceneSnapshot
from .shapes import get_intersections

logger = logging.getLogger(__name__)

# Indices closer than this are treated as the same medium
SAME_INDEX_EPSILON = 1e-12


@dataclass(frozen=True)
class _RayTask:
    """A ray waiting to be propagated, with everything needed to do so."""
    tail: Vector2
    direction: Vector2
    wavelength: float
    power: float
    color: RGB
    phase: float
    index_of_refraction: float
    source_power: float
    depth: int = 0
    parent_uuid: Optional[str] = None
    interaction_type: str = 'source'


class RayTracer:
    """
    Propagates laser light through a scene of prisms.

    Each pending ray is traced to the nearest prism boundary, emitted as a
    LightRay segment, and split there into a reflected and a refracted child
    by Snell's law and the Fresnel equations (or a single totally internally
    reflected child). Pending rays are held in a FIFO queue, so the ray tree
    is explored breadth-first and the call depth never grows.

    Attributes:
        max_rays (int): Maximum number of segments per trace
        verbose (int): Verbosity level
            0 = silent
            1 = log each processed segment
            2 = also log every boundary split
        pending_tasks (deque): Rays waiting to be processed
        processed_ray_count (int): Number of segments processed in the last trace
        ray_segments (list): Segments emitted by the last trace
        truncated_power (float): Power of children dropped below the cutoff
        depth_limited_power (float): Power of segments that reached max_depth
        warning (str or None): Run-level warning from the last trace
    """

    def __init__(self, max_rays: int = DEFAULT_MAX_RAYS, verbose: int = 0) -> None:
        if not isinstance(max_rays, int) or max_rays < 1:
            raise ValueError(f"max_rays must be a positive integer, got {max_rays}")
        self.max_rays: int = max_rays
        self.verbose: int = verbose
        self.pending_tasks: Deque[_RayTask] = deque()
        self.processed_ray_count: int = 0
        self.ray_segments: List[LightRay] = []
        self.truncated_power: float = 0.0
        self.depth_limited_power: float = 0.0
        self.warning: Optional[str] = None

    def trace(self, scene: Union[Scene, SceneSnapshot], laser: Laser) -> List[LightRay]:
        """
        Trace the laser through the scene.

        Args:
            scene: A Scene (a snapshot is taken) or a SceneSnapshot.
            laser: The light source.

        Returns:
            All emitted segments, in processing order. Empty when the laser is
            off or outside the traced region.
        """
        snapshot = scene.snapshot() if isinstance(scene, Scene) else scene

        self.pending_tasks = deque()
        self.processed_ray_count = 0
        self.ray_segments = []
        self.truncated_power = 0.0
        self.depth_limited_power = 0.0
        self.warning = None

        if laser.on:
            self._seed(snapshot, laser)
            self._process_tasks(snapshot)

            if self.pending_tasks:
                self._set_warning(f"Trace stopped: maximum ray count ({self.max_rays}) reached")

        if isinstance(scene, Scene):
            scene.warning = self.warning
        return self.ray_segments

    def _set_warning(self, message: str) -> None:
        if not self.warning:
            self.warning = message
        logger.warning(message)

    def _seed(self, snapshot: SceneSnapshot, laser: Laser) -> None:
        """Queue one source ray per emission point and sampled wavelength."""
        direction = laser.direction
        for tail, point_share in laser.emission_points():
            if Geometry.ray_exit_distance(tail, direction, snapshot.bounds) is None:
                self._set_warning(f"Laser at {tail} is outside the traced region {snapshot.bounds}")
                continue
            medium = snapshot.medium_at(tail)
            for wavelength, share, color in resolve_color_mode(laser):
                power = laser.power * point_share * share
                self.pending_tasks.append(_RayTask(
                    tail=tail,
                    direction=direction,
                    wavelength=wavelength,
                    power=power,
                    color=color,
                    phase=0.0,
                    index_of_refraction=medium.index_of_refraction(wavelength),
                    source_power=power,
                ))

    def _process_tasks(self, snapshot: SceneSnapshot) -> None:
        while self.pending_tasks and self.processed_ray_count < self.max_rays:
            task = self.pending_tasks.popleft()
            self.processed_ray_count += 1

            exit_distance = Geometry.ray_exit_distance(task.tail, task.direction, snapshot.bounds)
            if exit_distance is None:
                # Tail left the region (numerical drift on the boundary)
                continue

            hit = self._find_nearest_intersection(snapshot, task)

            if hit is None or hit.distance >= exit_distance:
                ray = self._emit(snapshot, task, exit_distance)
                if self.verbose >= 1:
                    logger.info("ray %d exits: %r", self.processed_ray_count, ray)
                continue

            ray = self._emit(snapshot, task, hit.distance)
            if self.verbose >= 1:
                logger.info("ray %d hits (%.6f, %.6f): %r",
                            self.processed_ray_count, hit.point.x, hit.point.y, ray)

            if task.depth >= snapshot.max_depth:
                self.depth_limited_power += task.power
                continue

            for child in self._split(snapshot, task, ray, hit):
                if child.power < snapshot.min_power_threshold * child.source_power:
                    self.truncated_power += child.power
                else:
                    self.pending_tasks.append(child)

    def _emit(self, snapshot: SceneSnapshot, task: _RayTask, length: float) -> LightRay:
        ray = LightRay(
            tail=task.tail,
            direction=task.direction,
            length=length,
            wavelength=task.wavelength,
            power=task.power,
            index_of_refraction=task.index_of_refraction,
            color=task.color,
            phase=task.phase,
            length_scale=snapshot.length_scale,
            parent_uuid=task.parent_uuid,
            interaction_type=task.interaction_type,
            depth=task.depth,
        )
        self.ray_segments.append(ray)
        return ray

    def _find_nearest_intersection(self, snapshot: SceneSnapshot, task: _RayTask) -> Optional[Intersection]:
        """
        Nearest boundary crossing ahead of the task's tail.

        Crossings closer than MIN_RAY_SEGMENT_LENGTH are ignored so a child
        does not re-hit the boundary it starts on. Points reported twice (a
        polygon vertex, or shared edges) count once, and when two prisms are
        hit at the same distance the earlier prism wins.
        """
        candidates: List[Intersection] = []
        for prism in snapshot.prisms:
            for intersection in get_intersections(prism.shape, task):
                if intersection.distance <= MIN_RAY_SEGMENT_LENGTH:
                    continue
                if any(intersection.is_duplicate_of(kept, DUPLICATE_INTERSECTION_EPSILON)
                       for kept in candidates):
                    continue
                candidates.append(intersection)

        nearest: Optional[Intersection] = None
        for intersection in candidates:
            if nearest is None or intersection.distance < nearest.distance - TIE_DISTANCE_EPSILON:
                nearest = intersection
        return nearest

    def _split(
        self,
        snapshot: SceneSnapshot,
        task: _RayTask,
        ray: LightRay,
        hit: Intersection
    ) -> List[_RayTask]:
        """
        Children of a segment at a boundary.

        n1 is the medium the segment travels through. n2 is the medium just
        past the hit along the ray, which stays correct at polygon corners
        where a step against the normal can land outside the prism.
        """
        wavelength = task.wavelength
        n1 = task.index_of_refraction
        beyond = hit.point + task.direction * MEDIUM_PROBE_OFFSET
        n2 = snapshot.medium_at(beyond).index_of_refraction(wavelength)
        end_phase = ray.end_phase()

        def child(direction: Vector2, power: float, n: float, phase: float, kind: str) -> _RayTask:
            return _RayTask(
                tail=hit.point,
                direction=direction,
                wavelength=wavelength,
                power=power,
                color=task.color,
                phase=phase % (2.0 * math.pi),
                index_of_refraction=n,
                source_power=task.source_power,
                depth=task.depth + 1,
                parent_uuid=ray.uuid,
                interaction_type=kind,
            )

        if abs(n1 - n2) < SAME_INDEX_EPSILON:
            # Boundary between identical media: nothing happens
            return [child(task.direction, task.power, n2, end_phase, 'refract')]

        reflected_direction = reflect_direction(task.direction, hit.normal)
        refracted_direction = refract_direction(task.direction, hit.normal, n1, n2)

        if refracted_direction is None:
            if self.verbose >= 2:
                logger.debug("TIR at (%.6f, %.6f): n1=%.6f n2=%.6f",
                             hit.point.x, hit.point.y, n1, n2)
            return [child(reflected_direction, task.power, n1, end_phase, 'tir')]

        cos1 = -hit.normal.dot(task.direction)
        cos2 = -hit.normal.dot(refracted_direction)
        R = fresnel_reflectance(n1, n2, cos1, cos2)

        if self.verbose >= 2:
            logger.debug(
                "split at (%.6f, %.6f): n1=%.6f n2=%.6f theta1=%.4f deg theta2=%.4f deg R=%.6f",
                hit.point.x, hit.point.y, n1, n2,
                math.degrees(math.acos(min(1.0, cos1))), math.degrees(math.acos(min(1.0, cos2))), R
            )

        # Reflection off an optically denser medium flips the phase
        reflected_phase = end_phase + math.pi if n2 > n1 else end_phase
        return [
            child(reflected_direction, task.power * R, n1, reflected_phase, 'reflect'),
            child(refracted_direction, task.power * (1.0 - R), n2, end_phase, 'refract'),
        ]


def trace(scene: Union[Scene, SceneSnapshot], laser: Laser, max_rays: int = DEFAULT_MAX_RAYS) -> List[LightRay]:
    """Trace with a fresh RayTracer."""
    return RayTracer(max_rays=max_rays).trace(scene, laser)


def split_powers(n1: float, n2: float, theta1: float) -> Tuple[float, float]:
    """
    (reflected, transmitted) power fractions for light hitting a boundary at
    theta1 radians from the normal. TIR gives (1.0, 0.0).
    """
    normal = Vector2(0.0, 1.0)
    direction = Vector2(math.sin(theta1), -math.cos(theta1))
    refracted = refract_direction(direction, normal, n1, n2)
    if refracted is None:
        return 1.0, 0.0
    R = fresnel_reflectance(n1, n2, math.cos(theta1), -normal.dot(refracted))
    return R, 1.0 - R
