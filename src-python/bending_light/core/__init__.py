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

from .geometry import Vector2, Geometry
from . import constants
from .shapes import Circle, Polygon, Shape, get_intersections
from .intersection import Intersection
from .medium import DispersionFunction, Medium, MEDIUM_PRESETS, get_preset, custom_medium
from .ray import LightRay
from .laser import Laser, resolve_color_mode
from .scene import Prism, Scene, SceneSnapshot
from .tracer import RayTracer

__all__ = [
    'Vector2', 'Geometry',
    'constants',
    'Circle', 'Polygon', 'Shape', 'get_intersections',
    'Intersection',
    'DispersionFunction', 'Medium', 'MEDIUM_PRESETS', 'get_preset', 'custom_medium',
    'LightRay',
    'Laser', 'resolve_color_mode',
    'Prism', 'Scene', 'SceneSnapshot',
    'RayTracer',
]
