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

Bending Light
=============

Ray optics for refraction, reflection and dispersion at prism boundaries,
using Shapely for computational geometry.

Main modules:
- core: Shapes, media, rays, the laser, scenes and the RayTracer
- tools: Intensity meter, velocity sensor and wave sensor
- optical_elements: Prism toolbox

Quick start:
    from bending_light.core.scene import Scene
    from bending_light.core.laser import Laser
    from bending_light.core.tracer import RayTracer
"""

__version__ = "0.1.0"

# Convenience imports for common usage
from .core.scene import Scene, Prism
from .core.laser import Laser
from .core.tracer import RayTracer
from .core.ray import LightRay
from .tools.intensity_meter import IntensityMeter
from .tools.reading import Reading

__all__ = [
    'Scene',
    'Prism',
    'Laser',
    'RayTracer',
    'LightRay',
    'IntensityMeter',
    'Reading',
    '__version__',
]
