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

Measurement tools that read a finished trace. None of them change the rays.
"""

from .reading import Reading
from .intensity_meter import IntensityMeter, sample
from .velocity_sensor import VelocitySensor
from .wave_sensor import Probe, WaveSensor

__all__ = [
    'Reading',
    'IntensityMeter', 'sample',
    'VelocitySensor',
    'Probe', 'WaveSensor',
]
