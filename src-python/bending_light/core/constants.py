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

"""
Constants used throughout the bending light model.

Kept in their own module so that shapes, media, the tracer and the tools can
share them without circular imports.
"""

# Minimum ray segment length; intersections closer than this to the tail of a
# ray are the boundary the ray just left and are ignored
MIN_RAY_SEGMENT_LENGTH = 1e-6

# Two intersections closer than this are the same crossing (e.g. a ray through
# a polygon vertex reports both adjacent edges)
DUPLICATE_INTERSECTION_EPSILON = 1e-9

# Candidate hits whose distances differ by less than this are a tie, resolved
# in favour of the prism earlier in the configuration
TIE_DISTANCE_EPSILON = 1e-9

# Step past a hit point, along the ray, used to ask which medium lies beyond it
MEDIUM_PROBE_OFFSET = 1e-7

# Wavelengths (in nanometers, vacuum)
WAVELENGTH_MIN = 380         # Ultraviolet end of the laser slider
WAVELENGTH_MAX = 700         # Infrared end of the laser slider
WAVELENGTH_RED = 650         # Reference wavelength for indexForRed
WHITE_LIGHT_MIN = 400
WHITE_LIGHT_MAX = 700
WHITE_LIGHT_SAMPLE_COUNT = 7

# Dispersion calibration: a BK7-like crown glass Cauchy B coefficient (um^2)
# at the glass preset index. Other media scale B by (n_red - 1)
GLASS_INDEX_FOR_RED = 1.5
GLASS_CAUCHY_B = 0.0042

# Range offered for user-adjusted (custom) media
CUSTOM_INDEX_MIN = 1.0
CUSTOM_INDEX_MAX = 2.5

# Physical constants
SPEED_OF_LIGHT = 299792458.0  # m/s

# Tracer defaults
DEFAULT_MAX_DEPTH = 50
DEFAULT_MAX_RAYS = 10000
DEFAULT_MIN_POWER_EXP = 3     # cutoff = 10^-3 of the source power
DEFAULT_LENGTH_SCALE = 1e-6   # meters per model unit
DEFAULT_BOUNDS = (-1000.0, -1000.0, 1000.0, 1000.0)

# Intensity meter display
READING_DECIMALS = 2
MISS_STRING = "MISS"
