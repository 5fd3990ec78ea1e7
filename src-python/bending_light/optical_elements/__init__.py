"""
Copyright 2026 bending-light-shapely authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

===============================================================================
OPTICAL ELEMENTS MODULE
===============================================================================
Convenience constructors that compute prism geometry from a center and a
size, so users never have to specify raw vertex coordinates for the
standard toolbox shapes.
===============================================================================
"""

from .prisms import (
    # Factory functions
    triangle_prism,
    trapezoid_prism,
    square_prism,
    circle_prism,
    polygon_prism,
    default_toolbox,
    PRISM_TOOLBOX,
    # Physics
    minimum_deviation,
    minimum_deviation_for_medium,
)

__all__ = [
    'triangle_prism',
    'trapezoid_prism',
    'square_prism',
    'circle_prism',
    'polygon_prism',
    'default_toolbox',
    'PRISM_TOOLBOX',
    'minimum_deviation',
    'minimum_deviation_for_medium',
]
