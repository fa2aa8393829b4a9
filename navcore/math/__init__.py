"""
Mathematical utilities for navigation calculations.
"""

from .utils import normalize_heading, heading_difference
from .geodesy import (
    distance,
    bearing,
    midpoint,
    destination_point,
    interpolate_heading,
    smooth_heading,
    haversine_distance,
    calculate_bearing,
)
from .constants import *

__all__ = [
    "normalize_heading",
    "heading_difference",
    "distance",
    "bearing",
    "midpoint",
    "destination_point",
    "interpolate_heading",
    "smooth_heading",
    "haversine_distance",
    "calculate_bearing",
]
