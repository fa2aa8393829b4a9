"""
Navigation and orientation core.

This package provides platform-independent implementations of:
- Geodesic math on a spherical Earth
- Tilt-compensated compass heading from accelerometer + magnetometer samples
- Route progress tracking over a stream of position fixes
- Field-of-view cone geometry
"""

__version__ = "1.0.0"
__author__ = "navcore Team"

from .exceptions import NavCoreError, InvalidSampleError, ConfigError
from .math import distance, bearing, midpoint, destination_point, interpolate_heading
from .sensors import GeoPoint, Vector3, OrientationEstimate, OrientationEstimator, SensorHub, LocationFeed
from .navigation import (
    RouteStep,
    NavigationState,
    RouteTracker,
    LinearRoutingProvider,
    FOVCone,
    calculate_fov_cone,
    is_point_in_cone,
    format_distance,
    format_time,
)
from .config import Config, configure_logging
from .system import NavigationCore

__all__ = [
    "NavCoreError",
    "InvalidSampleError",
    "ConfigError",
    "distance",
    "bearing",
    "midpoint",
    "destination_point",
    "interpolate_heading",
    "GeoPoint",
    "Vector3",
    "OrientationEstimate",
    "OrientationEstimator",
    "SensorHub",
    "LocationFeed",
    "RouteStep",
    "NavigationState",
    "RouteTracker",
    "LinearRoutingProvider",
    "FOVCone",
    "calculate_fov_cone",
    "is_point_in_cone",
    "format_distance",
    "format_time",
    "Config",
    "configure_logging",
    "NavigationCore",
]
