"""
Sensor data processing modules.
"""

from .imu import Vector3, SensorSnapshot
from .orientation import OrientationEstimate, OrientationEstimator, estimate_orientation
from .hub import SensorHub
from .gps import GeoPoint, LocationFeed

__all__ = [
    "Vector3",
    "SensorSnapshot",
    "OrientationEstimate",
    "OrientationEstimator",
    "estimate_orientation",
    "SensorHub",
    "GeoPoint",
    "LocationFeed",
]
