"""
Geodesic calculations on a spherical Earth.

All functions are pure. Inputs are assumed to be valid coordinates
(latitude in [-90, 90], longitude in [-180, 180]); ill-defined inputs such
as the bearing between antipodal points, or NaN coordinates, propagate NaN
instead of raising. Validate fixes at the boundary (see LocationFeed).
"""

import math
from dataclasses import dataclass
from typing import Optional

from .constants import EARTH_RADIUS_M, DEFAULT_SMOOTHING_FACTOR
from .utils import normalize_heading, signed_heading_difference


@dataclass(frozen=True)
class GeoPoint:
    """Immutable geographic position, one per location fix."""

    # Position (decimal degrees)
    latitude: float
    longitude: float

    # Optional fix metadata
    altitude: Optional[float] = None     # meters
    accuracy: Optional[float] = None     # meters (horizontal)
    heading: Optional[float] = None      # degrees [0, 360)
    speed: Optional[float] = None        # m/s
    timestamp: Optional[float] = None    # seconds

    @property
    def is_valid(self) -> bool:
        """Check that coordinates are finite and in range."""
        return (math.isfinite(self.latitude) and
                math.isfinite(self.longitude) and
                -90.0 <= self.latitude <= 90.0 and
                -180.0 <= self.longitude <= 180.0)

    def same_position(self, other: "GeoPoint") -> bool:
        """Compare coordinates only, ignoring fix metadata."""
        return self.latitude == other.latitude and self.longitude == other.longitude

    def __str__(self) -> str:
        return f"({self.latitude:.6f}, {self.longitude:.6f})"


def haversine_distance(lat1, lon1, lat2, lon2):
    """
    Calculate the great circle distance between two points on Earth.

    Args:
        lat1, lon1: Latitude and longitude of first point (degrees)
        lat2, lon2: Latitude and longitude of second point (degrees)

    Returns:
        float: Distance in meters
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = (math.sin(d_phi / 2) ** 2
         + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2)
    # Rounding can push a just past 1 for near-antipodal points
    if a > 1.0:
        a = 1.0
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_M * c


def calculate_bearing(lat1, lon1, lat2, lon2):
    """
    Calculate the initial bearing between two GPS coordinates.

    Args:
        lat1, lon1: Starting latitude and longitude (degrees)
        lat2, lon2: Ending latitude and longitude (degrees)

    Returns:
        float: Bearing in degrees [0, 360), 0 = north, 90 = east
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_lambda = math.radians(lon2 - lon1)

    y = math.sin(d_lambda) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(d_lambda)

    return normalize_heading(math.degrees(math.atan2(y, x)))


def distance(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance between two points in meters (haversine)."""
    return haversine_distance(a.latitude, a.longitude, b.latitude, b.longitude)


def bearing(a: GeoPoint, b: GeoPoint) -> float:
    """
    Initial bearing from a to b along the great circle.

    Not symmetric: bearing(b, a) is only approximately bearing(a, b) + 180
    over short distances.
    """
    return calculate_bearing(a.latitude, a.longitude, b.latitude, b.longitude)


def midpoint(a: GeoPoint, b: GeoPoint) -> GeoPoint:
    """
    Geodesic midpoint of the great-circle segment between a and b.

    Args:
        a: First point
        b: Second point

    Returns:
        GeoPoint halfway along the great circle (not the planar average)
    """
    lat1 = math.radians(a.latitude)
    lon1 = math.radians(a.longitude)
    lat2 = math.radians(b.latitude)
    lon2 = math.radians(b.longitude)

    bx = math.cos(lat2) * math.cos(lon2 - lon1)
    by = math.cos(lat2) * math.sin(lon2 - lon1)

    mid_lat = math.atan2(
        math.sin(lat1) + math.sin(lat2),
        math.sqrt((math.cos(lat1) + bx) ** 2 + by ** 2)
    )
    mid_lon = lon1 + math.atan2(by, math.cos(lat1) + bx)

    return GeoPoint(latitude=math.degrees(mid_lat), longitude=math.degrees(mid_lon))


def destination_point(origin: GeoPoint, distance_m: float, bearing_deg: float) -> GeoPoint:
    """
    Project a point forward along a great circle.

    Args:
        origin: Starting point
        distance_m: Distance to travel in meters
        bearing_deg: Initial bearing in degrees

    Returns:
        GeoPoint reached after travelling distance_m from origin
    """
    angular_distance = distance_m / EARTH_RADIUS_M
    theta = math.radians(bearing_deg)
    lat1 = math.radians(origin.latitude)
    lon1 = math.radians(origin.longitude)

    sin_lat2 = (math.sin(lat1) * math.cos(angular_distance)
                + math.cos(lat1) * math.sin(angular_distance) * math.cos(theta))
    if sin_lat2 > 1.0:
        sin_lat2 = 1.0
    elif sin_lat2 < -1.0:
        sin_lat2 = -1.0
    lat2 = math.asin(sin_lat2)
    lon2 = lon1 + math.atan2(
        math.sin(theta) * math.sin(angular_distance) * math.cos(lat1),
        math.cos(angular_distance) - math.sin(lat1) * math.sin(lat2)
    )

    return GeoPoint(latitude=math.degrees(lat2), longitude=math.degrees(lon2))


def interpolate_heading(h1: float, h2: float, factor: float) -> float:
    """
    Interpolate between two headings along the shortest arc.

    350 -> 10 at factor 0.5 gives 0, not 180. The factor is not clamped:
    values outside [0, 1] extrapolate linearly and the result is wrapped.

    Args:
        h1: Start heading in degrees
        h2: End heading in degrees
        factor: Interpolation factor (0 = h1, 1 = h2)

    Returns:
        float: Heading in degrees [0, 360)
    """
    diff = signed_heading_difference(h1, h2)
    return normalize_heading(h1 + diff * factor)


def smooth_heading(current: float, target: float,
                   smoothing_factor: float = DEFAULT_SMOOTHING_FACTOR) -> float:
    """Exponential smoothing step from the current heading towards a target."""
    return interpolate_heading(current, target, smoothing_factor)
