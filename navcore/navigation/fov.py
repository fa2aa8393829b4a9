"""
Field-of-view cone geometry.

A cone is a heading-centered sector: a point is visible when it lies within
the cone radius and its bearing from the center is within half the cone
angle of the cone heading. Cones carry no state and are built per query.
"""

from dataclasses import dataclass
from typing import Iterable, List

from ..math.constants import DEFAULT_FOV_ANGLE_DEG, DEFAULT_FOV_RADIUS_M
from ..math.geodesy import GeoPoint, bearing, distance
from ..math.utils import normalize_heading, heading_difference


@dataclass(frozen=True)
class FOVCone:
    """Heading-centered visibility sector."""

    center: GeoPoint
    heading_degrees: float
    angle_degrees: float = DEFAULT_FOV_ANGLE_DEG    # Full opening angle
    radius_meters: float = DEFAULT_FOV_RADIUS_M

    @property
    def half_angle_degrees(self) -> float:
        return self.angle_degrees / 2.0


def calculate_fov_cone(center: GeoPoint,
                       heading_degrees: float,
                       angle_degrees: float = DEFAULT_FOV_ANGLE_DEG,
                       radius_meters: float = DEFAULT_FOV_RADIUS_M) -> FOVCone:
    """
    Build a cone for the current position and heading.

    Args:
        center: Cone apex
        heading_degrees: Direction the cone faces
        angle_degrees: Full opening angle (default 60)
        radius_meters: Visibility radius (default 100 m)

    Returns:
        FOVCone with a normalized heading
    """
    return FOVCone(
        center=center,
        heading_degrees=normalize_heading(heading_degrees),
        angle_degrees=angle_degrees,
        radius_meters=radius_meters
    )


def is_point_in_cone(cone: FOVCone, point: GeoPoint) -> bool:
    """
    Check whether a point lies inside the cone.

    Both boundaries are inclusive.
    """
    if distance(cone.center, point) > cone.radius_meters:
        return False

    angle_diff = heading_difference(bearing(cone.center, point), cone.heading_degrees)
    return angle_diff <= cone.half_angle_degrees


is_point_in_fov = is_point_in_cone


def filter_points_in_cone(cone: FOVCone, points: Iterable[GeoPoint]) -> List[GeoPoint]:
    """Points from an iterable that lie inside the cone, order preserved."""
    return [p for p in points if is_point_in_cone(cone, p)]
