"""
Route tracking, routing and field-of-view geometry.
"""

from .state import RouteStep, NavigationState
from .routing import RoutingProvider, LinearRoutingProvider, generate_instruction
from .tracker import RouteTracker
from .fov import FOVCone, calculate_fov_cone, is_point_in_cone, is_point_in_fov
from .formatting import format_distance, format_time

__all__ = [
    "RouteStep",
    "NavigationState",
    "RoutingProvider",
    "LinearRoutingProvider",
    "generate_instruction",
    "RouteTracker",
    "FOVCone",
    "calculate_fov_cone",
    "is_point_in_cone",
    "is_point_in_fov",
    "format_distance",
    "format_time",
]
