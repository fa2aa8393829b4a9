"""
Routing providers.

The tracker only needs an ordered sequence of RouteStep; where that sequence
comes from is behind the RoutingProvider interface. LinearRoutingProvider is
a straight-line placeholder, not a path planner.
"""

import logging
from abc import ABC, abstractmethod
from typing import Tuple

from ..math.constants import DEFAULT_ROUTE_SEGMENTS
from ..math.geodesy import GeoPoint, bearing, distance
from .state import RouteStep

logger = logging.getLogger(__name__)

START_INSTRUCTION = "Start navigation"
ARRIVAL_INSTRUCTION = "You have arrived at your destination"

INSTRUCTIONS = (
    "Continue straight",
    "Keep left",
    "Keep right",
    "Turn slightly left",
    "Turn slightly right",
    "Turn left",
    "Turn right",
)


def generate_instruction(step: int, total_steps: int) -> str:
    """
    Canned instruction text for a placeholder route.

    Args:
        step: Step index
        total_steps: Index of the final step

    Returns:
        Instruction string
    """
    if step == 0:
        return START_INSTRUCTION
    elif step == total_steps:
        return ARRIVAL_INSTRUCTION
    return INSTRUCTIONS[step % len(INSTRUCTIONS)]


class RoutingProvider(ABC):
    """Source of routes for the route tracker."""

    @abstractmethod
    def compute_route(self, origin: GeoPoint, destination: GeoPoint) -> Tuple[RouteStep, ...]:
        """
        Plan a route.

        Args:
            origin: Start position
            destination: Target position

        Returns:
            Ordered route steps from origin to destination
        """


class LinearRoutingProvider(RoutingProvider):
    """
    Straight-line placeholder router.

    Produces segments + 1 steps by linear latitude/longitude interpolation
    from origin to destination.
    """

    def __init__(self, segments: int = DEFAULT_ROUTE_SEGMENTS):
        if segments < 1:
            raise ValueError("segments must be at least 1")
        self.segments = segments

    def compute_route(self, origin: GeoPoint, destination: GeoPoint) -> Tuple[RouteStep, ...]:
        steps = []
        for i in range(self.segments + 1):
            progress = i / self.segments
            point = GeoPoint(
                latitude=origin.latitude + (destination.latitude - origin.latitude) * progress,
                longitude=origin.longitude + (destination.longitude - origin.longitude) * progress
            )
            steps.append(RouteStep(
                point=point,
                heading_degrees=bearing(point, destination),
                instruction=generate_instruction(i, self.segments),
                distance_to_destination=distance(point, destination)
            ))

        logger.debug("Linear route %s -> %s: %d steps", origin, destination, len(steps))
        return tuple(steps)
