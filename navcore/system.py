"""
Wiring of the navigation core components.
"""

import logging
from typing import Optional, Tuple

from .config import Config
from .math.geodesy import GeoPoint
from .navigation.fov import FOVCone, calculate_fov_cone
from .navigation.routing import LinearRoutingProvider, RoutingProvider
from .navigation.state import NavigationState
from .navigation.tracker import RouteTracker
from .sensors.gps import LocationFeed
from .sensors.hub import SensorHub
from .sensors.orientation import OrientationEstimate, OrientationEstimator

logger = logging.getLogger(__name__)


class NavigationCore:
    """
    Owns one sensor hub, location feed and route tracker.

    Location fixes accepted by the feed are forwarded to the tracker. There
    are no threads: fixes and samples are processed on the caller's thread.

    Typical lifecycle:
        core = NavigationCore(Config("navcore.json"))
        core.location.push_fix(GeoPoint(37.7749, -122.4194))
        core.navigate_to(GeoPoint(37.7849, -122.4094))

        # Sensor callbacks:
        core.sensors.update_magnetometer(Vector3(20.0, 0.0, 40.0))
    """

    def __init__(self, config: Optional[Config] = None,
                 routing_provider: Optional[RoutingProvider] = None):
        """
        Initialize the navigation core.

        Args:
            config: Configuration; defaults are used if omitted
            routing_provider: Route source; defaults to the straight-line placeholder
        """
        self.config = config or Config()

        self.sensors = SensorHub(OrientationEstimator(smoothing_factor=self.config.smoothing_factor))
        self.location = LocationFeed(
            max_history_length=self.config.location_history_length,
            stationary_speed_ms=self.config.stationary_speed_ms
        )
        self.tracker = RouteTracker(
            routing_provider=routing_provider or LinearRoutingProvider(self.config.route_segments),
            average_speed_ms=self.config.average_speed_ms
        )

        self._location_subscription = self.location.location_channel.subscribe(
            self.tracker.update_current_location
        )

    def navigate_to(self, destination: GeoPoint,
                    origin: Optional[GeoPoint] = None) -> Tuple[bool, NavigationState]:
        """
        Start navigation and plan a route from the origin (or last fix).

        Args:
            destination: Target position
            origin: Start position; the last accepted fix is used if omitted

        Returns:
            (route_planned, state). Without any origin, navigation starts with
            an empty route and route_planned is False.
        """
        state = self.tracker.start(destination)

        origin = origin or self.location.last_fix
        if origin is None:
            logger.warning("No location fix yet; navigating without a route")
            return False, state

        route = self.tracker.compute_route(origin, destination)
        state = self.tracker.set_route(route)
        return True, state

    def stop(self) -> NavigationState:
        """End navigation."""
        return self.tracker.stop()

    def heading(self) -> OrientationEstimate:
        """Latest compass estimate."""
        return self.sensors.current_estimate()

    def fov_cone(self) -> Optional[FOVCone]:
        """
        Field-of-view cone at the last fix facing the compass heading.

        Returns:
            FOVCone, or None without a fix or a determined heading
        """
        fix = self.location.last_fix
        estimate = self.heading()
        if fix is None or not estimate.is_determined:
            return None

        return calculate_fov_cone(
            fix,
            estimate.heading_degrees,
            angle_degrees=self.config.fov_angle_deg,
            radius_meters=self.config.fov_radius_m
        )

    def close(self) -> None:
        """Detach the tracker from the location feed."""
        self._location_subscription.cancel()

    def get_statistics(self) -> dict:
        """Get statistics of all components."""
        return {
            'sensors': self.sensors.get_statistics(),
            'location': self.location.get_statistics(),
            'navigation': self.tracker.get_statistics()
        }
