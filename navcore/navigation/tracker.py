"""
Route progress tracking over a stream of location fixes.
"""

import logging
import threading
from typing import Any, Dict, Iterable, Optional, Tuple

from ..events import Channel, Subscription
from ..math.constants import AVERAGE_SPEED_MS
from ..math.geodesy import GeoPoint, distance
from .routing import LinearRoutingProvider, RoutingProvider
from .state import NavigationState, RouteStep

logger = logging.getLogger(__name__)


def total_route_distance(route: Iterable[RouteStep]) -> float:
    """Sum of great-circle distances between consecutive route steps."""
    steps = list(route)
    return sum(distance(a.point, b.point) for a, b in zip(steps, steps[1:]))


def nearest_step_index(route: Tuple[RouteStep, ...], position: GeoPoint) -> int:
    """
    Index of the route step closest to a position.

    Linear scan; on ties the lowest index wins.
    """
    closest = 0
    min_distance = float('inf')
    for i, step in enumerate(route):
        d = distance(position, step.point)
        if d < min_distance:
            min_distance = d
            closest = i
    return closest


class RouteTracker:
    """
    Navigation state machine: Idle -> Navigating -> Idle.

    Every mutating call swaps in a new immutable NavigationState, publishes it
    to subscribers and returns it. Progress is nearest-waypoint matching, so
    a noisy fix closer to an earlier waypoint moves the step index backwards.
    """

    def __init__(self,
                 routing_provider: Optional[RoutingProvider] = None,
                 average_speed_ms: float = AVERAGE_SPEED_MS):
        """
        Initialize the route tracker.

        Args:
            routing_provider: Route source; defaults to the straight-line placeholder
            average_speed_ms: Travel speed used for time estimates (m/s)
        """
        self.routing_provider = routing_provider or LinearRoutingProvider()
        self.average_speed_ms = average_speed_ms

        self._lock = threading.Lock()
        self._state = NavigationState.idle()
        self.channel: Channel[NavigationState] = Channel("navigation")

        # Statistics
        self.location_update_count = 0
        self.step_change_count = 0

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------

    @property
    def state(self) -> NavigationState:
        """Current navigation state (immutable snapshot)."""
        with self._lock:
            return self._state

    def get_state(self) -> NavigationState:
        return self.state

    @property
    def is_navigating(self) -> bool:
        return self.state.is_navigating

    def subscribe(self, callback) -> Subscription:
        """Receive every published NavigationState."""
        return self.channel.subscribe(callback)

    def _publish(self, state: NavigationState) -> NavigationState:
        return self.channel.publish(state)

    # ------------------------------------------------------------------
    # Navigation control
    # ------------------------------------------------------------------

    def start(self, destination: GeoPoint) -> NavigationState:
        """
        Begin navigating towards a destination with an empty route.

        An active session is stopped first.

        Args:
            destination: Target position

        Returns:
            New navigation state
        """
        if self.is_navigating:
            self.stop()

        state = NavigationState(is_navigating=True, destination=destination)
        with self._lock:
            self._state = state

        logger.info("Navigation started towards %s", destination)
        return self._publish(state)

    def compute_route(self, origin: GeoPoint, destination: GeoPoint) -> Tuple[RouteStep, ...]:
        """Plan a route with the configured routing provider."""
        return tuple(self.routing_provider.compute_route(origin, destination))

    def estimate_travel_time(self, distance_m: float) -> float:
        """Travel time in seconds at the average speed."""
        return distance_m / self.average_speed_ms

    def set_route(self, route: Iterable[RouteStep]) -> NavigationState:
        """
        Assign a route to the current session.

        Args:
            route: Ordered route steps

        Returns:
            New navigation state
        """
        steps = tuple(route)
        total_distance = total_route_distance(steps)

        with self._lock:
            state = self._state.copy(
                route=steps,
                total_steps=len(steps),
                estimated_distance_meters=total_distance,
                estimated_time_seconds=self.estimate_travel_time(total_distance)
            )
            self._state = state

        logger.info("Route set: %d steps, %.0f m, %.0f s",
                    state.total_steps, state.estimated_distance_meters, state.estimated_time_seconds)
        return self._publish(state)

    def update_current_location(self, position: GeoPoint) -> NavigationState:
        """
        Advance progress from a new location fix.

        No-op while idle or without a route. Otherwise the nearest route step
        becomes the current step; subscribers are only notified on change.

        Args:
            position: Current location fix

        Returns:
            Current navigation state
        """
        with self._lock:
            state = self._state
            if not state.is_navigating or not state.route:
                return state

            self.location_update_count += 1
            closest = nearest_step_index(state.route, position)
            if closest == state.current_step_index:
                return state

            if closest < state.current_step_index:
                logger.debug("Step index moved backwards %d -> %d", state.current_step_index, closest)

            state = state.copy(current_step_index=closest)
            self._state = state
            self.step_change_count += 1

        logger.debug("Current step %d/%d: %s", closest, state.total_steps, state.current_instruction)
        return self._publish(state)

    def stop(self) -> NavigationState:
        """
        End navigation and return to the idle state.

        Returns:
            Idle navigation state
        """
        state = NavigationState.idle()
        with self._lock:
            was_navigating = self._state.is_navigating
            self._state = state

        if was_navigating:
            logger.info("Navigation stopped")
        return self._publish(state)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def current_instruction(self) -> str:
        """Instruction at the current step, empty when idle or without a route."""
        return self.state.current_instruction

    def distance_to_destination(self, position: GeoPoint) -> float:
        """Straight-line meters from a position to the destination, 0 without one."""
        destination = self.state.destination
        if destination is None:
            return 0.0
        return distance(position, destination)

    def get_statistics(self) -> Dict[str, Any]:
        """Get tracker statistics."""
        state = self.state
        return {
            'is_navigating': state.is_navigating,
            'current_step': state.current_step_index,
            'total_steps': state.total_steps,
            'location_updates': self.location_update_count,
            'step_changes': self.step_change_count,
            'subscribers': len(self.channel)
        }
