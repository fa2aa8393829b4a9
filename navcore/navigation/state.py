"""
Route and navigation state representation.
"""

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from ..math.geodesy import GeoPoint


@dataclass(frozen=True)
class RouteStep:
    """
    One waypoint of a planned route.

    - point: Waypoint position
    - heading_degrees: Bearing from this waypoint to the destination
    - instruction: Human-readable instruction shown at this step
    - distance_to_destination: Meters remaining from this waypoint
    """

    point: GeoPoint
    heading_degrees: float = 0.0
    instruction: str = ""
    distance_to_destination: float = 0.0

    @property
    def latitude(self) -> float:
        return self.point.latitude

    @property
    def longitude(self) -> float:
        return self.point.longitude


@dataclass(frozen=True)
class NavigationState:
    """
    Snapshot of a navigation session.

    Instances are immutable; the route tracker replaces its state on every
    change, so a snapshot handed to a reader never changes underneath it.
    """

    is_navigating: bool = False
    destination: Optional[GeoPoint] = None
    route: Tuple[RouteStep, ...] = ()

    # Progress
    current_step_index: int = 0
    total_steps: int = 0

    # Estimates
    estimated_time_seconds: float = 0.0
    estimated_distance_meters: float = 0.0

    @classmethod
    def idle(cls) -> "NavigationState":
        """Empty, not-navigating state."""
        return cls()

    def copy(self, **changes) -> "NavigationState":
        """Create a modified copy of the state."""
        return replace(self, **changes)

    @property
    def current_step(self) -> Optional[RouteStep]:
        if 0 <= self.current_step_index < len(self.route):
            return self.route[self.current_step_index]
        return None

    @property
    def current_instruction(self) -> str:
        """Instruction at the current step, empty when idle or without a route."""
        if not self.is_navigating:
            return ""
        step = self.current_step
        return step.instruction if step is not None else ""

    @property
    def remaining_steps(self) -> int:
        return max(0, self.total_steps - self.current_step_index)

    @property
    def progress(self) -> float:
        """Fraction of route steps passed, in [0, 1]."""
        if self.total_steps <= 1:
            return 0.0
        return min(1.0, self.current_step_index / (self.total_steps - 1))

    def __str__(self) -> str:
        if not self.is_navigating:
            return "NavigationState(idle)"
        return (
            f"NavigationState(step={self.current_step_index}/{self.total_steps}, "
            f"distance={self.estimated_distance_meters:.1f}m, "
            f"time={self.estimated_time_seconds:.0f}s, "
            f"destination={self.destination})"
        )
