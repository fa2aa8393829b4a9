"""
Location fix intake for the navigation core.

The platform location provider pushes fixes here; the feed validates them
at the boundary, keeps a short history for quality estimates and publishes
accepted fixes to its subscribers.
"""

import logging
import math
import threading
import numpy as np
from collections import deque
from typing import Optional, List

from ..events import Channel
from ..math.geodesy import GeoPoint, haversine_distance
from ..math.constants import EARTH_RADIUS_M

logger = logging.getLogger(__name__)


class LocationFeed:
    """
    Receives location fixes and provider errors.

    Fixes with non-finite or out-of-range coordinates are rejected here so
    that NaN never reaches the geodesy or route-tracking code.
    """

    def __init__(self, max_history_length: int = 10, stationary_speed_ms: float = 0.5):
        """
        Initialize location feed.

        Args:
            max_history_length: Number of recent fixes kept for quality estimates
            stationary_speed_ms: Default threshold for is_stationary()
        """
        self.stationary_speed_ms = stationary_speed_ms
        self._lock = threading.Lock()
        self._last_fix: Optional[GeoPoint] = None
        self.position_history = deque(maxlen=max_history_length)

        # Channels
        self.location_channel: Channel[GeoPoint] = Channel("location")
        self.error_channel: Channel[str] = Channel("location-errors")

        # Statistics
        self.fix_count = 0
        self.rejected_count = 0
        self.error_count = 0

    def push_fix(self, fix: GeoPoint) -> Optional[GeoPoint]:
        """
        Accept a new fix from the location provider.

        Args:
            fix: Location fix

        Returns:
            The fix if accepted, None if it was rejected
        """
        if not fix.is_valid:
            with self._lock:
                self.rejected_count += 1
            logger.warning("Rejected invalid location fix %r", fix)
            return None

        with self._lock:
            self._last_fix = fix
            self.position_history.append(fix)
            self.fix_count += 1

        logger.debug("Location fix %s", fix)
        self.location_channel.publish(fix)
        return fix

    def report_error(self, message: str) -> None:
        """
        Forward a provider failure (permission denied, timeout, ...).

        No fix is produced; consumers simply receive no update.
        """
        with self._lock:
            self.error_count += 1
        logger.warning("Location provider error: %s", message)
        self.error_channel.publish(message)

    @property
    def last_fix(self) -> Optional[GeoPoint]:
        with self._lock:
            return self._last_fix

    def recent_fixes(self) -> List[GeoPoint]:
        """Get a copy of the recent fix history, oldest first."""
        with self._lock:
            return list(self.position_history)

    def _local_offsets(self, fixes: List[GeoPoint]) -> np.ndarray:
        # Equirectangular projection around the newest fix; fine for the
        # few tens of meters a fix history spans.
        ref = fixes[-1]
        lat0 = math.radians(ref.latitude)
        offsets = []
        for p in fixes:
            x = math.radians(p.longitude - ref.longitude) * math.cos(lat0) * EARTH_RADIUS_M
            y = math.radians(p.latitude - ref.latitude) * EARTH_RADIUS_M
            offsets.append((x, y))
        return np.array(offsets)

    def estimate_position_accuracy(self) -> float:
        """
        Estimate current position accuracy based on recent fixes.

        Returns:
            Estimated position accuracy in meters
        """
        fixes = self.recent_fixes()
        if len(fixes) < 3:
            return 10.0  # Default uncertainty

        positions = self._local_offsets(fixes[-5:])

        # Calculate standard deviation of positions
        pos_std = np.std(positions, axis=0)
        scatter = float(np.sqrt(pos_std[0]**2 + pos_std[1]**2))

        # Use reported horizontal accuracy if available
        reported = fixes[-1].accuracy
        if reported is not None:
            scatter = max(scatter, reported)

        accuracy = max(2.0, scatter)

        return min(accuracy, 50.0)  # Cap at 50m

    def _speeds(self, fixes: List[GeoPoint]) -> List[float]:
        speeds = []
        for prev, cur in zip(fixes, fixes[1:]):
            if cur.speed is not None:
                speeds.append(cur.speed)
            elif prev.timestamp is not None and cur.timestamp is not None and cur.timestamp > prev.timestamp:
                d = haversine_distance(prev.latitude, prev.longitude, cur.latitude, cur.longitude)
                speeds.append(d / (cur.timestamp - prev.timestamp))
        return speeds

    def is_stationary(self, speed_threshold: Optional[float] = None) -> bool:
        """
        Check if the user appears to be stationary.

        Args:
            speed_threshold: Speed threshold in m/s; feed default if omitted

        Returns:
            True if recent speeds average below the threshold
        """
        if speed_threshold is None:
            speed_threshold = self.stationary_speed_ms

        fixes = self.recent_fixes()
        if len(fixes) < 2:
            return True

        recent_speeds = self._speeds(fixes[-4:])
        if not recent_speeds:
            return True

        return float(np.mean(recent_speeds)) < speed_threshold

    def get_statistics(self) -> dict:
        """Get feed statistics."""
        last_fix = self.last_fix
        return {
            'fix_count': self.fix_count,
            'rejected_count': self.rejected_count,
            'error_count': self.error_count,
            'last_fix': (last_fix.latitude, last_fix.longitude) if last_fix else None,
            'position_history_length': len(self.position_history),
            'estimated_accuracy': self.estimate_position_accuracy(),
            'is_stationary': self.is_stationary()
        }
