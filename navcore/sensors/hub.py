"""
Sensor hub: retains the latest inertial samples and publishes orientation.
"""

import logging
import threading
import time
from typing import Optional

from ..events import Channel
from .imu import Vector3, SensorSnapshot
from .orientation import OrientationEstimate, OrientationEstimator

logger = logging.getLogger(__name__)


class SensorHub:
    """
    Retains the latest accelerometer, gyroscope and magnetometer samples and
    re-estimates orientation whenever any of them changes.

    Streams arrive independently and unpaired; each update replaces one
    whole Vector3 under a lock, so readers never see a torn vector.
    """

    def __init__(self, estimator: Optional[OrientationEstimator] = None):
        """
        Initialize sensor hub.

        Args:
            estimator: Orientation estimator; a default one is created if omitted
        """
        self.estimator = estimator or OrientationEstimator()

        self._lock = threading.Lock()
        self._snapshot = SensorSnapshot()
        self._estimate = OrientationEstimate.undetermined()

        # Channels
        self.sensor_channel: Channel[SensorSnapshot] = Channel("sensors")
        self.compass_channel: Channel[OrientationEstimate] = Channel("compass")

        # Statistics
        self.sample_counts = {'accelerometer': 0, 'gyroscope': 0, 'magnetometer': 0}
        self.last_update_time: Optional[float] = None

    def update_accelerometer(self, sample: Vector3, timestamp: Optional[float] = None) -> OrientationEstimate:
        """Record a new accelerometer sample and return the refreshed estimate."""
        return self._update('accelerometer', sample, timestamp)

    def update_gyroscope(self, sample: Vector3, timestamp: Optional[float] = None) -> OrientationEstimate:
        """Record a new gyroscope sample and return the refreshed estimate."""
        return self._update('gyroscope', sample, timestamp)

    def update_magnetometer(self, sample: Vector3, timestamp: Optional[float] = None) -> OrientationEstimate:
        """Record a new magnetometer sample and return the refreshed estimate."""
        return self._update('magnetometer', sample, timestamp)

    def _update(self, sensor: str, sample: Vector3, timestamp: Optional[float]) -> OrientationEstimate:
        if timestamp is None:
            timestamp = time.time()

        with self._lock:
            snapshot = SensorSnapshot(
                accelerometer=sample if sensor == 'accelerometer' else self._snapshot.accelerometer,
                gyroscope=sample if sensor == 'gyroscope' else self._snapshot.gyroscope,
                magnetometer=sample if sensor == 'magnetometer' else self._snapshot.magnetometer,
                timestamp=timestamp
            )
            estimate = self.estimator.update(snapshot)
            self._snapshot = snapshot
            self._estimate = estimate
            self.sample_counts[sensor] += 1
            self.last_update_time = timestamp

        logger.debug("%s sample %s -> heading %.1f", sensor, sample, estimate.heading_degrees)

        self.sensor_channel.publish(snapshot)
        self.compass_channel.publish(estimate)
        return estimate

    def snapshot(self) -> SensorSnapshot:
        """Get the latest samples (immutable)."""
        with self._lock:
            return self._snapshot

    def current_estimate(self) -> OrientationEstimate:
        """Get the latest orientation estimate (immutable)."""
        with self._lock:
            return self._estimate

    def reset(self) -> None:
        """Forget retained samples and the current estimate."""
        with self._lock:
            self._snapshot = SensorSnapshot()
            self._estimate = OrientationEstimate.undetermined()
            self.estimator.reset()
            for key in self.sample_counts:
                self.sample_counts[key] = 0
            self.last_update_time = None

    def get_statistics(self) -> dict:
        """Get hub statistics."""
        with self._lock:
            counts = dict(self.sample_counts)
            last_update_time = self.last_update_time
        return {
            'sample_counts': counts,
            'last_update_time': last_update_time,
            'estimator': self.estimator.get_statistics()
        }
