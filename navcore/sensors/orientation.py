"""
Tilt-compensated compass heading from accelerometer and magnetometer samples.
"""

import logging
import math
import numpy as np
from dataclasses import dataclass
from typing import Optional, Tuple

from ..exceptions import InvalidSampleError
from ..math.constants import (
    STANDARD_GRAVITY_MS2,
    EARTH_FIELD_MIN_UT,
    EARTH_FIELD_MAX_UT,
    LOW_ACCURACY_SCORE,
    CALIBRATION_THRESHOLD,
)
from ..math.geodesy import smooth_heading
from ..math.utils import normalize_heading, rotation_matrix_x, rotation_matrix_y
from .imu import Vector3, SensorSnapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrientationEstimate:
    """
    Compass state derived from the latest sensor samples.

    - heading_degrees: Magnetic heading in [0, 360), 0 = north
    - is_calibrated: True iff accuracy > calibration threshold
    - accuracy: Score in [0, 1]
    - is_determined: False until a valid sample pair has been seen
    """

    heading_degrees: float = 0.0
    is_calibrated: bool = False
    accuracy: float = 0.0
    is_determined: bool = True

    @classmethod
    def undetermined(cls) -> "OrientationEstimate":
        """Explicit 'no heading available' estimate."""
        return cls(heading_degrees=0.0, is_calibrated=False, accuracy=0.0, is_determined=False)


def _check_finite(sensor: str, sample: Vector3) -> None:
    if not sample.is_finite:
        raise InvalidSampleError(sensor, f"non-finite components {sample}")


def compute_tilt(accelerometer: Vector3) -> Tuple[float, float]:
    """
    Device pitch and roll from the gravity vector.

    Args:
        accelerometer: Accelerometer sample (any units)

    Returns:
        (pitch, roll) in radians

    Raises:
        InvalidSampleError: If the vector has zero or non-finite magnitude
    """
    _check_finite('accelerometer', accelerometer)
    norm = accelerometer.magnitude
    if norm == 0.0:
        raise InvalidSampleError('accelerometer', "zero magnitude")

    ax = accelerometer.x / norm
    ay = accelerometer.y / norm
    az = accelerometer.z / norm

    pitch = math.asin(float(np.clip(-ax, -1.0, 1.0)))
    roll = math.atan2(ay, az)
    return pitch, roll


def tilt_compensated_heading(accelerometer: Vector3, magnetometer: Vector3) -> float:
    """
    Magnetic heading with device tilt removed.

    The magnetometer vector is rotated by pitch (about Y) then roll (about X)
    into the horizontal plane before taking atan2 of the horizontal components.

    Returns:
        float: Heading in degrees [0, 360)

    Raises:
        InvalidSampleError: If either vector is degenerate
    """
    _check_finite('magnetometer', magnetometer)
    pitch, roll = compute_tilt(accelerometer)

    horizontal = rotation_matrix_x(roll) @ rotation_matrix_y(pitch) @ magnetometer.as_array()
    mag_x, mag_y = horizontal[0], horizontal[1]

    return normalize_heading(math.degrees(math.atan2(mag_y, mag_x)))


def compute_accuracy(accelerometer: Vector3, magnetometer: Vector3) -> float:
    """
    Score how trustworthy the current samples are.

    A magnetic field outside Earth's expected range means interference and
    scores LOW_ACCURACY_SCORE. Otherwise the score measures how close the
    accelerometer magnitude is to 1 g.

    Returns:
        float: Accuracy in [0, 1]
    """
    mag_magnitude = magnetometer.magnitude
    if mag_magnitude < EARTH_FIELD_MIN_UT or mag_magnitude > EARTH_FIELD_MAX_UT:
        return LOW_ACCURACY_SCORE

    acc_magnitude = accelerometer.magnitude
    gravity_accuracy = 1.0 - abs(acc_magnitude - STANDARD_GRAVITY_MS2) / STANDARD_GRAVITY_MS2

    return float(np.clip(gravity_accuracy, 0.0, 1.0))


def estimate_orientation(accelerometer: Vector3, magnetometer: Vector3) -> OrientationEstimate:
    """
    Compute heading, accuracy and calibration from one sample pair.

    Args:
        accelerometer: Latest accelerometer sample (m/s²)
        magnetometer: Latest magnetometer sample (µT)

    Returns:
        OrientationEstimate

    Raises:
        InvalidSampleError: If the accelerometer has zero magnitude or either
            vector has non-finite components
    """
    heading = tilt_compensated_heading(accelerometer, magnetometer)
    accuracy = compute_accuracy(accelerometer, magnetometer)

    return OrientationEstimate(
        heading_degrees=heading,
        is_calibrated=accuracy > CALIBRATION_THRESHOLD,
        accuracy=accuracy,
        is_determined=True
    )


class OrientationEstimator:
    """
    Incremental orientation estimator fed with the latest sensor snapshot.

    Degenerate samples never escape as exceptions: they are logged and
    counted, and the previous estimate (or an undetermined one) is returned.
    """

    def __init__(self, smoothing_factor: Optional[float] = None):
        """
        Initialize orientation estimator.

        Args:
            smoothing_factor: If set, each new heading moves only this fraction
                of the way from the previous heading (shortest arc)
        """
        self.smoothing_factor = smoothing_factor
        self._last_estimate = OrientationEstimate.undetermined()

        # Statistics
        self.estimate_count = 0
        self.rejected_count = 0

    @property
    def last_estimate(self) -> OrientationEstimate:
        return self._last_estimate

    def update(self, snapshot: SensorSnapshot) -> OrientationEstimate:
        """
        Re-estimate orientation from the latest samples.

        Args:
            snapshot: Latest accelerometer/gyroscope/magnetometer samples

        Returns:
            New estimate, or the previous one if the samples are degenerate
        """
        try:
            estimate = estimate_orientation(snapshot.accelerometer, snapshot.magnetometer)
        except InvalidSampleError as e:
            self.rejected_count += 1
            logger.warning("%s; keeping previous estimate", e)
            return self._last_estimate

        if self.smoothing_factor is not None and self._last_estimate.is_determined:
            estimate = OrientationEstimate(
                heading_degrees=smooth_heading(
                    self._last_estimate.heading_degrees,
                    estimate.heading_degrees,
                    self.smoothing_factor
                ),
                is_calibrated=estimate.is_calibrated,
                accuracy=estimate.accuracy,
                is_determined=True
            )

        self._last_estimate = estimate
        self.estimate_count += 1
        return estimate

    def reset(self) -> None:
        """Forget the previous estimate."""
        self._last_estimate = OrientationEstimate.undetermined()
        self.estimate_count = 0
        self.rejected_count = 0

    def get_statistics(self) -> dict:
        """Get estimator statistics."""
        return {
            'estimate_count': self.estimate_count,
            'rejected_count': self.rejected_count,
            'heading_degrees': self._last_estimate.heading_degrees,
            'is_calibrated': self._last_estimate.is_calibrated,
            'accuracy': self._last_estimate.accuracy
        }
