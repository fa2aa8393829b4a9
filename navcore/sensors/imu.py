"""
Inertial sensor sample types.
"""

import math
import numpy as np
from dataclasses import dataclass, field
from typing import Optional, Sequence


@dataclass(frozen=True)
class Vector3:
    """Raw tri-axis sensor reading (accelerometer m/s², gyroscope rad/s, magnetometer µT)."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> "Vector3":
        """Build a vector from any [x, y, z] sequence or numpy array."""
        if len(values) != 3:
            raise ValueError("Sensor vector must have 3 elements")
        return cls(float(values[0]), float(values[1]), float(values[2]))

    def as_array(self) -> np.ndarray:
        """Get vector as numpy array."""
        return np.array([self.x, self.y, self.z])

    @property
    def magnitude(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    @property
    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y) and math.isfinite(self.z)

    def __str__(self) -> str:
        return f"[{self.x:.3f}, {self.y:.3f}, {self.z:.3f}]"


@dataclass(frozen=True)
class SensorSnapshot:
    """Most recent sample of each inertial stream."""

    accelerometer: Vector3 = field(default_factory=Vector3)
    gyroscope: Vector3 = field(default_factory=Vector3)
    magnetometer: Vector3 = field(default_factory=Vector3)

    # Timestamp of the newest sample in the snapshot
    timestamp: Optional[float] = None
