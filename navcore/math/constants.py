"""
Physical constants and navigation defaults.
"""

# Earth parameters
EARTH_RADIUS_M = 6371000.0      # Mean Earth radius in meters (spherical model)
STANDARD_GRAVITY_MS2 = 9.81     # Expected accelerometer magnitude at rest

# Magnetometer: expected range of Earth's field strength (µT)
EARTH_FIELD_MIN_UT = 25.0
EARTH_FIELD_MAX_UT = 65.0

# Compass accuracy scoring
LOW_ACCURACY_SCORE = 0.1        # Reported when the magnetic field is disturbed
CALIBRATION_THRESHOLD = 0.7     # accuracy > threshold => calibrated

# Route estimation
AVERAGE_SPEED_MS = 8.33         # ~30 km/h
DEFAULT_ROUTE_SEGMENTS = 10     # Placeholder router yields segments + 1 steps

# Field of view
DEFAULT_FOV_ANGLE_DEG = 60.0    # Full cone angle
DEFAULT_FOV_RADIUS_M = 100.0

# Heading smoothing
DEFAULT_SMOOTHING_FACTOR = 0.1
