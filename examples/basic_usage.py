#!/usr/bin/env python3
"""
Basic usage example of the navigation core.

This example walks a simulated pedestrian along a straight line towards a
destination, feeding location fixes and compass samples into the core
without any platform dependencies.
"""

import sys
import os
import time
import numpy as np

# Add package to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from navcore import (
    Config,
    GeoPoint,
    NavigationCore,
    Vector3,
    configure_logging,
    destination_point,
    bearing,
    distance,
    format_distance,
    format_time,
    is_point_in_cone,
)


def simulate_walk(origin: GeoPoint, destination: GeoPoint, speed=1.4, dt=1.0):
    """
    Simulate a person walking from origin to destination.

    Args:
        origin: Start position
        destination: Walk target
        speed: Walking speed in m/s
        dt: Time step in seconds

    Yields:
        (timestamp, fix, accelerometer, magnetometer) tuples
    """
    # Noise parameters
    gps_noise = 3.0        # meters
    accel_noise = 0.05     # m/s²
    mag_noise = 0.5        # µT

    # Earth field: 20 µT horizontal, 40 µT vertical
    horizontal_field = 20.0
    vertical_field = 40.0

    total = distance(origin, destination)
    course = bearing(origin, destination)
    start = time.time()

    walked = 0.0
    while walked <= total:
        timestamp = start + walked / speed
        true_position = destination_point(origin, walked, course)

        # Noisy fix
        noisy = destination_point(
            true_position,
            abs(np.random.normal(0, gps_noise)),
            np.random.uniform(0, 360)
        )
        fix = GeoPoint(
            noisy.latitude,
            noisy.longitude,
            accuracy=gps_noise,
            speed=speed,
            timestamp=timestamp
        )

        # Device held level, facing the direction of travel
        heading_rad = np.radians(course + np.random.normal(0, 2.0))
        accelerometer = Vector3(
            np.random.normal(0, accel_noise),
            np.random.normal(0, accel_noise),
            9.81 + np.random.normal(0, accel_noise)
        )
        magnetometer = Vector3(
            horizontal_field * np.cos(heading_rad) + np.random.normal(0, mag_noise),
            horizontal_field * np.sin(heading_rad) + np.random.normal(0, mag_noise),
            vertical_field + np.random.normal(0, mag_noise)
        )

        yield timestamp, fix, accelerometer, magnetometer

        walked += speed * dt


def main():
    """Main example function."""
    config = Config()
    config.set("compass.smoothing_factor", 0.3)
    config.set("logging.level", "WARNING")
    configure_logging(config)

    print("Navigation Core - Basic Usage Example")
    print("=" * 50)

    core = NavigationCore(config)

    origin = GeoPoint(37.7749, -122.4194)
    destination = destination_point(origin, 400.0, 60.0)
    landmark = destination_point(origin, 200.0, 62.0)

    core.location.push_fix(origin)
    planned, state = core.navigate_to(destination)

    print(f"Route planned: {planned}")
    print(f"  Steps:    {state.total_steps}")
    print(f"  Distance: {format_distance(state.estimated_distance_meters)}")
    print(f"  ETA:      {format_time(state.estimated_time_seconds)}")
    print()

    last_step = -1
    for timestamp, fix, accelerometer, magnetometer in simulate_walk(origin, destination):
        core.sensors.update_accelerometer(accelerometer, timestamp)
        estimate = core.sensors.update_magnetometer(magnetometer, timestamp)
        core.location.push_fix(fix)

        state = core.tracker.state
        if state.current_step_index != last_step:
            last_step = state.current_step_index
            print_status(core, estimate, fix)

        cone = core.fov_cone()
        if cone is not None and is_point_in_cone(cone, landmark):
            print(f"  Landmark in view, {format_distance(distance(fix, landmark))} ahead")

    core.stop()
    core.close()

    print("\nWalk completed!")

    stats = core.get_statistics()
    print("\n=== Final Statistics ===")
    print(f"Location fixes: {stats['location']['fix_count']}")
    print(f"Step changes:   {stats['navigation']['step_changes']}")
    print(f"Compass updates: {stats['sensors']['sample_counts']['magnetometer']}")
    print(f"Estimated fix accuracy: {stats['location']['estimated_accuracy']:.1f} m")


def print_status(core: NavigationCore, estimate, fix: GeoPoint):
    """Print current navigation status."""
    state = core.tracker.state
    remaining = core.tracker.distance_to_destination(fix)

    print(f"Step {state.current_step_index}/{state.total_steps - 1}: {state.current_instruction}")
    print(f"  Position:  {fix}")
    print(f"  Heading:   {estimate.heading_degrees:6.1f}° (accuracy {estimate.accuracy:.2f})")
    print(f"  Remaining: {format_distance(remaining)}")
    print()


if __name__ == "__main__":
    main()
