"""
Angle and rotation helpers shared by the navigation modules.
"""

import numpy as np
import math


def normalize_heading(degrees):
    """
    Normalize a compass heading to the [0, 360) range.

    Args:
        degrees (float): Heading in degrees, any range

    Returns:
        float: Heading in [0, 360)
    """
    heading = degrees % 360.0
    # -1e-15 % 360 rounds up to exactly 360.0
    if heading >= 360.0:
        heading -= 360.0
    return heading


def signed_heading_difference(from_heading, to_heading):
    """
    Signed shortest rotation from one heading to another.

    Args:
        from_heading (float): Start heading in degrees
        to_heading (float): Target heading in degrees

    Returns:
        float: Rotation in degrees in (-180, 180], positive = clockwise
    """
    diff = (to_heading - from_heading) % 360.0
    if diff > 180.0:
        diff -= 360.0
    return diff


def heading_difference(h1, h2):
    """Smallest absolute angle between two headings, in [0, 180]."""
    return abs(signed_heading_difference(h1, h2))


def rotation_matrix_x(angle):
    """
    Rotation about the device X axis (roll).

    Args:
        angle (float): Angle in radians

    Returns:
        np.ndarray: 3x3 rotation matrix
    """
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)

    return np.array([
        [1.0,   0.0,    0.0],
        [0.0, cos_a, -sin_a],
        [0.0, sin_a,  cos_a]
    ])


def rotation_matrix_y(angle):
    """
    Rotation about the device Y axis (pitch).

    Args:
        angle (float): Angle in radians

    Returns:
        np.ndarray: 3x3 rotation matrix
    """
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)

    return np.array([
        [ cos_a, 0.0, sin_a],
        [   0.0, 1.0,   0.0],
        [-sin_a, 0.0, cos_a]
    ])
