#!/usr/bin/env python3
"""
Unit tests for field-of-view cone geometry.
"""

import unittest
import sys
import os

# Add package to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from navcore.math.geodesy import GeoPoint, distance, bearing, destination_point
from navcore.navigation.fov import (
    FOVCone,
    calculate_fov_cone,
    is_point_in_cone,
    is_point_in_fov,
    filter_points_in_cone,
)

CENTER = GeoPoint(48.8584, 2.2945)


class TestFOVCone(unittest.TestCase):
    """Test cone construction."""

    def test_defaults(self):
        """Default cone is 60 degrees wide and 100 m deep."""
        cone = calculate_fov_cone(CENTER, 45.0)
        self.assertEqual(cone.angle_degrees, 60.0)
        self.assertEqual(cone.radius_meters, 100.0)
        self.assertEqual(cone.half_angle_degrees, 30.0)
        self.assertEqual(cone.center, CENTER)

    def test_heading_normalized(self):
        """Headings outside [0, 360) are normalized."""
        self.assertAlmostEqual(calculate_fov_cone(CENTER, 370.0).heading_degrees, 10.0)
        self.assertAlmostEqual(calculate_fov_cone(CENTER, -90.0).heading_degrees, 270.0)


class TestPointInCone(unittest.TestCase):
    """Test cone membership."""

    def setUp(self):
        self.cone = calculate_fov_cone(CENTER, 0.0, angle_degrees=60.0, radius_meters=100.0)

    def test_straight_ahead(self):
        """A near point straight ahead is inside."""
        self.assertTrue(is_point_in_cone(self.cone, destination_point(CENTER, 50.0, 0.0)))

    def test_within_half_angle(self):
        """25 degrees off-axis is inside a 60 degree cone, 35 is not."""
        self.assertTrue(is_point_in_cone(self.cone, destination_point(CENTER, 50.0, 25.0)))
        self.assertTrue(is_point_in_cone(self.cone, destination_point(CENTER, 50.0, 335.0)))
        self.assertFalse(is_point_in_cone(self.cone, destination_point(CENTER, 50.0, 35.0)))
        self.assertFalse(is_point_in_cone(self.cone, destination_point(CENTER, 50.0, 325.0)))

    def test_behind(self):
        """A point behind the viewer is outside."""
        self.assertFalse(is_point_in_cone(self.cone, destination_point(CENTER, 50.0, 180.0)))

    def test_beyond_radius(self):
        """A point at twice the radius is outside whatever its bearing."""
        for b in range(0, 360, 15):
            point = destination_point(CENTER, 200.0, float(b))
            self.assertFalse(is_point_in_cone(self.cone, point))

    def test_boundary_is_inclusive(self):
        """A point exactly at the radius and on the axis is inside."""
        point = destination_point(CENTER, 80.0, 123.0)
        cone = FOVCone(
            center=CENTER,
            heading_degrees=bearing(CENTER, point),
            radius_meters=distance(CENTER, point)
        )
        self.assertTrue(is_point_in_cone(cone, point))

    def test_center_is_inside(self):
        """The apex itself is inside."""
        self.assertTrue(is_point_in_cone(self.cone, CENTER))

    def test_across_north_wrap(self):
        """A cone facing 350 sees a point at bearing 10."""
        cone = calculate_fov_cone(CENTER, 350.0)
        self.assertTrue(is_point_in_cone(cone, destination_point(CENTER, 40.0, 10.0)))
        self.assertFalse(is_point_in_cone(cone, destination_point(CENTER, 40.0, 30.0)))

    def test_alias(self):
        """is_point_in_fov is the same check."""
        self.assertIs(is_point_in_fov, is_point_in_cone)

    def test_filter_points(self):
        """Filtering keeps visible points in order."""
        ahead = destination_point(CENTER, 30.0, 5.0)
        behind = destination_point(CENTER, 30.0, 185.0)
        far = destination_point(CENTER, 500.0, 0.0)
        left = destination_point(CENTER, 90.0, 340.0)

        self.assertEqual(filter_points_in_cone(self.cone, [ahead, behind, far, left]), [ahead, left])
        self.assertEqual(filter_points_in_cone(self.cone, []), [])


if __name__ == '__main__':
    unittest.main()
