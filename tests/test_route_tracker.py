#!/usr/bin/env python3
"""
Unit tests for route tracking, routing and display formatting.
"""

import unittest
import dataclasses
import sys
import os

# Add package to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from navcore.math.geodesy import GeoPoint, distance, bearing, destination_point
from navcore.navigation import (
    RouteStep,
    NavigationState,
    RouteTracker,
    RoutingProvider,
    LinearRoutingProvider,
    generate_instruction,
    format_distance,
    format_time,
)
from navcore.navigation.routing import INSTRUCTIONS, START_INSTRUCTION, ARRIVAL_INSTRUCTION

ORIGIN = GeoPoint(37.7749, -122.4194)
DESTINATION = GeoPoint(37.7849, -122.4094)


def make_route(count=10, spacing_m=100.0, heading=45.0):
    """Straight route of count steps spaced spacing_m apart."""
    steps = []
    for i in range(count):
        point = destination_point(ORIGIN, i * spacing_m, heading)
        steps.append(RouteStep(point=point, heading_degrees=heading, instruction=f"step {i}"))
    return steps


class TestRouteTrackerLifecycle(unittest.TestCase):
    """Test the Idle/Navigating state machine."""

    def setUp(self):
        self.tracker = RouteTracker()
        self.published = []
        self.subscription = self.tracker.subscribe(self.published.append)

    def test_initial_state_is_idle(self):
        """New trackers are idle with an empty route."""
        state = self.tracker.state
        self.assertFalse(state.is_navigating)
        self.assertEqual(state.route, ())
        self.assertEqual(state.current_step_index, 0)
        self.assertEqual(state, NavigationState.idle())

    def test_start(self):
        """Starting enters navigation with an empty route."""
        state = self.tracker.start(DESTINATION)

        self.assertTrue(state.is_navigating)
        self.assertEqual(state.destination, DESTINATION)
        self.assertEqual(state.route, ())
        self.assertEqual(state.total_steps, 0)
        self.assertEqual(self.published, [state])

    def test_restart_stops_first(self):
        """Starting while navigating resets the previous session."""
        self.tracker.start(DESTINATION)
        self.tracker.set_route(make_route())
        self.tracker.update_current_location(make_route()[3].point)

        other = GeoPoint(37.70, -122.50)
        state = self.tracker.start(other)

        self.assertEqual(state.destination, other)
        self.assertEqual(state.current_step_index, 0)
        self.assertEqual(state.total_steps, 0)
        self.assertEqual(state.estimated_distance_meters, 0.0)

        # start, set_route, update, stop, start
        self.assertEqual(len(self.published), 5)
        self.assertFalse(self.published[3].is_navigating)

    def test_stop_resets(self):
        """Stopping returns to the empty idle state."""
        self.tracker.start(DESTINATION)
        self.tracker.set_route(make_route())
        self.tracker.update_current_location(make_route()[3].point)

        state = self.tracker.stop()

        self.assertFalse(state.is_navigating)
        self.assertEqual(state.current_step_index, 0)
        self.assertEqual(state.route, ())
        self.assertIsNone(state.destination)

    def test_stop_is_idempotent(self):
        """Stopping twice yields the same idle state."""
        self.tracker.start(DESTINATION)
        first = self.tracker.stop()
        second = self.tracker.stop()

        self.assertEqual(first, second)
        self.assertEqual(second, NavigationState.idle())


class TestRouteTrackerProgress(unittest.TestCase):
    """Test route assignment and progress updates."""

    def setUp(self):
        self.tracker = RouteTracker()
        self.route = make_route()
        self.published = []
        self.tracker.subscribe(self.published.append)
        self.tracker.start(DESTINATION)

    def test_set_route_totals(self):
        """set_route computes step count, distance and time."""
        state = self.tracker.set_route(self.route)

        expected = sum(distance(a.point, b.point) for a, b in zip(self.route, self.route[1:]))
        self.assertEqual(state.total_steps, 10)
        self.assertAlmostEqual(state.estimated_distance_meters, expected, places=6)
        self.assertAlmostEqual(state.estimated_distance_meters, 900.0, delta=0.01)
        self.assertAlmostEqual(state.estimated_time_seconds, expected / 8.33, places=6)
        self.assertEqual(self.published[-1], state)

    def test_update_to_exact_step(self):
        """A fix exactly on route[3] makes step 3 current."""
        self.tracker.set_route(self.route)
        state = self.tracker.update_current_location(self.route[3].point)

        self.assertEqual(state.current_step_index, 3)
        self.assertEqual(state.current_step, self.route[3])
        self.assertEqual(self.tracker.current_instruction(), "step 3")

    def test_nearest_step_with_noise(self):
        """A fix near a step selects that step."""
        self.tracker.set_route(self.route)
        noisy = destination_point(self.route[6].point, 20.0, 300.0)

        self.assertEqual(self.tracker.update_current_location(noisy).current_step_index, 6)

    def test_ties_pick_lowest_index(self):
        """Equal distances resolve to the first matching step."""
        route = self.route[:5] + [self.route[2]] + self.route[6:]
        self.tracker.set_route(route)

        self.assertEqual(self.tracker.update_current_location(route[5].point).current_step_index, 2)

    def test_backward_jump_accepted(self):
        """Nearest-step matching may move the step index backwards."""
        self.tracker.set_route(self.route)
        self.tracker.update_current_location(self.route[7].point)
        state = self.tracker.update_current_location(self.route[2].point)

        self.assertEqual(state.current_step_index, 2)

    def test_notify_only_on_change(self):
        """Repeated fixes at the same step publish once."""
        self.tracker.set_route(self.route)
        count = len(self.published)

        self.tracker.update_current_location(self.route[4].point)
        self.tracker.update_current_location(self.route[4].point)
        self.tracker.update_current_location(self.route[0].point)

        self.assertEqual(len(self.published), count + 2)
        self.assertEqual(self.tracker.get_statistics()['location_updates'], 3)
        self.assertEqual(self.tracker.get_statistics()['step_changes'], 2)

    def test_update_without_route_is_noop(self):
        """Updates against an empty route change nothing."""
        before = self.tracker.state
        count = len(self.published)

        state = self.tracker.update_current_location(ORIGIN)

        self.assertIs(state, before)
        self.assertEqual(len(self.published), count)

    def test_update_while_idle_is_noop(self):
        """Updates while idle change nothing."""
        self.tracker.set_route(self.route)
        self.tracker.stop()
        count = len(self.published)

        state = self.tracker.update_current_location(self.route[5].point)

        self.assertFalse(state.is_navigating)
        self.assertEqual(state.current_step_index, 0)
        self.assertEqual(len(self.published), count)

    def test_snapshots_are_immutable(self):
        """A state read before an update is unaffected by it."""
        self.tracker.set_route(self.route)
        snapshot = self.tracker.state
        self.tracker.update_current_location(self.route[8].point)

        self.assertEqual(snapshot.current_step_index, 0)
        self.assertEqual(self.tracker.state.current_step_index, 8)
        with self.assertRaises(dataclasses.FrozenInstanceError):
            snapshot.current_step_index = 5

    def test_distance_to_destination(self):
        """Distance to destination uses the session destination."""
        self.assertAlmostEqual(self.tracker.distance_to_destination(ORIGIN), distance(ORIGIN, DESTINATION))

        self.tracker.stop()
        self.assertEqual(self.tracker.distance_to_destination(ORIGIN), 0.0)

    def test_cancelled_subscriber(self):
        """Cancelled subscriptions stop receiving states."""
        published = []
        subscription = self.tracker.subscribe(published.append)
        self.tracker.set_route(self.route)
        subscription.cancel()
        self.tracker.update_current_location(self.route[5].point)

        self.assertEqual(len(published), 1)


class TestNavigationState(unittest.TestCase):
    """Test NavigationState helpers."""

    def test_idle_helpers(self):
        """Idle state has no instruction or step."""
        state = NavigationState.idle()
        self.assertIsNone(state.current_step)
        self.assertEqual(state.current_instruction, "")
        self.assertEqual(state.remaining_steps, 0)
        self.assertEqual(state.progress, 0.0)

    def test_progress(self):
        """Progress reflects the current step."""
        route = tuple(make_route(count=5))
        state = NavigationState(is_navigating=True, route=route, total_steps=5, current_step_index=2)

        self.assertEqual(state.remaining_steps, 3)
        self.assertAlmostEqual(state.progress, 0.5)
        self.assertEqual(state.current_instruction, "step 2")


class TestLinearRouting(unittest.TestCase):
    """Test the straight-line placeholder router."""

    def setUp(self):
        self.route = RouteTracker().compute_route(ORIGIN, DESTINATION)

    def test_step_count_and_endpoints(self):
        """Ten segments give eleven steps from origin to destination."""
        self.assertEqual(len(self.route), 11)
        self.assertTrue(self.route[0].point.same_position(ORIGIN))
        self.assertAlmostEqual(self.route[-1].point.latitude, DESTINATION.latitude, places=9)
        self.assertAlmostEqual(self.route[-1].point.longitude, DESTINATION.longitude, places=9)

    def test_instructions(self):
        """Start and arrival are explicit, the rest cycle through the canned set."""
        self.assertEqual(self.route[0].instruction, "Start navigation")
        self.assertEqual(self.route[-1].instruction, "You have arrived at your destination")
        for i in range(1, 10):
            self.assertEqual(self.route[i].instruction, INSTRUCTIONS[i % 7])
        self.assertEqual(self.route[1].instruction, "Keep left")
        self.assertEqual(self.route[7].instruction, "Continue straight")

    def test_step_heading_and_distance(self):
        """Each step points at, and measures to, the destination."""
        for step in self.route[:-1]:
            self.assertAlmostEqual(step.heading_degrees, bearing(step.point, DESTINATION))
            self.assertAlmostEqual(step.distance_to_destination, distance(step.point, DESTINATION))
        self.assertAlmostEqual(self.route[-1].distance_to_destination, 0.0, places=3)

        distances = [step.distance_to_destination for step in self.route]
        self.assertEqual(distances, sorted(distances, reverse=True))

    def test_generate_instruction(self):
        """Instruction text by step index."""
        self.assertEqual(generate_instruction(0, 4), START_INSTRUCTION)
        self.assertEqual(generate_instruction(4, 4), ARRIVAL_INSTRUCTION)
        self.assertEqual(generate_instruction(3, 4), "Turn slightly left")

    def test_segments(self):
        """Segment count is configurable and must be positive."""
        self.assertEqual(len(LinearRoutingProvider(segments=3).compute_route(ORIGIN, DESTINATION)), 4)
        with self.assertRaises(ValueError):
            LinearRoutingProvider(segments=0)

    def test_custom_provider(self):
        """A different routing provider can be substituted."""

        class TwoPointRouter(RoutingProvider):
            def compute_route(self, origin, destination):
                return [
                    RouteStep(point=origin, instruction="Go"),
                    RouteStep(point=destination, instruction="Done"),
                ]

        tracker = RouteTracker(routing_provider=TwoPointRouter())
        tracker.start(DESTINATION)
        route = tracker.compute_route(ORIGIN, DESTINATION)
        state = tracker.set_route(route)

        self.assertIsInstance(route, tuple)
        self.assertEqual(state.total_steps, 2)
        self.assertAlmostEqual(state.estimated_distance_meters, distance(ORIGIN, DESTINATION))


class TestFormatting(unittest.TestCase):
    """Test distance and time display strings."""

    def test_format_distance(self):
        """Meters below 1 km, one-decimal kilometers above."""
        self.assertEqual(format_distance(0), "0m")
        self.assertEqual(format_distance(850), "850m")
        self.assertEqual(format_distance(999.4), "999m")
        self.assertEqual(format_distance(1000), "1.0km")
        self.assertEqual(format_distance(1234), "1.2km")
        self.assertEqual(format_distance(25300), "25.3km")

    def test_format_time(self):
        """Minutes below an hour, hours and minutes above."""
        self.assertEqual(format_time(0), "0m")
        self.assertEqual(format_time(125), "2m")
        self.assertEqual(format_time(3599), "59m")
        self.assertEqual(format_time(3600), "1h 0m")
        self.assertEqual(format_time(3900), "1h 5m")
        self.assertEqual(format_time(7325), "2h 2m")


if __name__ == '__main__':
    unittest.main()
