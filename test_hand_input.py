#!/usr/bin/env python3
"""
Tests for hand_input.py -- fingertip to lane mapping. No camera is opened.
"""

import importlib.util
import unittest

HAVE_MEDIAPIPE = importlib.util.find_spec("mediapipe") is not None

if HAVE_MEDIAPIPE:
    from hand_input import lane_from_x, lane_step


@unittest.skipUnless(HAVE_MEDIAPIPE, "mediapipe is not installed")
class TestLaneFromX(unittest.TestCase):

    def test_left_edge(self):
        """x = 0.0 is the first lane."""
        self.assertEqual(lane_from_x(0.0, 3), 0)

    def test_right_edge_clamped(self):
        """x = 1.0 would index past the road, so it clamps to the last lane."""
        self.assertEqual(lane_from_x(1.0, 3), 2)

    def test_outside_frame_clamped(self):
        """Landmarks can land slightly outside 0..1."""
        self.assertEqual(lane_from_x(-0.2, 3), 0)
        self.assertEqual(lane_from_x(1.3, 3), 2)

    def test_middle(self):
        self.assertEqual(lane_from_x(0.5, 3), 1)
        self.assertEqual(lane_from_x(0.34, 3), 1)
        self.assertEqual(lane_from_x(0.33, 3), 0)

    def test_single_lane(self):
        self.assertEqual(lane_from_x(0.9, 1), 0)


@unittest.skipUnless(HAVE_MEDIAPIPE, "mediapipe is not installed")
class TestLaneStep(unittest.TestCase):

    def test_same_lane_no_step(self):
        """A hand over the current lane queues no move."""
        self.assertEqual(lane_step(1, 1), 0)

    def test_step_right(self):
        self.assertEqual(lane_step(0, 1), 1)

    def test_far_lane_is_one_step(self):
        """Jumping two lanes moves one lane per intent."""
        self.assertEqual(lane_step(0, 2), 1)
        self.assertEqual(lane_step(2, 0), -1)


if __name__ == "__main__":
    unittest.main()
