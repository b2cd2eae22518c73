#!/usr/bin/env python3
"""
Tests for viewport.py: derived physics values and sprite sizing.
"""

import unittest

from flappy_baby.constants import DEFAULT_BODY_SIZE
from flappy_baby.data_models import Pose
from flappy_baby.viewport import SpriteMetrics, ViewportConfig, body_box


class TestViewportConfig(unittest.TestCase):

    def test_reference_height(self):
        config = ViewportConfig.from_viewport(480, 900)
        self.assertAlmostEqual(config.gravity, 0.4)
        self.assertAlmostEqual(config.flap_impulse, -8.0)
        self.assertAlmostEqual(config.pipe_speed, 4.0)
        self.assertAlmostEqual(config.pipe_gap, 225.0)
        self.assertAlmostEqual(config.pipe_width, 72.0)
        self.assertAlmostEqual(config.min_margin, 90.0)
        self.assertAlmostEqual(config.body_target_height, 63.0)
        self.assertEqual(config.floor_y, 880)
        self.assertEqual(config.spawn_interval, 100)

    def test_pipe_limits(self):
        config = ViewportConfig.from_viewport(1000, 300)
        self.assertEqual(config.pipe_speed, 2.0)
        self.assertEqual(config.pipe_width, 80)

    def test_gap_range(self):
        config = ViewportConfig.from_viewport(480, 900)
        self.assertEqual(config.gap_top_range(), (90.0, 900 - 225 - 90 - 20))

    def test_non_positive_size_is_clamped(self):
        config = ViewportConfig.from_viewport(0, -5)
        self.assertEqual((config.width, config.height), (1.0, 1.0))
        low, high = config.gap_top_range()
        self.assertLessEqual(low, high)

    def test_config_is_immutable(self):
        config = ViewportConfig.from_viewport(480, 900)
        with self.assertRaises(AttributeError):
            config.gravity = 1.0


class TestSpriteMetrics(unittest.TestCase):

    def setUp(self):
        self.metrics = SpriteMetrics({
            Pose.DOWN: (32, 32),
            Pose.UP: (32, 40),
            Pose.CRY: (40, 50),
        })

    def test_flight_poses_share_neutral_scale(self):
        self.assertEqual(self.metrics.box_for(Pose.DOWN, 64), (64, 64))
        self.assertEqual(self.metrics.box_for(Pose.UP, 64), (64, 80))

    def test_crash_pose_fits_target_height(self):
        self.assertEqual(self.metrics.box_for(Pose.CRY, 100), (80, 100))

    def test_missing_pose_falls_back(self):
        metrics = SpriteMetrics({Pose.UP: (32, 40)})
        self.assertEqual(metrics.box_for(Pose.DOWN, 64), DEFAULT_BODY_SIZE)
        self.assertEqual(metrics.box_for(Pose.UP, 64), DEFAULT_BODY_SIZE)

    def test_missing_crash_pose_borrows_neutral_box(self):
        metrics = SpriteMetrics({Pose.DOWN: (32, 32), Pose.UP: (32, 40)})
        self.assertEqual(metrics.box_for(Pose.CRY, 64), (64, 64))

    def test_no_metrics(self):
        config = ViewportConfig.from_viewport(480, 900)
        self.assertEqual(body_box(None, Pose.UP, config), DEFAULT_BODY_SIZE)


if __name__ == "__main__":
    unittest.main()
