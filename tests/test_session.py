#!/usr/bin/env python3
"""
Tests for session.py: state transitions, reset, scoring and crash handling.
"""

import math
import random
import unittest

from flappy_baby.data_models import GameEvent, Obstacle, Pose, SessionState
from flappy_baby.session import Session
from flappy_baby.viewport import SpriteMetrics, ViewportConfig


def make_session(seed=1):
    return Session(config=ViewportConfig.from_viewport(480, 900), rng=random.Random(seed))


def run_until_crash(session, limit=1000):
    for _ in range(limit):
        if GameEvent.CRASHED in session.tick():
            return
    raise AssertionError("session never crashed")


class TestStart(unittest.TestCase):

    def test_new_session_is_idle(self):
        session = make_session()
        self.assertIs(session.state, SessionState.IDLE)
        self.assertEqual(session.tick(), [])
        self.assertEqual(session.tick_count, 0)

    def test_start_resets_and_flaps(self):
        session = make_session()
        session.start()
        self.assertIs(session.state, SessionState.RUNNING)
        self.assertEqual(session.tick_count, 0)
        self.assertEqual(session.score, 0)
        self.assertEqual(len(session.obstacles), 0)
        self.assertEqual(session.body.x, 120)
        self.assertEqual(session.body.y, 450)
        self.assertEqual(session.body.velocity, session.config.flap_impulse)
        self.assertFalse(session.body.crashed)

    def test_press_starts_then_flaps(self):
        session = make_session()
        session.press()
        self.assertIs(session.state, SessionState.RUNNING)
        for _ in range(5):
            session.tick()
        session.press()
        self.assertEqual(session.body.velocity, session.config.flap_impulse)
        self.assertEqual(session.tick_count, 5)

    def test_first_tick_spawns(self):
        session = make_session()
        session.start()
        session.tick()
        self.assertEqual(len(session.obstacles), 1)
        self.assertEqual(session.tick_count, 1)


class TestRunning(unittest.TestCase):

    def test_gravity_between_flaps(self):
        session = make_session()
        session.start()
        for _ in range(15):
            before = session.body.velocity
            session.tick()
            self.assertAlmostEqual(session.body.velocity - before, session.config.gravity)

    def test_flap_mid_flight(self):
        session = make_session()
        session.start()
        for _ in range(30):
            session.tick()
        session.flap()
        self.assertEqual(session.body.velocity, session.config.flap_impulse)

    def test_score_once_per_obstacle(self):
        session = make_session()
        session.start()
        session.tick_count = 1
        session.obstacles.items = [Obstacle(x=60, width=72, top_height=300, gap=300, floor_y=880)]

        self.assertEqual(session.tick(), [GameEvent.SCORED])
        self.assertEqual(session.score, 1)
        self.assertEqual(session.tick(), [])
        self.assertEqual(session.score, 1)
        self.assertIs(session.state, SessionState.RUNNING)

    def test_listeners_hear_score(self):
        session = make_session()
        heard = []
        session.subscribe(lambda event, s: heard.append((event, s.score)))
        session.start()
        session.tick_count = 1
        session.obstacles.items = [Obstacle(x=60, width=72, top_height=300, gap=300, floor_y=880)]
        session.tick()
        session.tick()
        self.assertEqual(heard, [(GameEvent.SCORED, 1)])


class TestCrash(unittest.TestCase):

    def test_floor_crash(self):
        session = make_session()
        crashes = []
        session.subscribe(lambda event, s: crashes.append(event) if event is GameEvent.CRASHED else None)
        session.start()
        run_until_crash(session)

        body = session.body
        self.assertIs(session.state, SessionState.CRASHED)
        self.assertTrue(body.crashed)
        self.assertAlmostEqual(body.bottom, session.config.floor_y)
        self.assertEqual(body.velocity, 0.0)
        self.assertEqual(body.rotation, math.pi / 2)
        self.assertEqual(crashes, [GameEvent.CRASHED])

    def test_obstacle_crash(self):
        session = make_session()
        session.start()
        session.tick_count = 1
        session.obstacles.items = [Obstacle(x=100, width=72, top_height=500, gap=225, floor_y=880)]

        self.assertEqual(session.tick(), [GameEvent.CRASHED])
        self.assertIs(session.state, SessionState.CRASHED)
        self.assertEqual(session.score, 0)

    def test_crashed_is_frozen(self):
        session = make_session()
        session.start()
        run_until_crash(session)
        frozen = session.snapshot()

        for _ in range(10):
            self.assertEqual(session.tick(), [])
        session.flap()
        self.assertEqual(session.snapshot(), frozen)

    def test_restart_after_crash(self):
        session = make_session()
        session.start()
        run_until_crash(session)

        session.press()
        self.assertIs(session.state, SessionState.RUNNING)
        self.assertEqual(session.tick_count, 0)
        self.assertEqual(session.score, 0)
        self.assertEqual(len(session.obstacles), 0)
        self.assertFalse(session.body.crashed)
        self.assertEqual(session.body.rotation, 0.0)
        self.assertEqual(session.body.velocity, session.config.flap_impulse)


class TestResize(unittest.TestCase):

    def test_idle_resize_requests_redraw(self):
        session = make_session()
        self.assertTrue(session.resize(800, 600))
        self.assertEqual(session.config.width, 800)
        self.assertEqual(session.core.config, session.config)

    def test_running_resize_does_not(self):
        session = make_session()
        session.start()
        self.assertFalse(session.resize(800, 600))
        self.assertAlmostEqual(session.config.gravity, 0.4 * 600 / 900)

    def test_crashed_body_follows_the_ground(self):
        session = make_session()
        session.start()
        run_until_crash(session)

        session.resize(480, 1000)
        self.assertAlmostEqual(session.body.bottom, session.config.floor_y)
        self.assertEqual([o.floor_y for o in session.obstacles], [980] * len(session.obstacles))
        self.assertGreater(len(session.obstacles), 0)

    def test_crash_in_the_air_stays_in_the_air(self):
        session = make_session()
        session.start()
        session.tick_count = 1
        session.obstacles.items = [Obstacle(x=100, width=72, top_height=500, gap=225, floor_y=880)]
        session.tick()
        y = session.body.y

        session.resize(480, 1000)
        self.assertEqual(session.body.y, y)
        self.assertEqual(session.obstacles.items[0].floor_y, 980)


class TestPartialSprites(unittest.TestCase):

    def test_floor_crash_without_crash_sprite(self):
        sprites = SpriteMetrics({Pose.DOWN: (32, 32), Pose.UP: (32, 32)})
        session = Session(config=ViewportConfig.from_viewport(480, 900), rng=random.Random(1), sprites=sprites)
        session.start()
        run_until_crash(session)

        self.assertIs(session.body.pose, Pose.CRY)
        self.assertAlmostEqual(session.body.height, 63.0)
        self.assertAlmostEqual(session.body.bottom, session.config.floor_y)

    def test_smaller_crash_pose_settles_on_floor(self):
        sprites = SpriteMetrics({Pose.DOWN: (32, 32), Pose.UP: (32, 32)})
        session = Session(config=ViewportConfig.from_viewport(480, 900), rng=random.Random(1), sprites=sprites)
        session.start()
        run_until_crash(session)

        session.sprites = SpriteMetrics()
        session.resize(480, 900)
        self.assertEqual(session.body.height, 30.0)
        self.assertAlmostEqual(session.body.bottom, session.config.floor_y)


if __name__ == "__main__":
    unittest.main()
