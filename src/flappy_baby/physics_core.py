"""
physics_core.py: The deterministic kinematic functions and collision logic.
"""

from typing import Iterable, List

from .constants import TILT_FACTOR, MAX_TILT, TILT_DAMPING, CRASH_TILT
from .data_models import Body, Obstacle, Rect
from .viewport import ViewportConfig


def hits_obstacle(box: Rect, obstacles: Iterable[Obstacle]) -> bool:
    """Checks a collision box against every obstacle's barriers."""
    for obstacle in obstacles:
        if box.overlaps_span(obstacle.x, obstacle.trailing_edge):
            if box.top < obstacle.top_height or box.bottom > obstacle.bottom_y:
                return True
    return False


def passed_obstacles(box: Rect, obstacles: Iterable[Obstacle]) -> List[Obstacle]:
    """Obstacles whose trailing edge the box's leading edge cleared for the first time."""
    return [o for o in obstacles if o.check_passed(box.right)]


class PhysicsCore:
    """
    Body physics for one viewport configuration.
    """

    def __init__(self, config: ViewportConfig):
        self.config = config

    def integrate(self, body: Body):
        """Advances velocity and position by one tick of gravity."""
        body.velocity += self.config.gravity
        body.y += body.velocity

    def flap(self, body: Body):
        if not body.crashed:
            body.velocity = self.config.flap_impulse

    def clamp_to_bounds(self, body: Body, floor_y: float, ceiling_y: float = 0.0) -> bool:
        """
        Keeps the body's box between ceiling and floor.
        Returns True when the body hit the floor and was not already crashed.
        """
        hit_floor = False
        body.grounded = False
        half_h = body.half_height

        if body.y + half_h >= floor_y:
            body.y = floor_y - half_h
            body.velocity = 0.0
            body.grounded = True
            hit_floor = not body.crashed

        # The ceiling only stops the body
        if body.y - half_h <= ceiling_y:
            body.y = ceiling_y + half_h
            body.velocity = 0.0

        return hit_floor

    def update_orientation(self, body: Body):
        """Eases the tilt toward the velocity's target angle; crashed bodies face down."""
        if body.crashed:
            body.rotation = CRASH_TILT
            return
        target = min(MAX_TILT, max(-MAX_TILT, body.velocity * TILT_FACTOR))
        body.rotation += (target - body.rotation) * TILT_DAMPING

    def check_collision(self, body: Body, obstacles: Iterable[Obstacle]) -> bool:
        return hits_obstacle(body.hitbox(), obstacles)
