"""
Flappy Baby: a single-screen flap-through-the-gaps arcade game.
"""

from .data_models import Body, GameEvent, Obstacle, Pose, Rect, SessionState
from .obstacles import ObstacleField, spawn_obstacle
from .physics_core import PhysicsCore, hits_obstacle, passed_obstacles
from .session import Session
from .viewport import SpriteMetrics, ViewportConfig

__version__ = "0.1.0"
