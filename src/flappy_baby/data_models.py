"""
data_models.py: Data structures for the game state.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from .constants import DEFAULT_BODY_SIZE, HITBOX_SCALE


class SessionState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    CRASHED = "crashed"


class GameEvent(Enum):
    SCORED = "scored"
    CRASHED = "crashed"


class Pose(Enum):
    """Which sprite the body is showing."""
    UP = "up"
    DOWN = "down"
    CRY = "cry"


@dataclass(frozen=True)
class Rect:
    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    def overlaps_span(self, left: float, right: float) -> bool:
        """True when this rect shares any horizontal extent with (left, right)."""
        return self.right > left and self.left < right


@dataclass
class Body:
    """The player sprite. Position is the centre of its box, y grows downward."""
    x: float = 0.0
    y: float = 0.0
    velocity: float = 0.0
    rotation: float = 0.0
    width: float = DEFAULT_BODY_SIZE[0]
    height: float = DEFAULT_BODY_SIZE[1]
    crashed: bool = False
    grounded: bool = False

    @property
    def half_height(self) -> float:
        # A zero-sized pose means the sprite metrics were never supplied
        return self.height / 2 or DEFAULT_BODY_SIZE[1] / 2

    @property
    def top(self) -> float:
        return self.y - self.half_height

    @property
    def bottom(self) -> float:
        return self.y + self.half_height

    @property
    def pose(self) -> Pose:
        if self.crashed:
            return Pose.CRY
        return Pose.UP if self.velocity < 0 else Pose.DOWN

    def hitbox(self, scale: float = HITBOX_SCALE) -> Rect:
        """The forgiving collision box, shrunk around the body's centre."""
        w = (self.width or DEFAULT_BODY_SIZE[0]) * scale
        h = (self.height or DEFAULT_BODY_SIZE[1]) * scale
        return Rect(self.x - w / 2, self.y - h / 2, w, h)

    def to_render_state(self) -> dict:
        return {
            "x": round(self.x, 2),
            "y": round(self.y, 2),
            "rotation": round(self.rotation, 4),
            "pose": self.pose.value,
            "crashed": self.crashed,
        }


@dataclass
class Obstacle:
    """A top/bottom barrier pair with an open gap between them."""
    x: float
    width: float
    top_height: float
    gap: float
    floor_y: float
    passed: bool = False

    @property
    def bottom_y(self) -> float:
        return self.top_height + self.gap

    @property
    def trailing_edge(self) -> float:
        return self.x + self.width

    def advance(self, speed: float):
        self.x -= speed

    def is_offscreen(self, threshold: float) -> bool:
        return self.trailing_edge < -threshold

    def collision_volume(self) -> Tuple[Rect, Rect]:
        """The (top, bottom) barrier rectangles at the current x."""
        top = Rect(self.x, 0.0, self.width, self.top_height)
        bottom = Rect(self.x, self.bottom_y, self.width, max(self.floor_y - self.bottom_y, 0.0))
        return top, bottom

    def check_passed(self, leading_x: float) -> bool:
        """Returns True exactly once, the first time leading_x clears the trailing edge."""
        if self.passed or leading_x <= self.trailing_edge:
            return False
        self.passed = True
        return True
