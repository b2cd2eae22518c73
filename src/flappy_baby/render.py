"""
render.py: Turns a session into a list of draw commands. No drawing happens here.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from .constants import (
    SKY_TOP, SKY_BOTTOM, PIPE_COLOR, GROUND_COLOR, GROUND_EDGE_COLOR,
    TEXT_COLOR, START_MESSAGE, GAME_OVER_MESSAGE
)
from .data_models import Pose, Rect, SessionState
from .session import Session

Color = Tuple[int, int, int]


@dataclass(frozen=True)
class FillGradient:
    rect: Rect
    top: Color
    bottom: Color


@dataclass(frozen=True)
class FillRect:
    rect: Rect
    color: Color


@dataclass(frozen=True)
class DrawBarrier:
    """One half of a bottle pair. The top half hangs upside down from the sky."""
    rect: Rect
    hanging: bool
    color: Color


@dataclass(frozen=True)
class DrawLine:
    start: Tuple[float, float]
    end: Tuple[float, float]
    color: Color
    width: int = 1


@dataclass(frozen=True)
class DrawSprite:
    pose: Pose
    center: Tuple[float, float]
    size: Tuple[float, float]
    rotation: float


@dataclass(frozen=True)
class DrawText:
    text: str
    center: Tuple[float, float]
    color: Color
    large: bool = False


DrawCommand = Union[FillGradient, FillRect, DrawBarrier, DrawLine, DrawSprite, DrawText]


def status_message(state: SessionState) -> Optional[str]:
    if state is SessionState.IDLE:
        return START_MESSAGE
    if state is SessionState.CRASHED:
        return GAME_OVER_MESSAGE
    return None


def render(session: Session) -> List[DrawCommand]:
    """Builds one frame: sky, obstacles, ground, body, then HUD."""
    config = session.config
    body = session.body
    commands: List[DrawCommand] = []

    commands.append(FillGradient(Rect(0, 0, config.width, config.height), SKY_TOP, SKY_BOTTOM))

    for obstacle in session.obstacles:
        top, bottom = obstacle.collision_volume()
        if top.height > 0:
            commands.append(DrawBarrier(top, True, PIPE_COLOR))
        if bottom.height > 0:
            commands.append(DrawBarrier(bottom, False, PIPE_COLOR))

    floor_y = config.floor_y
    commands.append(FillRect(Rect(0, floor_y, config.width, config.floor_height), GROUND_COLOR))
    commands.append(DrawLine((0, floor_y), (config.width, floor_y), GROUND_EDGE_COLOR, 2))

    commands.append(DrawSprite(body.pose, (body.x, body.y), (body.width, body.height), body.rotation))

    commands.append(DrawText(str(session.score), (config.width / 2, config.height * 0.08), TEXT_COLOR, large=True))
    message = status_message(session.state)
    if message:
        commands.append(DrawText(message, (config.width / 2, config.height / 3), TEXT_COLOR))

    return commands


def barrier_layout(barrier: DrawBarrier, nipple_size: Tuple[float, float]) -> Tuple[Optional[Rect], Rect]:
    """
    Splits a barrier into (bottle body, nipple) rects.
    The nipple is scaled to the barrier's width and sits at the gap edge.
    Returns no body rect when the nipple alone fills the barrier.
    """
    rect = barrier.rect
    nipple_h = nipple_size[1] * rect.width / nipple_size[0] if nipple_size[0] > 0 else 0.0

    if barrier.hanging:
        nipple = Rect(rect.left, rect.bottom - nipple_h, rect.width, nipple_h)
        body_h = rect.height - nipple_h
        body = Rect(rect.left, rect.top, rect.width, body_h) if body_h > 0 else None
    else:
        nipple = Rect(rect.left, rect.top, rect.width, nipple_h)
        body_h = rect.height - nipple_h
        body = Rect(rect.left, rect.top + nipple_h, rect.width, body_h) if body_h > 0 else None
    return body, nipple
