"""
viewport.py: Size-dependent physics values, recomputed once per resize.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from .constants import (
    REFERENCE_HEIGHT, GRAVITY, FLAP_IMPULSE, PIPE_SPEED, MIN_PIPE_SPEED,
    PIPE_GAP_RATIO, PIPE_WIDTH_RATIO, MAX_PIPE_WIDTH, PIPE_MARGIN_RATIO,
    PIPE_SPAWN_INTERVAL_TICKS, OFFSCREEN_THRESHOLD, GROUND_HEIGHT,
    BODY_HEIGHT_RATIO, DEFAULT_BODY_SIZE
)
from .data_models import Pose


@dataclass(frozen=True)
class ViewportConfig:
    """Read-only simulation parameters for one viewport size."""
    width: float
    height: float
    gravity: float = GRAVITY
    flap_impulse: float = FLAP_IMPULSE
    pipe_speed: float = PIPE_SPEED
    pipe_gap: float = 200.0
    pipe_width: float = MAX_PIPE_WIDTH
    min_margin: float = 80.0
    floor_height: float = GROUND_HEIGHT
    body_target_height: float = 56.0
    spawn_interval: int = PIPE_SPAWN_INTERVAL_TICKS
    offscreen_threshold: float = OFFSCREEN_THRESHOLD

    @classmethod
    def from_viewport(cls, width: float, height: float) -> "ViewportConfig":
        width = max(float(width), 1.0)
        height = max(float(height), 1.0)
        ratio = height / REFERENCE_HEIGHT

        return cls(
            width=width,
            height=height,
            gravity=GRAVITY * ratio,
            flap_impulse=FLAP_IMPULSE * ratio,
            pipe_speed=max(PIPE_SPEED * ratio, MIN_PIPE_SPEED),
            pipe_gap=height * PIPE_GAP_RATIO,
            pipe_width=min(width * PIPE_WIDTH_RATIO, MAX_PIPE_WIDTH),
            min_margin=height * PIPE_MARGIN_RATIO,
            body_target_height=height * BODY_HEIGHT_RATIO,
        )

    @property
    def floor_y(self) -> float:
        return self.height - self.floor_height

    def gap_top_range(self) -> Tuple[float, float]:
        """Legal (low, high) for a gap top. Collapses to a point on short viewports."""
        low = self.min_margin
        high = self.height - self.pipe_gap - self.min_margin - self.floor_height
        return low, max(high, low)


@dataclass
class SpriteMetrics:
    """Natural image sizes of the body's poses, as reported by the asset loader."""
    sizes: Dict[Pose, Tuple[float, float]] = field(default_factory=dict)

    def box_for(self, pose: Pose, target_height: float) -> Tuple[float, float]:
        """
        On-screen (width, height) of a pose scaled to the target height.
        A pose without an image borrows the neutral pose's box.
        """
        natural = self.sizes.get(pose)
        if not natural or natural[1] <= 0:
            if pose is Pose.DOWN:
                return DEFAULT_BODY_SIZE
            return self.box_for(Pose.DOWN, target_height)

        # Flight poses share the neutral pose's scale, the crash pose is fitted on its own
        reference = natural if pose is Pose.CRY else self.sizes.get(Pose.DOWN)
        if not reference or reference[1] <= 0:
            return DEFAULT_BODY_SIZE

        scale = target_height / reference[1]
        return natural[0] * scale, natural[1] * scale


def body_box(metrics: Optional[SpriteMetrics], pose: Pose, config: ViewportConfig) -> Tuple[float, float]:
    if metrics is None:
        return DEFAULT_BODY_SIZE
    return metrics.box_for(pose, config.body_target_height)
