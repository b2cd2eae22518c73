"""
obstacles.py: Spawning, movement and expiry of the obstacle stream.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import List

from .data_models import Obstacle
from .viewport import ViewportConfig

logger = logging.getLogger(__name__)


def spawn_obstacle(config: ViewportConfig, rng: random.Random) -> Obstacle:
    """Generates a new obstacle at the right edge of the viewport."""
    low, high = config.gap_top_range()
    return Obstacle(
        x=config.width,
        width=config.pipe_width,
        top_height=rng.uniform(low, high),
        gap=config.pipe_gap,
        floor_y=config.floor_y,
    )


@dataclass
class ObstacleField:
    """
    The live obstacles in spawn order, which is also left-to-right order.
    """
    items: List[Obstacle] = field(default_factory=list)

    def __iter__(self):
        return iter(self.items)

    def __len__(self):
        return len(self.items)

    def clear(self):
        self.items = []

    def maybe_spawn(self, tick_count: int, config: ViewportConfig, rng: random.Random) -> bool:
        """Appends an obstacle on every spawn_interval-th tick, starting at tick 0."""
        if tick_count % max(config.spawn_interval, 1) != 0:
            return False
        obstacle = spawn_obstacle(config, rng)
        self.items.append(obstacle)
        logger.debug("Spawned obstacle at tick %d (gap %.1f-%.1f)",
                     tick_count, obstacle.top_height, obstacle.bottom_y)
        return True

    def step(self, speed: float, threshold: float) -> List[Obstacle]:
        """
        Moves every obstacle left, then drops the ones past the threshold.
        Returns the removed obstacles.
        """
        for obstacle in self.items:
            obstacle.advance(speed)

        kept = [o for o in self.items if not o.is_offscreen(threshold)]
        removed = [o for o in self.items if o.is_offscreen(threshold)]
        self.items = kept
        return removed

    def move_floor(self, floor_y: float):
        """Re-anchors every bottom barrier on a new ground line."""
        for obstacle in self.items:
            obstacle.floor_y = floor_y
