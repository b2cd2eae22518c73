"""
session.py: One play session: the state machine that owns the body and obstacles.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from .data_models import Body, GameEvent, SessionState
from .obstacles import ObstacleField
from .physics_core import PhysicsCore, passed_obstacles
from .viewport import SpriteMetrics, ViewportConfig, body_box

logger = logging.getLogger(__name__)

Listener = Callable[[GameEvent, "Session"], None]


@dataclass
class Session:
    """
    Idle -> Running -> Crashed -> Running ...

    Only tick(), start(), flap(), press() and resize() mutate the simulation,
    and the host calls them from a single loop.
    """
    config: ViewportConfig
    rng: random.Random = field(default_factory=random.Random)
    sprites: Optional[SpriteMetrics] = None
    state: SessionState = SessionState.IDLE
    score: int = 0
    tick_count: int = 0
    body: Body = field(default_factory=Body)
    obstacles: ObstacleField = field(default_factory=ObstacleField)
    listeners: List[Listener] = field(default_factory=list)

    def __post_init__(self):
        self.core = PhysicsCore(self.config)
        self._reset_body()

    # -------- Inputs --------

    def subscribe(self, listener: Listener):
        self.listeners.append(listener)

    def start(self):
        """Starts a fresh run; the starting input also flaps."""
        if self.state is SessionState.RUNNING:
            return
        self.tick_count = 0
        self.score = 0
        self.obstacles.clear()
        self._reset_body()
        self.state = SessionState.RUNNING
        logger.info("Session started (%dx%d)", self.config.width, self.config.height)
        self.flap()

    def flap(self):
        if self.state is SessionState.RUNNING:
            self.core.flap(self.body)

    def press(self):
        """The single player input: start when not running, otherwise flap."""
        if self.state is SessionState.RUNNING:
            self.flap()
        else:
            self.start()

    def resize(self, width: float, height: float) -> bool:
        """
        Recomputes the size-dependent config.
        Live obstacles keep their width and gap but follow the new ground line.
        Returns True when the host has to redraw a static frame.
        """
        self.config = ViewportConfig.from_viewport(width, height)
        self.core = PhysicsCore(self.config)
        self.obstacles.move_floor(self.config.floor_y)
        self._refresh_body_size()
        self._settle_on_floor()
        self.core.clamp_to_bounds(self.body, self.config.floor_y)
        logger.debug("Viewport resized to %dx%d", self.config.width, self.config.height)
        return self.state is not SessionState.RUNNING

    # -------- Simulation --------

    def tick(self) -> List[GameEvent]:
        """
        Advances the simulation by one step. Returns the events it produced.
        Does nothing unless the session is running.
        """
        if self.state is not SessionState.RUNNING:
            return []

        config = self.config
        body = self.body
        events: List[GameEvent] = []

        # 1. Spawn on cadence
        self.obstacles.maybe_spawn(self.tick_count, config, self.rng)

        # 2. Body physics
        self.core.integrate(body)
        self._refresh_body_size()
        if self.core.clamp_to_bounds(body, config.floor_y):
            return self._finish_tick(events, crashed=True)

        # 3. Move and expire obstacles
        self.obstacles.step(config.pipe_speed, config.offscreen_threshold)

        # 4. Collisions, then scoring
        if self.core.check_collision(body, self.obstacles):
            return self._finish_tick(events, crashed=True)

        for _ in passed_obstacles(body.hitbox(), self.obstacles):
            self.score += 1
            events.append(GameEvent.SCORED)

        self.core.update_orientation(body)
        return self._finish_tick(events, crashed=False)

    def snapshot(self) -> dict:
        """Plain view of the session for display collaborators."""
        return {
            "state": self.state.value,
            "score": self.score,
            "tick": self.tick_count,
            "body": self.body.to_render_state(),
            "obstacles": [
                {"x": round(o.x, 2), "width": o.width,
                 "top": round(o.top_height, 2), "bottom": round(o.bottom_y, 2)}
                for o in self.obstacles
            ],
        }

    # -------- Internals --------

    def _finish_tick(self, events: List[GameEvent], crashed: bool) -> List[GameEvent]:
        if crashed:
            self._crash()
            events.append(GameEvent.CRASHED)
        self.tick_count += 1
        for event in events:
            self._notify(event)
        return events

    def _crash(self):
        self.body.crashed = True
        self.core.update_orientation(self.body)
        self._refresh_body_size()
        # The crash pose can be a different size than the one that hit the floor
        self._settle_on_floor()
        self.state = SessionState.CRASHED
        logger.info("Crashed at tick %d with score %d", self.tick_count, self.score)

    def _notify(self, event: GameEvent):
        for listener in list(self.listeners):
            listener(event, self)

    def _reset_body(self):
        self.body = Body(x=self.config.width / 4, y=self.config.height / 2)
        self._refresh_body_size()

    def _refresh_body_size(self):
        self.body.width, self.body.height = body_box(self.sprites, self.body.pose, self.config)

    def _settle_on_floor(self):
        if self.body.grounded:
            self.body.y = self.config.floor_y - self.body.half_height
