#!/usr/bin/env python3
"""
flappy_client.py

pygame host: window, input, fixed-step clock and drawing of render commands.
"""

import argparse
import logging
import math
import os
import random
from typing import Dict, List, Optional, Tuple

import pygame

from .constants import (
    DEFAULT_WIDTH, DEFAULT_HEIGHT, RENDER_FPS, TICK_TIME, SKY_TOP
)
from .data_models import GameEvent, Pose, SessionState
from .render import (
    DrawBarrier, DrawCommand, DrawLine, DrawSprite, DrawText, FillGradient, FillRect,
    barrier_layout, render
)
from .session import Session
from .viewport import SpriteMetrics, ViewportConfig

logger = logging.getLogger(__name__)

SPRITE_FILES = {
    Pose.UP: "baby_up.png",
    Pose.DOWN: "baby_down.png",
    Pose.CRY: "baby_cry.png",
}
NIPPLE_FILE = "nipple.png"
BOTTLE_BODY_FILE = "body_tile.png"
SPRITE_FALLBACK_COLORS = {
    Pose.UP: (255, 214, 170),
    Pose.DOWN: (250, 200, 150),
    Pose.CRY: (230, 120, 120),
}
MAX_FRAME_TIME = 0.25           # Ticks to catch up on are capped after a stall


def _load_image(path: str) -> Optional[pygame.Surface]:
    try:
        return pygame.image.load(path)
    except (pygame.error, FileNotFoundError) as e:
        logger.warning("Could not load image %s: %s", path, e)
        return None


def load_sprites(assets_dir: Optional[str]) -> Tuple[Dict[Pose, pygame.Surface], Optional[SpriteMetrics]]:
    """Loads the pose images that exist. Returns no metrics when none could be loaded."""
    images: Dict[Pose, pygame.Surface] = {}
    if not assets_dir:
        return images, None

    for pose, filename in SPRITE_FILES.items():
        image = _load_image(os.path.join(assets_dir, filename))
        if image is not None:
            images[pose] = image

    if not images:
        logger.warning("No sprites found in %s, drawing placeholder shapes.", assets_dir)
        return images, None

    metrics = SpriteMetrics({pose: img.get_size() for pose, img in images.items()})
    return images, metrics


def load_bottle_art(assets_dir: Optional[str]) -> Optional[Tuple[pygame.Surface, pygame.Surface]]:
    """Loads (nipple, bottle body) images. Barriers are drawn as plain rects without both."""
    if not assets_dir:
        return None
    nipple = _load_image(os.path.join(assets_dir, NIPPLE_FILE))
    body = _load_image(os.path.join(assets_dir, BOTTLE_BODY_FILE))
    if nipple is None or body is None or nipple.get_width() == 0:
        return None
    return nipple, body


def is_press(event: pygame.event.Event) -> bool:
    """Space or a click. Taps arrive as synthetic mouse clicks, so fingers are not counted twice."""
    if event.type == pygame.KEYDOWN:
        return event.key == pygame.K_SPACE
    return event.type == pygame.MOUSEBUTTONDOWN


class FlappyClient:
    def __init__(self, width: int, height: int, fps: int = RENDER_FPS,
                 seed: Optional[int] = None, assets_dir: Optional[str] = None):
        pygame.init()
        self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        pygame.display.set_caption("Flappy Baby")

        self.fps = fps
        self.images, metrics = load_sprites(assets_dir)
        self.bottle_art = load_bottle_art(assets_dir)
        self.session = Session(
            config=ViewportConfig.from_viewport(width, height),
            rng=random.Random(seed),
            sprites=metrics,
        )
        self.session.subscribe(self._on_event)

        self.large_font = pygame.font.Font(None, 64)
        self.font = pygame.font.Font(None, 36)
        self._sky_cache: Optional[pygame.Surface] = None

        # Time Management
        self.clock = pygame.time.Clock()
        self.tick_timer = 0.0

    def run(self):
        """The main client loop."""
        running = True
        dirty = True
        while running:
            frame_time = min(self.clock.tick(self.fps) / 1000.0, MAX_FRAME_TIME)

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
                elif event.type == pygame.VIDEORESIZE:
                    self.screen = pygame.display.get_surface()
                    if self.session.resize(event.w, event.h):
                        dirty = True
                elif is_press(event):
                    if self.session.state is not SessionState.RUNNING:
                        self.tick_timer = 0.0
                    self.session.press()
                    dirty = True

            # --- Fixed Timestep ---
            if self.session.state is SessionState.RUNNING:
                self.tick_timer += frame_time
                while self.tick_timer >= TICK_TIME and self.session.state is SessionState.RUNNING:
                    self.tick_timer -= TICK_TIME
                    self.session.tick()
                dirty = True

            # Idle and crashed screens are only redrawn when something changed
            if dirty:
                self._draw(render(self.session))
                dirty = False

        pygame.quit()

    def _on_event(self, event: GameEvent, session: Session):
        if event is GameEvent.SCORED:
            logger.debug("Score: %d", session.score)
        elif event is GameEvent.CRASHED:
            logger.info("Game over. Final score: %d", session.score)

    # ----------------- Drawing -----------------

    def _draw(self, commands: List[DrawCommand]):
        for command in commands:
            if isinstance(command, FillGradient):
                self._draw_gradient(command)
            elif isinstance(command, FillRect):
                r = command.rect
                pygame.draw.rect(self.screen, command.color, (r.left, r.top, r.width, r.height))
            elif isinstance(command, DrawBarrier):
                self._draw_barrier(command)
            elif isinstance(command, DrawLine):
                pygame.draw.line(self.screen, command.color, command.start, command.end, command.width)
            elif isinstance(command, DrawSprite):
                self._draw_sprite(command)
            elif isinstance(command, DrawText):
                self._draw_text(command)
        pygame.display.flip()

    def _draw_gradient(self, command: FillGradient):
        size = (max(int(command.rect.width), 1), max(int(command.rect.height), 1))
        if self._sky_cache is None or self._sky_cache.get_size() != size:
            sky = pygame.Surface(size)
            sky.fill(SKY_TOP)
            height = size[1]
            for row in range(height):
                t = row / max(height - 1, 1)
                color = tuple(int(a + (b - a) * t) for a, b in zip(command.top, command.bottom))
                pygame.draw.line(sky, color, (0, row), (size[0], row))
            self._sky_cache = sky
        self.screen.blit(self._sky_cache, (command.rect.left, command.rect.top))

    def _draw_barrier(self, command: DrawBarrier):
        r = command.rect
        if self.bottle_art is None:
            pygame.draw.rect(self.screen, command.color, (r.left, r.top, r.width, r.height))
            return

        nipple_img, body_img = self.bottle_art
        body, nipple = barrier_layout(command, nipple_img.get_size())
        if body is not None:
            tile = pygame.transform.scale(body_img, (max(int(body.width), 1), max(int(body.height), 1)))
            self.screen.blit(tile, (body.left, body.top))
        if nipple.height > 0:
            tip = pygame.transform.scale(nipple_img, (max(int(nipple.width), 1), max(int(nipple.height), 1)))
            if command.hanging:
                tip = pygame.transform.rotate(tip, 180)
            self.screen.blit(tip, (nipple.left, nipple.top))

    def _draw_sprite(self, command: DrawSprite):
        w, h = max(int(command.size[0]), 1), max(int(command.size[1]), 1)
        image = self.images.get(command.pose)
        if image is not None:
            sprite = pygame.transform.scale(image, (w, h))
        else:
            sprite = pygame.Surface((w, h), pygame.SRCALPHA)
            pygame.draw.ellipse(sprite, SPRITE_FALLBACK_COLORS[command.pose], (0, 0, w, h))

        # Canvas angles turn clockwise in y-down space, pygame's turn counter-clockwise
        rotated = pygame.transform.rotate(sprite, -math.degrees(command.rotation))
        self.screen.blit(rotated, rotated.get_rect(center=(int(command.center[0]), int(command.center[1]))))

    def _draw_text(self, command: DrawText):
        font = self.large_font if command.large else self.font
        lines = command.text.split("\n")
        line_height = font.get_linesize()
        top = command.center[1] - line_height * len(lines) / 2
        for i, line in enumerate(lines):
            surf = font.render(line, True, command.color)
            self.screen.blit(surf, surf.get_rect(center=(int(command.center[0]), int(top + line_height * (i + 0.5)))))


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Flap through the bottles.")
    parser.add_argument("--width", type=int, default=DEFAULT_WIDTH)
    parser.add_argument("--height", type=int, default=DEFAULT_HEIGHT)
    parser.add_argument("--fps", type=int, default=RENDER_FPS)
    parser.add_argument("--seed", type=int, default=None, help="Seed for obstacle placement")
    parser.add_argument("--assets", default=None, help="Directory holding baby_up/down/cry.png")
    parser.add_argument("--log-level", default="INFO")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None):
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    client = FlappyClient(args.width, args.height, fps=args.fps, seed=args.seed, assets_dir=args.assets)
    client.run()


if __name__ == "__main__":
    main()
