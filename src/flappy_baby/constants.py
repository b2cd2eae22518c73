"""
constants.py: Centralized tuning values for the simulation and the client.
"""

import math

# -------- Timing --------
TICK_RATE = 60                  # Simulated ticks per second
TICK_TIME = 1.0 / TICK_RATE     # Fixed time step
RENDER_FPS = 60

# -------- Viewport --------
DEFAULT_WIDTH = 480
DEFAULT_HEIGHT = 800
REFERENCE_HEIGHT = 900          # Physics below is tuned for this height
GROUND_HEIGHT = 20

# -------- Physics (per tick, at reference height) --------
GRAVITY = 0.4
FLAP_IMPULSE = -8.0
PIPE_SPEED = 4.0
MIN_PIPE_SPEED = 2.0

# -------- Pipe Config (fractions of the viewport) --------
PIPE_GAP_RATIO = 0.25
PIPE_WIDTH_RATIO = 0.15
MAX_PIPE_WIDTH = 80
PIPE_MARGIN_RATIO = 0.1
PIPE_SPAWN_INTERVAL_TICKS = 100
OFFSCREEN_THRESHOLD = 50

# -------- Body --------
BODY_HEIGHT_RATIO = 0.07        # Neutral sprite height relative to the viewport
DEFAULT_BODY_SIZE = (30.0, 30.0)
HITBOX_SCALE = 0.7
TILT_FACTOR = 0.1
MAX_TILT = math.pi / 4
TILT_DAMPING = 0.1
CRASH_TILT = math.pi / 2

# -------- Colours --------
SKY_TOP = (0x70, 0xC5, 0xCE)
SKY_BOTTOM = (0xCC, 0xEB, 0xF4)
PIPE_COLOR = (0x73, 0xBF, 0x2E)
GROUND_COLOR = (0xDE, 0xD8, 0x95)
GROUND_EDGE_COLOR = (0xCB, 0xB9, 0x68)
TEXT_COLOR = (255, 255, 255)

START_MESSAGE = "Tap or Press Space to Start"
GAME_OVER_MESSAGE = "Game Over!\nTap to Restart"
