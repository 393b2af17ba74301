"""
Game tuning constants
"""

# Playfield (normalized units, 21:9 aspect)
GAME_WIDTH = 100.0
GAME_HEIGHT = 42.8

MAX_LEVELS = 10
ROUNDS_PER_LEVEL = 7

# Reticle
CROSSHAIR_SPEED = 1.5  # units per frame at full deflection
CROSSHAIR_START = (50.0, 30.0)
DIAGONAL_FACTOR = 0.7071

# Hits
HITBOX_RADIUS = 6.0
HIT_MARKER_DURATION = 0.2  # seconds

# Sky
HORIZON_Y = 60.0  # birds cannot fly below 60% of screen height
ESCAPE_MIN_X = -15.0
ESCAPE_MAX_X = 115.0

# Spawning
SPAWN_CHANCE = 0.05  # per frame
MAX_ON_SCREEN = 3
SPAWN_LEFT_X = -10.0
SPAWN_RIGHT_X = 110.0
SPAWN_Y_RANGE = (5.0, 50.0)
SPAWN_SPEED_RANGE = (0.15, 0.35)
SPAWN_VY_RANGE = (-0.1, 0.1)
FAST_BIRD_CHANCE = 0.2
SPAWN_RATE_MS = 800  # informational only

# Timers (seconds)
SPLASH_DURATION = 3.0
WIN_COUNTDOWN = 3
WIN_READY_DELAY = 1.0
TOAST_DURATION = 3.0

# Bounty
KILL_BOUNTY = 100
AMMO_BOUNTY = 50

# Ranks (accuracy percent thresholds, strictly greater than)
RANK_THRESHOLDS = (
    (80, "SHERIFF"),
    (50, "DEPUTY"),
)
DEFAULT_RANK = "ROOKIE"
