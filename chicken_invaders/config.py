"""
Configuration constants for Chicken Invaders.

All distances are in playfield pixels, all durations in milliseconds and
all speeds in pixels per second unless noted otherwise.
"""

# ---------------------------------------------------------------------------
# Timing
# ---------------------------------------------------------------------------
UPDATE_RATE: int = 60  # Hz, host frame rate
MAX_ELAPSED_MS: float = 1000.0 / 30  # movement step clamp

# ---------------------------------------------------------------------------
# Viewport / layout
# ---------------------------------------------------------------------------
MIN_PLAYFIELD_WIDTH: int = 320
MIN_PLAYFIELD_HEIGHT: int = 480
MAX_PLAYFIELD_WIDTH: int = 1920
MAX_PLAYFIELD_HEIGHT: int = 1080
REFERENCE_WIDTH: int = 800   # speeds are tuned for an 800x600 playfield
REFERENCE_HEIGHT: int = 600

BASE_PLAYER_SPEED: float = 350.0
BASE_BULLET_SPEED: float = 500.0
BASE_CHICKEN_SPEED: float = 30.0
BASE_EGG_SPEED: float = 120.0
DEFAULT_FIRE_RATE: float = 150.0  # ms between shots
DEFAULT_CHICKEN_ROWS: int = 4
MAX_CHICKEN_COLS: int = 12
COLUMN_WIDTH: int = 80  # one column per 80px of playfield width

# ---------------------------------------------------------------------------
# Collision
# ---------------------------------------------------------------------------
COLLISION_MARGIN: float = 2.0  # hitboxes shrink inward by this on every side

# ---------------------------------------------------------------------------
# Player
# ---------------------------------------------------------------------------
PLAYER_START_LIVES: int = 5
PLAYER_MAX_WIDTH: float = 40.0
PLAYER_MAX_HEIGHT: float = 30.0
PLAYER_WIDTH_RATIO: float = 0.05
PLAYER_HEIGHT_RATIO: float = 0.05
PLAYER_BOTTOM_OFFSET: float = 60.0  # minimum gap to the bottom edge
PLAYER_BOTTOM_RATIO: float = 0.1

# ---------------------------------------------------------------------------
# Projectiles
# ---------------------------------------------------------------------------
BULLET_WIDTH: float = 6.0
BULLET_HEIGHT: float = 12.0
PLAYER_BULLET_SPEED: float = 450.0  # stored on the bullet, not used to move it
SPREAD_OFFSETS: tuple[float, ...] = (-15.0, 0.0, 15.0)
RAPID_FIRE_DIVISOR: float = 4.0

# ---------------------------------------------------------------------------
# Power-ups
# ---------------------------------------------------------------------------
POWER_UP_SIZE: float = 36.0
POWER_UP_FALL_SPEED: float = 80.0
POWER_UP_DURATION_MS: float = 15000.0
POWER_UP_DROP_CHANCE: float = 0.2
DAMAGE_UP_MULTIPLIER: int = 2

# ---------------------------------------------------------------------------
# Explosions
# ---------------------------------------------------------------------------
EXPLOSION_SIZE: float = 50.0
PLAYER_EXPLOSION_SIZE: float = 60.0
EXPLOSION_DURATION_MS: float = 400.0

# ---------------------------------------------------------------------------
# Chicken grid
# ---------------------------------------------------------------------------
CHICKEN_MIN_WIDTH: float = 25.0
CHICKEN_MAX_WIDTH: float = 35.0
CHICKEN_MIN_HEIGHT: float = 20.0
CHICKEN_HEIGHT_RATIO: float = 0.8
CHICKEN_MIN_SPACING_X: float = 10.0
CHICKEN_MIN_SPACING_Y: float = 35.0
CHICKEN_ROW_GAP: float = 15.0
STRONG_ROWS: int = 2  # rows 0..STRONG_ROWS-1 take two hits
STRONG_CHICKEN_HP: int = 2
WEAK_CHICKEN_HP: int = 1
POINTS_BASE: int = 10
POINTS_PER_ROW: int = 5

GRID_START_X_MIN: float = 50.0
GRID_START_X_RATIO: float = 0.1
GRID_START_Y_MIN: float = 80.0
GRID_START_Y_RATIO: float = 0.15
MAX_GRID_ROWS: int = 6
WAVES_PER_EXTRA_ROW: int = 4

# ---------------------------------------------------------------------------
# Boss wave
# ---------------------------------------------------------------------------
BOSS_WAVE_INTERVAL: int = 5
BOSS_MAX_SIZE: float = 60.0
BOSS_SIZE_RATIO: float = 0.08
BOSS_HEIGHT_RATIO: float = 0.75
BOSS_RIGHT_OFFSET: float = 20.0
BOSS_Y_MIN: float = 120.0
BOSS_Y_RATIO: float = 0.2
BOSS_HP: int = 8
BOSS_POINTS: int = 300

# ---------------------------------------------------------------------------
# Formation movement and egg drops
# ---------------------------------------------------------------------------
BASE_MOVE_INTERVAL_MS: float = 1200.0
FORMATION_MARGIN_MIN: float = 30.0
FORMATION_MARGIN_RATIO: float = 0.05
FORMATION_STEP_X_MIN: float = 15.0
FORMATION_STEP_X_RATIO: float = 0.02
FORMATION_STEP_DOWN_MIN: float = 15.0
FORMATION_STEP_DOWN_RATIO: float = 0.025
BASE_EGG_DROP_INTERVAL_MS: float = 3000.0
EGG_TARGET_CANDIDATES: int = 3
DIFFICULTY_PER_WAVE: float = 0.15
BOTTOM_LINE_MARGIN: float = 50.0  # chickens this close to the bottom win
