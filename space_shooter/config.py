"""
Game configuration for the space shooter simulation
All speeds are per tick; all durations ending in _MS are game-clock milliseconds.
"""

# ==============================================================================
# PLAYFIELD & ENTITY GEOMETRY
# ==============================================================================

GAME_WIDTH = 400
GAME_HEIGHT = 600

PLAYER_WIDTH = 40
PLAYER_HEIGHT = 40
PLAYER_Y = GAME_HEIGHT - 80
PLAYER_SPEED = 6

BULLET_WIDTH = 4
BULLET_HEIGHT = 12
BULLET_SPEED = 10
BULLET_DRIFT = 10        # horizontal px per tick per radian of drift angle

ENEMY_WIDTH = 36
ENEMY_HEIGHT = 36

POWERUP_WIDTH = 28
POWERUP_HEIGHT = 28
POWERUP_FALL_SPEED = 2

BOSS_WIDTH = 80
BOSS_HEIGHT = 60
BOSS_TARGET_Y = 60
BOSS_DESCENT_SPEED = 2

BOSS_PROJECTILE_SIZE = 8
PROJECTILE_MARGIN = 10   # boss projectiles may leave the sides by this much

STAR_COUNT = 50

# ==============================================================================
# PROGRESSION
# ==============================================================================

START_LIVES = 3
MAX_LIVES = 5
START_LEVEL = 1

BOSS_LEVELS = (5, 10, 15, 20, 25, 30)

# Points per level between bosses; None disables score-driven levelling
LEVEL_SCORE_STEP = 500

SCORE_NORMAL = 10
SCORE_FAST = 20
BOSS_SCORE_MULTIPLIER = 10

# ==============================================================================
# SPAWNING
# ==============================================================================

SPAWN_BASE_TICKS = 60
SPAWN_TICKS_PER_LEVEL = 5
SPAWN_MIN_TICKS = 30

ENEMY_BASE_SPEED = 1.5
ENEMY_SPEED_PER_LEVEL = 0.3
FAST_ENEMY_CHANCE = 0.3

POWERUP_DROP_CHANCE = 0.2
BOSS_DROP_COUNT = 3
BOSS_DROP_STAGGER_MS = 100
BOSS_DROP_SPACING = 30

# ==============================================================================
# BOSS
# ==============================================================================

BOSS_BASE_HEALTH = 50
BOSS_HEALTH_PER_LEVEL = 20
BOSS_BASE_SPEED = 1.5
BOSS_SPEED_PER_LEVEL = 0.2

PHASE2_THRESHOLD = 0.66
PHASE3_THRESHOLD = 0.33

# Attack cadence in ticks, keyed by phase
BOSS_ATTACK_TICKS = {1: 40, 2: 20, 3: 8}

BOSS_SHOT_SPEED = 4
SPREAD_SHOT_STEP = 1.5
SPIRAL_STEP_DEG = 30
SPIRAL_RADIUS_X = 30
SPIRAL_RADIUS_Y = 10
SPIRAL_LATERAL_SPEED = 2
SPIRAL_SHOT_SPEED = 5

# ==============================================================================
# POWERUPS & FIRING
# ==============================================================================

POWERUP_DURATION_MS = 5000
FIRE_COOLDOWN_MS = 200
RAPID_FIRE_COOLDOWN_MS = 100
SPREAD_ANGLE = 0.2
SPREAD_OFFSET_X = 10
SPREAD_OFFSET_Y = 5

EXPLOSION_DURATION_MS = 300

# ==============================================================================
# DRIVER SETTINGS
# ==============================================================================

FRAME_RATE = 60
MAX_STEPS_PER_FRAME = 5  # fixed-timestep accumulator cap

# Gym environment parameters
ENV_CONFIG = {
    "max_steps": 3600,       # 60s at 60 FPS
    "dt_ms": 1000 / 60,
    "k_hostiles": 5,
    "m_projectiles": 5,
    "m_powerups": 2,
    "life_penalty": 5.0,
    "score_scale": 0.01,
}
