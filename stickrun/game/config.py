# --- Display ---
WIDTH = 600                 # logical screen width (world units)
HEIGHT = 350
FPS = 60
GROUND_HEIGHT = 50
GROUND_Y = HEIGHT - GROUND_HEIGHT   # y line of the running surface

# --- World / Physics (per frame, world units) ---
GRAVITY = 0.6
JUMP_FORCE = -12.0          # launch velocity, negative = up
BASE_SPEED = 4.0            # used when a stage leaves base_speed at 0

# --- Player ---
PLAYER_X = 50               # player's fixed x (world scrolls left)
PLAYER_SIZE = 40
MAX_HEALTH = 10

# --- Energy (double jump resource) ---
MAX_ENERGY = 100.0
ENERGY_REGEN = 0.5          # per grounded frame
JUMP_ENERGY_COST = 100.0    # air jump drains the full bar

# --- Hazards: (size, damage) per kind live in hazards.py ---
OBSTACLE_SIZE = 40
OBSTACLE_SIZE_SMALL = 30
DAMAGE_BLOCK = 4
DAMAGE_SPIKE = 6
DAMAGE_SHARD = 2
HEART_HEAL = 3
HEART_SCORE_BONUS = 5
BOULDER_PHASE_STEP = 0.1    # radians per frame
BOULDER_SWAY = 3.0          # speed amplitude added on top of scroll

# --- Spawner ---
SPAWN_SAFE_OFFSET = 200     # first hazard starts this far past the right edge
SPAWN_GAP_MIN_FACTOR = 0.8
SPAWN_GAP_MAX_FACTOR = 1.2
SPAWN_CHANCE = 0.05         # per frame, once past the min gap
HEART_CHANCE = 0.05
DOUBLE_SPAWN_CHANCE = 0.3
DOUBLE_SPAWN_COOLDOWN = 2500.0   # distance; ~2.5 energy refills at stage speeds
DOUBLE_SPAWN_SPACING = 100       # second hazard sits this far behind the first
MAX_HAZARDS = 20

# --- Collision ---
HIT_MARGIN = 5              # forgiveness, shrinks both boxes on every side

# --- Particles ---
PARTICLE_DECAY_MIN = 0.01
PARTICLE_DECAY_SPREAD = 0.02
HOMING_FORCE = 2.0
HOMING_DAMPING = 0.9
HOMING_CATCH_RADIUS = 10.0
PARTICLE_DRAG = 0.95
DUST_CHANCE = 0.4

# --- HUD anchors (homing particle targets) ---
HEALTH_ANCHOR = (80.0, 20.0)
SCORE_ANCHOR = (WIDTH - 60.0, 20.0)

# --- Stage progression ---
VICTORY_OVERSHOOT = 300.0   # run past the finish line before stopping
VICTORY_POSE_DELAY_S = 2.0  # exhausted -> victory
DUSK_START = 0.5            # stage progress where dusk begins
NOON_HOUR = 12.0
DUSK_HOUR = 18.0
NIGHT_HOURS = 12.0          # dusk -> dawn span
DAY_HOURS = 24.0

# --- Debug ---
DEBUG_EVENTS = False        # print stage/hit/spawn events for every run

# --- Colors (RGB) ---
COLOR_FG = (220, 232, 255)
COLOR_ACCENT = (0, 255, 255)
COLOR_DANGER = (255, 86, 110)
COLOR_BLOCK = (255, 59, 48)
COLOR_SPIKE = (255, 149, 0)
COLOR_SHARD = (175, 82, 222)
COLOR_BOULDER = (142, 142, 147)
COLOR_HEART = (255, 45, 85)
COLOR_HP = (52, 199, 89)
COLOR_ENERGY = (0, 200, 255)
COLOR_GOLD = (255, 215, 0)
