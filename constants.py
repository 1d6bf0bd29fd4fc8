# constants.py
"""
Application-level constants.

These values are static and do not change between simulation runs.
They are fundamental to the application's framework, such as rendering
properties, force-model constants or key-binding step sizes that are not
part of the experimental configuration in config.json.
"""

# --- Particle physics ---
MAX_TRAIL_LENGTH = 10
# Multiplier applied to velocity every frame.
FRICTION = 0.999
# Pairs closer than this repel each other.
REPULSION_RADIUS = 50.0
REPULSION_STRENGTH = 0.01
HUE_STEP = 0.5
HUE_MAX = 360.0

# Random ranges for newly created particles: value = random() * SPAN + MIN
PARTICLE_SIZE_MIN = 1.0
PARTICLE_SIZE_SPAN = 3.0
PARTICLE_DECAY_MIN = 0.005
PARTICLE_DECAY_SPAN = 0.02
PARTICLE_BRIGHTNESS_MIN = 50.0
PARTICLE_BRIGHTNESS_SPAN = 50.0
PARTICLE_MASS_RATIO = 0.1

# --- Attractors ---
ATTRACTOR_MASS = 50.0
ATTRACTOR_DECAY = 0.01
ATTRACTOR_PULSE_STEP = 0.1
BIG_BANG_ATTRACTORS = 5
BIG_BANG_FORCE_MIN = 5.0
BIG_BANG_FORCE_SPAN = 10.0

# --- Visualization settings ---
FULLSCREEN = False
DEFAULT_WINDOW_SIZE = (1280, 720)
FPS = 60
BACKGROUND_COLOR = (0, 0, 0)
# Alpha (0-1) of the black overlay painted every frame. Lower is a longer trail.
MOTION_BLUR_ALPHA = 0.05
TRAIL_OPACITY = 0.3
TRAIL_SIZE_RATIO = 0.5
# Ratio of the glow radius to the particle radius.
PARTICLE_GLOW_RATIO = 3
# Upper bound on the number of rings used to rasterize a radial gradient.
GRADIENT_MAX_RINGS = 24

# --- Connection overlay ---
CONNECTION_STRIDE = 5
CONNECTION_DISTANCE = 100.0
CONNECTION_ALPHA = 0.1
CONNECTION_COLOR = (255, 255, 255, 0.2)
CONNECTION_WIDTH = 0.5

# --- HUD ---
HUD_BACKGROUND = (40, 40, 40, 160)
HUD_TEXT_COLOR = (255, 255, 255)
HUD_KEY_COLOR = (200, 200, 200)

# --- Key-binding step sizes and ranges ---
PARTICLE_COUNT_STEP = 50
PARTICLE_COUNT_RANGE = (0, 2000)
GRAVITY_STEP = 0.1
GRAVITY_RANGE = (0.0, 2.0)
SPEED_STEP = 0.1
SPEED_RANGE = (0.1, 3.0)
INITIAL_ATTRACTOR_DELAY_MS = 1000
