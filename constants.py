# constants.py

"""
Application Constants

This module defines static configuration values for the animation's framework.
These are not expected to change between runs; per-run values live in
config.json.

Data Contract:
- All values are immutable constants.
- Units are specified in comments where applicable.
"""

from collections import namedtuple

# Canvas dimensions
WIDTH = 1100  # Pixels
HEIGHT = 680  # Pixels

# Framerate
FPS = 60  # Frames per second

# Window Title
TITLE = "Heart Tree"

# Colors (RGB)
BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
PAGE_COLOR = (255, 240, 243)       # Behind the canvas
CANVAS_BACKGROUND = (255, 204, 213) # The canvas's own painted background
SEED_COLOR = (128, 15, 47)
BRANCH_COLOR = (128, 15, 47)
FOOTER_COLOR = (164, 19, 60)
BLOOM_COLOR = (201, 24, 74)
TEXT_COLOR = BLACK

# Flight bloom colors, darkest to lightest.
COLOR_PALETTE = (
    (89, 13, 34),     # night-bordeaux
    (128, 15, 47),    # dark-amaranth
    (164, 19, 60),    # cherry-rose
    (201, 24, 74),    # rosewood
    (255, 77, 109),   # bubblegum-pink
    (255, 117, 143),  # bubblegum-pink-2
    (255, 143, 163),  # cotton-candy
    (255, 179, 193),  # cherry-blossom
    (255, 204, 213),  # pastel-pink
    (255, 240, 243),  # lavender-blush
)

# Figure geometry
STAR_OUTER_RADIUS = 20  # Pixels
STAR_INNER_RADIUS = 10  # Pixels
STAR_POINTS = 10

# Seed
SEED_MARKER_RADIUS = 5     # Pixels, before marker scale
SEED_FOOTPRINT = 26        # Half-size of the marker footprint, before marker scale
SEED_SCALE_FLOOR = 0.2
SEED_RISE_OVERSHOOT = 20   # Pixels past the tree's bottom edge
SEED_FONT_SIZE = 9         # Pixels, before seed scale
SEED_TEXT_SCALE = 0.75
SEED_TEXT_OFFSETS = (40, 55)  # Caption baselines below the seed, before scale

# Branch growth
BRANCH_RADIUS_DECAY = 0.97

# Bloom placement and growth
HEART_REGION_RADIUS = 240   # Pixels
BLOOM_MARGIN = 20           # Pixels kept clear on each side of the bloom box
BLOOM_INITIAL_SCALE = 0.1
BLOOM_GROWTH_STEP = 0.1
BLOOM_FULL_SCALE = 1.0
BLOOM_MIN_ALPHA = 0.3
PLACEMENT_BATCH_SIZE = 64
PLACEMENT_MAX_ATTEMPTS = 4096  # Candidates drawn before a placement is abandoned

# Flight blooms
FLIGHT_MIN_ACTIVE = 3
FLIGHT_SPAWN_RANGE = (1, 2)       # Inclusive
FLIGHT_TARGET_X_RANGE = (-100, 600)  # Inclusive
FLIGHT_TARGET_Y = 720
FLIGHT_SPEED_RANGE = (200, 300)   # Ticks, inclusive
FLIGHT_SPAWN_WIDTH_FACTOR = 1.5
FLIGHT_SPIN = 0.05                # Radians per tick
FLIGHT_EXIT_MARGIN = 20           # Pixels

# Snapshot slide
SLIDE_INITIAL_SPEED = 10   # Pixels per tick
SLIDE_SPEED_DECAY = 0.95
SLIDE_MIN_SPEED = 2        # Pixels per tick

# Animation timing table. Delays are milliseconds.
AnimationTiming = namedtuple('AnimationTiming', [
    'scale_factor',
    'seed_move_speed',
    'tree_grow_delay',
    'flower_bloom_count',
    'flower_bloom_delay',
    'tree_move_target_x',
    'snapshot_left_x',
    'snapshot_right_x',
    'snapshot_width',
    'background_fade_delay',
    'heart_jump_delay',
    'text_reveal_speed',
])

DEFAULT_TIMING = AnimationTiming(
    scale_factor=0.95,
    seed_move_speed=2,
    tree_grow_delay=10,
    flower_bloom_count=2,
    flower_bloom_delay=10,
    tree_move_target_x=500,
    snapshot_left_x=240,
    snapshot_right_x=500,
    snapshot_width=610,
    background_fade_delay=300,
    heart_jump_delay=25,
    text_reveal_speed=75,
)
