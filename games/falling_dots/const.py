import math

# Simulation
FRAMES_PER_SECOND = 60             # tick cadence
MIN_DOT_DIAMETER = 10              # px
MAX_DOT_DIAMETER = 100             # px
NEW_DOT_DELAY_MS = 1000            # period of automatic spawns
DOT_RESPAWN_DELAY_MS = 1000        # replacement delay after a hit

# Geometry
STROKE_WIDTH = 1                   # px, also keeps dots inside the board
BOARD_INNER_PADDING = 5            # px, left/right inset for placement
DOT_START_ANGLE = 0.0
DOT_END_ANGLE = 2 * math.pi

# Policies
PROPAGATE_HITS = False             # True: one press scores every dot under it
X_PLACEMENT = "percent"            # "percent" follows resizes, "absolute" does not
EXPIRY_SCAN = "prefix"             # "prefix" or "full"

# Colors
STROKE_COLOR = (0, 0, 0)
DOT_FILL_COLOR = (255, 255, 255)
BOARD_COLOR = (36, 40, 48)
HINT_COLOR = (150, 150, 150)
