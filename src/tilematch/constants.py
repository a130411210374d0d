GRID_ROWS = 8
GRID_COLS = 8

# Opaque kind identifiers; renderers map them to textures or colors.
DEFAULT_PALETTE = ('nature', 'blood', 'spirit', 'hex', 'secrets')

# Minimum drag distance (in the presentation layer's units) before a move is proposed.
DRAG_THRESHOLD = 100.0

# Samples allowed per cell during initial fill and per tile during refill.
GENERATION_RETRY_LIMIT = 100

# Shortest run of identical kinds that counts as a match.
MIN_RUN_LENGTH = 3
