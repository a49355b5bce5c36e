"""Shared default values for user-facing configuration settings."""

# Row height as a fraction of the container width, per breakpoint
DEFAULT_ROW_HEIGHT_SM = 0.25
DEFAULT_ROW_HEIGHT_MD = 0.2
DEFAULT_ROW_HEIGHT_XL = 0.18

# Sizes assumed for images whose dimensions are unknown
DEFAULT_FALLBACK_IMAGE_WIDTH = 1000
DEFAULT_FALLBACK_IMAGE_HEIGHT = 1000

# Aspect ratio clamp (width / height)
DEFAULT_MAX_IMAGE_RATIO = 1.6
DEFAULT_MIN_IMAGE_RATIO = 0.65

# Packing
DEFAULT_MAX_ROWS = 0
DEFAULT_STRETCH_LAST_ROW = True
DEFAULT_GAP = 4.0

# Behaviour
DEFAULT_RETRIEVE_DIMENSIONS = False
DEFAULT_SHUFFLE_IMAGES = False
DEFAULT_OBSERVE_WINDOW_WIDTH = True

# Dimension probing
DEFAULT_PROBE_TIMEOUT = 10.0
DEFAULT_PROBE_WORKERS = 8
