# config.py
"""
Application configuration constants for Logo Atlas Maker
"""

# Grid limits
MIN_COLUMNS = 1
MAX_COLUMNS = 6
MIN_ROWS = 1
MAX_ROWS = 4

# Grid defaults
DEFAULT_COLUMNS = 4
DEFAULT_ROWS = 1

# Padding around and between cells, in atlas pixels
MIN_PADDING = 0
MAX_PADDING = 512
DEFAULT_PADDING = 4

# Output resolutions (square side in pixels)
ATLAS_SIZES = (1024, 2048, 4096)
DEFAULT_ATLAS_SIZE = 2048

# Supported image formats
SUPPORTED_IMAGE_FORMATS = ['png']
OUTPUT_FORMAT = 'png'
DEFAULT_OUTPUT_NAME = "atlas.png"

# PNG encoder settings
PNG_COMPRESS_LEVEL = 6

# Preview colours (RGBA)
PREVIEW_BACKGROUND = (169, 169, 169, 255)    # dark gray
PREVIEW_CELL_FILL = (105, 105, 105, 255)     # dim gray
PREVIEW_CELL_OUTLINE = (0, 0, 0, 200)
PREVIEW_FRAME_OUTLINE = (255, 255, 224, 200)  # light yellow
PREVIEW_FRAME_WIDTH = 2

# Window defaults
WINDOW_TITLE = "Logo Atlas Creator"
WINDOW_WIDTH = 800
WINDOW_HEIGHT = 600

# Logging
LOG_FILENAME = "logo_atlas.log"
LOG_DIR_ENV = "LOGO_ATLAS_LOG_DIR"
LOG_MAX_BYTES = 1_048_576
LOG_BACKUP_COUNT = 5
