"""
Constants used internally by the justified gallery.

These are implementation-level values (file signatures, breakpoint
thresholds, rendering colors) that are not overridden via config files
or CLI arguments.
"""

# Breakpoint thresholds on the observed width, in pixels
BREAKPOINT_XL_MIN_WIDTH = 1024
BREAKPOINT_MD_MIN_WIDTH = 768

# Only a bounded prefix of each image is ever fetched or probed
PROBE_PREFIX_BYTES = 65536
PROBE_RANGE_HEADER = f"bytes=0-{PROBE_PREFIX_BYTES - 1}"
PROBE_CHUNK_SIZE = 8192

# PNG
PNG_SIGNATURE = 0x89504E47
PNG_SIGNATURE_TAIL = 0x0D0A1A0A
PNG_WIDTH_OFFSET = 16
PNG_HEIGHT_OFFSET = 20

# JPEG
JPEG_SOI = 0xFFD8
JPEG_MARKER_PREFIX = 0xFF
JPEG_SOF_FIRST = 0xC0
JPEG_SOF_LAST = 0xCF
# DHT, JPG and DAC share the SOF range but carry no frame header
JPEG_NON_SOF_MARKERS = frozenset({0xC4, 0xC8, 0xCC})

# WebP (RIFF container)
RIFF_TAG = 0x52494646
WEBP_TAG = 0x57454250
WEBP_FIRST_CHUNK_OFFSET = 12
WEBP_CHUNK_HEADER_SIZE = 8
VP8_TAG = 0x56503820
VP8L_TAG = 0x5650384C
VP8X_TAG = 0x56503858
VP8_DIMENSION_MASK = 0x3FFF
# Offsets are relative to the chunk start (tag at +0, size at +4)
VP8_FRAME_OFFSET = 10
VP8_WIDTH_OFFSET = VP8_FRAME_OFFSET + 6
VP8_HEIGHT_OFFSET = VP8_FRAME_OFFSET + 8
VP8L_BITS_OFFSET = 8
VP8X_WIDTH_OFFSET = 12
VP8X_HEIGHT_OFFSET = 15

# Rendering
COLOR_BLACK = (0, 0, 0)
COLOR_WHITE = (255, 255, 255)
COLOR_PLACEHOLDER = (176, 184, 192)
HTML_ROW_CLASS = "gallery-row"
HTML_ITEM_CLASS = "gallery-item"
