"""
Header parsers that recover pixel dimensions from an image prefix.

Only container-level metadata is read: the PNG IHDR fields, the first
JPEG start-of-frame segment, or the first VP8/VP8L/VP8X chunk of a WebP
RIFF file. Every parser works on a bounded byte prefix and never raises;
anything it cannot interpret is reported as ``unknown`` with zero size.
"""

from __future__ import annotations

import struct

from justified_gallery.constants import (
    JPEG_MARKER_PREFIX,
    JPEG_NON_SOF_MARKERS,
    JPEG_SOF_FIRST,
    JPEG_SOF_LAST,
    JPEG_SOI,
    PNG_HEIGHT_OFFSET,
    PNG_SIGNATURE,
    PNG_SIGNATURE_TAIL,
    PNG_WIDTH_OFFSET,
    RIFF_TAG,
    VP8_DIMENSION_MASK,
    VP8_HEIGHT_OFFSET,
    VP8_TAG,
    VP8_WIDTH_OFFSET,
    VP8L_BITS_OFFSET,
    VP8L_TAG,
    VP8X_HEIGHT_OFFSET,
    VP8X_TAG,
    VP8X_WIDTH_OFFSET,
    WEBP_CHUNK_HEADER_SIZE,
    WEBP_FIRST_CHUNK_OFFSET,
    WEBP_TAG,
)
from justified_gallery.type_defs import UNKNOWN_PROBE_RESULT, ProbeResult

__all__ = ["probe_image_header", "read_uint24"]

_UINT24_SIZE = 3


def read_uint24(buffer: bytes, offset: int, *, little_endian: bool) -> int:
    """Read a 3-byte unsigned integer at ``offset``."""
    chunk = buffer[offset:offset + _UINT24_SIZE]
    if offset < 0 or len(chunk) != _UINT24_SIZE:
        msg = f"Need {_UINT24_SIZE} bytes at offset {offset}"
        raise ValueError(msg)
    return int.from_bytes(chunk, "little" if little_endian else "big")


def _probe_png(buffer: bytes) -> ProbeResult | None:
    """Read IHDR width and height after the 8-byte PNG signature."""
    head, tail = struct.unpack_from(">II", buffer, 0)
    if head != PNG_SIGNATURE or tail != PNG_SIGNATURE_TAIL:
        return None
    (width,) = struct.unpack_from(">I", buffer, PNG_WIDTH_OFFSET)
    (height,) = struct.unpack_from(">I", buffer, PNG_HEIGHT_OFFSET)
    return ProbeResult(width=width, height=height, format="png")


def _is_start_of_frame(marker: int) -> bool:
    return (
        JPEG_SOF_FIRST <= marker <= JPEG_SOF_LAST
        and marker not in JPEG_NON_SOF_MARKERS
    )


def _probe_jpeg(buffer: bytes) -> ProbeResult | None:
    """Walk JPEG marker segments until the first start-of-frame."""
    (soi,) = struct.unpack_from(">H", buffer, 0)
    if soi != JPEG_SOI:
        return None

    offset = 2
    while offset < len(buffer):
        if buffer[offset] != JPEG_MARKER_PREFIX:
            break
        marker = buffer[offset + 1]
        (length,) = struct.unpack_from(">H", buffer, offset + 2)
        if _is_start_of_frame(marker):
            height, width = struct.unpack_from(">HH", buffer, offset + 5)
            return ProbeResult(width=width, height=height, format="jpeg")
        offset += 2 + length
    return None


def _probe_webp(buffer: bytes) -> ProbeResult | None:
    """Walk RIFF sub-chunks until a VP8, VP8L or VP8X chunk is found."""
    (riff,) = struct.unpack_from(">I", buffer, 0)
    (webp,) = struct.unpack_from(">I", buffer, 8)
    if riff != RIFF_TAG or webp != WEBP_TAG:
        return None

    offset = WEBP_FIRST_CHUNK_OFFSET
    while offset < len(buffer):
        (tag,) = struct.unpack_from(">I", buffer, offset)
        (size,) = struct.unpack_from("<I", buffer, offset + 4)

        if tag == VP8_TAG:
            (width,) = struct.unpack_from(
                "<H", buffer, offset + VP8_WIDTH_OFFSET,
            )
            (height,) = struct.unpack_from(
                "<H", buffer, offset + VP8_HEIGHT_OFFSET,
            )
            return ProbeResult(
                width=width & VP8_DIMENSION_MASK,
                height=height & VP8_DIMENSION_MASK,
                format="webp",
            )
        if tag == VP8L_TAG:
            b0, b1, b2, b3 = struct.unpack_from(
                "4B", buffer, offset + VP8L_BITS_OFFSET,
            )
            width = 1 + (((b1 & 0x3F) << 8) | b0)
            height = 1 + (
                ((b3 & 0x0F) << 10) | (b2 << 2) | ((b1 & 0xC0) >> 6)
            )
            return ProbeResult(width=width, height=height, format="webp")
        if tag == VP8X_TAG:
            width = 1 + read_uint24(
                buffer, offset + VP8X_WIDTH_OFFSET, little_endian=True,
            )
            height = 1 + read_uint24(
                buffer, offset + VP8X_HEIGHT_OFFSET, little_endian=True,
            )
            return ProbeResult(width=width, height=height, format="webp")

        offset += WEBP_CHUNK_HEADER_SIZE + size + (size % 2)

    # A RIFF/WEBP file without a bitstream chunk yields no dimensions
    return None


_DETECTORS = (_probe_png, _probe_jpeg, _probe_webp)


def probe_image_header(data: bytes | bytearray | memoryview) -> ProbeResult:
    """
    Determine width, height and format from the first bytes of an image.

    Detection runs PNG, then JPEG, then WebP. A truncated or malformed
    header stops detection and yields ``unknown`` with zero dimensions.
    """
    buffer = bytes(data)
    for detector in _DETECTORS:
        try:
            result = detector(buffer)
        except (struct.error, IndexError, ValueError):
            return UNKNOWN_PROBE_RESULT
        if result is not None:
            return result
    return UNKNOWN_PROBE_RESULT
