"""
Test configuration and shared fixtures for justified_gallery.

This module defines reusable pytest fixtures for building image
descriptors, synthetic image headers, gallery configs, and a fake HTTP
session. These fixtures support all test modules in the test suite.

Note:
    This file is automatically loaded by pytest and should not be
    renamed.

"""
from __future__ import annotations

import io
import struct
import threading
import time
from collections.abc import Callable, Iterator
from pathlib import Path
from types import SimpleNamespace
from typing import Any

import pytest
import requests
from PIL import Image

from justified_gallery.config import GalleryConfig
from justified_gallery.logging_utils import logger
from justified_gallery.type_defs import ImageDescriptor

# ---------------------------
# Synthetic header builders
# ---------------------------


def png_header(width: int, height: int) -> bytes:
    """Signature plus a complete IHDR chunk."""
    ihdr = struct.pack(">II", width, height) + bytes([8, 2, 0, 0, 0])
    return (
        b"\x89PNG\r\n\x1a\n"
        + struct.pack(">I", len(ihdr))
        + b"IHDR"
        + ihdr
        + b"\x00\x00\x00\x00"
    )


def jpeg_header(width: int, height: int, *, sof_marker: int = 0xC0) -> bytes:
    """SOI, an APP0 segment, a DHT segment, then a start-of-frame."""
    app0 = b"\xff\xe0" + struct.pack(">H", 16) + b"JFIF\x00" + bytes(9)
    dht = b"\xff\xc4" + struct.pack(">H", 5) + bytes(3)
    sof = (
        bytes([0xFF, sof_marker])
        + struct.pack(">H", 17)
        + bytes([8])
        + struct.pack(">HH", height, width)
        + bytes([3])
        + bytes(9)
    )
    return b"\xff\xd8" + app0 + dht + sof


def riff_webp(*chunks: bytes) -> bytes:
    """Wrap encoded chunks in a RIFF/WEBP container."""
    body = b"WEBP" + b"".join(chunks)
    return b"RIFF" + struct.pack("<I", len(body)) + body


def webp_chunk(tag: bytes, payload: bytes) -> bytes:
    """Encode one RIFF sub-chunk including its padding byte."""
    padding = b"\x00" if len(payload) % 2 else b""
    return tag + struct.pack("<I", len(payload)) + payload + padding


def vp8_chunk(width: int, height: int, *, scale_bits: int = 0) -> bytes:
    """
    Lossy chunk with sizes at chunk offsets 16 and 18.

    The payload starts with a frame tag and start code padded to eight
    bytes, then the 14-bit width and height with optional scale bits.
    """
    payload = (
        b"\x30\x01\x00"
        + b"\x9d\x01\x2a"
        + b"\x00\x00"
        + struct.pack("<HH", width | (scale_bits << 14),
                      height | (scale_bits << 14))
    )
    return webp_chunk(b"VP8 ", payload)


def vp8l_chunk(width: int, height: int) -> bytes:
    """Lossless chunk with packed 14-bit sizes at chunk offset 8."""
    bits = (width - 1) | ((height - 1) << 14)
    return webp_chunk(b"VP8L", struct.pack("<I", bits))


def vp8x_chunk(width: int, height: int) -> bytes:
    """Extended header with 24-bit little-endian canvas size."""
    payload = (
        bytes([0x10, 0, 0, 0])
        + (width - 1).to_bytes(3, "little")
        + (height - 1).to_bytes(3, "little")
    )
    return webp_chunk(b"VP8X", payload)


def encode_with_pillow(
    size: tuple[int, int],
    fmt: str,
    *,
    mode: str = "RGB",
    **save_kwargs: Any,
) -> bytes:
    """Encode a solid image with Pillow and return the file bytes."""
    buffer = io.BytesIO()
    Image.new(mode, size, "teal").save(buffer, fmt, **save_kwargs)
    return buffer.getvalue()


# ---------------------------
# Fake HTTP collaborator
# ---------------------------


class FakeResponse:
    """Minimal stand-in for ``requests.Response`` used by the fetcher."""

    def __init__(
        self,
        body: bytes = b"",
        status_code: int = 206,
        chunk_size: int = 1024,
    ) -> None:
        self.body = body
        self.status_code = status_code
        self.chunk_size = chunk_size
        self.closed = False
        self.chunks_read = 0

    @property
    def ok(self) -> bool:
        return self.status_code < 400  # noqa: PLR2004

    def iter_content(self, chunk_size: int = 1) -> Iterator[bytes]:
        step = min(chunk_size, self.chunk_size)
        for start in range(0, len(self.body), step):
            self.chunks_read += 1
            yield self.body[start:start + step]

    def close(self) -> None:
        self.closed = True


class FakeSession:
    """Serves canned bodies per URL and records every request."""

    def __init__(
        self,
        responses: dict[str, FakeResponse | Exception],
        delays: dict[str, float] | None = None,
    ) -> None:
        self.responses = responses
        self.delays = delays or {}
        self.calls: list[dict[str, Any]] = []
        self._lock = threading.Lock()

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        with self._lock:
            self.calls.append({"url": url, **kwargs})
        time.sleep(self.delays.get(url, 0.0))
        response = self.responses.get(url)
        if response is None:
            return FakeResponse(status_code=404)
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def requested_urls(self) -> list[str]:
        return [call["url"] for call in self.calls]


# ---------------------------
# Fixtures
# ---------------------------


@pytest.fixture
def default_config() -> GalleryConfig:
    """Gallery config with every option at its default."""
    return GalleryConfig()


@pytest.fixture
def make_config() -> Callable[..., GalleryConfig]:
    """Build GalleryConfig instances from keyword overrides."""

    def _build(**overrides: Any) -> GalleryConfig:
        return GalleryConfig.model_validate(overrides)

    return _build


@pytest.fixture
def make_image() -> Callable[..., ImageDescriptor]:
    """
    Build descriptors whose normalized size equals the given size.

    Useful for driving the packer and row solver directly, without a
    normalization pass.
    """
    counter = iter(range(1_000_000))

    def _build(
        width: float = 100,
        height: float = 100,
        *,
        src: str | None = None,
    ) -> ImageDescriptor:
        name = src or f"https://img.example/{next(counter)}.jpg"
        return ImageDescriptor(
            src=name,
            raw_width=int(width),
            raw_height=int(height),
            normalized_width=float(width),
            normalized_height=float(height),
        )

    return _build


@pytest.fixture
def headers() -> SimpleNamespace:
    """Synthetic header builders grouped by format."""
    return SimpleNamespace(
        png=png_header,
        jpeg=jpeg_header,
        riff_webp=riff_webp,
        chunk=webp_chunk,
        vp8=vp8_chunk,
        vp8l=vp8l_chunk,
        vp8x=vp8x_chunk,
        pillow=encode_with_pillow,
    )


@pytest.fixture
def make_response() -> Callable[..., FakeResponse]:
    """Factory for FakeResponse instances."""
    return FakeResponse


@pytest.fixture
def make_fake_session() -> Callable[..., FakeSession]:
    """Factory for FakeSession instances."""

    def _build(
        responses: dict[str, FakeResponse | Exception],
        delays: dict[str, float] | None = None,
    ) -> FakeSession:
        return FakeSession(responses, delays)

    return _build


@pytest.fixture
def connection_error() -> requests.ConnectionError:
    """A transport-level failure as raised by requests."""
    return requests.ConnectionError("connection refused")


@pytest.fixture
def image_file(tmp_path: Path) -> Callable[..., Path]:
    """Write a solid-colour image file and return its path."""

    def _build(
        size: tuple[int, int] = (64, 48),
        name: str = "photo.png",
        color: str = "red",
    ) -> Path:
        path = tmp_path / name
        Image.new("RGB", size, color).save(path)
        return path

    return _build


@pytest.fixture(autouse=True)
def enable_logger_propagation(monkeypatch: pytest.MonkeyPatch) -> None:
    """Enable propagation for the gallery logger to allow caplog to work."""
    monkeypatch.setattr(logger, "propagate", True)
