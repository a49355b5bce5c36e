"""
Best-effort retrieval of image prefixes for dimension probing.

Remote sources are fetched with a single ranged ``GET`` through
``requests``; local paths are read from disk. Failures surface as
:class:`FetchError` so callers can fall back to zero dimensions instead
of aborting a layout pass. :func:`fetch_dimensions` probes many sources
concurrently while keeping results aligned with the input order.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import replace
from pathlib import Path
from typing import TYPE_CHECKING
from urllib.parse import urlparse

import requests
from tqdm import tqdm

from justified_gallery.config_defaults import (
    DEFAULT_PROBE_TIMEOUT,
    DEFAULT_PROBE_WORKERS,
)
from justified_gallery.constants import (
    PROBE_CHUNK_SIZE,
    PROBE_PREFIX_BYTES,
    PROBE_RANGE_HEADER,
)
from justified_gallery.logging_utils import logger
from justified_gallery.probe.headers import probe_image_header
from justified_gallery.type_defs import UNKNOWN_PROBE_RESULT, ProbeResult

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence

    from justified_gallery.type_defs import ImageDescriptor

__all__ = [
    "FetchError",
    "fetch_dimensions",
    "fetch_image_prefix",
    "fill_missing_dimensions",
    "probe_source",
    "read_image_prefix",
]

_REMOTE_SCHEMES = ("http", "https")


class FetchError(OSError):
    """Raised when an image prefix cannot be retrieved."""


def fetch_image_prefix(
    url: str,
    *,
    session: requests.Session | None = None,
    timeout: float = DEFAULT_PROBE_TIMEOUT,
    max_bytes: int = PROBE_PREFIX_BYTES,
) -> bytes:
    """
    Fetch at most ``max_bytes`` from the start of ``url``.

    Sends a ``Range`` header; servers that ignore it are cut off after
    ``max_bytes`` while streaming.

    Raises:
        FetchError: On a non-success status or any transport error.

    """
    client = session if session is not None else requests
    try:
        response = client.get(
            url,
            headers={"Range": PROBE_RANGE_HEADER},
            timeout=timeout,
            stream=True,
        )
    except requests.RequestException as exc:
        msg = f"Failed to fetch {url}: {exc}"
        raise FetchError(msg) from exc

    try:
        if not response.ok:
            msg = f"Failed to fetch {url}: HTTP {response.status_code}"
            raise FetchError(msg)
        received = bytearray()
        for chunk in response.iter_content(chunk_size=PROBE_CHUNK_SIZE):
            received.extend(chunk)
            if len(received) >= max_bytes:
                break
    except requests.RequestException as exc:
        msg = f"Failed to read {url}: {exc}"
        raise FetchError(msg) from exc
    finally:
        response.close()
    return bytes(received[:max_bytes])


def read_image_prefix(
    src: str,
    *,
    session: requests.Session | None = None,
    timeout: float = DEFAULT_PROBE_TIMEOUT,
    max_bytes: int = PROBE_PREFIX_BYTES,
) -> bytes:
    """Return the first bytes of a remote URL or a local file path."""
    if urlparse(src).scheme in _REMOTE_SCHEMES:
        return fetch_image_prefix(
            src, session=session, timeout=timeout, max_bytes=max_bytes,
        )
    try:
        with Path(src).open("rb") as handle:
            return handle.read(max_bytes)
    except (OSError, ValueError) as exc:
        msg = f"Failed to read {src}: {exc}"
        raise FetchError(msg) from exc


def probe_source(
    src: str,
    *,
    session: requests.Session | None = None,
    timeout: float = DEFAULT_PROBE_TIMEOUT,
) -> ProbeResult:
    """Fetch the prefix of ``src`` and probe its header."""
    result = probe_image_header(
        read_image_prefix(src, session=session, timeout=timeout),
    )
    if not result.is_known:
        logger.debug("Unrecognized image header: %s", src)
    return result


def fetch_dimensions(
    sources: Sequence[str],
    *,
    session: requests.Session | None = None,
    timeout: float = DEFAULT_PROBE_TIMEOUT,
    max_workers: int = DEFAULT_PROBE_WORKERS,
    progress: bool = False,
) -> list[ProbeResult]:
    """
    Probe every source concurrently.

    The returned list is index-aligned with ``sources`` regardless of
    completion order. A failed fetch only degrades its own entry to an
    unknown result.
    """
    results = [UNKNOWN_PROBE_RESULT] * len(sources)
    if not sources:
        return results

    workers = max(1, min(max_workers, len(sources)))
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = {
            pool.submit(
                probe_source, src, session=session, timeout=timeout,
            ): index
            for index, src in enumerate(sources)
        }
        completed = as_completed(futures)
        if progress:
            completed = tqdm(
                completed, total=len(futures), desc="Probing images",
            )
        for future in completed:
            index = futures[future]
            try:
                results[index] = future.result()
            except FetchError as exc:
                logger.warning(
                    "Could not fetch size for %s: %s", sources[index], exc,
                )
    return results


def fill_missing_dimensions(
    images: Sequence[ImageDescriptor],
    *,
    session: requests.Session | None = None,
    timeout: float = DEFAULT_PROBE_TIMEOUT,
    max_workers: int = DEFAULT_PROBE_WORKERS,
    progress: bool = False,
) -> list[ImageDescriptor]:
    """
    Return ``images`` with probed raw sizes for entries lacking one.

    Only descriptors missing a width or a height are probed. Failed or
    unrecognized probes leave both raw dimensions at zero so the
    configured fallback size applies later.
    """
    pending = [
        index for index, image in enumerate(images)
        if not image.raw_width or not image.raw_height
    ]
    resolved = list(images)
    if not pending:
        return resolved

    probed = fetch_dimensions(
        [images[index].src for index in pending],
        session=session,
        timeout=timeout,
        max_workers=max_workers,
        progress=progress,
    )
    for index, result in zip(pending, probed, strict=True):
        resolved[index] = replace(
            images[index], raw_width=result.width, raw_height=result.height,
        )
    return resolved
