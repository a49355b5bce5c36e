"""Shared helpers for deterministic NumPy random number generation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar

import numpy as np

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence

__all__ = [
    "current_numpy_seed",
    "get_numpy_rng",
    "seed_numpy_rng",
    "shuffle_images",
]

T = TypeVar("T")


@dataclass(slots=True)
class _NumpyRngState:
    """State container for the cached Generator."""

    seed: int | None = None
    generator: np.random.Generator | None = None


_STATE = _NumpyRngState()


def seed_numpy_rng(seed: int) -> np.random.Generator:
    """
    Seed and cache the global NumPy Generator instance.

    Uses the recommended ``default_rng`` constructor which supersedes
    the legacy ``np.random.seed`` / ``RandomState`` APIs.
    """
    _STATE.seed = seed
    _STATE.generator = np.random.default_rng(seed)
    return _STATE.generator


def get_numpy_rng() -> np.random.Generator:
    """Return the cached Generator, creating an unseeded instance."""
    if _STATE.generator is None:
        _STATE.generator = np.random.default_rng()
    return _STATE.generator


def current_numpy_seed() -> int | None:
    """Return the last seed given to ``seed_numpy_rng``, if any."""
    return _STATE.seed


def shuffle_images(
    images: Sequence[T],
    rng: np.random.Generator | None = None,
) -> list[T]:
    """
    Return a random permutation of ``images``.

    The input is left untouched. Pass an explicit generator for
    reproducible orderings; the shared one is used otherwise.
    """
    generator = rng if rng is not None else get_numpy_rng()
    order = generator.permutation(len(images))
    return [images[int(index)] for index in order]
