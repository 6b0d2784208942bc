"""Ready-made build-mode generators over seeded noise."""

import numpy as np

from factsmith.generators.base import Generator
from factsmith.generators.unstructured import Unstructured

NOISE_SIZE = 1_000_000


def noise(size: int = NOISE_SIZE, seed: int | None = None) -> np.ndarray:
    """Return `size` bytes of uniform noise as a uint8 array."""
    if size <= 0:
        raise ValueError(f"size must be positive, got {size}")
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, size=size, dtype=np.uint8)


def random_generator(seed: int | None = None, size: int = NOISE_SIZE) -> Generator:
    """
    Create a build-mode Generator backed by `size` bytes of noise.

    Args:
        seed: Seed for reproducible noise; None draws fresh OS entropy
        size: Number of entropy bytes available to the Generator

    Returns:
        A Generator in build mode
    """
    return Generator(Unstructured(noise(size, seed)))
