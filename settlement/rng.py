"""Randomness sources for shuffles and wheel spins."""

import logging
from random import Random, SystemRandom

logger = logging.getLogger(__name__)


def secure_rng() -> Random:
    """Return an OS-entropy backed generator (not reproducible)."""
    return SystemRandom()


def seeded_rng(seed: int) -> Random:
    """Return a deterministic generator for tests and replays."""
    return Random(seed)


def make_rng(seed: int | None = None) -> Random:
    """
    Pick the randomness source for a table.

    Args:
        seed: Fixed seed for reproducible play, or None for OS entropy

    Returns:
        A Random-compatible generator
    """
    if seed is None:
        return secure_rng()
    logger.warning("Using seeded RNG (seed=%d); outcomes are reproducible", seed)
    return seeded_rng(seed)
