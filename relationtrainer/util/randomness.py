from __future__ import annotations

"""Randomness helpers: seeding and injectable random sources."""

import os
import random
from typing import Optional


def seed_from_env() -> Optional[int]:
    """Return the integer in the SEED env var, if set and valid."""
    seed = os.environ.get("SEED")
    if seed is None:
        return None
    try:
        return int(seed)
    except ValueError:
        return None


def make_rng(seed: Optional[int] = None) -> random.Random:
    """Build the random source used by generation.

    An explicit seed wins, then the SEED env var; otherwise the source is
    seeded from system entropy.
    """
    if seed is None:
        seed = seed_from_env()
    return random.Random(seed)


def coin(rng: random.Random, p: float = 0.5) -> bool:
    return rng.random() < p
