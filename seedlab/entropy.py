"""
Seed sources: where a seed comes from when the caller passes the sentinel 0.

- FixedSeedSource: always the same configured seed (reproducible default)
- SystemSeedSource: 64 bits from the operating system's CSPRNG

Custom sources only need a ``next_seed()`` method returning an int.
"""

from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)

DEFAULT_SEED = 7


@runtime_checkable
class SeedSource(Protocol):
    """Protocol for objects that supply a seed for the zero sentinel."""

    def next_seed(self) -> int:
        """Return a seed in [1, 2**64 - 1]."""
        ...


@dataclass(frozen=True)
class FixedSeedSource:
    """Always returns the same seed. The default source."""

    seed: int = DEFAULT_SEED

    def next_seed(self) -> int:
        return self.seed


class SystemSeedSource:
    """
    Draws a fresh non-zero 64-bit seed from ``secrets`` on every call.

    Generators built from this source are not reproducible unless the
    resolved seed is recorded (``SeededGenerator.seed``).
    """

    def next_seed(self) -> int:
        seed = 0
        while seed == 0:
            seed = secrets.randbits(64)
        logger.warning(f"Using system entropy seed {seed}; record it to reproduce this run")
        return seed

    def __repr__(self) -> str:
        return "SystemSeedSource()"


def default_seed_source() -> SeedSource:
    """Return the seed source used when none is given."""
    return FixedSeedSource(DEFAULT_SEED)
