"""
seedlab: Seeded random number generators with exact, versioned save/restore.

A SeededGenerator draws uniform 32-bit integers, 64-bit integers and reals
in [0, 1) from a PCG64 engine. Its complete state serializes to a short
text record; restoring that record reproduces every future draw.

Example:
    import seedlab

    rng = seedlab.SeededGenerator(42)
    values = [rng.draw_uint32() for _ in range(3)]

    with open("rng.state", "w") as f:
        rng.dump(f)
    with open("rng.state") as f:
        again = seedlab.SeededGenerator.load(f)
    assert again == rng

    # Independent, reproducible generators for separate components
    deriver = seedlab.SeedDeriver(root=42)
    a, b = deriver.spawn(), deriver.spawn()
"""

__version__ = "0.1.0"

from seedlab.derive import SeedDeriver, derive_seed
from seedlab.distributions import (
    MAX32,
    MAX64,
    UniformIntDistribution,
    UniformRealDistribution,
)
from seedlab.engine import PCG64Engine
from seedlab.entropy import (
    DEFAULT_SEED,
    FixedSeedSource,
    SeedSource,
    SystemSeedSource,
)
from seedlab.errors import (
    DeserializeError,
    InvalidSeedError,
    MalformedTokenError,
    SeedlabError,
    TerminatorMismatchError,
    VersionMismatchError,
)
from seedlab.generator import VERSION_TAG, SeededGenerator

__all__ = [
    # Generator
    "SeededGenerator",
    "VERSION_TAG",
    "PCG64Engine",
    # Distributions
    "UniformIntDistribution",
    "UniformRealDistribution",
    "MAX32",
    "MAX64",
    # Seeds
    "SeedDeriver",
    "derive_seed",
    "SeedSource",
    "FixedSeedSource",
    "SystemSeedSource",
    "DEFAULT_SEED",
    # Errors
    "SeedlabError",
    "InvalidSeedError",
    "DeserializeError",
    "VersionMismatchError",
    "TerminatorMismatchError",
    "MalformedTokenError",
]
