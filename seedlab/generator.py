"""
SeededGenerator: a deterministic random number generator with exact
save/restore.

A SeededGenerator owns a PCG64 engine and three uniform facades:

- uint32_distribution: integers in [0, 2**32 - 1]
- uint64_distribution: integers in [0, 2**64 - 1]
- real_distribution: floats in [0.0, 1.0)

Its complete state can be written to a text stream and read back; the
restored generator compares equal to the original and produces the same
future draws. The record format is::

    random-v1 <seed> <engine> <uint32> <uint64> <real> endrandom-v1\\n

Example:
    rng = SeededGenerator(42)
    rng.draw_uint32()
    text = rng.dumps()

    copy = SeededGenerator.loads(text)
    assert copy == rng
    assert copy.draw_real64() == rng.draw_real64()
"""

from __future__ import annotations

import io
import logging
import operator
from pathlib import Path
from typing import Any, TextIO

from seedlab import _stream
from seedlab.distributions import (
    MAX64,
    UniformIntDistribution,
    UniformRealDistribution,
)
from seedlab.engine import PCG64Engine
from seedlab.entropy import FixedSeedSource, SeedSource, SystemSeedSource, default_seed_source
from seedlab.errors import InvalidSeedError, MalformedTokenError

logger = logging.getLogger(__name__)

VERSION_TAG = "random-v1"


def _is_sentinel(seed: Any) -> bool:
    if isinstance(seed, bool):
        return False
    try:
        return operator.index(seed) == 0
    except TypeError:
        return False


def _check_seed(seed: Any) -> int:
    """Validate a resolved seed and return it as an int."""
    if isinstance(seed, bool):
        raise InvalidSeedError(seed, "seed must be an integer")
    try:
        seed = operator.index(seed)
    except TypeError:
        raise InvalidSeedError(seed, "seed must be an integer") from None
    if seed == 0:
        raise InvalidSeedError(seed)
    if not 0 < seed <= MAX64:
        raise InvalidSeedError(seed, "seed must fit in an unsigned 64-bit integer")
    return seed


class SeededGenerator:
    """
    Seeded pseudo-random generator with typed uniform draws.

    Instances are not thread-safe. Give each thread its own generator
    (see :class:`seedlab.derive.SeedDeriver`) rather than sharing one
    without external locking.

    Args:
        seed: Seed in [1, 2**64 - 1], or 0 to take one from *seed_source*.
        seed_source: Consulted only when *seed* is 0. Defaults to
            ``FixedSeedSource(7)``.

    Raises:
        InvalidSeedError: If the resolved seed is zero or out of range.
    """

    def __init__(self, seed: int = 0, *, seed_source: SeedSource | None = None) -> None:
        if _is_sentinel(seed):
            source = seed_source or default_seed_source()
            seed = source.next_seed()
            logger.debug(f"Zero seed remapped to {seed} by {source!r}")
        self._seed = _check_seed(seed)
        self._engine = PCG64Engine(self._seed)
        self.uint32_distribution = UniformIntDistribution.full_range("uint32")
        self.uint64_distribution = UniformIntDistribution.full_range("uint64")
        self.real_distribution = UniformRealDistribution(0.0, 1.0)

    @classmethod
    def deterministic(cls, seed: int = 0) -> SeededGenerator:
        """Build a generator whose zero sentinel maps to the fixed default seed."""
        return cls(seed, seed_source=FixedSeedSource())

    @classmethod
    def from_entropy(cls) -> SeededGenerator:
        """Build a generator seeded from the operating system."""
        return cls(0, seed_source=SystemSeedSource())

    @property
    def seed(self) -> int:
        """The seed the engine was last initialized from."""
        return self._seed

    @property
    def engine(self) -> PCG64Engine:
        return self._engine

    def reseed(self, seed: int) -> None:
        """
        Re-initialize the engine from *seed*.

        Distribution facades are left as they are. No sentinel remapping
        happens here, so zero is rejected.
        """
        self._seed = _check_seed(seed)
        self._engine.seed(self._seed)
        logger.debug(f"Reseeded generator with {seed}")

    # ------------------------------------------------------------------
    # Draws
    # ------------------------------------------------------------------

    def draw_uint32(self) -> int:
        """Return the next integer in [0, 2**32 - 1]."""
        return self.uint32_distribution.sample(self._engine)

    def draw_uint64(self) -> int:
        """Return the next integer in [0, 2**64 - 1]."""
        return self.uint64_distribution.sample(self._engine)

    def draw_real64(self) -> float:
        """Return the next float in [0.0, 1.0)."""
        return self.real_distribution.sample(self._engine)

    # ------------------------------------------------------------------
    # Equality
    # ------------------------------------------------------------------

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, SeededGenerator):
            return NotImplemented
        return (
            self._seed == other._seed
            and self._engine == other._engine
            and self.uint32_distribution == other.uint32_distribution
            and self.uint64_distribution == other.uint64_distribution
            and self.real_distribution == other.real_distribution
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"SeededGenerator(seed={self._seed}, engine={self._engine!r})"

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def dump(self, stream: TextIO) -> None:
        """Write this generator's state to *stream* as one record."""
        _stream.write_record(
            stream,
            VERSION_TAG,
            [
                str(self._seed),
                self._engine.to_token(),
                self.uint32_distribution.to_token(),
                self.uint64_distribution.to_token(),
                self.real_distribution.to_token(),
            ],
        )

    def dumps(self) -> str:
        """Return this generator's state as a string."""
        buf = io.StringIO()
        self.dump(buf)
        return buf.getvalue()

    def restore(self, stream: TextIO) -> None:
        """
        Replace this generator's state with the next record read from *stream*.

        The record is fully parsed before anything is assigned, so on error
        this generator is unchanged.

        Raises:
            VersionMismatchError: If the opening tag is not ``random-v1``.
            MalformedTokenError: If a payload token cannot be parsed.
            TerminatorMismatchError: If the closing tag is not ``endrandom-v1``.
        """
        seed, engine, dist32, dist64, real = _read_record(stream)
        self._seed = seed
        self._engine = engine
        self.uint32_distribution = dist32
        self.uint64_distribution = dist64
        self.real_distribution = real

    @classmethod
    def load(cls, stream: TextIO) -> SeededGenerator:
        """Read a new generator from the next record in *stream*."""
        seed, engine, dist32, dist64, real = _read_record(stream)
        rng = cls.__new__(cls)
        rng._seed = seed
        rng._engine = engine
        rng.uint32_distribution = dist32
        rng.uint64_distribution = dist64
        rng.real_distribution = real
        return rng

    @classmethod
    def loads(cls, text: str) -> SeededGenerator:
        """Read a new generator from a string produced by :meth:`dumps`."""
        return cls.load(io.StringIO(text))

    def save(self, path: str | Path) -> None:
        """Write this generator's state to the file at *path*."""
        path = Path(path)
        with open(path, "w", encoding="ascii", newline="") as f:
            self.dump(f)
        logger.debug(f"Saved generator state to {path}")

    @classmethod
    def from_file(cls, path: str | Path) -> SeededGenerator:
        """
        Read a generator from a file written by :meth:`save`.

        Raises:
            MalformedTokenError: If the file contains non-ASCII bytes.
        """
        path = Path(path)
        with open(path, "r", encoding="ascii", newline="") as f:
            try:
                rng = cls.load(f)
            except UnicodeDecodeError as e:
                bad = e.object[e.start : e.end].decode("ascii", "backslashreplace")
                raise MalformedTokenError(
                    bad, "record", None, f"non-ASCII bytes in {path}"
                ) from None
        logger.debug(f"Restored generator state from {path}")
        return rng


def _read_record(
    stream: TextIO,
) -> tuple[int, PCG64Engine, UniformIntDistribution, UniformIntDistribution, UniformRealDistribution]:
    reader = _stream.TokenReader(stream)
    reader.expect_tag(VERSION_TAG)

    token = reader.field("seed")
    seed = _stream.parse_uint(token, "seed", reader.position, MAX64)
    if seed == 0:
        raise MalformedTokenError(token, "seed", reader.position, "seed must be non-zero")

    engine = PCG64Engine.from_token(reader.field("engine"), reader.position)
    dist32 = UniformIntDistribution.from_token(
        reader.field("uint32 distribution"), "uint32", reader.position
    )
    dist64 = UniformIntDistribution.from_token(
        reader.field("uint64 distribution"), "uint64", reader.position
    )
    real = UniformRealDistribution.from_token(
        reader.field("real distribution"), reader.position
    )

    reader.expect_end(VERSION_TAG)
    return seed, engine, dist32, dist64, real
