"""
Seed derivation: hand out independent, reproducible seeds.

- derive_seed(): one-shot helper
- SeedDeriver: explicit derivation service owning a root generator

Every derived seed comes from an explicit root, so a whole tree of
generators is reproducible from one root seed without any process-wide
state.

Example:
    deriver = SeedDeriver(root=42)
    loader_rng = deriver.spawn()
    model_rng = deriver.spawn()
    # Same root -> same loader_rng/model_rng sequences on every run
"""

from __future__ import annotations

import logging
from typing import Iterator

from seedlab.generator import SeededGenerator

logger = logging.getLogger(__name__)


def derive_seed(root: SeededGenerator | int | None = None) -> int:
    """
    Draw one 64-bit seed.

    Args:
        root: Where the seed comes from.

            - ``None``: a transient generator built from the zero sentinel
              (the fixed default seed). Always returns the same value.
            - ``int``: a transient generator seeded with *root*. Same
              root, same value.
            - ``SeededGenerator``: one draw from *root* itself, advancing
              it, so repeated calls return different seeds.

    Returns:
        An integer in [0, 2**64 - 1].
    """
    if isinstance(root, SeededGenerator):
        return root.draw_uint64()
    transient = SeededGenerator(0 if root is None else root)
    return transient.draw_uint64()


class SeedDeriver:
    """
    Derives seeds and generators for independently owned components.

    The deriver owns its root generator; each call to :meth:`derive` or
    :meth:`spawn` advances it. Two derivers built from the same root seed
    hand out the same sequence.

    Args:
        root: A root seed (0 means the fixed default) or an existing
            generator to take ownership of.
    """

    def __init__(self, root: SeededGenerator | int = 0) -> None:
        if isinstance(root, SeededGenerator):
            self._root = root
        else:
            self._root = SeededGenerator(root)
        self._issued = 0

    @property
    def root(self) -> SeededGenerator:
        """The root generator. Drawing from it changes future derivations."""
        return self._root

    @property
    def issued(self) -> int:
        """Number of seeds handed out so far."""
        return self._issued

    def derive(self) -> int:
        """Return the next non-zero 64-bit seed."""
        seed = derive_seed(self._root)
        while seed == 0:
            # Zero is the sentinel; never hand it out as a real seed
            seed = derive_seed(self._root)
        self._issued += 1
        logger.debug(f"Derived seed #{self._issued}: {seed}")
        return seed

    def spawn(self) -> SeededGenerator:
        """Return a new generator seeded from :meth:`derive`."""
        return SeededGenerator(self.derive())

    def spawn_many(self, n: int) -> list[SeededGenerator]:
        """Return *n* new generators, in derivation order."""
        if n < 0:
            raise ValueError(f"n must be non-negative, got {n}")
        return [self.spawn() for _ in range(n)]

    def __iter__(self) -> Iterator[int]:
        """Yield derived seeds indefinitely."""
        while True:
            yield self.derive()

    def __repr__(self) -> str:
        return f"SeedDeriver(root_seed={self._root.seed}, issued={self._issued})"
