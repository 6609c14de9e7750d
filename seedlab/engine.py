"""
PCG64Engine: the deterministic bit source behind SeededGenerator.

Wraps numpy's PCG64 bit generator. The engine's complete state is four
integers:

- state: the 128-bit LCG state
- inc: the 128-bit (odd) increment
- has_uint32: 1 if half of the last 64-bit output is buffered for the next
  32-bit draw, else 0
- uinteger: the buffered 32-bit half-word

and is encoded as a single token ``pcg64:<state>:<inc>:<has_uint32>:<uinteger>``
using plain decimal integers. The encoding does not depend on numpy's own
pickling or repr, so saved state can be restored by any build.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from seedlab._stream import parse_uint
from seedlab.errors import MalformedTokenError

ENGINE_NAME = "pcg64"

_MAX128 = 2**128 - 1
_MAX32 = 2**32 - 1


class PCG64Engine:
    """
    Mutable PCG64 engine.

    Draw methods on numpy.random.Generator are exposed through ``generator``;
    distribution facades call those and never touch the raw state.
    """

    def __init__(self, seed: int) -> None:
        self.seed(seed)

    def seed(self, seed: int) -> None:
        """Re-initialize the engine state from *seed*."""
        self._bitgen = np.random.PCG64(seed)
        self.generator = np.random.Generator(self._bitgen)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def get_state(self) -> tuple[int, int, int, int]:
        """Return (state, inc, has_uint32, uinteger)."""
        raw = self._bitgen.state
        return (
            int(raw["state"]["state"]),
            int(raw["state"]["inc"]),
            int(raw["has_uint32"]),
            int(raw["uinteger"]),
        )

    def set_state(self, state: int, inc: int, has_uint32: int, uinteger: int) -> None:
        """Overwrite the full engine state."""
        self._bitgen.state = {
            "bit_generator": "PCG64",
            "state": {"state": state, "inc": inc},
            "has_uint32": has_uint32,
            "uinteger": uinteger,
        }

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, PCG64Engine):
            return NotImplemented
        return self.get_state() == other.get_state()

    __hash__ = None  # type: ignore[assignment]

    # ------------------------------------------------------------------
    # Token encoding
    # ------------------------------------------------------------------

    def to_token(self) -> str:
        state, inc, has_uint32, uinteger = self.get_state()
        return f"{ENGINE_NAME}:{state}:{inc}:{has_uint32}:{uinteger}"

    @classmethod
    def from_token(cls, token: str, position: int | None = None) -> PCG64Engine:
        """
        Build an engine from its token.

        Raises:
            MalformedTokenError: If the token is not a valid pcg64 state.
        """
        parts = token.split(":")
        if len(parts) != 5 or parts[0] != ENGINE_NAME:
            raise MalformedTokenError(
                token, "engine", position, f"expected {ENGINE_NAME}:state:inc:has_uint32:uinteger"
            )
        state = parse_uint(parts[1], "engine", position, _MAX128, token)
        inc = parse_uint(parts[2], "engine", position, _MAX128, token)
        has_uint32 = parse_uint(parts[3], "engine", position, 1, token)
        uinteger = parse_uint(parts[4], "engine", position, _MAX32, token)
        if inc % 2 == 0:
            # PCG requires an odd increment
            raise MalformedTokenError(token, "engine", position, "increment must be odd")

        engine = cls(1)
        engine.set_state(state, inc, has_uint32, uinteger)
        return engine

    def __repr__(self) -> str:
        state, inc, has_uint32, _ = self.get_state()
        return f"PCG64Engine(state={state:#x}, inc={inc:#x}, has_uint32={has_uint32})"
