"""
Uniform distribution facades.

A facade binds the engine to a numeric range. Facades are frozen
dataclasses: equality compares every field, so if a facade ever grows
internal state it takes part in generator equality automatically.

Token forms:

    uint32:<low>:<high>
    uint64:<low>:<high>
    real:<low>:<high>

Real bounds are written with repr(), which round-trips floats exactly.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from seedlab._stream import parse_uint
from seedlab.engine import PCG64Engine
from seedlab.errors import MalformedTokenError

MAX32 = 2**32 - 1
MAX64 = 2**64 - 1

_INT_KINDS = {
    "uint32": (MAX32, np.uint32),
    "uint64": (MAX64, np.uint64),
}


@dataclass(frozen=True)
class UniformIntDistribution:
    """
    Uniform integers over the closed range [low, high].

    Attributes:
        kind: "uint32" or "uint64"; selects the output width.
        low: Smallest value that can be drawn.
        high: Largest value that can be drawn.
    """

    kind: str
    low: int
    high: int

    def __post_init__(self) -> None:
        if self.kind not in _INT_KINDS:
            raise ValueError(f"Unknown integer distribution kind {self.kind!r}")
        max_value, _ = _INT_KINDS[self.kind]
        if not 0 <= self.low <= self.high <= max_value:
            raise ValueError(
                f"Invalid {self.kind} range [{self.low}, {self.high}]"
            )

    @classmethod
    def full_range(cls, kind: str) -> UniformIntDistribution:
        """Return the facade spanning [0, MAX] for *kind*."""
        return cls(kind, 0, _INT_KINDS[kind][0])

    def sample(self, engine: PCG64Engine) -> int:
        _, dtype = _INT_KINDS[self.kind]
        value = engine.generator.integers(
            self.low, self.high, endpoint=True, dtype=dtype
        )
        return int(value)

    def to_token(self) -> str:
        return f"{self.kind}:{self.low}:{self.high}"

    @classmethod
    def from_token(
        cls, token: str, kind: str, position: int | None = None
    ) -> UniformIntDistribution:
        field = f"{kind} distribution"
        parts = token.split(":")
        if len(parts) != 3 or parts[0] != kind:
            raise MalformedTokenError(token, field, position, f"expected {kind}:low:high")
        max_value, _ = _INT_KINDS[kind]
        low = parse_uint(parts[1], field, position, max_value, token)
        high = parse_uint(parts[2], field, position, max_value, token)
        if low > high:
            raise MalformedTokenError(token, field, position, "low exceeds high")
        return cls(kind, low, high)


@dataclass(frozen=True)
class UniformRealDistribution:
    """Uniform floats over the half-open range [low, high)."""

    low: float = 0.0
    high: float = 1.0

    def __post_init__(self) -> None:
        if not (math.isfinite(self.low) and math.isfinite(self.high)):
            raise ValueError("Real distribution bounds must be finite")
        if not self.low < self.high:
            raise ValueError(f"Invalid real range [{self.low}, {self.high})")
        if not math.isfinite(self.high - self.low):
            raise ValueError(
                f"Real range [{self.low}, {self.high}) is too wide to sample"
            )

    def sample(self, engine: PCG64Engine) -> float:
        return self.low + (self.high - self.low) * float(engine.generator.random())

    def to_token(self) -> str:
        return f"real:{self.low!r}:{self.high!r}"

    @classmethod
    def from_token(cls, token: str, position: int | None = None) -> UniformRealDistribution:
        field = "real distribution"
        parts = token.split(":")
        if len(parts) != 3 or parts[0] != "real":
            raise MalformedTokenError(token, field, position, "expected real:low:high")
        try:
            low = float(parts[1])
            high = float(parts[2])
        except ValueError:
            raise MalformedTokenError(
                token, field, position, "bounds must be floats"
            ) from None
        try:
            return cls(low, high)
        except ValueError as e:
            raise MalformedTokenError(token, field, position, str(e)) from None
