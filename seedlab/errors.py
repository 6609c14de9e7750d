"""
Error types raised by seedlab.

All errors derive from SeedlabError. Stream errors additionally derive from
ValueError so callers that only care about "bad input" can catch that.
"""

from __future__ import annotations

from typing import Any


class SeedlabError(Exception):
    """Base class for all seedlab errors."""

    pass


class InvalidSeedError(SeedlabError, ValueError):
    """Raised when a seed is zero after remapping or outside [1, 2**64 - 1]."""

    def __init__(self, seed: Any, reason: str = "seed must be non-zero") -> None:
        self.seed = seed
        super().__init__(f"Invalid seed {seed!r}: {reason}")


class DeserializeError(SeedlabError, ValueError):
    """Base class for errors raised while reading a serialized generator."""

    pass


class VersionMismatchError(DeserializeError):
    """The opening tag of a record is missing or unknown."""

    def __init__(self, token: str, expected: str) -> None:
        self.token = token
        self.expected = expected
        super().__init__(
            f"Unexpected version string {token!r} (expected {expected!r})"
        )


class TerminatorMismatchError(DeserializeError):
    """The closing tag of a record is missing or wrong."""

    def __init__(self, token: str, expected: str) -> None:
        self.token = token
        self.expected = expected
        super().__init__(f"Unexpected end tag {token!r} (expected {expected!r})")


class MalformedTokenError(DeserializeError):
    """
    A payload token could not be parsed.

    Attributes:
        token: The offending token text ("" at end of stream).
        field: Name of the field being read (e.g. "seed", "engine").
        position: 1-based index of the token within the record.
    """

    def __init__(
        self,
        token: str,
        field: str,
        position: int | None = None,
        reason: str | None = None,
    ) -> None:
        self.token = token
        self.field = field
        self.position = position
        where = f" at token {position}" if position is not None else ""
        detail = f": {reason}" if reason else ""
        super().__init__(f"Malformed {field} token {token!r}{where}{detail}")
