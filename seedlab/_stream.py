"""
Whitespace-token streams (internal).

Serialized records are a sequence of whitespace-free tokens framed by a
version tag and an end tag:

    <tag> <payload tokens...> end<tag>\\n

Writers separate tokens with a single space and finish the record with one
newline. Readers split on any whitespace, so only token order and values
matter. Reading a token consumes the single delimiter character that ends
it, which means that after the end tag exactly one trailing byte has been
consumed and the stream is positioned at the start of the next record.
"""

from __future__ import annotations

from typing import Iterable, TextIO

from seedlab.errors import MalformedTokenError, TerminatorMismatchError, VersionMismatchError

RECORD_TERMINATOR = "\n"


def write_record(stream: TextIO, tag: str, tokens: Iterable[str]) -> None:
    """Write one framed record followed by the trailing terminator."""
    parts = [tag, *tokens, f"end{tag}"]
    for part in parts:
        if not part or any(ch.isspace() for ch in part):
            raise ValueError(f"Token must be non-empty and whitespace-free: {part!r}")
    stream.write(" ".join(parts))
    stream.write(RECORD_TERMINATOR)


class TokenReader:
    """
    Reads whitespace-delimited tokens from a text stream one at a time.

    Only reads as many characters as needed, so records can be embedded in a
    larger stream and read back one after another.
    """

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self.position = 0

    def next_token(self) -> str:
        """
        Return the next token, or "" at end of stream.

        The whitespace character terminating the token is consumed.
        """
        read = self._stream.read
        ch = read(1)
        while ch and ch.isspace():
            ch = read(1)
        chars: list[str] = []
        while ch and not ch.isspace():
            chars.append(ch)
            ch = read(1)
        self.position += 1
        return "".join(chars)

    def expect_tag(self, tag: str) -> None:
        """Read the opening tag, raising VersionMismatchError if it differs."""
        token = self.next_token()
        if token != tag:
            raise VersionMismatchError(token, tag)

    def expect_end(self, tag: str) -> None:
        """Read the closing tag, raising TerminatorMismatchError if it differs."""
        token = self.next_token()
        if token != f"end{tag}":
            raise TerminatorMismatchError(token, f"end{tag}")

    def field(self, name: str) -> str:
        """Read a payload token, treating end of stream as malformed."""
        token = self.next_token()
        if not token:
            raise MalformedTokenError(
                token, name, self.position, "unexpected end of stream"
            )
        return token


def parse_uint(
    text: str,
    field: str,
    position: int | None,
    max_value: int,
    token: str | None = None,
) -> int:
    """
    Parse a decimal unsigned integer bounded by *max_value*.

    *text* may be one part of a compound token; pass the whole *token* so
    errors report what was actually read from the stream.
    """
    token = text if token is None else token
    if not text.isdigit() or not text.isascii():
        raise MalformedTokenError(token, field, position, "expected a decimal integer")
    # Bound the length first; int() refuses very long digit strings
    digits = text.lstrip("0") or "0"
    if len(digits) > len(str(max_value)):
        raise MalformedTokenError(token, field, position, f"exceeds {max_value}")
    value = int(digits)
    if value > max_value:
        raise MalformedTokenError(token, field, position, f"exceeds {max_value}")
    return value
