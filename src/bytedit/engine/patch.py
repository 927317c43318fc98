"""Patch expression parsing: hex digit strings and quoted strings -> bytes.

A patch is a sequence of tokens.  Each token is either

- a quoted string (``"..."`` or ``'...'``, closing quote optional at the
  end of input), contributing one byte per character, or
- a hex string (hex digits with optional interior whitespace), split into
  segments on whitespace; odd-length segments get one leading ``0``.

A bad token is reported and skipped; the rest of the patch still parses.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from bytedit.exceptions import PatchSyntaxError

QUOTES = ("'", '"')

_HEX_TOKEN = re.compile(r"[0-9a-fA-F\s]*[0-9a-fA-F][0-9a-fA-F\s]*")


@dataclass(frozen=True)
class PatchResult:
    """Parsed patch.

    Attributes:
        data: Bytes in token order.
        errors: One PatchSyntaxError per rejected token.
    """

    data: bytes
    errors: list[PatchSyntaxError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def tokenize_patch(text: str) -> list[str]:
    """Split an input line into patch tokens.

    Quoted tokens keep their delimiters (and any whitespace inside them);
    an unterminated quote runs to the end of the line.
    """
    tokens: list[str] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch.isspace():
            i += 1
            continue
        if ch in QUOTES:
            end = text.find(ch, i + 1)
            end = n if end < 0 else end + 1
        else:
            end = i
            while end < n and not text[end].isspace():
                end += 1
        tokens.append(text[i:end])
        i = end
    return tokens


def _parse_quoted(token: str) -> bytes:
    quote = token[0]
    body = token[1:]
    if body.endswith(quote):
        body = body[:-1]
    for ch in body:
        if ord(ch) > 0x7F:
            raise PatchSyntaxError(
                token, f"character {ch!r} is not a single-byte ASCII character"
            )
    return bytes(ord(ch) for ch in body)


def _parse_hex(token: str) -> bytes:
    out = bytearray()
    for segment in token.split():
        if len(segment) % 2:
            segment = "0" + segment
        out.extend(int(segment[k:k + 2], 16) for k in range(0, len(segment), 2))
    return bytes(out)


def parse_token(token: str) -> bytes:
    """Parse a single patch token.

    Raises:
        PatchSyntaxError: If the token is not a valid quoted or hex string.
    """
    if token and token[0] in QUOTES:
        return _parse_quoted(token)
    if _HEX_TOKEN.fullmatch(token):
        return _parse_hex(token)
    raise PatchSyntaxError(token)


def parse_patch(tokens: list[str] | str) -> PatchResult:
    """Parse patch tokens into a byte sequence, collecting per-token errors.

    A plain string is tokenized with :func:`tokenize_patch` first.
    """
    if isinstance(tokens, str):
        tokens = tokenize_patch(tokens)
    data = bytearray()
    errors: list[PatchSyntaxError] = []
    for token in tokens:
        try:
            data.extend(parse_token(token))
        except PatchSyntaxError as exc:
            errors.append(exc)
    return PatchResult(data=bytes(data), errors=errors)
