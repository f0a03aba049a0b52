"""Base64 codec, standard and URL-safe alphabets (RFC 4648 sections 4 and 5).

Encoding always pads with '='. Decoding is strict:
  - every character before the padding must belong to the chosen alphabet
    (so standard and URL-safe text are not cross-decodable);
  - padding is optional, but when present it must complete the last quantum
    exactly and nothing may follow it;
  - a last quantum holding a single character is rejected.
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass

from varbin.errors import MalformedInput

_COMMON = b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"
_PAD = ord("=")


@dataclass(frozen=True)
class Alphabet:
    name: str
    extra: bytes  # the two alphabet-specific characters (62, 63)

    @property
    def chars(self) -> frozenset[int]:
        return frozenset(_COMMON + self.extra)


STANDARD = Alphabet(name="base64", extra=b"+/")
URL_SAFE = Alphabet(name="base64url", extra=b"-_")

_URL_TO_STD = bytes.maketrans(URL_SAFE.extra, STANDARD.extra)


def _normalize(raw: bytes, alphabet: Alphabet) -> bytes:
    """Validate `raw` against `alphabet` and return padded standard-alphabet bytes."""
    pad_at = raw.find(b"=")
    body = raw if pad_at < 0 else raw[:pad_at]
    tail = b"" if pad_at < 0 else raw[pad_at:]

    allowed = alphabet.chars
    for i, c in enumerate(body):
        if c not in allowed:
            raise MalformedInput(f"illegal {alphabet.name} character {chr(c)!r} at position {i}")

    for j, c in enumerate(tail):
        if c != _PAD:
            raise MalformedInput(
                f"{alphabet.name}: input continues after padding at position {pad_at + j}"
            )

    rem = len(body) % 4
    if rem == 1:
        raise MalformedInput(
            f"{alphabet.name}: last unit has a single character (input length {len(body)})"
        )
    if tail:
        if rem == 0 or len(tail) != 4 - rem:
            raise MalformedInput(
                f"{alphabet.name}: invalid padding ({len(tail)} '=' after {len(body)} characters)"
            )
    else:
        tail = b"=" * ((4 - rem) % 4)

    if alphabet is URL_SAFE:
        body = body.translate(_URL_TO_STD)
    return body + tail


def encode(data: bytes, alphabet: Alphabet = STANDARD) -> str:
    b = bytes(data)
    if alphabet is URL_SAFE:
        return base64.urlsafe_b64encode(b).decode("ascii")
    return base64.b64encode(b).decode("ascii")


def decode(raw: bytes, alphabet: Alphabet = STANDARD) -> bytes:
    std = _normalize(bytes(raw), alphabet)
    try:
        return base64.b64decode(std, validate=True)
    except binascii.Error as err:  # pragma: no cover - _normalize already rejects these
        raise MalformedInput(f"{alphabet.name}: {err}") from err
