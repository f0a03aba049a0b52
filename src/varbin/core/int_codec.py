from __future__ import annotations

import struct

from varbin.errors import InvalidLength, OutOfRange

INT64_BYTES = 8
INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1

_BE_I64 = struct.Struct(">q")


def encode_int64_be(value: int) -> bytes:
    """64-bit two's complement, most significant byte first."""
    v = int(value)
    if not (INT64_MIN <= v <= INT64_MAX):
        raise OutOfRange(f"value out of signed 64-bit range: {v}")
    return _BE_I64.pack(v)


def decode_int64_be(raw: bytes) -> int:
    b = bytes(raw)
    if len(b) != INT64_BYTES:
        raise InvalidLength(actual=len(b), expected=INT64_BYTES)
    return _BE_I64.unpack(b)[0]
