"""XXH64 (xxHash, 64-bit variant), pure Python.

Follows the reference algorithm (https://github.com/Cyan4973/xxHash,
doc/xxhash_spec.md): 32-byte stripes over four accumulators, then 8/4/1-byte
tails, then the avalanche. Lanes are read little-endian; all arithmetic is
modulo 2**64.
"""

from __future__ import annotations

import struct

P1 = 0x9E3779B185EBCA87
P2 = 0xC2B2AE3D27D4EB4F
P3 = 0x165667B19E3779F9
P4 = 0x85EBCA77C2B2AE63
P5 = 0x27D4EB2F165667C5

_M64 = 0xFFFFFFFFFFFFFFFF

_STRIPE = struct.Struct("<4Q")
_U64 = struct.Struct("<Q")
_U32 = struct.Struct("<I")


def _rotl(x: int, r: int) -> int:
    return ((x << r) | (x >> (64 - r))) & _M64


def _round(acc: int, lane: int) -> int:
    acc = (acc + lane * P2) & _M64
    acc = _rotl(acc, 31)
    return (acc * P1) & _M64


def _merge(acc: int, val: int) -> int:
    acc ^= _round(0, val)
    return (acc * P1 + P4) & _M64


def xxh64_intdigest(data: bytes, seed: int = 0) -> int:
    """Return XXH64(data, seed) as an unsigned 64-bit int."""
    b = bytes(data)
    n = len(b)
    seed &= _M64
    i = 0

    if n >= 32:
        v1 = (seed + P1 + P2) & _M64
        v2 = (seed + P2) & _M64
        v3 = seed
        v4 = (seed - P1) & _M64
        limit = n - 32
        while i <= limit:
            l1, l2, l3, l4 = _STRIPE.unpack_from(b, i)
            v1 = _round(v1, l1)
            v2 = _round(v2, l2)
            v3 = _round(v3, l3)
            v4 = _round(v4, l4)
            i += 32
        h = (_rotl(v1, 1) + _rotl(v2, 7) + _rotl(v3, 12) + _rotl(v4, 18)) & _M64
        h = _merge(h, v1)
        h = _merge(h, v2)
        h = _merge(h, v3)
        h = _merge(h, v4)
    else:
        h = (seed + P5) & _M64

    h = (h + n) & _M64

    while i + 8 <= n:
        (lane,) = _U64.unpack_from(b, i)
        h ^= _round(0, lane)
        h = (_rotl(h, 27) * P1 + P4) & _M64
        i += 8

    if i + 4 <= n:
        (lane,) = _U32.unpack_from(b, i)
        h ^= (lane * P1) & _M64
        h = (_rotl(h, 23) * P2 + P3) & _M64
        i += 4

    while i < n:
        h ^= (b[i] * P5) & _M64
        h = (_rotl(h, 11) * P1) & _M64
        i += 1

    # avalanche
    h ^= h >> 33
    h = (h * P2) & _M64
    h ^= h >> 29
    h = (h * P3) & _M64
    h ^= h >> 32
    return h


def xxh64_digest(data: bytes, seed: int = 0) -> bytes:
    """8-byte big-endian digest (canonical XXH64 representation)."""
    return xxh64_intdigest(data, seed).to_bytes(8, "big")
