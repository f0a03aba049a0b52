from __future__ import annotations

import hashlib
from collections.abc import Callable
from dataclasses import dataclass

from varbin.core.xxh64 import xxh64_digest


@dataclass(frozen=True)
class DigestAlgo:
    id: str
    digest_size: int
    fn: Callable[[bytes], bytes]

    def __call__(self, data: bytes) -> bytes:
        return self.fn(bytes(data))


def _hashlib_digest(name: str) -> Callable[[bytes], bytes]:
    def _fn(data: bytes) -> bytes:
        return hashlib.new(name, data).digest()

    _fn.__name__ = f"{name}_digest"
    return _fn


MD5 = DigestAlgo("md5", 16, _hashlib_digest("md5"))
SHA1 = DigestAlgo("sha1", 20, _hashlib_digest("sha1"))
SHA256 = DigestAlgo("sha256", 32, _hashlib_digest("sha256"))
SHA512 = DigestAlgo("sha512", 64, _hashlib_digest("sha512"))
# seed 0; result as 8 big-endian bytes
XXHASH64 = DigestAlgo("xxhash64", 8, lambda data: xxh64_digest(data, 0))

DIGESTS: tuple[DigestAlgo, ...] = (MD5, SHA1, SHA256, SHA512, XXHASH64)
