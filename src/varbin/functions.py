"""Scalar functions over varbinary values.

Every function is pure and unary. Decoders that the host registers for both
VARCHAR and VARBINARY input have one ``*_varchar`` and one ``*_varbinary``
adapter; both delegate to the same core codec, so equal byte content always
gives byte-identical output. The untyped ``from_*`` helpers pick the adapter
from the Python value type.
"""

from __future__ import annotations

from varbin.core import base64_codec
from varbin.core.digests import MD5, SHA1, SHA256, SHA512, XXHASH64
from varbin.core.hex_codec import decode_hex, encode_hex
from varbin.core.int_codec import decode_int64_be, encode_int64_be
from varbin.errors import UsageError
from varbin.sql_types import SqlType, sql_type_of


def _varchar_bytes(text: str) -> bytes:
    return text.encode("utf-8")


def _pick(value: str | bytes) -> bytes:
    t = sql_type_of(value)
    if t is SqlType.VARCHAR:
        return _varchar_bytes(value)  # type: ignore[arg-type]
    if t is SqlType.VARBINARY:
        return bytes(value)  # type: ignore[arg-type]
    raise UsageError(f"expected varchar or varbinary, got {t.value}")


# ---------
# length
# ---------


def length(data: bytes) -> int:
    return len(data)


# ---------
# base64
# ---------


def to_base64(data: bytes) -> str:
    return base64_codec.encode(data, base64_codec.STANDARD)


def from_base64_varbinary(data: bytes) -> bytes:
    return base64_codec.decode(data, base64_codec.STANDARD)


def from_base64_varchar(text: str) -> bytes:
    return from_base64_varbinary(_varchar_bytes(text))


def from_base64(value: str | bytes) -> bytes:
    return from_base64_varbinary(_pick(value))


def to_base64url(data: bytes) -> str:
    return base64_codec.encode(data, base64_codec.URL_SAFE)


def from_base64url_varbinary(data: bytes) -> bytes:
    return base64_codec.decode(data, base64_codec.URL_SAFE)


def from_base64url_varchar(text: str) -> bytes:
    return from_base64url_varbinary(_varchar_bytes(text))


def from_base64url(value: str | bytes) -> bytes:
    return from_base64url_varbinary(_pick(value))


# ---------
# hex
# ---------


def to_hex(data: bytes) -> str:
    return encode_hex(data)


def from_hex_varbinary(data: bytes) -> bytes:
    return decode_hex(data)


def from_hex_varchar(text: str) -> bytes:
    return from_hex_varbinary(_varchar_bytes(text))


def from_hex(value: str | bytes) -> bytes:
    return from_hex_varbinary(_pick(value))


# ---------
# bigint <-> 8-byte big endian
# ---------


def to_big_endian_64(value: int) -> bytes:
    if isinstance(value, bool):
        raise UsageError("to_big_endian_64: bool is not a bigint")
    return encode_int64_be(value)


def from_big_endian_64(data: bytes) -> int:
    return decode_int64_be(data)


# ---------
# digests
# ---------


def md5(data: bytes) -> bytes:
    return MD5(data)


def sha1(data: bytes) -> bytes:
    return SHA1(data)


def sha256(data: bytes) -> bytes:
    return SHA256(data)


def sha512(data: bytes) -> bytes:
    return SHA512(data)


def xxhash64(data: bytes) -> bytes:
    return XXHASH64(data)
