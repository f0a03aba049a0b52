from __future__ import annotations

from varbin.errors import MalformedInput

# byte value -> nibble, -1 for non-hex
_NIBBLE: tuple[int, ...] = tuple(
    (b - 0x30)
    if 0x30 <= b <= 0x39
    else (b - 0x61 + 10)
    if 0x61 <= b <= 0x66
    else (b - 0x41 + 10)
    if 0x41 <= b <= 0x46
    else -1
    for b in range(256)
)


def _nibble(b: int) -> int:
    v = _NIBBLE[b]
    if v < 0:
        raise MalformedInput(f"invalid hex character: {chr(b)!r}")
    return v


def encode_hex(data: bytes) -> str:
    """Uppercase hex, two digits per byte, no separators."""
    return bytes(data).hex().upper()


def decode_hex(raw: bytes) -> bytes:
    """Case-insensitive hex decode (odd length or non-hex digit -> MalformedInput)."""
    b = bytes(raw)
    if len(b) % 2 != 0:
        raise MalformedInput(f"invalid input length {len(b)}")

    out = bytearray(len(b) // 2)
    for i in range(0, len(b), 2):
        out[i // 2] = (_nibble(b[i]) << 4) | _nibble(b[i + 1])
    return bytes(out)
