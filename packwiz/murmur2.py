"""MurmurHash2 as used for CurseForge file fingerprints."""

from __future__ import annotations

_MASK = 0xFFFFFFFF
_M = 0x5BD1E995
_R = 24
_WHITESPACE = b"\t\n\r "


def murmurhash2(data: bytes, seed: int) -> int:
    """Compute the 32-bit MurmurHash2 of ``data`` with ``seed``."""
    length = len(data)
    h = (seed ^ length) & _MASK
    full = length - (length & 3)
    for offset in range(0, full, 4):
        k = int.from_bytes(data[offset:offset + 4], "little")
        k = (k * _M) & _MASK
        k ^= k >> _R
        k = (k * _M) & _MASK
        h = (h * _M) & _MASK
        h ^= k
    tail = data[full:]
    remainder = length & 3
    if remainder >= 3:
        h ^= tail[2] << 16
    if remainder >= 2:
        h ^= tail[1] << 8
    if remainder >= 1:
        h ^= tail[0]
        h = (h * _M) & _MASK
    h ^= h >> 13
    h = (h * _M) & _MASK
    h ^= h >> 15
    return h


def strip_whitespace(data: bytes) -> bytes:
    """Remove tab, newline, carriage return and space bytes."""
    return bytes(b for b in data if b not in _WHITESPACE)


def fingerprint(data: bytes) -> int:
    """Return the CurseForge fingerprint of a file's contents."""
    return murmurhash2(strip_whitespace(data), 1)


class Murmur2CF:
    """Hash object computing CurseForge fingerprints.

    The hash is seeded with the input length, so data is buffered until
    the digest is requested.
    """

    name = "murmur2"
    digest_size = 4
    block_size = 4

    def __init__(self, data: bytes = b"") -> None:
        self._buffer = bytearray()
        if data:
            self.update(data)

    def update(self, data: bytes) -> None:
        self._buffer.extend(strip_whitespace(data))

    def intdigest(self) -> int:
        return murmurhash2(bytes(self._buffer), 1)

    def digest(self) -> bytes:
        return self.intdigest().to_bytes(4, "big")

    def hexdigest(self) -> str:
        return self.digest().hex()

    def reset(self) -> None:
        self._buffer = bytearray()