"""SM3 hash function and the short digests derived from it."""

import binascii
import struct

_MASK32 = 0xFFFFFFFF

_IV = (
    0x7380166F, 0x4914B2B9, 0x172442D7, 0xDA8A0600,
    0xA96F30BC, 0x163138AA, 0xE38DEE4D, 0xB0FB0E4E,
)

_TJ = tuple(0x79CC4519 if j < 16 else 0x7A879D8A for j in range(64))


def _rotl(value: int, count: int) -> int:
    count %= 32
    return ((value << count) | (value >> (32 - count))) & _MASK32


def _ff(x: int, y: int, z: int, j: int) -> int:
    if j < 16:
        return x ^ y ^ z
    return (x & y) | (x & z) | (y & z)


def _gg(x: int, y: int, z: int, j: int) -> int:
    if j < 16:
        return x ^ y ^ z
    return (x & y) | ((~x & _MASK32) & z)


def _p0(x: int) -> int:
    return x ^ _rotl(x, 9) ^ _rotl(x, 17)


def _p1(x: int) -> int:
    return x ^ _rotl(x, 15) ^ _rotl(x, 23)


def _compress(vi: tuple, block: bytes) -> tuple:
    w = list(struct.unpack(">16I", block))
    for j in range(16, 68):
        w.append(
            _p1(w[j - 16] ^ w[j - 9] ^ _rotl(w[j - 3], 15))
            ^ _rotl(w[j - 13], 7)
            ^ w[j - 6]
        )
    w1 = [w[j] ^ w[j + 4] for j in range(64)]

    a, b, c, d, e, f, g, h = vi
    for j in range(64):
        a12 = _rotl(a, 12)
        ss1 = _rotl((a12 + e + _rotl(_TJ[j], j)) & _MASK32, 7)
        ss2 = ss1 ^ a12
        tt1 = (_ff(a, b, c, j) + d + ss2 + w1[j]) & _MASK32
        tt2 = (_gg(e, f, g, j) + h + ss1 + w[j]) & _MASK32
        d = c
        c = _rotl(b, 9)
        b = a
        a = tt1
        h = g
        g = _rotl(f, 19)
        f = e
        e = _p0(tt2)

    return tuple(x ^ y for x, y in zip((a, b, c, d, e, f, g, h), vi))


def sm3_hash(msg: bytes) -> bytes:
    """Return the 32-byte SM3 digest of ``msg``."""
    msg = bytes(msg)
    padded = bytearray(msg)
    padded.append(0x80)
    while len(padded) % 64 != 56:
        padded.append(0)
    padded += struct.pack(">Q", (len(msg) * 8) & 0xFFFFFFFFFFFFFFFF)

    state = _IV
    for offset in range(0, len(padded), 64):
        state = _compress(state, bytes(padded[offset:offset + 64]))
    return struct.pack(">8I", *state)


def _empty_hash() -> bytes:
    return sm3_hash(bytes(16))[:6]


def body_hash(stub: str) -> bytes:
    """Six-byte digest of a hex-encoded body stub; zero input when empty or invalid."""
    if not stub:
        return _empty_hash()
    try:
        stub_bytes = binascii.unhexlify(stub)
    except (binascii.Error, ValueError):
        return _empty_hash()
    return sm3_hash(stub_bytes)[:6]


def query_hash(query: str) -> bytes:
    """Six-byte digest of an encoded query string; zero input when empty."""
    if not query:
        return _empty_hash()
    return sm3_hash(query.encode())[:6]