"""X-Ladon request signature."""

import base64
import hashlib
import os
import struct
from collections import deque
from typing import Optional

from .padding import padding_size

_MASK64 = 0xFFFFFFFFFFFFFFFF
_ROUNDS = 0x22


def _ror64(value: int, count: int) -> int:
    count %= 64
    return ((value >> count) | (value << (64 - count))) & _MASK64


def _round_keys(md5hex: bytes) -> list:
    table = bytearray(32)
    seed = bytes(md5hex[:32])
    table[:len(seed)] = seed
    words = struct.unpack("<4Q", table)

    keys = [words[0]]
    b0, b8 = words[0], words[1]
    pending = deque(words[2:])
    for i in range(_ROUNDS):
        x8 = (_ror64(b8, 8) + b0) & _MASK64
        x8 ^= i
        pending.append(x8)
        x8 ^= _ror64(b0, 61)
        keys.append(x8)
        b0 = x8
        b8 = pending.popleft()
    return keys[:_ROUNDS]


def _encrypt_block(round_keys: list, block: bytes) -> bytes:
    data0, data1 = struct.unpack("<2Q", block)
    for key in round_keys:
        data1 = (key ^ ((data0 + _ror64(data1, 8)) & _MASK64)) & _MASK64
        data0 = data1 ^ _ror64(data0, 61)
    return struct.pack("<2Q", data0, data1)


def encrypt_ladon(md5hex: bytes, data: bytes, size: int) -> bytes:
    """Encrypt the first ``size`` bytes of ``data`` with a key schedule from ``md5hex``."""
    round_keys = _round_keys(md5hex)
    new_size = padding_size(size)

    buffer = bytearray(new_size)
    chunk = bytes(data[:size])
    buffer[:len(chunk)] = chunk
    pad = 16 - (size % 16)
    if size + pad <= new_size:
        buffer[size:size + pad] = bytes([pad]) * pad

    return b"".join(
        _encrypt_block(round_keys, bytes(buffer[offset:offset + 16]))
        for offset in range(0, new_size, 16)
    )


def new_ladon(
    unix: int,
    license_id: str,
    app_id: str,
    random_bytes: Optional[bytes] = None,
) -> str:
    """Return the base64 X-Ladon value; four random bytes are drawn when none are given."""
    if random_bytes is None:
        random_bytes = os.urandom(4)
    random_bytes = bytes(random_bytes)
    if len(random_bytes) != 4:
        raise ValueError("random_bytes must be exactly 4 bytes")

    data = f"{unix}-{license_id}-{app_id}".encode()
    md5hex = hashlib.md5(random_bytes + app_id.encode()).hexdigest().encode()
    encrypted = encrypt_ladon(md5hex, data, len(data))
    return base64.b64encode(random_bytes + encrypted).decode()