"""X-Gorgon request signature."""

import hashlib
from dataclasses import dataclass
from typing import Dict

_KEY = bytes((
    0xDF, 0x77, 0xB9, 0x40, 0xB9, 0x9B, 0x84, 0x83,
    0xD1, 0xB9, 0xCB, 0xD1, 0xF7, 0xC2, 0xB9, 0x85,
    0xC3, 0xD0, 0xFB, 0xC3,
))
_LENGTH = 0x14
_PREFIX = "0404b0d30000"


def rbit(num: int) -> int:
    """Rebuild the low byte of ``num`` from its eight bits, most significant first."""
    result = 0
    for i, bit in enumerate(f"{num & 0xFF:08b}"):
        if bit == "1":
            result |= 1 << (7 - i)
    return result


def swap_nibbles(num: int) -> int:
    """Swap the high and low nibble of the low byte of ``num``."""
    byte = num & 0xFF
    return ((byte & 0x0F) << 4) | (byte >> 4)


@dataclass
class Gorgon:
    """Builds the X-Gorgon, X-Khronos and X-Ss-Req-Ticket values."""

    params: str
    unix: int
    data: str = ""
    cookies: str = ""

    def hash(self, data: str) -> str:
        """Hex MD5 of ``data``."""
        return hashlib.md5(data.encode()).hexdigest()

    def base_string(self) -> str:
        """Concatenated hashes of params, body and cookies; zeros stand in for empty parts."""
        parts = [self.hash(self.params)]
        parts.append(self.hash(self.data) if self.data else "0" * 32)
        parts.append(self.hash(self.cookies) if self.cookies else "0" * 32)
        return "".join(parts)

    def value(self) -> Dict[str, str]:
        return self.encrypt(self.base_string())

    def encrypt(self, data: str) -> Dict[str, str]:
        """Derive the signature values from a 96-character base string."""
        params = []
        for start in (0, 32, 64):
            chunk = data[start:start + 8]
            params.extend(int(chunk[j:j + 2], 16) for j in range(0, 8, 2))
        params.extend((0x0, 0x6, 0xB, 0x1C))
        stamp = self.unix & 0xFFFFFFFF
        params.extend(stamp.to_bytes(4, "big"))

        values = [value ^ key for value, key in zip(params, _KEY)]
        for i in range(_LENGTH):
            mixed = swap_nibbles(values[i]) ^ values[(i + 1) % _LENGTH]
            values[i] = ((rbit(mixed) ^ 0xFFFFFFFF) ^ _LENGTH) & 0xFF

        return {
            "ticket": str(self.unix * 1000),
            "khronos": str(self.unix),
            "gorgon": _PREFIX + "".join(f"{value & 0xFF:02x}" for value in values),
        }