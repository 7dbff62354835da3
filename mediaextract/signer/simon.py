"""Simon 128/256 block cipher working on pairs of 64-bit words."""

from typing import Sequence, Tuple

_MASK64 = 0xFFFFFFFFFFFFFFFF
_ROUNDS = 72
_Z_CONSTANT = 0x3DC94C3A046D678B


def _bit(value: int, pos: int) -> int:
    return (value >> pos) & 1


def _rotl(value: int, count: int) -> int:
    count %= 64
    return ((value << count) | (value >> (64 - count))) & _MASK64


def _rotr(value: int, count: int) -> int:
    count %= 64
    return ((value >> count) | (value << (64 - count))) & _MASK64


def expand_key(key: Sequence[int]) -> list:
    """Expand a four-word key into the 72 round keys."""
    expanded = [word & _MASK64 for word in key[:4]]
    for i in range(4, _ROUNDS):
        tmp = _rotr(expanded[i - 1], 3) ^ expanded[i - 3]
        tmp ^= _rotr(tmp, 1)
        word = ~expanded[i - 4] & _MASK64
        word ^= tmp
        word ^= _bit(_Z_CONSTANT, (i - 4) % 62)
        word ^= 3
        expanded.append(word)
    return expanded


def _round_function(x: int, c: int) -> int:
    if c == 1:
        return _rotl(x, 1)
    return _rotl(x, 1) & _rotl(x, 8)


def simon_encrypt(pt: Sequence[int], key: Sequence[int], c: int = 0) -> Tuple[int, int]:
    """Encrypt the two-word block ``pt``."""
    round_keys = expand_key(key)
    xi, xi1 = pt[0] & _MASK64, pt[1] & _MASK64
    for round_key in round_keys:
        xi, xi1 = xi1, xi ^ _round_function(xi1, c) ^ _rotl(xi1, 2) ^ round_key
    return xi, xi1


def simon_decrypt(ct: Sequence[int], key: Sequence[int], c: int = 0) -> Tuple[int, int]:
    """Decrypt the two-word block ``ct``."""
    round_keys = expand_key(key)
    xi, xi1 = ct[0] & _MASK64, ct[1] & _MASK64
    for round_key in reversed(round_keys):
        xi, xi1 = xi1 ^ _round_function(xi, c) ^ _rotl(xi, 2) ^ round_key, xi
    return xi, xi1