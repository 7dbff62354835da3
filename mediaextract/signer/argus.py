"""X-Argus request signature."""

import base64
import hashlib
import os
import struct
from typing import Any, Dict, Mapping, Sequence, Union
from urllib.parse import urlencode

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .padding import pkcs7_pad
from .proto import ProtoBuf
from .simon import simon_encrypt
from .sm3 import body_hash, query_hash

LICENSE_ID = "1611921764"
SDK_VERSION = "v05.00.06-ov-android"
SDK_VERSION_CODE = 167775296

SIGN_KEY = bytes((
    0xAC, 0x1A, 0xDA, 0xAE, 0x95, 0xA7, 0xAF, 0x94,
    0xA5, 0x11, 0x4A, 0xB3, 0xB3, 0xA9, 0x7D, 0xD8,
    0x00, 0x50, 0xAA, 0x0A, 0x39, 0x31, 0x4C, 0x40,
    0x52, 0x8C, 0xAE, 0xC9, 0x52, 0x56, 0xC2, 0x8C,
))
AES_KEY = hashlib.md5(SIGN_KEY[:16]).digest()
AES_IV = hashlib.md5(SIGN_KEY[16:]).digest()

_SM3_OUTPUT = bytes((
    0xFC, 0x78, 0xE0, 0xA9, 0x65, 0x7A, 0x0C, 0x74,
    0x8C, 0xE5, 0x15, 0x59, 0x90, 0x3C, 0xCF, 0x03,
    0x51, 0x0E, 0x51, 0xD3, 0xCF, 0xF2, 0x32, 0xD7,
    0x13, 0x43, 0xE8, 0x8A, 0x32, 0x1C, 0x53, 0x04,
))
_SIMON_KEY = struct.unpack("<4Q", _SM3_OUTPUT)
_HEADER = bytes((0xF2, 0xF7, 0xFC, 0xFF, 0xF2, 0xF7, 0xFC, 0xFF))
_PREFIX = bytes((0xA6, 0x6E, 0xAD, 0x9F, 0x77, 0x01, 0xD0, 0x0C, 0x18))
_SUFFIX = b"ao"

Params = Mapping[str, Union[str, Sequence[str]]]


def _first(params: Params, key: str) -> str:
    value = params.get(key, "")
    if isinstance(value, str):
        return value
    return value[0] if value else ""


def _random_below(limit: int) -> int:
    return int.from_bytes(os.urandom(4), "big") % limit


def _scramble(data: bytes) -> bytes:
    head = data[:8]
    body = bytes(b ^ head[i % 8] for i, b in enumerate(data[8:]))
    return (head + body)[::-1]


def new_argus(params: Params, data: str, unix: int, app_id: str) -> str:
    """Build and encrypt the X-Argus bean for a request."""
    query = urlencode(sorted(params.items()), doseq=True)
    bean: Dict[int, Any] = {
        1: 0x20200929 << 1,
        2: 2,
        3: _random_below(0x7FFFFFFF),
        4: app_id,
        5: _first(params, "device_id"),
        6: LICENSE_ID,
        7: _first(params, "app_version"),
        8: SDK_VERSION,
        9: SDK_VERSION_CODE,
        10: bytes(8),
        12: unix << 1,
        13: body_hash(data),
        14: query_hash(query),
        16: "",
        20: "none",
        21: 738,
        25: 2,
    }
    return encrypt_argus(bean)


def encrypt_argus(bean: Mapping[Any, Any]) -> str:
    """Encode ``bean`` as protobuf and wrap it in the Simon and AES layers."""
    payload = pkcs7_pad(ProtoBuf(dict(bean)).to_bytes(), 16)

    encrypted = bytearray()
    for offset in range(0, len(payload), 16):
        block = struct.unpack_from("<2Q", payload, offset)
        encrypted += struct.pack("<2Q", *simon_encrypt(block, _SIMON_KEY, 0))

    wrapped = _PREFIX + _scramble(_HEADER + bytes(encrypted)) + _SUFFIX

    encryptor = Cipher(algorithms.AES(AES_KEY), modes.CBC(AES_IV)).encryptor()
    ciphertext = encryptor.update(pkcs7_pad(wrapped, 16)) + encryptor.finalize()
    return base64.b64encode(b"\xf2\x81" + ciphertext).decode()