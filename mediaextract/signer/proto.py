"""Minimal schema-less protobuf encoder and decoder."""

import enum
import re
import struct
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class ProtoError(Exception):
    """Raised when protobuf data cannot be encoded or decoded."""


class FieldType(enum.IntEnum):
    VARINT = 0
    INT64 = 1
    STRING = 2
    GROUPSTART = 3
    GROUPEND = 4
    INT32 = 5
    ERROR1 = 6
    ERROR2 = 7

    def __str__(self) -> str:
        return self.name


_INT_TYPES = (FieldType.INT32, FieldType.INT64, FieldType.VARINT)
_VALUELESS_TYPES = (
    FieldType.GROUPSTART,
    FieldType.GROUPEND,
    FieldType.ERROR1,
    FieldType.ERROR2,
)


@dataclass
class ProtoField:
    idx: int
    type: FieldType
    val: Any = None

    def is_ascii_str(self) -> bool:
        """True when the value is bytes made only of printable ASCII."""
        if not isinstance(self.val, (bytes, bytearray)):
            return False
        return all(0x20 <= b <= 0x7E for b in self.val)

    def __str__(self) -> str:
        prefix = f"{self.idx}({self.type})"
        if self.type == FieldType.STRING and isinstance(self.val, (bytes, bytearray)):
            if self.is_ascii_str():
                return f'{prefix}: "{bytes(self.val).decode("ascii")}"'
            return f'{prefix}: h"{bytes(self.val).hex()}"'
        return f"{prefix}: {self.val}"


def _parse_index(key: str) -> int:
    match = _LEADING_INT.match(key)
    return int(match.group(1)) if match else 0


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class _Reader:
    def __init__(self, data: bytes) -> None:
        self.data = data
        self.pos = 0

    def remains(self, length: int) -> bool:
        return self.pos + length <= len(self.data)

    def read(self, length: int) -> bytes:
        if not self.remains(length):
            raise ProtoError("buffer overrun")
        chunk = self.data[self.pos:self.pos + length]
        self.pos += length
        return chunk

    def read_varint(self) -> int:
        value = 0
        shift = 0
        while True:
            byte = self.read(1)[0]
            value |= (byte & 0x7F) << shift
            if byte < 0x80:
                return value & _MASK64
            shift += 7

    def read_int32(self) -> int:
        return struct.unpack("<I", self.read(4))[0]

    def read_int64(self) -> int:
        return struct.unpack("<Q", self.read(8))[0]

    def read_string(self) -> bytes:
        return self.read(self.read_varint())


def _varint(value: int) -> bytes:
    value &= _MASK64
    out = bytearray()
    while value > 0x7F:
        out.append((value & 0x7F) | 0x80)
        value >>= 7
    out.append(value)
    return bytes(out)


class ProtoBuf:
    """An ordered list of protobuf fields, built from bytes or a dict."""

    def __init__(self, data: Any = None) -> None:
        self.fields: List[ProtoField] = []
        if data is None:
            return
        if isinstance(data, (bytes, bytearray)):
            if data:
                self._parse_bytes(bytes(data))
        elif isinstance(data, dict):
            self._parse_dict(data)
        else:
            raise ProtoError(f"unsupported type {type(data).__name__} to protobuf")

    def __len__(self) -> int:
        return len(self.fields)

    def __iter__(self):
        return iter(self.fields)

    def _parse_bytes(self, data: bytes) -> None:
        reader = _Reader(data)
        while reader.remains(1):
            try:
                key = reader.read_varint()
            except ProtoError:
                break
            if key == 0:
                break
            field_type = FieldType(key & 0x7)
            idx = key >> 3
            if idx == 0:
                break
            if field_type == FieldType.INT32:
                val: Any = reader.read_int32()
            elif field_type == FieldType.INT64:
                val = reader.read_int64()
            elif field_type == FieldType.VARINT:
                val = reader.read_varint()
            elif field_type == FieldType.STRING:
                val = reader.read_string()
            else:
                val = None
            self.fields.append(ProtoField(idx, field_type, val))

    def to_bytes(self) -> bytes:
        """Encode all fields in order."""
        out = bytearray()
        for field in self.fields:
            field_type = FieldType(field.type & 7)
            out += _varint((field.idx << 3) | field_type)
            val = field.val
            if field_type == FieldType.INT32:
                if not _is_int(val):
                    raise ProtoError(f"invalid value type {type(val).__name__} for INT32 field")
                out += struct.pack("<I", val & _MASK32)
            elif field_type == FieldType.INT64:
                if not _is_int(val):
                    raise ProtoError(f"invalid value type {type(val).__name__} for INT64 field")
                out += struct.pack("<Q", val & _MASK64)
            elif field_type == FieldType.VARINT:
                if not _is_int(val):
                    raise ProtoError(f"invalid value type {type(val).__name__} for VARINT field")
                out += _varint(val)
            elif field_type == FieldType.STRING:
                if not isinstance(val, (bytes, bytearray)):
                    raise ProtoError(f"invalid value type {type(val).__name__} for STRING field")
                out += _varint(len(val))
                out += val
        return bytes(out)

    def get(self, idx: int) -> Optional[ProtoField]:
        """Return the first field with index ``idx``, or None."""
        return next((field for field in self.fields if field.idx == idx), None)

    def get_int(self, idx: int) -> int:
        field = self.get(idx)
        if field is None:
            return 0
        if field.type in _INT_TYPES and _is_int(field.val):
            val = field.val
            if field.type != FieldType.INT32 and val >= 1 << 63:
                val -= 1 << 64
            return val
        if field.type in _INT_TYPES:
            raise ProtoError(f"GetInt({idx}) -> {field.type}")
        raise ProtoError(f"GetInt({idx}) -> {field.type} (unsupported type)")

    def get_bytes(self, idx: int) -> Optional[bytes]:
        field = self.get(idx)
        if field is None:
            return None
        if field.type == FieldType.STRING and isinstance(field.val, (bytes, bytearray)):
            return bytes(field.val)
        raise ProtoError(f"GetBytes({idx}) -> {field.type}")

    def get_utf8(self, idx: int) -> str:
        raw = self.get_bytes(idx)
        if raw is None:
            return ""
        return raw.decode("utf-8", errors="replace")

    def get_protobuf(self, idx: int) -> Optional["ProtoBuf"]:
        raw = self.get_bytes(idx)
        if raw is None:
            return None
        return ProtoBuf(raw)

    def put(self, field: ProtoField) -> None:
        self.fields.append(field)

    def put_int32(self, idx: int, val: int) -> None:
        self.put(ProtoField(idx, FieldType.INT32, val & _MASK32))

    def put_int64(self, idx: int, val: int) -> None:
        self.put(ProtoField(idx, FieldType.INT64, val & _MASK64))

    def put_varint(self, idx: int, val: int) -> None:
        self.put(ProtoField(idx, FieldType.VARINT, val & _MASK64))

    def put_bytes(self, idx: int, val: bytes) -> None:
        self.put(ProtoField(idx, FieldType.STRING, bytes(val)))

    def put_utf8(self, idx: int, val: str) -> None:
        self.put(ProtoField(idx, FieldType.STRING, val.encode()))

    def put_protobuf(self, idx: int, val: "ProtoBuf") -> None:
        self.put(ProtoField(idx, FieldType.STRING, val.to_bytes()))

    def _parse_dict(self, data: Dict[Any, Any]) -> None:
        for key, val in data.items():
            idx = key if _is_int(key) else _parse_index(str(key))
            self._add_value(idx, val)

    def _add_value(self, idx: int, val: Any) -> None:
        if _is_int(val):
            self.put_varint(idx, val)
        elif isinstance(val, str):
            self.put_utf8(idx, val)
        elif isinstance(val, (bytes, bytearray)):
            self.put_bytes(idx, val)
        elif isinstance(val, dict):
            self.put_protobuf(idx, ProtoBuf(val))
        else:
            raise ProtoError(f"unsupported value type {type(val).__name__} for protobuf")

    def to_dict(self, out: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Fill the template ``out`` in place from the fields, by value type.

        Returns None when a nested message named in the template is absent.
        """
        for key, val in list(out.items()):
            idx = _parse_index(str(key))
            if _is_int(val):
                out[key] = self.get_int(idx)
            elif isinstance(val, str):
                out[key] = self.get_utf8(idx)
            elif isinstance(val, (bytes, bytearray)):
                out[key] = self.get_bytes(idx)
            elif isinstance(val, dict):
                nested = self.get_protobuf(idx)
                if nested is None:
                    return None
                nested.to_dict(val)
            else:
                raise ProtoError(
                    f"unsupported value type {type(val).__name__} for protobuf dict"
                )
        return out