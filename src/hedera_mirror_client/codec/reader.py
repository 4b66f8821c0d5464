"""
Protobuf wire-format reader.

Decodes the primitive protobuf wire encoding: base-128 varints, tags and
length-delimited fields. Only what the key structure codec needs.
"""

import builtins
from typing import Iterator, Tuple, Union


WIRE_VARINT = 0
WIRE_FIXED64 = 1
WIRE_LEN = 2
WIRE_FIXED32 = 5

FieldValue = Union[int, builtins.bytes]


class WireFormatError(ValueError):
    """Malformed protobuf wire data."""
    pass


class WireReader:
    """
    Sequential reader over a protobuf-encoded buffer.

    Raises WireFormatError on truncated or malformed input.
    """

    def __init__(self, buf: builtins.bytes):
        self._buf = builtins.bytes(buf)
        self._off = 0

    @property
    def eof(self) -> bool:
        return self._off >= len(self._buf)

    def u8(self) -> int:
        if self._off >= len(self._buf):
            raise WireFormatError("Buffer overflow: attempting to read beyond end")
        val = self._buf[self._off]
        self._off += 1
        return val

    def uvarint(self) -> int:
        """
        Read an unsigned base-128 varint.

        Protobuf varints are at most 10 bytes long.
        """
        x = 0
        s = 0
        for _ in range(10):
            b = self.u8()
            if b < 0x80:
                return x | (b << s)
            x |= (b & 0x7F) << s
            s += 7
        raise WireFormatError("Varint exceeds 10 bytes")

    def bytes(self, n: int) -> builtins.bytes:
        if n < 0 or self._off + n > len(self._buf):
            raise WireFormatError(f"Buffer overflow: attempting to read {n} bytes beyond end")
        out = self._buf[self._off : self._off + n]
        self._off += n
        return out

    def len_prefixed_bytes(self) -> builtins.bytes:
        return self.bytes(self.uvarint())

    def tag(self) -> Tuple[int, int]:
        """Read a field tag and return (field_number, wire_type)."""
        key = self.uvarint()
        field_number, wire_type = key >> 3, key & 0x07
        if field_number == 0:
            raise WireFormatError("Invalid field number 0")
        return field_number, wire_type

    def value(self, wire_type: int) -> FieldValue:
        """Read a field value of the given wire type."""
        if wire_type == WIRE_VARINT:
            return self.uvarint()
        if wire_type == WIRE_LEN:
            return self.len_prefixed_bytes()
        if wire_type == WIRE_FIXED64:
            return int.from_bytes(self.bytes(8), "little")
        if wire_type == WIRE_FIXED32:
            return int.from_bytes(self.bytes(4), "little")
        raise WireFormatError(f"Unsupported wire type {wire_type}")

    def fields(self) -> Iterator[Tuple[int, int, FieldValue]]:
        """Iterate (field_number, wire_type, value) until the buffer is consumed."""
        while not self.eof:
            field_number, wire_type = self.tag()
            yield field_number, wire_type, self.value(wire_type)
