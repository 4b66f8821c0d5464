"""
Protobuf wire-format writer.

Counterpart of WireReader: encodes varints, tags and length-delimited fields.
"""

from typing import List

from .reader import WIRE_LEN, WIRE_VARINT


class WireWriter:
    """Accumulates protobuf-encoded fields into a byte buffer."""

    def __init__(self):
        self._bb: List[int] = []

    def uvarint(self, v: int) -> None:
        if v < 0:
            raise ValueError(f"uvarint cannot encode negative value {v}")
        while v >= 0x80:
            self._bb.append((v & 0x7F) | 0x80)
            v >>= 7
        self._bb.append(v)

    def tag(self, field_number: int, wire_type: int) -> None:
        self.uvarint((field_number << 3) | wire_type)

    def varint_field(self, field_number: int, v: int) -> None:
        self.tag(field_number, WIRE_VARINT)
        self.uvarint(v)

    def bytes_field(self, field_number: int, v: bytes) -> None:
        self.tag(field_number, WIRE_LEN)
        self.uvarint(len(v))
        self._bb.extend(v)

    def to_bytes(self) -> bytes:
        return bytes(self._bb)
