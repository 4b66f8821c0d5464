"""
Public keys as they appear in ledger key structures.

Supports Ed25519 and ECDSA secp256k1 keys in raw and DER encodings. The
canonical string form is the hex of the DER encoding, which is how the
ledger SDKs print public keys, so two keys are equal iff their canonical
strings are equal.
"""

from __future__ import annotations
from enum import Enum
from typing import Union

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

from ..runtime.errors import PublicKeyError


ED25519_DER_PREFIX = bytes.fromhex("302a300506032b6570032100")
SECP256K1_DER_PREFIX = bytes.fromhex("302d300706052b8104000a032200")


class KeyType(str, Enum):
    """Public key algorithms."""
    ED25519 = "ED25519"
    ECDSA_SECP256K1 = "ECDSA_SECP256K1"


class PublicKey:
    """
    Ledger public key.

    Holds the raw key bytes: 32 bytes for Ed25519, 33 bytes (compressed
    point) for secp256k1.
    """

    def __init__(self, key_type: KeyType, raw: bytes):
        self.key_type = key_type
        self._raw = bytes(raw)
        self._validate()

    def _validate(self) -> None:
        try:
            if self.key_type is KeyType.ED25519:
                if len(self._raw) != 32:
                    raise ValueError(f"Ed25519 public key must be 32 bytes, got {len(self._raw)}")
                Ed25519PublicKey.from_public_bytes(self._raw)
            else:
                if len(self._raw) != 33:
                    raise ValueError(f"Compressed secp256k1 key must be 33 bytes, got {len(self._raw)}")
                ec.EllipticCurvePublicKey.from_encoded_point(ec.SECP256K1(), self._raw)
        except ValueError as e:
            raise PublicKeyError(f"Invalid {self.key_type.value} public key: {e}", cause=e)

    @classmethod
    def from_bytes(cls, data: bytes) -> PublicKey:
        """
        Parse a public key from raw or DER bytes.

        32 raw bytes are read as Ed25519 and 33 raw bytes as a compressed
        secp256k1 point.
        """
        data = bytes(data)
        if data.startswith(ED25519_DER_PREFIX) and len(data) == len(ED25519_DER_PREFIX) + 32:
            return cls(KeyType.ED25519, data[len(ED25519_DER_PREFIX):])
        if data.startswith(SECP256K1_DER_PREFIX) and len(data) == len(SECP256K1_DER_PREFIX) + 33:
            return cls(KeyType.ECDSA_SECP256K1, data[len(SECP256K1_DER_PREFIX):])
        if len(data) == 32:
            return cls(KeyType.ED25519, data)
        if len(data) == 33:
            return cls(KeyType.ECDSA_SECP256K1, data)
        if len(data) == 65 and data[0] == 0x04:
            return cls._from_uncompressed_point(data)
        if data[:1] == b"\x30":
            return cls._from_spki(data)
        raise PublicKeyError(f"Unsupported public key encoding ({len(data)} bytes)")

    @classmethod
    def _from_uncompressed_point(cls, data: bytes) -> PublicKey:
        try:
            point = ec.EllipticCurvePublicKey.from_encoded_point(ec.SECP256K1(), data)
        except ValueError as e:
            raise PublicKeyError(f"Invalid secp256k1 point: {e}", cause=e)
        return cls(KeyType.ECDSA_SECP256K1, point.public_bytes(
            serialization.Encoding.X962, serialization.PublicFormat.CompressedPoint))

    @classmethod
    def _from_spki(cls, data: bytes) -> PublicKey:
        try:
            loaded = serialization.load_der_public_key(data)
        except ValueError as e:
            raise PublicKeyError(f"Invalid DER public key: {e}", cause=e)
        if isinstance(loaded, Ed25519PublicKey):
            return cls(KeyType.ED25519, loaded.public_bytes(
                serialization.Encoding.Raw, serialization.PublicFormat.Raw))
        if isinstance(loaded, ec.EllipticCurvePublicKey) and isinstance(loaded.curve, ec.SECP256K1):
            return cls(KeyType.ECDSA_SECP256K1, loaded.public_bytes(
                serialization.Encoding.X962, serialization.PublicFormat.CompressedPoint))
        raise PublicKeyError("Unsupported public key algorithm")

    @classmethod
    def from_string(cls, text: str) -> PublicKey:
        """Parse a hex string, raw or DER, with or without a ``0x`` prefix."""
        text = text.strip()
        if text.lower().startswith("0x"):
            text = text[2:]
        try:
            data = bytes.fromhex(text)
        except ValueError as e:
            raise PublicKeyError(f"Invalid hex string: {e}", cause=e)
        return cls.from_bytes(data)

    @classmethod
    def coerce(cls, value: Union[PublicKey, bytes, bytearray, str]) -> PublicKey:
        if isinstance(value, PublicKey):
            return value
        if isinstance(value, (bytes, bytearray)):
            return cls.from_bytes(bytes(value))
        if isinstance(value, str):
            return cls.from_string(value)
        raise PublicKeyError(f"Cannot interpret {type(value).__name__} as a public key")

    def to_bytes_raw(self) -> bytes:
        return self._raw

    def to_bytes_der(self) -> bytes:
        prefix = ED25519_DER_PREFIX if self.key_type is KeyType.ED25519 else SECP256K1_DER_PREFIX
        return prefix + self._raw

    def to_string(self) -> str:
        """Canonical form: hex of the DER encoding."""
        return self.to_bytes_der().hex()

    def to_string_raw(self) -> str:
        return self._raw.hex()

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"PublicKey({self.key_type.value}, {self.to_string_raw()})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PublicKey):
            return self.to_string() == other.to_string()
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.to_string())
