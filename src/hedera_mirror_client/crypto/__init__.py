"""
Cryptographic primitives: public key parsing and canonical forms.
"""

from .public_key import PublicKey, KeyType, ED25519_DER_PREFIX, SECP256K1_DER_PREFIX

__all__ = [
    "PublicKey",
    "KeyType",
    "ED25519_DER_PREFIX",
    "SECP256K1_DER_PREFIX",
]
