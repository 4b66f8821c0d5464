"""
Key access evaluation.

Answers "could this public key ever be an authorized signer somewhere in this
key structure": true iff the key appears as a simple key anywhere in the
tree. Threshold counts are not consulted, so a match inside a threshold key
counts even if the key alone could not meet the threshold.
"""

from __future__ import annotations
import logging
from typing import List, Tuple, Union

from ..codec.key_codec import (
    MAX_KEY_DEPTH,
    KeyList,
    KeyStructure,
    MalformedKey,
    SimpleKey,
    ThresholdKey,
    decode_key,
)
from ..crypto.public_key import PublicKey
from ..runtime.errors import KeyDepthExceeded, PublicKeyError

logger = logging.getLogger(__name__)

CandidateKey = Union[PublicKey, bytes, bytearray, str]


class KeyAccessEvaluator:
    """
    Depth-first membership check of a public key in a key structure.

    The walk uses an explicit stack, visits children in order and stops at
    the first matching simple key.
    """

    def __init__(self, max_depth: int = MAX_KEY_DEPTH):
        self.max_depth = max_depth

    def has_access(self, serialized_key: bytes, candidate: CandidateKey) -> bool:
        """
        Check whether a candidate key appears in a serialized key structure.

        Args:
            serialized_key: Protobuf-encoded ``Key`` message
            candidate: Public key to look for

        Returns:
            True if the candidate is a simple key anywhere in the structure

        Raises:
            KeyDecodeError: If the top-level structure cannot be parsed
            PublicKeyError: If the candidate is not a valid public key
        """
        candidate_key = PublicKey.coerce(candidate)
        structure = decode_key(serialized_key, self.max_depth)
        return self.evaluate(structure, candidate_key)

    def evaluate(self, key: KeyStructure, candidate: PublicKey) -> bool:
        """Evaluate an already-decoded key structure."""
        target = candidate.to_string()
        stack: List[Tuple[KeyStructure, int]] = [(key, 0)]

        while stack:
            node, depth = stack.pop()
            if depth > self.max_depth:
                raise KeyDepthExceeded(self.max_depth)

            if isinstance(node, SimpleKey):
                if self._matches(node, target):
                    return True
            elif isinstance(node, (KeyList, ThresholdKey)):
                # reversed so the first child is popped first
                stack.extend((child, depth + 1) for child in reversed(node.keys))
            elif isinstance(node, MalformedKey):
                logger.debug(f"Skipping malformed key entry at depth {depth}: {node.error}")

        return False

    @staticmethod
    def _matches(key: SimpleKey, target: str) -> bool:
        try:
            decoded = PublicKey.from_bytes(key.key_bytes)
        except PublicKeyError as e:
            logger.debug(f"Error comparing {key.key_type.value} key: {e}")
            return False
        return decoded.to_string() == target


_default_evaluator = KeyAccessEvaluator()


def has_access(serialized_key: bytes, candidate: CandidateKey) -> bool:
    """Check a candidate key against a serialized key structure with default limits."""
    return _default_evaluator.has_access(serialized_key, candidate)
