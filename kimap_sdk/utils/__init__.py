"""Small byte and hashing helpers shared across the SDK."""

from .bytes import BytesLike, bytes32_from_hex, ensure_bytes, from_hex, to_hex
from .hash import keccak256, keccak256_hex

__all__ = [
    "BytesLike",
    "bytes32_from_hex",
    "ensure_bytes",
    "from_hex",
    "to_hex",
    "keccak256",
    "keccak256_hex",
]
