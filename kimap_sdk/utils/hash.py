"""
Keccak-256 (Ethereum-style, pre-NIST padding).

CPython's hashlib exposes NIST SHA3 but not the original Keccak padding that
the EVM uses, so the digest comes from pycryptodome.
"""

from __future__ import annotations

from Crypto.Hash import keccak as _keccak

from .bytes import BytesLike, to_hex


def keccak256(data: BytesLike | str) -> bytes:
    """
    Return the Keccak-256 digest of *data*.

    ``str`` input is hashed as its UTF-8 encoding (labels, event signatures),
    not parsed as hex.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    h = _keccak.new(digest_bits=256)
    h.update(bytes(data))
    return h.digest()


def keccak256_hex(data: BytesLike | str, *, prefix: bool = True) -> str:
    """Return hex string of Keccak-256 digest (0x-prefixed by default)."""
    return to_hex(keccak256(data), prefix=prefix)


__all__ = ["keccak256", "keccak256_hex"]
