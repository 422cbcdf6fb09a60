"""
kimap_sdk.names
===============

Label grammar and the namehash algorithm.

A kimap *name* is a dotted path read child-first: in ``"foo.bar.os"`` the
label ``foo`` is the newest entry and ``os`` sits directly under the root.
Each label is either an ordinary entry (``[a-z0-9-]+``) or a note
(``~`` followed by ``[a-z0-9-]+``).

The contract itself does not enforce the grammar, so anything read back from
chain data must go through :func:`valid_name` before it is trusted.
"""

from __future__ import annotations

import string

from .utils.bytes import to_hex
from .utils.hash import keccak256

__all__ = [
    "NOTE_PREFIX",
    "valid_name",
    "namehash",
    "namehash_hex",
    "labelhash",
]

NOTE_PREFIX = "~"

_ALLOWED = frozenset(string.ascii_lowercase + string.digits + "-")

_ROOT = b"\x00" * 32


def valid_name(name: str, note: bool = False) -> bool:
    """
    Return True if ``name`` is a valid single kimap label.

    This checks one label, not a full dotted path. With ``note=True`` the
    label must start with ``~`` and have at least one more character.
    """
    if not name.isascii():
        return False
    if note:
        return (
            len(name) >= 2
            and name[0] == NOTE_PREFIX
            and all(c in _ALLOWED for c in name[1:])
        )
    return len(name) >= 1 and all(c in _ALLOWED for c in name)


def labelhash(label: str) -> bytes:
    """Keccak-256 of the label's UTF-8 bytes (the third topic of Mint/Note logs)."""
    return keccak256(label.encode("utf-8"))


def namehash(name: str) -> bytes:
    """
    Produce the 32-byte kimap identifier for a dotted name.

    Labels are folded root-first:
    ``node = keccak256(node || keccak256(label))`` starting from 32 zero bytes.
    The empty name is the root and hashes to all zeroes.
    """
    node = _ROOT
    if not name:
        return node
    for label in reversed(name.split(".")):
        node = keccak256(node + labelhash(label))
    return node


def namehash_hex(name: str) -> str:
    """:func:`namehash` as a 0x-prefixed lowercase hex string."""
    return to_hex(namehash(name))
