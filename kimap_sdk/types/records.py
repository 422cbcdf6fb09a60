"""
Resolved kimap records.

A Mint or Note log only carries the new label and the *hash* of its parent;
these types hold the label together with the parent's human-readable path
as looked up through a :class:`~kimap_sdk.resolver.ParentResolver`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from ..utils.bytes import to_hex

__all__ = ["Mint", "Note"]


@dataclass(frozen=True)
class Mint:
    """A newly minted kimap entry."""

    name: str
    parent_path: str

    @property
    def full_name(self) -> str:
        return f"{self.name}.{self.parent_path}"

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "parent_path": self.parent_path}


@dataclass(frozen=True)
class Note:
    """A note written on an existing entry. ``data`` may be empty."""

    note: str
    parent_path: str
    data: bytes

    @property
    def full_name(self) -> str:
        return f"{self.note}.{self.parent_path}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "note": self.note,
            "parent_path": self.parent_path,
            "data": to_hex(self.data),
        }
