"""
kimap_sdk.resolver
==================

Parent-name resolution.

Logs identify a new entry's parent only by its namehash. Turning that hash
back into a dotted path needs an index of everything minted so far, which
this SDK does not own. Callers inject any object with a matching
``resolve`` method; the decoder only ever talks to that interface.

A ``None`` answer means "unknown at this block height". It is never an
empty path.
"""

from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional, Protocol, Tuple, runtime_checkable

from .utils.bytes import ensure_bytes, to_hex

log = logging.getLogger(__name__)

__all__ = ["ParentResolver", "MappingResolver"]


@runtime_checkable
class ParentResolver(Protocol):
    def resolve(
        self,
        parent_hash: str,
        block: Optional[int] = None,
        timeout: Optional[float] = None,
    ) -> Optional[str]:
        """Return the dotted path whose namehash is ``parent_hash`` as of ``block``."""
        ...


def _normalize_hash(h: str) -> str:
    return to_hex(ensure_bytes(h))


class MappingResolver:
    """
    In-memory resolver backed by a dict of namehash → path.

    Each record may carry the block it first became known at; asking about an
    earlier block returns ``None``, the same as an index that has not seen the
    mint yet. ``timeout`` is accepted for interface compatibility and ignored.
    """

    def __init__(self, paths: Optional[Mapping[str, str]] = None) -> None:
        self._paths: Dict[str, Tuple[str, Optional[int]]] = {}
        for h, path in (paths or {}).items():
            self.record(h, path)

    def record(self, parent_hash: str, path: str, block: Optional[int] = None) -> None:
        self._paths[_normalize_hash(parent_hash)] = (path, block)

    def __len__(self) -> int:
        return len(self._paths)

    def __contains__(self, parent_hash: object) -> bool:
        if not isinstance(parent_hash, str):
            return False
        try:
            return _normalize_hash(parent_hash) in self._paths
        except ValueError:
            return False

    def resolve(
        self,
        parent_hash: str,
        block: Optional[int] = None,
        timeout: Optional[float] = None,
    ) -> Optional[str]:
        try:
            key = _normalize_hash(parent_hash)
        except ValueError:
            log.debug("resolver: not a hex hash: %r", parent_hash)
            return None
        hit = self._paths.get(key)
        if hit is None:
            return None
        path, known_from = hit
        if block is not None and known_from is not None and block < known_from:
            return None
        return path
