"""
Deployment constants for kimap on Optimism.

These are fixed, process-wide values. Override them per client through
constructor parameters or :class:`kimap_sdk.config.KimapConfig`, never by
mutating this module.
"""

from __future__ import annotations

from typing import Final

#: kimap deployment address on optimism
KIMAP_ADDRESS: Final[str] = "0x7290Aa297818d0b9660B2871Bb87f85a3f9B4559"

#: optimism chain id
KIMAP_CHAIN_ID: Final[int] = 10

#: first block of the kimap deployment; indexers start backfilling here
KIMAP_FIRST_BLOCK: Final[int] = 114_923_786

#: the root hash of kimap, an all-zero bytes32
KIMAP_ROOT_HASH: Final[str] = "0x" + "00" * 32

__all__ = [
    "KIMAP_ADDRESS",
    "KIMAP_CHAIN_ID",
    "KIMAP_FIRST_BLOCK",
    "KIMAP_ROOT_HASH",
]
