"""
kimap_sdk.kimap
===============

Read-only client for the kimap contract.

Example
-------
    from kimap_sdk import Kimap

    kimap = Kimap.default("https://mainnet.optimism.io", timeout=10)
    tba, owner, data = kimap.get("~ip.x.os")

    mints = kimap.mint_filter().with_from_block(KIMAP_FIRST_BLOCK)
    notes = kimap.notes_filter(["~ip", "~port"])

The client holds only an immutable provider handle and contract address, so
one instance may be shared between threads as long as the provider allows it.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from eth_utils import is_hex_address, to_checksum_address

from .config import KimapConfig
from .constants import KIMAP_ADDRESS, KIMAP_CHAIN_ID
from .contract import MINT_SIGNATURE, NOTE_SIGNATURE, decode_get_return, encode_get_call
from .errors import InvalidParams
from .names import labelhash, namehash
from .rpc.provider import EthProvider, Provider
from .types.core import Entry, Filter
from .utils.bytes import bytes32_from_hex, to_hex

log = logging.getLogger(__name__)

__all__ = ["Kimap"]


class Kimap:
    """
    Helper for reading from the kimap.

    Parameters
    ----------
    provider : anything implementing :class:`~kimap_sdk.rpc.provider.Provider`.
    address : kimap contract address; defaults to the Optimism deployment.
    """

    def __init__(self, provider: Provider, address: str = KIMAP_ADDRESS) -> None:
        if not isinstance(address, str) or not is_hex_address(address):
            raise ValueError(f"Invalid kimap address: {address!r}")
        self._provider = provider
        self._address = to_checksum_address(address)

    @classmethod
    def default(cls, rpc_url: str, timeout: Optional[float] = None) -> "Kimap":
        """Client for the default deployment and chain id, reading through ``rpc_url``."""
        return cls(EthProvider.from_url(rpc_url, chain_id=KIMAP_CHAIN_ID, timeout=timeout))

    @classmethod
    def from_config(cls, cfg: KimapConfig) -> "Kimap":
        provider = EthProvider.from_url(cfg.rpc_url, chain_id=cfg.chain_id, timeout=cfg.timeout)
        return cls(provider, cfg.address)

    # ------------------------------------------------------------------ Accessors

    @property
    def provider(self) -> Provider:
        return self._provider

    @property
    def address(self) -> str:
        """The in-use kimap contract address (EIP-55 checksummed)."""
        return self._address

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"Kimap(address={self._address!r})"

    # ------------------------------------------------------------------ Lookups

    def get(self, path: str) -> Entry:
        """
        Get an entry by its dotted name.

        Returns ``(tba, owner, data)``; ``data`` is ``None`` unless the entry
        is a note with a non-empty value.
        """
        return self._get(namehash(path))

    def get_hash(self, entryhash: str) -> Entry:
        """
        Get an entry by its namehash (hex, optionally 0x-prefixed).

        Raises InvalidParams, before any network call, unless ``entryhash`` is
        exactly 32 bytes of hex.
        """
        try:
            raw = bytes32_from_hex(entryhash)
        except (TypeError, ValueError) as e:
            raise InvalidParams(f"entryhash must be 32 bytes of hex: {e}") from e
        return self._get(raw)

    def _get(self, entryhash: bytes) -> Entry:
        tx = {"to": self._address, "data": to_hex(encode_get_call(entryhash))}
        log.debug("kimap get %s", to_hex(entryhash))
        res = self._provider.call(tx, None)
        tba, owner, value = decode_get_return(res)
        return Entry(tba=tba, owner=owner, data=value if value else None)

    # ------------------------------------------------------------------ Filters

    def mint_filter(self) -> Filter:
        """Filter for all mint events."""
        return Filter().with_address(self._address).event(MINT_SIGNATURE)

    def note_filter(self) -> Filter:
        """Filter for all note events."""
        return Filter().with_address(self._address).event(NOTE_SIGNATURE)

    def notes_filter(self, notes: Sequence[str]) -> Filter:
        """
        Filter for specific notes: the labels are hashed into the topic3 slot.

            kimap.notes_filter(["~note1", "~note2"])
        """
        if isinstance(notes, str):
            raise TypeError("notes must be a sequence of labels, not a single string")
        if not notes:
            raise ValueError("notes must name at least one label")
        return self.note_filter().topic3([labelhash(n) for n in notes])
