"""
kimap_sdk.rpc.provider
======================

The chain-call transport the query client reads through.

Anything with ``call(tx, block)`` returning raw bytes satisfies
:class:`Provider`; :class:`EthProvider` is the stock implementation over an
Ethereum JSON-RPC node (``eth_call`` / ``eth_getLogs``). Transport failures
surface as :class:`~kimap_sdk.errors.RpcError` and are never retried here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Protocol, runtime_checkable

from ..constants import KIMAP_CHAIN_ID
from ..errors import RpcMalformedResponse
from ..types.core import BlockTag, Filter, Log, encode_block_tag
from ..utils.bytes import from_hex
from .http import RpcClient

log = logging.getLogger(__name__)

__all__ = ["Provider", "EthProvider"]


@runtime_checkable
class Provider(Protocol):
    def call(self, tx: Mapping[str, Any], block: Optional[BlockTag] = None) -> bytes:
        """Execute a read-only call and return the raw return bytes."""
        ...


@dataclass
class EthProvider:
    """
    JSON-RPC backed provider bound to one chain.

    ``chain_id`` is informational unless :meth:`check_chain` is called; the
    node at ``rpc.url`` decides which chain is actually read.
    """

    rpc: RpcClient
    chain_id: int = KIMAP_CHAIN_ID

    @classmethod
    def from_url(
        cls,
        url: str,
        chain_id: int = KIMAP_CHAIN_ID,
        timeout: Optional[float] = 30.0,
    ) -> "EthProvider":
        return cls(rpc=RpcClient(url, timeout=timeout), chain_id=int(chain_id))

    def close(self) -> None:
        self.rpc.close()

    def __enter__(self) -> "EthProvider":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        self.close()

    # ------------------------------------------------------------------ reads

    def call(self, tx: Mapping[str, Any], block: Optional[BlockTag] = None) -> bytes:
        res = self.rpc.request("eth_call", [dict(tx), encode_block_tag(block if block is not None else "latest")])
        if not isinstance(res, str):
            raise RpcMalformedResponse(f"eth_call returned {type(res).__name__}, expected hex string")
        try:
            return from_hex(res)
        except ValueError as e:
            raise RpcMalformedResponse(f"eth_call returned invalid hex: {e}") from e

    def get_logs(self, flt: Filter) -> List[Log]:
        res = self.rpc.request("eth_getLogs", [flt.to_rpc()])
        if not isinstance(res, list):
            raise RpcMalformedResponse(f"eth_getLogs returned {type(res).__name__}, expected list")
        try:
            logs = [Log.from_rpc(item) for item in res]
        except (AttributeError, TypeError, ValueError) as e:
            raise RpcMalformedResponse(f"eth_getLogs returned a malformed log: {e}") from e
        log.debug("eth_getLogs returned %d logs", len(logs))
        return logs

    def get_chain_id(self) -> int:
        res = self.rpc.request("eth_chainId")
        try:
            return int(res, 16) if isinstance(res, str) else int(res)  # type: ignore[arg-type]
        except (TypeError, ValueError) as e:
            raise RpcMalformedResponse(f"eth_chainId returned {res!r}") from e

    def check_chain(self) -> None:
        """Raise RpcMalformedResponse if the node reports a different chain id."""
        got = self.get_chain_id()
        if got != self.chain_id:
            raise RpcMalformedResponse(f"node is on chain {got}, expected {self.chain_id}")
