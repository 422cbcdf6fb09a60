"""
kimap_sdk.rpc
-------------

Transport to an Ethereum JSON-RPC node.

    from kimap_sdk.rpc import EthProvider
    provider = EthProvider.from_url("https://mainnet.optimism.io", timeout=10)
"""

from .http import RpcClient
from .provider import EthProvider, Provider

__all__ = ["RpcClient", "EthProvider", "Provider"]
