"""
SDK configuration: contract address, chain id, RPC endpoint and timeout.

Defaults are the deployment constants in :mod:`kimap_sdk.constants`.
Environment variables are only consulted when :meth:`KimapConfig.from_env`
is called; nothing is read at import time.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from eth_utils import is_hex_address

from .constants import KIMAP_ADDRESS, KIMAP_CHAIN_ID, KIMAP_FIRST_BLOCK

_DEFAULT_RPC = "http://127.0.0.1:8545"

_HEX_RE = re.compile(r"^0x[0-9a-fA-F]+$")


def _parse_int(val: Any, default: int) -> int:
    """
    Accepts int, decimal str, or 0x-hex str and returns int.
    """
    if val is None or val == "":
        return int(default)
    if isinstance(val, int):
        return val
    s = str(val).strip()
    if _HEX_RE.match(s):
        return int(s, 16)
    return int(s, 10)


def _parse_timeout(val: Any) -> Optional[float]:
    if val is None or val == "":
        return None
    t = float(val)
    if t <= 0:
        raise ValueError(f"timeout must be positive, got {val!r}")
    return t


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name)
    return v if v is not None else default


def _ensure_scheme(url: Optional[str], allowed: tuple[str, ...]) -> Optional[str]:
    if not url:
        return url
    lower = url.lower()
    if not any(lower.startswith(f"{sch}://") for sch in allowed):
        raise ValueError(f"URL must start with {allowed}, got: {url!r}")
    return url


def _ensure_address(address: str) -> str:
    if not is_hex_address(address):
        raise ValueError(f"not a 20-byte hex address: {address!r}")
    return address


@dataclass(slots=True)
class KimapConfig:
    address: str = KIMAP_ADDRESS
    chain_id: int = KIMAP_CHAIN_ID
    first_block: int = KIMAP_FIRST_BLOCK
    rpc_url: str = field(default_factory=lambda: _DEFAULT_RPC)
    # seconds; None lets the transport block per its own defaults
    timeout: Optional[float] = None

    @classmethod
    def from_env(cls, prefix: str = "KIMAP_") -> "KimapConfig":
        """
        Create config from environment variables:

        KIMAP_ADDRESS       (0x-hex contract address)
        KIMAP_CHAIN_ID      (int or 0x-hex)
        KIMAP_FIRST_BLOCK   (int or 0x-hex)
        KIMAP_RPC_URL       (http/https)
        KIMAP_TIMEOUT       (float seconds)
        """
        address = _env(f"{prefix}ADDRESS", KIMAP_ADDRESS) or KIMAP_ADDRESS
        rpc = _env(f"{prefix}RPC_URL", _DEFAULT_RPC) or _DEFAULT_RPC
        _ensure_address(address)
        _ensure_scheme(rpc, ("http", "https"))
        return cls(
            address=address,
            chain_id=_parse_int(_env(f"{prefix}CHAIN_ID"), KIMAP_CHAIN_ID),
            first_block=_parse_int(_env(f"{prefix}FIRST_BLOCK"), KIMAP_FIRST_BLOCK),
            rpc_url=rpc,
            timeout=_parse_timeout(_env(f"{prefix}TIMEOUT")),
        )

    @classmethod
    def with_overrides(
        cls, base: Optional["KimapConfig"] = None, **overrides: Any
    ) -> "KimapConfig":
        """
        Build from an existing config (or the defaults) plus keyword overrides.
        Unknown keys and ``None`` values are ignored.
        """
        base = base or cls()
        data = base.to_dict()
        data.update({k: v for k, v in overrides.items() if k in data and v is not None})
        if "chain_id" in overrides:
            data["chain_id"] = _parse_int(data["chain_id"], base.chain_id)
        if "first_block" in overrides:
            data["first_block"] = _parse_int(data["first_block"], base.first_block)
        if "timeout" in overrides:
            data["timeout"] = _parse_timeout(data["timeout"])
        _ensure_address(data["address"])
        _ensure_scheme(data["rpc_url"], ("http", "https"))
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "address": self.address,
            "chain_id": int(self.chain_id),
            "first_block": int(self.first_block),
            "rpc_url": self.rpc_url,
            "timeout": self.timeout,
        }


__all__ = ["KimapConfig"]
