from __future__ import annotations

"""
HTTP JSON-RPC client (sync).

- Uses httpx.
- Never retries: a failed request raises RpcError straight away and the
  caller decides whether and when to try again.

Example:
    from kimap_sdk.rpc.http import RpcClient
    with RpcClient("https://mainnet.optimism.io") as rpc:
        print(rpc.request("eth_blockNumber"))
"""

import json
import logging
import time
from dataclasses import dataclass, field
from itertools import count
from typing import Any, Dict, Iterator, Mapping, Optional, Sequence, Union

import httpx

from ..errors import JsonRpcCode, RpcError
from ..version import __version__ as SDK_VERSION

log = logging.getLogger(__name__)

JSON = Union[dict, list, str, int, float, bool, None]
Params = Union[Sequence[Any], Mapping[str, Any], None]


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class RpcClient:
    """Synchronous JSON-RPC 2.0 client over HTTP."""

    url: str
    timeout: Optional[float] = 30.0
    headers: Optional[Mapping[str, str]] = None
    transport: Optional[httpx.BaseTransport] = None
    _id_counter: Iterator[int] = field(default_factory=lambda: count(start=_now_ms()))
    _client: Optional[httpx.Client] = field(init=False, default=None)

    def __post_init__(self) -> None:
        merged_headers: Dict[str, str] = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": f"kimap-sdk-python/{SDK_VERSION}",
        }
        if self.headers:
            merged_headers.update(dict(self.headers))
        self._client = httpx.Client(
            timeout=self.timeout,
            headers=merged_headers,
            transport=self.transport,
        )

    # --- context manager -------------------------------------------------

    def __enter__(self) -> "RpcClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        self.close()

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    # --- public API ------------------------------------------------------

    def request(self, method: str, params: Params = None, *, id: Optional[Union[int, str]] = None) -> JSON:
        """Perform a single JSON-RPC request and return `result` or raise RpcError."""
        payload = self._make_payload(method, params, id)
        log.debug("rpc -> %s id=%s", method, payload["id"])
        return self._send_once(method, payload)

    # --- internals -------------------------------------------------------

    def _make_payload(self, method: str, params: Params, id: Optional[Union[int, str]] = None) -> Dict[str, Any]:
        if id is None:
            id = next(self._id_counter)
        if params is None:
            params = []
        elif isinstance(params, Mapping):
            params = dict(params)
        elif isinstance(params, Sequence) and not isinstance(params, (str, bytes, bytearray)):
            params = list(params)
        else:
            # Coerce single param into positional list
            params = [params]  # type: ignore[list-item]
        return {"jsonrpc": "2.0", "id": id, "method": method, "params": params}

    def _send_once(self, method: str, payload: Dict[str, Any]) -> JSON:
        if self._client is None:
            raise RpcError(code=JsonRpcCode.TRANSPORT_ERROR, message="client is closed", method=method)
        body = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
        try:
            r = self._client.post(self.url, content=body)
        except httpx.HTTPError as e:
            raise RpcError(code=JsonRpcCode.TRANSPORT_ERROR, message="Network error", data=str(e), method=method) from e
        # Avoid raise_for_status() to keep a JSON-RPC error body visible below
        try:
            resp = r.json()
        except ValueError as e:
            raise RpcError(
                code=JsonRpcCode.INTERNAL_ERROR,
                message="Non-JSON response from RPC",
                data=f"HTTP {r.status_code}: {r.text[:256]}",
                method=method,
                http_status=r.status_code,
            ) from e

        if not isinstance(resp, dict):
            raise RpcError(
                code=JsonRpcCode.INTERNAL_ERROR,
                message="Invalid JSON-RPC response type",
                data=type(resp).__name__,
                method=method,
                http_status=r.status_code,
            )
        if resp.get("error") is not None:
            err = resp["error"] if isinstance(resp["error"], dict) else {"message": str(resp["error"])}
            log.debug("rpc <- %s error %s", method, err)
            raise RpcError(
                code=err.get("code", JsonRpcCode.INTERNAL_ERROR),
                message=err.get("message", "Unknown error"),
                data=err.get("data"),
                method=method,
                http_status=r.status_code,
            )
        if "result" not in resp:
            raise RpcError(
                code=JsonRpcCode.INTERNAL_ERROR,
                message="Malformed JSON-RPC response",
                data=resp,
                method=method,
                http_status=r.status_code,
            )
        return resp["result"]


__all__ = ["RpcClient"]
