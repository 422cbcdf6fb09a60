"""
kimap_sdk.response
==================

Immutable builder for IPC response messages.

Each ``with_*`` call returns a new :class:`Response`; nothing is mutated, so a
partially built response can be reused as a template. :meth:`Response.build`
is the one finalize step and fails with :class:`~kimap_sdk.errors.MissingBody`
if the body was never set.

    msg = (
        Response()
        .with_json_body({"name": "x.os"})
        .with_metadata("kimap")
        .build()
    )
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Optional, Tuple, Union

from .errors import MissingBody
from .utils.bytes import to_hex

__all__ = ["Blob", "Capability", "Response", "ResponseMessage"]


@dataclass(frozen=True)
class Blob:
    """Bulk bytes sent alongside the body, with an optional MIME type."""

    data: bytes
    mime: Optional[str] = None


@dataclass(frozen=True)
class Capability:
    """A capability attached to a message: issuing process address plus JSON params."""

    issuer: str
    params: str = "{}"


@dataclass(frozen=True)
class ResponseMessage:
    """A finalized response; ``body`` is always present."""

    body: bytes
    inherit: bool = False
    metadata: Optional[str] = None
    blob: Optional[Blob] = None
    capabilities: Tuple[Capability, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "inherit": self.inherit,
            "body": to_hex(self.body),
            "metadata": self.metadata,
            "blob": None
            if self.blob is None
            else {"mime": self.blob.mime, "data": to_hex(self.blob.data)},
            "capabilities": [{"issuer": c.issuer, "params": c.params} for c in self.capabilities],
        }


@dataclass(frozen=True)
class Response:
    """
    Response under construction.

    ``inherit`` only concerns the blob: when set and no blob is given, the
    blob of the request being answered is passed through.
    """

    inherit: bool = False
    body: Optional[bytes] = None
    metadata: Optional[str] = None
    blob: Optional[Blob] = None
    capabilities: Tuple[Capability, ...] = field(default_factory=tuple)

    def with_inherit(self, inherit: bool) -> "Response":
        return replace(self, inherit=bool(inherit))

    def with_body(self, body: Union[bytes, bytearray, str]) -> "Response":
        """Set the mandatory body. ``str`` is stored as UTF-8."""
        if isinstance(body, str):
            body = body.encode("utf-8")
        return replace(self, body=bytes(body))

    def with_json_body(self, obj: Any) -> "Response":
        """Set the body to the compact JSON encoding of ``obj``. TypeError if not serialisable."""
        return self.with_body(json.dumps(obj, separators=(",", ":"), ensure_ascii=False))

    def with_metadata(self, metadata: str) -> "Response":
        return replace(self, metadata=metadata)

    def with_blob(self, blob: Blob) -> "Response":
        return replace(self, blob=blob)

    def with_blob_bytes(self, data: bytes, mime: Optional[str] = None) -> "Response":
        return self.with_blob(Blob(data=bytes(data), mime=mime))

    def with_capabilities(self, capabilities: Iterable[Capability]) -> "Response":
        return replace(self, capabilities=tuple(capabilities))

    def attach_capability(self, capability: Capability) -> "Response":
        return replace(self, capabilities=self.capabilities + (capability,))

    def build(self) -> ResponseMessage:
        if self.body is None:
            raise MissingBody()
        return ResponseMessage(
            body=self.body,
            inherit=self.inherit,
            metadata=self.metadata,
            blob=self.blob,
            capabilities=self.capabilities,
        )
