"""
Typed error classes for the kimap SDK.

Two families mirror the two halves of the library:

- ``EthError`` is raised by the query client and the transport
  (bad identifiers, malformed node responses, JSON-RPC failures).
- ``DecodeLogError`` is raised by the log decoder when a log is for the wrong
  event, carries an invalid label, cannot be decoded, or has a parent the
  resolver does not know yet.

Everything derives from ``KimapError`` so callers can catch the whole SDK in
one clause.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Optional

__all__ = [
    "KimapError",
    "EthError",
    "InvalidParams",
    "RpcMalformedResponse",
    "RpcError",
    "JsonRpcCode",
    "DecodeLogError",
    "UnexpectedTopic",
    "InvalidName",
    "DecodeError",
    "UnresolvedParent",
    "MissingBody",
]


class KimapError(Exception):
    """Base class for all SDK errors."""


# --- Chain calls -------------------------------------------------------------


class EthError(KimapError):
    """Base class for errors raised while reading from the chain."""


@dataclass(slots=True)
class InvalidParams(EthError):
    """An argument could not be turned into a valid request (e.g. a bad bytes32)."""

    message: str = "invalid parameters"

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"InvalidParams: {self.message}"


@dataclass(slots=True)
class RpcMalformedResponse(EthError):
    """The node answered, but the payload could not be decoded."""

    message: str = "malformed response"

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"RpcMalformedResponse: {self.message}"


class JsonRpcCode(IntEnum):
    # JSON-RPC 2.0 spec
    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603

    SERVER_ERROR = -32000
    EXECUTION_REVERTED = 3

    # client side
    TRANSPORT_ERROR = -32098


@dataclass(slots=True)
class RpcError(EthError):
    """Raised when a JSON-RPC call fails at the transport or returns an error object."""

    code: int
    message: str
    data: Optional[Any] = None
    method: Optional[str] = None
    http_status: Optional[int] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        parts = [f"RPC[{self.method or '-'}] code={self.code} msg={self.message!r}"]
        if self.http_status is not None:
            parts.append(f"http={self.http_status}")
        if self.data is not None:
            parts.append(f"data={self.data!r}")
        return " ".join(parts)

    @property
    def code_enum(self) -> Optional[JsonRpcCode]:
        try:
            return JsonRpcCode(self.code)
        except ValueError:
            return None


# --- Log decoding ------------------------------------------------------------


class DecodeLogError(KimapError):
    """Base class for errors raised by :mod:`kimap_sdk.logs`."""


@dataclass(slots=True)
class UnexpectedTopic(DecodeLogError):
    """The log's first topic is not the event being decoded (``None`` if it had no topics)."""

    topic: Optional[bytes]

    def __str__(self) -> str:  # pragma: no cover - trivial
        shown = "0x" + self.topic.hex() if self.topic is not None else "<none>"
        return f"UnexpectedTopic: {shown}"


@dataclass(slots=True)
class InvalidName(DecodeLogError):
    """The label carried by the log does not pass :func:`kimap_sdk.names.valid_name`."""

    name: str

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"InvalidName: {self.name!r}"


@dataclass(slots=True)
class DecodeError(DecodeLogError):
    """The log payload (or its topics) does not have the expected shape."""

    message: str

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"DecodeError: {self.message}"


@dataclass(slots=True)
class UnresolvedParent(DecodeLogError):
    """
    The parent of ``name`` is not known to the resolver at the log's block.

    Usually transient: retry once the namespace index has caught up.
    """

    name: str

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"UnresolvedParent: {self.name!r}"


# --- Messages ----------------------------------------------------------------


@dataclass(slots=True)
class MissingBody(KimapError):
    """A response was finalized without ever setting its body."""

    message: str = "response body was never set"

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"MissingBody: {self.message}"
