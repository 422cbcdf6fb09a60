"""
kimap_sdk.contract
==================

The slice of the kimap contract ABI this SDK reads:

    event Mint(bytes32 indexed parenthash, bytes32 indexed childhash,
               bytes indexed labelhash, bytes name);
    event Note(bytes32 indexed parenthash, bytes32 indexed notehash,
               bytes indexed labelhash, bytes note, bytes data);

    function get(bytes32 entryhash) external view returns (
        address tokenBoundAccount, address tokenOwner, bytes memory data);

Encoding and decoding is delegated to ``eth_abi``; event selectors and the
function selector are Keccak-256 of the canonical signatures.
"""

from __future__ import annotations

import logging
from typing import Tuple

from eth_abi import decode as abi_decode
from eth_abi import encode as abi_encode
from eth_abi.exceptions import DecodingError

from .errors import DecodeError, RpcMalformedResponse
from .utils.hash import keccak256

log = logging.getLogger(__name__)

__all__ = [
    "MINT_SIGNATURE",
    "NOTE_SIGNATURE",
    "GET_SIGNATURE",
    "MINT_TOPIC",
    "NOTE_TOPIC",
    "GET_SELECTOR",
    "encode_get_call",
    "decode_get_return",
    "decode_mint_data",
    "decode_note_data",
]

MINT_SIGNATURE = "Mint(bytes32,bytes32,bytes,bytes)"
NOTE_SIGNATURE = "Note(bytes32,bytes32,bytes,bytes,bytes)"
GET_SIGNATURE = "get(bytes32)"

#: first topic of every Mint log
MINT_TOPIC: bytes = keccak256(MINT_SIGNATURE)
#: first topic of every Note log
NOTE_TOPIC: bytes = keccak256(NOTE_SIGNATURE)
#: 4-byte function selector of ``get(bytes32)``
GET_SELECTOR: bytes = keccak256(GET_SIGNATURE)[:4]

_GET_RETURNS = ("address", "address", "bytes")


def encode_get_call(entryhash: bytes) -> bytes:
    """Calldata for ``get(entryhash)``."""
    if len(entryhash) != 32:
        raise ValueError(f"entryhash must be 32 bytes, got {len(entryhash)}")
    return GET_SELECTOR + abi_encode(["bytes32"], [bytes(entryhash)])


def decode_get_return(data: bytes) -> Tuple[str, str, bytes]:
    """
    Decode the ``(tokenBoundAccount, tokenOwner, data)`` return tuple.

    Addresses come back EIP-55 checksummed. Raises RpcMalformedResponse if the
    bytes do not decode.
    """
    try:
        tba, owner, value = abi_decode(list(_GET_RETURNS), bytes(data))
    except (DecodingError, ValueError) as e:
        log.debug("get() return did not decode: %s", e)
        raise RpcMalformedResponse(f"cannot decode get() return: {e}") from e
    return tba, owner, bytes(value)


def decode_mint_data(data: bytes) -> bytes:
    """Non-indexed Mint payload: the raw ``name`` bytes."""
    try:
        (name,) = abi_decode(["bytes"], bytes(data))
    except (DecodingError, ValueError) as e:
        raise DecodeError(f"cannot decode Mint data: {e}") from e
    return bytes(name)


def decode_note_data(data: bytes) -> Tuple[bytes, bytes]:
    """Non-indexed Note payload: the raw ``note`` label bytes and the ``data`` bytes."""
    try:
        note, value = abi_decode(["bytes", "bytes"], bytes(data))
    except (DecodingError, ValueError) as e:
        raise DecodeError(f"cannot decode Note data: {e}") from e
    return bytes(note), bytes(value)
