from __future__ import annotations

"""
Core value types: raw logs, log filters and lookup results.

All of them are immutable. `Filter` is built with small combinators that
return a new instance each time, so a base filter can be shared and
specialised freely.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Mapping, NamedTuple, Optional, Tuple, Union

from ..utils.bytes import BytesLike, ensure_bytes, to_hex
from ..utils.hash import keccak256

__all__ = ["Log", "Filter", "Entry", "BlockTag", "TopicValues", "encode_block_tag"]

BlockTag = Union[int, str]
TopicValues = Union[BytesLike, str, Iterable[Union[BytesLike, str]]]

_TOPIC_SLOTS = 4
_BLOCK_TAGS = ("latest", "earliest", "pending", "safe", "finalized")


def _parse_quantity(v: Any) -> Optional[int]:
    if v is None:
        return None
    if isinstance(v, int):
        return v
    s = str(v).strip()
    if s.startswith(("0x", "0X")):
        return int(s, 16)
    return int(s, 10)


def encode_block_tag(v: BlockTag) -> str:
    if isinstance(v, int):
        if v < 0:
            raise ValueError("block number must be non-negative")
        return hex(v)
    if v not in _BLOCK_TAGS:
        raise ValueError(f"unknown block tag: {v!r}")
    return v


# --- Raw log ------------------------------------------------------------------


@dataclass(frozen=True)
class Log:
    """
    An event log as returned by a node.

    Only ``topics``, ``data`` and ``block_number`` matter to the decoder; the
    rest is carried along for callers that want it.
    """

    topics: Tuple[bytes, ...]
    data: bytes = b""
    block_number: Optional[int] = None
    address: Optional[str] = None
    transaction_hash: Optional[str] = None
    log_index: Optional[int] = None

    @classmethod
    def from_rpc(cls, obj: Mapping[str, Any]) -> "Log":
        """
        Build from an ``eth_getLogs`` result object.

        Hex strings and raw bytes are both accepted for ``topics`` and ``data``.
        """
        topics = tuple(ensure_bytes(t) for t in obj.get("topics") or ())
        data = obj.get("data")
        return cls(
            topics=topics,
            data=ensure_bytes(data) if data is not None else b"",
            block_number=_parse_quantity(obj.get("blockNumber")),
            address=obj.get("address"),
            transaction_hash=obj.get("transactionHash"),
            log_index=_parse_quantity(obj.get("logIndex")),
        )


# --- Filter -------------------------------------------------------------------


def _topic_set(values: TopicValues) -> Tuple[bytes, ...]:
    if isinstance(values, (bytes, bytearray, memoryview, str)):
        values = [values]
    out: List[bytes] = []
    for v in values:
        b = ensure_bytes(v)
        if len(b) != 32:
            raise ValueError(f"topic values must be 32 bytes, got {len(b)}")
        if b not in out:
            out.append(b)
    return tuple(out)


@dataclass(frozen=True)
class Filter:
    """
    Declarative log query: contract address, up to four topic slots, block range.

    A topic slot of ``None`` matches anything; otherwise it is the set of
    accepted values (any one may match).
    """

    address: Optional[str] = None
    topics: Tuple[Optional[Tuple[bytes, ...]], ...] = field(
        default_factory=lambda: (None,) * _TOPIC_SLOTS
    )
    from_block: Optional[BlockTag] = None
    to_block: Optional[BlockTag] = None

    @property
    def event_topic(self) -> Optional[bytes]:
        """The event discriminator in slot 0, if exactly one is set."""
        slot = self.topics[0]
        if slot is None or len(slot) != 1:
            return None
        return slot[0]

    def with_address(self, address: str) -> "Filter":
        return replace(self, address=address)

    def with_topic(self, index: int, values: TopicValues) -> "Filter":
        if not 0 <= index < _TOPIC_SLOTS:
            raise IndexError(f"topic index must be in [0, {_TOPIC_SLOTS}), got {index}")
        topics = list(self.topics)
        topics[index] = _topic_set(values)
        return replace(self, topics=tuple(topics))

    def event(self, signature: str) -> "Filter":
        """Match the event with the given canonical signature, e.g. ``Note(bytes32,...)``."""
        return self.with_topic(0, keccak256(signature))

    def topic1(self, values: TopicValues) -> "Filter":
        return self.with_topic(1, values)

    def topic2(self, values: TopicValues) -> "Filter":
        return self.with_topic(2, values)

    def topic3(self, values: TopicValues) -> "Filter":
        return self.with_topic(3, values)

    def with_from_block(self, block: BlockTag) -> "Filter":
        encode_block_tag(block)
        return replace(self, from_block=block)

    def with_to_block(self, block: BlockTag) -> "Filter":
        encode_block_tag(block)
        return replace(self, to_block=block)

    def to_rpc(self) -> Dict[str, Any]:
        """Render as the parameter object of ``eth_getLogs``."""
        out: Dict[str, Any] = {}
        if self.address is not None:
            out["address"] = self.address
        topics: List[Any] = []
        for slot in self.topics:
            if slot is None:
                topics.append(None)
            elif len(slot) == 1:
                topics.append(to_hex(slot[0]))
            else:
                topics.append([to_hex(t) for t in slot])
        while topics and topics[-1] is None:
            topics.pop()
        if topics:
            out["topics"] = topics
        if self.from_block is not None:
            out["fromBlock"] = encode_block_tag(self.from_block)
        if self.to_block is not None:
            out["toBlock"] = encode_block_tag(self.to_block)
        return out


# --- Lookup result ------------------------------------------------------------


class Entry(NamedTuple):
    """Result of a kimap ``get``: token-bound account, owner and the note value (if any)."""

    tba: str
    owner: str
    data: Optional[bytes]
