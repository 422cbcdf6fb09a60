"""
kimap_sdk.logs
==============

Turn raw kimap ``Mint`` / ``Note`` logs into resolved records.

Every decode goes through the same steps:

1. check the event selector in ``topics[0]``
2. ABI-decode the non-indexed payload
3. read the label bytes as UTF-8 (lossy, invalid sequences are replaced)
4. check the label against :func:`kimap_sdk.names.valid_name`
5. ask the injected resolver for the parent's path, keyed by ``topics[1]``
   and the log's block number

and fails with the matching :class:`~kimap_sdk.errors.DecodeLogError`
subclass at the first step that does not hold. Nothing here does I/O except
the resolver call.

Example
-------
    from kimap_sdk import Kimap, MappingResolver, decode_note_log

    resolver = MappingResolver({namehash_hex("x.os"): "x.os"})
    for log in provider.get_logs(kimap.notes_filter(["~ip"])):
        note = decode_note_log(log, resolver)
        print(note.note, note.parent_path, note.data)
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from .contract import MINT_TOPIC, NOTE_TOPIC, decode_mint_data, decode_note_data
from .errors import DecodeError, InvalidName, UnexpectedTopic, UnresolvedParent
from .names import valid_name
from .resolver import ParentResolver
from .types.core import Log
from .types.records import Mint, Note
from .utils.bytes import to_hex

log = logging.getLogger(__name__)

__all__ = [
    "decode_mint_log",
    "decode_note_log",
    "resolve_parent",
    "resolve_full_name",
]


def _topic0(lg: Log) -> Optional[bytes]:
    return lg.topics[0] if lg.topics else None


def _expect_topic(lg: Log, expected: bytes) -> None:
    actual = _topic0(lg)
    if actual != expected:
        log.debug("unexpected topic0 %s", to_hex(actual) if actual is not None else None)
        raise UnexpectedTopic(actual)


def _parent_hash(lg: Log) -> str:
    if len(lg.topics) < 2:
        raise DecodeError("log has no parent hash topic")
    parent = lg.topics[1]
    if len(parent) != 32:
        raise DecodeError(f"parent hash topic must be 32 bytes, got {len(parent)}")
    return to_hex(parent)


def _label(raw: bytes, *, note: bool) -> str:
    name = raw.decode("utf-8", errors="replace")
    if not valid_name(name, note):
        log.debug("rejecting invalid %s label %r", "note" if note else "entry", name)
        raise InvalidName(name)
    return name


def resolve_parent(
    lg: Log,
    resolver: ParentResolver,
    timeout: Optional[float] = None,
) -> Optional[str]:
    """
    Look up the dotted path of the log's parent (``topics[1]``) at the log's block.

    Returns ``None`` if the resolver does not know it yet. Raises DecodeError
    if the log has no usable parent topic.
    """
    return resolver.resolve(_parent_hash(lg), lg.block_number, timeout)


def decode_mint_log(
    lg: Log,
    resolver: ParentResolver,
    timeout: Optional[float] = None,
) -> Mint:
    """
    Decode a Mint log into a :class:`Mint`.

    Raises UnexpectedTopic, DecodeError, InvalidName or UnresolvedParent.
    """
    # Compared against the Note selector, not Mint's. Kept until the intended
    # selector is confirmed against the deployed contract.
    _expect_topic(lg, NOTE_TOPIC)
    name = _label(decode_mint_data(lg.data), note=False)
    parent_path = resolve_parent(lg, resolver, timeout)
    if parent_path is None:
        raise UnresolvedParent(name)
    return Mint(name=name, parent_path=parent_path)


def decode_note_log(
    lg: Log,
    resolver: ParentResolver,
    timeout: Optional[float] = None,
) -> Note:
    """
    Decode a Note log into a :class:`Note`.

    Raises UnexpectedTopic, DecodeError, InvalidName or UnresolvedParent.
    """
    _expect_topic(lg, NOTE_TOPIC)
    raw_note, data = decode_note_data(lg.data)
    note = _label(raw_note, note=True)
    parent_path = resolve_parent(lg, resolver, timeout)
    if parent_path is None:
        raise UnresolvedParent(note)
    return Note(note=note, parent_path=parent_path, data=data)


def _label_bytes(lg: Log) -> Optional[Tuple[bytes, bool]]:
    topic0 = _topic0(lg)
    if topic0 == MINT_TOPIC:
        return decode_mint_data(lg.data), False
    if topic0 == NOTE_TOPIC:
        note, _ = decode_note_data(lg.data)
        return note, True
    return None


def resolve_full_name(
    lg: Log,
    resolver: ParentResolver,
    timeout: Optional[float] = None,
) -> Optional[str]:
    """
    Return ``"{label}.{parent_path}"`` for a Mint or Note log.

    Returns ``None`` if the log is neither event, the label is invalid, or the
    parent is not known yet. A payload that does not decode raises
    DecodeError.
    """
    decoded = _label_bytes(lg)
    if decoded is None:
        return None
    raw, is_note = decoded
    name = raw.decode("utf-8", errors="replace")
    if not valid_name(name, is_note):
        return None
    parent_path = resolve_parent(lg, resolver, timeout)
    if parent_path is None:
        return None
    return f"{name}.{parent_path}"
