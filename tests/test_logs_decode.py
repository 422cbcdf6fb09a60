from dataclasses import replace

import pytest

from kimap_sdk.contract import MINT_TOPIC, NOTE_TOPIC
from kimap_sdk.errors import DecodeError, InvalidName, UnexpectedTopic, UnresolvedParent
from kimap_sdk.logs import decode_mint_log, decode_note_log, resolve_full_name, resolve_parent
from kimap_sdk.names import namehash_hex
from kimap_sdk.resolver import MappingResolver
from kimap_sdk.types import Mint, Note
from kimap_sdk.utils.hash import keccak256


# --- Note -------------------------------------------------------------------


def test_decode_note_log(resolver, make_note_log):
    lg = make_note_log(b"~test", b"\x01\x02\x03")
    note = decode_note_log(lg, resolver)
    assert note == Note(note="~test", parent_path="x.os", data=b"\x01\x02\x03")
    assert note.full_name == "~test.x.os"


def test_decode_note_log_keeps_empty_data(resolver, make_note_log):
    note = decode_note_log(make_note_log(b"~empty", b""), resolver)
    assert note.data == b""


def test_decode_note_log_unresolved_parent(empty_resolver, make_note_log):
    with pytest.raises(UnresolvedParent) as excinfo:
        decode_note_log(make_note_log(b"~test", b"\xaa"), empty_resolver)
    assert excinfo.value.name == "~test"


def test_decode_note_log_passes_parent_hash_block_and_timeout(
    make_note_log, recording_resolver, parent_path, log_block
):
    rr = recording_resolver("x.os")
    decode_note_log(make_note_log(b"~test"), rr, timeout=5)
    assert rr.calls == [(namehash_hex(parent_path), log_block, 5)]


def test_decode_note_log_unexpected_topic(resolver, make_note_log):
    bogus = keccak256(b"Transfer(address,address,uint256)")
    with pytest.raises(UnexpectedTopic) as excinfo:
        decode_note_log(make_note_log(b"~test", topic0=bogus), resolver)
    assert excinfo.value.topic == bogus


def test_decode_note_log_rejects_mint_topic(resolver, make_note_log):
    with pytest.raises(UnexpectedTopic) as excinfo:
        decode_note_log(make_note_log(b"~test", topic0=MINT_TOPIC), resolver)
    assert excinfo.value.topic == MINT_TOPIC


def test_decode_note_log_without_topics(resolver, make_note_log):
    lg = replace(make_note_log(b"~test"), topics=())
    with pytest.raises(UnexpectedTopic) as excinfo:
        decode_note_log(lg, resolver)
    assert excinfo.value.topic is None


@pytest.mark.parametrize("label", [b"test", b"~Test", b"~te.st", b"~"])
def test_decode_note_log_invalid_label(resolver, make_note_log, label):
    with pytest.raises(InvalidName) as excinfo:
        decode_note_log(make_note_log(label), resolver)
    assert excinfo.value.name == label.decode()


def test_decode_note_log_label_is_decoded_lossily(resolver, make_note_log):
    with pytest.raises(InvalidName) as excinfo:
        decode_note_log(make_note_log(b"~ab\xff"), resolver)
    assert excinfo.value.name == "~ab\ufffd"


def test_invalid_name_is_checked_before_resolution(make_note_log, recording_resolver):
    rr = recording_resolver(None)
    with pytest.raises(InvalidName):
        decode_note_log(make_note_log(b"NOPE"), rr)
    assert rr.calls == []


def test_decode_note_log_malformed_payload(resolver, make_note_log):
    lg = replace(make_note_log(b"~test"), data=b"\x01\x02\x03")
    with pytest.raises(DecodeError):
        decode_note_log(lg, resolver)


def test_decode_note_log_missing_parent_topic(resolver, make_note_log):
    lg = make_note_log(b"~test")
    lg = replace(lg, topics=lg.topics[:1])
    with pytest.raises(DecodeError):
        decode_note_log(lg, resolver)


# --- Mint -------------------------------------------------------------------
#
# decode_mint_log matches topic0 against the Note selector. These tests pin
# that behaviour down until the intended selector is confirmed.


def test_decode_mint_log_rejects_genuine_mint_topic(resolver, make_mint_log):
    with pytest.raises(UnexpectedTopic) as excinfo:
        decode_mint_log(make_mint_log(b"alice"), resolver)
    assert excinfo.value.topic == MINT_TOPIC


def test_decode_mint_log_accepts_note_topic(resolver, make_mint_log):
    lg = make_mint_log(b"alice", topic0=NOTE_TOPIC)
    assert decode_mint_log(lg, resolver) == Mint(name="alice", parent_path="x.os")


def test_decode_mint_log_invalid_name(resolver, make_mint_log):
    with pytest.raises(InvalidName) as excinfo:
        decode_mint_log(make_mint_log(b"Alice", topic0=NOTE_TOPIC), resolver)
    assert excinfo.value.name == "Alice"


def test_decode_mint_log_unresolved_parent(empty_resolver, make_mint_log):
    with pytest.raises(UnresolvedParent) as excinfo:
        decode_mint_log(make_mint_log(b"alice", topic0=NOTE_TOPIC), empty_resolver)
    assert excinfo.value.name == "alice"


def test_decode_mint_log_malformed_payload(resolver, make_mint_log):
    lg = replace(make_mint_log(b"alice", topic0=NOTE_TOPIC), data=b"")
    with pytest.raises(DecodeError):
        decode_mint_log(lg, resolver)


# --- resolve_parent / resolve_full_name --------------------------------------


def test_resolve_parent(resolver, make_mint_log):
    assert resolve_parent(make_mint_log(b"alice"), resolver) == "x.os"


def test_resolve_parent_unknown_at_block(make_mint_log, parent_path, log_block):
    r = MappingResolver()
    r.record(namehash_hex(parent_path), parent_path, block=log_block + 1)
    assert resolve_parent(make_mint_log(b"alice", block=log_block), r) is None
    assert resolve_parent(make_mint_log(b"alice", block=log_block + 1), r) == "x.os"


def test_resolve_full_name_mint(resolver, make_mint_log):
    assert resolve_full_name(make_mint_log(b"alice"), resolver) == "alice.x.os"


def test_resolve_full_name_note(resolver, make_note_log):
    assert resolve_full_name(make_note_log(b"~ip", b"\x7f\x00\x00\x01"), resolver) == "~ip.x.os"


def test_resolve_full_name_uses_note_grammar_for_notes(resolver, make_mint_log, make_note_log):
    assert resolve_full_name(make_note_log(b"ip"), resolver) is None
    assert resolve_full_name(make_mint_log(b"~ip"), resolver) is None


def test_resolve_full_name_unresolved(empty_resolver, make_mint_log):
    assert resolve_full_name(make_mint_log(b"alice"), empty_resolver) is None


def test_resolve_full_name_unknown_topic(resolver, make_mint_log):
    lg = make_mint_log(b"alice", topic0=b"\x11" * 32)
    assert resolve_full_name(lg, resolver) is None


def test_resolve_full_name_malformed_payload_raises(resolver, make_mint_log):
    lg = replace(make_mint_log(b"alice"), data=b"\x00" * 7)
    with pytest.raises(DecodeError):
        resolve_full_name(lg, resolver)


def test_resolve_full_name_passes_timeout(make_note_log, recording_resolver, parent_path, log_block):
    rr = recording_resolver("x.os")
    assert resolve_full_name(make_note_log(b"~ip"), rr, timeout=2.5) == "~ip.x.os"
    assert rr.calls == [(namehash_hex(parent_path), log_block, 2.5)]
