from __future__ import annotations

from typing import Any, Callable, List, Mapping, Optional, Tuple

import pytest
from eth_abi import encode

from kimap_sdk.contract import MINT_TOPIC, NOTE_TOPIC
from kimap_sdk.names import labelhash, namehash, namehash_hex
from kimap_sdk.resolver import MappingResolver
from kimap_sdk.types import Log

_PARENT = "x.os"
_BLOCK = 120_000_000


def _topics(topic0: bytes, label: str, parent: str) -> Tuple[bytes, ...]:
    return (topic0, namehash(parent), namehash(f"{label}.{parent}"), labelhash(label))


def _mint_log(
    name: bytes,
    parent: str = _PARENT,
    *,
    topic0: bytes = MINT_TOPIC,
    block: Optional[int] = _BLOCK,
) -> Log:
    label = name.decode("utf-8", errors="replace")
    return Log(
        topics=_topics(topic0, label, parent),
        data=encode(["bytes"], [name]),
        block_number=block,
    )


def _note_log(
    note: bytes,
    data: bytes = b"",
    parent: str = _PARENT,
    *,
    topic0: bytes = NOTE_TOPIC,
    block: Optional[int] = _BLOCK,
) -> Log:
    label = note.decode("utf-8", errors="replace")
    return Log(
        topics=_topics(topic0, label, parent),
        data=encode(["bytes", "bytes"], [note, data]),
        block_number=block,
    )


class RecordingResolver:
    """Resolver stub that remembers every lookup."""

    def __init__(self, answer: Optional[str]) -> None:
        self.answer = answer
        self.calls: List[Tuple[str, Optional[int], Optional[float]]] = []

    def resolve(self, parent_hash: str, block: Optional[int] = None, timeout: Optional[float] = None) -> Optional[str]:
        self.calls.append((parent_hash, block, timeout))
        return self.answer


class FakeProvider:
    """In-memory provider returning canned bytes for every call."""

    def __init__(self, result: bytes = b"", error: Optional[Exception] = None) -> None:
        self.result = result
        self.error = error
        self.calls: List[Tuple[Mapping[str, Any], Any]] = []

    def call(self, tx: Mapping[str, Any], block: Any = None) -> bytes:
        self.calls.append((tx, block))
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def parent_path() -> str:
    """Parent every built log hangs off."""
    return _PARENT


@pytest.fixture
def log_block() -> int:
    """Block number stamped on every built log."""
    return _BLOCK


@pytest.fixture
def make_mint_log() -> Callable[..., Log]:
    return _mint_log


@pytest.fixture
def make_note_log() -> Callable[..., Log]:
    return _note_log


@pytest.fixture
def recording_resolver() -> Callable[[Optional[str]], RecordingResolver]:
    return RecordingResolver


@pytest.fixture
def fake_provider() -> Callable[..., FakeProvider]:
    return FakeProvider


@pytest.fixture
def resolver() -> MappingResolver:
    return MappingResolver({namehash_hex(_PARENT): _PARENT})


@pytest.fixture
def empty_resolver() -> MappingResolver:
    return MappingResolver()
