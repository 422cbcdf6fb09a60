from __future__ import annotations

import json
from typing import Any

import httpx
import pytest
import respx
from eth_abi import encode
from eth_utils import to_checksum_address
from typer.testing import CliRunner

from kimap_sdk.cli import app
from kimap_sdk.constants import KIMAP_FIRST_BLOCK
from kimap_sdk.contract import NOTE_TOPIC
from kimap_sdk.names import labelhash, namehash_hex

runner = CliRunner()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: Any) -> None:
    for key in ("ADDRESS", "CHAIN_ID", "FIRST_BLOCK", "RPC_URL", "TIMEOUT"):
        monkeypatch.delenv(f"KIMAP_{key}", raising=False)


def test_namehash():
    result = runner.invoke(app, ["namehash", "eth"])
    assert result.exit_code == 0
    assert result.output.strip() == "0x93cdeb708b7545dc668eb9280176169d1c33cfd8ed6f04690a0bcc88a93fc4ae"


def test_valid_and_invalid_labels():
    ok = runner.invoke(app, ["valid", "~ip", "--note"])
    assert ok.exit_code == 0
    assert "valid" in ok.output

    bad = runner.invoke(app, ["valid", "Bad_Name"])
    assert bad.exit_code == 1
    assert "invalid" in bad.output


def test_note_filter_with_labels():
    result = runner.invoke(app, ["filter", "note", "--label", "~a", "--label", "~b"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["topics"][0] == "0x" + NOTE_TOPIC.hex()
    assert sorted(data["topics"][3]) == sorted("0x" + labelhash(n).hex() for n in ("~a", "~b"))
    assert data["fromBlock"] == hex(KIMAP_FIRST_BLOCK)


def test_mint_filter_rejects_labels():
    result = runner.invoke(app, ["filter", "mint", "--label", "~a"])
    assert result.exit_code != 0


@respx.mock
def test_get(monkeypatch: Any) -> None:
    rpc_url = "http://localhost:9999/rpc"
    monkeypatch.setenv("KIMAP_RPC_URL", rpc_url)
    tba = to_checksum_address("0x" + "55" * 20)
    owner = to_checksum_address("0x" + "66" * 20)
    ret = encode(["address", "address", "bytes"], [tba, owner, b"\x01"])
    route = respx.post(rpc_url).mock(
        return_value=httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": "0x" + ret.hex()})
    )

    result = runner.invoke(app, ["get", "~ip.x.os"])

    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data == {"tba": tba, "owner": owner, "data": "0x01"}
    assert route.called


def test_get_hash_invalid_params_exits_nonzero():
    result = runner.invoke(app, ["--rpc-url", "http://localhost:9999/rpc", "get-hash", "0x1234"])
    assert result.exit_code == 1


@respx.mock
def test_get_hash(monkeypatch: Any) -> None:
    rpc_url = "http://localhost:9998/rpc"
    tba = to_checksum_address("0x" + "77" * 20)
    ret = encode(["address", "address", "bytes"], [tba, tba, b""])
    respx.post(rpc_url).mock(
        return_value=httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": "0x" + ret.hex()})
    )

    result = runner.invoke(app, ["--rpc-url", rpc_url, "get-hash", namehash_hex("x.os")])

    assert result.exit_code == 0
    assert json.loads(result.output)["data"] is None


def test_hex_chain_id_from_env_is_accepted(monkeypatch: Any) -> None:
    monkeypatch.setenv("KIMAP_CHAIN_ID", "0xa")
    result = runner.invoke(app, ["namehash", "x.os"])
    assert result.exit_code == 0
    assert result.output.strip() == namehash_hex("x.os")


def test_hex_chain_id_option_is_accepted():
    result = runner.invoke(app, ["--chain-id", "0xa", "namehash", "x.os"])
    assert result.exit_code == 0


def test_bad_chain_id_is_a_usage_error(monkeypatch: Any) -> None:
    monkeypatch.setenv("KIMAP_CHAIN_ID", "ten")
    result = runner.invoke(app, ["namehash", "x.os"])
    assert result.exit_code == 2


def test_first_block_from_env_sets_filter_start(monkeypatch: Any) -> None:
    monkeypatch.setenv("KIMAP_FIRST_BLOCK", "100")
    result = runner.invoke(app, ["filter", "mint"])
    assert result.exit_code == 0
    assert json.loads(result.output)["fromBlock"] == "0x64"


def test_first_block_option_overrides_env(monkeypatch: Any) -> None:
    monkeypatch.setenv("KIMAP_FIRST_BLOCK", "100")
    result = runner.invoke(app, ["--first-block", "0x10", "filter", "note"])
    assert result.exit_code == 0
    assert json.loads(result.output)["fromBlock"] == "0x10"


def test_from_block_option_wins_over_config():
    result = runner.invoke(app, ["--first-block", "100", "filter", "mint", "--from-block", "7"])
    assert result.exit_code == 0
    assert json.loads(result.output)["fromBlock"] == "0x7"
