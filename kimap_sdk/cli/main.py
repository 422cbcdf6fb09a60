"""
kimap_sdk.cli.main
==================

`kimap-sdk`: inspect the kimap namespace from the command line.

Examples
--------
    $ kimap-sdk namehash x.os
    $ kimap-sdk valid ~ip --note
    $ kimap-sdk --rpc-url https://mainnet.optimism.io get ~ip.x.os
    $ kimap-sdk get-hash 0x1234...
    $ kimap-sdk filter note --label ~ip --label ~port

Configuration
-------------
- RPC URL   : `--rpc-url` or env `KIMAP_RPC_URL`
- Address   : `--address` or env `KIMAP_ADDRESS` (default: the Optimism deployment)
- Chain ID  : `--chain-id` or env `KIMAP_CHAIN_ID` (default: 10)
- First block: `--first-block` or env `KIMAP_FIRST_BLOCK` (default: the deployment block)
- Timeout   : `--timeout` or env `KIMAP_TIMEOUT` seconds
"""

from __future__ import annotations

import json
import logging
from enum import Enum
from typing import Any, List, Optional

import typer

from ..config import KimapConfig
from ..errors import KimapError
from ..kimap import Kimap
from ..names import namehash_hex, valid_name
from ..rpc.provider import EthProvider
from ..types.core import Entry
from ..utils.bytes import to_hex
from ..version import __version__ as SDK_VERSION

app = typer.Typer(
    name="kimap-sdk",
    help="Read the kimap namespace: hash names, check labels, look up entries.",
    no_args_is_help=True,
    add_completion=False,
)

__all__ = ["app", "main", "run"]


class EventKind(str, Enum):
    mint = "mint"
    note = "note"


def _print_json(obj: Any) -> None:
    typer.echo(json.dumps(obj, indent=2, ensure_ascii=False))


def _entry_json(entry: Entry) -> dict:
    return {
        "tba": entry.tba,
        "owner": entry.owner,
        "data": to_hex(entry.data) if entry.data is not None else None,
    }


def _fail(e: Exception) -> None:
    typer.echo(f"error: {e}", err=True)
    raise typer.Exit(code=1)


def _kimap(ctx: typer.Context) -> Kimap:
    cfg: KimapConfig = ctx.obj
    provider = EthProvider.from_url(cfg.rpc_url, chain_id=cfg.chain_id, timeout=cfg.timeout)
    ctx.call_on_close(provider.close)
    return Kimap(provider, cfg.address)


@app.callback()
def _root(
    ctx: typer.Context,
    rpc_url: Optional[str] = typer.Option(None, "--rpc-url", help="Node HTTP JSON-RPC URL.", envvar="KIMAP_RPC_URL"),
    address: Optional[str] = typer.Option(None, "--address", help="kimap contract address.", envvar="KIMAP_ADDRESS"),
    chain_id: Optional[str] = typer.Option(None, "--chain-id", help="Chain id of the deployment (int or 0x-hex).", envvar="KIMAP_CHAIN_ID"),
    first_block: Optional[str] = typer.Option(None, "--first-block", help="Default first block for filters (int or 0x-hex).", envvar="KIMAP_FIRST_BLOCK"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="HTTP timeout in seconds.", envvar="KIMAP_TIMEOUT"),
    log_level: str = typer.Option("WARNING", "--log-level", help="Python logging level."),
) -> None:
    """
    Resolve the effective configuration for this invocation: the KIMAP_*
    environment first, then explicit options.
    """
    logging.basicConfig(level=log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        ctx.obj = KimapConfig.with_overrides(
            KimapConfig.from_env(),
            rpc_url=rpc_url,
            address=address,
            chain_id=chain_id,
            first_block=first_block,
            timeout=timeout,
        )
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e


@app.command()
def version() -> None:
    """Print the SDK version."""
    typer.echo(SDK_VERSION)


@app.command()
def namehash(name: str = typer.Argument(..., help="Dotted kimap name, e.g. x.os")) -> None:
    """Print the namehash of NAME."""
    typer.echo(namehash_hex(name))


@app.command()
def valid(
    label: str = typer.Argument(..., help="A single label (no dots)."),
    note: bool = typer.Option(False, "--note", help="Check against the ~note grammar."),
) -> None:
    """Exit 0 if LABEL is a valid kimap label, 1 otherwise."""
    ok = valid_name(label, note)
    typer.echo("valid" if ok else "invalid")
    if not ok:
        raise typer.Exit(code=1)


@app.command()
def get(ctx: typer.Context, path: str = typer.Argument(..., help="Dotted kimap name.")) -> None:
    """Look up an entry by name."""
    try:
        entry = _kimap(ctx).get(path)
    except KimapError as e:
        _fail(e)
        return
    _print_json(_entry_json(entry))


@app.command("get-hash")
def get_hash(ctx: typer.Context, entryhash: str = typer.Argument(..., help="32-byte namehash, hex.")) -> None:
    """Look up an entry by namehash."""
    try:
        entry = _kimap(ctx).get_hash(entryhash)
    except KimapError as e:
        _fail(e)
        return
    _print_json(_entry_json(entry))


@app.command("filter")
def filter_(
    ctx: typer.Context,
    kind: EventKind = typer.Argument(..., help="Event kind."),
    label: List[str] = typer.Option([], "--label", help="Only these note labels (repeatable; note filters only)."),
    from_block: Optional[int] = typer.Option(None, "--from-block", help="First block; defaults to the deployment block."),
) -> None:
    """Print the eth_getLogs filter for mint or note events."""
    cfg: KimapConfig = ctx.obj
    kimap = Kimap(_NullProvider(), cfg.address)
    if kind is EventKind.mint:
        if label:
            raise typer.BadParameter("--label only applies to note filters")
        flt = kimap.mint_filter()
    else:
        flt = kimap.notes_filter(label) if label else kimap.note_filter()
    flt = flt.with_from_block(from_block if from_block is not None else cfg.first_block)
    _print_json(flt.to_rpc())


class _NullProvider:
    """Stands in for a provider when only filters are built."""

    def call(self, tx, block=None) -> bytes:  # noqa: ANN001
        raise KimapError("no provider configured")


def main() -> None:
    app()


def run() -> None:
    """Console-script entry point."""
    main()


if __name__ == "__main__":  # pragma: no cover
    run()
