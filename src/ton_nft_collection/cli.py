"""CLI entry point: build collection deploy data and message bodies.

Every command prints BoC-encoded cells (base64 by default) ready to hand to
a wallet or RPC client; nothing is sent from here.
"""

from __future__ import annotations

import logging
import sys
import time

import click

from ton_nft_collection.artifacts import BuildArtifactCompiler
from ton_nft_collection.boc.cell import Cell
from ton_nft_collection.config import load_config
from ton_nft_collection.content import decode_offchain_content
from ton_nft_collection.errors import NftCollectionError, RangeError
from ton_nft_collection.interfaces.compiler import Compiler
from ton_nft_collection.models.address import Address
from ton_nft_collection.models.config import AppConfig
from ton_nft_collection.utils import from_nano, to_nano
from ton_nft_collection.wrappers import bodies
from ton_nft_collection.wrappers.collection import NftCollection


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _load(ctx: click.Context) -> AppConfig:
    try:
        cfg = load_config(ctx.obj["config_path"])
    except NftCollectionError as exc:
        _fail(str(exc))
    if not ctx.obj["verbose"]:
        logging.getLogger().setLevel(cfg.log_level.upper())
    return cfg


def _parse_address(ctx: click.Context, param: click.Parameter, value: str | None) -> Address | None:
    if value is None:
        return None
    try:
        return Address.parse(value)
    except RangeError as exc:
        raise click.BadParameter(exc.message) from exc


def _parse_ton(ctx: click.Context, param: click.Parameter, value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return to_nano(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc


def _default_query_id() -> int:
    return int(time.time() * 1000)


def _emit(ctx: click.Context, label: str, cell: Cell) -> None:
    encoded = cell.to_hex() if ctx.obj["hex"] else cell.to_base64()
    click.echo(f"{label:<11} {encoded}")


def _fmt_address(cfg: AppConfig, address: Address) -> str:
    return address.to_string(test_only=cfg.test_only)


@click.group()
@click.option("-c", "--config", "config_path", default=None, help="Path to config TOML file")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option("--hex", "as_hex", is_flag=True, help="Print BoC as hex instead of base64")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, verbose: bool, as_hex: bool) -> None:
    """ton-nft-collection - NFT collection state and message encoder."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["verbose"] = verbose
    ctx.obj["hex"] = as_hex

    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


# ── Info ───────────────────────────────────────────────


@cli.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show collection configuration."""
    cfg = _load(ctx)
    click.echo(f"Network:     {cfg.network.value} (workchain {cfg.workchain})")
    click.echo(f"Owner:       {cfg.owner_address or '(not set)'}")
    click.echo(f"Next index:  {cfg.next_item_index}")
    click.echo(f"Content:     {cfg.collection_content_url or '(not set)'}")
    click.echo(f"Common URL:  {cfg.common_content_url or '(not set)'}")
    click.echo(f"Mint price:  {cfg.mint_price} TON")
    click.echo(f"Royalty:     {cfg.royalty.factor}/{cfg.royalty.base} -> {cfg.royalty.address or 'owner'}")
    click.echo(f"Build dir:   {cfg.build.build_dir}")


# ── Deploy ─────────────────────────────────────────────


@cli.command()
@click.pass_context
def deploy(ctx: click.Context) -> None:
    """Compute the collection address and its StateInit."""
    cfg = _load(ctx)
    compiler: Compiler = BuildArtifactCompiler(cfg.build.build_dir)
    try:
        config = cfg.to_collection_config(compiler.compile(cfg.build.item_contract))
        collection = NftCollection.create_from_config(
            config,
            compiler.compile(cfg.build.collection_contract),
            workchain=cfg.workchain,
        )
    except (NftCollectionError, ValueError) as exc:
        _fail(str(exc))

    click.echo(f"Address:    {_fmt_address(cfg, collection.address)}")
    click.echo(f"Raw:        {collection.address.to_raw()}")
    click.echo(f"Mint price: {from_nano(config.mint_price)} TON")
    _emit(ctx, "StateInit:", collection.init.cell)


# ── Message bodies ─────────────────────────────────────


@cli.command()
@click.option("--index", type=int, required=True, help="Item index (next_item_index of the collection)")
@click.option("--owner", callback=_parse_address, default=None, help="Item owner (defaults to config owner)")
@click.option("--content", default="/nft.json", show_default=True, help="Item content path")
@click.option("--coins-for-storage", callback=_parse_ton, default="0.05", show_default=True,
              help="TON forwarded to the new item")
@click.option("--query-id", type=int, default=None, help="Query id (defaults to current time in ms)")
@click.pass_context
def mint(
    ctx: click.Context,
    index: int,
    owner: Address | None,
    content: str,
    coins_for_storage: int,
    query_id: int | None,
) -> None:
    """Build a mint body."""
    cfg = _load(ctx)
    try:
        owner = owner or cfg.owner()
        body = bodies.mint_body(
            query_id=query_id if query_id is not None else _default_query_id(),
            index=index,
            coins_for_storage=coins_for_storage,
            owner_address=owner,
            content=content,
        )
    except NftCollectionError as exc:
        _fail(str(exc))
    _emit(ctx, "Body:", body)


@cli.command("batch-mint")
@click.option("--query-id", type=int, default=None, help="Query id (defaults to current time in ms)")
@click.pass_context
def batch_mint(ctx: click.Context, query_id: int | None) -> None:
    """Build a batch-mint body (opcode and query id only)."""
    try:
        body = bodies.batch_mint_body(query_id if query_id is not None else _default_query_id())
    except NftCollectionError as exc:
        _fail(str(exc))
    _emit(ctx, "Body:", body)


@cli.command("change-owner")
@click.option("--new-owner", callback=_parse_address, required=True, help="New collection owner")
@click.option("--query-id", type=int, default=None, help="Query id (defaults to current time in ms)")
@click.pass_context
def change_owner(ctx: click.Context, new_owner: Address, query_id: int | None) -> None:
    """Build a change-owner body."""
    try:
        body = bodies.change_owner_body(
            query_id if query_id is not None else _default_query_id(), new_owner
        )
    except NftCollectionError as exc:
        _fail(str(exc))
    _emit(ctx, "Body:", body)


@cli.command("change-price")
@click.option("--price", callback=_parse_ton, required=True, help="New mint price in TON")
@click.option("--query-id", type=int, default=None, help="Query id (defaults to current time in ms)")
@click.pass_context
def change_price(ctx: click.Context, price: int, query_id: int | None) -> None:
    """Build a change-mint-price body."""
    try:
        body = bodies.change_mint_price_body(
            query_id if query_id is not None else _default_query_id(), price
        )
    except NftCollectionError as exc:
        _fail(str(exc))
    _emit(ctx, "Body:", body)


@cli.command("royalty-query")
@click.option("--query-id", type=int, default=None, help="Query id (defaults to current time in ms)")
@click.pass_context
def royalty_query(ctx: click.Context, query_id: int | None) -> None:
    """Build a get-royalty-params body."""
    try:
        body = bodies.get_royalty_params_body(
            query_id if query_id is not None else _default_query_id()
        )
    except NftCollectionError as exc:
        _fail(str(exc))
    _emit(ctx, "Body:", body)


# ── Decoding ───────────────────────────────────────────


@cli.command("decode-content")
@click.argument("boc")
@click.pass_context
def decode_content(ctx: click.Context, boc: str) -> None:
    """Decode an off-chain content cell given as base64 or hex BoC."""
    try:
        cell = Cell.from_hex(boc) if ctx.obj["hex"] else Cell.from_base64(boc)
        click.echo(decode_offchain_content(cell))
    except (NftCollectionError, ValueError) as exc:
        _fail(str(exc))


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
