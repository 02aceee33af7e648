"""NFT collection contract wrapper: data cell, deploy, sends, and getters."""

from __future__ import annotations

import logging

from ton_nft_collection.boc.cell import Builder, Cell
from ton_nft_collection.content import encode_offchain_content
from ton_nft_collection.interfaces.provider import ContractProvider, SendMode
from ton_nft_collection.models.address import Address
from ton_nft_collection.models.collection import (
    BatchMintOptions,
    ChangeMintPriceOptions,
    ChangeOwnerOptions,
    CollectionConfig,
    GetRoyaltyParamsOptions,
    MintOptions,
    RoyaltyParams,
)
from ton_nft_collection.models.results import (
    CollectionData,
    MintingPrice,
    NftAddress,
    NftContentUrl,
)
from ton_nft_collection.models.stack import StackCell, StackInt
from ton_nft_collection.state_init import StateInit, contract_address
from ton_nft_collection.wrappers import bodies, responses
from ton_nft_collection.wrappers.layout import Field, address, build_cell, ref, uint

log = logging.getLogger(__name__)

# ── Persistent data layout ─────────────────────────────

DATA_LAYOUT: tuple[Field, ...] = (
    address("owner_address"),
    uint("next_item_index", 64),
    ref("content"),
    ref("nft_item_code"),
    ref("royalty_params"),
    uint("mint_price", 64),
)
CONTENT_LAYOUT: tuple[Field, ...] = (ref("collection_content"), ref("common_content"))
ROYALTY_LAYOUT: tuple[Field, ...] = (uint("factor", 16), uint("base", 16), address("address"))


def royalty_params_to_cell(params: RoyaltyParams) -> Cell:
    return build_cell(
        ROYALTY_LAYOUT,
        {"factor": params.factor, "base": params.base, "address": params.address},
    )


def nft_collection_config_to_cell(config: CollectionConfig) -> Cell:
    """Build the collection's initial data cell.

    The tree holds a copy of ``config.nft_item_code``, so the config can be
    serialized any number of times and the caller keeps its cell.
    """
    content = build_cell(
        CONTENT_LAYOUT,
        {
            "collection_content": encode_offchain_content(config.collection_content_url),
            "common_content": Builder()
            .store_buffer(config.common_content_url.encode("utf-8"))
            .end_cell(),
        },
    )
    return build_cell(
        DATA_LAYOUT,
        {
            "owner_address": config.owner_address,
            "next_item_index": config.next_item_index,
            "content": content,
            "nft_item_code": config.nft_item_code.copy(),
            "royalty_params": royalty_params_to_cell(config.royalty_params),
            "mint_price": config.mint_price,
        },
    )


class NftCollection:
    """Client-side handle for one deployed (or about to be deployed) collection.

    All network access goes through the ``ContractProvider`` passed to each
    method; the wrapper itself only encodes bodies and decodes stacks.
    """

    def __init__(self, address: Address, init: StateInit | None = None) -> None:
        self.address = address
        self.init = init

    @classmethod
    def create_from_address(cls, address: Address) -> NftCollection:
        return cls(address)

    @classmethod
    def create_from_config(
        cls,
        config: CollectionConfig,
        code: Cell,
        workchain: int = 0,
    ) -> NftCollection:
        data = nft_collection_config_to_cell(config)
        init = StateInit(code=code, data=data)
        return cls(contract_address(workchain, init), init)

    # ── Sends ──────────────────────────────────────────

    async def _send(
        self,
        provider: ContractProvider,
        value: int,
        body: Cell,
        init: StateInit | None = None,
    ) -> object:
        return await provider.send_internal_message(
            self.address,
            value,
            body,
            send_mode=SendMode.PAY_GAS_SEPARATELY,
            init=init,
        )

    async def send_deploy(self, provider: ContractProvider, value: int) -> object:
        if self.init is None:
            raise ValueError("collection was not created from a config; nothing to deploy")
        log.info("Deploying collection %s (value=%d)", self.address.to_raw(), value)
        return await self._send(provider, value, Builder().end_cell(), init=self.init)

    async def send_get_royalty_params(
        self, provider: ContractProvider, opts: GetRoyaltyParamsOptions
    ) -> object:
        body = bodies.get_royalty_params_body(opts.query_id)
        return await self._send(provider, opts.value, body)

    async def send_mint(self, provider: ContractProvider, opts: MintOptions) -> object:
        body = bodies.mint_body(
            query_id=opts.query_id,
            index=opts.index,
            coins_for_storage=opts.coins_for_storage,
            owner_address=opts.owner_address,
            content=opts.content,
        )
        log.info("Minting item %d of %s (value=%d)", opts.index, self.address.to_raw(), opts.value)
        return await self._send(provider, opts.value, body)

    async def send_batch_mint(self, provider: ContractProvider, opts: BatchMintOptions) -> object:
        return await self._send(provider, opts.value, bodies.batch_mint_body(opts.query_id))

    async def send_change_mint_price(
        self, provider: ContractProvider, opts: ChangeMintPriceOptions
    ) -> object:
        body = bodies.change_mint_price_body(opts.query_id, opts.new_mint_price)
        log.info("Changing mint price of %s to %d", self.address.to_raw(), opts.new_mint_price)
        return await self._send(provider, opts.value, body)

    async def send_change_owner(
        self, provider: ContractProvider, opts: ChangeOwnerOptions
    ) -> object:
        body = bodies.change_owner_body(opts.query_id, opts.new_owner_address)
        log.info(
            "Changing owner of %s to %s",
            self.address.to_raw(),
            opts.new_owner_address.to_raw(),
        )
        return await self._send(provider, opts.value, body)

    # ── Getters ────────────────────────────────────────

    async def get_minting_price(self, provider: ContractProvider) -> MintingPrice:
        stack = await provider.run_get_method("get_minting_price")
        return responses.decode_minting_price(stack)

    async def get_collection_data(self, provider: ContractProvider) -> CollectionData:
        stack = await provider.run_get_method("get_collection_data")
        return responses.decode_collection_data(stack)

    async def get_nft_address_by_index(self, provider: ContractProvider, index: int) -> NftAddress:
        stack = await provider.run_get_method("get_nft_address_by_index", [StackInt(index)])
        return responses.decode_nft_address(stack)

    async def get_royalty_params(self, provider: ContractProvider) -> RoyaltyParams:
        stack = await provider.run_get_method("royalty_params")
        return responses.decode_royalty_params(stack)

    async def get_nft_content(
        self,
        provider: ContractProvider,
        index: int,
        individual_nft_content: Cell,
    ) -> NftContentUrl:
        stack = await provider.run_get_method(
            "get_nft_content",
            [StackInt(index), StackCell(individual_nft_content)],
        )
        return responses.decode_nft_content(stack)
