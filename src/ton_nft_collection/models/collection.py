"""Collection state and operation option records."""

from __future__ import annotations

from dataclasses import dataclass

from ton_nft_collection.boc.cell import Cell
from ton_nft_collection.models.address import Address


@dataclass(frozen=True)
class RoyaltyParams:
    """Royalty share ``factor / base`` paid to ``address``."""

    factor: int  # uint16
    base: int  # uint16
    address: Address


@dataclass(frozen=True)
class CollectionConfig:
    """Initial persistent state of an NFT collection contract."""

    owner_address: Address
    next_item_index: int  # uint64
    collection_content_url: str
    common_content_url: str
    nft_item_code: Cell  # copied into the data cell, never claimed
    royalty_params: RoyaltyParams
    mint_price: int  # nanotons, uint64


# ── Operation options ──────────────────────────────────
# ``value`` is the nanoton amount attached to the message; it is not part
# of the body.


@dataclass(frozen=True)
class GetRoyaltyParamsOptions:
    value: int
    query_id: int


@dataclass(frozen=True)
class MintOptions:
    value: int  # must include the collection's mint price
    query_id: int
    index: int
    coins_for_storage: int
    owner_address: Address
    content: str  # item path, appended to common_content_url by the item


@dataclass(frozen=True)
class BatchMintOptions:
    value: int
    query_id: int


@dataclass(frozen=True)
class ChangeOwnerOptions:
    value: int
    query_id: int
    new_owner_address: Address


@dataclass(frozen=True)
class ChangeMintPriceOptions:
    value: int
    query_id: int
    new_mint_price: int
