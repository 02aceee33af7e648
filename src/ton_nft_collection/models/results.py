"""Decoded get-method results, one type per read method."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ton_nft_collection.models.address import Address
from ton_nft_collection.models.collection import RoyaltyParams


@dataclass(frozen=True)
class MintingPrice:
    """``get_minting_price``: current mint price in nanotons."""

    price: int


@dataclass(frozen=True)
class CollectionData:
    """``get_collection_data``."""

    next_item_index: int
    content_url: str
    owner: Address


@dataclass(frozen=True)
class NftAddress:
    """``get_nft_address_by_index``."""

    address: Address


@dataclass(frozen=True)
class NftContentUrl:
    """``get_nft_content``: full item content URL."""

    url: str


QueryResult = Union[MintingPrice, CollectionData, RoyaltyParams, NftAddress, NftContentUrl]
