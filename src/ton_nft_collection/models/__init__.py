"""Data models for ton_nft_collection."""

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
from ton_nft_collection.models.config import AppConfig, BuildConfig, Network, RoyaltyConfig
from ton_nft_collection.models.results import (
    CollectionData,
    MintingPrice,
    NftAddress,
    NftContentUrl,
    QueryResult,
)
from ton_nft_collection.models.stack import (
    StackCell,
    StackEntry,
    StackInt,
    StackKind,
    StackNull,
    StackSlice,
)

__all__ = [
    "Address",
    "CollectionConfig", "RoyaltyParams",
    "GetRoyaltyParamsOptions", "MintOptions", "BatchMintOptions",
    "ChangeOwnerOptions", "ChangeMintPriceOptions",
    "AppConfig", "BuildConfig", "Network", "RoyaltyConfig",
    "MintingPrice", "CollectionData", "NftAddress", "NftContentUrl", "QueryResult",
    "StackEntry", "StackKind", "StackInt", "StackCell", "StackSlice", "StackNull",
]
