"""Collection contract wrapper: data cell, message bodies, and get-method decoders."""

from ton_nft_collection.wrappers.bodies import (
    Opcodes,
    batch_mint_body,
    change_mint_price_body,
    change_owner_body,
    get_royalty_params_body,
    mint_body,
)
from ton_nft_collection.wrappers.collection import NftCollection, nft_collection_config_to_cell
from ton_nft_collection.wrappers.responses import GET_METHODS, StackReader, decode_get_method

__all__ = [
    "Opcodes",
    "mint_body", "batch_mint_body", "change_owner_body",
    "change_mint_price_body", "get_royalty_params_body",
    "NftCollection", "nft_collection_config_to_cell",
    "GET_METHODS", "StackReader", "decode_get_method",
]
