"""Client-side codec for a TON NFT collection contract."""

from ton_nft_collection.boc import Builder, Cell, Slice, begin_cell
from ton_nft_collection.content import decode_offchain_content, encode_offchain_content
from ton_nft_collection.models import Address, CollectionConfig, RoyaltyParams
from ton_nft_collection.state_init import StateInit, contract_address
from ton_nft_collection.wrappers import NftCollection, Opcodes, nft_collection_config_to_cell

__version__ = "0.1.0"

__all__ = [
    "Builder", "Cell", "Slice", "begin_cell",
    "encode_offchain_content", "decode_offchain_content",
    "Address", "CollectionConfig", "RoyaltyParams",
    "StateInit", "contract_address",
    "NftCollection", "Opcodes", "nft_collection_config_to_cell",
]
