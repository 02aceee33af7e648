"""Cell tree, slice reader, and bag-of-cells serialization."""

from ton_nft_collection.boc.cell import MAX_BITS, MAX_REFS, Builder, Cell, begin_cell
from ton_nft_collection.boc.slice import Slice
from ton_nft_collection.boc.serialization import deserialize_boc, serialize_boc

__all__ = [
    "MAX_BITS", "MAX_REFS",
    "Builder", "Cell", "Slice", "begin_cell",
    "serialize_boc", "deserialize_boc",
]
