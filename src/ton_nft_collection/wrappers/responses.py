"""Decoders for the collection contract's get-method result stacks."""

from __future__ import annotations

from typing import Callable, Sequence

from ton_nft_collection.boc.cell import Cell
from ton_nft_collection.content import decode_offchain_content
from ton_nft_collection.errors import (
    CellUnderflow,
    StackExhausted,
    UnexpectedStackShape,
)
from ton_nft_collection.models.address import Address
from ton_nft_collection.models.collection import RoyaltyParams
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
    StackSlice,
)


class StackReader:
    """Consumes stack entries strictly in order, checking each entry's kind.

    Entries left over after a decoder finishes are ignored.
    """

    def __init__(self, stack: Sequence[StackEntry]) -> None:
        self._stack = list(stack)
        self._pos = 0

    @property
    def remaining(self) -> int:
        return len(self._stack) - self._pos

    def _next(self, expected: str) -> StackEntry:
        if not self.remaining:
            raise StackExhausted(
                f"expected {expected} at position {self._pos}, stack has {len(self._stack)} entries"
            )
        entry = self._stack[self._pos]
        self._pos += 1
        return entry

    def _mismatch(self, expected: str, entry: StackEntry) -> UnexpectedStackShape:
        kind = getattr(entry, "kind", None)
        got = kind.value if kind is not None else type(entry).__name__
        if isinstance(entry, StackInt):
            got = f"int {entry.value}"
        return UnexpectedStackShape(
            f"expected {expected} at position {self._pos - 1}, got {got}"
        )

    def read_int(self) -> int:
        entry = self._next("int")
        if not isinstance(entry, StackInt):
            raise self._mismatch("int", entry)
        return entry.value

    def read_uint(self) -> int:
        entry = self._next("uint")
        if not isinstance(entry, StackInt) or entry.value < 0:
            raise self._mismatch("uint", entry)
        return entry.value

    def read_cell(self) -> Cell:
        entry = self._next("cell")
        if not isinstance(entry, (StackCell, StackSlice)):
            raise self._mismatch("cell", entry)
        return entry.cell

    def read_address(self) -> Address:
        entry = self._next("address")
        if not isinstance(entry, (StackSlice, StackCell)):
            raise self._mismatch("address", entry)
        try:
            return entry.cell.begin_parse().load_address()
        except CellUnderflow as exc:
            raise UnexpectedStackShape(
                f"entry at position {self._pos - 1} is too short for an address"
            ) from exc


# ── Per-method decoders ────────────────────────────────


def decode_minting_price(stack: Sequence[StackEntry]) -> MintingPrice:
    return MintingPrice(price=StackReader(stack).read_uint())


def decode_collection_data(stack: Sequence[StackEntry]) -> CollectionData:
    r = StackReader(stack)
    return CollectionData(
        next_item_index=r.read_uint(),
        content_url=decode_offchain_content(r.read_cell()),
        owner=r.read_address(),
    )


def decode_royalty_params(stack: Sequence[StackEntry]) -> RoyaltyParams:
    r = StackReader(stack)
    return RoyaltyParams(
        factor=r.read_uint(),
        base=r.read_uint(),
        address=r.read_address(),
    )


def decode_nft_address(stack: Sequence[StackEntry]) -> NftAddress:
    return NftAddress(address=StackReader(stack).read_address())


def decode_nft_content(stack: Sequence[StackEntry]) -> NftContentUrl:
    return NftContentUrl(url=decode_offchain_content(StackReader(stack).read_cell()))


GET_METHODS: dict[str, Callable[[Sequence[StackEntry]], QueryResult]] = {
    "get_minting_price": decode_minting_price,
    "get_collection_data": decode_collection_data,
    "royalty_params": decode_royalty_params,
    "get_nft_address_by_index": decode_nft_address,
    "get_nft_content": decode_nft_content,
}


def decode_get_method(name: str, stack: Sequence[StackEntry]) -> QueryResult:
    """Decode ``stack`` with the decoder registered for get-method ``name``."""
    try:
        decoder = GET_METHODS[name]
    except KeyError:
        raise ValueError(f"unknown get-method {name!r}") from None
    return decoder(stack)
