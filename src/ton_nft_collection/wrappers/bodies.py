"""Message bodies for the collection contract's internal operations.

Every body starts with ``op:uint32 query_id:uint64`` followed by the
operation's own fields (see ``BODY_LAYOUTS``).
"""

from __future__ import annotations

import logging
from enum import IntEnum

from ton_nft_collection.boc.cell import Builder, Cell
from ton_nft_collection.models.address import Address
from ton_nft_collection.wrappers.layout import (
    Field,
    address,
    build_cell,
    coins,
    ref,
    uint,
    write_fields,
)

log = logging.getLogger(__name__)


class Opcodes(IntEnum):
    """32-bit operation tags understood by the deployed contract."""

    GET_ROYALTY_PARAMS = 0x693D3950
    MINT = 1
    BATCH_MINT = 2
    CHANGE_OWNER = 3
    CHANGE_MINT_PRICE = 4


HEADER_LAYOUT: tuple[Field, ...] = (uint("op", 32), uint("query_id", 64))

# Batch parameters travel in the attached value, not the body.
BODY_LAYOUTS: dict[Opcodes, tuple[Field, ...]] = {
    Opcodes.GET_ROYALTY_PARAMS: (),
    Opcodes.MINT: (uint("index", 64), coins("coins_for_storage"), ref("item")),
    Opcodes.BATCH_MINT: (),
    Opcodes.CHANGE_OWNER: (address("new_owner_address"),),
    Opcodes.CHANGE_MINT_PRICE: (uint("new_mint_price", 64),),
}

# Mint's item ref: owner, then a ref to the raw content bytes
MINT_ITEM_LAYOUT: tuple[Field, ...] = (address("owner_address"), ref("content"))


def build_body(op: Opcodes, query_id: int, **fields: object) -> Cell:
    """Encode ``op`` with its header and the fields of ``BODY_LAYOUTS[op]``."""
    b = Builder()
    write_fields(b, HEADER_LAYOUT, {"op": int(op), "query_id": query_id})
    write_fields(b, BODY_LAYOUTS[op], fields)
    cell = b.end_cell()
    log.debug("Encoded %s body (query_id=%d, %d bits)", op.name, query_id, cell.bit_length)
    return cell


def mint_item_cell(owner_address: Address, content: str) -> Cell:
    content_cell = Builder().store_buffer(content.encode("utf-8")).end_cell()
    return build_cell(MINT_ITEM_LAYOUT, {"owner_address": owner_address, "content": content_cell})


def mint_body(
    query_id: int,
    index: int,
    coins_for_storage: int,
    owner_address: Address,
    content: str,
) -> Cell:
    return build_body(
        Opcodes.MINT,
        query_id,
        index=index,
        coins_for_storage=coins_for_storage,
        item=mint_item_cell(owner_address, content),
    )


def batch_mint_body(query_id: int) -> Cell:
    return build_body(Opcodes.BATCH_MINT, query_id)


def change_owner_body(query_id: int, new_owner_address: Address) -> Cell:
    return build_body(Opcodes.CHANGE_OWNER, query_id, new_owner_address=new_owner_address)


def change_mint_price_body(query_id: int, new_mint_price: int) -> Cell:
    return build_body(Opcodes.CHANGE_MINT_PRICE, query_id, new_mint_price=new_mint_price)


def get_royalty_params_body(query_id: int) -> Cell:
    return build_body(Opcodes.GET_ROYALTY_PARAMS, query_id)
