"""Token content cells (TEP-64): off-chain URL content, snake-encoded."""

from __future__ import annotations

import logging
from enum import IntEnum

from ton_nft_collection.boc.cell import MAX_BITS, Builder, Cell
from ton_nft_collection.errors import DecodeError, UnsupportedContentTag

log = logging.getLogger(__name__)

# Whole bytes that fit in one cell's bit-string (1023 // 8)
CELL_BYTES = MAX_BITS // 8


class ContentKind(IntEnum):
    """Leading tag byte of a content cell."""

    ONCHAIN = 0x00  # inline dictionary, not handled by this codec
    OFFCHAIN = 0x01  # URL pointing at a JSON document


def content_kind(cell: Cell) -> ContentKind:
    """Classify a content cell by its tag byte.

    Raises UnsupportedContentTag for an empty cell or an unknown tag.
    """
    s = cell.begin_parse()
    if s.remaining_bits < 8:
        raise UnsupportedContentTag("content cell has no tag byte")
    tag = s.load_uint(8)
    try:
        return ContentKind(tag)
    except ValueError:
        raise UnsupportedContentTag(f"unknown content tag 0x{tag:02x}") from None


def make_snake_cell(data: bytes) -> Cell:
    """Split ``data`` across a chain of cells, each the single ref of its parent."""
    chunks = [data[i : i + CELL_BYTES] for i in range(0, len(data), CELL_BYTES)] or [b""]
    cell: Cell | None = None
    for chunk in reversed(chunks):
        b = Builder().store_buffer(chunk)
        if cell is not None:
            b.store_ref(cell)
        cell = b.end_cell()
    return cell


def flatten_snake_cell(cell: Cell) -> bytes:
    """Concatenate the bytes of ``cell`` and all its descendants in ref order."""
    out = bytearray()
    stack = [cell]
    while stack:
        current = stack.pop()
        if current.bit_length % 8:
            raise DecodeError(f"content cell holds {current.bit_length} bits, not whole bytes")
        out += current.data
        stack.extend(reversed(current.refs))
    return bytes(out)


def encode_offchain_content(url: str) -> Cell:
    """Encode ``url`` as off-chain content: tag 0x01 followed by UTF-8 bytes."""
    data = bytes([ContentKind.OFFCHAIN]) + url.encode("utf-8")
    cell = make_snake_cell(data)
    log.debug("Encoded off-chain content (%d bytes, depth %d)", len(data), cell.depth())
    return cell


def decode_offchain_content(cell: Cell) -> str:
    """Decode an off-chain content cell back to its URL."""
    kind = content_kind(cell)
    if kind is not ContentKind.OFFCHAIN:
        raise UnsupportedContentTag(f"{kind.name.lower()} content is not supported")
    data = flatten_snake_cell(cell)
    try:
        return data[1:].decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeError(f"content URL is not valid UTF-8: {exc}") from exc
