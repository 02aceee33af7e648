"""Bag-of-cells (BoC) serialization.

Layout (single root, ordinary cells only)::

    magic:u32 flags:u8 off_bytes:u8 cells:size roots:size absent:size
    tot_cells_size:off_bytes root_idx:size [index] cell_data [crc32c]
"""

from __future__ import annotations

import logging

from ton_nft_collection.boc.cell import Cell, padded_data, descriptors
from ton_nft_collection.errors import BocError

log = logging.getLogger(__name__)

BOC_MAGIC = bytes.fromhex("b5ee9c72")

_FLAG_HAS_IDX = 0x80
_FLAG_HAS_CRC = 0x40
_FLAG_HAS_CACHE_BITS = 0x20
_SIZE_MASK = 0x07

_CRC32C_POLY = 0x82F63B78
_CRC32C_TABLE: list[int] = []
for _n in range(256):
    _c = _n
    for _ in range(8):
        _c = (_c >> 1) ^ _CRC32C_POLY if _c & 1 else _c >> 1
    _CRC32C_TABLE.append(_c)


def crc32c(data: bytes) -> int:
    """CRC-32C (Castagnoli), as appended to BoC files."""
    crc = 0xFFFFFFFF
    for b in data:
        crc = _CRC32C_TABLE[(crc ^ b) & 0xFF] ^ (crc >> 8)
    return crc ^ 0xFFFFFFFF


def _byte_len(value: int) -> int:
    return max(1, (value.bit_length() + 7) // 8)


def _topological_order(root: Cell) -> list[Cell]:
    """Unique cells (by hash), every parent before its children."""
    seen: set[bytes] = set()
    post: list[Cell] = []
    stack: list[tuple[Cell, bool]] = [(root, False)]
    while stack:
        cell, expanded = stack.pop()
        if expanded:
            post.append(cell)
            continue
        if cell.hash() in seen:
            continue
        seen.add(cell.hash())
        stack.append((cell, True))
        for ref in reversed(cell.refs):
            stack.append((ref, False))
    post.reverse()
    return post


def serialize_boc(root: Cell, crc32c: bool = False, has_idx: bool = False) -> bytes:
    cells = _topological_order(root)
    index = {c.hash(): i for i, c in enumerate(cells)}
    size = _byte_len(len(cells))

    blobs: list[bytes] = []
    for cell in cells:
        blob = bytearray(descriptors(cell))
        blob += padded_data(cell.data, cell.bit_length)
        for ref in cell.refs:
            blob += index[ref.hash()].to_bytes(size, "big")
        blobs.append(bytes(blob))

    total = sum(len(b) for b in blobs)
    off_bytes = _byte_len(total)

    flags = size
    if has_idx:
        flags |= _FLAG_HAS_IDX
    if crc32c:
        flags |= _FLAG_HAS_CRC

    out = bytearray(BOC_MAGIC)
    out.append(flags)
    out.append(off_bytes)
    out += len(cells).to_bytes(size, "big")
    out += (1).to_bytes(size, "big")  # roots
    out += (0).to_bytes(size, "big")  # absent
    out += total.to_bytes(off_bytes, "big")
    out += (0).to_bytes(size, "big")  # root index
    if has_idx:
        offset = 0
        for blob in blobs:
            offset += len(blob)
            out += offset.to_bytes(off_bytes, "big")
    for blob in blobs:
        out += blob
    if crc32c:
        out += _crc(out).to_bytes(4, "little")
    return bytes(out)


def _crc(data: bytes | bytearray) -> int:
    return crc32c(bytes(data))


class _Reader:
    def __init__(self, data: bytes) -> None:
        self.data = data
        self.pos = 0

    def take(self, n: int) -> bytes:
        if self.pos + n > len(self.data):
            raise BocError("unexpected end of BoC data")
        chunk = self.data[self.pos : self.pos + n]
        self.pos += n
        return chunk

    def uint(self, n: int) -> int:
        return int.from_bytes(self.take(n), "big")


def _strip_completion_tag(data: bytes) -> tuple[bytes, int]:
    last = data[-1]
    if not last:
        raise BocError("missing completion tag in cell data")
    trailing = (last & -last).bit_length() - 1
    bit_length = len(data) * 8 - trailing - 1
    cleared = last & ~(1 << trailing) & 0xFF
    return data[:-1] + bytes([cleared]), bit_length


def deserialize_boc(data: bytes) -> Cell:
    """Parse a single-root BoC into an owned cell tree."""
    r = _Reader(data)
    if r.take(4) != BOC_MAGIC:
        raise BocError("unknown BoC magic")

    flags = r.uint(1)
    size = flags & _SIZE_MASK
    if not 1 <= size <= 4:
        raise BocError(f"invalid ref size {size}")
    off_bytes = r.uint(1)
    if not 1 <= off_bytes <= 8:
        raise BocError(f"invalid offset size {off_bytes}")

    cells_num = r.uint(size)
    roots_num = r.uint(size)
    absent_num = r.uint(size)
    tot_cells_size = r.uint(off_bytes)
    if roots_num != 1:
        raise BocError(f"expected exactly one root, got {roots_num}")
    if absent_num:
        raise BocError("absent cells are not supported")
    root_idx = r.uint(size)
    if root_idx >= cells_num:
        raise BocError(f"root index {root_idx} out of range")

    if flags & _FLAG_HAS_IDX:
        r.take(cells_num * off_bytes)

    cells_start = r.pos
    raw: list[tuple[bytes, int, list[int]]] = []
    for i in range(cells_num):
        d1, d2 = r.uint(1), r.uint(1)
        if d1 & 0x18 or d1 >> 5:
            raise BocError(f"cell {i}: only ordinary cells without stored hashes are supported")
        refs_num = d1 & 0x07
        if refs_num > 4:
            raise BocError(f"cell {i}: {refs_num} refs")
        payload = r.take((d2 + 1) // 2)
        if d2 % 2:
            payload, bit_length = _strip_completion_tag(payload)
        else:
            bit_length = len(payload) * 8
        refs = [r.uint(size) for _ in range(refs_num)]
        for ref in refs:
            if ref <= i or ref >= cells_num:
                raise BocError(f"cell {i}: invalid ref index {ref}")
        raw.append((payload, bit_length, refs))

    if r.pos - cells_start != tot_cells_size:
        raise BocError("cell data size does not match header")

    if flags & _FLAG_HAS_CRC:
        expected = int.from_bytes(r.take(4), "little")
        if _crc(data[: r.pos - 4]) != expected:
            raise BocError("CRC32-C checksum mismatch")

    built: list[Cell | None] = [None] * cells_num
    for i in range(cells_num - 1, -1, -1):
        payload, bit_length, refs = raw[i]
        children: list[Cell] = []
        for ref in refs:
            child = built[ref]
            # Deduplicated subtrees are expanded back into owned copies.
            if child.is_owned or any(c is child for c in children):
                child = child.copy()
            children.append(child)
        built[i] = Cell(payload, bit_length, children)

    log.debug("Parsed BoC with %d cells", cells_num)
    return built[root_idx]
