"""Cell tree: immutable cells and the builder that produces them.

A cell is a bit-string of at most 1023 bits plus up to four child cells.
Cells form an owned tree: once a cell has been finalized into a parent it
cannot be attached to another parent (use :meth:`Cell.copy`).
"""

from __future__ import annotations

import base64
import hashlib
from typing import TYPE_CHECKING, Iterable, Sequence

from ton_nft_collection.errors import (
    CapacityError,
    CellError,
    OwnershipError,
    RangeError,
)

if TYPE_CHECKING:
    from ton_nft_collection.boc.slice import Slice
    from ton_nft_collection.models.address import Address

MAX_BITS = 1023
MAX_REFS = 4
MAX_COINS_BYTES = 15


def padded_data(data: bytes, bit_length: int) -> bytes:
    """Data bytes with the completion tag appended when not byte-aligned."""
    rem = bit_length % 8
    if not rem:
        return data
    return data[:-1] + bytes([data[-1] | (0x80 >> rem)])


def descriptors(cell: Cell) -> bytes:
    """The two descriptor bytes (d1, d2) of an ordinary cell."""
    d1 = len(cell.refs)
    d2 = (cell.bit_length + 7) // 8 + cell.bit_length // 8
    return bytes([d1, d2])


class Cell:
    """Immutable bit-string plus ordered child references."""

    __slots__ = ("_data", "_bit_length", "_refs", "_owned", "_hash", "_depth")

    def __init__(
        self,
        data: bytes = b"",
        bit_length: int | None = None,
        refs: Sequence[Cell] = (),
    ) -> None:
        if bit_length is None:
            bit_length = len(data) * 8
        if bit_length > MAX_BITS:
            raise CapacityError(f"cell holds at most {MAX_BITS} bits, got {bit_length}")
        if len(data) != (bit_length + 7) // 8:
            raise CellError(f"{len(data)} data bytes do not match {bit_length} bits")
        if len(refs) > MAX_REFS:
            raise CapacityError(f"cell holds at most {MAX_REFS} refs, got {len(refs)}")
        _check_unowned(refs)

        self._data = bytes(data)
        self._bit_length = bit_length
        self._refs = tuple(refs)
        self._owned = False

        # Children are finalized before their parent, so hash/depth are
        # computed bottom-up without recursion.
        self._depth = max((r._depth + 1 for r in self._refs), default=0)
        h = hashlib.sha256()
        h.update(descriptors(self))
        h.update(padded_data(self._data, bit_length))
        for r in self._refs:
            h.update(r._depth.to_bytes(2, "big"))
        for r in self._refs:
            h.update(r._hash)
        self._hash = h.digest()

        for r in self._refs:
            r._owned = True

    # ── Accessors ──────────────────────────────────────

    @property
    def data(self) -> bytes:
        """Bit-string bytes, zero-padded to a whole byte."""
        return self._data

    @property
    def bit_length(self) -> int:
        return self._bit_length

    @property
    def refs(self) -> tuple[Cell, ...]:
        return self._refs

    @property
    def is_owned(self) -> bool:
        """True once this cell has been attached to a finalized parent."""
        return self._owned

    def hash(self) -> bytes:
        """Representation hash (SHA-256)."""
        return self._hash

    def depth(self) -> int:
        return self._depth

    def bit_string(self) -> str:
        """The bit-string as a string of '0'/'1' characters."""
        if not self._bit_length:
            return ""
        value = int.from_bytes(self._data, "big")
        return format(value, f"0{len(self._data) * 8}b")[: self._bit_length]

    def begin_parse(self) -> Slice:
        from ton_nft_collection.boc.slice import Slice

        return Slice(self)

    def copy(self) -> Cell:
        """Deep copy that no parent owns yet."""
        return Cell(self._data, self._bit_length, [r.copy() for r in self._refs])

    # ── Serialization ──────────────────────────────────

    def to_boc(self, crc32c: bool = False, has_idx: bool = False) -> bytes:
        from ton_nft_collection.boc.serialization import serialize_boc

        return serialize_boc(self, crc32c=crc32c, has_idx=has_idx)

    def to_hex(self) -> str:
        return self.to_boc().hex()

    def to_base64(self) -> str:
        return base64.b64encode(self.to_boc()).decode("ascii")

    @classmethod
    def from_boc(cls, data: bytes) -> Cell:
        from ton_nft_collection.boc.serialization import deserialize_boc

        return deserialize_boc(data)

    @classmethod
    def from_hex(cls, text: str) -> Cell:
        return cls.from_boc(bytes.fromhex(text.strip()))

    @classmethod
    def from_base64(cls, text: str) -> Cell:
        return cls.from_boc(base64.b64decode(text.strip()))

    # ── Dunder ─────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cell):
            return NotImplemented
        return self._hash == other._hash

    def __hash__(self) -> int:
        return int.from_bytes(self._hash[:8], "big")

    def __repr__(self) -> str:
        return f"<Cell bits={self._bit_length} refs={len(self._refs)} hash={self._hash.hex()[:16]}>"


def _check_unowned(refs: Iterable[Cell]) -> None:
    seen: set[int] = set()
    for r in refs:
        if r._owned:
            raise OwnershipError("cell is already referenced by another parent")
        if id(r) in seen:
            raise OwnershipError("cell is referenced twice by the same parent")
        seen.add(id(r))


class Builder:
    """Mutable cell under construction. Every ``store_*`` returns ``self``."""

    def __init__(self) -> None:
        self._acc = 0
        self._len = 0
        self._refs: list[Cell] = []
        self._finalized = False

    @property
    def bit_length(self) -> int:
        return self._len

    @property
    def remaining_bits(self) -> int:
        return MAX_BITS - self._len

    @property
    def refs(self) -> tuple[Cell, ...]:
        return tuple(self._refs)

    def _check_open(self) -> None:
        if self._finalized:
            raise CellError("builder is already finalized")

    def _append(self, value: int, bits: int) -> Builder:
        self._check_open()
        if self._len + bits > MAX_BITS:
            raise CapacityError(
                f"cannot store {bits} bits: {self._len}/{MAX_BITS} already used"
            )
        self._acc = (self._acc << bits) | value
        self._len += bits
        return self

    # ── Primitives ─────────────────────────────────────

    def store_bit(self, bit: bool | int) -> Builder:
        return self._append(1 if bit else 0, 1)

    def store_uint(self, value: int, bits: int) -> Builder:
        if bits < 0:
            raise RangeError(f"negative bit width {bits}")
        if value < 0 or value >> bits:
            raise RangeError(f"{value} does not fit in uint{bits}")
        return self._append(value, bits)

    def store_int(self, value: int, bits: int) -> Builder:
        if bits < 1:
            raise RangeError(f"invalid bit width {bits}")
        bound = 1 << (bits - 1)
        if not -bound <= value < bound:
            raise RangeError(f"{value} does not fit in int{bits}")
        return self._append(value & ((1 << bits) - 1), bits)

    def store_coins(self, amount: int) -> Builder:
        """Store a variable-length amount: 4-bit byte count, then the bytes."""
        if amount < 0 or amount >> (MAX_COINS_BYTES * 8):
            raise RangeError(f"coins amount {amount} out of range")
        n = (amount.bit_length() + 7) // 8
        return self._append((n << (n * 8)) | amount, 4 + n * 8)

    def store_buffer(self, data: bytes) -> Builder:
        if not data:
            self._check_open()
            return self
        return self._append(int.from_bytes(data, "big"), len(data) * 8)

    def store_address(self, address: Address | None) -> Builder:
        """Store addr_std (``10`` + anycast ``0`` + int8 workchain + 256-bit hash).

        ``None`` is stored as addr_none (``00``).
        """
        if address is None:
            return self._append(0, 2)
        value = (0b100 << 264) | ((address.workchain & 0xFF) << 256)
        value |= int.from_bytes(address.hash, "big")
        return self._append(value, 267)

    def store_ref(self, cell: Cell) -> Builder:
        """Attach ``cell`` as the next child.

        The cell is claimed only when this builder is finalized. A cell that
        is pending in two open builders is rejected by whichever calls
        ``end_cell`` second, and an abandoned builder leaves its children free.
        """
        self._check_open()
        if len(self._refs) >= MAX_REFS:
            raise CapacityError(f"cell already has {MAX_REFS} refs")
        if cell.is_owned:
            raise OwnershipError("cell is already referenced by another parent")
        if any(r is cell for r in self._refs):
            raise OwnershipError("cell is already attached to this builder")
        self._refs.append(cell)
        return self

    def store_maybe_ref(self, cell: Cell | None) -> Builder:
        if cell is None:
            return self.store_bit(0)
        if self._len >= MAX_BITS:
            raise CapacityError("no room for the maybe-ref flag")
        self.store_ref(cell)
        return self.store_bit(1)

    # ── Finalize ───────────────────────────────────────

    def end_cell(self) -> Cell:
        self._check_open()
        nbytes = (self._len + 7) // 8
        data = (self._acc << (nbytes * 8 - self._len)).to_bytes(nbytes, "big")
        cell = Cell(data, self._len, self._refs)
        self._finalized = True
        return cell


def begin_cell() -> Builder:
    return Builder()
