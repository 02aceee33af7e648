"""Sequential reader over a cell's bits and refs."""

from __future__ import annotations

from ton_nft_collection.boc.cell import Cell
from ton_nft_collection.errors import CellUnderflow, UnsupportedAddressKind
from ton_nft_collection.models.address import Address

# addr_std / addr_none tags (2 bits)
ADDR_NONE = 0b00
ADDR_EXTERN = 0b01
ADDR_STD = 0b10
ADDR_VAR = 0b11

_ADDR_KIND_NAMES = {ADDR_NONE: "addr_none", ADDR_EXTERN: "addr_extern", ADDR_VAR: "addr_var"}


class Slice:
    """Reads fields back out of a finalized :class:`Cell` in store order."""

    def __init__(self, cell: Cell) -> None:
        self._cell = cell
        self._value = int.from_bytes(cell.data, "big")
        self._width = len(cell.data) * 8
        self._bit_pos = 0
        self._ref_pos = 0

    @property
    def remaining_bits(self) -> int:
        return self._cell.bit_length - self._bit_pos

    @property
    def remaining_refs(self) -> int:
        return len(self._cell.refs) - self._ref_pos

    def _take(self, bits: int) -> int:
        if bits < 0:
            raise CellUnderflow(f"negative read width {bits}")
        if bits > self.remaining_bits:
            raise CellUnderflow(
                f"cannot read {bits} bits, only {self.remaining_bits} remain"
            )
        shift = self._width - self._bit_pos - bits
        self._bit_pos += bits
        return (self._value >> shift) & ((1 << bits) - 1)

    # ── Primitives ─────────────────────────────────────

    def load_bit(self) -> bool:
        return bool(self._take(1))

    def load_uint(self, bits: int) -> int:
        return self._take(bits)

    def preload_uint(self, bits: int) -> int:
        pos = self._bit_pos
        value = self._take(bits)
        self._bit_pos = pos
        return value

    def load_int(self, bits: int) -> int:
        value = self._take(bits)
        if bits and value >> (bits - 1):
            value -= 1 << bits
        return value

    def load_coins(self) -> int:
        n = self._take(4)
        return self._take(n * 8)

    def load_bytes(self, length: int) -> bytes:
        return self._take(length * 8).to_bytes(length, "big")

    def load_remaining_bytes(self) -> bytes:
        return self.load_bytes(self.remaining_bits // 8)

    def skip(self, bits: int) -> Slice:
        self._take(bits)
        return self

    def load_maybe_address(self) -> Address | None:
        """Read addr_std, or ``None`` for addr_none."""
        tag = self._take(2)
        if tag == ADDR_NONE:
            return None
        if tag != ADDR_STD:
            raise UnsupportedAddressKind(f"{_ADDR_KIND_NAMES[tag]} is not supported")
        if self._take(1):
            raise UnsupportedAddressKind("anycast addresses are not supported")
        workchain = self.load_int(8)
        return Address(workchain, self.load_bytes(32))

    def load_address(self) -> Address:
        address = self.load_maybe_address()
        if address is None:
            raise UnsupportedAddressKind("addr_none where an address is required")
        return address

    def load_ref(self) -> Cell:
        if not self.remaining_refs:
            raise CellUnderflow("no refs remain")
        ref = self._cell.refs[self._ref_pos]
        self._ref_pos += 1
        return ref

    def load_maybe_ref(self) -> Cell | None:
        if self.load_bit():
            return self.load_ref()
        return None

    def end_parse(self) -> None:
        """Raise unless every bit and ref has been consumed."""
        if self.remaining_bits or self.remaining_refs:
            raise CellUnderflow(
                f"{self.remaining_bits} bits and {self.remaining_refs} refs left unread"
            )

    def __repr__(self) -> str:
        return f"<Slice bits={self.remaining_bits} refs={self.remaining_refs}>"
