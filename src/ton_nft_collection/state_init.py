"""StateInit cell and the contract address derived from it."""

from __future__ import annotations

from dataclasses import dataclass, field

from ton_nft_collection.boc.cell import Builder, Cell
from ton_nft_collection.models.address import Address


@dataclass(frozen=True)
class StateInit:
    """Code and data a contract is deployed with.

    The StateInit cell holds copies of ``code`` and ``data``, so callers can
    reuse their cells. It is built once and reused for both the address and
    the deploy message.
    """

    code: Cell
    data: Cell
    cell: Cell = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # split_depth:nothing special:nothing code:just data:just library:nothing
        cell = (
            Builder()
            .store_bit(0)
            .store_bit(0)
            .store_maybe_ref(self.code.copy())
            .store_maybe_ref(self.data.copy())
            .store_bit(0)
            .end_cell()
        )
        object.__setattr__(self, "cell", cell)


def contract_address(workchain: int, init: StateInit) -> Address:
    """Address of the contract that ``init`` deploys in ``workchain``."""
    return Address(workchain, init.cell.hash())
