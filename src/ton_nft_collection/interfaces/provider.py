"""ContractProvider protocol - the transport the wrapper sends through."""

from __future__ import annotations

from enum import IntFlag
from typing import Protocol, Sequence

from ton_nft_collection.boc.cell import Cell
from ton_nft_collection.models.address import Address
from ton_nft_collection.models.stack import StackEntry
from ton_nft_collection.state_init import StateInit


class SendMode(IntFlag):
    """Outbound message send-mode flags."""

    NONE = 0
    PAY_GAS_SEPARATELY = 1
    IGNORE_ERRORS = 2
    CARRY_ALL_REMAINING_INCOMING_VALUE = 64
    CARRY_ALL_REMAINING_BALANCE = 128


class ContractProvider(Protocol):
    """Sends internal messages to, and runs get-methods on, one contract.

    Implemented by the blockchain client (wallet + RPC); retries and
    timeouts are its concern.
    """

    async def send_internal_message(
        self,
        destination: Address,
        value: int,
        body: Cell,
        *,
        send_mode: SendMode = SendMode.PAY_GAS_SEPARATELY,
        init: StateInit | None = None,
    ) -> object:
        """Send ``value`` nanotons with ``body``; ``init`` deploys the contract."""
        ...

    async def run_get_method(
        self,
        name: str,
        args: Sequence[StackEntry] = (),
    ) -> list[StackEntry]:
        """Run a read-only get-method and return its result stack in order."""
        ...
