"""Compiler protocol - supplies compiled contract code cells."""

from __future__ import annotations

from typing import Protocol

from ton_nft_collection.boc.cell import Cell


class Compiler(Protocol):
    """Resolves a contract name to its compiled code cell."""

    def compile(self, name: str) -> Cell:
        """Return a fresh code cell for contract ``name``."""
        ...
