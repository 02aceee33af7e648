"""Typed values on a get-method stack."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from ton_nft_collection.boc.cell import Cell


class StackKind(str, Enum):
    INT = "int"
    CELL = "cell"
    SLICE = "slice"
    NULL = "null"


@dataclass(frozen=True)
class StackInt:
    value: int
    kind = StackKind.INT


@dataclass(frozen=True)
class StackCell:
    cell: Cell
    kind = StackKind.CELL


@dataclass(frozen=True)
class StackSlice:
    """A slice value; carried as the cell it was cut from."""

    cell: Cell
    kind = StackKind.SLICE


@dataclass(frozen=True)
class StackNull:
    kind = StackKind.NULL


StackEntry = Union[StackInt, StackCell, StackSlice, StackNull]
