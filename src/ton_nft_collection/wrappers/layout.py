"""Field layout tables and the writer that applies them to a builder.

Every on-chain structure this package produces is described by an ordered
tuple of :class:`Field` entries. The tables are the wire contract of the
deployed collection contract: order and widths must not change.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, NamedTuple, Sequence

from ton_nft_collection.boc.cell import Builder, Cell


class FieldKind(str, Enum):
    UINT = "uint"
    COINS = "coins"
    ADDRESS = "address"
    REF = "ref"


class Field(NamedTuple):
    name: str
    kind: FieldKind
    bits: int = 0


def uint(name: str, bits: int) -> Field:
    return Field(name, FieldKind.UINT, bits)


def coins(name: str) -> Field:
    return Field(name, FieldKind.COINS)


def address(name: str) -> Field:
    return Field(name, FieldKind.ADDRESS)


def ref(name: str) -> Field:
    return Field(name, FieldKind.REF)


def write_fields(builder: Builder, layout: Sequence[Field], values: Mapping[str, Any]) -> Builder:
    """Store ``values`` into ``builder`` in ``layout`` order."""
    missing = [f.name for f in layout if f.name not in values]
    if missing:
        raise TypeError(f"missing layout fields: {', '.join(missing)}")

    for f in layout:
        value = values[f.name]
        if f.kind is FieldKind.UINT:
            builder.store_uint(value, f.bits)
        elif f.kind is FieldKind.COINS:
            builder.store_coins(value)
        elif f.kind is FieldKind.ADDRESS:
            if value is None:
                raise TypeError(f"field {f.name!r} requires an address")
            builder.store_address(value)
        else:
            builder.store_ref(value)
    return builder


def build_cell(layout: Sequence[Field], values: Mapping[str, Any]) -> Cell:
    return write_fields(Builder(), layout, values).end_cell()
