"""Tests 22-26: Operation message bodies."""

from __future__ import annotations

import pytest

from ton_nft_collection.errors import CapacityError, RangeError
from ton_nft_collection.models.address import Address
from ton_nft_collection.wrappers.bodies import (
    BODY_LAYOUTS,
    Opcodes,
    batch_mint_body,
    build_body,
    change_mint_price_body,
    change_owner_body,
    get_royalty_params_body,
    mint_body,
)

from tests.factories import RECIPIENT_FRIENDLY, make_address


# ── Test 22: Opcode values ───────────────────────────────────────


def test_opcode_values_are_fixed():
    assert Opcodes.GET_ROYALTY_PARAMS == 0x693D3950
    assert Opcodes.MINT == 1
    assert Opcodes.BATCH_MINT == 2
    assert Opcodes.CHANGE_OWNER == 3
    assert Opcodes.CHANGE_MINT_PRICE == 4


def test_every_opcode_has_a_layout():
    assert set(BODY_LAYOUTS) == set(Opcodes)


@pytest.mark.parametrize(
    ("body", "op"),
    [
        (lambda: get_royalty_params_body(9), Opcodes.GET_ROYALTY_PARAMS),
        (lambda: mint_body(9, 0, 0, make_address(), "/0.json"), Opcodes.MINT),
        (lambda: batch_mint_body(9), Opcodes.BATCH_MINT),
        (lambda: change_owner_body(9, make_address()), Opcodes.CHANGE_OWNER),
        (lambda: change_mint_price_body(9, 1), Opcodes.CHANGE_MINT_PRICE),
    ],
)
def test_header_precedes_fields(body, op):
    s = body().begin_parse()
    assert s.load_uint(32) == op
    assert s.load_uint(64) == 9


# ── Test 23: Mint ────────────────────────────────────────────────


def test_mint_body_layout():
    owner = Address.parse(RECIPIENT_FRIENDLY)
    cell = mint_body(
        query_id=1_700_000_000_000,
        index=0,
        coins_for_storage=50_000_000,
        owner_address=owner,
        content="/nft.json",
    )

    assert cell.bit_length == 32 + 64 + 64 + 4 + 32
    assert len(cell.refs) == 1

    s = cell.begin_parse()
    assert s.load_uint(32) == 1
    assert s.load_uint(64) == 1_700_000_000_000
    assert s.load_uint(64) == 0
    assert s.load_uint(4) == 4
    assert s.load_uint(32) == 50_000_000
    item = s.load_ref()
    s.end_parse()

    assert item.bit_length == 267
    assert len(item.refs) == 1
    i = item.begin_parse()
    assert i.load_address() == owner
    assert i.load_ref().data == b"/nft.json"
    i.end_parse()


def test_mint_content_is_untagged():
    cell = mint_body(1, 1, 0, make_address(), "")
    content = cell.refs[0].refs[0]
    assert content.bit_length == 0


def test_mint_encoding_is_deterministic():
    args = (5, 7, 123, make_address("x"), "/7.json")
    assert mint_body(*args) == mint_body(*args)
    assert mint_body(*args).hash() != mint_body(6, 7, 123, make_address("x"), "/7.json").hash()


# ── Test 24: Owner, price, batch, royalty ────────────────────────


def test_change_owner_body(other):
    cell = change_owner_body(42, other)
    assert cell.bit_length == 32 + 64 + 267
    assert cell.refs == ()

    s = cell.begin_parse()
    s.skip(96)
    assert s.load_address() == other


def test_change_mint_price_body():
    cell = change_mint_price_body(1, 250_000_000)
    assert cell.bit_length == 32 + 64 + 64
    s = cell.begin_parse()
    s.skip(96)
    assert s.load_uint(64) == 250_000_000


def test_header_only_bodies():
    for cell in (batch_mint_body(3), get_royalty_params_body(3)):
        assert cell.bit_length == 96
        assert cell.refs == ()

    assert get_royalty_params_body(3).data[:4] == bytes.fromhex("693d3950")


# ── Test 25: Out-of-range fields ─────────────────────────────────


@pytest.mark.parametrize(
    "call",
    [
        lambda: mint_body(2**64, 0, 0, make_address(), "/a"),
        lambda: mint_body(-1, 0, 0, make_address(), "/a"),
        lambda: mint_body(0, 2**64, 0, make_address(), "/a"),
        lambda: mint_body(0, 0, 2**120, make_address(), "/a"),
        lambda: change_mint_price_body(0, 2**64),
        lambda: batch_mint_body(2**64),
    ],
)
def test_out_of_range_rejected(call):
    with pytest.raises(RangeError):
        call()


def test_oversized_content_rejected():
    with pytest.raises(CapacityError):
        mint_body(0, 0, 0, make_address(), "/" + "a" * 127)


# ── Test 26: Generic builder ─────────────────────────────────────


def test_build_body_requires_every_field():
    with pytest.raises(TypeError):
        build_body(Opcodes.CHANGE_MINT_PRICE, 1)


def test_build_body_rejects_missing_address():
    with pytest.raises(TypeError):
        build_body(Opcodes.CHANGE_OWNER, 1, new_owner_address=None)
