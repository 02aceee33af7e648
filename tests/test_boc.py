"""Tests 32-35: Bag-of-cells serialization."""

from __future__ import annotations

import pytest

from ton_nft_collection.boc.cell import Builder, Cell
from ton_nft_collection.boc.serialization import crc32c, deserialize_boc, serialize_boc
from ton_nft_collection.content import decode_offchain_content, encode_offchain_content
from ton_nft_collection.errors import BocError
from ton_nft_collection.wrappers.collection import nft_collection_config_to_cell

from tests.factories import make_collection_config

# Root "1" with refs [c, a]; a = "1111111" with ref c; c = 0x0aaaaa.
# Cell order in the bag: root, a, c.
KNOWN_BOC = "b5ee9c7201010301000e000201c002010101ff0200060aaaaa"


def _known_tree() -> Cell:
    c = Builder().store_uint(0x0AAAAA, 24).end_cell()
    a = Builder().store_uint(0b1111111, 7).store_ref(c.copy()).end_cell()
    return Builder().store_bit(1).store_ref(c).store_ref(a).end_cell()


# ── Test 32: Known vector ────────────────────────────────────────


def test_serialize_known_vector():
    assert _known_tree().to_hex() == KNOWN_BOC


def test_parse_known_vector():
    root = Cell.from_hex(KNOWN_BOC)
    assert root == _known_tree()
    assert root.bit_string() == "1"

    c, a = root.refs
    assert a.bit_string() == "1111111"
    assert c.data == bytes.fromhex("0aaaaa")
    assert a.refs[0] == c
    # The shared child c comes back as two distinct owned cells.
    assert a.refs[0] is not c


def test_crc32c_check_value():
    assert crc32c(b"123456789") == 0xE3069283
    assert crc32c(b"") == 0


# ── Test 33: Flags and encodings ─────────────────────────────────


@pytest.mark.parametrize(
    ("crc", "idx"),
    [(False, False), (True, False), (False, True), (True, True)],
)
def test_flag_combinations_parse_back(crc, idx):
    root = _known_tree()
    data = serialize_boc(root, crc32c=crc, has_idx=idx)
    assert data[4] & 0x40 == (0x40 if crc else 0)
    assert data[4] & 0x80 == (0x80 if idx else 0)
    assert deserialize_boc(data) == root


def test_base64_and_hex_agree():
    cell = encode_offchain_content("https://x/c.json")
    assert Cell.from_base64(cell.to_base64()) == cell
    assert Cell.from_hex(cell.to_hex()) == cell


def test_collection_data_tree_parses_back(collection_config):
    data = nft_collection_config_to_cell(collection_config)
    parsed = Cell.from_boc(data.to_boc(crc32c=True))
    assert parsed.hash() == data.hash()
    assert decode_offchain_content(parsed.refs[0].refs[0]) == collection_config.collection_content_url


def test_parsed_tree_is_reusable():
    parsed = Cell.from_hex(KNOWN_BOC)
    assert not parsed.is_owned
    Builder().store_ref(parsed).end_cell()


# ── Test 34: Deduplication ───────────────────────────────────────


def test_identical_subtrees_stored_once():
    leaf = Builder().store_uint(7, 8).end_cell()
    root = Builder().store_ref(leaf).store_ref(leaf.copy()).end_cell()
    data = root.to_boc()
    assert data[6] == 2  # cell count


def test_depth_survives_round_trip():
    config = make_collection_config()
    code_depth = config.nft_item_code.depth()
    parsed = Cell.from_boc(config.nft_item_code.to_boc())
    assert parsed.depth() == code_depth


# ── Test 35: Malformed input ─────────────────────────────────────


def _with_crc() -> bytearray:
    return bytearray(serialize_boc(_known_tree(), crc32c=True))


@pytest.mark.parametrize(
    "data",
    [
        b"",
        b"\x00\x00\x00\x00",
        bytes.fromhex(KNOWN_BOC)[:-1],
        bytes.fromhex("b5ee9c72" "00" "01"),  # zero ref size
        bytes.fromhex("b5ee9c72" "01" "01" "01" "02" "00" "02" "00" "0000"),  # two roots
        bytes.fromhex("b5ee9c72" "01" "01" "01" "01" "00" "02" "05" "0000"),  # root out of range
    ],
)
def test_malformed_rejected(data):
    with pytest.raises(BocError):
        deserialize_boc(data)


def test_crc_mismatch_rejected():
    data = _with_crc()
    data[-1] ^= 0xFF
    with pytest.raises(BocError):
        deserialize_boc(bytes(data))


def test_tampered_payload_detected_by_crc():
    data = _with_crc()
    data[-5] ^= 0x01
    with pytest.raises(BocError):
        deserialize_boc(bytes(data))


def test_size_mismatch_rejected():
    data = bytearray.fromhex(KNOWN_BOC)
    data[9] += 1  # tot_cells_size
    with pytest.raises(BocError):
        deserialize_boc(bytes(data))


def test_exotic_cell_rejected():
    data = bytearray.fromhex(KNOWN_BOC)
    data[-5] |= 0x08  # d1 of the last cell
    with pytest.raises(BocError):
        deserialize_boc(bytes(data))
