"""Tests 47-50: Config loading, build artifacts, and amount helpers."""

from __future__ import annotations

import json
from decimal import Decimal

import pytest

from ton_nft_collection.artifacts import BuildArtifactCompiler
from ton_nft_collection.config import load_config
from ton_nft_collection.errors import ConfigError
from ton_nft_collection.models.address import Address
from ton_nft_collection.models.config import AppConfig, Network
from ton_nft_collection.utils import from_nano, to_nano

from tests.factories import COLLECTION_FRIENDLY, RECIPIENT_FRIENDLY, make_code_cell


def _write(tmp_path, text: str):
    path = tmp_path / "collection.toml"
    path.write_text(text)
    return path


# ── Test 47: TOML and env ────────────────────────────────────────


def test_defaults_without_file():
    cfg = load_config()
    assert cfg.network is Network.TESTNET
    assert cfg.test_only
    assert cfg.mint_price == "0.1"
    assert cfg.royalty.factor == 10 and cfg.royalty.base == 100
    assert cfg.build.collection_contract == "NftCollection"


def test_missing_file_uses_defaults(tmp_path):
    assert load_config(tmp_path / "nope.toml") == AppConfig()


def test_toml_sections(tmp_path):
    path = _write(
        tmp_path,
        f"""
[network]
network = "mainnet"
workchain = -1
log_level = "debug"

[collection]
owner_address = "{COLLECTION_FRIENDLY}"
next_item_index = 4
mint_price = 0.5

[royalty]
factor = 5
base = 1000
address = "{RECIPIENT_FRIENDLY}"

[build]
build_dir = "artifacts"
item_contract = "Item"
""",
    )
    cfg = load_config(path)

    assert cfg.network is Network.MAINNET
    assert cfg.workchain == -1
    assert cfg.log_level == "debug"
    assert cfg.owner_address == COLLECTION_FRIENDLY
    assert cfg.next_item_index == 4
    assert cfg.mint_price == "0.5"
    assert (cfg.royalty.factor, cfg.royalty.base) == (5, 1000)
    assert cfg.build.build_dir == "artifacts"
    assert cfg.build.item_contract == "Item"


def test_env_overrides_file(tmp_path, monkeypatch):
    path = _write(tmp_path, f'[collection]\nowner_address = "{COLLECTION_FRIENDLY}"\n')
    monkeypatch.setenv("TON_NFT_OWNER", RECIPIENT_FRIENDLY)
    monkeypatch.setenv("TON_NFT_NETWORK", "mainnet")
    monkeypatch.setenv("TON_NFT_MINT_PRICE", "2")

    cfg = load_config(path)
    assert cfg.owner_address == RECIPIENT_FRIENDLY
    assert cfg.network is Network.MAINNET
    assert cfg.mint_price == "2"


@pytest.mark.parametrize(
    "text",
    [
        "[network\n",
        '[network]\nnetwork = "devnet"\n',
        '[collection]\nnext_item_index = "many"\n',
        '[network]\nlog_level = "loud"\n',
    ],
)
def test_invalid_config(tmp_path, text):
    with pytest.raises(ConfigError):
        load_config(_write(tmp_path, text))


# ── Test 48: AppConfig to CollectionConfig ───────────────────────


def test_to_collection_config():
    cfg = AppConfig(
        owner_address=COLLECTION_FRIENDLY,
        collection_content_url="https://x/c.json",
        common_content_url="https://x/",
        mint_price="0.1",
    )
    code = make_code_cell()
    config = cfg.to_collection_config(code)

    owner = Address.parse(COLLECTION_FRIENDLY)
    assert config.owner_address == owner
    assert config.royalty_params.address == owner
    assert config.mint_price == 100_000_000
    assert config.nft_item_code is code


def test_bad_owner_is_config_error():
    with pytest.raises(ConfigError):
        AppConfig(owner_address="0:zz").owner()
    with pytest.raises(ConfigError):
        AppConfig().owner()


# ── Test 49: Build artifacts ─────────────────────────────────────


def test_artifact_compiler_loads_hex(tmp_path):
    code = make_code_cell(0xABCD)
    (tmp_path / "NftItem.compiled.json").write_text(json.dumps({"hex": code.to_hex()}))

    compiler = BuildArtifactCompiler(tmp_path)
    first = compiler.compile("NftItem")
    second = compiler.compile("NftItem")
    assert first == code
    assert first is not second


@pytest.mark.parametrize(
    "content",
    ["not json", json.dumps(["hex"]), json.dumps({"hash": "00"}), json.dumps({"hex": "b5ee"})],
)
def test_artifact_errors(tmp_path, content):
    (tmp_path / "Bad.compiled.json").write_text(content)
    with pytest.raises(ConfigError):
        BuildArtifactCompiler(tmp_path).compile("Bad")


def test_missing_artifact(tmp_path):
    with pytest.raises(ConfigError):
        BuildArtifactCompiler(tmp_path).compile("Missing")


# ── Test 50: Amounts ─────────────────────────────────────────────


@pytest.mark.parametrize(
    ("amount", "nano"),
    [("0.05", 50_000_000), ("1", 1_000_000_000), (2, 2_000_000_000), (Decimal("0.000000001"), 1)],
)
def test_to_nano(amount, nano):
    assert to_nano(amount) == nano


@pytest.mark.parametrize("amount", ["abc", "0.0000000001", "nan", "inf"])
def test_to_nano_rejects(amount):
    with pytest.raises(ValueError):
        to_nano(amount)


@pytest.mark.parametrize(
    ("nano", "text"),
    [(0, "0"), (100_000_000, "0.1"), (1_500_000_000, "1.5"), (1, "0.000000001"), (-50_000_000, "-0.05")],
)
def test_from_nano(nano, text):
    assert from_nano(nano) == text
