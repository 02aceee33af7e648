"""Shared fixtures for ton_nft_collection tests."""

from __future__ import annotations

import pytest
from pytest_metadata.plugin import metadata_key

from ton_nft_collection.models.address import Address
from ton_nft_collection.models.collection import CollectionConfig
from ton_nft_collection.wrappers.bodies import Opcodes

from tests.factories import make_address, make_collection_config
from tests.mocks import MockCompiler, MockProvider


# ── Report metadata ──────────────────────────────────────────────


def pytest_configure(config):
    """Add the wire-format opcode table to the report Environment table."""
    meta = config.stash.setdefault(metadata_key, {})
    meta["Contract"] = "NftCollection"
    meta["Opcodes"] = ", ".join(f"{op.name}=0x{op.value:08x}" for op in Opcodes)


# ── Fixtures ─────────────────────────────────────────────────────


@pytest.fixture
def owner() -> Address:
    return make_address("deployer")


@pytest.fixture
def other() -> Address:
    return make_address("someone-else", workchain=-1)


@pytest.fixture
def collection_config(owner) -> CollectionConfig:
    """Default collection config; its item code cell is fresh per test."""
    return make_collection_config(owner_address=owner)


@pytest.fixture
def provider() -> MockProvider:
    return MockProvider()


@pytest.fixture
def compiler() -> MockCompiler:
    return MockCompiler()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's TON_NFT_* variables out of config loading."""
    for name in ("OWNER", "NETWORK", "MINT_PRICE", "BUILD_DIR"):
        monkeypatch.delenv(f"TON_NFT_{name}", raising=False)
