"""Configuration models for the CLI."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ton_nft_collection.boc.cell import Cell
from ton_nft_collection.errors import ConfigError, RangeError
from ton_nft_collection.models.address import Address
from ton_nft_collection.models.collection import CollectionConfig, RoyaltyParams
from ton_nft_collection.utils import to_nano


class Network(str, Enum):
    """Target network; only affects address formatting."""

    MAINNET = "mainnet"
    TESTNET = "testnet"


@dataclass
class RoyaltyConfig:
    """Royalty section. An empty address means "pay the owner"."""

    factor: int = 10
    base: int = 100
    address: str = ""


@dataclass
class BuildConfig:
    """Where compiled contract artifacts live."""

    build_dir: str = "build"
    collection_contract: str = "NftCollection"
    item_contract: str = "NftItem"


@dataclass
class AppConfig:
    """Complete CLI configuration."""

    # Network
    network: Network = Network.TESTNET
    workchain: int = 0
    log_level: str = "info"

    # Collection
    owner_address: str = ""  # loaded from env var TON_NFT_OWNER if unset
    next_item_index: int = 0
    collection_content_url: str = ""
    common_content_url: str = ""
    mint_price: str = "0.1"  # TON, decimal string

    royalty: RoyaltyConfig = field(default_factory=RoyaltyConfig)
    build: BuildConfig = field(default_factory=BuildConfig)

    @property
    def test_only(self) -> bool:
        return self.network is Network.TESTNET

    def owner(self) -> Address:
        if not self.owner_address:
            raise ConfigError("no owner address configured")
        return _parse_address(self.owner_address, "owner_address")

    def to_collection_config(self, nft_item_code: Cell) -> CollectionConfig:
        owner = self.owner()
        royalty_address = (
            _parse_address(self.royalty.address, "royalty.address")
            if self.royalty.address
            else owner
        )
        return CollectionConfig(
            owner_address=owner,
            next_item_index=self.next_item_index,
            collection_content_url=self.collection_content_url,
            common_content_url=self.common_content_url,
            nft_item_code=nft_item_code,
            royalty_params=RoyaltyParams(
                factor=self.royalty.factor,
                base=self.royalty.base,
                address=royalty_address,
            ),
            mint_price=to_nano(self.mint_price),
        )


def _parse_address(text: str, name: str) -> Address:
    try:
        return Address.parse(text)
    except RangeError as exc:
        raise ConfigError(f"{name}: {exc.message}") from exc
