"""Configuration loading: TOML file + environment variables."""

from __future__ import annotations

import logging
import os
from pathlib import Path

try:
    import tomllib  # Python 3.11+
except ModuleNotFoundError:
    import tomli as tomllib  # type: ignore[no-redef]

from ton_nft_collection.errors import ConfigError
from ton_nft_collection.models.config import AppConfig, BuildConfig, Network, RoyaltyConfig


def load_config(
    config_path: str | Path | None = None,
    env_prefix: str = "TON_NFT_",
) -> AppConfig:
    """Load CLI configuration from a TOML file and env vars.

    Priority (highest wins):
        1. Environment variables (TON_NFT_OWNER, etc.)
        2. TOML config file
        3. Defaults from AppConfig
    """
    raw: dict = {}
    if config_path is not None:
        p = Path(config_path).expanduser()
        if p.exists():
            try:
                with open(p, "rb") as f:
                    raw = tomllib.load(f)
            except tomllib.TOMLDecodeError as exc:
                raise ConfigError(f"{p}: {exc}") from exc

    cfg = AppConfig()

    try:
        # ── Network section ────────────────────────────────────
        network = raw.get("network", {})
        if v := network.get("network"):
            cfg.network = Network(v)
        if (v := network.get("workchain")) is not None:
            cfg.workchain = int(v)
        if v := network.get("log_level"):
            cfg.log_level = str(v)

        # ── Collection section ─────────────────────────────────
        collection = raw.get("collection", {})
        if v := collection.get("owner_address"):
            cfg.owner_address = str(v)
        if (v := collection.get("next_item_index")) is not None:
            cfg.next_item_index = int(v)
        if v := collection.get("collection_content_url"):
            cfg.collection_content_url = str(v)
        if v := collection.get("common_content_url"):
            cfg.common_content_url = str(v)
        if (v := collection.get("mint_price")) is not None:
            cfg.mint_price = str(v)

        # ── Royalty section ────────────────────────────────────
        royalty = raw.get("royalty", {})
        cfg.royalty = RoyaltyConfig(
            factor=int(royalty.get("factor", 10)),
            base=int(royalty.get("base", 100)),
            address=str(royalty.get("address", "")),
        )

        # ── Build section ──────────────────────────────────────
        build = raw.get("build", {})
        cfg.build = BuildConfig(
            build_dir=str(build.get("build_dir", "build")),
            collection_contract=str(build.get("collection_contract", "NftCollection")),
            item_contract=str(build.get("item_contract", "NftItem")),
        )

        # ── Environment variable overrides (highest priority) ──
        if owner := os.environ.get(f"{env_prefix}OWNER"):
            cfg.owner_address = owner
        if net := os.environ.get(f"{env_prefix}NETWORK"):
            cfg.network = Network(net)
        if price := os.environ.get(f"{env_prefix}MINT_PRICE"):
            cfg.mint_price = price
        if build_dir := os.environ.get(f"{env_prefix}BUILD_DIR"):
            cfg.build.build_dir = build_dir
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"invalid configuration: {exc}") from exc

    if not isinstance(logging.getLevelName(cfg.log_level.upper()), int):
        raise ConfigError(f"unknown log level {cfg.log_level!r}")

    # Expand ~ in paths
    cfg.build.build_dir = str(Path(cfg.build.build_dir).expanduser())

    return cfg
