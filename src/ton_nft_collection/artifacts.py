"""Compiled contract artifacts (Blueprint ``build/<Name>.compiled.json``)."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from ton_nft_collection.boc.cell import Cell
from ton_nft_collection.errors import CellError, ConfigError

log = logging.getLogger(__name__)


class BuildArtifactCompiler:
    """Implements the Compiler protocol from pre-built JSON artifacts.

    Each call parses the artifact again, so every returned cell is a fresh,
    unowned tree.
    """

    def __init__(self, build_dir: str | Path = "build") -> None:
        self._build_dir = Path(build_dir).expanduser()

    def artifact_path(self, name: str) -> Path:
        return self._build_dir / f"{name}.compiled.json"

    def compile(self, name: str) -> Cell:
        path = self.artifact_path(name)
        if not path.exists():
            raise ConfigError(f"no build artifact for {name!r} at {path}")

        try:
            with open(path) as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise ConfigError(f"cannot read {path}: {exc}") from exc

        code_hex = data.get("hex") if isinstance(data, dict) else None
        if not isinstance(code_hex, str):
            raise ConfigError(f"{path} has no 'hex' field")

        try:
            cell = Cell.from_hex(code_hex)
        except (CellError, ValueError) as exc:
            raise ConfigError(f"{path}: invalid code BoC: {exc}") from exc

        log.debug("Loaded %s code (hash %s)", name, cell.hash().hex()[:16])
        return cell
