"""Exception hierarchy for cell construction, decoding, and configuration.

Every error carries a stable snake_case ``code`` so callers (and the CLI)
can classify failures without parsing messages.
"""

from __future__ import annotations


class NftCollectionError(Exception):
    """Base class for all ton_nft_collection errors."""

    default_code = "nft_collection_error"

    def __init__(self, message: str = "", *, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code

    def __str__(self) -> str:
        if self.message:
            return f"{self.code}: {self.message}"
        return self.code


# ── Cell construction ──────────────────────────────────


class CellError(NftCollectionError):
    """A cell could not be built or read."""

    default_code = "cell_error"


class RangeError(CellError, ValueError):
    """A value does not fit in its declared bit width."""

    default_code = "range_error"


class CapacityError(CellError):
    """The 1023-bit or 4-ref limit of a cell would be exceeded."""

    default_code = "capacity_error"


class OwnershipError(CellError):
    """A cell was attached to a second parent."""

    default_code = "ownership_error"


class CellUnderflow(CellError, IndexError):
    """A read went past the end of a cell's bits or refs."""

    default_code = "cell_underflow"


class BocError(CellError):
    """Malformed bag-of-cells bytes."""

    default_code = "boc_error"


# ── Decoding ───────────────────────────────────────────


class DecodeError(NftCollectionError):
    """A value could not be decoded into the expected shape."""

    default_code = "decode_error"


class UnsupportedAddressKind(DecodeError):
    """An address layout other than a plain addr_std was encountered."""

    default_code = "unsupported_address_kind"


class UnsupportedContentTag(DecodeError):
    """Content cell is not tagged as off-chain content."""

    default_code = "unsupported_content_tag"


class UnexpectedStackShape(DecodeError):
    """A get-method stack entry has the wrong kind."""

    default_code = "unexpected_stack_shape"


class StackExhausted(DecodeError):
    """A get-method stack has fewer entries than the method returns."""

    default_code = "stack_exhausted"


# ── Configuration ──────────────────────────────────────


class ConfigError(NftCollectionError):
    """Invalid configuration value or build artifact."""

    default_code = "config_error"
