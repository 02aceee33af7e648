"""Standard internal account address (addr_std) and its text forms."""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass

from ton_nft_collection.errors import RangeError

# User-friendly address tag bits
_TAG_BOUNCEABLE = 0x11
_TAG_NON_BOUNCEABLE = 0x51
_FLAG_TEST_ONLY = 0x80


def _crc16(data: bytes) -> bytes:
    """CRC16-XMODEM as used by user-friendly addresses."""
    return binascii.crc_hqx(data, 0).to_bytes(2, "big")


@dataclass(frozen=True)
class Address:
    """Account address: signed 8-bit workchain + 256-bit account hash."""

    workchain: int
    hash: bytes

    def __post_init__(self) -> None:
        if not -128 <= self.workchain <= 127:
            raise RangeError(f"workchain {self.workchain} does not fit in int8")
        if len(self.hash) != 32:
            raise RangeError(f"address hash must be 32 bytes, got {len(self.hash)}")

    @classmethod
    def parse(cls, text: str) -> Address:
        """Parse a raw (``0:<hex>``) or user-friendly (base64) address."""
        text = text.strip()
        if ":" in text:
            return cls.parse_raw(text)
        return cls.parse_friendly(text)[0]

    @classmethod
    def parse_raw(cls, text: str) -> Address:
        wc, _, hex_hash = text.partition(":")
        try:
            return cls(int(wc), bytes.fromhex(hex_hash))
        except ValueError as exc:
            raise RangeError(f"invalid raw address {text!r}: {exc}") from exc

    @classmethod
    def parse_friendly(cls, text: str) -> tuple[Address, bool, bool]:
        """Parse a 48-char friendly address.

        Returns ``(address, bounceable, test_only)``.
        """
        if len(text) != 48:
            raise RangeError(f"friendly address must be 48 chars, got {len(text)}")
        try:
            raw = base64.b64decode(text.replace("-", "+").replace("_", "/"), validate=True)
        except binascii.Error as exc:
            raise RangeError(f"invalid base64 address {text!r}") from exc

        if _crc16(raw[:34]) != raw[34:]:
            raise RangeError(f"checksum mismatch in address {text!r}")

        tag = raw[0]
        test_only = bool(tag & _FLAG_TEST_ONLY)
        tag &= ~_FLAG_TEST_ONLY
        if tag not in (_TAG_BOUNCEABLE, _TAG_NON_BOUNCEABLE):
            raise RangeError(f"unknown address tag 0x{tag:02x}")

        workchain = int.from_bytes(raw[1:2], "big", signed=True)
        return cls(workchain, raw[2:34]), tag == _TAG_BOUNCEABLE, test_only

    def to_raw(self) -> str:
        return f"{self.workchain}:{self.hash.hex()}"

    def to_string(
        self,
        bounceable: bool = True,
        test_only: bool = False,
        url_safe: bool = True,
    ) -> str:
        """Format as a user-friendly base64 address."""
        tag = _TAG_BOUNCEABLE if bounceable else _TAG_NON_BOUNCEABLE
        if test_only:
            tag |= _FLAG_TEST_ONLY
        body = bytes([tag]) + self.workchain.to_bytes(1, "big", signed=True) + self.hash
        encoded = base64.b64encode(body + _crc16(body)).decode("ascii")
        if url_safe:
            encoded = encoded.replace("+", "-").replace("/", "_")
        return encoded

    def __str__(self) -> str:
        return self.to_string()
