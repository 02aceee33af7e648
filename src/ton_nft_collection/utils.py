"""Amount conversion helpers."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

NANO_PER_TON = 1_000_000_000


def to_nano(amount: str | int | Decimal) -> int:
    """Convert a TON amount (e.g. ``"0.05"``) to nanotons."""
    try:
        nano = Decimal(str(amount)) * NANO_PER_TON
    except InvalidOperation:
        raise ValueError(f"invalid TON amount {amount!r}") from None
    if not nano.is_finite():
        raise ValueError(f"invalid TON amount {amount!r}")
    if nano != nano.to_integral_value():
        raise ValueError(f"{amount} TON has more than 9 decimals")
    return int(nano)


def from_nano(nano: int) -> str:
    """Format nanotons as a TON decimal string without trailing zeros."""
    sign = "-" if nano < 0 else ""
    whole, frac = divmod(abs(nano), NANO_PER_TON)
    if not frac:
        return f"{sign}{whole}"
    return f"{sign}{whole}.{frac:09d}".rstrip("0")
