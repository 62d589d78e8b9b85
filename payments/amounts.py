"""
Amount Conversion

Exact conversion between human-facing decimal strings ("12.5") and integer
smallest-unit strings ("12500000"). Only Python ints are used, never floats.

Fractional digits beyond ``decimals`` are truncated, not rounded.
"""

import re

from payments.errors import MalformedAmount

_DIGITS_RE = re.compile(r"[0-9]*")


def _power(decimals: int) -> int:
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")
    return 10**decimals


def _to_int(digits: str, original: str) -> int:
    try:
        return int(digits) if digits else 0
    except ValueError as e:
        # int() refuses very long digit strings
        raise MalformedAmount(f"amount out of range: {original[:32]}...") from e


def to_smallest_unit(amount: str, decimals: int) -> str:
    """
    Convert a decimal amount string to its smallest-unit integer string.

    Args:
        amount: Non-negative decimal, e.g. "12.5", "3", ".25"
        decimals: Number of fractional digits of the asset

    Raises:
        MalformedAmount: more than one decimal point, a non-digit, or no digits
    """
    multiplier = _power(decimals)
    parts = amount.split(".")
    if len(parts) > 2:
        raise MalformedAmount(f"more than one decimal point: {amount!r}")

    whole = parts[0]
    fraction = parts[1] if len(parts) == 2 else ""
    if not (whole or fraction):
        raise MalformedAmount(f"no digits in amount: {amount!r}")
    if _DIGITS_RE.fullmatch(whole) is None or _DIGITS_RE.fullmatch(fraction) is None:
        raise MalformedAmount(f"non-digit character in amount: {amount!r}")

    fraction = fraction[:decimals].ljust(decimals, "0")
    return str(_to_int(whole, amount) * multiplier + _to_int(fraction, amount))


def to_decimal(amount: str | int, decimals: int) -> str:
    """Format a smallest-unit integer as a decimal string without trailing zeros."""
    divisor = _power(decimals)
    if isinstance(amount, int):
        if amount < 0:
            raise MalformedAmount(f"amount must be non-negative, got {amount}")
        value = amount
    else:
        if not amount or _DIGITS_RE.fullmatch(amount) is None:
            raise MalformedAmount(f"not an integer amount: {amount!r}")
        value = _to_int(amount, amount)

    whole, fraction = divmod(value, divisor)
    if fraction == 0:
        return str(whole)
    return f"{whole}.{str(fraction).zfill(decimals).rstrip('0')}"
