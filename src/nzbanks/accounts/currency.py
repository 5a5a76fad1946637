"""
Dollar/cent conversion for New Zealand currency amounts.

NEVER uses float arithmetic: floats are converted through ``str`` into Decimal
first, so 19.999 is rounded as the decimal 19.999 and not as its binary
approximation.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union

CENT = Decimal("0.01")

Amount = Union[Decimal, float, int, str]


def _to_decimal(value: Amount) -> Decimal:
    try:
        d = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"Not an amount: {value!r}") from None
    if not d.is_finite():
        raise ValueError(f"Amount must be finite, got {value!r}")
    return d


def dollars_to_cents(amount: Amount) -> int:
    """
    Round to whole cents, then scale: ``dollars_to_cents(19.999) == 2000``.

    Halves round away from zero (12.345 -> 1235).
    """
    dollars = _to_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)
    return int(dollars * 100)


def cents_to_dollars(cents: Union[int, str, Decimal]) -> Decimal:
    """``cents_to_dollars(2000) == Decimal('20.00')``. Fractional cents are truncated first."""
    whole = int(cents)
    return (Decimal(whole) / 100).quantize(CENT, rounding=ROUND_HALF_UP)
