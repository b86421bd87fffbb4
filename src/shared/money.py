"""Monetary amounts as integer minor units (cents).

Amounts are stored and summed as ``int`` cents and only become ``Decimal`` at
the edges. Decorated input such as ``"$35.00"`` or ``"R 1,250.50"`` is parsed
once on the way in.
"""

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

_CENT = Decimal("0.01")
_DECORATION = re.compile(r"[^\d.\-]")


def parse_price(value) -> Decimal:
    """Parse a price given as Decimal, number or (decorated) string.

    Raises ``ValueError`` for anything that does not hold a non-negative amount.
    """
    if isinstance(value, bool):
        raise ValueError(f"Not a price: {value!r}")

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int):
        amount = Decimal(value)
    elif isinstance(value, float):
        amount = Decimal(str(value))
    elif isinstance(value, str):
        cleaned = _DECORATION.sub("", value.replace(",", ""))
        if not cleaned:
            raise ValueError(f"Not a price: {value!r}")
        try:
            amount = Decimal(cleaned)
        except InvalidOperation:
            raise ValueError(f"Not a price: {value!r}") from None
    else:
        raise ValueError(f"Not a price: {value!r}")

    if not amount.is_finite() or amount < 0:
        raise ValueError(f"Not a price: {value!r}")

    try:
        return amount.quantize(_CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValueError(f"Not a price: {value!r}") from None


def to_cents(value) -> int:
    return int(parse_price(value) * 100)


def from_cents(cents: int) -> Decimal:
    return (Decimal(cents) / 100).quantize(_CENT)


def format_price(cents: int, symbol: str = "$") -> str:
    return f"{symbol}{from_cents(cents):,.2f}"
