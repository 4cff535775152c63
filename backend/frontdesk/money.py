"""Money helpers.

Amounts are stored and computed as integer minor units (paise). ``Decimal``
only appears at the API and document boundaries.
"""

from decimal import ROUND_HALF_UP, Decimal

MINOR_UNITS = 100
_CENT = Decimal("0.01")


def to_minor(amount: Decimal | int | float | str | None) -> int:
    """Convert a major-unit amount (e.g. ``Decimal("12.50")``) to minor units."""
    if amount is None:
        return 0
    value = Decimal(str(amount)) * MINOR_UNITS
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def from_minor(minor: int | None) -> Decimal:
    """Convert minor units back to a two-place ``Decimal``."""
    if minor is None:
        return Decimal("0.00")
    return (Decimal(minor) / MINOR_UNITS).quantize(_CENT)


def percent_of(minor: int, percent: Decimal | int) -> int:
    """Return ``percent`` % of ``minor``, rounded half-up to a whole minor unit."""
    value = Decimal(minor) * Decimal(str(percent)) / Decimal(100)
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_amount(minor: int, symbol: str = "") -> str:
    """Human-readable amount for printed documents, e.g. ``Rs. 2,600.00``."""
    text = f"{from_minor(minor):,.2f}"
    return f"{symbol} {text}".strip() if symbol else text
