"""Shared schema building blocks."""

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Annotated

from pydantic import AfterValidator, BaseModel, BeforeValidator, Field, WithJsonSchema

from frontdesk.money import from_minor, to_minor


def _parse_amount(value: object) -> int:
    """Decimal amount from the client -> integer minor units."""
    if isinstance(value, bool) or not isinstance(value, (int, float, str, Decimal)):
        raise ValueError("must be a decimal amount")
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValueError("must be a decimal amount") from None
    if not amount.is_finite():
        raise ValueError("must be a finite amount")
    if amount.as_tuple().exponent < -2:
        raise ValueError("must have at most 2 decimal places")
    return to_minor(amount)


# Request side: accepted as a decimal amount ("150.50" or 150.5), held as
# integer minor units once validated.
MinorAmount = Annotated[
    int,
    BeforeValidator(_parse_amount),
    Field(ge=0),
    WithJsonSchema({"type": "number", "minimum": 0}),
]

# Same, but negative values are allowed (round-off adjustments).
SignedMinorAmount = Annotated[
    int,
    BeforeValidator(_parse_amount),
    WithJsonSchema({"type": "number"}),
]

# Response side: read from an integer minor-unit column, emitted as "12.50".
Money = Annotated[Decimal, BeforeValidator(from_minor)]

GstPercent = Annotated[Decimal, Field(ge=0, le=100, max_digits=5, decimal_places=2)]


def _as_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


# Timestamps are stored as naive UTC; offset-aware input is converted, naive
# input is taken to be UTC already.
UtcDateTime = Annotated[datetime, AfterValidator(_as_naive_utc)]


class MessageResponse(BaseModel):
    """Generic message response."""

    message: str
