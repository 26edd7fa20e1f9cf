"""
Reservation pricing.

A stay costs ``price_per_day`` for every whole day between its start and
end dates. Stays of at least :data:`MONTHLY_DISCOUNT_MIN_DAYS` days get
the office's monthly discount. How the discount is applied is chosen by
the ``RESERVATION_MONTHLY_DISCOUNT_MODE`` setting:

- ``legacy``: ``monthly_discount / 100`` is subtracted from the total,
  the rule historical prices were computed with;
- ``percentage``: ``monthly_discount`` percent of the total is taken off.
"""

from __future__ import annotations

import enum
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

from django.conf import settings  # type: ignore

from shared.domain.value_objects import DateRange

MONTHLY_DISCOUNT_MIN_DAYS = 28
CENTS = Decimal("0.01")


class DiscountMode(str, enum.Enum):
    LEGACY = "legacy"
    PERCENTAGE = "percentage"


def configured_discount_mode() -> DiscountMode:
    return DiscountMode(getattr(settings, "RESERVATION_MONTHLY_DISCOUNT_MODE", DiscountMode.LEGACY.value))


def calculate_price(
    price_per_day: int,
    monthly_discount: int,
    dates: DateRange,
    mode: Optional[Union[DiscountMode, str]] = None,
) -> Decimal:
    days = len(dates)
    price = Decimal(days) * Decimal(price_per_day)

    if days >= MONTHLY_DISCOUNT_MIN_DAYS and monthly_discount:
        mode = DiscountMode(mode) if mode is not None else configured_discount_mode()
        if mode is DiscountMode.PERCENTAGE:
            price -= price * Decimal(monthly_discount) / Decimal(100)
        else:
            price -= Decimal(monthly_discount) / Decimal(100)

    return price.quantize(CENTS, rounding=ROUND_HALF_UP)
