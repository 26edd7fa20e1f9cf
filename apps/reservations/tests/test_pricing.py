"""Tests for reservation price computation."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from django.test import SimpleTestCase, override_settings

from apps.reservations.pricing import DiscountMode, calculate_price
from shared.domain.value_objects import DateRange


class CalculatePriceTests(SimpleTestCase):
    def test_price_is_days_times_daily_price(self) -> None:
        dates = DateRange(date(2030, 1, 1), date(2030, 1, 5))

        self.assertEqual(calculate_price(1000, 0, dates), Decimal("4000.00"))

    def test_no_discount_below_28_days(self) -> None:
        dates = DateRange(date(2030, 1, 1), date(2030, 1, 28))

        self.assertEqual(calculate_price(1000, 50, dates, DiscountMode.PERCENTAGE), Decimal("27000.00"))

    def test_legacy_mode_subtracts_discount_hundredths(self) -> None:
        dates = DateRange(date(2030, 1, 1), date(2030, 1, 29))

        self.assertEqual(calculate_price(1000, 10, dates, DiscountMode.LEGACY), Decimal("27999.90"))

    def test_percentage_mode_takes_percent_off(self) -> None:
        dates = DateRange(date(2030, 1, 1), date(2030, 1, 29))

        self.assertEqual(calculate_price(1000, 10, dates, "percentage"), Decimal("25200.00"))

    def test_zero_discount_is_ignored(self) -> None:
        dates = DateRange(date(2030, 1, 1), date(2030, 3, 1))

        self.assertEqual(calculate_price(150, 0, dates, DiscountMode.PERCENTAGE), Decimal("8850.00"))

    @override_settings(RESERVATION_MONTHLY_DISCOUNT_MODE="percentage")
    def test_mode_defaults_to_setting(self) -> None:
        dates = DateRange(date(2030, 1, 1), date(2030, 1, 29))

        self.assertEqual(calculate_price(1000, 50, dates), Decimal("14000.00"))
