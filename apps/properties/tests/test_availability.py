"""Tests for room availability resolution and calendar expansion."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from django.test import SimpleTestCase

from apps.properties.domain.availability import expand_calendar, rate_for_day, resolve
from apps.properties.domain.projections import (
    BookingSnapshot,
    PeakRateSnapshot,
    RoomSnapshot,
    UnavailabilitySnapshot,
)
from shared.domain.value_objects import DateRange


def make_room(**overrides) -> RoomSnapshot:  # type: ignore
    values = dict(id=1, name="Deluxe", price=Decimal("500000"), max_guests=2, quantity=2)
    values.update(overrides)
    return RoomSnapshot(**values)


WINDOW = DateRange(date(2025, 3, 12), date(2025, 3, 14))


class BookingOverlapTests(SimpleTestCase):
    def test_booking_ending_on_check_in_does_not_overlap(self) -> None:
        room = make_room(bookings=(BookingSnapshot(id=1, check_in=date(2025, 3, 10), check_out=date(2025, 3, 12)),))
        self.assertEqual(resolve(room, WINDOW).booked_units, 0)

    def test_booking_starting_on_check_out_does_not_overlap(self) -> None:
        room = make_room(bookings=(BookingSnapshot(id=1, check_in=date(2025, 3, 14), check_out=date(2025, 3, 16)),))
        self.assertEqual(resolve(room, WINDOW).booked_units, 0)

    def test_partial_overlap_counts(self) -> None:
        room = make_room(bookings=(BookingSnapshot(id=1, check_in=date(2025, 3, 13), check_out=date(2025, 3, 15)),))
        result = resolve(room, WINDOW)
        self.assertEqual(result.booked_units, 1)
        self.assertEqual(result.remaining_units, 1)
        self.assertTrue(result.is_date_free)

    def test_canceled_booking_is_ignored(self) -> None:
        room = make_room(
            bookings=(
                BookingSnapshot(id=1, check_in=date(2025, 3, 12), check_out=date(2025, 3, 14), status="canceled"),
            )
        )
        result = resolve(room, WINDOW)
        self.assertEqual(result.booked_units, 0)
        self.assertTrue(result.is_date_free)


class ListingTests(SimpleTestCase):
    def test_room_without_units_is_not_listed(self) -> None:
        self.assertFalse(resolve(make_room(quantity=0), WINDOW, guests=1).is_listed)

    def test_room_too_small_is_not_listed(self) -> None:
        self.assertFalse(resolve(make_room(max_guests=2), WINDOW, guests=3).is_listed)

    def test_fully_booked_room_is_listed_but_not_free(self) -> None:
        booking = dict(check_in=date(2025, 3, 11), check_out=date(2025, 3, 13))
        room = make_room(
            quantity=2,
            bookings=(BookingSnapshot(id=1, **booking), BookingSnapshot(id=2, **booking)),
        )
        result = resolve(room, WINDOW, guests=2)
        self.assertTrue(result.is_listed)
        self.assertFalse(result.is_date_free)
        self.assertEqual(result.remaining_units, 0)

    def test_block_leaves_no_units(self) -> None:
        room = make_room(
            unavailabilities=(
                UnavailabilitySnapshot(id=1, start_date=date(2025, 3, 13), end_date=date(2025, 3, 20)),
            )
        )
        result = resolve(room, WINDOW)
        self.assertTrue(result.blocked)
        self.assertEqual(result.remaining_units, 0)
        self.assertTrue(result.is_listed)

    def test_single_day_block_never_overlaps(self) -> None:
        # start == end is an empty range under the overlap test
        room = make_room(
            unavailabilities=(
                UnavailabilitySnapshot(id=1, start_date=date(2025, 3, 12), end_date=date(2025, 3, 12)),
            )
        )
        result = resolve(room, WINDOW)
        self.assertFalse(result.blocked)
        self.assertEqual(result.remaining_units, 2)


class PriceTests(SimpleTestCase):
    def test_base_price_without_rates(self) -> None:
        result = resolve(make_room(), WINDOW)
        self.assertEqual(result.price, Decimal("500000"))
        self.assertEqual(result.total_price, Decimal("1000000"))
        self.assertEqual(result.nights, 2)

    def test_peak_rate_covers_closed_interval(self) -> None:
        rate = PeakRateSnapshot(id=1, start_date=date(2025, 3, 1), end_date=date(2025, 3, 12), price=Decimal("750000"))
        result = resolve(make_room(peak_rates=(rate,)), WINDOW)
        self.assertEqual(result.price, Decimal("750000"))
        # 12th at peak, 13th at base
        self.assertEqual(result.total_price, Decimal("1250000"))
        self.assertEqual(result.peak_rates, (rate,))

    def test_first_matching_rate_wins(self) -> None:
        first = PeakRateSnapshot(id=1, start_date=date(2025, 3, 10), end_date=date(2025, 3, 20), price=Decimal("600000"))
        second = PeakRateSnapshot(id=2, start_date=date(2025, 3, 12), end_date=date(2025, 3, 12), price=Decimal("900000"))
        self.assertEqual(rate_for_day((first, second), date(2025, 3, 12)), first)
        self.assertEqual(rate_for_day((second, first), date(2025, 3, 12)), second)


class CalendarTests(SimpleTestCase):
    def test_february_of_common_year_has_28_days(self) -> None:
        days = expand_calendar(make_room(), 2025, 2)
        self.assertEqual(len(days), 28)
        self.assertEqual(days[0].date, date(2025, 2, 1))
        self.assertEqual(days[-1].date, date(2025, 2, 28))
        self.assertEqual([d.date for d in days], sorted(d.date for d in days))

    def test_february_of_leap_year_has_29_days(self) -> None:
        self.assertEqual(len(expand_calendar(make_room(), 2024, 2)), 29)

    def test_calendar_days_carry_bookings_blocks_and_rates(self) -> None:
        room = make_room(
            quantity=2,
            bookings=(BookingSnapshot(id=1, check_in=date(2025, 4, 5), check_out=date(2025, 4, 7)),),
            unavailabilities=(
                UnavailabilitySnapshot(id=1, start_date=date(2025, 4, 10), end_date=date(2025, 4, 12)),
            ),
            peak_rates=(
                PeakRateSnapshot(id=7, start_date=date(2025, 4, 20), end_date=date(2025, 4, 21), price=Decimal("800000")),
            ),
        )
        days = {day.date.day: day for day in expand_calendar(room, 2025, 4)}

        self.assertEqual(len(days), 30)
        self.assertEqual(days[5].booked_units, 1)
        self.assertEqual(days[6].available_units, 1)
        self.assertEqual(days[7].booked_units, 0)
        self.assertTrue(days[10].is_blocked)
        self.assertFalse(days[10].is_available)
        self.assertTrue(days[20].is_peak_season)
        self.assertEqual(days[21].price, Decimal("800000"))
        self.assertEqual(days[21].peak_rate_id, 7)
        self.assertEqual(days[22].price, Decimal("500000"))

    def test_expansion_is_repeatable(self) -> None:
        room = make_room()
        self.assertEqual(expand_calendar(room, 2025, 3), expand_calendar(room, 2025, 3))

    def test_single_day_block_is_not_shown_on_the_calendar(self) -> None:
        room = make_room(
            unavailabilities=(
                UnavailabilitySnapshot(id=1, start_date=date(2025, 4, 10), end_date=date(2025, 4, 10)),
            )
        )
        days = {day.date.day: day for day in expand_calendar(room, 2025, 4)}
        self.assertFalse(days[10].is_blocked)
        self.assertEqual(days[10].available_units, 2)
