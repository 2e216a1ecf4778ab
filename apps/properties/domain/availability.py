"""
Availability Resolver

Pure functions over the in-memory records of one room. Nothing here touches
the store; the same inputs always produce the same outputs.

Two separate questions are answered for a room and a stay window:

1. Is the room type offered at all? (``is_listed``)
   quantity > 0 AND max_guests >= requested guests.
2. Are the dates actually free? (``is_date_free``)
   derived from the overlapping non-canceled bookings and owner blocks.

Listing never depends on (2): a room whose units are all booked is still
listed, and the caller decides how to surface the conflict.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple

from shared.domain.value_objects import DateRange

from .projections import (
    BookingSnapshot,
    PeakRateSnapshot,
    RoomSnapshot,
    UnavailabilitySnapshot,
)


@dataclass(frozen=True)
class RoomAvailability:
    """Eligibility result for one room and one stay window."""

    room_id: int
    is_listed: bool
    is_date_free: bool
    booked_units: int
    blocked: bool
    remaining_units: int
    price: Decimal
    total_price: Decimal
    nights: int
    peak_rates: Tuple[PeakRateSnapshot, ...] = ()

    def to_dict(self, window: DateRange) -> dict:
        return {
            "check_in": window.start_date.isoformat(),
            "check_out": window.end_date.isoformat(),
            "nights": self.nights,
            "is_date_free": self.is_date_free,
            "booked_units": self.booked_units,
            "remaining_units": self.remaining_units,
            "blocked": self.blocked,
        }


@dataclass(frozen=True)
class CalendarDay:
    date: date
    total_units: int
    booked_units: int
    available_units: int
    is_blocked: bool
    price: Decimal
    peak_rate_id: Optional[int] = None

    @property
    def is_available(self) -> bool:
        return self.available_units > 0

    @property
    def is_peak_season(self) -> bool:
        return self.peak_rate_id is not None

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "total_units": self.total_units,
            "booked_units": self.booked_units,
            "available_units": self.available_units,
            "is_available": self.is_available,
            "is_blocked": self.is_blocked,
            "is_peak_season": self.is_peak_season,
            "peak_rate_id": self.peak_rate_id,
            "price": self.price,
        }


def is_room_listed(room: RoomSnapshot, guests: int) -> bool:
    """Room-level visibility: quantity > 0 and enough guest capacity."""
    return room.quantity > 0 and room.max_guests >= guests


def active_bookings(room: RoomSnapshot, window: DateRange) -> List[BookingSnapshot]:
    """Non-canceled bookings overlapping the window."""
    return [
        booking
        for booking in room.bookings
        if not booking.is_canceled and window.overlaps(booking.check_in, booking.check_out)
    ]


def overlapping_blocks(room: RoomSnapshot, window: DateRange) -> List[UnavailabilitySnapshot]:
    return [
        block
        for block in room.unavailabilities
        if window.overlaps(block.start_date, block.end_date)
    ]


def rate_for_day(rates: Iterable[PeakRateSnapshot], day: date) -> Optional[PeakRateSnapshot]:
    """First peak rate, in fetch order, whose closed interval contains ``day``."""
    for rate in rates:
        if rate.covers(day):
            return rate
    return None


def price_for_day(room: RoomSnapshot, day: date) -> Decimal:
    rate = rate_for_day(room.peak_rates, day)
    return rate.price if rate else room.price


def applicable_rates(room: RoomSnapshot, window: DateRange) -> Tuple[PeakRateSnapshot, ...]:
    """Peak rates that price at least one night of the window."""
    return tuple(
        rate
        for rate in room.peak_rates
        if any(rate.covers(day) for day in window.days())
    )


def resolve(room: RoomSnapshot, window: DateRange, guests: int = 1) -> RoomAvailability:
    """Resolve listing, date conflicts and price of ``room`` for ``window``."""
    booked_units = len(active_bookings(room, window))
    blocked = bool(overlapping_blocks(room, window))
    remaining_units = 0 if blocked else max(room.quantity - booked_units, 0)
    total_price = sum((price_for_day(room, day) for day in window.days()), Decimal("0"))

    return RoomAvailability(
        room_id=room.id,
        is_listed=is_room_listed(room, guests),
        is_date_free=remaining_units > 0,
        booked_units=booked_units,
        blocked=blocked,
        remaining_units=remaining_units,
        price=price_for_day(room, window.start_date),
        total_price=total_price,
        nights=len(window),
        peak_rates=applicable_rates(room, window),
    )


def expand_calendar(room: RoomSnapshot, year: int, month: int) -> List[CalendarDay]:
    """One ``CalendarDay`` per day of the month, in chronological order."""
    days = []
    for day in DateRange.for_month(year, month).days():
        day_window = DateRange.for_day(day)
        booked_units = len(active_bookings(room, day_window))
        is_blocked = bool(overlapping_blocks(room, day_window))
        rate = rate_for_day(room.peak_rates, day)
        days.append(
            CalendarDay(
                date=day,
                total_units=room.quantity,
                booked_units=booked_units,
                available_units=0 if is_blocked else max(room.quantity - booked_units, 0),
                is_blocked=is_blocked,
                price=rate.price if rate else room.price,
                peak_rate_id=rate.id if rate else None,
            )
        )
    return days
